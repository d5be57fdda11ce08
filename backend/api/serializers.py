"""
Serializers for the workflow execution API.
"""
from rest_framework import serializers


class StartExecutionSerializer(serializers.Serializer):
    """
    Input for starting a workflow execution.

    ``name`` and ``message`` are forwarded unchanged; the greeting step
    applies its own defaults to blank values.
    """
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)
    message = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)
    execution_name = serializers.RegexField(
        r'^[A-Za-z0-9_-]{1,80}$',
        required=False,
        help_text='Optional execution name (letters, digits, "-" and "_", up to 80 characters)',
    )

    def to_workflow_input(self) -> dict:
        """Execution input document, without the execution name."""
        return {
            key: value
            for key, value in self.validated_data.items()
            if key != 'execution_name'
        }


class ExecutionSerializer(serializers.Serializer):
    """Execution status as returned by the Step Functions service."""
    execution_arn = serializers.CharField()
    name = serializers.CharField(allow_null=True)
    status = serializers.CharField()
    start_date = serializers.CharField(allow_null=True, required=False)
    stop_date = serializers.CharField(allow_null=True, required=False)
    input = serializers.JSONField(allow_null=True, required=False)
    output = serializers.JSONField(allow_null=True, required=False)
    error = serializers.CharField(allow_null=True, required=False)
    cause = serializers.CharField(allow_null=True, required=False)
