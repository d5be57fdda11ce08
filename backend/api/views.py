"""
Workflow API views: start executions, check their status, inspect the
state machine.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from api.serializers import ExecutionSerializer, StartExecutionSerializer
from services.aws import workflow_function_arns
from services.step_functions_client import StepFunctionsService
from workflows.hello_world_workflow import build_definition

logger = logging.getLogger(__name__)


class HealthView(APIView):
    """Liveness probe."""

    def get(self, request):
        return Response({'status': 'ok'})


class ExecutionListView(APIView):
    """
    Start a workflow execution.

    POST body: ``{"name": ..., "message": ..., "execution_name": ...}``,
    all optional.
    """

    def post(self, request):
        serializer = StartExecutionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        execution = StepFunctionsService.start_execution(
            serializer.to_workflow_input(),
            name=serializer.validated_data.get('execution_name'),
        )
        logger.info(f"Execution {execution['name']} started via API")

        return Response(ExecutionSerializer(execution).data, status=status.HTTP_201_CREATED)


class ExecutionDetailView(APIView):
    """Status, and once finished the output, of one execution."""

    def get(self, request, execution_name):
        execution_arn = StepFunctionsService.execution_arn_for(execution_name)
        execution = StepFunctionsService.describe_execution(execution_arn)
        return Response(ExecutionSerializer(execution).data)


class StateMachineView(APIView):
    """The deployed state machine as reported by Step Functions."""

    def get(self, request):
        return Response(StepFunctionsService.describe_state_machine())


class StateMachineDefinitionView(APIView):
    """The state machine definition generated from this codebase."""

    def get(self, request):
        return Response(build_definition(workflow_function_arns()))
