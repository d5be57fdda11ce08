"""
Direct invocation of the workflow's Lambda functions.

Used to exercise a single step outside of a workflow execution.
"""
import json
import logging
import threading
from typing import Any, Dict

from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings

from services.aws import create_client

logger = logging.getLogger(__name__)


class LambdaService:
    """Synchronous invocation of one workflow step."""

    _client = None
    _connection_lock = threading.Lock()

    @classmethod
    def get_client(cls):
        if cls._client is None:
            with cls._connection_lock:
                if cls._client is None:
                    cls._client = create_client('lambda')
        return cls._client

    @staticmethod
    def resolve_function_name(step_or_function: str) -> str:
        """Accept either a step key (``hello-world``) or a function name."""
        return settings.LAMBDA_FUNCTIONS.get(step_or_function, step_or_function)

    @classmethod
    def invoke(cls, step_or_function: str, payload: Any) -> Dict[str, Any]:
        """
        Invoke a function with a JSON payload and wait for its response.

        Args:
            step_or_function: Step key or Lambda function name
            payload: JSON-serializable event, or a raw string sent as-is

        Returns:
            Dictionary with the invocation status code, the function error
            marker (if any) and the decoded response payload
        """
        client = cls.get_client()
        function_name = cls.resolve_function_name(step_or_function)
        body = payload if isinstance(payload, (str, bytes)) else json.dumps(payload)

        try:
            response = client.invoke(
                FunctionName=function_name,
                InvocationType='RequestResponse',
                Payload=body,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to invoke {function_name}: {e}")
            raise

        raw = response['Payload'].read()
        try:
            decoded = json.loads(raw) if raw else None
        except ValueError:
            decoded = raw.decode('utf-8', errors='replace')

        function_error = response.get('FunctionError')
        if function_error:
            logger.warning(f"{function_name} returned a function error: {function_error}")
        else:
            logger.info(f"Invoked {function_name} (status {response['StatusCode']})")

        return {
            'function_name': function_name,
            'status_code': response['StatusCode'],
            'function_error': function_error,
            'payload': decoded,
        }
