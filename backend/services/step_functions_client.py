"""
Step Functions client service for starting and tracking workflow executions.

This service is the bridge between the Django side (REST API, management
commands) and the hello world state machine. Orchestration itself, including
retries and the error state, is performed by Step Functions.
"""
import json
import logging
import threading
import time
import uuid
from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings

from services.aws import create_client

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = frozenset({'SUCCEEDED', 'FAILED', 'TIMED_OUT', 'ABORTED'})


class ExecutionNotFoundError(Exception):
    """Raised when an execution does not exist."""

    def __init__(self, execution_arn: str):
        super().__init__(f"Execution not found: {execution_arn}")
        self.execution_arn = execution_arn


class ExecutionTimeoutError(Exception):
    """Raised when an execution does not reach a terminal status in time."""

    def __init__(self, execution_arn: str, attempts: int, last_status: Optional[str] = None):
        super().__init__(
            f"Execution {execution_arn} did not complete within {attempts} attempts "
            f"(last status: {last_status})"
        )
        self.execution_arn = execution_arn
        self.attempts = attempts
        self.last_status = last_status


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_json(document: Optional[str]):
    if document is None:
        return None
    try:
        return json.loads(document)
    except ValueError:
        logger.warning("Execution output is not valid JSON, returning it as text")
        return document


class StepFunctionsService:
    """
    Service for interacting with the workflow state machine.

    Keeps a single boto3 Step Functions client per process and provides
    methods to start executions, inspect them and wait for them to finish.
    """

    _client = None
    _connection_lock = threading.Lock()

    @classmethod
    def get_client(cls):
        """
        Get or create the Step Functions client.

        Returns the shared client, creating it on first use.
        """
        if cls._client is None:
            with cls._connection_lock:
                if cls._client is None:  # Double-check after acquiring lock
                    logger.info(f"Creating Step Functions client for region {settings.AWS_REGION}")
                    cls._client = create_client('stepfunctions')

        return cls._client

    @classmethod
    def reset_client(cls):
        """Drop the shared client so the next call builds a fresh one."""
        with cls._connection_lock:
            cls._client = None

    @staticmethod
    def state_machine_arn() -> str:
        return settings.STATE_MACHINE_ARN

    @classmethod
    def execution_arn_for(cls, execution_name: str) -> str:
        """
        Derive an execution ARN from its name.

        ``arn:aws:states:<region>:<account>:stateMachine:<machine>`` becomes
        ``arn:aws:states:<region>:<account>:execution:<machine>:<name>``.
        """
        machine_arn = cls.state_machine_arn()
        return f"{machine_arn.replace(':stateMachine:', ':execution:', 1)}:{execution_name}"

    @staticmethod
    def generate_execution_name(prefix: str = 'execution') -> str:
        return f"{prefix}-{uuid.uuid4().hex[:12]}"

    @classmethod
    def start_execution(
        cls,
        workflow_input: Dict[str, Any],
        name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Start a workflow execution.

        Args:
            workflow_input: JSON-serializable execution input
            name: Optional execution name, generated when omitted

        Returns:
            Dictionary with execution details
        """
        client = cls.get_client()
        execution_name = name or cls.generate_execution_name()

        try:
            response = client.start_execution(
                stateMachineArn=cls.state_machine_arn(),
                name=execution_name,
                input=json.dumps(workflow_input),
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to start workflow execution {execution_name}: {e}")
            raise

        logger.info(f"Started workflow execution: {execution_name}")

        return {
            'execution_arn': response['executionArn'],
            'name': execution_name,
            'start_date': _isoformat(response.get('startDate')),
            'status': 'RUNNING',
        }

    @classmethod
    def describe_execution(cls, execution_arn: str) -> Dict[str, Any]:
        """
        Get the status of an execution.

        Args:
            execution_arn: ARN of the execution to check

        Returns:
            Dictionary with status and, once succeeded, the parsed output
        """
        client = cls.get_client()

        try:
            response = client.describe_execution(executionArn=execution_arn)
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') == 'ExecutionDoesNotExist':
                raise ExecutionNotFoundError(execution_arn) from e
            logger.error(f"Failed to describe execution {execution_arn}: {e}")
            raise
        except BotoCoreError as e:
            logger.error(f"Failed to describe execution {execution_arn}: {e}")
            raise

        return {
            'execution_arn': response['executionArn'],
            'name': response.get('name'),
            'status': response['status'],
            'start_date': _isoformat(response.get('startDate')),
            'stop_date': _isoformat(response.get('stopDate')),
            'input': _parse_json(response.get('input')),
            'output': _parse_json(response.get('output')),
            'error': response.get('error'),
            'cause': response.get('cause'),
        }

    @classmethod
    def wait_for_completion(
        cls,
        execution_arn: str,
        max_attempts: Optional[int] = None,
        interval: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Poll an execution until it reaches a terminal status.

        Args:
            execution_arn: ARN of the execution
            max_attempts: Number of status checks before giving up
            interval: Seconds between status checks

        Returns:
            Final execution description

        Raises:
            ExecutionTimeoutError: If the execution is still running after
                ``max_attempts`` checks
        """
        max_attempts = max_attempts or settings.EXECUTION_POLL_MAX_ATTEMPTS
        interval = settings.EXECUTION_POLL_INTERVAL if interval is None else interval

        last_status = None
        for attempt in range(1, max_attempts + 1):
            execution = cls.describe_execution(execution_arn)
            last_status = execution['status']

            if last_status in TERMINAL_STATUSES:
                logger.info(f"Execution {execution_arn} finished with status {last_status}")
                return execution

            logger.debug(f"Execution {execution_arn} is {last_status} (attempt {attempt}/{max_attempts})")
            if attempt < max_attempts:
                time.sleep(interval)

        raise ExecutionTimeoutError(execution_arn, max_attempts, last_status)

    @classmethod
    def run(
        cls,
        workflow_input: Dict[str, Any],
        name: Optional[str] = None,
        max_attempts: Optional[int] = None,
        interval: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Start an execution and wait for it to finish."""
        started = cls.start_execution(workflow_input, name=name)
        return cls.wait_for_completion(
            started['execution_arn'],
            max_attempts=max_attempts,
            interval=interval,
        )

    @classmethod
    def describe_state_machine(cls) -> Dict[str, Any]:
        """
        Describe the deployed state machine.

        Returns:
            Dictionary with ARN, name, status and the parsed definition
        """
        client = cls.get_client()

        try:
            response = client.describe_state_machine(stateMachineArn=cls.state_machine_arn())
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to describe state machine {cls.state_machine_arn()}: {e}")
            raise

        return {
            'arn': response['stateMachineArn'],
            'name': response['name'],
            'status': response.get('status'),
            'definition': _parse_json(response.get('definition')),
            'role_arn': response.get('roleArn'),
            'creation_date': _isoformat(response.get('creationDate')),
        }
