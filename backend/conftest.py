"""
Pytest configuration and shared fixtures.
"""
import uuid
from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest
from rest_framework.test import APIClient

from functions import hello_world, notify_completion, process_data
from services.lambda_client import LambdaService
from services.step_functions_client import StepFunctionsService


def make_lambda_context(function_name='hello-world-function', request_id='test-request-id-123'):
    """Build a stand-in for the Lambda context object."""
    return SimpleNamespace(
        aws_request_id=request_id,
        function_name=function_name,
        function_version='$LATEST',
        invoked_function_arn=f'arn:aws:lambda:us-east-1:123456789012:function:{function_name}',
        memory_limit_in_mb='128',
        log_group_name=f'/aws/lambda/{function_name}',
        log_stream_name='2023/01/01/[$LATEST]test-stream',
        get_remaining_time_in_millis=lambda: 30000,
    )


@pytest.fixture
def make_context():
    """Return the Lambda context factory."""
    return make_lambda_context


@pytest.fixture
def lambda_context():
    """Return a Lambda context with a fixed request id."""
    return make_lambda_context()


@pytest.fixture
def no_processing_delay():
    """Skip the simulated delay of the processing step."""
    with patch('functions.process_data.time.sleep') as mock_sleep:
        yield mock_sleep


@pytest.fixture
def run_chain(no_processing_delay):
    """
    Run the three steps in state machine order, the way Step Functions
    passes each step's output to the next one.
    """
    def _run(workflow_input):
        greeting = hello_world.handler(
            workflow_input,
            make_lambda_context('hello-world-function', str(uuid.uuid4())),
        )
        processed = process_data.handler(
            greeting,
            make_lambda_context('process-data-function', str(uuid.uuid4())),
        )
        return notify_completion.handler(
            processed,
            make_lambda_context('notify-completion-function', str(uuid.uuid4())),
        )

    return _run


@pytest.fixture(autouse=True)
def reset_aws_clients():
    """Make sure no boto3 client leaks between tests."""
    StepFunctionsService._client = None
    LambdaService._client = None
    yield
    StepFunctionsService._client = None
    LambdaService._client = None


@pytest.fixture
def sfn_client():
    """Mocked Step Functions client used by StepFunctionsService."""
    client = Mock()
    with patch.object(StepFunctionsService, 'get_client', return_value=client):
        yield client


@pytest.fixture
def api_client():
    """Return an API client instance."""
    return APIClient()
