"""
End-to-end tests against a running LocalStack.

Enabled with ``LOCALSTACK_E2E=1`` and ``AWS_ENDPOINT_URL`` pointing at
LocalStack (e.g. ``http://localhost:4566``).
"""
import os
import uuid

import pytest

from services.deployment import WorkflowDeployer
from services.lambda_client import LambdaService
from services.step_functions_client import ExecutionNotFoundError, StepFunctionsService

pytestmark = [
    pytest.mark.e2e,
    pytest.mark.skipif(
        os.environ.get('LOCALSTACK_E2E') != '1',
        reason='LocalStack end-to-end tests are disabled (set LOCALSTACK_E2E=1)',
    ),
]


@pytest.fixture(scope='module', autouse=True)
def deployed_workflow():
    return WorkflowDeployer().deploy()


def test_state_machine_deployed(deployed_workflow):
    assert deployed_workflow['state_machine']['arn']
    state_machine = StepFunctionsService.describe_state_machine()
    assert state_machine['status'] == 'ACTIVE'
    assert state_machine['definition']['StartAt'] == 'HelloWorld'


def test_hello_world_function_directly():
    result = LambdaService.invoke('hello-world', {'name': 'Integration Test', 'message': 'Hello'})

    assert result['function_error'] is None
    assert result['payload']['body']['greeting'] == 'Hello, Integration Test!'


def test_full_workflow():
    execution = StepFunctionsService.run(
        {'name': 'Alice', 'message': 'Hi'},
        name=f'e2e-{uuid.uuid4().hex[:12]}',
    )

    assert execution['status'] == 'SUCCEEDED'
    summary = execution['output']['body']['summary']
    assert summary['original_greeting'] == 'Hi, Alice!'
    assert summary['word_count'] == 2
    assert summary['character_count'] == 10
    assert summary['total_steps'] == 3


def test_unknown_execution():
    with pytest.raises(ExecutionNotFoundError):
        StepFunctionsService.describe_execution(StepFunctionsService.execution_arn_for('does-not-exist'))
