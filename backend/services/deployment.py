"""
Deployment of the hello world workflow to AWS (or LocalStack).

Packages the Lambda functions, creates or updates the three functions and
creates or updates the state machine that chains them.
"""
import io
import logging
import zipfile
from pathlib import Path
from typing import Dict, Iterable, Tuple

import pythonjsonlogger
from botocore.exceptions import ClientError
from django.conf import settings

import config
import functions
from services.aws import create_client, workflow_function_arns
from workflows.hello_world_workflow import definition_json

logger = logging.getLogger(__name__)


def _package_files() -> Iterable[Tuple[Path, str]]:
    """Yield (source path, archive name) for every file in the bundle."""
    functions_dir = Path(functions.__file__).parent
    for path in sorted(functions_dir.glob('*.py')):
        yield path, f"functions/{path.name}"

    config_dir = Path(config.__file__).parent
    for name in ('__init__.py', 'log_config.py'):
        yield config_dir / name, f"config/{name}"

    # Third-party dependency of the logging configuration
    jsonlogger_dir = Path(pythonjsonlogger.__file__).parent
    for path in sorted(jsonlogger_dir.rglob('*.py')):
        yield path, f"pythonjsonlogger/{path.relative_to(jsonlogger_dir).as_posix()}"


def build_package() -> bytes:
    """
    Build the Lambda deployment package.

    Returns:
        Zip archive contents
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as archive:
        for source, arcname in _package_files():
            archive.write(source, arcname)

    package = buffer.getvalue()
    logger.info(f"Built deployment package ({len(package)} bytes)")
    return package


class WorkflowDeployer:
    """
    Create or update the workflow's AWS resources.

    Every operation is idempotent: existing resources are updated in place.
    """

    def __init__(self, lambda_client=None, sfn_client=None):
        self.lambda_client = lambda_client or create_client('lambda')
        self.sfn_client = sfn_client or create_client('stepfunctions')

    def deploy(self) -> Dict:
        """Deploy the functions, then the state machine that references them."""
        package = build_package()
        deployed_functions = {
            step: self.deploy_function(step, package)
            for step in settings.LAMBDA_FUNCTIONS
        }
        state_machine = self.deploy_state_machine()

        return {
            'functions': deployed_functions,
            'state_machine': state_machine,
        }

    def _function_exists(self, function_name: str) -> bool:
        try:
            self.lambda_client.get_function(FunctionName=function_name)
            return True
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') == 'ResourceNotFoundException':
                return False
            logger.error(f"Error checking function {function_name}: {e}")
            raise

    def deploy_function(self, step: str, package: bytes) -> Dict:
        """
        Create or update the Lambda function for one step.

        Args:
            step: Workflow step key
            package: Deployment package contents

        Returns:
            Dictionary with function name, ARN and the action taken
        """
        function_name = settings.LAMBDA_FUNCTIONS[step]

        try:
            if self._function_exists(function_name):
                logger.info(f"Updating function {function_name}")
                response = self.lambda_client.update_function_code(
                    FunctionName=function_name,
                    ZipFile=package,
                )
                action = 'updated'
            else:
                logger.info(f"Creating function {function_name}")
                response = self.lambda_client.create_function(
                    FunctionName=function_name,
                    Runtime=settings.LAMBDA_RUNTIME,
                    Role=settings.LAMBDA_ROLE_ARN,
                    Handler=settings.LAMBDA_HANDLERS[step],
                    Code={'ZipFile': package},
                    Timeout=settings.LAMBDA_TIMEOUT,
                    MemorySize=settings.LAMBDA_MEMORY_SIZE,
                    Environment={'Variables': {'LOG_LEVEL': 'INFO', 'LOG_FORMAT': 'json'}},
                )
                action = 'created'
        except ClientError as e:
            logger.error(f"Failed to deploy function {function_name}: {e}")
            raise

        # New and updated functions are Pending until the code is in place
        waiter = 'function_active_v2' if action == 'created' else 'function_updated_v2'
        self.lambda_client.get_waiter(waiter).wait(FunctionName=function_name)

        return {
            'function_name': function_name,
            'arn': response.get('FunctionArn'),
            'action': action,
        }

    def deploy_state_machine(self) -> Dict:
        """
        Create or update the state machine.

        Returns:
            Dictionary with state machine ARN and the action taken
        """
        definition = definition_json(workflow_function_arns())
        machine_arn = settings.STATE_MACHINE_ARN

        try:
            self.sfn_client.describe_state_machine(stateMachineArn=machine_arn)
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') != 'StateMachineDoesNotExist':
                logger.error(f"Error checking state machine {machine_arn}: {e}")
                raise

            logger.info(f"Creating state machine {settings.STATE_MACHINE_NAME}")
            try:
                response = self.sfn_client.create_state_machine(
                    name=settings.STATE_MACHINE_NAME,
                    definition=definition,
                    roleArn=settings.STEP_FUNCTIONS_ROLE_ARN,
                    type='STANDARD',
                )
            except ClientError as create_error:
                logger.error(f"Failed to create state machine: {create_error}")
                raise
            return {'arn': response['stateMachineArn'], 'action': 'created'}

        logger.info(f"Updating state machine {settings.STATE_MACHINE_NAME}")
        try:
            self.sfn_client.update_state_machine(
                stateMachineArn=machine_arn,
                definition=definition,
                roleArn=settings.STEP_FUNCTIONS_ROLE_ARN,
            )
        except ClientError as e:
            logger.error(f"Failed to update state machine: {e}")
            raise
        return {'arn': machine_arn, 'action': 'updated'}
