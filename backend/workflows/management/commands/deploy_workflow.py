"""
Django management command to deploy the workflow's Lambda functions and
state machine.

Usage:
    python manage.py deploy_workflow
    AWS_ENDPOINT_URL=http://localhost:4566 python manage.py deploy_workflow
"""

import logging
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from services.deployment import WorkflowDeployer

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Create or update the hello world Lambda functions and state machine'

    def handle(self, *args, **options):
        """Execute the command."""
        endpoint = settings.AWS_ENDPOINT_URL or f'AWS ({settings.AWS_REGION})'
        self.stdout.write(self.style.WARNING(f'Deploying workflow to {endpoint}...'))

        try:
            result = WorkflowDeployer().deploy()
        except Exception as e:
            self.stdout.write(self.style.ERROR(f'✗ Deployment failed: {e}'))
            logger.error(f"Deployment failed: {e}", exc_info=True)
            raise CommandError(str(e)) from e

        for step, function in result['functions'].items():
            self.stdout.write(
                self.style.SUCCESS(f"✓ {function['function_name']} ({step}) {function['action']}")
            )

        state_machine = result['state_machine']
        self.stdout.write(
            self.style.SUCCESS(f"✓ State machine {state_machine['action']}: {state_machine['arn']}")
        )
