"""
Django management command to invoke a single workflow step.

Usage:
    python manage.py invoke_step hello-world --payload '{"name": "Alice", "message": "Hi"}'
"""

import json
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from services.lambda_client import LambdaService


class Command(BaseCommand):
    help = 'Invoke one workflow step function and print its response'

    def add_arguments(self, parser):
        parser.add_argument(
            'step',
            type=str,
            choices=list(settings.LAMBDA_FUNCTIONS),
            help='Workflow step to invoke',
        )
        parser.add_argument(
            '--payload',
            type=str,
            default='{}',
            help='JSON event passed to the function',
        )

    def handle(self, *args, **options):
        try:
            payload = json.loads(options['payload'])
        except ValueError as e:
            raise CommandError(f'Invalid JSON payload: {e}') from e

        result = LambdaService.invoke(options['step'], payload)

        if result['function_error']:
            self.stdout.write(self.style.ERROR(f"✗ {result['function_name']} failed: {result['function_error']}"))
        else:
            self.stdout.write(self.style.SUCCESS(f"✓ {result['function_name']} returned {result['status_code']}"))
        self.stdout.write(json.dumps(result['payload'], indent=2))
