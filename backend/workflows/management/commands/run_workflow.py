"""
Django management command to run the hello world workflow end to end.

Usage:
    python manage.py run_workflow [--name NAME] [--message MESSAGE] [--execution-name NAME]
"""

import json
import logging
from django.core.management.base import BaseCommand, CommandError

from services.step_functions_client import StepFunctionsService

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Start a hello world workflow execution and wait for its result'

    def add_arguments(self, parser):
        parser.add_argument(
            '--name',
            type=str,
            default='World',
            help='Name to greet',
        )
        parser.add_argument(
            '--message',
            type=str,
            default='Hello',
            help='Greeting message',
        )
        parser.add_argument(
            '--execution-name',
            type=str,
            help='Execution name (generated when omitted)',
        )
        parser.add_argument(
            '--max-attempts',
            type=int,
            help='Status checks before giving up',
        )
        parser.add_argument(
            '--interval',
            type=float,
            help='Seconds between status checks',
        )

    def handle(self, *args, **options):
        """Execute the command."""
        workflow_input = {'name': options['name'], 'message': options['message']}

        self.stdout.write(
            self.style.WARNING(f'Starting workflow with input: {json.dumps(workflow_input)}')
        )

        try:
            started = StepFunctionsService.start_execution(
                workflow_input,
                name=options.get('execution_name'),
            )
            self.stdout.write(f"Execution: {started['execution_arn']}")
            self.stdout.write('Waiting for completion...')

            execution = StepFunctionsService.wait_for_completion(
                started['execution_arn'],
                max_attempts=options.get('max_attempts'),
                interval=options.get('interval'),
            )
        except Exception as e:
            self.stdout.write(self.style.ERROR(f'✗ Workflow failed: {e}'))
            logger.error(f"Workflow run failed: {e}", exc_info=True)
            raise CommandError(str(e)) from e

        if execution['status'] != 'SUCCEEDED':
            self.stdout.write(
                self.style.ERROR(f"✗ Execution finished with status {execution['status']}")
            )
            if execution.get('error'):
                self.stdout.write(f"  Error: {execution['error']}")
            if execution.get('cause'):
                self.stdout.write(f"  Cause: {execution['cause']}")
            raise CommandError(f"Execution {execution['status']}")

        # A caught step failure ends in the HandleError Pass state, which
        # SUCCEEDS with the step input plus the error under "error"
        output = execution.get('output')
        output = output if isinstance(output, dict) else {}
        body = output.get('body') if isinstance(output.get('body'), dict) else {}

        if 'error' in output or body.get('workflow_status') != 'completed':
            self.stdout.write(self.style.ERROR('✗ Workflow ended in the error state'))
            caught = output.get('error') if isinstance(output.get('error'), dict) else {}
            if caught.get('Error'):
                self.stdout.write(f"  Error: {caught['Error']}")
            if caught.get('Cause'):
                self.stdout.write(f"  Cause: {caught['Cause']}")
            raise CommandError(f"Workflow did not complete: {caught.get('Error') or 'no completion summary'}")

        summary = body.get('summary') if isinstance(body.get('summary'), dict) else {}
        self.stdout.write(self.style.SUCCESS('✓ Workflow completed successfully!'))
        self.stdout.write('\nSummary:')
        self.stdout.write(f"  Greeting: {summary.get('original_greeting', '')}")
        self.stdout.write(f"  Word count: {summary.get('word_count', 0)}")
        self.stdout.write(f"  Character count: {summary.get('character_count', 0)}")
        self.stdout.write(f"  Processing time: {summary.get('processing_time', 0)}s")
        self.stdout.write(f"  Total steps: {summary.get('total_steps', 0)}")
        self.stdout.write(f"  {summary.get('completion_message', '')}")
