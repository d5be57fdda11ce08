"""
Django management command to print the state machine definition.

Usage:
    python manage.py show_definition
"""

from django.core.management.base import BaseCommand

from services.aws import workflow_function_arns
from workflows.hello_world_workflow import definition_json


class Command(BaseCommand):
    help = 'Print the Amazon States Language definition of the workflow'

    def handle(self, *args, **options):
        self.stdout.write(definition_json(workflow_function_arns(), indent=2))
