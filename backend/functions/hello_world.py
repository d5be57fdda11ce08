"""
Greeting step of the hello world workflow.

Builds "<message>, <name>!" from the execution input.
"""

import json
import logging

from functions import as_dict, configure_logging, get_request_id

configure_logging()
logger = logging.getLogger(__name__)

STEP_NAME = 'hello-world'
DEFAULT_NAME = 'World'
DEFAULT_MESSAGE = 'Hello'


def _present(value) -> bool:
    """A field is present only when it is a string with non-blank content."""
    return isinstance(value, str) and value.strip() != ''


def build_greeting(name=None, message=None) -> str:
    """
    Build the greeting string.

    Blank and whitespace-only values count as absent. A present value is
    used as given, without trimming.
    """
    name = name if _present(name) else DEFAULT_NAME
    message = message if _present(message) else DEFAULT_MESSAGE
    return f"{message}, {name}!"


def handler(event, context):
    """
    Lambda entry point for the greeting step.

    Args:
        event: Execution input with optional ``name`` and ``message``
        context: Lambda context; its request id is returned as ``timestamp``

    Returns:
        Step response with the greeting and step metadata
    """
    logger.info(f"Received event: {json.dumps(event, indent=2, default=str)}")

    event = as_dict(event)

    response = {
        'statusCode': 200,
        'body': {
            'greeting': build_greeting(event.get('name'), event.get('message')),
            'timestamp': get_request_id(context),
            'step': STEP_NAME,
            'processed': True,
        },
    }

    logger.info(f"Returning response: {json.dumps(response, indent=2, default=str)}")
    return response
