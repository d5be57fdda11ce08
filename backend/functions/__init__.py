"""
Lambda functions for the hello world workflow.

Each module exposes a ``handler(event, context)`` entry point that turns the
previous step's payload into a ``{statusCode, body}`` response.
"""

import logging.config
import os

from config.log_config import build_logging_config

_logging_configured = False


def configure_logging():
    """Apply the shared logging configuration once per cold start."""
    global _logging_configured
    if _logging_configured:
        return

    level = os.environ.get('LOG_LEVEL', 'INFO')
    use_json = os.environ.get('LOG_FORMAT', 'json').lower() == 'json'
    logging.config.dictConfig(build_logging_config(level=level, use_json=use_json))
    _logging_configured = True


def get_request_id(context) -> str:
    """Return the invocation request id, or '' for contexts without one."""
    return getattr(context, 'aws_request_id', None) or ''


def as_dict(value) -> dict:
    """Treat anything that is not a JSON object as an empty one."""
    return value if isinstance(value, dict) else {}
