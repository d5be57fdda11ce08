"""
Processing step of the hello world workflow.

Counts words and characters of the greeting produced by the previous step
after a simulated processing delay.
"""

import json
import logging
import random
import time

from functions import as_dict, configure_logging, get_request_id

configure_logging()
logger = logging.getLogger(__name__)

STEP_NAME = 'process-data'
MIN_PROCESSING_TIME = 0.5
MAX_PROCESSING_TIME = 2.0


def simulate_processing_time() -> float:
    """Draw a processing delay in seconds from [0.5, 2.0)."""
    return random.random() * (MAX_PROCESSING_TIME - MIN_PROCESSING_TIME) + MIN_PROCESSING_TIME


def report_processing_time(seconds: float) -> float:
    """Round to 2 decimals, keeping the value below the upper bound."""
    return min(round(seconds, 2), round(MAX_PROCESSING_TIME - 0.01, 2))


def count_words(text: str) -> int:
    """
    Count space separated tokens.

    Splits on single spaces, so an empty string counts as one word and
    consecutive spaces produce empty tokens.
    """
    return len(text.split(' '))


def count_characters(text: str) -> int:
    """Length of ``text`` in UTF-16 code units."""
    return len(text.encode('utf-16-le', 'surrogatepass')) // 2


def handler(event, context):
    """
    Lambda entry point for the processing step.

    Args:
        event: Output of the greeting step (``{"body": {"greeting", "timestamp"}}``)
        context: Lambda context (unused apart from logging)

    Returns:
        Step response with the greeting statistics
    """
    logger.info(f"Received event: {json.dumps(event, indent=2, default=str)}")

    body = as_dict(as_dict(event).get('body'))
    greeting = body.get('greeting')
    if not isinstance(greeting, str):
        greeting = ''
    timestamp = body.get('timestamp') or ''

    processing_time = simulate_processing_time()
    logger.debug(f"Simulating {processing_time:.3f}s of processing for {get_request_id(context)}")
    time.sleep(processing_time)

    response = {
        'statusCode': 200,
        'body': {
            'original_greeting': greeting,
            'processed_at': timestamp,
            'processing_time': report_processing_time(processing_time),
            'word_count': count_words(greeting),
            'character_count': count_characters(greeting),
            'step': STEP_NAME,
            'status': 'completed',
        },
    }

    logger.info(f"Returning response: {json.dumps(response, indent=2, default=str)}")
    return response
