"""
Completion step of the hello world workflow.

Copies the processing statistics into the final workflow summary.
"""

import json
import logging

from functions import as_dict, configure_logging, get_request_id

configure_logging()
logger = logging.getLogger(__name__)

STEP_NAME = 'notify-completion'
TOTAL_STEPS = 3
COMPLETION_MESSAGE = 'Workflow completed successfully!'


def build_summary(processed: dict, request_id: str) -> dict:
    """Select the processed fields, each falling back to its own default."""
    return {
        'workflow_status': 'completed',
        'final_step': STEP_NAME,
        'summary': {
            'original_greeting': processed.get('original_greeting') or '',
            'processing_time': processed.get('processing_time') or 0,
            'word_count': processed.get('word_count') or 0,
            'character_count': processed.get('character_count') or 0,
            'total_steps': TOTAL_STEPS,
            'completion_message': COMPLETION_MESSAGE,
        },
        'timestamp': request_id,
    }


def handler(event, context):
    """Lambda entry point for the completion step."""
    logger.info(f"Received event: {json.dumps(event, indent=2, default=str)}")

    processed = as_dict(as_dict(event).get('body'))
    summary = build_summary(processed, get_request_id(context))

    logger.info(f"Workflow completed! Summary: {json.dumps(summary, indent=2, default=str)}")
    return {
        'statusCode': 200,
        'body': summary,
    }
