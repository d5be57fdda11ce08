"""
Custom exception handler for DRF.
"""
from botocore.exceptions import BotoCoreError, ClientError
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
import logging

from services.step_functions_client import ExecutionNotFoundError, ExecutionTimeoutError

logger = logging.getLogger(__name__)

# Service errors with a fixed HTTP status
SERVICE_ERROR_STATUS = (
    (ExecutionNotFoundError, status.HTTP_404_NOT_FOUND),
    (ExecutionTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (ClientError, status.HTTP_502_BAD_GATEWAY),
    (BotoCoreError, status.HTTP_502_BAD_GATEWAY),
)


def _error_response(message, error_type, status_code, detail=None):
    data = {
        'error': {
            'message': message,
            'type': error_type,
            'status_code': status_code,
        }
    }
    if detail is not None:
        data['error']['detail'] = detail
    return Response(data, status=status_code)


def custom_exception_handler(exc, context):
    """
    Custom exception handler that logs errors and returns consistent error responses.
    """
    request = context.get('request')
    log_extra = {
        'path': request.path if request else None,
        'method': request.method if request else None,
    }

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        logger.error(
            f"API Error: {exc.__class__.__name__} - {str(exc)}",
            extra={'status_code': response.status_code, **log_extra},
        )
        # Keep the original response so headers such as Allow survive
        response.data = _error_response(
            str(exc),
            exc.__class__.__name__,
            response.status_code,
            detail=getattr(exc, 'detail', None),
        ).data
        return response

    for error_class, status_code in SERVICE_ERROR_STATUS:
        if isinstance(exc, error_class):
            logger.error(
                f"Service Error: {exc.__class__.__name__} - {str(exc)}",
                extra={'status_code': status_code, **log_extra},
            )
            detail = None
            if isinstance(exc, ClientError):
                detail = exc.response.get('Error', {}).get('Code')
            return _error_response(str(exc), exc.__class__.__name__, status_code, detail=detail)

    # Handle everything else
    logger.exception(f"Unhandled exception: {str(exc)}")
    return _error_response(
        'An unexpected error occurred.',
        'InternalServerError',
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
