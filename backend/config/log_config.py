"""
Logging configuration shared by the Django project and the Lambda functions.

The Lambda deployment package ships this module alongside the functions so
both sides emit the same JSON records.
"""


def build_logging_config(level: str = 'INFO', use_json: bool = True) -> dict:
    """
    Build a ``logging.config.dictConfig`` dictionary.

    Args:
        level: Root log level
        use_json: Emit JSON records (python-json-logger) instead of text

    Returns:
        Logging configuration dictionary
    """
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'json': {
                '()': 'pythonjsonlogger.jsonlogger.JsonFormatter',
                'format': '%(asctime)s %(name)s %(levelname)s %(message)s',
            },
            'verbose': {
                'format': '{levelname} {asctime} {module} {message}',
                'style': '{',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'json' if use_json else 'verbose',
            },
        },
        'root': {
            'handlers': ['console'],
            'level': level,
        },
        'loggers': {
            'botocore': {
                'handlers': ['console'],
                'level': 'WARNING',
                'propagate': False,
            },
        },
    }
