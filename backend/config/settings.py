"""
Django settings for the hello world workflow service.

Configuration comes from environment variables, optionally loaded from a
``.env`` file at the repository root.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from config.log_config import build_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent

# Read .env file if it exists
load_dotenv(BASE_DIR.parent / '.env')


def env_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ('1', 'true', 'yes', 'on')


def env_list(name: str, default: list) -> list:
    value = os.getenv(name)
    if not value:
        return default
    return [item.strip() for item in value.split(',') if item.strip()]


# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv('SECRET_KEY', 'change-me-in-production')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env_bool('DEBUG', False)

ALLOWED_HOSTS = env_list('ALLOWED_HOSTS', ['localhost', '127.0.0.1'])

# Application definition
INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',

    # Third party apps
    'rest_framework',

    # Local apps
    'workflows',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'config.urls'

WSGI_APPLICATION = 'config.wsgi.application'

# No models are stored; the database only backs Django's contrib apps
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.getenv('SQLITE_PATH', str(BASE_DIR / 'db.sqlite3')),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# REST Framework Configuration
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'EXCEPTION_HANDLER': 'config.exceptions.custom_exception_handler',
}

# AWS Configuration
AWS_REGION = os.getenv('AWS_REGION', 'us-east-1')
AWS_ACCOUNT_ID = os.getenv('AWS_ACCOUNT_ID', '000000000000')
AWS_ENDPOINT_URL = os.getenv('AWS_ENDPOINT_URL') or None  # LocalStack
AWS_ACCESS_KEY_ID = os.getenv('AWS_ACCESS_KEY_ID') or None
AWS_SECRET_ACCESS_KEY = os.getenv('AWS_SECRET_ACCESS_KEY') or None

# Lambda functions, keyed by workflow step
LAMBDA_FUNCTIONS = {
    'hello-world': os.getenv('HELLO_WORLD_FUNCTION', 'hello-world-function'),
    'process-data': os.getenv('PROCESS_DATA_FUNCTION', 'process-data-function'),
    'notify-completion': os.getenv('NOTIFY_COMPLETION_FUNCTION', 'notify-completion-function'),
}
LAMBDA_HANDLERS = {
    'hello-world': 'functions.hello_world.handler',
    'process-data': 'functions.process_data.handler',
    'notify-completion': 'functions.notify_completion.handler',
}
LAMBDA_RUNTIME = os.getenv('LAMBDA_RUNTIME', 'python3.12')
LAMBDA_TIMEOUT = int(os.getenv('LAMBDA_TIMEOUT', '30'))
LAMBDA_MEMORY_SIZE = int(os.getenv('LAMBDA_MEMORY_SIZE', '128'))
LAMBDA_ROLE_ARN = os.getenv(
    'LAMBDA_ROLE_ARN',
    f'arn:aws:iam::{AWS_ACCOUNT_ID}:role/lambda-execution-role',
)

# Step Functions Configuration
STATE_MACHINE_NAME = os.getenv('STATE_MACHINE_NAME', 'hello-world-workflow')
STATE_MACHINE_ARN = os.getenv(
    'STATE_MACHINE_ARN',
    f'arn:aws:states:{AWS_REGION}:{AWS_ACCOUNT_ID}:stateMachine:{STATE_MACHINE_NAME}',
)
STEP_FUNCTIONS_ROLE_ARN = os.getenv(
    'STEP_FUNCTIONS_ROLE_ARN',
    f'arn:aws:iam::{AWS_ACCOUNT_ID}:role/step-functions-execution-role',
)
EXECUTION_POLL_INTERVAL = float(os.getenv('EXECUTION_POLL_INTERVAL', '2'))
EXECUTION_POLL_MAX_ATTEMPTS = int(os.getenv('EXECUTION_POLL_MAX_ATTEMPTS', '30'))

# Logging Configuration
LOGGING = build_logging_config(
    level=os.getenv('LOG_LEVEL', 'INFO'),
    use_json=not DEBUG,
)
LOGGING['loggers']['django'] = {
    'handlers': ['console'],
    'level': os.getenv('DJANGO_LOG_LEVEL', 'INFO'),
    'propagate': False,
}

# Security Settings (Production)
if not DEBUG:
    SECURE_SSL_REDIRECT = env_bool('SECURE_SSL_REDIRECT', False)
    SECURE_CONTENT_TYPE_NOSNIFF = True
    SECURE_HSTS_SECONDS = 31536000
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    X_FRAME_OPTIONS = 'DENY'

# Sentry Configuration (optional)
SENTRY_DSN = os.getenv('SENTRY_DSN')
if SENTRY_DSN:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        integrations=[DjangoIntegration()],
        traces_sample_rate=float(os.getenv('SENTRY_TRACES_SAMPLE_RATE', '0.1')),
        send_default_pii=False,
        environment=os.getenv('ENVIRONMENT', 'development'),
    )
