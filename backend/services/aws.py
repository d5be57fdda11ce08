"""
boto3 client construction shared by the AWS services.
"""
import logging

import boto3
from botocore.config import Config
from django.conf import settings

logger = logging.getLogger(__name__)

RETRY_CONFIG = Config(retries={'max_attempts': 3, 'mode': 'standard'})


def create_client(service_name: str):
    """
    Create a boto3 client configured from Django settings.

    ``AWS_ENDPOINT_URL`` points the client at LocalStack when set.

    Args:
        service_name: boto3 service name (``stepfunctions``, ``lambda``)

    Returns:
        boto3 client
    """
    endpoint_url = getattr(settings, 'AWS_ENDPOINT_URL', None)
    logger.debug(f"Creating {service_name} client (endpoint: {endpoint_url or 'default'})")

    return boto3.client(
        service_name,
        region_name=settings.AWS_REGION,
        endpoint_url=endpoint_url,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        config=RETRY_CONFIG,
    )


def lambda_function_arn(function_name: str) -> str:
    """Build the ARN of a Lambda function in the configured account."""
    return f"arn:aws:lambda:{settings.AWS_REGION}:{settings.AWS_ACCOUNT_ID}:function:{function_name}"


def workflow_function_arns() -> dict:
    """Lambda function ARN per workflow step key."""
    return {
        step: lambda_function_arn(function_name)
        for step, function_name in settings.LAMBDA_FUNCTIONS.items()
    }
