"""AWS configuration and client factory."""

from functools import lru_cache
from typing import Any

from .base import BaseAppSettings


class AWSSettings(BaseAppSettings):
    """AWS and S3 client configuration.

    Credentials left unset fall through to the default boto3 credential
    chain (environment, shared config, instance profile).
    """

    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: str | None = None
    AWS_REGION: str = "us-east-1"
    AWS_ENDPOINT_URL: str | None = None  # MinIO or other S3-compatible endpoints


@lru_cache
def get_aws_settings() -> AWSSettings:
    """Get AWS settings."""
    return AWSSettings()


def get_s3_client(aws_settings: AWSSettings | None = None) -> Any:
    """Create and return an S3 client with configured settings."""
    import boto3

    aws_settings = aws_settings or get_aws_settings()

    return boto3.client(
        "s3",
        aws_access_key_id=aws_settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=aws_settings.AWS_SECRET_ACCESS_KEY,
        region_name=aws_settings.AWS_REGION,
        endpoint_url=aws_settings.AWS_ENDPOINT_URL,
    )
