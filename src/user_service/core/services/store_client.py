"""DynamoDB client construction."""

import boto3
from botocore.client import BaseClient
from loguru import logger

from src.user_service.runtime.config.config_data import StoreConfig


def build_dynamodb_client(store_config: StoreConfig) -> BaseClient:
    """Create the low-level DynamoDB client described by ``store_config``.

    Credentials come from the standard boto3 chain (environment, profile,
    or the Lambda execution role).
    """
    logger.info(
        "Creating DynamoDB client",
        region=store_config.region,
        table=store_config.table_name,
        endpoint_url=store_config.endpoint_url,
    )
    return boto3.client(
        "dynamodb",
        region_name=store_config.region,
        endpoint_url=store_config.endpoint_url,
    )
