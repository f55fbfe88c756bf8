"""Shared utilities for CLI commands."""

from botocore.client import BaseClient
from rich.console import Console

from src.user_service.core.services import UserService, build_dynamodb_client
from src.user_service.entities.user import UserRepository
from src.user_service.runtime.context import get_config

# Initialize Rich console for colored output
console = Console()


def get_dynamodb_client() -> BaseClient:
    """Create a DynamoDB client for the configured store."""
    return build_dynamodb_client(get_config().store)


def get_user_service() -> UserService:
    """Create a user service against the configured table."""
    store_config = get_config().store
    return UserService(
        UserRepository(get_dynamodb_client(), store_config.table_name),
        conditional_writes=store_config.conditional_writes,
    )
