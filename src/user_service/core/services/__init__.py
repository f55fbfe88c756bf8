"""Core services exports."""

from .store_client import build_dynamodb_client
from .user_service import UserService

__all__ = ["UserService", "build_dynamodb_client"]
