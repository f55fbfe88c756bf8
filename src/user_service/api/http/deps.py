"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Request

from src.user_service.api.http.app_data import ApplicationDependencies
from src.user_service.core.services import UserService
from src.user_service.entities.user import UserRepository
from src.user_service.runtime.context import get_config


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependencies built at startup."""
    return request.app.state.app_dependencies


def get_user_repository(request: Request) -> UserRepository:
    """Get the shared user repository instance."""
    return get_app_dependencies(request).user_repository


def get_user_service(request: Request) -> UserService:
    """Get a user service bound to the shared repository."""
    return UserService(
        get_user_repository(request),
        conditional_writes=get_config().store.conditional_writes,
    )
