"""Transport-neutral request routing and operation handlers.

Both the FastAPI application and the Lambda entry point translate their
native request into an ``ApiRequest``, call ``route`` and translate the
``ApiResponse`` back.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field

from src.user_service.core.errors import (
    ERROR_METHOD_NOT_ALLOWED,
    USER_DELETED_MESSAGE,
    UserServiceError,
)
from src.user_service.core.services import UserService
from src.user_service.entities.user import User

JSON_HEADERS = {"Content-Type": "application/json"}


class ApiRequest(BaseModel):
    """Inbound request as seen by the router."""

    http_method: str
    query_string_parameters: dict[str, str] = Field(default_factory=dict)
    body: str = ""


class ApiResponse(BaseModel):
    """Status code, headers and JSON-encoded body."""

    status_code: int
    headers: dict[str, str] = Field(default_factory=lambda: dict(JSON_HEADERS))
    body: str


class ErrorBody(BaseModel):
    error: str | None = None


def api_response(status: int, body: Any) -> ApiResponse:
    """Wrap ``body`` in the standard JSON response envelope."""
    return ApiResponse(status_code=status, body=json.dumps(_to_jsonable(body)))


def _to_jsonable(body: Any) -> Any:
    if isinstance(body, ErrorBody):
        return body.model_dump(exclude_none=True)
    if isinstance(body, User):
        return body.to_payload()
    if isinstance(body, list):
        return [_to_jsonable(item) for item in body]
    return body


def _error_response(exc: UserServiceError) -> ApiResponse:
    return api_response(HTTPStatus.BAD_REQUEST, ErrorBody(error=exc.message))


def get_user(request: ApiRequest, service: UserService) -> ApiResponse:
    """Fetch one user by ``email`` query parameter, or all users without it."""
    email = request.query_string_parameters.get("email", "")

    try:
        if email:
            result: User | list[User] = service.get_user(email)
        else:
            result = service.list_users()
    except UserServiceError as exc:
        return _error_response(exc)
    return api_response(HTTPStatus.OK, result)


def create_user(request: ApiRequest, service: UserService) -> ApiResponse:
    try:
        result = service.create_user(request.body)
    except UserServiceError as exc:
        return _error_response(exc)
    return api_response(HTTPStatus.CREATED, result)


def update_user(request: ApiRequest, service: UserService) -> ApiResponse:
    try:
        result = service.update_user(request.body)
    except UserServiceError as exc:
        return _error_response(exc)
    return api_response(HTTPStatus.OK, result)


def delete_user(request: ApiRequest, service: UserService) -> ApiResponse:
    email = request.query_string_parameters.get("email", "")
    try:
        service.delete_user(email)
    except UserServiceError as exc:
        return _error_response(exc)
    return api_response(HTTPStatus.OK, USER_DELETED_MESSAGE)


def unhandled_method() -> ApiResponse:
    return api_response(HTTPStatus.METHOD_NOT_ALLOWED, ERROR_METHOD_NOT_ALLOWED)


OPERATIONS: dict[str, Callable[[ApiRequest, UserService], ApiResponse]] = {
    "GET": get_user,
    "POST": create_user,
    "PUT": update_user,
    "DELETE": delete_user,
}


def route(request: ApiRequest, service: UserService) -> ApiResponse:
    """Dispatch ``request`` to the operation registered for its method."""
    operation = OPERATIONS.get(request.http_method)
    if operation is None:
        logger.info("Rejecting unsupported method {}", request.http_method)
        return unhandled_method()

    response = operation(request, service)
    logger.debug(
        "Handled {} with status {}", request.http_method, response.status_code
    )
    return response
