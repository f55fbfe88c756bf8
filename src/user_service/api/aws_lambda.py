"""AWS Lambda entry point for API Gateway proxy integrations.

Configure the function handler as
``src.user_service.api.aws_lambda.handler``.
"""

from __future__ import annotations

import base64
from functools import lru_cache
from typing import Any

from loguru import logger

from src.user_service.api.handlers import ApiRequest, ApiResponse, route
from src.user_service.api.utils.app_startup import configure_logging
from src.user_service.core.services import UserService, build_dynamodb_client
from src.user_service.entities.user import UserRepository
from src.user_service.runtime.context import get_config


@lru_cache(maxsize=1)
def get_service() -> UserService:
    """Build the service on cold start and reuse it for warm invocations."""
    configure_logging()
    store_config = get_config().store
    client = build_dynamodb_client(store_config)
    return UserService(
        UserRepository(client, store_config.table_name),
        conditional_writes=store_config.conditional_writes,
    )


def to_api_request(event: dict[str, Any]) -> ApiRequest:
    """Translate an API Gateway proxy event into an ``ApiRequest``."""
    body = event.get("body") or ""
    if body and event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8", errors="replace")

    return ApiRequest(
        http_method=event.get("httpMethod", ""),
        query_string_parameters=event.get("queryStringParameters") or {},
        body=body,
    )


def to_proxy_response(response: ApiResponse) -> dict[str, Any]:
    return {
        "statusCode": int(response.status_code),
        "headers": dict(response.headers),
        "body": response.body,
    }


def handle_event(event: dict[str, Any], service: UserService) -> dict[str, Any]:
    """Route one proxy event through ``service``."""
    request_id = (event.get("requestContext") or {}).get("requestId", "-")
    with logger.contextualize(request_id=request_id):
        response = route(to_api_request(event), service)
    return to_proxy_response(response)


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    return handle_event(event, get_service())
