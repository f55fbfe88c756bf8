"""User CRUD endpoint.

Every method is accepted here and handed to the transport-neutral router,
which owns the 405 response for methods it does not support.
"""

from fastapi import APIRouter, Depends, Request, Response
from starlette.concurrency import run_in_threadpool

from src.user_service.api.handlers import ApiRequest, route
from src.user_service.api.http.deps import get_user_service
from src.user_service.core.services import UserService

router = APIRouter(prefix="/users", tags=["users"])

ACCEPTED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


@router.api_route("", methods=ACCEPTED_METHODS)
async def users(
    request: Request, service: UserService = Depends(get_user_service)
) -> Response:
    body = await request.body()
    api_request = ApiRequest(
        http_method=request.method,
        query_string_parameters=dict(request.query_params),
        body=body.decode("utf-8", errors="replace"),
    )

    # Store calls block; keep them off the event loop
    api_response = await run_in_threadpool(route, api_request, service)

    return Response(
        content=api_response.body,
        status_code=api_response.status_code,
        headers=api_response.headers,
    )
