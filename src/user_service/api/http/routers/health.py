"""Health check endpoints router for monitoring service availability."""

from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Request
from loguru import logger
from starlette.concurrency import run_in_threadpool
from starlette.responses import JSONResponse

from src.user_service.api.http.app_data import ApplicationDependencies

SERVICE_NAME = "user-store"

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is running."""
    return {"status": "healthy", "service": SERVICE_NAME}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness probe: the configured table must be reachable.

    Returns 200 when DescribeTable succeeds, 503 otherwise.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    table_name = app_deps.user_repository.table_name

    try:
        description = await run_in_threadpool(
            app_deps.dynamodb_client.describe_table, TableName=table_name
        )
    except (BotoCoreError, ClientError) as e:
        logger.warning("Readiness check failed for table {}: {}", table_name, e)
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": SERVICE_NAME,
                "checks": {
                    "dynamodb": {
                        "status": "unhealthy",
                        "table": table_name,
                        "error": str(e),
                    }
                },
            },
        )

    return {
        "status": "ready",
        "service": SERVICE_NAME,
        "checks": {
            "dynamodb": {
                "status": "healthy",
                "table": table_name,
                "table_status": description.get("Table", {}).get("TableStatus"),
            }
        },
    }
