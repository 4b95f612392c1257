"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.product_service.api.http.app_data import ApplicationDependencies
from src.product_service.api.http.deps import get_app_dependencies, get_database_service
from src.product_service.core.services import DbSessionService
from src.product_service.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 OK while the process is running.

    It does not check dependencies.
    """
    return {"status": "healthy", "service": get_config().app.name}


@router.get("/ready", response_model=None)
def readiness(
    app_dependencies: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 200 if the database answers, 503 otherwise.

    ``schema_initialized`` reports whether startup managed to prepare the
    schema; a database that comes up later answers but stays un-initialized
    until the next start or ``product-service init-db``.
    """
    database_service = app_dependencies.database_service
    db_healthy = database_service.health_check()
    response = {
        "status": "ready" if db_healthy else "not_ready",
        "environment": get_config().app.environment,
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": database_service.backend_name,
                "schema_initialized": app_dependencies.database_ready,
            }
        },
    }

    if not db_healthy:
        return JSONResponse(status_code=503, content=response)
    return response


@router.get("/database", response_model=None)
def health_database(
    database_service: DbSessionService = Depends(get_database_service),
) -> dict[str, Any] | JSONResponse:
    """Database-specific health check with connection pool status."""
    healthy = database_service.health_check()
    content = {
        "status": "healthy" if healthy else "unhealthy",
        "type": database_service.backend_name,
        "pool": database_service.get_pool_status(),
    }
    if not healthy:
        return JSONResponse(status_code=503, content=content)
    return content
