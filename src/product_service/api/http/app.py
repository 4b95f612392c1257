"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from src.product_service.api.http.app_data import ApplicationDependencies
from src.product_service.api.http.envelope import write_error
from src.product_service.api.http.routers import health, home
from src.product_service.api.http.routers.service import product
from src.product_service.api.utils.app_startup import configure_logging
from src.product_service.core.services import DbManageService, DbSessionService
from src.product_service.runtime.context import get_config

configure_logging()

__all__ = ["app", "create_app", "startup", "shutdown"]


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "Invalid request: " + "; ".join(parts)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    """Undecodable bodies and bad path parameters are client faults."""
    message = _describe_validation_error(exc)
    logger.bind(status_code=400).warning("request.invalid: {}", message)
    return write_error(status.HTTP_400_BAD_REQUEST, message)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    response = write_error(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def log_requests(request: Request, call_next):
    """Bind a request id to every log line emitted while serving the request."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    client_ip = request.client.host if request.client else "unknown"

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
    }

    start = time.perf_counter()
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            response = write_error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
            )
        else:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

        response.headers.setdefault("X-Request-ID", request_id)
        return response


# --- Lifecycle hooks ---
async def startup(app: FastAPI, database_service: DbSessionService | None = None) -> None:
    """Build application-wide dependencies and prepare the schema.

    An unreachable database does not stop the process from serving.
    """
    config = get_config()
    logger.info(
        "Starting up {} in {} environment", config.app.name, config.app.environment
    )

    database_service = database_service or DbSessionService()
    if config.database.reset_on_startup:
        logger.warning(
            "database.reset_on_startup is enabled: existing product data will be destroyed"
        )
    database_ready = DbManageService(database_service.engine).initialize(
        reset=config.database.reset_on_startup
    )
    if not database_ready:
        logger.error("Database unavailable at startup; serving anyway")

    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        database_ready=database_ready,
    )


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()


def create_app(database_service: DbSessionService | None = None) -> FastAPI:
    """Assemble the application.

    Args:
        database_service: Storage handle to serve from. Built from the
            configuration at startup when omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await startup(app, database_service)
        try:
            yield
        finally:
            await shutdown(app)

    config = get_config()
    application = FastAPI(
        title="Product Service",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )

    application.middleware("http")(log_requests)
    application.add_exception_handler(
        RequestValidationError, validation_exception_handler
    )
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # --- Router registration ---
    application.include_router(home.router)
    application.include_router(health.router)
    application.include_router(product.router, prefix="/api/products", tags=["products"])

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # We handle access logging in middleware
    )
