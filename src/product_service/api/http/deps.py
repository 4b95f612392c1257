"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Request
from sqlmodel import Session

from src.product_service.api.http.app_data import ApplicationDependencies
from src.product_service.core.services import DbSessionService


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the application-wide dependency container."""
    return request.app.state.app_dependencies


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service holding the shared engine."""
    return get_app_dependencies(request).database_service


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session scoped to the current request."""
    session = get_database_service(request).get_session()
    try:
        yield session
    finally:
        session.close()

