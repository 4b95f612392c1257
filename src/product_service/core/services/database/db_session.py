"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine

from src.product_service.runtime.config.config_data import DatabaseConfig
from src.product_service.runtime.context import get_config


class DbSessionService:
    """Owns the shared engine (and its connection pool) for the process.

    Handlers never reach for a global handle; they receive sessions from this
    service through the ``get_db_session`` dependency.
    """

    def __init__(self, engine: Engine | None = None):
        if engine is not None:
            self._engine = engine
            return

        db_config = get_config().database
        logger.info(
            "Initializing database engine using connection string: {}",
            db_config.safe_connection_string,
        )
        self._engine = create_engine(
            db_config.connection_string, **self._engine_kwargs(db_config)
        )

    @staticmethod
    def _engine_kwargs(db_config: DatabaseConfig) -> dict[str, Any]:
        """Engine arguments appropriate to the configured backend."""
        if db_config.is_sqlite:
            return {
                "echo": False,
                "connect_args": {"check_same_thread": False, "timeout": 20},
            }

        return {
            "echo": False,
            "pool_size": db_config.pool_size,
            "max_overflow": db_config.max_overflow,
            "pool_recycle": db_config.pool_recycle,
            "pool_pre_ping": True,
        }

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False, autoflush=True)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Context manager style helper for scripts and tests."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(
                "Database transaction failed: {}: {}", type(e).__name__, str(e)
            )
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.error(
                "Database health check failed: {}: {}", type(e).__name__, str(e)
            )
            return False

    def get_pool_status(self) -> dict:
        """Get current connection pool status for monitoring."""
        pool = self._engine.pool
        return {
            "size": getattr(pool, "size", lambda: 0)(),
            "checked_in": getattr(pool, "checkedin", lambda: 0)(),
            "checked_out": getattr(pool, "checkedout", lambda: 0)(),
            "overflow": getattr(pool, "overflow", lambda: 0)(),
        }

    @property
    def backend_name(self) -> str:
        return self._engine.dialect.name

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
