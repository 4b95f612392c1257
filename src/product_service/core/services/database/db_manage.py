"""Schema management: create, and optionally reset, the service tables."""

from loguru import logger
from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    @staticmethod
    def _register_tables() -> None:
        from src.product_service.entities.service.product import ProductTable  # noqa: F401

    def create_all(self) -> None:
        """Create all database tables that do not exist yet."""
        self._register_tables()
        SQLModel.metadata.create_all(self._engine)
        logger.info(
            "Database initialized with tables: {}",
            sorted(SQLModel.metadata.tables.keys()),
        )

    def drop_all(self) -> None:
        """Drop every service table. All stored data is lost."""
        self._register_tables()
        logger.warning(
            "DANGER: dropping tables {} and all of their data",
            sorted(SQLModel.metadata.tables.keys()),
        )
        SQLModel.metadata.drop_all(self._engine)

    def initialize(self, reset: bool = False) -> bool:
        """Open a connection, then prepare the schema.

        A database that cannot be reached is logged and reported through the
        return value; the caller keeps serving and requests fail individually.
        """
        try:
            with self._engine.connect():
                pass
        except SQLAlchemyError:
            logger.exception("Connection failed to open")
            return False
        logger.info("Connection established")

        try:
            if reset:
                self.drop_all()
            self.create_all()
        except SQLAlchemyError:
            logger.exception("Failed to prepare database schema")
            return False
        return True
