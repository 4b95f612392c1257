"""Database initialization script."""

from src.product_service.core.services import DbManageService, DbSessionService


def init_db(reset: bool = False) -> bool:
    """Create all database tables, dropping them first when ``reset`` is set."""
    database_service = DbSessionService()
    try:
        return DbManageService(database_service.engine).initialize(reset=reset)
    finally:
        database_service.dispose()


if __name__ == "__main__":
    raise SystemExit(0 if init_db() else 1)
