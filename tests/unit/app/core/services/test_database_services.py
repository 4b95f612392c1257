"""Unit tests for the database session and schema services."""

import pytest
from sqlalchemy import Engine, StaticPool, inspect
from sqlmodel import SQLModel, create_engine

from src.product_service.core.services import DbManageService, DbSessionService
from src.product_service.entities.service.product import (
    ProductCreate,
    ProductRepository,
)


@pytest.fixture
def blank_engine() -> Engine:
    """In-memory engine without any tables."""
    return create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


class TestDbManageService:
    def test_initialize_creates_products_table(self, blank_engine: Engine):
        assert DbManageService(blank_engine).initialize() is True

        assert "products" in inspect(blank_engine).get_table_names()

    def test_initialize_keeps_data_without_reset(self, database_service: DbSessionService):
        with database_service.session_scope() as session:
            ProductRepository(session).create(ProductCreate(code="A1").to_entity())

        DbManageService(database_service.engine).initialize(reset=False)

        with database_service.session_scope() as session:
            assert len(ProductRepository(session).list_all()) == 1

    def test_initialize_with_reset_drops_data(self, database_service: DbSessionService):
        with database_service.session_scope() as session:
            ProductRepository(session).create(ProductCreate(code="A1").to_entity())

        assert DbManageService(database_service.engine).initialize(reset=True) is True

        with database_service.session_scope() as session:
            assert ProductRepository(session).list_all() == []

    def test_unreachable_database_is_not_fatal(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'products.db'}")

        assert DbManageService(engine).initialize() is False


class TestDbSessionService:
    def test_health_check(self, database_service: DbSessionService):
        assert database_service.health_check() is True
        assert database_service.backend_name == "sqlite"

    def test_health_check_failure(self, tmp_path):
        service = DbSessionService(
            engine=create_engine(f"sqlite:///{tmp_path / 'missing' / 'products.db'}")
        )

        assert service.health_check() is False

    def test_session_scope_rolls_back_on_error(self, database_service: DbSessionService):
        with pytest.raises(RuntimeError):
            with database_service.session_scope() as session:
                ProductRepository(session).create(ProductCreate(code="A1").to_entity())
                raise RuntimeError("boom")

        with database_service.session_scope() as session:
            assert ProductRepository(session).list_all() == []

    def test_pool_status_keys(self, database_service: DbSessionService):
        assert set(database_service.get_pool_status()) == {
            "size",
            "checked_in",
            "checked_out",
            "overflow",
        }

    def test_builds_engine_from_config(self, tmp_path):
        from src.product_service.runtime.config.config_data import ConfigData, DatabaseConfig
        from src.product_service.runtime.context import with_context

        url = f"sqlite:///{tmp_path / 'products.db'}"
        with with_context(ConfigData(database=DatabaseConfig(url=url))):
            service = DbSessionService()

        try:
            assert service.engine.url.database == str(tmp_path / "products.db")
            SQLModel.metadata.create_all(service.engine)
            assert service.health_check() is True
        finally:
            service.dispose()
