"""Product entity, payloads and repository tests.

Repository tests run against an in-memory SQLite database.
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy.dialects import mysql, sqlite
from sqlalchemy.schema import CreateTable
from sqlmodel import Session, select

from src.product_service.entities.core._base import NIL_UUID
from src.product_service.entities.service.product import (
    Product,
    ProductCreate,
    ProductRepository,
    ProductTable,
    ProductUpdate,
)


class TestProductEntity:
    """Test the Product domain entity."""

    def test_default_product_is_zero_valued(self):
        """A product built without arguments is the zero-valued record."""
        product = Product()

        assert product.id == 0
        assert product.uuid == NIL_UUID
        assert product.code == ""
        assert product.name == ""
        assert product.price == Decimal("0")
        assert product.price2 == Decimal("0")
        assert product.stock == 0

    def test_zero_valued_json_shape(self):
        assert Product().model_dump(mode="json") == {
            "id": 0,
            "uuid": "00000000-0000-0000-0000-000000000000",
            "code": "",
            "name": "",
            "price": "0",
            "price2": "0",
            "stock": 0,
        }

    def test_decimal_prices_serialize_as_strings(self, product_factory):
        data = product_factory(price=Decimal("9.99")).model_dump(mode="json")

        assert data["price"] == "9.99"
        assert data["price2"] == "9.99"

    def test_prices_drop_trailing_zeros(self, product_factory):
        data = product_factory(
            price=Decimal("10.00"), price2=Decimal("1200")
        ).model_dump(mode="json")

        assert data["price"] == "10"
        assert data["price2"] == "1200"
        assert Product(price=Decimal("0.00")).model_dump(mode="json")["price"] == "0"
        assert Product(price=Decimal("12.50")).model_dump(mode="json")["price"] == "12.5"


class TestProductPayloads:
    """Test create and update request bodies."""

    def test_create_assigns_uuid_and_copies_price(self):
        entity = ProductCreate(code="A1", name="Widget", price="9.99", stock=5).to_entity()

        assert isinstance(entity.uuid, UUID)
        assert entity.uuid != NIL_UUID
        assert entity.price == Decimal("9.99")
        assert entity.price2 == entity.price
        assert entity.stock == 5

    def test_create_ignores_client_keys(self):
        payload = ProductCreate.model_validate(
            {
                "id": 42,
                "uuid": "11111111-1111-1111-1111-111111111111",
                "price": "3.50",
                "price2": "100.00",
            }
        )
        entity = payload.to_entity()

        assert entity.id == 0
        assert str(entity.uuid) != "11111111-1111-1111-1111-111111111111"
        assert entity.price2 == Decimal("3.50")

    def test_create_generates_distinct_uuids(self):
        payload = ProductCreate(code="A1")

        assert payload.to_entity().uuid != payload.to_entity().uuid

    def test_create_missing_fields_take_zero_values(self):
        entity = ProductCreate().to_entity()

        assert entity.code == ""
        assert entity.name == ""
        assert entity.price == Decimal("0")
        assert entity.stock == 0

    def test_update_changes_only_sent_fields(self):
        payload = ProductUpdate.model_validate({"name": "Gadget", "stock": None})

        assert payload.changes() == {"name": "Gadget"}

    def test_update_ignores_key_fields(self):
        payload = ProductUpdate.model_validate(
            {"id": 9, "uuid": "11111111-1111-1111-1111-111111111111", "code": "B2"}
        )

        assert payload.changes() == {"code": "B2"}


class TestProductRepository:
    """Test product persistence against a real database session."""

    def test_create_assigns_identifier(
        self, repository: ProductRepository, session: Session
    ):
        entity = ProductCreate(code="A1", name="Widget", price="9.99", stock=5).to_entity()

        created = repository.create(entity)
        session.commit()

        assert created.id > 0
        assert created.uuid == entity.uuid
        assert created.price == Decimal("9.99")
        assert created.price2 == Decimal("9.99")

        row = session.exec(select(ProductTable).where(ProductTable.id == created.id)).one()
        assert row.uuid == entity.uuid

    def test_create_auto_increments(self, repository: ProductRepository):
        first = repository.create(ProductCreate(code="A1").to_entity())
        second = repository.create(ProductCreate(code="A2").to_entity())

        assert second.id > first.id

    def test_get_missing_returns_none(self, repository: ProductRepository):
        assert repository.get(12345) is None

    def test_get_roundtrip(self, repository: ProductRepository):
        created = repository.create(
            ProductCreate(code="A1", name="Widget", price="1.25", stock=2).to_entity()
        )

        fetched = repository.get(created.id)

        assert fetched == created

    def test_list_all_ordered_by_id(self, repository: ProductRepository):
        created = [
            repository.create(ProductCreate(code=f"C{i}").to_entity()) for i in range(3)
        ]

        listed = repository.list_all()

        assert [p.id for p in listed] == [p.id for p in created]

    def test_update_applies_changes(self, repository: ProductRepository):
        created = repository.create(
            ProductCreate(code="A1", name="Widget", price="9.99", stock=5).to_entity()
        )

        updated = repository.update(created.id, {"name": "Gadget", "stock": 7})

        assert updated is not None
        assert updated.name == "Gadget"
        assert updated.stock == 7
        assert updated.code == "A1"
        assert updated.price == Decimal("9.99")

    def test_update_never_touches_keys(self, repository: ProductRepository):
        created = repository.create(ProductCreate(code="A1").to_entity())

        updated = repository.update(
            created.id, {"id": 999, "uuid": NIL_UUID, "code": "B2"}
        )

        assert updated is not None
        assert updated.id == created.id
        assert updated.uuid == created.uuid
        assert updated.code == "B2"

    def test_update_missing_returns_none(self, repository: ProductRepository):
        assert repository.update(12345, {"name": "x"}) is None

    def test_delete_returns_deleted_record(self, repository: ProductRepository):
        created = repository.create(ProductCreate(code="A1").to_entity())

        deleted = repository.delete(created.id)

        assert deleted == created
        assert repository.get(created.id) is None

    def test_delete_missing_returns_none(self, repository: ProductRepository):
        assert repository.delete(12345) is None


class TestProductTable:
    """Test the products table definition."""

    @staticmethod
    def _ddl(dialect) -> str:
        return str(CreateTable(ProductTable.__table__).compile(dialect=dialect))

    def test_mysql_keys_and_stock_are_64_bit(self):
        ddl = self._ddl(mysql.dialect())

        assert "id BIGINT NOT NULL AUTO_INCREMENT" in ddl
        assert "stock BIGINT NOT NULL" in ddl
        assert "price NUMERIC(15, 2) NOT NULL" in ddl

    def test_sqlite_key_stays_auto_incrementing(self):
        assert "id INTEGER NOT NULL" in self._ddl(sqlite.dialect())
