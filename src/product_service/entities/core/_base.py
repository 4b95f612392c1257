from uuid import UUID, uuid4

from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlalchemy import BigInteger, Integer
from sqlmodel import Field, SQLModel

NIL_UUID = UUID(int=0)

# 64-bit keys; SQLite only auto-increments a plain INTEGER primary key
KeyType = BigInteger().with_variant(Integer(), "sqlite")


class Entity(BaseModel):
    """Base entity class with an integer key and an external UUID."""

    id: int = PydanticField(default=0, description="Database identifier")
    uuid: UUID = PydanticField(
        default=NIL_UUID, description="External identifier assigned at creation"
    )


class EntityTable(SQLModel, table=False):
    """Base table with an auto-incrementing key and an external UUID.

    The UUID is generated once when the row is built and never reassigned.
    """

    id: int | None = Field(
        default=None,
        primary_key=True,
        sa_type=KeyType,
        description="Auto-incrementing identifier",
    )
    uuid: UUID = Field(
        default_factory=uuid4,
        unique=True,
        nullable=False,
        description="External identifier assigned at creation",
    )
