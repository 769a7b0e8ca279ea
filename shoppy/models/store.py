# shoppy/models/store.py
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class ColorSlot(str, Enum):
    PRIMARY = "PRIMARY"
    SECONDARY = "SECONDARY"


class Store(SQLModel, table=True):
    """
    A storefront run by one manager.

    Soft-deleted through `status` (1 active, 0 disabled).
    """

    __tablename__ = "stores"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(max_length=100, index=True)

    manager_id: int = Field(
        foreign_key="users.id",
        index=True,
        description="FK to users.id (role manager)",
    )

    status: int = Field(default=1, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )


class StoreColor(SQLModel, table=True):
    """
    Theme color of a store, in HSL.

    A store has either no color rows or exactly one PRIMARY and one
    SECONDARY row; the unique constraint rules out a second row per slot.
    """

    __tablename__ = "store_colors"
    __table_args__ = (UniqueConstraint("store_id", "type", name="uq_store_color_slot"),)

    id: int | None = Field(default=None, primary_key=True)

    store_id: int = Field(foreign_key="stores.id", index=True)

    type: ColorSlot

    hue: int
    sat: int
    light: int
