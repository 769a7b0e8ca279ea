# shoppy/schemas/store.py
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from shoppy.schemas.product import ProductRead


class Color(SQLModel):
    """HSL triple."""

    model_config = ConfigDict(extra="forbid")

    hue: int = Field(ge=0, le=360)
    sat: int = Field(ge=0, le=360)
    light: int = Field(ge=0, le=360)


class StoreColors(SQLModel):
    model_config = ConfigDict(extra="forbid")

    primary: Color
    secondary: Color


class StoreColorsUpdate(SQLModel):
    """Either slot may be omitted; omitted slots keep their color."""

    model_config = ConfigDict(extra="forbid")

    primary: Color | None = None
    secondary: Color | None = None


class StoreCreate(SQLModel):
    """
    Payload for creating a store (admin only).

    - colors is optional: defaults are used when omitted.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    manager_id: int
    colors: StoreColors | None = None

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class StoreUpdate(SQLModel):
    """
    Partial update of the caller's own store.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    colors: StoreColorsUpdate | None = None

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class StoreRead(SQLModel):
    id: int
    name: str
    manager_id: int
    status: int
    created_at: datetime


class StoreName(SQLModel):
    id: int
    name: str


class StoreDetail(StoreRead):
    """
    Store page: the store, its active products and its theme colors.

    `colors` holds whichever of primary / secondary exist.
    """

    products: list[ProductRead]
    colors: dict[str, Color]
