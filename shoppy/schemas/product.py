# shoppy/schemas/product.py
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


def _strip_names(values: list[str]) -> list[str]:
    cleaned = [v.strip() for v in values]
    if any(not v for v in cleaned):
        raise ValueError("names cannot be empty")
    return cleaned


class ProductCreate(SQLModel):
    """
    Payload for creating a product.

    - brand, categories and sizes are given by *name*; each must already
      exist (see /catalog).
    - the owning store is the caller's store, never taken from the body.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100, min_length=1)
    brand: str
    categories: list[str] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)
    price: float = Field(gt=0)
    current_stock: int = Field(default=0, ge=0)
    reorder_point: int = Field(default=0, ge=0)
    minimum: int = Field(default=0, ge=0)
    discount_percentage: float = Field(default=0, ge=0, le=100)
    description: str | None = None
    url_img: str | None = None
    color: str | None = Field(default=None, max_length=50)

    @field_validator("name", "brand")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("categories", "sizes")
    @classmethod
    def strip_names(cls, v: list[str]) -> list[str]:
        return _strip_names(v)


class ProductUpdate(SQLModel):
    """
    Update payload for products. All fields are optional.

    - categories / sizes, when present, replace the whole list.
    - store_id is accepted but never moves the product; depending on
      configuration it is dropped or rejected.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    brand: str | None = None
    categories: list[str] | None = None
    sizes: list[str] | None = None
    store_id: int | None = None
    price: float | None = Field(default=None, gt=0)
    current_stock: int | None = Field(default=None, ge=0)
    reorder_point: int | None = Field(default=None, ge=0)
    minimum: int | None = Field(default=None, ge=0)
    discount_percentage: float | None = Field(default=None, ge=0, le=100)
    description: str | None = None
    url_img: str | None = None
    color: str | None = Field(default=None, max_length=50)

    @field_validator("name", "brand")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("categories", "sizes")
    @classmethod
    def strip_names(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        return _strip_names(v)


class ProductRead(SQLModel):
    """
    Product representation for clients, with reference names resolved.
    """

    id: int
    name: str
    brand: str
    categories: list[str]
    sizes: list[str]
    store_id: int
    price: float
    current_stock: int
    reorder_point: int
    minimum: int
    discount_percentage: float
    description: str | None = None
    url_img: str | None = None
    color: str | None = None
    status: int
    created_at: datetime


class ManagerContact(SQLModel):
    product_id: int
    email: str
