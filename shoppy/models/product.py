# shoppy/models/product.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Product sold by a store.

    - brand_id is resolved from the brand *name* at write time
    - categories / sizes live in the product_categories / product_sizes
      join tables and are owned by the product
    - soft-deleted through `status` (1 active, 0 disabled)
    """

    __tablename__ = "products"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(max_length=100, index=True)

    price: float = Field(description="Unit price")

    current_stock: int = Field(default=0)
    reorder_point: int = Field(default=0)
    minimum: int = Field(default=0)

    description: str | None = Field(default=None)

    url_img: str | None = Field(default=None, description="Main image URL")

    discount_percentage: float = Field(default=0)

    color: str | None = Field(default=None, max_length=50)

    brand_id: int = Field(foreign_key="brands.id", index=True)

    store_id: int = Field(foreign_key="stores.id", index=True)

    status: int = Field(default=1, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )


class ProductCategory(SQLModel, table=True):
    """
    Join row product <-> category.

    `id` only records insertion order; rows are addressed by product.
    """

    __tablename__ = "product_categories"

    id: int | None = Field(default=None, primary_key=True)

    product_id: int = Field(foreign_key="products.id", index=True)
    category_id: int = Field(foreign_key="categories.id", index=True)


class ProductSize(SQLModel, table=True):
    """
    Join row product <-> size.
    """

    __tablename__ = "product_sizes"

    id: int | None = Field(default=None, primary_key=True)

    product_id: int = Field(foreign_key="products.id", index=True)
    size_id: int = Field(foreign_key="sizes.id", index=True)
