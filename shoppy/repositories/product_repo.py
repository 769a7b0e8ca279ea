# shoppy/repositories/product_repo.py
from sqlmodel import Session, select

from shoppy.models.catalog import Brand, Category, Size
from shoppy.models.product import Product, ProductCategory, ProductSize
from shoppy.models.store import Store
from shoppy.models.user import User


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (CRUD + queries).
    - No commits here: product writes span several tables, so the
      service's unit-of-work scope owns the transaction.
    """

    # ----- Products -----

    def get_active(self, session: Session, product_id: int) -> Product | None:
        stmt = select(Product).where(Product.id == product_id, Product.status == 1)
        return session.exec(stmt).first()

    def list_filtered(
        self,
        session: Session,
        size: str | None = None,
        category: str | None = None,
        store_id: int | None = None,
        limit: int | None = None,
    ) -> list[Product]:
        """
        Active products, optionally narrowed by size name, category name
        and store. Results are ordered by id.
        """
        stmt = select(Product).where(Product.status == 1)

        if category is not None:
            stmt = stmt.where(
                Product.id.in_(
                    select(ProductCategory.product_id)
                    .join(Category, Category.id == ProductCategory.category_id)
                    .where(Category.name == category)
                )
            )

        if size is not None:
            stmt = stmt.where(
                Product.id.in_(
                    select(ProductSize.product_id)
                    .join(Size, Size.id == ProductSize.size_id)
                    .where(Size.name == size)
                )
            )

        if store_id is not None:
            stmt = stmt.where(Product.store_id == store_id)

        stmt = stmt.order_by(Product.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        return session.exec(stmt).all()

    def list_for_store(
        self,
        session: Session,
        store_id: int,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Product]:
        stmt = (
            select(Product)
            .where(Product.store_id == store_id, Product.status == 1)
            .order_by(Product.id)
            .offset(skip)
            .limit(limit)
        )
        return session.exec(stmt).all()

    def create(self, session: Session, product: Product) -> Product:
        """
        Insert a Product without committing, but ensure id is populated.
        """
        session.add(product)
        session.flush()
        session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.flush()
        session.refresh(product)
        return product

    # ----- Lookups for read models -----

    def get_brand_name(self, session: Session, brand_id: int) -> str | None:
        brand = session.get(Brand, brand_id)
        return brand.name if brand else None

    def get_manager_email(self, session: Session, product_id: int) -> str | None:
        """Email of the manager of the store selling this product."""
        stmt = (
            select(User.email)
            .join(Store, Store.manager_id == User.id)
            .join(Product, Product.store_id == Store.id)
            .where(Product.id == product_id)
        )
        return session.exec(stmt).first()
