# shoppy/repositories/association_repo.py
from dataclasses import dataclass

from sqlalchemy import delete
from sqlmodel import Session, SQLModel, select

from shoppy.models.catalog import Category, Size
from shoppy.models.product import ProductCategory, ProductSize


@dataclass(frozen=True)
class AssociationKind:
    """
    Describes one many-to-many association owned by Product.

    name            - label used in errors and logs ("category", "size")
    reference_model - table looked up by name (Category, Size)
    join_model      - join table (ProductCategory, ProductSize)
    fk_field        - join column pointing at reference_model.id
    """

    name: str
    reference_model: type[SQLModel]
    join_model: type[SQLModel]
    fk_field: str


CATEGORIES = AssociationKind("category", Category, ProductCategory, "category_id")
SIZES = AssociationKind("size", Size, ProductSize, "size_id")


class AssociationRepository:
    """
    Data access for the product join tables.

    All methods are parameterized by `AssociationKind`, so categories and
    sizes go through the same code. No commits here.
    """

    def list_names(self, session: Session, kind: AssociationKind, product_id: int) -> list[str]:
        """Names currently joined to the product, in insertion order."""
        join = kind.join_model
        ref = kind.reference_model
        stmt = (
            select(ref.name)
            .join(join, getattr(join, kind.fk_field) == ref.id)
            .where(join.product_id == product_id)
            .order_by(join.id)
        )
        return list(session.exec(stmt).all())

    def delete_for_product(self, session: Session, kind: AssociationKind, product_id: int) -> int:
        join = kind.join_model
        result = session.exec(delete(join).where(join.product_id == product_id))
        return result.rowcount

    def add(self, session: Session, kind: AssociationKind, product_id: int, reference_id: int) -> SQLModel:
        row = kind.join_model(product_id=product_id, **{kind.fk_field: reference_id})
        session.add(row)
        session.flush()
        return row
