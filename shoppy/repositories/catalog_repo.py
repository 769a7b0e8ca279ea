# shoppy/repositories/catalog_repo.py
from typing import TypeVar

from sqlmodel import Session, SQLModel, select

from shoppy.models.catalog import Brand, Category, Size

RefModel = TypeVar("RefModel", Brand, Category, Size)


class CatalogRepository:
    """
    Data access layer for the reference tables (brands, categories, sizes).

    NOTE:
      - No commits here; callers own the transaction.
    """

    def find_by_name(self, session: Session, model: type[RefModel], name: str) -> list[RefModel]:
        """Rows whose name matches exactly, ordered by id."""
        stmt = select(model).where(model.name == name).order_by(model.id)
        return session.exec(stmt).all()

    def list(self, session: Session, model: type[RefModel]) -> list[RefModel]:
        stmt = select(model).order_by(model.name)
        return session.exec(stmt).all()

    def create(self, session: Session, row: SQLModel) -> SQLModel:
        session.add(row)
        session.flush()
        session.refresh(row)
        return row
