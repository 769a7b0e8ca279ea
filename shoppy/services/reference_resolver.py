# shoppy/services/reference_resolver.py
from sqlmodel import Session, SQLModel

from shoppy.core.errors import ReferenceNotFoundError
from shoppy.models.catalog import Brand
from shoppy.repositories.catalog_repo import CatalogRepository


class ReferenceResolver:
    """
    Turns reference names (brand, category, size) into ids.

    Every product write goes through here so not-found handling lives in
    one place:
      - zero matches  -> ReferenceNotFoundError
      - one or more   -> the first row by id
    """

    def __init__(self, repo: CatalogRepository):
        self.repo = repo

    def resolve(self, session: Session, model: type[SQLModel], kind: str, name: str) -> int:
        rows = self.repo.find_by_name(session, model, name)
        if not rows:
            raise ReferenceNotFoundError(kind, name)
        return rows[0].id

    def resolve_many(self, session: Session, model: type[SQLModel], kind: str, names: list[str]) -> list[int]:
        """Resolve names in order; fails on the first missing one."""
        return [self.resolve(session, model, kind, name) for name in names]

    def resolve_brand(self, session: Session, name: str) -> int:
        return self.resolve(session, Brand, "brand", name)
