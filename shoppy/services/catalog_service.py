# shoppy/services/catalog_service.py
from fastapi import HTTPException, status
from sqlmodel import Session

from shoppy.core.unit_of_work import UnitOfWork
from shoppy.models.catalog import Brand, Category, Size
from shoppy.repositories.catalog_repo import CatalogRepository

# URL segment -> reference table
CATALOG_MODELS = {
    "brands": Brand,
    "categories": Category,
    "sizes": Size,
}


class CatalogService:
    """
    Reference data (brands, categories, sizes).

    Product writes never create these rows, so this is the only way
    to add them.
    """

    def __init__(self, repo: CatalogRepository, uow: UnitOfWork):
        self.repo = repo
        self.uow = uow

    @staticmethod
    def _model_for(kind: str):
        model = CATALOG_MODELS.get(kind)
        if model is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown catalog '{kind}'",
            )
        return model

    def list_items(self, session: Session, kind: str):
        return self.repo.list(session, self._model_for(kind))

    def create_item(self, session: Session, kind: str, name: str):
        model = self._model_for(kind)
        if self.repo.find_by_name(session, model, name):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"'{name}' already exists in {kind}",
            )

        with self.uow.transaction(session, f"create {kind} item") as tx:
            row = self.repo.create(tx.session, model(name=name))
            item_id = row.id

        return session.get(model, item_id)
