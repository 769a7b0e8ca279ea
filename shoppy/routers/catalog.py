# shoppy/routers/catalog.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from shoppy.core.auth import require_admin
from shoppy.core.unit_of_work import UnitOfWork
from shoppy.database import get_session
from shoppy.repositories.catalog_repo import CatalogRepository
from shoppy.schemas.catalog import CatalogItemCreate, CatalogItemRead
from shoppy.services.catalog_service import CatalogService

router = APIRouter(prefix="/catalog", tags=["Catalog"])

service = CatalogService(CatalogRepository(), UnitOfWork())


@router.get("/{kind}", response_model=list[CatalogItemRead])
def list_items(kind: str, session: Session = Depends(get_session)):
    """
    List brands, categories or sizes.
    """
    return service.list_items(session, kind)


@router.post(
    "/{kind}",
    response_model=CatalogItemRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_item(
    kind: str,
    payload: CatalogItemCreate,
    session: Session = Depends(get_session),
):
    """
    Add a brand, category or size (admin only).
    """
    return service.create_item(session, kind, payload.name)
