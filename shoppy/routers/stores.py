# shoppy/routers/stores.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from shoppy.core.auth import require_admin, require_manager
from shoppy.core.unit_of_work import UnitOfWork
from shoppy.database import get_session
from shoppy.models.user import User
from shoppy.repositories.store_repo import StoreRepository
from shoppy.repositories.user_repo import UserRepository
from shoppy.routers.products import service as product_service
from shoppy.schemas.store import StoreCreate, StoreDetail, StoreName, StoreRead, StoreUpdate
from shoppy.services.store_service import StoreService

router = APIRouter(prefix="/shop", tags=["Stores"])

service = StoreService(StoreRepository(), UserRepository(), product_service, UnitOfWork())


# -------- Public endpoints --------


@router.get("/names", response_model=list[StoreName])
def list_store_names(session: Session = Depends(get_session)):
    """
    Id and name of every active store.
    """
    return service.list_names(session)


@router.get("/{store_id}", response_model=StoreDetail)
def get_store(
    store_id: int,
    session: Session = Depends(get_session),
):
    """
    Store page: store data, active products and colors.
    """
    return service.get_store(session, store_id)


# -------- Manager endpoints --------


@router.put("", response_model=StoreRead)
def update_my_store(
    payload: StoreUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_manager),
):
    """
    Update the store managed by the caller (name and/or colors).
    """
    return service.update_my_store(session, current_user, payload)


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=StoreRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_store(
    payload: StoreCreate,
    session: Session = Depends(get_session),
):
    """
    Create a store with its primary/secondary colors (admin only).
    """
    return service.create_store(session, payload)


@router.delete(
    "/{store_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def disable_store(
    store_id: int,
    session: Session = Depends(get_session),
):
    """
    Disable (soft delete) a store (admin only).
    """
    service.disable_store(session, store_id)
    return None
