# shoppy/routers/products.py
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from shoppy.core.auth import require_manager
from shoppy.core.config import get_settings
from shoppy.core.unit_of_work import UnitOfWork
from shoppy.database import get_session
from shoppy.models.user import User
from shoppy.repositories.association_repo import AssociationRepository
from shoppy.repositories.catalog_repo import CatalogRepository
from shoppy.repositories.product_repo import ProductRepository
from shoppy.repositories.store_repo import StoreRepository
from shoppy.schemas.product import ManagerContact, ProductCreate, ProductRead, ProductUpdate
from shoppy.services.association_reconciler import AssociationReconciler
from shoppy.services.product_service import ProductService
from shoppy.services.reference_resolver import ReferenceResolver

settings = get_settings()

router = APIRouter(prefix="/products", tags=["Products"])

association_repo = AssociationRepository()
resolver = ReferenceResolver(CatalogRepository())
service = ProductService(
    ProductRepository(),
    association_repo,
    StoreRepository(),
    resolver,
    AssociationReconciler(
        association_repo,
        resolver,
        comparison=settings.ASSOCIATION_COMPARISON,
        duplicates=settings.ASSOCIATION_DUPLICATES,
    ),
    UnitOfWork(),
    store_reassignment=settings.STORE_REASSIGNMENT,
)


# -------- Public endpoints --------


@router.get("/q", response_model=list[ProductRead])
def filter_products(
    session: Session = Depends(get_session),
    category: str | None = None,
    size: str | None = None,
    store: int | None = None,
    limit: int | None = Query(default=None, ge=1),
):
    """
    Active products filtered by category name, size name and store.

    Example: /products/q?category=Shoes&size=M&limit=10&store=1
    """
    return service.list_products(
        session, size=size, category=category, store_id=store, limit=limit
    )


@router.get("/store/{store_id}/q", response_model=list[ProductRead])
def list_store_products(
    store_id: int,
    session: Session = Depends(get_session),
    page_number: int = Query(default=1, ge=1),
    product_amount: int = Query(default=20, ge=1, le=100),
):
    """
    One page of a store's active products.
    """
    return service.list_store_products(
        session, store_id, page_number=page_number, product_amount=product_amount
    )


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: int,
    session: Session = Depends(get_session),
):
    """
    Get a single active product by id.
    """
    return service.get_product(session, product_id)


@router.get("/{product_id}/manager", response_model=ManagerContact)
def get_product_manager(
    product_id: int,
    session: Session = Depends(get_session),
):
    """
    Contact email of the manager selling this product.
    """
    return ManagerContact(
        product_id=product_id,
        email=service.get_manager_email(session, product_id),
    )


# -------- Manager endpoints --------


@router.post(
    "",
    response_model=list[ProductRead],
    status_code=status.HTTP_201_CREATED,
)
def create_products(
    payload: list[ProductCreate],
    session: Session = Depends(get_session),
    current_user: User = Depends(require_manager),
):
    """
    Create one or more products in the caller's store.

    All-or-nothing: if any product fails, none is stored.
    """
    return service.create_products(session, current_user, payload)


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_manager),
):
    """
    Update a product of the caller's store.

    categories / sizes replace the stored lists when present.
    """
    return service.update_product(session, current_user, product_id, payload)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def disable_product(
    product_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_manager),
):
    """
    Disable (soft delete) a product of the caller's store.
    """
    service.disable_product(session, current_user, product_id)
    return None
