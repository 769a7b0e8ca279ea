# shoppy/services/product_service.py
import logging
from enum import Enum

from sqlmodel import Session

from shoppy.core.errors import (
    AggregateNotFoundError,
    PermissionDeniedError,
    StoreReassignmentError,
)
from shoppy.core.unit_of_work import TransactionScope, UnitOfWork
from shoppy.models.product import Product
from shoppy.models.user import User
from shoppy.repositories.association_repo import CATEGORIES, SIZES, AssociationRepository
from shoppy.repositories.product_repo import ProductRepository
from shoppy.repositories.store_repo import StoreRepository
from shoppy.schemas.product import ProductCreate, ProductRead, ProductUpdate
from shoppy.services.association_reconciler import AssociationReconciler
from shoppy.services.reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)

# Payload keys that are not plain Product columns
_AGGREGATE_FIELDS = {"brand", "categories", "sizes", "store_id"}


class StoreReassignment(str, Enum):
    IGNORE = "ignore"
    REJECT = "reject"


class ProductService:
    """
    Business logic for the product aggregate
    (product row + brand reference + category/size join rows).

    Responsibilities:
      - resolve brand / category / size names to ids
      - keep every multi-table write inside one unit-of-work scope
      - reconcile category / size joins on update
      - only the manager of the owning store may change a product
    """

    def __init__(
        self,
        repo: ProductRepository,
        association_repo: AssociationRepository,
        store_repo: StoreRepository,
        resolver: ReferenceResolver,
        reconciler: AssociationReconciler,
        uow: UnitOfWork,
        store_reassignment: StoreReassignment = StoreReassignment.IGNORE,
    ):
        self.repo = repo
        self.association_repo = association_repo
        self.store_repo = store_repo
        self.resolver = resolver
        self.reconciler = reconciler
        self.uow = uow
        self.store_reassignment = StoreReassignment(store_reassignment)

    # ----- Helpers -----

    def _to_read(self, session: Session, product: Product) -> ProductRead:
        return ProductRead(
            **product.model_dump(exclude={"brand_id"}),
            brand=self.repo.get_brand_name(session, product.brand_id) or "",
            categories=self.association_repo.list_names(session, CATEGORIES, product.id),
            sizes=self.association_repo.list_names(session, SIZES, product.id),
        )

    def _ensure_owner(self, session: Session, caller: User, product: Product) -> None:
        store = self.store_repo.get_by_id(session, product.store_id)
        if store is None or store.manager_id != caller.id:
            raise PermissionDeniedError(
                f"User {caller.id} does not manage the store of product {product.id}"
            )

    def managed_store_id(self, session: Session, manager: User) -> int:
        """First active store managed by the user."""
        stores = self.store_repo.find_by_manager(session, manager.id)
        if not stores:
            raise AggregateNotFoundError("store", f"managed by user {manager.id}")
        return stores[0].id

    # ----- Reads -----

    def get_product(self, session: Session, product_id: int) -> ProductRead:
        product = self.repo.get_active(session, product_id)
        if product is None:
            raise AggregateNotFoundError("product", product_id)
        return self._to_read(session, product)

    def list_products(
        self,
        session: Session,
        size: str | None = None,
        category: str | None = None,
        store_id: int | None = None,
        limit: int | None = None,
    ) -> list[ProductRead]:
        products = self.repo.list_filtered(
            session, size=size, category=category, store_id=store_id, limit=limit
        )
        return [self._to_read(session, p) for p in products]

    def list_store_products(
        self,
        session: Session,
        store_id: int,
        page_number: int = 1,
        product_amount: int = 20,
    ) -> list[ProductRead]:
        """One page of a store's active products; pages start at 1."""
        skip = (page_number - 1) * product_amount
        products = self.repo.list_for_store(session, store_id, skip=skip, limit=product_amount)
        return [self._to_read(session, p) for p in products]

    def get_manager_email(self, session: Session, product_id: int) -> str:
        email = self.repo.get_manager_email(session, product_id)
        if email is None:
            raise AggregateNotFoundError("product", product_id)
        return email

    # ----- Writes -----

    def create_product(
        self,
        scope: TransactionScope,
        store_id: int,
        payload: ProductCreate,
    ) -> Product:
        """
        Insert one product and its join rows inside `scope`.

        Steps:
          1. Resolve brand name -> brand_id.
          2. Insert the product row for `store_id`.
          3. Resolve every category / size name and insert join rows.

        Any failure propagates; the caller's scope rolls everything back.
        """
        session = scope.session
        categories = self.reconciler.normalize(CATEGORIES, payload.categories)
        sizes = self.reconciler.normalize(SIZES, payload.sizes)

        brand_id = self.resolver.resolve_brand(session, payload.brand)
        product = Product(
            **payload.model_dump(exclude=_AGGREGATE_FIELDS),
            brand_id=brand_id,
            store_id=store_id,
        )
        product = self.repo.create(session, product)

        self.reconciler.attach(scope, product.id, CATEGORIES, categories)
        self.reconciler.attach(scope, product.id, SIZES, sizes)
        return product

    def create_products(
        self,
        session: Session,
        manager: User,
        payloads: list[ProductCreate],
    ) -> list[ProductRead]:
        """
        Create a batch of products for the manager's store.

        The whole batch is one transaction: one bad product means
        nothing from the batch is stored.
        """
        store_id = self.managed_store_id(session, manager)

        with self.uow.transaction(session, f"create products for store {store_id}") as tx:
            created = [self.create_product(tx, store_id, payload) for payload in payloads]
            ids = [product.id for product in created]

        logger.info("Created products %s in store %s", ids, store_id)
        return [self.get_product(session, product_id) for product_id in ids]

    def update_product(
        self,
        session: Session,
        caller: User,
        product_id: int,
        payload: ProductUpdate,
    ) -> ProductRead:
        """
        Update scalars, brand and associations of an active product.

        - store_id never moves the product (ignored or rejected).
        - categories / sizes are reconciled independently, and only when
          present in the payload.
        """
        with self.uow.transaction(session, f"update product {product_id}") as tx:
            product = self.repo.get_active(tx.session, product_id)
            if product is None:
                raise AggregateNotFoundError("product", product_id)
            self._ensure_owner(tx.session, caller, product)

            if payload.store_id is not None and payload.store_id != product.store_id:
                if self.store_reassignment is StoreReassignment.REJECT:
                    raise StoreReassignmentError(product_id)
                logger.info(
                    "Ignoring store change of product %s to store %s",
                    product_id, payload.store_id,
                )

            if payload.brand is not None:
                product.brand_id = self.resolver.resolve_brand(tx.session, payload.brand)

            changes = payload.model_dump(exclude_none=True, exclude=_AGGREGATE_FIELDS)
            for field, value in changes.items():
                setattr(product, field, value)
            self.repo.update(tx.session, product)

            # Associations are reconciled against the row as persisted
            product = self.repo.get_active(tx.session, product_id)
            if product is None:
                raise AggregateNotFoundError("product", product_id)

            if payload.categories is not None:
                self.reconciler.reconcile(tx, product.id, CATEGORIES, payload.categories)
            if payload.sizes is not None:
                self.reconciler.reconcile(tx, product.id, SIZES, payload.sizes)

        return self.get_product(session, product_id)

    def disable_product(self, session: Session, caller: User, product_id: int) -> None:
        """Soft delete: status -> 0. Join rows are kept."""
        with self.uow.transaction(session, f"disable product {product_id}") as tx:
            product = self.repo.get_active(tx.session, product_id)
            if product is None:
                raise AggregateNotFoundError("product", product_id)
            self._ensure_owner(tx.session, caller, product)
            product.status = 0
            self.repo.update(tx.session, product)
