# shoppy/services/store_service.py
import logging

from sqlmodel import Session

from shoppy.core.errors import AggregateNotFoundError, ReferenceNotFoundError
from shoppy.core.unit_of_work import TransactionScope, UnitOfWork
from shoppy.models.store import ColorSlot, Store, StoreColor
from shoppy.models.user import User
from shoppy.repositories.store_repo import StoreRepository
from shoppy.repositories.user_repo import UserRepository
from shoppy.schemas.store import Color, StoreColors, StoreCreate, StoreDetail, StoreUpdate
from shoppy.services.product_service import ProductService

logger = logging.getLogger(__name__)

# Theme used when a store is created without colors
DEFAULT_COLORS = StoreColors(
    primary=Color(hue=12, sat=12, light=12),
    secondary=Color(hue=240, sat=240, light=240),
)


class StoreService:
    """
    Business logic for stores and their two theme colors.

    Invariant kept here: a store has no color rows or exactly one
    PRIMARY and one SECONDARY row. Colors are inserted together with the
    store and afterwards only updated in place.
    """

    def __init__(
        self,
        repo: StoreRepository,
        user_repo: UserRepository,
        product_service: ProductService,
        uow: UnitOfWork,
    ):
        self.repo = repo
        self.user_repo = user_repo
        self.product_service = product_service
        self.uow = uow

    # ---- Reads ----

    def list_names(self, session: Session) -> list[Store]:
        return self.repo.list_active(session)

    def get_active_store(self, session: Session, store_id: int) -> Store:
        store = self.repo.get_active(session, store_id)
        if store is None:
            raise AggregateNotFoundError("store", store_id)
        return store

    def get_managed_store(self, session: Session, caller: User) -> Store:
        """First active store whose manager is the caller."""
        stores = self.repo.find_by_manager(session, caller.id)
        if not stores:
            raise AggregateNotFoundError("store", f"managed by user {caller.id}")
        return stores[0]

    def get_colors(self, session: Session, store_id: int) -> dict[str, Color]:
        colors: dict[str, Color] = {}
        for row in self.repo.list_colors(session, store_id):
            colors[row.type.value.lower()] = Color(hue=row.hue, sat=row.sat, light=row.light)
        return colors

    def get_store(self, session: Session, store_id: int) -> StoreDetail:
        """
        Store page: store row, its active products and its colors.
        """
        store = self.get_active_store(session, store_id)
        return StoreDetail(
            **store.model_dump(),
            products=self.product_service.list_products(session, store_id=store.id),
            colors=self.get_colors(session, store.id),
        )

    # ---- Writes ----

    def _insert_colors(self, scope: TransactionScope, store_id: int, colors: StoreColors) -> None:
        for slot, color in ((ColorSlot.PRIMARY, colors.primary), (ColorSlot.SECONDARY, colors.secondary)):
            self.repo.create_color(
                scope.session,
                StoreColor(store_id=store_id, type=slot, **color.model_dump()),
            )

    def _update_color(self, scope: TransactionScope, store_id: int, slot: ColorSlot, color: Color) -> StoreColor:
        rows = self.repo.find_color(scope.session, store_id, slot)
        if not rows:
            raise ReferenceNotFoundError("color", f"{slot.value} of store {store_id}")

        row = rows[0]
        row.hue = color.hue
        row.sat = color.sat
        row.light = color.light
        return self.repo.update_color(scope.session, row)

    def create_store(self, session: Session, payload: StoreCreate) -> Store:
        """
        Create a store and its two color rows in one transaction.

        - manager_id must point at an active user.
        - colors default to DEFAULT_COLORS when omitted.
        """
        with self.uow.transaction(session, "create store") as tx:
            manager = self.user_repo.get_by_id(tx.session, payload.manager_id)
            if manager is None or manager.status != 1:
                raise ReferenceNotFoundError("user", payload.manager_id)

            store = self.repo.create(
                tx.session,
                Store(name=payload.name, manager_id=manager.id),
            )
            self._insert_colors(tx, store.id, payload.colors or DEFAULT_COLORS)
            store_id = store.id

        logger.info("Created store %s for manager %s", store_id, payload.manager_id)
        return self.get_active_store(session, store_id)

    def update_my_store(self, session: Session, caller: User, payload: StoreUpdate) -> Store:
        """
        Update the caller's own store and, when given, its colors.

        Color rows are updated in place; a missing row is an error,
        never a reason to insert one.
        """
        with self.uow.transaction(session, f"update store of user {caller.id}") as tx:
            store = self.get_managed_store(tx.session, caller)

            if payload.name is not None:
                store.name = payload.name
                self.repo.update(tx.session, store)

            if payload.colors is not None:
                if payload.colors.primary is not None:
                    self._update_color(tx, store.id, ColorSlot.PRIMARY, payload.colors.primary)
                if payload.colors.secondary is not None:
                    self._update_color(tx, store.id, ColorSlot.SECONDARY, payload.colors.secondary)

            store_id = store.id

        return self.get_active_store(session, store_id)

    def disable_store(self, session: Session, store_id: int) -> None:
        """Soft delete: status -> 0."""
        with self.uow.transaction(session, f"disable store {store_id}") as tx:
            store = self.get_active_store(tx.session, store_id)
            store.status = 0
            self.repo.update(tx.session, store)
