# shoppy/repositories/store_repo.py
from sqlmodel import Session, select

from shoppy.models.store import ColorSlot, Store, StoreColor


class StoreRepository:
    """
    Data access layer for Store & StoreColor.

    NOTE:
      - No commits here; store creation writes three rows and the
        service's unit-of-work scope commits them together.
    """

    # ---- Stores ----

    def get_by_id(self, session: Session, store_id: int) -> Store | None:
        return session.get(Store, store_id)

    def get_active(self, session: Session, store_id: int) -> Store | None:
        stmt = select(Store).where(Store.id == store_id, Store.status == 1)
        return session.exec(stmt).first()

    def find_by_manager(self, session: Session, manager_id: int) -> list[Store]:
        """Active stores managed by the user, oldest first."""
        stmt = (
            select(Store)
            .where(Store.manager_id == manager_id, Store.status == 1)
            .order_by(Store.id)
        )
        return session.exec(stmt).all()

    def list_active(self, session: Session) -> list[Store]:
        stmt = select(Store).where(Store.status == 1).order_by(Store.id)
        return session.exec(stmt).all()

    def create(self, session: Session, store: Store) -> Store:
        session.add(store)
        session.flush()  # Assign PK
        session.refresh(store)
        return store

    def update(self, session: Session, store: Store) -> Store:
        session.add(store)
        session.flush()
        session.refresh(store)
        return store

    # ---- Colors ----

    def list_colors(self, session: Session, store_id: int) -> list[StoreColor]:
        stmt = select(StoreColor).where(StoreColor.store_id == store_id).order_by(StoreColor.id)
        return session.exec(stmt).all()

    def find_color(self, session: Session, store_id: int, slot: ColorSlot) -> list[StoreColor]:
        stmt = (
            select(StoreColor)
            .where(StoreColor.store_id == store_id, StoreColor.type == slot)
            .order_by(StoreColor.id)
        )
        return session.exec(stmt).all()

    def create_color(self, session: Session, color: StoreColor) -> StoreColor:
        session.add(color)
        session.flush()
        session.refresh(color)
        return color

    def update_color(self, session: Session, color: StoreColor) -> StoreColor:
        session.add(color)
        session.flush()
        session.refresh(color)
        return color
