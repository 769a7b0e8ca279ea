# shoppy/repositories/user_repo.py
from sqlmodel import Session, select

from shoppy.models.user import User


class UserRepository:
    """
    Queries and writes for accounts (clients, managers, admins).

    Account writes touch a single row, so `create` and `update` commit
    on their own instead of joining a unit-of-work scope. Store creation
    only reads through here.
    """

    # ----- Lookups -----

    def get_by_id(self, session: Session, user_id: int) -> User | None:
        return session.get(User, user_id)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Login and sign-up key; emails are unique."""
        stmt = select(User).where(User.email == email)
        return session.exec(stmt).first()

    def get_by_document(self, session: Session, id_document_number: int) -> User | None:
        stmt = select(User).where(User.id_document_number == id_document_number)
        return session.exec(stmt).first()

    def list(self, session: Session, skip: int = 0, limit: int = 50) -> list[User]:
        """Admin listing, oldest accounts first. Disabled accounts are included."""
        stmt = select(User).order_by(User.id).offset(skip).limit(limit)
        return session.exec(stmt).all()

    # ----- Writes -----

    def create(self, session: Session, user: User) -> User:
        """
        Insert an account and commit.

        Raises:
            IntegrityError: email or document number taken by a concurrent sign-up.
        """
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
