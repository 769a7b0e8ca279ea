# shoppy/services/user_service.py
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from shoppy.core.security import create_access_token, hash_password, verify_password
from shoppy.models.user import User
from shoppy.repositories.user_repo import UserRepository
from shoppy.schemas.user import (
    LoginRequest,
    TokenResponse,
    UserRead,
    UserRegister,
    UserRoleUpdate,
    UserUpdate,
)


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - sign-up / login (hashing, token issuing)
      - enforce app rules (unique email and document number)
      - orchestrate repository operations
      - map domain errors to HTTP errors
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def _token_for(self, user: User) -> TokenResponse:
        return TokenResponse(
            access_token=create_access_token(user.id, user.role),
            user=UserRead.model_validate(user),
        )

    # ----- Account -----

    def register(self, session: Session, payload: UserRegister) -> TokenResponse:
        """
        Create a client account and log it in.

        Raises:
            HTTPException(409): email or document number already in use.
        """
        if self.repo.get_by_email(session, payload.email) is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already exists",
            )
        if self.repo.get_by_document(session, payload.id_document_number) is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="ID document number already exists",
            )

        user = User(
            **payload.model_dump(exclude={"password"}),
            password=hash_password(payload.password),
            role="client",
        )
        try:
            user = self.repo.create(session, user)
        except IntegrityError:
            # lost a race with another sign-up using the same keys
            session.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email or ID document number already exists",
            )
        return self._token_for(user)

    def login(self, session: Session, payload: LoginRequest) -> TokenResponse:
        """
        Exchange email + password for an access token.

        Unknown email, wrong password and disabled accounts all get the
        same 401 so callers cannot tell which one it was.
        """
        user = self.repo.get_by_email(session, payload.email)
        if (
            user is None
            or user.status != 1
            or not verify_password(payload.password, user.password)
        ):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect username or password",
            )
        return self._token_for(user)

    # ----- Self profile -----

    def get_me(self, current_user: User) -> User:
        """Return the current authenticated user."""
        return current_user

    def update_me(
        self,
        session: Session,
        current_user: User,
        payload: UserUpdate,
    ) -> User:
        """
        Partial update for profile edits.
        Only `name` and `last_name` are editable.
        """
        if payload.name is not None:
            current_user.name = payload.name

        if payload.last_name is not None:
            current_user.last_name = payload.last_name

        return self.repo.update(session, current_user)

    # ----- Admin operations -----

    def list_users(self, session: Session, skip: int, limit: int) -> list[User]:
        """List users with pagination (admin only)."""
        return self.repo.list(session, skip=skip, limit=limit)

    def get_user(self, session: Session, user_id: int) -> User:
        """
        Get a user by id (admin only).

        Raises:
            HTTPException(404): if not found.
        """
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user

    def update_role(
        self,
        session: Session,
        user_id: int,
        payload: UserRoleUpdate,
    ) -> User:
        """
        Change user's role (admin only).

        Role validation is enforced by the schema (Literal).
        """
        user = self.get_user(session, user_id)
        user.role = payload.role
        return self.repo.update(session, user)

    def disable_user(self, session: Session, user_id: int) -> User:
        """Soft delete a user (admin only): status -> 0."""
        user = self.get_user(session, user_id)
        user.status = 0
        return self.repo.update(session, user)
