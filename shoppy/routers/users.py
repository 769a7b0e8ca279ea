# shoppy/routers/users.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from shoppy.core.auth import require_auth, require_admin
from shoppy.database import get_session
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
from shoppy.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

repo = UserRepository()
service = UserService(repo)


# -------- Account --------


@router.post("", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: UserRegister,
    session: Session = Depends(get_session),
):
    """
    Create a client account and return an access token.
    """
    return service.register(session, payload)


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
):
    """
    Log in with email + password.
    """
    return service.login(session, payload)


# -------- Self profile --------


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(require_auth)):
    """
    Return the authenticated user's profile.
    """
    return service.get_me(current_user)


@router.patch("/me", response_model=UserRead)
def update_me(
    payload: UserUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Update the authenticated user's profile (partial update).
    """
    return service.update_me(session, current_user, payload)


# -------- Admin endpoints --------


@router.get(
    "",
    response_model=list[UserRead],
    dependencies=[Depends(require_admin)],
)
def list_users(
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
):
    """
    List all users (admin only).

    Pagination via skip/limit.
    """
    return service.list_users(session, skip, limit)


@router.get(
    "/{user_id}",
    response_model=UserRead,
    dependencies=[Depends(require_admin)],
)
def get_user(
    user_id: int,
    session: Session = Depends(get_session),
):
    """
    Get a specific user by id (admin only).
    """
    return service.get_user(session, user_id)


@router.patch(
    "/{user_id}/role",
    response_model=UserRead,
    dependencies=[Depends(require_admin)],
)
def change_role(
    user_id: int,
    payload: UserRoleUpdate,
    session: Session = Depends(get_session),
):
    """
    Update a user's role (admin only).

    Allowed roles: client, manager, admin.
    """
    return service.update_role(session, user_id, payload)


@router.delete(
    "/{user_id}",
    response_model=UserRead,
    dependencies=[Depends(require_admin)],
)
def disable_user(
    user_id: int,
    session: Session = Depends(get_session),
):
    """
    Disable (soft delete) a user (admin only).
    """
    return service.disable_user(session, user_id)
