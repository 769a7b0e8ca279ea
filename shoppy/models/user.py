# shoppy/models/user.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Persistent user account.

    Role:
      - "client" | "manager" | "admin"
      - managers own at most one active store (see Store.manager_id)

    `password` holds the bcrypt hash, never the plain value.
    Accounts are soft-deleted through `status` (1 active, 0 disabled).
    """

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)

    email: str = Field(
        unique=True,
        index=True,
        max_length=255,
    )

    password: str = Field(description="bcrypt hash")

    id_document_type: str = Field(max_length=20, description="e.g. DNI, passport")
    id_document_number: int = Field(unique=True, index=True)

    role: str = Field(
        default="client",
        index=True,
        description="Application role: client | manager | admin",
    )

    status: int = Field(default=1, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
