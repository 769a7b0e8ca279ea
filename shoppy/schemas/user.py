# shoppy/schemas/user.py
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

# App-level roles. Anonymous visitors have no token and no row.
Role = Literal["client", "manager", "admin"]


class UserRegister(SQLModel):
    """
    Sign-up payload.

    Validation rules:
      - email must be a valid EmailStr
      - names cannot be empty or whitespace
      - password is hashed before it is stored
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    id_document_type: str = Field(max_length=20)
    id_document_number: int = Field(gt=0)

    @field_validator("name", "last_name", "id_document_type")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str


class UserRead(SQLModel):
    """Response schema returned to clients (never includes the hash)."""

    id: int
    name: str
    last_name: str
    email: EmailStr
    id_document_type: str
    id_document_number: int
    role: Role
    status: int
    created_at: datetime


class TokenResponse(SQLModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead


class UserUpdate(SQLModel):
    """
    Partial profile update for authenticated users.
    Email and document are not editable.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)

    @field_validator("name", "last_name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class UserRoleUpdate(SQLModel):
    """
    Admin-only role update schema.
    """

    model_config = ConfigDict(extra="forbid")
    role: Role
