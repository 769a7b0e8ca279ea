# shoppy/schemas/catalog.py
from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class CatalogItemCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class CatalogItemRead(SQLModel):
    id: int
    name: str
