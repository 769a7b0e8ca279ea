# shoppy/models/catalog.py
from sqlmodel import SQLModel, Field


# Reference tables. Product payloads point at these rows by `name`,
# which is why every name is unique.


class Brand(SQLModel, table=True):
    __tablename__ = "brands"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, unique=True, index=True)


class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, unique=True, index=True)


class Size(SQLModel, table=True):
    __tablename__ = "sizes"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=50, unique=True, index=True)
