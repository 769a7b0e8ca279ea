# shoppy/database.py
from typing import Any

from sqlmodel import SQLModel, create_engine, Session

from shoppy.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Relational store connection
#
# - pool_pre_ping=True : validate connections before using them
# - pool_timeout       : seconds a request waits for a free connection
#                        before failing, so a transaction scope never
#                        blocks forever on an exhausted pool
#
# SQLite (local dev / tests) uses its own pool and rejects the sizing
# arguments, so it only gets check_same_thread=False.
# ---------------------------------------------------------


def engine_options(db_url: str) -> dict[str, Any]:
    if db_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=False,        # set to True if you want to debug SQL queries
    **engine_options(settings.DATABASE_URL),
)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    One session per request; write services open a unit-of-work scope
    on it (see `shoppy.core.unit_of_work`).
    """
    with Session(engine) as session:
        yield session
