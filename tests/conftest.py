# tests/conftest.py
import os

# Settings are read at import time; point them at throwaway values first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-secret")

from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import event, func  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine, select  # noqa: E402

from shoppy.core.security import create_access_token, hash_password  # noqa: E402
from shoppy.core.unit_of_work import UnitOfWork  # noqa: E402
from shoppy.database import get_session  # noqa: E402
from shoppy.main import app  # noqa: E402
from shoppy.models.catalog import Brand, Category, Size  # noqa: E402
from shoppy.models.store import ColorSlot, Store, StoreColor  # noqa: E402
from shoppy.models.user import User  # noqa: E402
from shoppy.repositories.association_repo import AssociationRepository  # noqa: E402
from shoppy.repositories.catalog_repo import CatalogRepository  # noqa: E402
from shoppy.repositories.product_repo import ProductRepository  # noqa: E402
from shoppy.repositories.store_repo import StoreRepository  # noqa: E402
from shoppy.repositories.user_repo import UserRepository  # noqa: E402
from shoppy.services.association_reconciler import AssociationReconciler  # noqa: E402
from shoppy.services.product_service import ProductService  # noqa: E402
from shoppy.services.reference_resolver import ReferenceResolver  # noqa: E402
from shoppy.services.store_service import StoreService  # noqa: E402

PASSWORD = "correct-horse-1"


@pytest.fixture(scope="session")
def password_hash() -> str:
    return hash_password(PASSWORD)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def seed(session, password_hash):
    """
    Reference data plus one admin, two managers (one with a store) and a client.
    """

    def user(name: str, role: str, doc: int) -> User:
        return User(
            name=name,
            last_name="Test",
            email=f"{name}@example.com",
            password=password_hash,
            id_document_type="DNI",
            id_document_number=doc,
            role=role,
        )

    admin = user("admin", "admin", 1001)
    manager = user("manager", "manager", 1002)
    other_manager = user("other", "manager", 1003)
    client = user("client", "client", 1004)
    session.add_all([admin, manager, other_manager, client])

    session.add_all([Brand(name="Nike"), Brand(name="Adidas")])
    session.add_all([Category(name="Shoes"), Category(name="Sale"), Category(name="Kids")])
    session.add_all([Size(name="S"), Size(name="M"), Size(name="L")])
    session.commit()

    store = Store(name="Runner", manager_id=manager.id)
    other_store = Store(name="Walker", manager_id=other_manager.id)
    session.add_all([store, other_store])
    session.commit()

    for s in (store, other_store):
        session.add(StoreColor(store_id=s.id, type=ColorSlot.PRIMARY, hue=12, sat=12, light=12))
        session.add(StoreColor(store_id=s.id, type=ColorSlot.SECONDARY, hue=240, sat=240, light=240))
    session.commit()

    return SimpleNamespace(
        admin=admin,
        manager=manager,
        other_manager=other_manager,
        client=client,
        store_id=store.id,
        other_store_id=other_store.id,
    )


@pytest.fixture
def make_product_service():
    def factory(comparison="set", duplicates="reject", store_reassignment="ignore") -> ProductService:
        association_repo = AssociationRepository()
        resolver = ReferenceResolver(CatalogRepository())
        reconciler = AssociationReconciler(
            association_repo, resolver, comparison=comparison, duplicates=duplicates
        )
        return ProductService(
            ProductRepository(),
            association_repo,
            StoreRepository(),
            resolver,
            reconciler,
            UnitOfWork(),
            store_reassignment=store_reassignment,
        )

    return factory


@pytest.fixture
def product_service(make_product_service):
    return make_product_service()


@pytest.fixture
def store_service(product_service):
    return StoreService(StoreRepository(), UserRepository(), product_service, UnitOfWork())


@pytest.fixture
def sql_log(engine):
    """Every SQL statement sent to the database while the test runs."""
    statements: list[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    yield statements
    event.remove(engine, "before_cursor_execute", record)


def writes_to(statements: list[str], table: str) -> list[str]:
    prefixes = (f"INSERT INTO {table} ", f"DELETE FROM {table} ", f"UPDATE {table} ")
    return [s for s in statements if s.startswith(prefixes)]


def count_rows(engine, model, *where) -> int:
    with Session(engine) as s:
        stmt = select(func.count()).select_from(model)
        if where:
            stmt = stmt.where(*where)
        return s.exec(stmt).one()


def auth_header(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()
