# tests/test_association_reconciler.py
import pytest

from conftest import count_rows, writes_to
from shoppy.core.errors import DuplicateAssociationError, ReferenceNotFoundError
from shoppy.core.unit_of_work import UnitOfWork
from shoppy.models.product import ProductCategory, ProductSize
from shoppy.repositories.association_repo import CATEGORIES, SIZES, AssociationRepository
from shoppy.repositories.catalog_repo import CatalogRepository
from shoppy.schemas.product import ProductCreate
from shoppy.services.association_reconciler import (
    AssociationReconciler,
    ComparisonMode,
    DuplicatePolicy,
    find_duplicates,
)
from shoppy.services.reference_resolver import ReferenceResolver

uow = UnitOfWork()
repo = AssociationRepository()


def make_reconciler(comparison=ComparisonMode.SET, duplicates=DuplicatePolicy.REJECT):
    return AssociationReconciler(
        repo,
        ReferenceResolver(CatalogRepository()),
        comparison=comparison,
        duplicates=duplicates,
    )


def reconcile(session, reconciler, product_id, kind, names):
    with uow.transaction(session) as tx:
        return reconciler.reconcile(tx, product_id, kind, names)


@pytest.fixture
def product_id(session, seed, product_service):
    payload = ProductCreate(
        name="Air Zoom",
        brand="Nike",
        categories=["Shoes", "Sale"],
        sizes=["M"],
        price=120,
    )
    with uow.transaction(session) as tx:
        product = product_service.create_product(tx, seed.store_id, payload)
        new_id = product.id
    return new_id


def test_same_names_twice_writes_nothing_the_second_time(session, product_id, sql_log):
    reconciler = make_reconciler()

    first = reconcile(session, reconciler, product_id, CATEGORIES, ["Shoes", "Kids"])
    assert first.changed
    sql_log.clear()

    second = reconcile(session, reconciler, product_id, CATEGORIES, ["Shoes", "Kids"])

    assert not second.changed
    assert writes_to(sql_log, "product_categories") == []
    assert repo.list_names(session, CATEGORIES, product_id) == ["Shoes", "Kids"]


def test_unchanged_list_is_a_no_op(session, product_id, sql_log):
    result = reconcile(session, make_reconciler(), product_id, CATEGORIES, ["Shoes", "Sale"])

    assert not result.changed
    assert writes_to(sql_log, "product_categories") == []


def test_shrunk_list_deletes_all_and_reinserts(session, product_id, sql_log):
    result = reconcile(session, make_reconciler(), product_id, CATEGORIES, ["Shoes"])

    assert result.changed
    assert result.deleted == 2
    assert result.inserted == 1
    statements = writes_to(sql_log, "product_categories")
    assert len([s for s in statements if s.startswith("DELETE")]) == 1
    assert len([s for s in statements if s.startswith("INSERT")]) == 1
    assert repo.list_names(session, CATEGORIES, product_id) == ["Shoes"]


def test_set_mode_ignores_order(session, product_id, sql_log):
    result = reconcile(session, make_reconciler(), product_id, CATEGORIES, ["Sale", "Shoes"])

    assert not result.changed
    assert writes_to(sql_log, "product_categories") == []


def test_ordered_mode_rewrites_on_reorder(session, product_id):
    reconciler = make_reconciler(comparison=ComparisonMode.ORDERED)

    result = reconcile(session, reconciler, product_id, CATEGORIES, ["Sale", "Shoes"])

    assert result.changed
    assert repo.list_names(session, CATEGORIES, product_id) == ["Sale", "Shoes"]


def test_empty_list_removes_every_association(engine, session, product_id):
    result = reconcile(session, make_reconciler(), product_id, CATEGORIES, [])

    assert result.changed
    assert result.inserted == 0
    assert count_rows(engine, ProductCategory, ProductCategory.product_id == product_id) == 0


def test_kinds_are_reconciled_independently(session, product_id, sql_log):
    result = reconcile(session, make_reconciler(), product_id, SIZES, ["S", "L"])

    assert result.changed
    assert writes_to(sql_log, "product_categories") == []
    assert repo.list_names(session, SIZES, product_id) == ["S", "L"]
    assert repo.list_names(session, CATEGORIES, product_id) == ["Shoes", "Sale"]


def test_unknown_name_fails_and_keeps_existing_rows(engine, session, product_id):
    with pytest.raises(ReferenceNotFoundError) as excinfo:
        reconcile(session, make_reconciler(), product_id, SIZES, ["M", "XXL"])

    assert excinfo.value.kind == "size"
    assert excinfo.value.name == "XXL"
    assert count_rows(engine, ProductSize, ProductSize.product_id == product_id) == 1


def test_duplicates_rejected_by_default(session, product_id):
    with pytest.raises(DuplicateAssociationError) as excinfo:
        reconcile(session, make_reconciler(), product_id, CATEGORIES, ["Kids", "Kids"])

    assert excinfo.value.names == ["Kids"]
    assert repo.list_names(session, CATEGORIES, product_id) == ["Shoes", "Sale"]


def test_duplicates_deduped_keep_first_occurrence(session, product_id):
    reconciler = make_reconciler(duplicates=DuplicatePolicy.DEDUPE)

    reconcile(session, reconciler, product_id, CATEGORIES, ["Kids", "Shoes", "Kids"])

    assert repo.list_names(session, CATEGORIES, product_id) == ["Kids", "Shoes"]


def test_duplicates_allowed_are_stored_and_stable(session, product_id, sql_log):
    reconciler = make_reconciler(duplicates=DuplicatePolicy.ALLOW)

    reconcile(session, reconciler, product_id, CATEGORIES, ["Kids", "Kids"])
    assert repo.list_names(session, CATEGORIES, product_id) == ["Kids", "Kids"]
    sql_log.clear()

    # one "Kids" is not the same as two
    changed = reconcile(session, reconciler, product_id, CATEGORIES, ["Kids"])
    assert changed.changed
    sql_log.clear()

    again = reconcile(session, reconciler, product_id, CATEGORIES, ["Kids"])
    assert not again.changed
    assert writes_to(sql_log, "product_categories") == []


def test_find_duplicates():
    assert find_duplicates(["a", "b", "a", "c", "b"]) == ["a", "b"]
    assert find_duplicates([]) == []
