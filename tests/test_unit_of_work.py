# tests/test_unit_of_work.py
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from conftest import count_rows
from shoppy.core.errors import ReferenceNotFoundError, TransactionError
from shoppy.core.unit_of_work import ScopeState, UnitOfWork
from shoppy.models.catalog import Brand


@pytest.fixture
def uow():
    return UnitOfWork()


def test_commit_persists_writes(engine, session, uow):
    scope = uow.begin_transaction(session)
    scope.session.add(Brand(name="Puma"))
    uow.commit_transaction(scope)

    assert scope.state is ScopeState.COMMITTED
    assert count_rows(engine, Brand, Brand.name == "Puma") == 1


def test_rollback_discards_writes(engine, session, uow):
    scope = uow.begin_transaction(session)
    scope.session.add(Brand(name="Puma"))
    scope.session.flush()
    uow.rollback_transaction(scope)

    assert scope.state is ScopeState.ROLLED_BACK
    assert count_rows(engine, Brand) == 0


def test_commit_after_rollback_fails_loudly(session, uow):
    scope = uow.begin_transaction(session)
    scope.rollback()

    with pytest.raises(TransactionError):
        scope.commit()
    assert scope.state is ScopeState.ROLLED_BACK


def test_rollback_after_commit_fails_loudly(session, uow):
    scope = uow.begin_transaction(session)
    scope.commit()

    with pytest.raises(TransactionError):
        scope.rollback()
    assert scope.state is ScopeState.COMMITTED


def test_closed_scope_refuses_further_writes(session, uow):
    scope = uow.begin_transaction(session)
    scope.rollback()

    with pytest.raises(TransactionError):
        scope.session.add(Brand(name="Late"))


def test_only_one_open_scope_per_session(session, uow):
    first = uow.begin_transaction(session, "first")
    with pytest.raises(TransactionError):
        uow.begin_transaction(session, "second")

    first.commit()
    second = uow.begin_transaction(session, "second")
    assert second.is_open
    second.rollback()


def test_domain_error_rolls_back_once_and_never_commits(engine, session, uow):
    with patch.object(session, "commit", wraps=session.commit) as commit_spy, \
            patch.object(session, "rollback", wraps=session.rollback) as rollback_spy:
        with pytest.raises(ReferenceNotFoundError):
            with uow.transaction(session) as scope:
                scope.session.add(Brand(name="Puma"))
                scope.session.flush()
                raise ReferenceNotFoundError("category", "Nope")

    assert rollback_spy.call_count == 1
    assert commit_spy.call_count == 0
    assert scope.state is ScopeState.ROLLED_BACK
    assert count_rows(engine, Brand) == 0


def test_database_error_is_wrapped_after_rollback(engine, session, uow):
    session.add(Brand(name="Nike"))
    session.commit()

    with patch.object(session, "commit", wraps=session.commit) as commit_spy:
        with pytest.raises(TransactionError) as excinfo:
            with uow.transaction(session) as scope:
                scope.session.add(Brand(name="Nike"))
                scope.session.flush()

    assert excinfo.value.__cause__ is not None
    assert commit_spy.call_count == 0
    assert scope.state is ScopeState.ROLLED_BACK
    assert count_rows(engine, Brand) == 1


def test_failed_commit_ends_rolled_back(engine, session, uow):
    session.add(Brand(name="Nike"))
    session.commit()

    scope = uow.begin_transaction(session)
    # unique violation only surfaces when commit flushes
    scope.session.add(Brand(name="Nike"))
    with pytest.raises(TransactionError):
        scope.commit()

    assert scope.state is ScopeState.ROLLED_BACK
    with pytest.raises(TransactionError):
        scope.rollback()
    assert count_rows(engine, Brand) == 1


def test_context_manager_commits_on_success(engine, session, uow):
    with uow.transaction(session) as scope:
        scope.session.add(Brand(name="Puma"))

    assert scope.state is ScopeState.COMMITTED
    assert count_rows(engine, Brand) == 1


def test_body_may_close_scope_itself(engine, session, uow):
    with patch.object(session, "commit", wraps=session.commit) as commit_spy:
        with uow.transaction(session) as scope:
            scope.session.add(Brand(name="Puma"))
            scope.rollback()

    assert commit_spy.call_count == 0
    assert scope.state is ScopeState.ROLLED_BACK
    assert count_rows(engine, Brand) == 0


def test_failed_commit_and_rollback_still_close_the_scope(session, uow):
    commit_error = OperationalError("COMMIT", {}, Exception("connection lost"))
    rollback_error = OperationalError("ROLLBACK", {}, Exception("connection lost"))

    scope = uow.begin_transaction(session, "flaky")
    with patch.object(session, "commit", side_effect=commit_error), \
            patch.object(session, "rollback", side_effect=rollback_error):
        with pytest.raises(TransactionError) as excinfo:
            scope.commit()

    assert excinfo.value.__cause__ is commit_error
    assert scope.state is ScopeState.ROLLED_BACK

    # the session is free for the next scope
    follow_up = uow.begin_transaction(session, "follow-up")
    assert follow_up.is_open
    follow_up.rollback()
