# shoppy/core/unit_of_work.py
"""
Unit of work over a SQLModel session.

A write service opens a scope with `UnitOfWork.begin_transaction(session)`
and passes the returned `TransactionScope` to every repository call that
belongs to it. The scope ends with exactly one terminal call:

    open --commit()--> committed
    open --rollback()--> rolled_back

Any second terminal call raises `TransactionError`, and so does touching
`scope.session` once the scope is closed.

Typical usage:

    with uow.transaction(session) as tx:
        repo.create(tx.session, row)
        ...

The context manager commits on normal exit and rolls back on any
exception. Domain errors propagate unchanged after the rollback;
SQLAlchemy errors are re-raised as `TransactionError`.
"""
import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from shoppy.core.errors import ShoppyError, TransactionError

logger = logging.getLogger(__name__)

# Key under Session.info holding the open scope for that session
_ACTIVE_SCOPE_KEY = "shoppy.uow.scope"


class ScopeState(str, Enum):
    OPEN = "open"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class TransactionScope:
    """
    One open transaction on one session.

    Created only by `UnitOfWork.begin_transaction`.
    """

    def __init__(self, session: Session, label: str = "transaction"):
        self._session = session
        self.label = label
        self.state = ScopeState.OPEN

    @property
    def is_open(self) -> bool:
        return self.state is ScopeState.OPEN

    @property
    def session(self) -> Session:
        if not self.is_open:
            raise TransactionError(
                f"Scope '{self.label}' is {self.state.value}; no further writes allowed"
            )
        return self._session

    def commit(self) -> None:
        self._ensure_open("commit")
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            logger.warning("Commit of '%s' failed, rolling back: %s", self.label, exc)
            try:
                self._session.rollback()
            except SQLAlchemyError:
                logger.exception("Rollback after failed commit of '%s' also failed", self.label)
            finally:
                self._close(ScopeState.ROLLED_BACK)
            raise TransactionError(f"Commit of '{self.label}' failed") from exc
        self._close(ScopeState.COMMITTED)
        logger.debug("Committed '%s'", self.label)

    def rollback(self) -> None:
        self._ensure_open("rollback")
        try:
            self._session.rollback()
        finally:
            # rollback is terminal even if the driver complains
            self._close(ScopeState.ROLLED_BACK)
        logger.info("Rolled back '%s'", self.label)

    def _ensure_open(self, action: str) -> None:
        if not self.is_open:
            raise TransactionError(
                f"Cannot {action} '{self.label}': scope already {self.state.value}"
            )

    def _close(self, state: ScopeState) -> None:
        self.state = state
        if self._session.info.get(_ACTIVE_SCOPE_KEY) is self:
            del self._session.info[_ACTIVE_SCOPE_KEY]


class UnitOfWork:
    """
    Opens and closes transaction scopes.

    No nesting: a session carries at most one open scope.
    """

    def begin_transaction(self, session: Session, label: str = "transaction") -> TransactionScope:
        current = session.info.get(_ACTIVE_SCOPE_KEY)
        if current is not None:
            raise TransactionError(
                f"Cannot begin '{label}': scope '{current.label}' is still open"
            )

        scope = TransactionScope(session, label)
        session.info[_ACTIVE_SCOPE_KEY] = scope
        logger.debug("Began '%s'", label)
        return scope

    def commit_transaction(self, scope: TransactionScope) -> None:
        scope.commit()

    def rollback_transaction(self, scope: TransactionScope) -> None:
        scope.rollback()

    @contextmanager
    def transaction(self, session: Session, label: str = "transaction") -> Iterator[TransactionScope]:
        scope = self.begin_transaction(session, label)
        try:
            yield scope
        except ShoppyError:
            if scope.is_open:
                scope.rollback()
            raise
        except SQLAlchemyError as exc:
            if scope.is_open:
                scope.rollback()
            raise TransactionError(f"'{label}' failed: {exc}") from exc
        except BaseException:
            if scope.is_open:
                scope.rollback()
            raise
        else:
            # the body may already have closed the scope itself
            if scope.is_open:
                scope.commit()
