# shoppy/core/errors.py
"""
Domain errors raised by the write-consistency core.

Services raise these; the HTTP layer (see `shoppy.main`) maps each kind
to a status code. Nothing in the core swallows them.
"""


class ShoppyError(Exception):
    """Base class for every domain error."""


class ReferenceNotFoundError(ShoppyError):
    """A lookup by name (brand, category, size, color, user) matched zero rows."""

    def __init__(self, kind: str, name: object):
        self.kind = kind
        self.name = name
        super().__init__(f"No {kind} found for {name!r}")


class AggregateNotFoundError(ShoppyError):
    """A product or store is missing, or has been soft-deleted."""

    def __init__(self, kind: str, ident: object):
        self.kind = kind
        self.ident = ident
        super().__init__(f"{kind.capitalize()} {ident!r} not found")


class TransactionError(ShoppyError):
    """
    Failure inside a unit-of-work scope, or misuse of a scope.

    When raised for a database failure the scope has already been
    rolled back; the original exception is chained as `__cause__`.
    """


class DuplicateAssociationError(ShoppyError):
    def __init__(self, kind: str, names: list[str]):
        self.kind = kind
        self.names = names
        super().__init__(f"Duplicate {kind} names: {', '.join(names)}")


class StoreReassignmentError(ShoppyError):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} cannot be moved to another store")


class PermissionDeniedError(ShoppyError):
    """The caller is authenticated but does not own the aggregate."""
