# shoppy/services/association_reconciler.py
"""
Keeps a product's category / size join rows in line with a desired list
of names.

    persisted = names joined today (insertion order)
    desired   = names from the request (after the duplicate policy)

    unchanged -> no writes at all
    changed   -> resolve every desired name, delete all join rows of
                 that kind for the product, insert one row per name

"Unchanged" depends on the comparison mode:
  - SET     : same names with the same multiplicity, order ignored
  - ORDERED : same names at the same positions
"""
import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum

from shoppy.core.errors import DuplicateAssociationError
from shoppy.core.unit_of_work import TransactionScope
from shoppy.repositories.association_repo import AssociationKind, AssociationRepository
from shoppy.services.reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)


class ComparisonMode(str, Enum):
    SET = "set"
    ORDERED = "ordered"


class DuplicatePolicy(str, Enum):
    REJECT = "reject"
    DEDUPE = "dedupe"
    ALLOW = "allow"


@dataclass(frozen=True)
class ReconcileResult:
    kind: str
    changed: bool
    deleted: int = 0
    inserted: int = 0


def find_duplicates(names: list[str]) -> list[str]:
    return [name for name, count in Counter(names).items() if count > 1]


class AssociationReconciler:
    def __init__(
        self,
        repo: AssociationRepository,
        resolver: ReferenceResolver,
        comparison: ComparisonMode = ComparisonMode.SET,
        duplicates: DuplicatePolicy = DuplicatePolicy.REJECT,
    ):
        self.repo = repo
        self.resolver = resolver
        self.comparison = ComparisonMode(comparison)
        self.duplicates = DuplicatePolicy(duplicates)

    def normalize(self, kind: AssociationKind, names: list[str]) -> list[str]:
        """Apply the duplicate policy to a desired list of names."""
        if self.duplicates is DuplicatePolicy.ALLOW:
            return list(names)

        dupes = find_duplicates(names)
        if not dupes:
            return list(names)
        if self.duplicates is DuplicatePolicy.REJECT:
            raise DuplicateAssociationError(kind.name, dupes)

        # DEDUPE: keep first occurrence
        return list(dict.fromkeys(names))

    def matches(self, persisted: list[str], desired: list[str]) -> bool:
        if self.comparison is ComparisonMode.ORDERED:
            return len(persisted) == len(desired) and all(
                a == b for a, b in zip(persisted, desired)
            )
        return Counter(persisted) == Counter(desired)

    def attach(
        self,
        scope: TransactionScope,
        product_id: int,
        kind: AssociationKind,
        names: list[str],
    ) -> int:
        """
        Insert join rows for a product that has none of this kind yet.

        Every name is resolved before the first insert.
        """
        session = scope.session
        ids = self.resolver.resolve_many(session, kind.reference_model, kind.name, names)
        for reference_id in ids:
            self.repo.add(session, kind, product_id, reference_id)
        return len(ids)

    def reconcile(
        self,
        scope: TransactionScope,
        product_id: int,
        kind: AssociationKind,
        desired: list[str],
    ) -> ReconcileResult:
        desired = self.normalize(kind, desired)
        session = scope.session

        persisted = self.repo.list_names(session, kind, product_id)
        if self.matches(persisted, desired):
            return ReconcileResult(kind=kind.name, changed=False)

        ids = self.resolver.resolve_many(session, kind.reference_model, kind.name, desired)
        deleted = self.repo.delete_for_product(session, kind, product_id)
        for reference_id in ids:
            self.repo.add(session, kind, product_id, reference_id)

        logger.info(
            "Product %s %s associations rewritten: %s -> %s",
            product_id, kind.name, persisted, desired,
        )
        return ReconcileResult(kind=kind.name, changed=True, deleted=deleted, inserted=len(ids))
