"""Record store contract shared by all backends."""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class Predicate:
    """Conjunction of field-equality clauses.

    A predicate built with :meth:`nothing` matches no row at all and is
    answered without querying the store.
    """

    clauses: tuple[tuple[str, Any], ...] = ()
    matches_nothing: bool = False

    @classmethod
    def where(cls, **equalities: Any) -> "Predicate":
        """Build a predicate from keyword equalities."""
        return cls(clauses=tuple(equalities.items()))

    @classmethod
    def nothing(cls) -> "Predicate":
        """Predicate that matches no row."""
        return cls(matches_nothing=True)

    def and_(self, field_name: str, value: Any) -> "Predicate":
        """Return a new predicate with one more equality clause."""
        return Predicate(
            clauses=self.clauses + ((field_name, value),),
            matches_nothing=self.matches_nothing,
        )

    def fields(self) -> list[str]:
        """Return the constrained field names in clause order."""
        return [name for name, _ in self.clauses]

    def matches(self, row: dict[str, Any]) -> bool:
        """Evaluate the predicate against an in-memory row."""
        if self.matches_nothing:
            return False
        return all(row.get(name) == value for name, value in self.clauses)


class RecordStore(Protocol):
    """Table-oriented store with single-row writes.

    Every method raises :class:`~ccb_ops.exceptions.StoreError` on failure;
    update and delete of an unknown id raise
    :class:`~ccb_ops.exceptions.RecordNotFoundError`.
    """

    def select(
        self,
        table: str,
        predicate: Predicate,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        ...

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        ...

    def update(self, table: str, row_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        ...

    def delete(self, table: str, row_id: str) -> None:
        ...
