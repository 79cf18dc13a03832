"""In-memory record store."""

import copy
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ccb_ops.exceptions import RecordNotFoundError, StoreError
from ccb_ops.store.base import Predicate


@dataclass
class InMemoryRecordStore:
    """Record store keeping every table in process memory.

    Rows are copied on the way in and on the way out, so callers never hold
    a reference to stored state.
    """

    tables: dict[str, dict[str, dict[str, Any]]] = field(default_factory=dict)

    # Insertion counter, breaks created_at ties when ordering
    _sequence: dict[tuple[str, str], int] = field(default_factory=dict)

    def _table(self, table: str) -> dict[str, dict[str, Any]]:
        return self.tables.setdefault(table, {})

    def select(
        self,
        table: str,
        predicate: Predicate,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """Return copies of the rows matching ``predicate``."""
        if predicate.matches_nothing:
            return []
        rows = [row for row in self._table(table).values() if predicate.matches(row)]
        if order_by is not None:
            rows.sort(
                key=lambda r: (r.get(order_by) is not None, r.get(order_by), self._sequence[(table, r["id"])]),
                reverse=descending,
            )
        return [copy.deepcopy(row) for row in rows]

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert a row, assigning ``id`` and ``created_at`` when absent."""
        stored = copy.deepcopy(row)
        stored.setdefault("id", uuid.uuid4().hex)
        stored.setdefault("created_at", datetime.now(timezone.utc))

        rows = self._table(table)
        if stored["id"] in rows:
            raise StoreError(f"Duplicate id {stored['id']} in {table}")

        rows[stored["id"]] = stored
        self._sequence[(table, stored["id"])] = len(self._sequence)
        return copy.deepcopy(stored)

    def update(self, table: str, row_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        """Apply ``patch`` to one row. ``id`` and ``created_at`` are kept."""
        rows = self._table(table)
        if row_id not in rows:
            raise RecordNotFoundError(f"Row {row_id} not found in {table}")

        changes = {k: v for k, v in copy.deepcopy(patch).items() if k not in ("id", "created_at")}
        rows[row_id].update(changes)
        return copy.deepcopy(rows[row_id])

    def delete(self, table: str, row_id: str) -> None:
        """Remove one row."""
        rows = self._table(table)
        if row_id not in rows:
            raise RecordNotFoundError(f"Row {row_id} not found in {table}")
        del rows[row_id]

    def summary(self) -> dict[str, int]:
        """Return row counts per table."""
        return {name: len(rows) for name, rows in self.tables.items()}
