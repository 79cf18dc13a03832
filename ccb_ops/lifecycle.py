"""Create, update, delete and read CCB operations."""

import logging
from dataclasses import dataclass

from ccb_ops.exceptions import RecordDecodeError, SavedRecordDecodeError
from ccb_ops.models.enums import OperationStatus
from ccb_ops.models.actor import Actor
from ccb_ops.models.operation import OperationInput, OperationRecord, validate_operation_input
from ccb_ops.store.base import Predicate, RecordStore
from ccb_ops.visibility import ViewFilter, base_filter, scope_query

logger = logging.getLogger(__name__)

# Statuses counted as "under review" in the dashboard stats
IN_REVIEW_STATUSES = frozenset({OperationStatus.PENDENTE.value, OperationStatus.EM_ANALISE.value})


@dataclass
class OperationStats:
    """Dashboard counters over the operations an actor may see."""

    total: int = 0
    aprovados: int = 0
    pendentes: int = 0
    pendencias: int = 0


class OperationController:
    """Lifecycle of CCB operations against an injected record store.

    Every write validates its input first; a :class:`ValidationError`
    means the store was never called. Store failures propagate as
    :class:`StoreError`. A row written but unreadable raises
    :class:`SavedRecordDecodeError`. There is no version check on update,
    so the last write wins.

    Parameters
    ----------
    store : RecordStore
        Record store holding the operations table.
    table : str
        Operations table name.
    """

    ORDER_BY = "created_at"

    def __init__(self, store: RecordStore, table: str = "ccb_operations") -> None:
        self.store = store
        self.table = table

    def create(self, actor_id: str, form: OperationInput) -> OperationRecord:
        """Validate ``form`` and insert it owned by ``actor_id``."""
        payload = validate_operation_input(form)
        row = payload.to_row()
        row["user_id"] = actor_id
        stored = self.store.insert(self.table, row)
        record = self._read_back(stored)
        logger.info("Created operation %s (CCB %s, PA %s)", record.id, payload.numero_ccb, payload.pa)
        return record

    def update(self, operation_id: str, form: OperationInput) -> OperationRecord:
        """Validate ``form`` and overwrite the operation's editable fields."""
        payload = validate_operation_input(form)
        stored = self.store.update(self.table, operation_id, payload.to_row())
        record = self._read_back(stored)
        logger.info("Updated operation %s (status %s)", operation_id, payload.status.value)
        return record

    def _read_back(self, stored: dict) -> OperationRecord:
        """Decode the row a write returned.

        The write is already committed when decoding fails, which is
        reported as :class:`SavedRecordDecodeError`.
        """
        try:
            return OperationRecord.from_row(stored)
        except RecordDecodeError as e:
            logger.error("Operation %s was saved but could not be read back: %s", stored.get("id"), e)
            raise SavedRecordDecodeError(str(e), row_id=stored.get("id")) from e

    def delete(self, operation_id: str) -> None:
        """Hard-delete one operation."""
        self.store.delete(self.table, operation_id)
        logger.info("Deleted operation %s", operation_id)

    def get(self, operation_id: str) -> OperationRecord | None:
        """Return one operation by id, or None."""
        rows = self.store.select(self.table, Predicate.where(id=operation_id))
        return OperationRecord.from_row(rows[0]) if rows else None

    def list_operations(self, actor: Actor, view: ViewFilter | str) -> list[OperationRecord]:
        """Return the operations of a view visible to ``actor``, newest first.

        Rows holding values outside the known vocabulary are logged and
        left out.
        """
        predicate = scope_query(actor, base_filter(view))
        if predicate.matches_nothing:
            return []
        rows = self.store.select(self.table, predicate, order_by=self.ORDER_BY, descending=True)

        records: list[OperationRecord] = []
        for row in rows:
            try:
                records.append(OperationRecord.from_row(row))
            except RecordDecodeError as e:
                logger.warning("Skipping undecodable operation: %s", e)
        return records

    def stats(self, actor: Actor) -> OperationStats:
        """Count the operations visible to ``actor``.

        The scoped rows are fetched again on every call.
        """
        predicate = scope_query(actor, Predicate(), aggregate=True)
        rows = self.store.select(self.table, predicate)
        return OperationStats(
            total=len(rows),
            aprovados=sum(1 for r in rows if r.get("status") == OperationStatus.APROVADO),
            pendentes=sum(1 for r in rows if r.get("status") in IN_REVIEW_STATUSES),
            pendencias=sum(1 for r in rows if r.get("pendencia")),
        )
