"""Record stores for CCB operations, profiles and roles."""

from ccb_ops.store.base import Predicate, RecordStore
from ccb_ops.store.memory import InMemoryRecordStore
from ccb_ops.store.postgres import PostgresRecordStore

__all__ = ["InMemoryRecordStore", "PostgresRecordStore", "Predicate", "RecordStore"]
