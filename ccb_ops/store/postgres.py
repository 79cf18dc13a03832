"""PostgreSQL record store."""

import logging
from typing import Any

from ccb_ops.exceptions import RecordNotFoundError, StoreError
from ccb_ops.serialization import serialize_column
from ccb_ops.store.base import Predicate

logger = logging.getLogger(__name__)


class PostgresRecordStore:
    """Record store backed by PostgreSQL through psycopg 3.

    Each write runs in its own transaction and is committed before
    returning; a failed statement is rolled back and surfaced as
    :class:`StoreError`.
    """

    def __init__(self, connection_string: str) -> None:
        """Initialize PostgreSQL store.

        Parameters
        ----------
        connection_string : str
            PostgreSQL connection string.
        """
        import psycopg
        from psycopg import sql
        from psycopg.rows import dict_row

        self._psycopg = psycopg
        self._sql = sql
        try:
            self.conn = psycopg.connect(connection_string, row_factory=dict_row)
        except psycopg.Error as e:
            raise StoreError(f"Could not connect to PostgreSQL: {e}") from e

    def _execute(self, query: Any, params: list[Any]) -> tuple[list[dict[str, Any]], int]:
        try:
            with self.conn.cursor() as cur:
                cur.execute(query, params)
                rows = cur.fetchall() if cur.description else []
                rowcount = cur.rowcount
            self.conn.commit()
        except self._psycopg.Error as e:
            self.conn.rollback()
            logger.error("Store statement failed: %s", e)
            raise StoreError(str(e)) from e
        return rows, rowcount

    def _where(self, predicate: Predicate) -> tuple[Any, list[Any]]:
        sql = self._sql
        if not predicate.clauses:
            return sql.SQL(""), []
        conditions = sql.SQL(" AND ").join(
            sql.SQL("{} = %s").format(sql.Identifier(name)) for name in predicate.fields()
        )
        params = [serialize_column(value) for _, value in predicate.clauses]
        return sql.SQL(" WHERE ") + conditions, params

    def select(
        self,
        table: str,
        predicate: Predicate,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """Return the rows matching ``predicate``."""
        if predicate.matches_nothing:
            return []
        sql = self._sql
        where, params = self._where(predicate)
        query = sql.SQL("SELECT * FROM {}").format(sql.Identifier(table)) + where
        if order_by is not None:
            direction = sql.SQL(" DESC") if descending else sql.SQL(" ASC")
            query = query + sql.SQL(" ORDER BY {}").format(sql.Identifier(order_by)) + direction
        rows, _ = self._execute(query, params)
        return rows

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored."""
        sql = self._sql
        columns = list(row)
        query = sql.SQL("INSERT INTO {} ({}) VALUES ({}) RETURNING *").format(
            sql.Identifier(table),
            sql.SQL(", ").join(sql.Identifier(c) for c in columns),
            sql.SQL(", ").join(sql.Placeholder() for _ in columns),
        )
        rows, _ = self._execute(query, [serialize_column(row[c]) for c in columns])
        logger.info("Inserted row into %s", table)
        return rows[0]

    def update(self, table: str, row_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        """Update one row by id and return it as stored."""
        sql = self._sql
        columns = [c for c in patch if c not in ("id", "created_at")]
        query = sql.SQL("UPDATE {} SET {} WHERE {} = %s RETURNING *").format(
            sql.Identifier(table),
            sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(c)) for c in columns
            ),
            sql.Identifier("id"),
        )
        params = [serialize_column(patch[c]) for c in columns] + [row_id]
        rows, _ = self._execute(query, params)
        if not rows:
            raise RecordNotFoundError(f"Row {row_id} not found in {table}")
        logger.info("Updated row %s in %s", row_id, table)
        return rows[0]

    def delete(self, table: str, row_id: str) -> None:
        """Delete one row by id."""
        sql = self._sql
        query = sql.SQL("DELETE FROM {} WHERE {} = %s").format(
            sql.Identifier(table), sql.Identifier("id")
        )
        _, rowcount = self._execute(query, [row_id])
        if rowcount == 0:
            raise RecordNotFoundError(f"Row {row_id} not found in {table}")
        logger.info("Deleted row %s from %s", row_id, table)

    def close(self) -> None:
        """Close the connection."""
        self.conn.close()
