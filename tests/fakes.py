# =============================================================================
# tests/fakes.py - In-Memory Supabase Stand-In
# =============================================================================
# Implements just enough of the supabase-py query builder for the queries
# lib/supabase_client.py issues:
#
#   client.table(name).select(cols).eq(col, val).order(col).limit(n).execute()
#   client.table(name).insert(row).execute()
#   client.table(name).delete().eq(col, val).execute()
#   client.table(name).delete().lt(col, val).execute()
#
# Unique constraints are enforced and reported with the Postgres error code
# 23505, like PostgREST does.
# =============================================================================

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any
from uuid import uuid4

DEFAULT_UNIQUE = {
    "users": [("username",)],
    "cities": [("name", "user_id")],
}


class FakeSupabase:
    """Holds the rows of every table and hands out query builders."""

    def __init__(self, unique: dict[str, list[tuple[str, ...]]] | None = None):
        self.tables: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.unique = DEFAULT_UNIQUE if unique is None else unique
        # Tables whose queries should fail as if the database were down
        self.failing: set[str] = set()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, name: str) -> list[dict[str, Any]]:
        return self.tables[name]


class FakeQuery:
    def __init__(self, db: FakeSupabase, table: str):
        self.db = db
        self.table = table
        self.operation = "select"
        self.columns = "*"
        self.payload: dict[str, Any] | None = None
        self.filters: list[tuple[str, str, Any]] = []
        self.order_by: tuple[str, bool] | None = None
        self.row_limit: int | None = None

    def select(self, columns: str = "*") -> FakeQuery:
        self.operation = "select"
        self.columns = columns
        return self

    def insert(self, data: dict[str, Any]) -> FakeQuery:
        self.operation = "insert"
        self.payload = data
        return self

    def delete(self) -> FakeQuery:
        self.operation = "delete"
        return self

    def eq(self, column: str, value: Any) -> FakeQuery:
        self.filters.append((column, "eq", value))
        return self

    def lt(self, column: str, value: Any) -> FakeQuery:
        self.filters.append((column, "lt", value))
        return self

    def order(self, column: str, desc: bool = False) -> FakeQuery:
        self.order_by = (column, desc)
        return self

    def limit(self, count: int) -> FakeQuery:
        self.row_limit = count
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        for column, op, value in self.filters:
            if op == "eq" and str(row.get(column)) != str(value):
                return False
            if op == "lt" and not _as_datetime(row.get(column)) < _as_datetime(value):
                return False
        return True

    def execute(self) -> SimpleNamespace:
        if self.table in self.db.failing:
            raise ConnectionError(f"could not connect to server while querying {self.table}")

        rows = self.db.tables[self.table]

        if self.operation == "insert":
            row = {
                "id": str(uuid4()),
                "created_at": datetime.now(timezone.utc).isoformat(),
                **self.payload,
            }
            for columns in self.db.unique.get(self.table, []):
                if any(all(existing.get(c) == row.get(c) for c in columns) for existing in rows):
                    raise RuntimeError(
                        f"duplicate key value violates unique constraint on {columns} (code 23505)"
                    )
            rows.append(row)
            return SimpleNamespace(data=[dict(row)])

        matched = [row for row in rows if self._matches(row)]

        if self.operation == "delete":
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda row: row.get(column) or "", reverse=desc)
        if self.row_limit is not None:
            matched = matched[:self.row_limit]

        if self.columns == "*":
            return SimpleNamespace(data=[dict(row) for row in matched])
        wanted = [c.strip() for c in self.columns.split(",")]
        return SimpleNamespace(data=[{c: row.get(c) for c in wanted} for row in matched])


def _as_datetime(value: Any) -> datetime:
    """Timestamp columns are the only ones compared with lt()."""
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
