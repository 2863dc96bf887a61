# This file implements the soft-delete CRUD pattern shared by every website entity.
# It exists so list, lookup, insert, update, and delete SQL is written once and parameterized per table.
# Writes only touch columns on an explicit allowlist and always refresh `updated_at`.
# Entity services subclass the repository when they need joins or a different row shape.

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from clinic_site.api.db_access import (
    DatabaseClient,
    MutationResult,
    TransactionExecutor,
    validate_identifier,
)

Executor = DatabaseClient | TransactionExecutor


@dataclass(frozen=True)
class EntityTable:
    """Table name, key, writable columns, and list behavior for one entity."""

    name: str
    columns: tuple[str, ...]
    id_column: str = "id"
    order_by: str = "created_at DESC"
    list_limit: int | None = None
    read_columns: tuple[str, ...] = field(default=("created_at", "updated_at", "deleted_at"))

    def __post_init__(self) -> None:
        validate_identifier(self.name)
        validate_identifier(self.id_column)
        for column in (*self.columns, *self.read_columns):
            validate_identifier(column)

    @property
    def select_columns(self) -> str:
        return ", ".join((self.id_column, *self.columns, *self.read_columns))


class SoftDeleteRepository:
    """CRUD over one table whose rows are retired by stamping `deleted_at`."""

    alias: str | None = None

    def __init__(self, *, db: DatabaseClient, table: EntityTable) -> None:
        self.db = db
        self.table = table

    def _select_sql(self) -> str:
        return f"SELECT {self.table.select_columns} FROM {self.table.name}"

    def _ref(self, column: str) -> str:
        return f"{self.alias or self.table.name}.{column}"

    def _shape(self, row: dict[str, Any]) -> dict[str, Any]:
        return row

    def list_active(self) -> list[dict[str, Any]]:
        query = (
            f"{self._select_sql()} WHERE {self._ref('deleted_at')} IS NULL "
            f"ORDER BY {self.table.order_by}"
        )
        if self.table.list_limit is not None:
            query += f" LIMIT {int(self.table.list_limit)}"
        return [self._shape(row) for row in self.db.fetch_all(query)]

    def get_by_id(
        self,
        record_id: int,
        *,
        include_deleted: bool = False,
        executor: Executor | None = None,
    ) -> dict[str, Any] | None:
        query = f"{self._select_sql()} WHERE {self._ref(self.table.id_column)} = :record_id"
        if not include_deleted:
            query += f" AND {self._ref('deleted_at')} IS NULL"
        row = (executor or self.db).fetch_one(query, {"record_id": record_id})
        return self._shape(row) if row is not None else None

    def find_active_by(
        self,
        column: str,
        value: Any,
        *,
        exclude_id: int | None = None,
    ) -> dict[str, Any] | None:
        """First non-deleted row whose `column` equals `value`, optionally skipping one id."""

        column = self._writable(column)
        query = (
            f"{self._select_sql()} WHERE {self._ref(column)} = :value "
            f"AND {self._ref('deleted_at')} IS NULL"
        )
        params: dict[str, Any] = {"value": value}
        if exclude_id is not None:
            query += f" AND {self._ref(self.table.id_column)} <> :exclude_id"
            params["exclude_id"] = exclude_id
        row = self.db.fetch_one(query + " LIMIT 1", params)
        return self._shape(row) if row is not None else None

    def insert(self, values: Mapping[str, Any], *, executor: Executor | None = None) -> int:
        """Insert one row and return its generated id."""

        columns = [self._writable(column) for column in values]
        placeholders = ", ".join(f":{column}" for column in columns)
        query = (
            f"INSERT INTO {self.table.name} ({', '.join(columns)}) "
            f"VALUES ({placeholders}) RETURNING {self.table.id_column}"
        )
        result = (executor or self.db).execute(query, dict(values))
        if result.inserted_id is None:
            raise RuntimeError(f"Insert into {self.table.name} returned no id.")
        return result.inserted_id

    def update_columns(
        self,
        record_id: int,
        values: Mapping[str, Any],
        *,
        executor: Executor | None = None,
    ) -> int:
        """Write the given allowlisted columns plus `updated_at`; returns affected rows."""

        assignments = [f"{self._writable(column)} = :{column}" for column in values]
        assignments.append("updated_at = CURRENT_TIMESTAMP")
        query = (
            f"UPDATE {self.table.name} SET {', '.join(assignments)} "
            f"WHERE {self.table.id_column} = :record_id AND deleted_at IS NULL"
        )
        params = dict(values)
        params["record_id"] = record_id
        result: MutationResult = (executor or self.db).execute(query, params)
        return result.rowcount

    def soft_delete(self, record_id: int, *, executor: Executor | None = None) -> bool:
        query = (
            f"UPDATE {self.table.name} "
            "SET deleted_at = CURRENT_TIMESTAMP, updated_at = CURRENT_TIMESTAMP "
            f"WHERE {self.table.id_column} = :record_id AND deleted_at IS NULL"
        )
        result = (executor or self.db).execute(query, {"record_id": record_id})
        return result.rowcount > 0

    def merge_with_stored(
        self, stored: Mapping[str, Any], changes: Mapping[str, Any], columns: Iterable[str]
    ) -> dict[str, Any]:
        """Fill omitted or null fields of `changes` from the stored row."""

        merged: dict[str, Any] = {}
        for column in columns:
            value = changes.get(column)
            merged[column] = stored.get(column) if value is None else value
        return merged

    def _writable(self, column: str) -> str:
        if column not in self.table.columns:
            raise ValueError(f"Column {column!r} is not writable on {self.table.name}.")
        return column
