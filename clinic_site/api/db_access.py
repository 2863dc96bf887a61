# This file wraps database access so API services can run parameterized SQL safely.
# It exists to keep SQL execution details out of router code and make testing easier.
# The client offers one-shot queries plus a transactional scope that commits or rolls back as a unit.
# Keeping this layer small makes query behavior easier to audit and troubleshoot.

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
_READ_PREFIXES = ("SELECT", "WITH")

LOGGER = logging.getLogger("db")

T = TypeVar("T")


def validate_identifier(identifier: str) -> str:
    """Reject anything that is not a plain SQL identifier."""

    if not _IDENTIFIER_RE.match(identifier):
        raise ValueError(f"Unsafe SQL identifier: {identifier!r}")
    return identifier


def is_unique_violation(exc: IntegrityError) -> bool:
    """Return True when an integrity error was raised by a unique constraint or index."""

    original = getattr(exc, "orig", None)
    if getattr(original, "pgcode", None) == "23505":
        return True
    message = str(original if original is not None else exc).lower()
    return "unique" in message or "duplicate" in message


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a write statement."""

    rowcount: int
    inserted_id: int | None = None


def _mutation_result(result: CursorResult) -> MutationResult:
    if result.returns_rows:
        rows = result.all()
        inserted_id = int(rows[0][0]) if rows and rows[0][0] is not None else None
        return MutationResult(rowcount=len(rows), inserted_id=inserted_id)
    return MutationResult(rowcount=max(result.rowcount, 0))


class TransactionExecutor:
    """Query surface bound to one open transaction."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    def query(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]] | MutationResult:
        result = self._connection.execute(text(query), dict(params or {}))
        if result.returns_rows and query.lstrip().upper().startswith(_READ_PREFIXES):
            return [dict(row) for row in result.mappings().all()]
        return _mutation_result(result)

    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        rows = self._connection.execute(text(query), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(self, query: str, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        row = self._connection.execute(text(query), dict(params or {})).mappings().first()
        return dict(row) if row is not None else None

    def execute(self, query: str, params: Mapping[str, Any] | None = None) -> MutationResult:
        return _mutation_result(self._connection.execute(text(query), dict(params or {})))


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for API read/write access."""

    def __init__(self, *, database_url: str) -> None:
        self._engine: Engine = create_engine(database_url, pool_pre_ping=True, future=True)

    @property
    def engine(self) -> Engine:
        return self._engine

    def can_connect(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def table_exists(self, table_name: str) -> bool:
        validate_identifier(table_name)
        return inspect(self._engine).has_table(table_name)

    def query(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]] | MutationResult:
        with self._engine.begin() as connection:
            return TransactionExecutor(connection).query(query, params)

    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        with self._engine.connect() as connection:
            rows = connection.execute(text(query), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(self, query: str, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        with self._engine.connect() as connection:
            row = connection.execute(text(query), dict(params or {})).mappings().first()
        return dict(row) if row is not None else None

    def fetch_scalar(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        with self._engine.connect() as connection:
            return connection.execute(text(query), dict(params or {})).scalar_one()

    def execute(self, query: str, params: Mapping[str, Any] | None = None) -> MutationResult:
        with self._engine.begin() as connection:
            return TransactionExecutor(connection).execute(query, params)

    def use_transaction(self, work: Callable[[TransactionExecutor], T]) -> T:
        """Run `work` in one transaction: commit on return, roll back and re-raise on error."""

        try:
            with self._engine.begin() as connection:
                return work(TransactionExecutor(connection))
        except Exception:
            LOGGER.warning("Transaction rolled back", exc_info=True)
            raise
