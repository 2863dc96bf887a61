"""
Unit tests for the database access layer.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from pathlib import Path

import pytest
from sqlalchemy.exc import IntegrityError

from clinic_site.api.db_access import (
    DatabaseClient,
    MutationResult,
    TransactionExecutor,
    is_unique_violation,
    validate_identifier,
)
from tests.api.support import build_sqlite_client


def test_execute_returns_inserted_id_and_rowcount(tmp_path: Path) -> None:
    db = build_sqlite_client(tmp_path)

    inserted = db.execute("INSERT INTO tag (name) VALUES ('cardio') RETURNING id")
    updated = db.execute("UPDATE tag SET name = 'cardiology' WHERE id = :id", {"id": inserted.inserted_id})

    assert inserted.inserted_id == 1
    assert updated.rowcount == 1
    assert db.fetch_scalar("SELECT name FROM tag WHERE id = 1") == "cardiology"


def test_use_transaction_rolls_back_on_error(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    db = build_sqlite_client(tmp_path)

    def work(tx: TransactionExecutor) -> None:
        tx.execute("INSERT INTO tag (name) VALUES ('cardio')")
        raise RuntimeError("step failed")

    with pytest.raises(RuntimeError, match="step failed"):
        db.use_transaction(work)

    assert db.fetch_all("SELECT id FROM tag") == []
    assert "Transaction rolled back" in caplog.text


def test_use_transaction_commits_on_success(tmp_path: Path) -> None:
    db = build_sqlite_client(tmp_path)

    result = db.use_transaction(
        lambda tx: tx.execute("INSERT INTO tag (name) VALUES ('sleep') RETURNING id").inserted_id
    )

    assert result == 1
    assert db.fetch_one("SELECT name FROM tag WHERE id = 1") == {"name": "sleep"}


def test_unique_violation_detection(tmp_path: Path) -> None:
    db = build_sqlite_client(tmp_path)
    db.execute("INSERT INTO users (email, role) VALUES ('a@example.com', 'pr')")

    with pytest.raises(IntegrityError) as excinfo:
        db.execute("INSERT INTO users (email, role) VALUES ('a@example.com', 'pr')")

    assert is_unique_violation(excinfo.value)


def test_validate_identifier_rejects_injection() -> None:
    assert validate_identifier("blog_detail") == "blog_detail"
    with pytest.raises(ValueError):
        validate_identifier("blog; DROP TABLE users")


def test_can_connect_and_table_exists(tmp_path: Path) -> None:
    db = build_sqlite_client(tmp_path)

    assert db.can_connect() is True
    assert db.table_exists("testimonial") is True
    assert DatabaseClient(database_url="sqlite://").table_exists("testimonial") is False


def test_query_returns_rows_for_reads_and_results_for_writes(tmp_path: Path) -> None:
    db = build_sqlite_client(tmp_path)

    inserted = db.query("INSERT INTO tag (name) VALUES (:name) RETURNING id", {"name": "cardio"})
    updated = db.query("UPDATE tag SET name = 'cardiology' WHERE id = :id", {"id": 1})
    rows = db.query("SELECT id, name FROM tag ORDER BY id")
    with_rows = db.query("WITH named AS (SELECT name FROM tag) SELECT name FROM named")

    assert inserted == MutationResult(rowcount=1, inserted_id=1)
    assert updated == MutationResult(rowcount=1)
    assert rows == [{"id": 1, "name": "cardiology"}]
    assert with_rows == [{"name": "cardiology"}]


def test_transaction_query_shares_the_open_transaction(tmp_path: Path) -> None:
    db = build_sqlite_client(tmp_path)

    def work(tx: TransactionExecutor) -> list[dict[str, object]]:
        tx.query("INSERT INTO tag (name) VALUES ('sleep')")
        rows = tx.query("SELECT name FROM tag")
        assert isinstance(rows, list)
        return rows

    assert db.use_transaction(work) == [{"name": "sleep"}]
    assert db.fetch_scalar("SELECT COUNT(*) FROM tag") == 1
