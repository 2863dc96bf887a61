# This file tests FAQ endpoints against a throwaway SQLite database.
# It exists to confirm FAQ create, partial update, ordering, and delete contracts.

from __future__ import annotations

from pathlib import Path

from tests.api.support import (
    api_test_client,
    auth_headers,
    build_services,
    build_sqlite_client,
    build_test_config,
)


def test_faq_round_trip_and_partial_update(tmp_path: Path) -> None:
    config = build_test_config(media_root=tmp_path)
    db = build_sqlite_client(tmp_path)
    faq_service = build_services(config=config, db=db)["faq_service"]
    headers = auth_headers(config)

    with api_test_client(config=config, faq_service=faq_service) as client:
        created = client.post(
            "/api/faqs",
            json={"faq_question": "Do you accept walk-ins?", "faq_answer": "Yes, until 6pm."},
            headers=headers,
        )
        faq_id = created.json()["data"]["faq"]["id"]
        fetched = client.get(f"/api/faqs/{faq_id}")
        updated = client.patch(
            f"/api/faqs/{faq_id}", json={"faq_answer": "Yes, until 8pm."}, headers=headers
        )

    assert created.status_code == 201
    assert created.json()["message"] == "FAQ created successfully."
    assert fetched.json()["data"]["faq"]["faq_question"] == "Do you accept walk-ins?"
    assert updated.status_code == 200
    faq = updated.json()["data"]["faq"]
    assert faq["faq_question"] == "Do you accept walk-ins?"
    assert faq["faq_answer"] == "Yes, until 8pm."


def test_faqs_are_listed_newest_first_without_deleted(tmp_path: Path) -> None:
    config = build_test_config(media_root=tmp_path)
    db = build_sqlite_client(tmp_path)
    faq_service = build_services(config=config, db=db)["faq_service"]
    headers = auth_headers(config)
    db.execute(
        "INSERT INTO faq (faq_question, faq_answer, created_at) VALUES "
        "('Old?', 'Old.', '2024-01-01 00:00:00'), "
        "('New?', 'New.', '2025-01-01 00:00:00'), "
        "('Gone?', 'Gone.', '2025-06-01 00:00:00')"
    )
    gone_id = db.fetch_scalar("SELECT id FROM faq WHERE faq_question = 'Gone?'")

    with api_test_client(config=config, faq_service=faq_service) as client:
        client.delete(f"/api/faqs/{gone_id}", headers=headers)
        listing = client.get("/api/faqs")

    questions = [row["faq_question"] for row in listing.json()["data"]["faqs"]]
    assert questions == ["New?", "Old?"]


def test_faq_validation_and_not_found(tmp_path: Path) -> None:
    config = build_test_config(media_root=tmp_path)
    db = build_sqlite_client(tmp_path)
    faq_service = build_services(config=config, db=db)["faq_service"]
    headers = auth_headers(config)

    with api_test_client(config=config, faq_service=faq_service) as client:
        invalid = client.post("/api/faqs", json={"faq_question": ""}, headers=headers)
        no_body = client.post("/api/faqs", headers=headers)
        missing = client.get("/api/faqs/42")
        bad_id = client.delete("/api/faqs/-1", headers=headers)

    assert invalid.status_code == 400
    assert invalid.json()["message"] == "FAQ question is required. FAQ answer is required."
    assert no_body.status_code == 400
    assert no_body.json()["message"] == "Request body is required."
    assert missing.status_code == 404
    assert missing.json()["message"] == "The FAQ you are looking for was not found."
    assert bad_id.status_code == 400
    assert bad_id.json()["message"] == "FAQ ID must be a positive integer."


def test_ids_beyond_integer_range_are_rejected_not_failed(tmp_path: Path) -> None:
    config = build_test_config(media_root=tmp_path)
    services = build_services(config=config, db=build_sqlite_client(tmp_path))
    huge_id = "99999999999999999999"

    with api_test_client(
        config=config,
        faq_service=services["faq_service"],
        department_service=services["department_service"],
    ) as client:
        fetched = client.get(f"/api/departments/{huge_id}")
        deleted = client.delete(f"/api/faqs/{huge_id}", headers=auth_headers(config))

    assert fetched.status_code == 400
    assert fetched.json()["message"] == "Department ID must be a positive integer."
    assert deleted.status_code == 400
    assert deleted.json()["message"] == "FAQ ID must be a positive integer."
