# This file tests medical service catalog endpoints against a throwaway SQLite database.
# It exists to confirm that partial updates only write the fields a client sends.
# The tests also cover duplicate titles and soft-delete visibility.

from __future__ import annotations

from pathlib import Path
from typing import Any

from clinic_site.api.api_config import ApiConfig
from clinic_site.api.db_access import DatabaseClient
from tests.api.support import (
    api_test_client,
    auth_headers,
    build_services,
    build_sqlite_client,
    build_test_config,
)

SERVICE_BODY = {
    "icon_class_name": "fa-heart",
    "service_title": "Cardiology",
    "service_subtitle": "Heart care",
    "service_description": "Diagnosis and treatment of heart conditions.",
}


def _setup(tmp_path: Path) -> tuple[ApiConfig, DatabaseClient, dict[str, Any]]:
    config = build_test_config(media_root=tmp_path)
    db = build_sqlite_client(tmp_path)
    services = build_services(config=config, db=db)
    return config, db, {"config": config, "catalog_service": services["catalog_service"]}


def test_patch_service_changes_only_supplied_field(tmp_path: Path) -> None:
    config, db, kwargs = _setup(tmp_path)
    headers = auth_headers(config)
    with api_test_client(**kwargs) as client:
        created = client.post("/api/services", json=SERVICE_BODY, headers=headers)
        service_id = created.json()["data"]["service"]["id"]
        db.execute(
            "UPDATE service SET updated_at = '2020-01-01 00:00:00' WHERE id = :id",
            {"id": service_id},
        )
        before = client.get(f"/api/services/{service_id}").json()["data"]["service"]
        response = client.patch(
            f"/api/services/{service_id}",
            json={"service_title": "New Title"},
            headers=headers,
        )

    assert created.status_code == 201
    assert response.status_code == 200
    assert response.json()["message"] == "Service updated successfully."
    after = response.json()["data"]["service"]
    assert after["service_title"] == "New Title"
    assert after["updated_at"] != before["updated_at"]
    for field in ("id", "icon_class_name", "service_subtitle", "service_description", "created_at"):
        assert after[field] == before[field]


def test_empty_patch_only_refreshes_updated_at(tmp_path: Path) -> None:
    config, db, kwargs = _setup(tmp_path)
    headers = auth_headers(config)
    with api_test_client(**kwargs) as client:
        service_id = client.post("/api/services", json=SERVICE_BODY, headers=headers).json()[
            "data"
        ]["service"]["id"]
        db.execute(
            "UPDATE service SET updated_at = '2020-01-01 00:00:00' WHERE id = :id",
            {"id": service_id},
        )
        response = client.patch(f"/api/services/{service_id}", json={}, headers=headers)

    after = response.json()["data"]["service"]
    assert response.status_code == 200
    assert {key: after[key] for key in SERVICE_BODY} == SERVICE_BODY
    assert not after["updated_at"].startswith("2020-01-01")


def test_duplicate_service_title_is_conflict(tmp_path: Path) -> None:
    config, _, kwargs = _setup(tmp_path)
    headers = auth_headers(config)
    with api_test_client(**kwargs) as client:
        client.post("/api/services", json=SERVICE_BODY, headers=headers)
        duplicate = client.post("/api/services", json=SERVICE_BODY, headers=headers)
        other = client.post(
            "/api/services", json={**SERVICE_BODY, "service_title": "Oncology"}, headers=headers
        ).json()["data"]["service"]
        renamed = client.patch(
            f"/api/services/{other['id']}", json={"service_title": "Cardiology"}, headers=headers
        )

    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "Conflict"
    assert renamed.status_code == 409


def test_create_service_validation_messages(tmp_path: Path) -> None:
    config, _, kwargs = _setup(tmp_path)
    with api_test_client(**kwargs) as client:
        response = client.post(
            "/api/services",
            json={"icon_class_name": 7, "service_subtitle": "s" * 300},
            headers=auth_headers(config),
        )

    assert response.status_code == 400
    assert response.json()["message"] == (
        "Service icon must be a valid string. Service title is required. "
        "Subtitle cannot exceed 255 characters. Service description is required."
    )


def test_deleted_service_is_hidden(tmp_path: Path) -> None:
    config, _, kwargs = _setup(tmp_path)
    headers = auth_headers(config)
    with api_test_client(**kwargs) as client:
        service_id = client.post("/api/services", json=SERVICE_BODY, headers=headers).json()[
            "data"
        ]["service"]["id"]
        deleted = client.delete(f"/api/services/{service_id}", headers=headers)
        fetched = client.get(f"/api/services/{service_id}")
        patched = client.patch(
            f"/api/services/{service_id}", json={"service_title": "Back"}, headers=headers
        )
        listing = client.get("/api/services")
        deleted_again = client.delete(f"/api/services/{service_id}", headers=headers)

    assert deleted.status_code == 200
    assert deleted.json() == {"success": True, "message": "Service deleted successfully."}
    assert fetched.status_code == 404
    assert patched.status_code == 404
    assert listing.json()["data"]["services"] == []
    assert deleted_again.status_code == 404
