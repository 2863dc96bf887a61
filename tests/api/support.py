# This file provides shared helpers for API endpoint tests.
# It exists so tests can run endpoints against a throwaway SQLite database or simple fakes.
# The helpers build consistent config objects, signed tokens, and scoped TestClient contexts.
# Centralized test wiring keeps API tests small and focused on behavior.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from fastapi.testclient import TestClient

from clinic_site.api.api_config import ApiConfig
from clinic_site.api.app import app
from clinic_site.api.auth import create_access_token
from clinic_site.api.db_access import DatabaseClient
from clinic_site.api.dependencies import (
    get_blog_service,
    get_config,
    get_database_client,
    get_department_service,
    get_faq_service,
    get_service_catalog_service,
    get_tag_service,
    get_testimonial_service,
)
from clinic_site.api.services.blog_service import BlogService
from clinic_site.api.services.catalog_service import ServiceCatalogService
from clinic_site.api.services.department_service import DepartmentService
from clinic_site.api.services.faq_service import FaqService
from clinic_site.api.services.tag_service import TagService
from clinic_site.api.services.testimonial_service import TestimonialService
from clinic_site.common.schema import create_schema


def build_test_config(*, media_root: Path | str = ".") -> ApiConfig:
    """Create deterministic API config for tests."""

    return ApiConfig(
        api_name="Test Clinic API",
        api_prefix="/api",
        app_version="0.1.0",
        host="0.0.0.0",
        port=8000,
        environment="test",
        database_url="sqlite://",
        allowed_origins=[],
        jwt_secret_key="test-secret-key",
        jwt_algorithm="HS256",
        access_token_expire_minutes=30,
        media_root=str(media_root),
        upload_dir="uploads",
        max_upload_size=1024,
        allowed_image_extensions=["jpg", "jpeg", "png", "gif", "webp"],
    )


def build_sqlite_client(directory: Path) -> DatabaseClient:
    """File-backed SQLite database with the full schema created."""

    db = DatabaseClient(database_url=f"sqlite:///{directory / 'test.db'}")
    create_schema(db.engine)
    return db


def seed_user(
    db: DatabaseClient, *, email: str = "author@example.com", role: str = "main_admin"
) -> int:
    result = db.execute(
        "INSERT INTO users (email, role) VALUES (:email, :role) RETURNING id",
        {"email": email, "role": role},
    )
    assert result.inserted_id is not None
    db.execute(
        "INSERT INTO user_profile (user_id, first_name, last_name, user_name, user_color) "
        "VALUES (:user_id, 'Ada', 'Lovelace', 'ada', '#336699')",
        {"user_id": result.inserted_id},
    )
    return result.inserted_id


def seed_image(db: DatabaseClient, *, image_name: str = "cover.png") -> int:
    result = db.execute(
        "INSERT INTO image_gallery (image_name, image_url, image_type) "
        "VALUES (:image_name, :image_url, 'image/png') RETURNING id",
        {"image_name": image_name, "image_url": f"/uploads/images/{image_name}"},
    )
    assert result.inserted_id is not None
    return result.inserted_id


def auth_headers(
    config: ApiConfig, *, user_id: int = 1, role: str = "main_admin"
) -> dict[str, str]:
    token = create_access_token(user_id=user_id, role=role, config=config)
    return {"Authorization": f"Bearer {token}"}


class FakeDBClient:
    """Simple fake DB dependency for health/readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = existing_tables

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        if not self._connected:
            return False
        return self._tables is None or table_name in self._tables


def build_services(*, config: ApiConfig, db: DatabaseClient) -> dict[str, Any]:
    """Real services wired to one database, keyed like `api_test_client` arguments."""

    return {
        "blog_service": BlogService(db=db),
        "tag_service": TagService(db=db),
        "department_service": DepartmentService(db=db),
        "faq_service": FaqService(db=db),
        "catalog_service": ServiceCatalogService(db=db),
        "testimonial_service": TestimonialService(config=config, db=db),
    }


def _provide(value: Any) -> Any:
    return lambda: value


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
    blog_service: Any | None = None,
    tag_service: Any | None = None,
    department_service: Any | None = None,
    faq_service: Any | None = None,
    catalog_service: Any | None = None,
    testimonial_service: Any | None = None,
    raise_server_exceptions: bool = True,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()
    overrides: dict[Any, Any] = {
        get_database_client: db_client,
        get_blog_service: blog_service,
        get_tag_service: tag_service,
        get_department_service: department_service,
        get_faq_service: faq_service,
        get_service_catalog_service: catalog_service,
        get_testimonial_service: testimonial_service,
    }

    app.dependency_overrides[get_config] = lambda: resolved_config
    for dependency, replacement in overrides.items():
        if replacement is not None:
            app.dependency_overrides[dependency] = _provide(replacement)

    try:
        with TestClient(app, raise_server_exceptions=raise_server_exceptions) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
