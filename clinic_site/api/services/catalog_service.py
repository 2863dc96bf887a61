# This file implements the medical service catalog on top of the shared soft-delete repository.
# It exists so routers can manage the services shown on the website without embedding SQL.
# Updates are typed patches: only supplied, allowlisted columns are written, plus `updated_at`.
# Duplicate titles among active rows are reported by the database and surfaced as conflicts.

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from clinic_site.api.db_access import DatabaseClient, is_unique_violation
from clinic_site.api.error_handlers import ConflictError
from clinic_site.api.repository import EntityTable, SoftDeleteRepository

LOGGER = logging.getLogger("service_catalog")

DUPLICATE_TITLE_MESSAGE = (
    "The provided data conflicts with an existing service (e.g., duplicate title)."
)

SERVICE_TABLE = EntityTable(
    name="service",
    columns=("icon_class_name", "service_title", "service_subtitle", "service_description"),
    order_by="created_at DESC, id DESC",
)


class ServiceCatalogService(SoftDeleteRepository):
    """Service catalog CRUD."""

    def __init__(self, *, db: DatabaseClient) -> None:
        super().__init__(db=db, table=SERVICE_TABLE)

    def get_services(self) -> list[dict[str, Any]]:
        try:
            return self.list_active()
        except SQLAlchemyError:
            LOGGER.error("Error while retrieving services", exc_info=True)
            raise

    def get_service(self, service_id: int) -> dict[str, Any] | None:
        return self.get_by_id(service_id)

    def create_service(
        self,
        *,
        icon_class_name: str,
        service_title: str,
        service_subtitle: str,
        service_description: str,
    ) -> dict[str, Any]:
        try:
            service_id = self.insert(
                {
                    "icon_class_name": icon_class_name,
                    "service_title": service_title,
                    "service_subtitle": service_subtitle,
                    "service_description": service_description,
                }
            )
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise ConflictError(DUPLICATE_TITLE_MESSAGE) from exc
            LOGGER.error("Error while creating service", exc_info=True)
            raise
        created = self.get_by_id(service_id)
        if created is None:
            raise RuntimeError(f"Service {service_id} vanished after insert.")
        return created

    def update_service(self, service_id: int, patch: Mapping[str, Any]) -> dict[str, Any] | None:
        """Apply a partial update; an empty patch only refreshes `updated_at`."""

        try:
            updated_rows = self.update_columns(service_id, patch)
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise ConflictError(DUPLICATE_TITLE_MESSAGE) from exc
            LOGGER.error("Error while updating service id=%s", service_id, exc_info=True)
            raise
        if updated_rows == 0:
            return None
        return self.get_by_id(service_id)

    def delete_service(self, service_id: int) -> bool:
        try:
            return self.soft_delete(service_id)
        except SQLAlchemyError:
            LOGGER.error("Error while deleting service id=%s", service_id, exc_info=True)
            raise
