# This file implements department storage on top of the shared soft-delete repository.
# It exists so routers can list, create, update, and retire departments without embedding SQL.
# Department names are unique among non-deleted rows: checked up front for a clear 409,
# and backed by a partial unique index so concurrent duplicates still fail as conflicts.

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from clinic_site.api.db_access import DatabaseClient, is_unique_violation
from clinic_site.api.error_handlers import ConflictError
from clinic_site.api.repository import EntityTable, SoftDeleteRepository

LOGGER = logging.getLogger("department")

DUPLICATE_NAME_MESSAGE = "Department name already exists."

DEPARTMENT_TABLE = EntityTable(
    name="department",
    columns=("department_name", "department_description"),
    order_by="department_name ASC",
)


class DepartmentService(SoftDeleteRepository):
    """Department CRUD with name uniqueness among active rows."""

    def __init__(self, *, db: DatabaseClient) -> None:
        super().__init__(db=db, table=DEPARTMENT_TABLE)

    def get_departments(self) -> list[dict[str, Any]]:
        try:
            return self.list_active()
        except SQLAlchemyError:
            LOGGER.error("Error while retrieving departments", exc_info=True)
            raise

    def get_department(self, department_id: int) -> dict[str, Any] | None:
        # Soft-deleted rows are returned here as well; callers that need only
        # active departments filter on `deleted_at`.
        try:
            return self.get_by_id(department_id, include_deleted=True)
        except SQLAlchemyError:
            LOGGER.error("Error while retrieving department id=%s", department_id, exc_info=True)
            raise

    def create_department(self, *, department_name: str, department_description: str) -> dict[str, Any]:
        if self.find_active_by("department_name", department_name) is not None:
            raise ConflictError(DUPLICATE_NAME_MESSAGE)
        try:
            department_id = self.insert(
                {
                    "department_name": department_name,
                    "department_description": department_description,
                }
            )
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise ConflictError(DUPLICATE_NAME_MESSAGE) from exc
            LOGGER.error("Error while creating department", exc_info=True)
            raise
        created = self.get_by_id(department_id)
        if created is None:
            raise RuntimeError(f"Department {department_id} vanished after insert.")
        return created

    def update_department(
        self,
        department_id: int,
        *,
        department_name: str | None = None,
        department_description: str | None = None,
    ) -> dict[str, Any] | None:
        stored = self.get_by_id(department_id)
        if stored is None:
            return None
        values = self.merge_with_stored(
            stored,
            {"department_name": department_name, "department_description": department_description},
            self.table.columns,
        )
        duplicate = self.find_active_by(
            "department_name", values["department_name"], exclude_id=department_id
        )
        if duplicate is not None:
            raise ConflictError(DUPLICATE_NAME_MESSAGE)
        try:
            updated_rows = self.update_columns(department_id, values)
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise ConflictError(DUPLICATE_NAME_MESSAGE) from exc
            LOGGER.error("Error while updating department id=%s", department_id, exc_info=True)
            raise
        if updated_rows == 0:
            return None
        return self.get_by_id(department_id)

    def delete_department(self, department_id: int) -> bool:
        try:
            return self.soft_delete(department_id)
        except SQLAlchemyError:
            LOGGER.error("Error while deleting department id=%s", department_id, exc_info=True)
            raise
