# This file implements blog tag lookups for the admin blog editor.
# It exists so tag pickers can search active tags without embedding SQL in routers.
# Results are alphabetical and capped so the picker stays responsive.

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from clinic_site.api.db_access import DatabaseClient
from clinic_site.api.repository import EntityTable, SoftDeleteRepository

LOGGER = logging.getLogger("blog")

TAG_TABLE = EntityTable(
    name="tag",
    columns=("name",),
    order_by="name ASC, id ASC",
    list_limit=50,
    read_columns=("created_at", "updated_at"),
)


class TagService(SoftDeleteRepository):
    """Read access to blog tags."""

    def __init__(self, *, db: DatabaseClient) -> None:
        super().__init__(db=db, table=TAG_TABLE)

    def get_tags(self, *, q: str | None = None) -> list[dict[str, Any]]:
        """Active tags in name order, optionally filtered by a name keyword."""

        query = f"{self._select_sql()} WHERE deleted_at IS NULL"
        params: dict[str, Any] = {"limit": self.table.list_limit}
        if q:
            query += " AND name LIKE :pattern"
            params["pattern"] = f"%{q}%"
        query += f" ORDER BY {self.table.order_by} LIMIT :limit"
        try:
            return self.db.fetch_all(query, params)
        except SQLAlchemyError:
            LOGGER.error("Error while retrieving tags q=%r", q, exc_info=True)
            raise
