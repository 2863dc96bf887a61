# This file implements FAQ storage on top of the shared soft-delete repository.
# It exists so routers can manage question and answer pairs without embedding SQL.
# Lists are newest first and only include rows that have not been soft-deleted.
# Updates keep stored values for any field the client leaves out.

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from clinic_site.api.db_access import DatabaseClient
from clinic_site.api.repository import EntityTable, SoftDeleteRepository

LOGGER = logging.getLogger("faq")

FAQ_TABLE = EntityTable(
    name="faq",
    columns=("faq_question", "faq_answer"),
    order_by="created_at DESC, id DESC",
)


class FaqService(SoftDeleteRepository):
    """FAQ CRUD."""

    def __init__(self, *, db: DatabaseClient) -> None:
        super().__init__(db=db, table=FAQ_TABLE)

    def get_faqs(self) -> list[dict[str, Any]]:
        try:
            return self.list_active()
        except SQLAlchemyError:
            LOGGER.error("Error while retrieving FAQs", exc_info=True)
            raise

    def get_faq(self, faq_id: int) -> dict[str, Any] | None:
        return self.get_by_id(faq_id)

    def create_faq(self, *, faq_question: str, faq_answer: str) -> dict[str, Any]:
        try:
            faq_id = self.insert({"faq_question": faq_question, "faq_answer": faq_answer})
        except SQLAlchemyError:
            LOGGER.error("Error while creating FAQ", exc_info=True)
            raise
        created = self.get_by_id(faq_id)
        if created is None:
            raise RuntimeError(f"FAQ {faq_id} vanished after insert.")
        return created

    def update_faq(
        self,
        faq_id: int,
        *,
        faq_question: str | None = None,
        faq_answer: str | None = None,
    ) -> dict[str, Any] | None:
        stored = self.get_by_id(faq_id)
        if stored is None:
            return None
        values = self.merge_with_stored(
            stored,
            {"faq_question": faq_question, "faq_answer": faq_answer},
            self.table.columns,
        )
        try:
            if self.update_columns(faq_id, values) == 0:
                return None
        except SQLAlchemyError:
            LOGGER.error("Error while updating FAQ id=%s", faq_id, exc_info=True)
            raise
        return self.get_by_id(faq_id)

    def delete_faq(self, faq_id: int) -> bool:
        try:
            return self.soft_delete(faq_id)
        except SQLAlchemyError:
            LOGGER.error("Error while deleting FAQ id=%s", faq_id, exc_info=True)
            raise
