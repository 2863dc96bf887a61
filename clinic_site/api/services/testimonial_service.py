# This file implements testimonial storage and the lifecycle of each testifier's avatar file.
# It exists so routers can manage testimonials without coordinating SQL and file cleanup themselves.
# A stored avatar path owns exactly one file: replacing, removing, or deleting the record removes it.
# File cleanup is best-effort and never rolls back a database write that already succeeded.

from __future__ import annotations

import logging
import random
from typing import Any

from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError

from clinic_site.api.api_config import ApiConfig
from clinic_site.api.db_access import DatabaseClient
from clinic_site.api.repository import EntityTable, SoftDeleteRepository
from clinic_site.api.uploads import remove_file, save_image

LOGGER = logging.getLogger("testimonial")

TESTIMONIAL_TABLE = EntityTable(
    name="testimonial",
    columns=("testimonial_text", "full_name", "job_title", "testifier_avatar", "bg_color"),
    order_by="created_at DESC, id DESC",
)

_TEXT_COLUMNS = ("testimonial_text", "full_name", "job_title")


def random_bg_color() -> str:
    return f"#{random.randint(0, 0xFFFFFF):06x}"


class TestimonialService(SoftDeleteRepository):
    """Testimonial CRUD that keeps avatar files in step with their rows."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        super().__init__(db=db, table=TESTIMONIAL_TABLE)
        self.config = config

    def get_testimonials(self) -> list[dict[str, Any]]:
        try:
            return self.list_active()
        except SQLAlchemyError:
            LOGGER.error("Error while retrieving testimonials", exc_info=True)
            raise

    def get_testimonial(self, testimonial_id: int) -> dict[str, Any] | None:
        return self.get_by_id(testimonial_id)

    def create_testimonial(
        self,
        *,
        testimonial_text: str,
        full_name: str,
        job_title: str,
        avatar: UploadFile | None = None,
    ) -> dict[str, Any]:
        avatar_path = save_image(avatar, config=self.config) if avatar is not None else None
        try:
            testimonial_id = self.insert(
                {
                    "testimonial_text": testimonial_text,
                    "full_name": full_name,
                    "job_title": job_title,
                    "testifier_avatar": avatar_path,
                    "bg_color": random_bg_color(),
                }
            )
        except SQLAlchemyError:
            LOGGER.error("Error while creating testimonial", exc_info=True)
            remove_file(avatar_path, config=self.config)
            raise
        created = self.get_by_id(testimonial_id)
        if created is None:
            raise RuntimeError(f"Testimonial {testimonial_id} vanished after insert.")
        return created

    def update_testimonial(
        self,
        testimonial_id: int,
        *,
        testimonial_text: str | None = None,
        full_name: str | None = None,
        job_title: str | None = None,
        avatar: UploadFile | None = None,
        remove_avatar: bool = False,
    ) -> dict[str, Any] | None:
        """Update text fields and optionally replace or clear the avatar."""

        stored = self.get_by_id(testimonial_id)
        if stored is None:
            return None

        values = self.merge_with_stored(
            stored,
            {"testimonial_text": testimonial_text, "full_name": full_name, "job_title": job_title},
            _TEXT_COLUMNS,
        )
        new_avatar = save_image(avatar, config=self.config) if avatar is not None else None
        previous_avatar = stored.get("testifier_avatar")
        if new_avatar is not None:
            values["testifier_avatar"] = new_avatar
        elif remove_avatar:
            values["testifier_avatar"] = None

        try:
            updated_rows = self.update_columns(testimonial_id, values)
        except SQLAlchemyError:
            LOGGER.error("Error while updating testimonial id=%s", testimonial_id, exc_info=True)
            remove_file(new_avatar, config=self.config)
            raise
        if updated_rows == 0:
            remove_file(new_avatar, config=self.config)
            return None

        if "testifier_avatar" in values and previous_avatar and previous_avatar != new_avatar:
            remove_file(previous_avatar, config=self.config)
        return self.get_by_id(testimonial_id)

    def delete_testimonial(self, testimonial_id: int) -> bool:
        stored = self.get_by_id(testimonial_id)
        if stored is None:
            return False
        try:
            deleted = self.soft_delete(testimonial_id)
        except SQLAlchemyError:
            LOGGER.error("Error while deleting testimonial id=%s", testimonial_id, exc_info=True)
            raise
        if deleted:
            remove_file(stored.get("testifier_avatar"), config=self.config)
        return deleted
