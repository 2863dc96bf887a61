# This file implements blog storage, including author and cover image hydration.
# It exists so routers can serve public blog lists and admin blog management without embedding SQL.
# Deleting a blog is one transaction that retires the blog detail and every row linked to it.
# Each cascade step only touches rows that are still active, so re-running a cascade is harmless.

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from clinic_site.api.db_access import DatabaseClient, TransactionExecutor
from clinic_site.api.repository import EntityTable, SoftDeleteRepository

LOGGER = logging.getLogger("blog")

USER_BLOG_LIMIT = 20

BLOG_TABLE = EntityTable(
    name="blog",
    id_column="blog_id",
    columns=("user_id", "image_gallery_id", "blog_title", "blog_description"),
    order_by="b.created_at DESC, b.blog_id DESC",
    list_limit=9,
)

_RETIRE = "SET deleted_at = CURRENT_TIMESTAMP, updated_at = CURRENT_TIMESTAMP"


@dataclass(frozen=True)
class CascadeStep:
    """One child-table cleanup executed while deleting a blog."""

    name: str
    sql: str


CASCADE_STEPS: tuple[CascadeStep, ...] = (
    CascadeStep(
        name="tag links",
        sql=f"UPDATE blog_detail_tag {_RETIRE} "
        "WHERE blog_detail_id = :detail_id AND deleted_at IS NULL",
    ),
    CascadeStep(
        name="image links",
        sql=f"UPDATE blog_detail_img {_RETIRE} "
        "WHERE blog_detail_id = :detail_id AND deleted_at IS NULL",
    ),
    CascadeStep(
        name="related posts",
        sql=f"UPDATE related_blog_post {_RETIRE} "
        "WHERE (blog_detail_id = :detail_id OR blog_id = :blog_id) AND deleted_at IS NULL",
    ),
    CascadeStep(
        name="detail",
        sql=f"UPDATE blog_detail {_RETIRE} WHERE id = :detail_id AND deleted_at IS NULL",
    ),
)


class BlogService(SoftDeleteRepository):
    """Blog CRUD with joined author, image, and detail data."""

    alias = "b"

    def __init__(self, *, db: DatabaseClient) -> None:
        super().__init__(db=db, table=BLOG_TABLE)

    def _select_sql(self) -> str:
        return """
        SELECT
            b.blog_id, b.user_id, b.image_gallery_id, b.blog_title, b.blog_description,
            b.created_at, b.updated_at,
            bd.id AS detail_id, bd.hash, bd.detail_description,
            bd.blog_main_highlight, bd.blog_post_wrap_up,
            u.email,
            up.first_name, up.last_name, up.user_name, up.user_color,
            upp.profile_picture,
            ig.image_name, ig.image_url, ig.image_type
        FROM blog AS b
        LEFT JOIN blog_detail AS bd ON bd.blog_id = b.blog_id AND bd.deleted_at IS NULL
        LEFT JOIN users AS u ON u.id = b.user_id
        LEFT JOIN user_profile AS up ON up.user_id = b.user_id AND up.deleted_at IS NULL
        LEFT JOIN user_profile_picture AS upp
            ON upp.user_id = b.user_id AND upp.deleted_at IS NULL
        LEFT JOIN image_gallery AS ig ON ig.id = b.image_gallery_id AND ig.deleted_at IS NULL
        """

    def _shape(self, row: dict[str, Any]) -> dict[str, Any]:
        blog_img = None
        if row.get("image_gallery_id"):
            blog_img = {
                "id": row["image_gallery_id"],
                "image_name": row.get("image_name"),
                "image_url": row.get("image_url"),
                "image_type": row.get("image_type"),
            }
        blog_detail = None
        if row.get("detail_id"):
            blog_detail = {
                "id": row["detail_id"],
                "hash": row["hash"],
                "description": row.get("detail_description"),
                "highlight": row.get("blog_main_highlight"),
                "wrap_up": row.get("blog_post_wrap_up"),
            }
        return {
            "blog_id": row["blog_id"],
            "user_id": row["user_id"],
            "blog_img": blog_img,
            "blog_title": row["blog_title"],
            "blog_description": row["blog_description"],
            "blog_detail": blog_detail,
            "user": {
                "id": row["user_id"],
                "email": row.get("email"),
                "first_name": row.get("first_name") or None,
                "last_name": row.get("last_name") or None,
                "user_name": row.get("user_name") or None,
                "user_color": row.get("user_color") or None,
                "profile_picture": row.get("profile_picture") or None,
            },
            "created_at": row.get("created_at"),
            "updated_at": row.get("updated_at"),
        }

    def get_blogs(self) -> list[dict[str, Any]]:
        """Most recent active blogs, capped for the public listing."""

        try:
            return self.list_active()
        except SQLAlchemyError:
            LOGGER.error("Error while retrieving blogs", exc_info=True)
            raise

    def get_blog(self, blog_id: int) -> dict[str, Any] | None:
        try:
            return self.get_by_id(blog_id)
        except SQLAlchemyError:
            LOGGER.error("Error while retrieving blog id=%s", blog_id, exc_info=True)
            raise

    def get_blogs_by_user(self, user_id: int, *, q: str | None = None) -> list[dict[str, Any]]:
        """Up to 20 of a user's newest blog titles, optionally filtered by a title keyword."""

        query = """
        SELECT blog_id, blog_title
        FROM blog
        WHERE user_id = :user_id
          AND deleted_at IS NULL
        """
        params: dict[str, Any] = {"user_id": user_id, "limit": USER_BLOG_LIMIT}
        if q:
            query += " AND blog_title LIKE :pattern"
            params["pattern"] = f"%{q}%"
        query += " ORDER BY created_at DESC, blog_id DESC LIMIT :limit"
        try:
            return self.db.fetch_all(query, params)
        except SQLAlchemyError:
            LOGGER.error("Error while retrieving blogs for user_id=%s", user_id, exc_info=True)
            raise

    def create_blog(
        self,
        *,
        user_id: int,
        image_gallery_id: int,
        blog_title: str,
        blog_description: str,
    ) -> dict[str, Any]:
        try:
            blog_id = self.insert(
                {
                    "user_id": user_id,
                    "image_gallery_id": image_gallery_id,
                    "blog_title": blog_title,
                    "blog_description": blog_description,
                }
            )
        except SQLAlchemyError:
            LOGGER.error("Error while creating blog for user_id=%s", user_id, exc_info=True)
            raise
        created = self.get_by_id(blog_id)
        if created is None:
            raise RuntimeError(f"Blog {blog_id} vanished after insert.")
        return created

    def update_blog(
        self,
        blog_id: int,
        *,
        image_gallery_id: int | None = None,
        blog_title: str | None = None,
        blog_description: str | None = None,
    ) -> dict[str, Any] | None:
        stored = self.db.fetch_one(
            "SELECT image_gallery_id, blog_title, blog_description "
            "FROM blog WHERE blog_id = :blog_id AND deleted_at IS NULL",
            {"blog_id": blog_id},
        )
        if stored is None:
            return None
        values = self.merge_with_stored(
            stored,
            {
                "image_gallery_id": image_gallery_id,
                "blog_title": blog_title,
                "blog_description": blog_description,
            },
            ("image_gallery_id", "blog_title", "blog_description"),
        )
        try:
            if self.update_columns(blog_id, values) == 0:
                return None
        except SQLAlchemyError:
            LOGGER.error("Error while updating blog id=%s", blog_id, exc_info=True)
            raise
        return self.get_by_id(blog_id)

    def delete_blog(self, blog_id: int) -> dict[str, Any] | None:
        """Soft-delete a blog with its detail and detail links in one transaction."""

        def cascade(tx: TransactionExecutor) -> dict[str, Any] | None:
            found = tx.fetch_one(
                "SELECT blog_id FROM blog WHERE blog_id = :blog_id AND deleted_at IS NULL",
                {"blog_id": blog_id},
            )
            if found is None:
                return None

            detail = tx.fetch_one(
                "SELECT id FROM blog_detail WHERE blog_id = :blog_id AND deleted_at IS NULL "
                "ORDER BY id LIMIT 1",
                {"blog_id": blog_id},
            )
            detail_id = int(detail["id"]) if detail is not None else None

            if detail_id is not None:
                params = {"detail_id": detail_id, "blog_id": blog_id}
                for step in CASCADE_STEPS:
                    result = tx.execute(step.sql, params)
                    LOGGER.debug(
                        "Blog %s cascade step=%s rows=%s", blog_id, step.name, result.rowcount
                    )

            if not self.soft_delete(blog_id, executor=tx):
                raise RuntimeError(f"Failed to soft-delete blog {blog_id}.")

            return {
                "deleted": True,
                "blog_id": blog_id,
                "blog_detail_id": detail_id,
                "timestamp": datetime.now(tz=UTC),
            }

        try:
            return self.db.use_transaction(cascade)
        except SQLAlchemyError:
            LOGGER.error("Error while deleting blog id=%s", blog_id, exc_info=True)
            raise
