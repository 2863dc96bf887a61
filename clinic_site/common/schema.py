"""
Table definitions for the website database.
Services talk to these tables through parameterized SQL; the Core metadata here only creates them.
Every content table carries `created_at`, `updated_at`, and a nullable `deleted_at` soft-delete stamp.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    func,
    text,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

_ACTIVE_ROWS = text("deleted_at IS NULL")


def _timestamps() -> list[Column]:
    return [
        Column("created_at", DateTime, nullable=False, server_default=func.now()),
        Column("updated_at", DateTime, nullable=False, server_default=func.now()),
        Column("deleted_at", DateTime, nullable=True),
    ]


users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("role", String(50), nullable=False),
    *_timestamps(),
)

user_profile = Table(
    "user_profile",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("first_name", String(100)),
    Column("last_name", String(100)),
    Column("user_name", String(100)),
    Column("user_color", String(7)),
    Column("phone_number", String(30)),
    *_timestamps(),
)

user_profile_picture = Table(
    "user_profile_picture",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("profile_picture", String(512)),
    *_timestamps(),
)

image_gallery = Table(
    "image_gallery",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("image_name", String(255), nullable=False),
    Column("image_url", String(512), nullable=False),
    Column("image_type", String(50)),
    *_timestamps(),
)

blog = Table(
    "blog",
    metadata,
    Column("blog_id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("image_gallery_id", Integer, ForeignKey("image_gallery.id"), nullable=True),
    Column("blog_title", String(255), nullable=False),
    Column("blog_description", Text, nullable=False),
    *_timestamps(),
)

blog_detail = Table(
    "blog_detail",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("blog_id", Integer, ForeignKey("blog.blog_id"), nullable=False),
    Column("hash", String(64), nullable=False),
    Column("detail_description", Text),
    Column("blog_main_highlight", Text),
    Column("blog_post_wrap_up", Text),
    *_timestamps(),
)

tag = Table(
    "tag",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    *_timestamps(),
)

blog_detail_tag = Table(
    "blog_detail_tag",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("blog_detail_id", Integer, ForeignKey("blog_detail.id"), nullable=False),
    Column("tag_id", Integer, ForeignKey("tag.id"), nullable=False),
    *_timestamps(),
)

blog_detail_img = Table(
    "blog_detail_img",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("blog_detail_id", Integer, ForeignKey("blog_detail.id"), nullable=False),
    Column("image_gallery_id", Integer, ForeignKey("image_gallery.id"), nullable=False),
    *_timestamps(),
)

related_blog_post = Table(
    "related_blog_post",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("blog_detail_id", Integer, ForeignKey("blog_detail.id"), nullable=False),
    Column("blog_id", Integer, ForeignKey("blog.blog_id"), nullable=False),
    *_timestamps(),
)

department = Table(
    "department",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("department_name", String(255), nullable=False),
    Column("department_description", String(255), nullable=False),
    *_timestamps(),
)
Index(
    "uq_department_name_active",
    department.c.department_name,
    unique=True,
    postgresql_where=_ACTIVE_ROWS,
    sqlite_where=_ACTIVE_ROWS,
)

faq = Table(
    "faq",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("faq_question", Text, nullable=False),
    Column("faq_answer", Text, nullable=False),
    *_timestamps(),
)

service = Table(
    "service",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("icon_class_name", String(100), nullable=False),
    Column("service_title", String(255), nullable=False),
    Column("service_subtitle", String(255), nullable=False),
    Column("service_description", Text, nullable=False),
    *_timestamps(),
)
Index(
    "uq_service_title_active",
    service.c.service_title,
    unique=True,
    postgresql_where=_ACTIVE_ROWS,
    sqlite_where=_ACTIVE_ROWS,
)

testimonial = Table(
    "testimonial",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("testimonial_text", Text, nullable=False),
    Column("full_name", String(255), nullable=False),
    Column("job_title", String(255), nullable=False),
    Column("testifier_avatar", String(512), nullable=True),
    Column("bg_color", String(7), nullable=False),
    *_timestamps(),
)


def create_schema(engine: Engine) -> None:
    """Create every table and index that does not exist yet."""

    metadata.create_all(engine)
