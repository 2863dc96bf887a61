# This file defines request and response contracts for blog and blog tag endpoints.
# It exists so blog payloads are validated before SQL runs and responses keep one nested shape.
# A blog record nests its author, cover image, and optional detail section.
# The delete response reports which rows the cascade touched.

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field

from clinic_site.api.schemas.validators import positive_int_rule, text_rule

_IMAGE_GALLERY_LABEL = "Image Gallery ID"


class BlogCreateRequest(BaseModel):
    image_gallery_id: Annotated[
        int | None, BeforeValidator(positive_int_rule(_IMAGE_GALLERY_LABEL))
    ] = Field(default=None, validate_default=True)
    blog_title: Annotated[
        str | None, BeforeValidator(text_rule("Blog title", max_length=255))
    ] = Field(default=None, validate_default=True)
    blog_description: Annotated[
        str | None, BeforeValidator(text_rule("Blog description"))
    ] = Field(default=None, validate_default=True)


class BlogUpdateRequest(BaseModel):
    image_gallery_id: Annotated[
        int | None, BeforeValidator(positive_int_rule(_IMAGE_GALLERY_LABEL, required=False))
    ] = None
    blog_title: Annotated[
        str | None, BeforeValidator(text_rule("Blog title", max_length=255, required=False))
    ] = None
    blog_description: Annotated[
        str | None, BeforeValidator(text_rule("Blog description", required=False))
    ] = None


class BlogAuthor(BaseModel):
    id: int
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    user_name: str | None = None
    user_color: str | None = None
    profile_picture: str | None = None


class BlogImage(BaseModel):
    id: int
    image_name: str | None = None
    image_url: str | None = None
    image_type: str | None = None


class BlogDetailSummary(BaseModel):
    id: int
    hash: str
    description: str | None = None
    highlight: str | None = None
    wrap_up: str | None = None


class BlogRecord(BaseModel):
    blog_id: int
    user_id: int
    blog_img: BlogImage | None = None
    blog_title: str
    blog_description: str
    blog_detail: BlogDetailSummary | None = None
    user: BlogAuthor | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BlogTitleRow(BaseModel):
    blog_id: int
    blog_title: str


class BlogDeletion(BaseModel):
    deleted: bool
    blog_id: int
    blog_detail_id: int | None = None
    timestamp: datetime


class TagRow(BaseModel):
    id: int
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BlogListData(BaseModel):
    blogs: list[BlogRecord]


class BlogTitleListData(BaseModel):
    blogs: list[BlogTitleRow]


class BlogData(BaseModel):
    blog: BlogRecord


class TagListData(BaseModel):
    tags: list[TagRow]


class BlogDeletionData(BaseModel):
    deleted: BlogDeletion
