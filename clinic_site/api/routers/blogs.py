# This file defines blog endpoints under the API prefix.
# It exists so the public site can show recent posts and admins can write and retire them.
# Blog authorship comes from the authenticated caller, never from the request body.
# Deleting a blog cascades to its detail section inside one database transaction.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from clinic_site.api.auth import AdminDep, PrincipalDep
from clinic_site.api.dependencies import get_blog_service
from clinic_site.api.error_handlers import NotFoundError
from clinic_site.api.response_envelope import build_success_envelope
from clinic_site.api.schemas.blog_schemas import (
    BlogCreateRequest,
    BlogData,
    BlogDeletionData,
    BlogListData,
    BlogTitleListData,
    BlogUpdateRequest,
)
from clinic_site.api.schemas.common import BlogIdPath, SuccessEnvelope, UserIdPath
from clinic_site.api.services.blog_service import BlogService

router = APIRouter(prefix="/blogs", tags=["blogs"])
BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]

NOT_FOUND_MESSAGE = "The blog you are looking for was not found."


@router.get("", response_model=SuccessEnvelope[BlogListData])
def list_blogs(service: BlogServiceDep) -> dict[str, object]:
    return build_success_envelope(
        message="Blogs retrieved successfully.",
        data={"blogs": service.get_blogs()},
    )


@router.get("/users/{user_id}", response_model=SuccessEnvelope[BlogTitleListData])
def list_user_blogs(
    principal: PrincipalDep,
    user_id: UserIdPath,
    service: BlogServiceDep,
    q: str | None = Query(default=None, max_length=255),
) -> dict[str, object]:
    return build_success_envelope(
        message="User blogs retrieved successfully.",
        data={"blogs": service.get_blogs_by_user(user_id, q=q)},
    )


@router.get("/{blog_id}", response_model=SuccessEnvelope[BlogData])
def get_blog(blog_id: BlogIdPath, service: BlogServiceDep) -> dict[str, object]:
    blog = service.get_blog(blog_id)
    if blog is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return build_success_envelope(message="Blog retrieved successfully.", data={"blog": blog})


@router.post("", status_code=201, response_model=SuccessEnvelope[BlogData])
def create_blog(
    principal: AdminDep,
    payload: BlogCreateRequest,
    service: BlogServiceDep,
) -> dict[str, object]:
    blog = service.create_blog(
        user_id=principal.user_id,
        image_gallery_id=payload.image_gallery_id,
        blog_title=payload.blog_title,
        blog_description=payload.blog_description,
    )
    return build_success_envelope(message="Blog created successfully.", data={"blog": blog})


@router.patch("/{blog_id}", response_model=SuccessEnvelope[BlogData])
def update_blog(
    principal: AdminDep,
    blog_id: BlogIdPath,
    payload: BlogUpdateRequest,
    service: BlogServiceDep,
) -> dict[str, object]:
    blog = service.update_blog(
        blog_id,
        image_gallery_id=payload.image_gallery_id,
        blog_title=payload.blog_title,
        blog_description=payload.blog_description,
    )
    if blog is None:
        raise NotFoundError("The blog you are trying to update was not found.")
    return build_success_envelope(message="Blog updated successfully.", data={"blog": blog})


@router.delete("/{blog_id}", response_model=SuccessEnvelope[BlogDeletionData])
def delete_blog(
    principal: AdminDep,
    blog_id: BlogIdPath,
    service: BlogServiceDep,
) -> dict[str, object]:
    deletion = service.delete_blog(blog_id)
    if deletion is None:
        raise NotFoundError(
            "The blog you are trying to delete was not found or is already deleted."
        )
    return build_success_envelope(message="Blog deleted successfully.", data={"deleted": deletion})
