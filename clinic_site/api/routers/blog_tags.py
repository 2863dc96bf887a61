# This file defines the blog tag lookup endpoint used by the admin blog editor.
# It exists so tag pickers can search existing tags by name.
# Only admin-level roles may query tags.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from clinic_site.api.auth import AdminDep
from clinic_site.api.dependencies import get_tag_service
from clinic_site.api.response_envelope import build_success_envelope
from clinic_site.api.schemas.blog_schemas import TagListData
from clinic_site.api.schemas.common import SuccessEnvelope
from clinic_site.api.services.tag_service import TagService

router = APIRouter(prefix="/blog-tags", tags=["blogs"])
TagServiceDep = Annotated[TagService, Depends(get_tag_service)]


@router.get("", response_model=SuccessEnvelope[TagListData])
def list_tags(
    principal: AdminDep,
    service: TagServiceDep,
    q: str | None = Query(default=None, max_length=100),
) -> dict[str, object]:
    return build_success_envelope(
        message="Tags retrieved successfully.",
        data={"tags": service.get_tags(q=q)},
    )
