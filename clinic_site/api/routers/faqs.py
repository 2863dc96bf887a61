# This file defines FAQ endpoints under the API prefix.
# It exists so the public site can render FAQs and admins can maintain them.
# Reads are public; create, update, and delete require an admin-level role.
# Absent or soft-deleted FAQs are reported as 404 envelopes.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from clinic_site.api.auth import AdminDep
from clinic_site.api.dependencies import get_faq_service
from clinic_site.api.error_handlers import NotFoundError
from clinic_site.api.response_envelope import build_success_envelope
from clinic_site.api.schemas.common import FaqIdPath, MessageResponse, SuccessEnvelope
from clinic_site.api.schemas.faq_schemas import (
    FaqCreateRequest,
    FaqData,
    FaqListData,
    FaqUpdateRequest,
)
from clinic_site.api.services.faq_service import FaqService

router = APIRouter(prefix="/faqs", tags=["faqs"])
FaqServiceDep = Annotated[FaqService, Depends(get_faq_service)]


@router.get("", response_model=SuccessEnvelope[FaqListData])
def list_faqs(service: FaqServiceDep) -> dict[str, object]:
    return build_success_envelope(
        message="FAQs retrieved successfully.",
        data={"faqs": service.get_faqs()},
    )


@router.get("/{faq_id}", response_model=SuccessEnvelope[FaqData])
def get_faq(faq_id: FaqIdPath, service: FaqServiceDep) -> dict[str, object]:
    faq = service.get_faq(faq_id)
    if faq is None:
        raise NotFoundError("The FAQ you are looking for was not found.")
    return build_success_envelope(message="FAQ retrieved successfully.", data={"faq": faq})


@router.post("", status_code=201, response_model=SuccessEnvelope[FaqData])
def create_faq(
    principal: AdminDep,
    payload: FaqCreateRequest,
    service: FaqServiceDep,
) -> dict[str, object]:
    faq = service.create_faq(faq_question=payload.faq_question, faq_answer=payload.faq_answer)
    return build_success_envelope(message="FAQ created successfully.", data={"faq": faq})


@router.patch("/{faq_id}", response_model=SuccessEnvelope[FaqData])
def update_faq(
    principal: AdminDep,
    faq_id: FaqIdPath,
    payload: FaqUpdateRequest,
    service: FaqServiceDep,
) -> dict[str, object]:
    faq = service.update_faq(
        faq_id,
        faq_question=payload.faq_question,
        faq_answer=payload.faq_answer,
    )
    if faq is None:
        raise NotFoundError("The FAQ you are trying to update was not found.")
    return build_success_envelope(message="FAQ updated successfully.", data={"faq": faq})


@router.delete("/{faq_id}", response_model=MessageResponse)
def delete_faq(principal: AdminDep, faq_id: FaqIdPath, service: FaqServiceDep) -> dict[str, object]:
    if not service.delete_faq(faq_id):
        raise NotFoundError("The FAQ you are trying to delete was not found.")
    return build_success_envelope(message="FAQ deleted successfully.")
