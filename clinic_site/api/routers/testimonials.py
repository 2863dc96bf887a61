# This file defines testimonial endpoints under the API prefix.
# It exists so the public site can show patient testimonials and admins can manage them.
# Create and update accept multipart forms with an optional `testifier_avatar` image.
# Form fields are validated with the shared field rules, so errors match the JSON endpoints.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile

from clinic_site.api.auth import AdminDep
from clinic_site.api.dependencies import get_testimonial_service
from clinic_site.api.error_handlers import NotFoundError
from clinic_site.api.response_envelope import build_success_envelope
from clinic_site.api.schemas.common import MessageResponse, SuccessEnvelope, TestimonialIdPath
from clinic_site.api.schemas.testimonial_schemas import (
    TestimonialCreateForm,
    TestimonialData,
    TestimonialListData,
    TestimonialUpdateForm,
)
from clinic_site.api.schemas.validators import validate_form
from clinic_site.api.services.testimonial_service import TestimonialService

router = APIRouter(prefix="/testimonials", tags=["testimonials"])
TestimonialServiceDep = Annotated[TestimonialService, Depends(get_testimonial_service)]

NOT_FOUND_MESSAGE = "The testimonial you are looking for was not found."


def testimonial_create_form(
    testimonial_text: Annotated[str | None, Form()] = None,
    full_name: Annotated[str | None, Form()] = None,
    job_title: Annotated[str | None, Form()] = None,
) -> TestimonialCreateForm:
    return validate_form(
        TestimonialCreateForm,
        {"testimonial_text": testimonial_text, "full_name": full_name, "job_title": job_title},
    )


def testimonial_update_form(
    testimonial_id: Annotated[str, Path()],
    testimonial_text: Annotated[str | None, Form()] = None,
    full_name: Annotated[str | None, Form()] = None,
    job_title: Annotated[str | None, Form()] = None,
    remove_avatar: Annotated[bool, Form()] = False,
) -> TestimonialUpdateForm:
    return validate_form(
        TestimonialUpdateForm,
        {
            "testimonial_id": testimonial_id,
            "testimonial_text": testimonial_text,
            "full_name": full_name,
            "job_title": job_title,
            "remove_avatar": remove_avatar,
        },
    )


@router.get("", response_model=SuccessEnvelope[TestimonialListData])
def list_testimonials(service: TestimonialServiceDep) -> dict[str, object]:
    return build_success_envelope(
        message="Testimonials retrieved successfully.",
        data={"testimonials": service.get_testimonials()},
    )


@router.get("/{testimonial_id}", response_model=SuccessEnvelope[TestimonialData])
def get_testimonial(
    testimonial_id: TestimonialIdPath,
    service: TestimonialServiceDep,
) -> dict[str, object]:
    testimonial = service.get_testimonial(testimonial_id)
    if testimonial is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return build_success_envelope(
        message="Testimonial retrieved successfully.",
        data={"testimonial": testimonial},
    )


@router.post("", status_code=201, response_model=SuccessEnvelope[TestimonialData])
def create_testimonial(
    principal: AdminDep,
    form: Annotated[TestimonialCreateForm, Depends(testimonial_create_form)],
    service: TestimonialServiceDep,
    testifier_avatar: Annotated[UploadFile | None, File()] = None,
) -> dict[str, object]:
    testimonial = service.create_testimonial(
        testimonial_text=form.testimonial_text,
        full_name=form.full_name,
        job_title=form.job_title,
        avatar=testifier_avatar,
    )
    return build_success_envelope(
        message="Testimonial created successfully.",
        data={"testimonial": testimonial},
    )


@router.patch("/{testimonial_id}", response_model=SuccessEnvelope[TestimonialData])
def update_testimonial(
    principal: AdminDep,
    form: Annotated[TestimonialUpdateForm, Depends(testimonial_update_form)],
    service: TestimonialServiceDep,
    testifier_avatar: Annotated[UploadFile | None, File()] = None,
) -> dict[str, object]:
    testimonial = service.update_testimonial(
        form.testimonial_id,
        testimonial_text=form.testimonial_text,
        full_name=form.full_name,
        job_title=form.job_title,
        avatar=testifier_avatar,
        remove_avatar=form.remove_avatar,
    )
    if testimonial is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return build_success_envelope(
        message="Testimonial updated successfully.",
        data={"testimonial": testimonial},
    )


@router.delete("/{testimonial_id}", response_model=MessageResponse)
def delete_testimonial(
    principal: AdminDep,
    testimonial_id: TestimonialIdPath,
    service: TestimonialServiceDep,
) -> dict[str, object]:
    if not service.delete_testimonial(testimonial_id):
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return build_success_envelope(message="Testimonial deleted successfully.")
