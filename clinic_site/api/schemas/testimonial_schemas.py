# This file defines form and response contracts for testimonial endpoints.
# It exists because testimonials arrive as multipart forms carrying an optional avatar image.
# Form values are validated with the same field rules as JSON bodies so messages stay uniform.
# Response models expose the stored avatar path and the card background color.

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field

from clinic_site.api.schemas.validators import positive_id, text_rule

_FULL_NAME_TYPE = "Full name must be a valid string."
_JOB_TITLE_TYPE = "Job title must be a valid string."


class TestimonialCreateForm(BaseModel):
    testimonial_text: Annotated[
        str | None, BeforeValidator(text_rule("Testimonial text"))
    ] = Field(default=None, validate_default=True)
    full_name: Annotated[
        str | None,
        BeforeValidator(text_rule("Full name", max_length=255, type_message=_FULL_NAME_TYPE)),
    ] = Field(default=None, validate_default=True)
    job_title: Annotated[
        str | None,
        BeforeValidator(text_rule("Job title", max_length=255, type_message=_JOB_TITLE_TYPE)),
    ] = Field(default=None, validate_default=True)


class TestimonialUpdateForm(BaseModel):
    testimonial_id: Annotated[int, BeforeValidator(positive_id("Testimonial ID"))]
    testimonial_text: Annotated[
        str | None, BeforeValidator(text_rule("Testimonial text", required=False))
    ] = None
    full_name: Annotated[
        str | None,
        BeforeValidator(
            text_rule("Full name", max_length=255, required=False, type_message=_FULL_NAME_TYPE)
        ),
    ] = None
    job_title: Annotated[
        str | None,
        BeforeValidator(
            text_rule("Job title", max_length=255, required=False, type_message=_JOB_TITLE_TYPE)
        ),
    ] = None
    remove_avatar: bool = False


class TestimonialRow(BaseModel):
    id: int
    testimonial_text: str
    full_name: str
    job_title: str
    testifier_avatar: str | None = None
    bg_color: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TestimonialListData(BaseModel):
    testimonials: list[TestimonialRow]


class TestimonialData(BaseModel):
    testimonial: TestimonialRow
