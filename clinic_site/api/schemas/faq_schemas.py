# This file defines request and response contracts for FAQ endpoints.
# It exists so questions and answers are checked for presence and type before storage.
# Update requests may carry either field; omitted fields keep their stored values.
# Response models mirror the stored FAQ row.

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field

from clinic_site.api.schemas.validators import text_rule


class FaqCreateRequest(BaseModel):
    faq_question: Annotated[str | None, BeforeValidator(text_rule("FAQ question"))] = Field(
        default=None, validate_default=True
    )
    faq_answer: Annotated[str | None, BeforeValidator(text_rule("FAQ answer"))] = Field(
        default=None, validate_default=True
    )


class FaqUpdateRequest(BaseModel):
    faq_question: Annotated[
        str | None, BeforeValidator(text_rule("FAQ question", required=False))
    ] = None
    faq_answer: Annotated[
        str | None, BeforeValidator(text_rule("FAQ answer", required=False))
    ] = None


class FaqRow(BaseModel):
    id: int
    faq_question: str
    faq_answer: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FaqListData(BaseModel):
    faqs: list[FaqRow]


class FaqData(BaseModel):
    faq: FaqRow
