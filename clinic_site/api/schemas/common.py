# This file defines shared schema pieces reused by every resource endpoint.
# It exists so the `{success, message, data, error}` envelope stays consistent across routers.
# Shared models reduce duplication and keep contract changes easier to review.
# Typed path-id aliases live here too so every router validates ids the same way.

from __future__ import annotations

from typing import Annotated, Any, Generic, TypeVar

from fastapi import Path
from pydantic import BaseModel, BeforeValidator

from clinic_site.api.schemas.validators import positive_id

DataT = TypeVar("DataT")


class MessageResponse(BaseModel):
    success: bool
    message: str


class SuccessEnvelope(MessageResponse, Generic[DataT]):
    data: DataT


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
    message: str


BlogIdPath = Annotated[int, Path(), BeforeValidator(positive_id("Blog ID"))]
UserIdPath = Annotated[int, Path(), BeforeValidator(positive_id("User ID"))]
DepartmentIdPath = Annotated[int, Path(), BeforeValidator(positive_id("Department ID"))]
FaqIdPath = Annotated[int, Path(), BeforeValidator(positive_id("FAQ ID"))]
ServiceIdPath = Annotated[int, Path(), BeforeValidator(positive_id("Service ID"))]
TestimonialIdPath = Annotated[int, Path(), BeforeValidator(positive_id("Testimonial ID"))]


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status: {"model": ErrorEnvelope} for status in (400, 401, 403, 404, 409, 500)
}
