# This file defines request and response contracts for department endpoints.
# It exists so department names and descriptions are trimmed and length-checked before any SQL runs.
# Create requires both fields while update accepts either one, but never a blank value.
# Response models mirror the stored row including soft-delete timestamps.

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field

from clinic_site.api.schemas.validators import text_rule

_NAME_MAX = 255
_DESCRIPTION_LENGTH_MESSAGE = "Description must not exceed 255 characters."


class DepartmentCreateRequest(BaseModel):
    department_name: Annotated[
        str | None,
        BeforeValidator(text_rule("Department name", max_length=_NAME_MAX, strip=True)),
    ] = Field(default=None, validate_default=True)
    department_description: Annotated[
        str | None,
        BeforeValidator(
            text_rule(
                "Department description",
                max_length=_NAME_MAX,
                strip=True,
                length_message=_DESCRIPTION_LENGTH_MESSAGE,
            )
        ),
    ] = Field(default=None, validate_default=True)


class DepartmentUpdateRequest(BaseModel):
    department_name: Annotated[
        str | None,
        BeforeValidator(
            text_rule("Department name", max_length=_NAME_MAX, strip=True, required=False)
        ),
    ] = None
    department_description: Annotated[
        str | None,
        BeforeValidator(
            text_rule(
                "Department description",
                max_length=_NAME_MAX,
                strip=True,
                required=False,
                length_message=_DESCRIPTION_LENGTH_MESSAGE,
            )
        ),
    ] = None


class DepartmentRow(BaseModel):
    id: int
    department_name: str
    department_description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


class DepartmentListData(BaseModel):
    departments: list[DepartmentRow]


class DepartmentData(BaseModel):
    department: DepartmentRow
