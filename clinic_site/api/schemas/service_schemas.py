# This file defines request and response contracts for service catalog endpoints.
# It exists so icon, title, subtitle, and description rules are applied before storage.
# The update request doubles as a typed patch: only the keys a client sent are written.
# Response models mirror the stored service row.

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from clinic_site.api.schemas.validators import text_rule

_ICON_TYPE_MESSAGE = "Service icon must be a valid string."
_SUBTITLE_TYPE_MESSAGE = "Service subtitle must be a string."
_SUBTITLE_LENGTH_MESSAGE = "Subtitle cannot exceed 255 characters."


class ServiceCreateRequest(BaseModel):
    icon_class_name: Annotated[
        str | None,
        BeforeValidator(text_rule("Service icon", type_message=_ICON_TYPE_MESSAGE)),
    ] = Field(default=None, validate_default=True)
    service_title: Annotated[
        str | None, BeforeValidator(text_rule("Service title", max_length=255))
    ] = Field(default=None, validate_default=True)
    service_subtitle: Annotated[
        str | None,
        BeforeValidator(
            text_rule(
                "Service subtitle",
                max_length=255,
                strip=True,
                type_message=_SUBTITLE_TYPE_MESSAGE,
                length_message=_SUBTITLE_LENGTH_MESSAGE,
            )
        ),
    ] = Field(default=None, validate_default=True)
    service_description: Annotated[
        str | None, BeforeValidator(text_rule("Service description"))
    ] = Field(default=None, validate_default=True)


class ServiceUpdateRequest(BaseModel):
    icon_class_name: Annotated[
        str | None,
        BeforeValidator(
            text_rule("Service icon", required=False, type_message=_ICON_TYPE_MESSAGE)
        ),
    ] = None
    service_title: Annotated[
        str | None,
        BeforeValidator(text_rule("Service title", max_length=255, required=False)),
    ] = None
    service_subtitle: Annotated[
        str | None,
        BeforeValidator(
            text_rule(
                "Service subtitle",
                max_length=255,
                strip=True,
                required=False,
                type_message=_SUBTITLE_TYPE_MESSAGE,
                length_message=_SUBTITLE_LENGTH_MESSAGE,
            )
        ),
    ] = None
    service_description: Annotated[
        str | None, BeforeValidator(text_rule("Service description", required=False))
    ] = None

    def patch_values(self) -> dict[str, Any]:
        """Return only the fields the client supplied with a value."""

        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class ServiceRow(BaseModel):
    id: int
    icon_class_name: str
    service_title: str
    service_subtitle: str
    service_description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ServiceListData(BaseModel):
    services: list[ServiceRow]


class ServiceData(BaseModel):
    service: ServiceRow
