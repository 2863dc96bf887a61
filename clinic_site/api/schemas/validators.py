# This file defines reusable field rules for request bodies, forms, and path ids.
# It exists so every validation failure carries the exact client-facing message for that field.
# Rules run as pydantic before-validators, so all failures of one request are collected together.
# The global validation handler then joins those messages into a single 400 response.

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticCustomError

_DIGITS_RE = re.compile(r"^\s*\d+\s*$")
# Ids and foreign keys are 32-bit INTEGER columns.
MAX_ID = 2**31 - 1

ModelT = TypeVar("ModelT", bound=BaseModel)


def _fail(message: str) -> PydanticCustomError:
    return PydanticCustomError("field_rule", message)


def text_rule(
    label: str,
    *,
    max_length: int | None = None,
    strip: bool = False,
    required: bool = True,
    required_message: str | None = None,
    type_message: str | None = None,
    length_message: str | None = None,
) -> Callable[[Any], str | None]:
    """Build a string rule; optional fields may be omitted but never blank."""

    required_message = required_message or f"{label} is required."
    type_message = type_message or f"{label} must be a string."
    empty_message = f"{label} cannot be empty."
    length_message = length_message or f"{label} must not exceed {max_length} characters."

    def rule(value: Any) -> str | None:
        if value is None:
            if required:
                raise _fail(required_message)
            return None
        if not isinstance(value, str):
            raise _fail(type_message)
        candidate = value.strip() if strip else value
        if not candidate.strip():
            raise _fail(required_message if required else empty_message)
        if max_length is not None and len(candidate) > max_length:
            raise _fail(length_message)
        return candidate

    return rule


def positive_int_rule(
    label: str,
    *,
    required: bool = True,
    required_message: str | None = None,
) -> Callable[[Any], int | None]:
    """Accept positive integers, including their decimal string form."""

    required_message = required_message or f"{label} is required."
    invalid_message = f"{label} must be a positive integer."

    def rule(value: Any) -> int | None:
        if value is None or (isinstance(value, str) and not value.strip()):
            if required:
                raise _fail(required_message)
            return None
        if isinstance(value, bool):
            raise _fail(invalid_message)
        if isinstance(value, int):
            parsed = value
        elif isinstance(value, str) and _DIGITS_RE.match(value):
            parsed = int(value)
        else:
            raise _fail(invalid_message)
        if parsed < 1 or parsed > MAX_ID:
            raise _fail(invalid_message)
        return parsed

    return rule


def positive_id(label: str) -> Callable[[Any], int | None]:
    """Rule for path ids; a blank id reads as an invalid one."""

    return positive_int_rule(label, required_message=f"{label} must be a positive integer.")


def validate_form(model: type[ModelT], values: Mapping[str, Any]) -> ModelT:
    """Validate multipart form values with the same error flow as JSON bodies."""

    try:
        return model.model_validate(dict(values))
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
