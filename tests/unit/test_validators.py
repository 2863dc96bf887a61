"""
Unit tests for request field rules and validation message formatting.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

import pytest
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from pydantic_core import PydanticCustomError

from clinic_site.api.error_handlers import format_validation_errors
from clinic_site.api.schemas import testimonial_schemas
from clinic_site.api.schemas.department_schemas import DepartmentCreateRequest
from clinic_site.api.schemas.validators import (
    MAX_ID,
    positive_id,
    positive_int_rule,
    text_rule,
    validate_form,
)


def test_text_rule_messages() -> None:
    rule = text_rule("Title", max_length=5, strip=True)

    assert rule("  abc  ") == "abc"
    for value, message in (
        (None, "Title is required."),
        (12, "Title must be a string."),
        ("   ", "Title is required."),
        ("abcdef", "Title must not exceed 5 characters."),
    ):
        with pytest.raises(PydanticCustomError, match=message):
            rule(value)


def test_optional_text_rule_allows_omission_but_not_blank() -> None:
    rule = text_rule("Title", required=False)

    assert rule(None) is None
    with pytest.raises(PydanticCustomError, match="Title cannot be empty."):
        rule("")


def test_positive_int_rule_accepts_digit_strings() -> None:
    rule = positive_int_rule("Image ID")

    assert rule(3) == 3
    assert rule("42") == 42
    for value in (0, -1, "1.5", True, "abc"):
        with pytest.raises(PydanticCustomError, match="Image ID must be a positive integer."):
            rule(value)
    with pytest.raises(PydanticCustomError, match="Image ID is required."):
        rule(None)


def test_positive_int_rule_rejects_ids_beyond_integer_column_range() -> None:
    rule = positive_id("Department ID")

    assert rule(str(MAX_ID)) == MAX_ID
    for value in (MAX_ID + 1, "99999999999999999999"):
        with pytest.raises(PydanticCustomError, match="Department ID must be a positive integer."):
            rule(value)


def test_positive_id_treats_blank_as_invalid() -> None:
    with pytest.raises(PydanticCustomError, match="FAQ ID must be a positive integer."):
        positive_id("FAQ ID")("")


def test_validate_form_raises_request_validation_error() -> None:
    with pytest.raises(RequestValidationError) as excinfo:
        validate_form(testimonial_schemas.TestimonialCreateForm, {"full_name": "Jane"})

    message = format_validation_errors(excinfo.value.errors())
    assert message == "Testimonial text is required. Job title is required."


def test_format_validation_errors_joins_messages_in_order() -> None:
    with pytest.raises(ValidationError) as excinfo:
        DepartmentCreateRequest.model_validate(
            {"department_name": " ", "department_description": "d" * 256}
        )

    message = format_validation_errors(excinfo.value.errors())
    assert message == (
        "Department name is required. Description must not exceed 255 characters."
    )


def test_format_validation_errors_special_cases() -> None:
    assert format_validation_errors([{"type": "missing", "loc": ("body",), "msg": "Field required"}]) == (
        "Request body is required."
    )
    assert format_validation_errors([{"type": "json_invalid", "loc": ("body", 1), "msg": "x"}]) == (
        "Request body must be valid JSON."
    )
    assert format_validation_errors([]) == "Invalid request."
