# This file defines department endpoints under the API prefix.
# It exists so the public site can list departments and admins can manage them.
# Reads are public; create, update, and delete require an admin-level role.
# The router maps service outcomes to envelopes and 404/409 errors.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from clinic_site.api.auth import AdminDep
from clinic_site.api.dependencies import get_department_service
from clinic_site.api.error_handlers import NotFoundError
from clinic_site.api.response_envelope import build_success_envelope
from clinic_site.api.schemas.common import DepartmentIdPath, MessageResponse, SuccessEnvelope
from clinic_site.api.schemas.department_schemas import (
    DepartmentCreateRequest,
    DepartmentData,
    DepartmentListData,
    DepartmentUpdateRequest,
)
from clinic_site.api.services.department_service import DepartmentService

router = APIRouter(prefix="/departments", tags=["departments"])
DepartmentServiceDep = Annotated[DepartmentService, Depends(get_department_service)]

NOT_FOUND_MESSAGE = "The department you looking for was not found."


@router.get("", response_model=SuccessEnvelope[DepartmentListData])
def list_departments(service: DepartmentServiceDep) -> dict[str, object]:
    return build_success_envelope(
        message="Departments data retrieved successfully.",
        data={"departments": service.get_departments()},
    )


@router.get("/{department_id}", response_model=SuccessEnvelope[DepartmentData])
def get_department(
    department_id: DepartmentIdPath,
    service: DepartmentServiceDep,
) -> dict[str, object]:
    department = service.get_department(department_id)
    if department is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return build_success_envelope(
        message="Department data retrieved successfully.",
        data={"department": department},
    )


@router.post("", status_code=201, response_model=SuccessEnvelope[DepartmentData])
def create_department(
    principal: AdminDep,
    payload: DepartmentCreateRequest,
    service: DepartmentServiceDep,
) -> dict[str, object]:
    department = service.create_department(
        department_name=payload.department_name,
        department_description=payload.department_description,
    )
    return build_success_envelope(
        message="Department created successfully.",
        data={"department": department},
    )


@router.patch("/{department_id}", response_model=SuccessEnvelope[DepartmentData])
def update_department(
    principal: AdminDep,
    department_id: DepartmentIdPath,
    payload: DepartmentUpdateRequest,
    service: DepartmentServiceDep,
) -> dict[str, object]:
    department = service.update_department(
        department_id,
        department_name=payload.department_name,
        department_description=payload.department_description,
    )
    if department is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return build_success_envelope(
        message="Department updated successfully.",
        data={"department": department},
    )


@router.delete("/{department_id}", response_model=MessageResponse)
def delete_department(
    principal: AdminDep,
    department_id: DepartmentIdPath,
    service: DepartmentServiceDep,
) -> dict[str, object]:
    if not service.delete_department(department_id):
        raise NotFoundError("The department you are trying to delete was not found.")
    return build_success_envelope(message="Department deleted successfully.")
