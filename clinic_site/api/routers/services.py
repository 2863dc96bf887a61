# This file defines medical service catalog endpoints under the API prefix.
# It exists so the public site can list services and admins can curate them.
# PATCH writes only the fields present in the request body.
# Duplicate active titles surface as 409 envelopes from the service layer.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from clinic_site.api.auth import AdminDep
from clinic_site.api.dependencies import get_service_catalog_service
from clinic_site.api.error_handlers import NotFoundError
from clinic_site.api.response_envelope import build_success_envelope
from clinic_site.api.schemas.common import MessageResponse, ServiceIdPath, SuccessEnvelope
from clinic_site.api.schemas.service_schemas import (
    ServiceCreateRequest,
    ServiceData,
    ServiceListData,
    ServiceUpdateRequest,
)
from clinic_site.api.services.catalog_service import ServiceCatalogService

router = APIRouter(prefix="/services", tags=["services"])
CatalogServiceDep = Annotated[ServiceCatalogService, Depends(get_service_catalog_service)]


@router.get("", response_model=SuccessEnvelope[ServiceListData])
def list_services(service: CatalogServiceDep) -> dict[str, object]:
    return build_success_envelope(
        message="Services retrieved successfully.",
        data={"services": service.get_services()},
    )


@router.get("/{service_id}", response_model=SuccessEnvelope[ServiceData])
def get_service(service_id: ServiceIdPath, service: CatalogServiceDep) -> dict[str, object]:
    record = service.get_service(service_id)
    if record is None:
        raise NotFoundError("The service you are looking for was not found.")
    return build_success_envelope(message="Service retrieved successfully.", data={"service": record})


@router.post("", status_code=201, response_model=SuccessEnvelope[ServiceData])
def create_service(
    principal: AdminDep,
    payload: ServiceCreateRequest,
    service: CatalogServiceDep,
) -> dict[str, object]:
    record = service.create_service(
        icon_class_name=payload.icon_class_name,
        service_title=payload.service_title,
        service_subtitle=payload.service_subtitle,
        service_description=payload.service_description,
    )
    return build_success_envelope(message="Service created successfully.", data={"service": record})


@router.patch("/{service_id}", response_model=SuccessEnvelope[ServiceData])
def update_service(
    principal: AdminDep,
    service_id: ServiceIdPath,
    payload: ServiceUpdateRequest,
    service: CatalogServiceDep,
) -> dict[str, object]:
    record = service.update_service(service_id, payload.patch_values())
    if record is None:
        raise NotFoundError("The service you are trying to update was not found.")
    return build_success_envelope(message="Service updated successfully.", data={"service": record})


@router.delete("/{service_id}", response_model=MessageResponse)
def delete_service(
    principal: AdminDep,
    service_id: ServiceIdPath,
    service: CatalogServiceDep,
) -> dict[str, object]:
    if not service.delete_service(service_id):
        raise NotFoundError(
            "The service you are trying to delete was not found or is already deleted."
        )
    return build_success_envelope(message="Service deleted successfully.")
