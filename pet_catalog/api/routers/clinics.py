# This file defines clinic listing and lookup endpoints under the versioned API path.
# Supplying isOpenNow and isEmergency switches to the open-emergency mode; lat/lng/radius
# switch to a proximity search ordered by distance, which replaces any city filter.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from pet_catalog.api.dependencies import get_catalog_service
from pet_catalog.api.response_envelope import build_list_envelope, build_object_envelope
from pet_catalog.api.schemas.catalog_schemas import ClinicListResponseV1, ClinicResponseV1
from pet_catalog.api.services.catalog_service import CatalogService
from pet_catalog.query.field_schema import EntityKind

router = APIRouter(prefix="/clinics", tags=["clinics"])
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]


@router.get("", response_model=ClinicListResponseV1)
def list_clinics(request: Request, service: CatalogServiceDep) -> dict[str, object]:
    page = service.list_records(EntityKind.CLINIC, request.query_params)
    if page.spec.mode == "open_emergency":
        message = "Open emergency clinics retrieved successfully."
    else:
        message = "Clinics retrieved successfully."
    return build_list_envelope(message=message, data=page.records, pagination=page.pagination)


@router.get("/{clinic_id}", response_model=ClinicResponseV1)
def get_clinic(clinic_id: str, service: CatalogServiceDep) -> dict[str, object]:
    record = service.get_record(EntityKind.CLINIC, clinic_id)
    return build_object_envelope(message="Clinic retrieved successfully.", data=record)
