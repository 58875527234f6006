# This file defines pet listing and lookup endpoints under the versioned API path.
# Query parameters are passed through raw; the catalog service owns parsing and validation.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from pet_catalog.api.dependencies import get_catalog_service
from pet_catalog.api.response_envelope import build_list_envelope, build_object_envelope
from pet_catalog.api.schemas.catalog_schemas import PetListResponseV1, PetResponseV1
from pet_catalog.api.services.catalog_service import CatalogService
from pet_catalog.query.field_schema import EntityKind

router = APIRouter(prefix="/pets", tags=["pets"])
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]


@router.get("", response_model=PetListResponseV1)
def list_pets(request: Request, service: CatalogServiceDep) -> dict[str, object]:
    """List pets in a city. Adopted pets are hidden unless `isAdopted=true`."""

    page = service.list_records(EntityKind.PET, request.query_params)
    return build_list_envelope(
        message="Pets retrieved successfully.",
        data=page.records,
        pagination=page.pagination,
    )


@router.get("/{pet_id}", response_model=PetResponseV1)
def get_pet(pet_id: str, service: CatalogServiceDep) -> dict[str, object]:
    record = service.get_record(EntityKind.PET, pet_id)
    return build_object_envelope(message="Pet retrieved successfully.", data=record)
