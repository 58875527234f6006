# This file defines response schemas for pets, clinics, and articles.
# Field names match the public JSON contract, which is camelCase.

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, SerializerFunctionWrapHandler, model_serializer

from pet_catalog.api.schemas.common import PaginationMetadata


class PetV1(BaseModel):
    id: str
    name: str
    type: str
    breed: str | None = None
    age: int | None = None
    gender: str | None = None
    city: str
    isAdopted: bool
    description: str | None = None
    createdAt: datetime | None = None


class ClinicV1(BaseModel):
    id: str
    name: str
    city: str | None = None
    address: str | None = None
    phone: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    isOpenNow: bool
    isEmergency: bool
    distanceKm: float | None = None
    createdAt: datetime | None = None

    @model_serializer(mode="wrap")
    def omit_distance_outside_proximity(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # distanceKm only exists for proximity queries.
        data = handler(self)
        if data.get("distanceKm") is None:
            data.pop("distanceKm", None)
        return data


class ArticleV1(BaseModel):
    id: str
    title: str
    summary: str | None = None
    content: str | None = None
    petType: str
    category: str | None = None
    author: str | None = None
    createdAt: datetime | None = None


class PetListResponseV1(BaseModel):
    message: str
    data: list[PetV1]
    pagination: PaginationMetadata


class PetResponseV1(BaseModel):
    message: str
    data: PetV1


class ClinicListResponseV1(BaseModel):
    message: str
    data: list[ClinicV1]
    pagination: PaginationMetadata


class ClinicResponseV1(BaseModel):
    message: str
    data: ClinicV1


class ArticleListResponseV1(BaseModel):
    message: str
    data: list[ArticleV1]
    pagination: PaginationMetadata


class ArticleResponseV1(BaseModel):
    message: str
    data: ArticleV1
