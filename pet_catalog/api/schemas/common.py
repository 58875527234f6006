# This file defines shared schema pieces reused by multiple API endpoints.
# It exists so pagination and error payloads stay consistent across entities.
# These classes are also used by tests to validate response shape stability.

from __future__ import annotations

from pydantic import BaseModel, Field


class PaginationMetadata(BaseModel):
    currentPage: int = Field(ge=1)
    totalPages: int = Field(ge=0)
    totalItems: int = Field(ge=0)
    limit: int = Field(ge=1)


class FieldErrorV1(BaseModel):
    field: str
    reason: str
    message: str


class ErrorResponse(BaseModel):
    status: str = "error"
    statusCode: int
    message: str
    errors: list[FieldErrorV1] | None = None
    requestId: str | None = None
