# This file defines article listing and lookup endpoints under the versioned API path.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from pet_catalog.api.dependencies import get_catalog_service
from pet_catalog.api.response_envelope import build_list_envelope, build_object_envelope
from pet_catalog.api.schemas.catalog_schemas import ArticleListResponseV1, ArticleResponseV1
from pet_catalog.api.services.catalog_service import CatalogService
from pet_catalog.query.field_schema import EntityKind

router = APIRouter(prefix="/articles", tags=["articles"])
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]


@router.get("", response_model=ArticleListResponseV1)
def list_articles(request: Request, service: CatalogServiceDep) -> dict[str, object]:
    """List care articles for a pet type, optionally by category or keyword."""

    page = service.list_records(EntityKind.ARTICLE, request.query_params)
    return build_list_envelope(
        message="Articles retrieved successfully.",
        data=page.records,
        pagination=page.pagination,
    )


@router.get("/{article_id}", response_model=ArticleResponseV1)
def get_article(article_id: str, service: CatalogServiceDep) -> dict[str, object]:
    record = service.get_record(EntityKind.ARTICLE, article_id)
    return build_object_envelope(message="Article retrieved successfully.", data=record)
