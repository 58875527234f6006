# This file implements read services for the pet, clinic, and article endpoints.
# It runs the query-resolution engine and hands the resulting FilterSpec to the storage executor.
# Field errors returned by the engine become one 400 APIError carrying every problem at once.
# Routers stay transport-focused; they only render what this layer returns.

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pet_catalog.api.api_config import ApiConfig
from pet_catalog.api.error_handlers import APIError
from pet_catalog.query.errors import NotFoundError, ValidationError, summarize_errors
from pet_catalog.query.executor import QueryExecutor
from pet_catalog.query.field_schema import EntityKind, schema_for
from pet_catalog.query.filter_spec import FilterSpec, build_filter_spec
from pet_catalog.query.pagination import build_pagination_metadata
from pet_catalog.query.param_parser import parse_record_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogPage:
    spec: FilterSpec
    records: list[dict[str, Any]]
    total_items: int

    @property
    def pagination(self) -> dict[str, int]:
        return build_pagination_metadata(clause=self.spec.pagination, total_items=self.total_items)


def validation_api_error(errors: Sequence[ValidationError]) -> APIError:
    return APIError(
        status_code=400,
        message=summarize_errors(errors),
        errors=[error.as_dict() for error in errors],
    )


class CatalogService:
    """List and lookup operations for every catalog entity."""

    def __init__(self, *, config: ApiConfig, executor: QueryExecutor) -> None:
        self.config = config
        self.executor = executor
        self.policy = config.query_policy()
        self._id_pattern = self.policy.compiled_id_pattern

    def resolve_spec(self, kind: EntityKind, raw_params: Mapping[str, Any]) -> FilterSpec:
        result = build_filter_spec(kind, raw_params, self.policy)
        if result.spec is None:
            logger.info(
                "Rejected %s query; invalid fields: %s",
                kind.value,
                ", ".join(error.field for error in result.errors),
            )
            raise validation_api_error(result.errors)
        return result.spec

    def list_records(self, kind: EntityKind, raw_params: Mapping[str, Any]) -> CatalogPage:
        spec = self.resolve_spec(kind, raw_params)
        result = self.executor.execute(spec)
        return CatalogPage(spec=spec, records=list(result.records), total_items=int(result.total_count))

    def get_record(self, kind: EntityKind, raw_id: Any) -> dict[str, Any]:
        parsed = parse_record_id(raw_id, id_pattern=self._id_pattern)
        if not parsed.ok:
            raise validation_api_error(parsed.errors)

        record_id = str(parsed.values["id"])
        record = self.executor.fetch_by_id(kind, record_id)
        if record is None:
            raise NotFoundError(entity_label=schema_for(kind).label, record_id=record_id)
        return record
