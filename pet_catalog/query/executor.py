# This file states what the query-resolution engine needs from storage.
# Any backend that can run a FilterSpec and look records up by id can serve the catalog.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from pet_catalog.query.field_schema import EntityKind
from pet_catalog.query.filter_spec import FilterSpec


@dataclass(frozen=True)
class QueryResult:
    records: list[dict[str, Any]] = field(default_factory=list)
    total_count: int = 0


class QueryExecutor(Protocol):
    """Storage collaborator contract.

    `execute` must honor the whole FilterSpec: predicates, keyword, pagination, and,
    when a GeoClause is present, the radius filter and ascending-distance order.
    Failures propagate to the caller unmodified.
    """

    def execute(self, spec: FilterSpec) -> QueryResult: ...

    def fetch_by_id(self, kind: EntityKind, record_id: str) -> dict[str, Any] | None: ...
