"""Query-resolution engine: raw list parameters in, FilterSpec (or field errors) out."""

from pet_catalog.query.errors import NotFoundError, ReasonCode, UpstreamError, ValidationError
from pet_catalog.query.executor import QueryExecutor, QueryResult
from pet_catalog.query.field_schema import EntityKind
from pet_catalog.query.filter_spec import (
    FilterSpec,
    FilterSpecResult,
    KeywordClause,
    Predicate,
    QueryPolicy,
    RangeValue,
    build_filter_spec,
)
from pet_catalog.query.geo import GeoClause, GeoPoint
from pet_catalog.query.pagination import PaginationClause, build_pagination_metadata

__all__ = [
    "EntityKind",
    "FilterSpec",
    "FilterSpecResult",
    "GeoClause",
    "GeoPoint",
    "KeywordClause",
    "NotFoundError",
    "PaginationClause",
    "Predicate",
    "QueryExecutor",
    "QueryPolicy",
    "QueryResult",
    "RangeValue",
    "ReasonCode",
    "UpstreamError",
    "ValidationError",
    "build_filter_spec",
    "build_pagination_metadata",
]
