# This file handles pagination for every list query.
# It resolves page/limit before the query runs and derives the pagination envelope after it.
# Malformed values are reported, and only well-formed values above policy bounds are clamped.

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from pet_catalog.query.errors import ReasonCode, ValidationError
from pet_catalog.query.param_parser import clean_raw_value

DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Largest row offset a signed 64-bit storage integer can carry.
MAX_OFFSET = 2**63 - 1

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class PaginationClause:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PaginationResolution:
    clause: PaginationClause | None
    errors: tuple[ValidationError, ...] = ()


def _parse_integer(name: str, raw: Any, errors: list[ValidationError]) -> int | None:
    text = clean_raw_value(raw)
    if text is None:
        return None
    if not _INTEGER_RE.match(text):
        errors.append(
            ValidationError(
                field=name,
                reason=ReasonCode.INVALID_RANGE,
                message=f"{name} must be a positive whole number",
            )
        )
        return None
    return int(text)


def resolve_pagination(
    *,
    page: Any,
    limit: Any,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
    max_offset: int = MAX_OFFSET,
) -> PaginationResolution:
    """Resolve raw page/limit into a clamped PaginationClause."""

    errors: list[ValidationError] = []
    requested_page = _parse_integer("page", page, errors)
    requested_limit = _parse_integer("limit", limit, errors)

    if requested_page is not None and requested_page < 0:
        errors.append(
            ValidationError(
                field="page",
                reason=ReasonCode.INVALID_RANGE,
                message="page must be a positive whole number",
            )
        )
    if requested_limit is not None and requested_limit < 1:
        errors.append(
            ValidationError(
                field="limit",
                reason=ReasonCode.INVALID_RANGE,
                message=f"limit must be between 1 and {max_limit}",
            )
        )
    if errors:
        return PaginationResolution(clause=None, errors=tuple(errors))

    resolved_page = max(1, requested_page or 1)
    resolved_limit = min(max(requested_limit or default_limit, 1), max_limit)
    clause = PaginationClause(page=resolved_page, limit=resolved_limit)
    if clause.skip > max_offset:
        error = ValidationError(
            field="page",
            reason=ReasonCode.INVALID_RANGE,
            message=f"page is too large for limit {resolved_limit}",
        )
        return PaginationResolution(clause=None, errors=(error,))
    return PaginationResolution(clause=clause)


def compute_total_pages(*, total_items: int, limit: int) -> int:
    """Compute deterministic total page count."""

    if total_items <= 0:
        return 0
    return ((total_items - 1) // limit) + 1


def build_pagination_metadata(*, clause: PaginationClause, total_items: int) -> dict[str, int]:
    return {
        "currentPage": clause.page,
        "totalPages": compute_total_pages(total_items=total_items, limit=clause.limit),
        "totalItems": total_items,
        "limit": clause.limit,
    }
