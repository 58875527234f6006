"""
Unit tests for page/limit resolution and pagination metadata.
"""

from __future__ import annotations

import pytest

from pet_catalog.query.errors import ReasonCode
from pet_catalog.query.pagination import (
    PaginationClause,
    build_pagination_metadata,
    compute_total_pages,
    resolve_pagination,
)


def test_defaults_apply_when_absent() -> None:
    resolution = resolve_pagination(page=None, limit=None)

    assert resolution.errors == ()
    assert resolution.clause == PaginationClause(page=1, limit=10)
    assert resolution.clause.skip == 0


def test_limit_above_policy_is_clamped() -> None:
    resolution = resolve_pagination(page="3", limit="500")

    assert resolution.clause == PaginationClause(page=3, limit=100)
    assert resolution.clause.skip == 200


def test_page_zero_resolves_to_first_page() -> None:
    assert resolve_pagination(page="0", limit=None).clause == PaginationClause(page=1, limit=10)


@pytest.mark.parametrize(
    ("page", "limit", "field"),
    [
        (None, "0", "limit"),
        (None, "-5", "limit"),
        (None, "ten", "limit"),
        (None, "2.5", "limit"),
        ("-1", None, "page"),
        ("first", None, "page"),
        ("99999999999999999999", None, "page"),
        ("92233720368547760", "100", "page"),
    ],
)
def test_malformed_values_are_invalid_range(page: str | None, limit: str | None, field: str) -> None:
    resolution = resolve_pagination(page=page, limit=limit)

    assert resolution.clause is None
    assert [(e.field, e.reason) for e in resolution.errors] == [(field, ReasonCode.INVALID_RANGE)]


def test_custom_policy_bounds() -> None:
    resolution = resolve_pagination(page=None, limit=None, default_limit=2, max_limit=5)
    assert resolution.clause == PaginationClause(page=1, limit=2)
    assert resolve_pagination(page=None, limit="9", max_limit=5).clause.limit == 5


@pytest.mark.parametrize(
    ("total_items", "limit", "expected"),
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (250, 100, 3)],
)
def test_total_pages(total_items: int, limit: int, expected: int) -> None:
    assert compute_total_pages(total_items=total_items, limit=limit) == expected


def test_pagination_metadata_shape() -> None:
    metadata = build_pagination_metadata(clause=PaginationClause(page=2, limit=10), total_items=15)

    assert metadata == {"currentPage": 2, "totalPages": 2, "totalItems": 15, "limit": 10}


def test_largest_storable_offset_is_accepted() -> None:
    resolution = resolve_pagination(page=str(2**62), limit="2")

    assert resolution.errors == ()
    assert resolution.clause.skip == 2**63 - 2
