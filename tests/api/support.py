# This file provides shared helpers for API endpoint tests.
# It exists so tests can swap in fake query executors without touching real databases.
# The helpers build consistent config objects and scoped TestClient contexts.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi.testclient import TestClient

from pet_catalog.api.api_config import ApiConfig, build_allowed_table_names
from pet_catalog.api.app import app
from pet_catalog.api.dependencies import get_catalog_service, get_config, get_database_client
from pet_catalog.api.services.catalog_service import CatalogService
from pet_catalog.query.executor import QueryResult
from pet_catalog.query.field_schema import EntityKind
from pet_catalog.query.filter_spec import FilterSpec

PET_ID = "64b7f0c2a1b2c3d4e5f60718"
CLINIC_ID = "64b7f0c2a1b2c3d4e5f60719"
ARTICLE_ID = "64b7f0c2a1b2c3d4e5f6071a"
MISSING_ID = "000000000000000000000000"


def build_test_config(**overrides: Any) -> ApiConfig:
    """Create deterministic API config for tests."""

    values: dict[str, Any] = {
        "api_name": "Test Pet Catalog API",
        "api_version_path": "/api/v1",
        "host": "0.0.0.0",
        "port": 8000,
        "environment": "test",
        "database_url": "sqlite+pysqlite:///:memory:",
        "default_page_size": 10,
        "max_page_size": 100,
        "default_radius_km": 10.0,
        "enable_request_logging": False,
        "allowed_origins": [],
        "pets_table_name": "pets",
        "clinics_table_name": "clinics",
        "articles_table_name": "articles",
        "request_log_table_name": "api_request_log",
        "app_version": "0.1.0",
    }
    values.update(overrides)
    values["allowed_table_names"] = build_allowed_table_names(values)
    return ApiConfig(**values)


SAMPLE_RECORDS: dict[EntityKind, dict[str, Any]] = {
    EntityKind.PET: {
        "id": PET_ID,
        "name": "Luna",
        "type": "cat",
        "breed": "Siamese",
        "age": 2,
        "gender": "female",
        "city": "Nablus",
        "isAdopted": False,
        "description": "Calm indoor cat.",
        "createdAt": "2026-03-01T10:00:00+00:00",
    },
    EntityKind.CLINIC: {
        "id": CLINIC_ID,
        "name": "Al-Quds Vet Center",
        "city": "Ramallah",
        "address": "Main St 4",
        "phone": "+970-2-000000",
        "latitude": 31.9,
        "longitude": 35.2,
        "isOpenNow": True,
        "isEmergency": True,
    },
    EntityKind.ARTICLE: {
        "id": ARTICLE_ID,
        "title": "Feeding your puppy",
        "summary": "How often and what to feed.",
        "content": "Puppies need...",
        "petType": "dog",
        "category": "nutrition",
        "author": "Dr. Haddad",
    },
}


class FakeQueryExecutor:
    """Records every FilterSpec it receives and serves canned records."""

    def __init__(
        self,
        *,
        records: list[dict[str, Any]] | None = None,
        total_count: int | None = None,
        by_id: dict[str, dict[str, Any]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.records = records
        self.total_count = total_count
        self.by_id = by_id
        self.error = error
        self.specs: list[FilterSpec] = []
        self.lookups: list[tuple[EntityKind, str]] = []

    def execute(self, spec: FilterSpec) -> QueryResult:
        self.specs.append(spec)
        if self.error is not None:
            raise self.error
        records = self.records if self.records is not None else [SAMPLE_RECORDS[spec.kind]]
        total = self.total_count if self.total_count is not None else len(records)
        return QueryResult(records=records, total_count=total)

    def fetch_by_id(self, kind: EntityKind, record_id: str) -> dict[str, Any] | None:
        self.lookups.append((kind, record_id))
        if self.error is not None:
            raise self.error
        if self.by_id is not None:
            return self.by_id.get(record_id)
        sample = SAMPLE_RECORDS[kind]
        return sample if sample["id"] == record_id else None

    @property
    def last_spec(self) -> FilterSpec:
        return self.specs[-1]


class FakeDBClient:
    """Simple fake DB dependency for health/readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = existing_tables or {"pets", "clinics", "articles"}

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        return self._connected and table_name in self._tables

    def log_request(self, **_: Any) -> None:
        return None


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
    executor: Any | None = None,
    raise_server_exceptions: bool = True,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()
    resolved_executor = executor or FakeQueryExecutor()
    service = CatalogService(config=resolved_config, executor=resolved_executor)

    app.dependency_overrides[get_config] = lambda: resolved_config
    app.dependency_overrides[get_catalog_service] = lambda: service
    if db_client is not None:
        app.dependency_overrides[get_database_client] = lambda: db_client

    try:
        with TestClient(app, raise_server_exceptions=raise_server_exceptions) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
