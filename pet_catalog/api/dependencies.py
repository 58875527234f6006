# This file provides dependency factories for FastAPI routes and middleware.
# It exists so the database client, query executor, and catalog service are built once and injected.
# Tests override these factories to swap in fake executors without touching a real database.

from __future__ import annotations

from functools import lru_cache

from pet_catalog.api.api_config import ApiConfig, get_api_config
from pet_catalog.api.db_access import DatabaseClient
from pet_catalog.api.services.catalog_service import CatalogService
from pet_catalog.api.services.sql_query_executor import SqlQueryExecutor
from pet_catalog.query.executor import QueryExecutor


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(database_url=config.database_url)


@lru_cache(maxsize=1)
def get_query_executor() -> QueryExecutor:
    return SqlQueryExecutor(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_catalog_service() -> CatalogService:
    return CatalogService(config=get_api_config(), executor=get_query_executor())


def get_config() -> ApiConfig:
    return get_api_config()
