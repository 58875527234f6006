# This file defines liveness, readiness, and version endpoints for API operations.
# It exists so orchestration and monitoring systems can verify service health quickly.
# The readiness check confirms database connectivity and that every catalog table exists.

from __future__ import annotations

import logging
import subprocess
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from pet_catalog.api.api_config import ApiConfig
from pet_catalog.api.db_access import DatabaseClient
from pet_catalog.api.dependencies import get_config, get_database_client
from pet_catalog.api.schemas.health_schemas import (
    HealthResponse,
    ReadinessResponse,
    VersionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _git_commit() -> str | None:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return completed.stdout.strip() or None


@router.get("/health", response_model=HealthResponse)
def health(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        "api_version": config.api_version_label(),
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(
    request: Request,
    config: ConfigDep,
    db: DBDep,
) -> dict[str, object]:
    db_connected = db.can_connect()
    tables_ready = {
        table_name: db_connected and db.table_exists(table_name)
        for table_name in (
            config.pets_table_name,
            config.clinics_table_name,
            config.articles_table_name,
        )
    }
    is_ready = db_connected and all(tables_ready.values())
    if not is_ready:
        logger.warning("Readiness check failed: db_connected=%s tables=%s", db_connected, tables_ready)

    return {
        "api_version": config.api_version_label(),
        "request_id": request.state.request_id,
        "db_connected": db_connected,
        "tables_ready": tables_ready,
        "ready": is_ready,
        "database": "reachable" if db_connected else "unreachable",
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        "api_version": config.api_version_label(),
        "request_id": request.state.request_id,
        "api_version_path": config.api_version_path,
        "app_version": config.app_version,
        "git_commit": _git_commit(),
        "project": config.api_name,
        "version": config.app_version,
        "timestamp": _utc_now(),
    }
