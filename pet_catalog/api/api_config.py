# This file defines runtime settings for the API layer in one place.
# It exists so pagination policy, proximity defaults, id format, and table names can change without code edits.
# The config loader reads environment variables and applies safe defaults for local development.
# It also validates table names to prevent unsafe SQL identifier usage.

from __future__ import annotations

import os
import re
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pet_catalog.query.filter_spec import DEFAULT_ID_PATTERN, QueryPolicy

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

DEFAULT_TABLE_NAMES = ("pets", "clinics", "articles", "api_request_log")


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Pet Catalog API"
    api_version_path: str = "/api/v1"
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "local"
    database_url: str
    default_page_size: int = 10
    max_page_size: int = 100
    default_radius_km: float = 10.0
    record_id_pattern: str = DEFAULT_ID_PATTERN
    enable_request_logging: bool = False
    allowed_origins: list[str] = Field(default_factory=list)
    pets_table_name: str = "pets"
    clinics_table_name: str = "clinics"
    articles_table_name: str = "articles"
    request_log_table_name: str = "api_request_log"
    app_version: str = "0.1.0"
    allowed_table_names: set[str] = Field(default_factory=set)

    @field_validator("api_version_path")
    @classmethod
    def validate_api_version_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("api_version_path must start with '/'.")
        parts = [part for part in value.split("/") if part]
        if len(parts) < 2 or parts[-1].startswith("v") is False:
            raise ValueError("api_version_path must look like '/api/v1'.")
        return value.rstrip("/")

    @field_validator(
        "pets_table_name",
        "clinics_table_name",
        "articles_table_name",
        "request_log_table_name",
    )
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"Unsafe SQL identifier: {value!r}")
        return value

    @field_validator("default_page_size", "max_page_size")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    @field_validator("default_radius_km")
    @classmethod
    def validate_radius(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("default_radius_km must be greater than 0.")
        return value

    @field_validator("record_id_pattern")
    @classmethod
    def validate_id_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"record_id_pattern is not a valid regex: {exc}") from exc
        return value

    def api_version_label(self) -> str:
        return self.api_version_path.rstrip("/").split("/")[-1]

    def query_policy(self) -> QueryPolicy:
        return QueryPolicy(
            default_limit=min(self.default_page_size, self.max_page_size),
            max_limit=self.max_page_size,
            default_radius_km=self.default_radius_km,
            id_pattern=self.record_id_pattern,
        )

    def validate_table_name(self, table_name: str) -> str:
        if not _IDENTIFIER_RE.match(table_name):
            raise ValueError(f"Unsafe SQL identifier: {table_name!r}")
        if table_name not in self.allowed_table_names:
            raise ValueError(f"Table name is not in allowlist: {table_name!r}")
        return table_name


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def build_allowed_table_names(config_values: dict[str, object]) -> set[str]:
    configured_names = {
        str(config_values["pets_table_name"]),
        str(config_values["clinics_table_name"]),
        str(config_values["articles_table_name"]),
        str(config_values["request_log_table_name"]),
    }
    configured_names.update(DEFAULT_TABLE_NAMES)
    configured_names.update(_env_list("API_ALLOWED_TABLE_NAMES", []))
    for table_name in configured_names:
        if not _IDENTIFIER_RE.match(table_name):
            raise ValueError(f"Unsafe SQL identifier in allowlist: {table_name!r}")
    return configured_names


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Pet Catalog API"),
        "api_version_path": os.getenv("API_VERSION_PATH", "/api/v1"),
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": _env_int("API_PORT", 8000),
        "environment": os.getenv("ENV", "local"),
        "database_url": os.getenv("DATABASE_URL", ""),
        "default_page_size": _env_int("API_DEFAULT_PAGE_SIZE", 10),
        "max_page_size": _env_int("API_MAX_PAGE_SIZE", 100),
        "default_radius_km": _env_float("API_DEFAULT_RADIUS_KM", 10.0),
        "record_id_pattern": os.getenv("API_RECORD_ID_PATTERN", DEFAULT_ID_PATTERN),
        "enable_request_logging": _env_bool("API_ENABLE_REQUEST_LOGGING", False),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "pets_table_name": os.getenv("API_PETS_TABLE_NAME", "pets"),
        "clinics_table_name": os.getenv("API_CLINICS_TABLE_NAME", "clinics"),
        "articles_table_name": os.getenv("API_ARTICLES_TABLE_NAME", "articles"),
        "request_log_table_name": os.getenv("API_REQUEST_LOG_TABLE_NAME", "api_request_log"),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
    }
    if not config_values["database_url"]:
        raise RuntimeError("DATABASE_URL is required for API startup.")

    config_values["allowed_table_names"] = build_allowed_table_names(config_values)

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
