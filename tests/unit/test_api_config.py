"""
Unit tests for API configuration loading and the derived query policy.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pet_catalog.api.api_config import load_api_config


def test_defaults_give_catalog_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("API_DEFAULT_PAGE_SIZE", "API_MAX_PAGE_SIZE", "API_DEFAULT_RADIUS_KM"):
        monkeypatch.delenv(name, raising=False)

    config = load_api_config(load_env=False)
    policy = config.query_policy()

    assert policy.default_limit == 10
    assert policy.max_limit == 100
    assert policy.default_radius_km == 10.0
    assert policy.compiled_id_pattern.fullmatch("64b7f0c2a1b2c3d4e5f60718")
    assert config.api_version_label() == "v1"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_MAX_PAGE_SIZE", "50")
    monkeypatch.setenv("API_DEFAULT_RADIUS_KM", "2.5")
    monkeypatch.setenv("API_RECORD_ID_PATTERN", r"[0-9]+")

    policy = load_api_config(load_env=False).query_policy()

    assert policy.max_limit == 50
    assert policy.default_radius_km == 2.5
    assert policy.compiled_id_pattern.fullmatch("123")


def test_database_url_is_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "")
    with pytest.raises(RuntimeError, match="DATABASE_URL is required"):
        load_api_config(load_env=False)


def test_unsafe_table_name_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_PETS_TABLE_NAME", "pets; DROP TABLE pets")
    with pytest.raises((ValueError, ValidationError)):
        load_api_config(load_env=False)


def test_table_outside_allowlist_is_rejected() -> None:
    config = load_api_config(load_env=False)
    with pytest.raises(ValueError, match="allowlist"):
        config.validate_table_name("users")
