# This file defines the error taxonomy shared by the query-resolution engine and the API layer.
# Field-level problems are plain data so one response can report every bad parameter at once.
# Lookup misses and storage failures are exceptions because they end the request outright.

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum


class ReasonCode(str, Enum):
    MISSING = "missing"
    INVALID_ENUM = "invalid_enum"
    INVALID_TYPE = "invalid_type"
    INVALID_RANGE = "invalid_range"
    CONFLICTING = "conflicting"


@dataclass(frozen=True)
class ValidationError:
    """One field-attributable problem with a request parameter."""

    field: str
    reason: ReasonCode
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "reason": self.reason.value, "message": self.message}


def summarize_errors(errors: Sequence[ValidationError]) -> str:
    """Join field errors into one human-readable sentence."""

    if not errors:
        return "Invalid request parameters."
    return "Invalid request parameters: " + "; ".join(error.message for error in errors)


class NotFoundError(Exception):
    """Raised when a single-entity lookup finds no record."""

    def __init__(self, *, entity_label: str, record_id: str) -> None:
        self.entity_label = entity_label
        self.record_id = record_id
        super().__init__(f"{entity_label} not found: {record_id}")


class UpstreamError(Exception):
    """Raised when the storage collaborator fails to answer a query."""
