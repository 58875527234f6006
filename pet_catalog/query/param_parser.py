# This file converts raw string query parameters into typed filter values.
# It walks every declared field in one pass and collects all problems instead of stopping early.
# Unknown parameters are ignored so clients can send newer filters to older servers.

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pet_catalog.query.errors import ReasonCode, ValidationError
from pet_catalog.query.field_schema import EntitySchema, FieldSpec, FieldType

_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_BOOLEAN_VALUES = {"true": True, "false": False}


@dataclass(frozen=True)
class ParsedParams:
    values: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    errors: tuple[ValidationError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


class _CoercionFailure(Exception):
    def __init__(self, reason: ReasonCode, message: str) -> None:
        self.reason = reason
        self.message = message
        super().__init__(message)


def clean_raw_value(raw: Any) -> str | None:
    """Trim a raw parameter; blank values count as absent."""

    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def parse_number(text: str) -> float | int:
    """Parse a numeric string, keeping integral values as int."""

    if not _NUMBER_RE.match(text):
        raise ValueError(f"not a number: {text!r}")
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"not a finite number: {text!r}")
    if value.is_integer() and "." not in text and "e" not in text.lower():
        return int(text)
    return value


def parse_boolean(text: str) -> bool:
    try:
        return _BOOLEAN_VALUES[text.lower()]
    except KeyError:
        raise ValueError(f"not a boolean: {text!r}") from None


def _coerce(spec: FieldSpec, text: str) -> Any:
    if spec.type is FieldType.STRING:
        return text

    if spec.type is FieldType.ENUM:
        value = text.lower()
        choices = spec.choices or frozenset()
        if value not in choices:
            allowed = ", ".join(sorted(choices))
            raise _CoercionFailure(
                ReasonCode.INVALID_ENUM, f"{spec.name} must be one of: {allowed}"
            )
        return value

    if spec.type is FieldType.BOOLEAN:
        try:
            return parse_boolean(text)
        except ValueError:
            raise _CoercionFailure(
                ReasonCode.INVALID_TYPE, f"{spec.name} must be 'true' or 'false'"
            ) from None

    try:
        number = parse_number(text)
    except ValueError:
        raise _CoercionFailure(ReasonCode.INVALID_TYPE, f"{spec.name} must be a number") from None

    if spec.type is FieldType.INTEGER:
        if isinstance(number, float):
            if not number.is_integer():
                raise _CoercionFailure(
                    ReasonCode.INVALID_TYPE, f"{spec.name} must be a whole number"
                )
            number = int(number)
    else:
        number = float(number)

    _check_bounds(spec, number)
    return number


def _check_bounds(spec: FieldSpec, number: float | int) -> None:
    if spec.min_value is not None:
        too_low = number <= spec.min_value if spec.exclusive_min else number < spec.min_value
        if too_low:
            comparator = ">" if spec.exclusive_min else ">="
            raise _CoercionFailure(
                ReasonCode.INVALID_RANGE,
                f"{spec.name} must be {comparator} {_format_bound(spec.min_value)}",
            )
    if spec.max_value is not None and number > spec.max_value:
        raise _CoercionFailure(
            ReasonCode.INVALID_RANGE,
            f"{spec.name} must be <= {_format_bound(spec.max_value)}",
        )


def _format_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


def parse_params(raw_params: Mapping[str, Any], schema: EntitySchema) -> ParsedParams:
    """Coerce every declared field of `schema` found in `raw_params`.

    Returned values only contain fields that were supplied and parsed cleanly. A present
    but malformed value is reported as a type/enum/range problem, never as `missing`.
    """

    values: dict[str, Any] = {}
    errors: list[ValidationError] = []

    for spec in schema.fields:
        text = clean_raw_value(raw_params.get(spec.name))
        if text is None:
            if spec.required:
                errors.append(
                    ValidationError(
                        field=spec.name,
                        reason=ReasonCode.MISSING,
                        message=f"{spec.name} is required",
                    )
                )
            continue
        try:
            values[spec.name] = _coerce(spec, text)
        except _CoercionFailure as failure:
            errors.append(
                ValidationError(field=spec.name, reason=failure.reason, message=failure.message)
            )

    return ParsedParams(values=MappingProxyType(values), errors=tuple(errors))


def parse_record_id(raw_id: Any, *, id_pattern: re.Pattern[str]) -> ParsedParams:
    """Validate the format of an opaque record identifier.

    Existence is not checked here; that is the storage collaborator's job.
    """

    text = clean_raw_value(raw_id)
    if text is None:
        return ParsedParams(
            errors=(ValidationError(field="id", reason=ReasonCode.MISSING, message="id is required"),)
        )
    if not id_pattern.fullmatch(text):
        return ParsedParams(
            errors=(
                ValidationError(
                    field="id",
                    reason=ReasonCode.INVALID_TYPE,
                    message=f"id has an invalid format: {text!r}",
                ),
            )
        )
    return ParsedParams(values=MappingProxyType({"id": text}))
