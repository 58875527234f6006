# This file declares the filterable fields of every catalog entity as data tables.
# Parsing, defaults, and query modes are driven from these tables instead of per-route branching.
# Adding a filter to an entity means adding one FieldSpec row here.

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class EntityKind(str, Enum):
    PET = "pet"
    CLINIC = "clinic"
    ARTICLE = "article"


class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ENUM = "enum"


class FieldRole(str, Enum):
    """Where a parsed value ends up in the FilterSpec."""

    PREDICATE = "predicate"
    RANGE_MIN = "range_min"
    RANGE_MAX = "range_max"
    GEO = "geo"
    KEYWORD = "keyword"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    type: FieldType
    required: bool = False
    choices: frozenset[str] | None = None
    default: object | None = None
    min_value: float | None = None
    max_value: float | None = None
    exclusive_min: bool = False
    role: FieldRole = FieldRole.PREDICATE
    target: str | None = None

    @property
    def predicate_field(self) -> str:
        return self.target or self.name


@dataclass(frozen=True)
class QueryMode:
    """Named combination of parameters that switches on a specific query behavior.

    The mode activates as soon as any of its fields is supplied; from then on every
    field must be present and carry the required value.
    """

    name: str
    description: str
    required_values: Mapping[str, object]


@dataclass(frozen=True)
class EntitySchema:
    kind: EntityKind
    label: str
    plural_label: str
    fields: tuple[FieldSpec, ...]
    modes: tuple[QueryMode, ...] = ()
    keyword_fields: tuple[str, ...] = ()
    supports_geo: bool = False
    field_index: Mapping[str, FieldSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {spec.name: spec for spec in self.fields}
        object.__setattr__(self, "field_index", MappingProxyType(index))

    def get(self, name: str) -> FieldSpec | None:
        return self.field_index.get(name)

    def fields_with_role(self, role: FieldRole) -> tuple[FieldSpec, ...]:
        return tuple(spec for spec in self.fields if spec.role is role)


PET_TYPES = frozenset({"dog", "cat"})
PET_GENDERS = frozenset({"male", "female"})

OPEN_EMERGENCY_MODE = QueryMode(
    name="open_emergency",
    description="find clinics that are open now and take emergencies",
    required_values=MappingProxyType({"isOpenNow": True, "isEmergency": True}),
)

PET_SCHEMA = EntitySchema(
    kind=EntityKind.PET,
    label="Pet",
    plural_label="Pets",
    fields=(
        FieldSpec("city", FieldType.STRING, required=True),
        FieldSpec("type", FieldType.ENUM, choices=PET_TYPES),
        FieldSpec("gender", FieldType.ENUM, choices=PET_GENDERS),
        FieldSpec("isAdopted", FieldType.BOOLEAN, default=False),
        FieldSpec("minAge", FieldType.INTEGER, min_value=0, role=FieldRole.RANGE_MIN, target="age"),
        FieldSpec("maxAge", FieldType.INTEGER, min_value=0, role=FieldRole.RANGE_MAX, target="age"),
    ),
)

CLINIC_SCHEMA = EntitySchema(
    kind=EntityKind.CLINIC,
    label="Clinic",
    plural_label="Clinics",
    fields=(
        FieldSpec("isOpenNow", FieldType.BOOLEAN),
        FieldSpec("isEmergency", FieldType.BOOLEAN),
        FieldSpec("city", FieldType.STRING),
        FieldSpec("lat", FieldType.NUMBER, min_value=-90, max_value=90, role=FieldRole.GEO),
        FieldSpec("lng", FieldType.NUMBER, min_value=-180, max_value=180, role=FieldRole.GEO),
        FieldSpec("radius", FieldType.NUMBER, min_value=0, exclusive_min=True, role=FieldRole.GEO),
    ),
    modes=(OPEN_EMERGENCY_MODE,),
    supports_geo=True,
)

ARTICLE_SCHEMA = EntitySchema(
    kind=EntityKind.ARTICLE,
    label="Article",
    plural_label="Articles",
    fields=(
        FieldSpec("petType", FieldType.ENUM, required=True, choices=PET_TYPES),
        FieldSpec("category", FieldType.STRING),
        FieldSpec("keyword", FieldType.STRING, role=FieldRole.KEYWORD),
    ),
    keyword_fields=("title", "summary"),
)

ENTITY_SCHEMAS: Mapping[EntityKind, EntitySchema] = MappingProxyType(
    {
        EntityKind.PET: PET_SCHEMA,
        EntityKind.CLINIC: CLINIC_SCHEMA,
        EntityKind.ARTICLE: ARTICLE_SCHEMA,
    }
)


def schema_for(kind: EntityKind) -> EntitySchema:
    return ENTITY_SCHEMAS[kind]
