# This file executes FilterSpecs against the relational catalog tables.
# It translates predicates, keyword and proximity clauses into parameterized SQL and shapes rows for the API.
# Column names never come from request input; they are looked up in per-entity column tables.
# Distance math runs in SQL so the radius filter, ordering, and pagination stay in one query.

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from pet_catalog.api.api_config import ApiConfig
from pet_catalog.api.db_access import DatabaseClient
from pet_catalog.query.errors import UpstreamError
from pet_catalog.query.executor import QueryResult
from pet_catalog.query.field_schema import EntityKind
from pet_catalog.query.filter_spec import FilterSpec, RangeValue
from pet_catalog.query.geo import EARTH_RADIUS_KM


@dataclass(frozen=True)
class EntityTable:
    config_attr: str
    columns: Mapping[str, str]


PET_TABLE = EntityTable(
    config_attr="pets_table_name",
    columns={
        "id": "id",
        "name": "name",
        "type": "type",
        "breed": "breed",
        "age": "age",
        "gender": "gender",
        "city": "city",
        "isAdopted": "is_adopted",
        "description": "description",
        "createdAt": "created_at",
    },
)

CLINIC_TABLE = EntityTable(
    config_attr="clinics_table_name",
    columns={
        "id": "id",
        "name": "name",
        "city": "city",
        "address": "address",
        "phone": "phone",
        "latitude": "latitude",
        "longitude": "longitude",
        "isOpenNow": "is_open_now",
        "isEmergency": "is_emergency",
        "createdAt": "created_at",
    },
)

ARTICLE_TABLE = EntityTable(
    config_attr="articles_table_name",
    columns={
        "id": "id",
        "title": "title",
        "summary": "summary",
        "content": "content",
        "petType": "pet_type",
        "category": "category",
        "author": "author",
        "createdAt": "created_at",
    },
)

ENTITY_TABLES: dict[EntityKind, EntityTable] = {
    EntityKind.PET: PET_TABLE,
    EntityKind.CLINIC: CLINIC_TABLE,
    EntityKind.ARTICLE: ARTICLE_TABLE,
}


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def haversine_sql(alias: str = "t") -> str:
    """Great-circle distance in km from the bound center to each row's coordinates."""

    return (
        f"({EARTH_RADIUS_KM} * 2 * ASIN(SQRT("
        f"POWER(SIN(RADIANS({alias}.latitude - :geo_lat) / 2), 2) + "
        f"COS(RADIANS(:geo_lat)) * COS(RADIANS({alias}.latitude)) * "
        f"POWER(SIN(RADIANS({alias}.longitude - :geo_lng) / 2), 2))))"
    )


class SqlQueryExecutor:
    """QueryExecutor backed by SQLAlchemy text queries."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.table_names = {
            kind: self.config.validate_table_name(getattr(self.config, table.config_attr))
            for kind, table in ENTITY_TABLES.items()
        }

    def execute(self, spec: FilterSpec) -> QueryResult:
        try:
            return self._execute(spec)
        except SQLAlchemyError as exc:
            raise UpstreamError(f"{spec.kind.value} list query failed") from exc

    def fetch_by_id(self, kind: EntityKind, record_id: str) -> dict[str, Any] | None:
        table = ENTITY_TABLES[kind]
        query = f"""
        SELECT {self._select_list(table)}
        FROM {self.table_names[kind]} t
        WHERE t.id = :record_id
        LIMIT 1
        """
        try:
            row = self.db.fetch_one(query, {"record_id": record_id})
        except SQLAlchemyError as exc:
            raise UpstreamError(f"{kind.value} lookup failed") from exc
        return self._shape_row(table, row) if row is not None else None

    def _execute(self, spec: FilterSpec) -> QueryResult:
        table = ENTITY_TABLES[spec.kind]
        table_name = self.table_names[spec.kind]
        where_clauses, params = self._where_clauses(spec, table)

        distance_sql = None
        if spec.geo is not None:
            distance_sql = haversine_sql()
            box = spec.geo.bounding_box
            where_clauses.extend(
                [
                    "t.latitude BETWEEN :geo_min_lat AND :geo_max_lat",
                    "t.longitude BETWEEN :geo_min_lng AND :geo_max_lng",
                    f"{distance_sql} <= :geo_radius_km",
                ]
            )
            params.update(
                {
                    "geo_lat": spec.geo.center.latitude,
                    "geo_lng": spec.geo.center.longitude,
                    "geo_radius_km": spec.geo.radius_km,
                    "geo_min_lat": box.min_latitude,
                    "geo_max_lat": box.max_latitude,
                    "geo_min_lng": box.min_longitude,
                    "geo_max_lng": box.max_longitude,
                }
            )

        where_sql = " AND ".join(where_clauses) if where_clauses else "1 = 1"

        count_query = f"""
        SELECT COUNT(*) AS total_count
        FROM {table_name} t
        WHERE {where_sql}
        """
        total_count = int(self.db.fetch_scalar(count_query, params) or 0)
        if total_count == 0:
            return QueryResult(records=[], total_count=0)

        select_sql = self._select_list(table)
        if distance_sql is not None:
            select_sql = f"{select_sql}, {distance_sql} AS distance_km"
            order_sql = "distance_km ASC, t.id ASC"
        else:
            order_sql = "t.created_at ASC, t.id ASC"

        data_query = f"""
        SELECT {select_sql}
        FROM {table_name} t
        WHERE {where_sql}
        ORDER BY {order_sql}
        LIMIT :limit OFFSET :offset
        """
        page_params = dict(params)
        page_params["limit"] = spec.pagination.limit
        page_params["offset"] = spec.pagination.skip
        raw_rows = self.db.fetch_all(data_query, page_params)

        records = [self._shape_row(table, row) for row in raw_rows]
        return QueryResult(records=records, total_count=total_count)

    @staticmethod
    def _where_clauses(spec: FilterSpec, table: EntityTable) -> tuple[list[str], dict[str, Any]]:
        where_clauses: list[str] = []
        params: dict[str, Any] = {}

        for predicate in spec.predicates:
            column = f"t.{table.columns[predicate.field]}"
            param = f"p_{predicate.field}"
            value = predicate.value
            if isinstance(value, RangeValue):
                if value.min is not None:
                    where_clauses.append(f"{column} >= :{param}_min")
                    params[f"{param}_min"] = value.min
                if value.max is not None:
                    where_clauses.append(f"{column} <= :{param}_max")
                    params[f"{param}_max"] = value.max
            elif isinstance(value, str):
                where_clauses.append(f"LOWER({column}) = LOWER(:{param})")
                params[param] = value
            else:
                where_clauses.append(f"{column} = :{param}")
                params[param] = value

        if spec.keyword is not None:
            matches = [
                f"LOWER(t.{table.columns[name]}) LIKE :keyword ESCAPE '\\'"
                for name in spec.keyword.fields
            ]
            where_clauses.append("(" + " OR ".join(matches) + ")")
            params["keyword"] = f"%{escape_like(spec.keyword.text.lower())}%"

        return where_clauses, params

    @staticmethod
    def _select_list(table: EntityTable) -> str:
        return ", ".join(f"t.{column}" for column in table.columns.values())

    @staticmethod
    def _shape_row(table: EntityTable, row: Mapping[str, Any]) -> dict[str, Any]:
        shaped = {name: row.get(column) for name, column in table.columns.items()}
        if shaped.get("id") is not None:
            shaped["id"] = str(shaped["id"])
        for name in ("isAdopted", "isOpenNow", "isEmergency"):
            if name in shaped and shaped[name] is not None:
                shaped[name] = bool(shaped[name])
        if row.get("distance_km") is not None:
            shaped["distanceKm"] = round(float(row["distance_km"]), 3)
        return shaped
