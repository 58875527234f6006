# This file resolves clinic proximity parameters into a well-formed GeoClause.
# Distances are never computed here; the clause tells the storage layer what region to search
# and that results must be ordered by ascending distance from the center.

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pet_catalog.query.errors import ReasonCode, ValidationError
from pet_catalog.query.param_parser import clean_raw_value

EARTH_RADIUS_KM = 6371.0
DEFAULT_RADIUS_KM = 10.0

GEO_PARAMS = ("lat", "lng", "radius")


class GeoOrder(str, Enum):
    DISTANCE_ASC = "distance_asc"


@dataclass(frozen=True)
class GeoPoint:
    longitude: float
    latitude: float


@dataclass(frozen=True)
class BoundingBox:
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float


@dataclass(frozen=True)
class GeoClause:
    center: GeoPoint
    radius_km: float
    bounding_box: BoundingBox
    order: GeoOrder = GeoOrder.DISTANCE_ASC


@dataclass(frozen=True)
class GeoResolution:
    clause: GeoClause | None = None
    errors: tuple[ValidationError, ...] = ()
    active: bool = False


def bounding_box(center: GeoPoint, radius_km: float) -> BoundingBox:
    """Smallest lat/lng box that contains every point within `radius_km` of `center`.

    Near the poles or across the antimeridian the box spans every longitude; the exact
    distance test downstream still trims it to the circle.
    """

    angular_radius = radius_km / EARTH_RADIUS_KM
    lat_delta = math.degrees(angular_radius)
    min_lat = center.latitude - lat_delta
    max_lat = center.latitude + lat_delta

    if min_lat <= -90.0 or max_lat >= 90.0:
        return BoundingBox(max(-90.0, min_lat), min(90.0, max_lat), -180.0, 180.0)

    # Longitude half-width at the circle's tangent points.
    lng_delta = math.degrees(
        math.asin(math.sin(angular_radius) / math.cos(math.radians(center.latitude)))
    )
    min_lng = center.longitude - lng_delta
    max_lng = center.longitude + lng_delta
    if min_lng < -180.0 or max_lng > 180.0:
        return BoundingBox(min_lat, max_lat, -180.0, 180.0)
    return BoundingBox(min_lat, max_lat, min_lng, max_lng)


def resolve_geo(
    *,
    raw_params: Mapping[str, Any],
    values: Mapping[str, Any],
    default_radius_km: float = DEFAULT_RADIUS_KM,
) -> GeoResolution:
    """Build a GeoClause when any of lat/lng/radius was supplied.

    `values` holds already-parsed fields; a geo parameter that was supplied but failed
    parsing has been reported by the parser and is not reported twice.
    """

    supplied = {name for name in GEO_PARAMS if clean_raw_value(raw_params.get(name)) is not None}
    if not supplied:
        return GeoResolution()

    errors: list[ValidationError] = []
    for name, partner in (("lat", "lng"), ("lng", "lat")):
        if name not in supplied:
            if partner in supplied:
                message = f"{name} is required when {partner} is provided"
            else:
                message = f"{name} and {partner} are required when radius is provided"
            errors.append(ValidationError(field=name, reason=ReasonCode.MISSING, message=message))

    if errors or any(name not in values for name in supplied):
        return GeoResolution(errors=tuple(errors), active=True)

    center = GeoPoint(longitude=float(values["lng"]), latitude=float(values["lat"]))
    radius_km = float(values.get("radius", default_radius_km))
    clause = GeoClause(
        center=center,
        radius_km=radius_km,
        bounding_box=bounding_box(center, radius_km),
    )
    return GeoResolution(clause=clause, active=True)
