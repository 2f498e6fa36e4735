from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..common.geo import Coordinate, haversine_distance
from ..core.enums import LocationErrorCode
from ..core.exceptions import ConfigurationError
from .location import location_unavailable
from .results import GeofenceResult, InRange, OutOfRange


@dataclass(frozen=True)
class GeofenceValidator:
    """Check a reported position against the institution's circular geofence.

    Uses the haversine sphere approximation, which is plenty at campus scale.
    The distance is always returned so it can be stored and shown.
    """

    def validate(
        self,
        student: Optional[Coordinate],
        institution: Optional[Coordinate],
        radius_meters: float,
    ) -> GeofenceResult:
        if institution is None:
            raise ConfigurationError("Institution location is not configured")
        if not institution.is_valid():
            raise ConfigurationError(f"Institution location is invalid: {institution}")
        if radius_meters is None or not math.isfinite(radius_meters) or radius_meters <= 0:
            raise ConfigurationError(f"Invalid geofence radius: {radius_meters!r}")

        if student is None:
            return location_unavailable(LocationErrorCode.POSITION_UNAVAILABLE)
        if not student.is_valid():
            return location_unavailable(LocationErrorCode.POSITION_UNAVAILABLE, "Device reported invalid coordinates.")

        distance = haversine_distance(student, institution)
        if distance <= radius_meters:
            return InRange(distance_meters=distance, allowed_radius=radius_meters)
        return OutOfRange(distance_meters=distance, allowed_radius=radius_meters)
