from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.geo import Coordinate
from ..core.constants import DEFAULT_RADIUS_METERS
from ..core.enums import ValidationMethod


@dataclass(frozen=True)
class InstitutionAttendancePolicy:
    """Attendance settings of one institution.

    latitude/longitude are None until an admin registers the location;
    0.0 is a real coordinate, not "unset".
    """

    institution_id: str
    validation_method: ValidationMethod
    tolerance_minutes: int
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius_meters: Optional[int] = None

    @property
    def location(self) -> Optional[Coordinate]:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(float(self.latitude), float(self.longitude))

    @property
    def effective_radius(self) -> int:
        if self.radius_meters is None:
            return DEFAULT_RADIUS_METERS
        return int(self.radius_meters)
