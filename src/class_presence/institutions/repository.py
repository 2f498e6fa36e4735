from __future__ import annotations

from typing import Optional, Protocol

from .model import InstitutionAttendancePolicy


class PolicyRepository(Protocol):
    def get_for_institution(self, institution_id: str) -> Optional[InstitutionAttendancePolicy]:
        raise NotImplementedError

    def update_geolocation(
        self,
        *,
        institution_id: str,
        latitude: float,
        longitude: float,
        radius_meters: int,
    ) -> bool:
        raise NotImplementedError
