from __future__ import annotations

import logging

from ..common.validators import require_coordinate, require_non_empty, require_positive
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import InstitutionAttendancePolicy
from .repository import PolicyRepository

logger = logging.getLogger(__name__)


class PolicyService:
    def __init__(self, policies: PolicyRepository):
        self._policies = policies

    def get(self, institution_id: str) -> InstitutionAttendancePolicy:
        policy = self._policies.get_for_institution(institution_id)
        if not policy:
            raise ValidationError("Institution settings not found")
        return policy

    def update_geolocation(
        self,
        *,
        current_role: Role,
        institution_id: str,
        latitude,
        longitude,
        radius_meters,
    ) -> InstitutionAttendancePolicy:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can change geolocation settings")

        institution_id = require_non_empty(institution_id, "Institution")
        lat, lon = require_coordinate(latitude, longitude)
        radius = require_positive(radius_meters, "Radius")

        if not self._policies.update_geolocation(
            institution_id=institution_id,
            latitude=lat,
            longitude=lon,
            radius_meters=radius,
        ):
            raise ValidationError("Institution settings not found")

        logger.info("Geolocation updated for institution %s (radius=%sm)", institution_id, radius)
        return self.get(institution_id)
