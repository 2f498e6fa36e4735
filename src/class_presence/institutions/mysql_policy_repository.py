from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_TOLERANCE_MINUTES
from ..core.enums import ValidationMethod
from ..core.exceptions import ConfigurationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import InstitutionAttendancePolicy
from .repository import PolicyRepository


class MySQLPolicyRepository(PolicyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_institution(self, institution_id: str) -> Optional[InstitutionAttendancePolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT institution_id, attendance_validation_method, attendance_window_minutes,
                       latitude, longitude, geolocation_radius
                FROM institution_settings
                WHERE institution_id=%s
                """,
                (institution_id,),
            )
            r = fetchone(cur)
            if not r:
                return None

            method = r.get("attendance_validation_method") or ValidationMethod.MANUAL.value
            try:
                validation_method = ValidationMethod(method)
            except ValueError as e:
                raise ConfigurationError(f"Unknown validation method: {method!r}") from e

            window = r.get("attendance_window_minutes")
            return InstitutionAttendancePolicy(
                institution_id=str(r["institution_id"]),
                validation_method=validation_method,
                tolerance_minutes=DEFAULT_TOLERANCE_MINUTES if window is None else int(window),
                latitude=None if r.get("latitude") is None else float(r["latitude"]),
                longitude=None if r.get("longitude") is None else float(r["longitude"]),
                radius_meters=None if r.get("geolocation_radius") is None else int(r["geolocation_radius"]),
            )

    def update_geolocation(
        self,
        *,
        institution_id: str,
        latitude: float,
        longitude: float,
        radius_meters: int,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # rowcount counts changed rows only, so saving identical values reports 0.
            cur.execute(
                "SELECT institution_id FROM institution_settings WHERE institution_id=%s",
                (institution_id,),
            )
            if not fetchone(cur):
                return False

            cur.execute(
                """
                UPDATE institution_settings
                SET latitude=%s, longitude=%s, geolocation_radius=%s
                WHERE institution_id=%s
                """,
                (latitude, longitude, int(radius_meters), institution_id),
            )
            return True
