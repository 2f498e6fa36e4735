from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Optional, Union

from ..classes.repository import ClassSessionRepository
from ..common.geo import Coordinate
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LOCATION_TIMEOUT_MS, DEFAULT_LOCATION_WORKERS
from ..core.enums import AttendanceStatus, LocationErrorCode, ValidationMethod
from ..core.exceptions import ConfigurationError
from ..institutions.repository import PolicyRepository
from .geofence import GeofenceValidator
from .location import LocationProvider, locate, location_unavailable
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .results import (
    AlreadyConfirmed,
    Cancelled,
    ConfirmationResult,
    Confirmed,
    InRange,
    LocationUnavailable,
    Misconfigured,
    NotFound,
    WindowOpen,
    WrongValidationMethod,
)
from .window import WindowEvaluator

logger = logging.getLogger(__name__)

PositionSource = Callable[[], Union[Coordinate, LocationUnavailable]]


class ConfirmationService:
    """Student self-confirmation of presence by geolocation.

    Checks run in a fixed order and stop at the first failure: class and
    policy lookup, existing record, validation method, time window, geofence.
    The device position is only requested once everything before the
    geofence has passed.

    Location lookups run on `executor`. A provider that never returns keeps
    its worker, so a shared executor should be sized for that; when none is
    given the service creates its own and `close()` shuts it down.

    Session and policy are read on every call. The existing-record check only
    saves a location prompt; the repository's atomic insert is what keeps
    (class_id, student_id) unique.
    """

    def __init__(
        self,
        classes: ClassSessionRepository,
        policies: PolicyRepository,
        attendance: AttendanceRepository,
        *,
        window: WindowEvaluator | None = None,
        geofence: GeofenceValidator | None = None,
        location_timeout_ms: int = DEFAULT_LOCATION_TIMEOUT_MS,
        executor: Executor | None = None,
    ):
        self._classes = classes
        self._policies = policies
        self._attendance = attendance
        self._window = window or WindowEvaluator()
        self._geofence = geofence or GeofenceValidator()
        self._location_timeout_ms = int(location_timeout_ms)
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=DEFAULT_LOCATION_WORKERS, thread_name_prefix="locate"
        )

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    def confirm(
        self,
        class_id: str,
        student_id: str,
        student_coord: Optional[Coordinate],
        now: datetime,
    ) -> ConfirmationResult:
        """Confirm with a position the caller already has."""

        def position() -> Union[Coordinate, LocationUnavailable]:
            if student_coord is None:
                return location_unavailable(LocationErrorCode.POSITION_UNAVAILABLE)
            return student_coord

        return self._confirm(class_id, student_id, now, position, cancel=None)

    def confirm_attendance(
        self,
        class_id: str,
        student_id: str,
        now: datetime,
        *,
        locator: LocationProvider,
        cancel: threading.Event | None = None,
    ) -> ConfirmationResult:
        """Confirm, asking `locator` for the position when it is needed.

        Setting `cancel` makes the attempt return Cancelled without writing.
        """

        def position() -> Union[Coordinate, LocationUnavailable]:
            return locate(locator, timeout_ms=self._location_timeout_ms, executor=self._executor)

        return self._confirm(class_id, student_id, now, position, cancel=cancel)

    def _confirm(
        self,
        class_id: str,
        student_id: str,
        now: datetime,
        position: PositionSource,
        *,
        cancel: threading.Event | None,
    ) -> ConfirmationResult:
        student_id = require_non_empty(student_id, "Student")

        session = self._classes.get_by_id(class_id) if class_id else None
        if not session:
            return NotFound(what="class")
        try:
            policy = self._policies.get_for_institution(session.institution_id)
        except ConfigurationError as e:
            logger.warning("Policy of institution %s is unusable: %s", session.institution_id, e)
            return Misconfigured(reason=str(e))
        if not policy:
            return NotFound(what="institution")

        existing = self._attendance.get_for_class_and_student(session.class_id, student_id)
        if existing:
            return AlreadyConfirmed(confirmed_at=existing.confirmed_at)

        if policy.validation_method != ValidationMethod.GEOLOCATION:
            return WrongValidationMethod(method=policy.validation_method.value)

        try:
            window = self._window.evaluate(session, policy.tolerance_minutes, now)
            if not isinstance(window, WindowOpen):
                logger.debug("Class %s refused for %s: %s", session.class_id, student_id, window.kind)
                return window

            institution = policy.location
            if institution is None:
                raise ConfigurationError("Institution location is not configured")

            if cancel is not None and cancel.is_set():
                return Cancelled()
            student_coord = position()
            if isinstance(student_coord, LocationUnavailable):
                return student_coord

            fence = self._geofence.validate(student_coord, institution, policy.effective_radius)
        except ConfigurationError as e:
            logger.warning("Confirmation for class %s blocked by configuration: %s", session.class_id, e)
            return Misconfigured(reason=str(e))

        if not isinstance(fence, InRange):
            logger.debug("Class %s refused for %s: %s", session.class_id, student_id, fence.kind)
            return fence

        # Stored as DATETIME, which keeps whole seconds.
        confirmed_at = now.replace(microsecond=0)
        if cancel is not None and cancel.is_set():
            return Cancelled()

        record = AttendanceRecord(
            class_id=session.class_id,
            student_id=student_id,
            status=AttendanceStatus.PRESENT,
            confirmed_at=confirmed_at,
            confirmed_by=student_id,
            latitude=student_coord.latitude,
            longitude=student_coord.longitude,
            distance_from_institution=fence.distance_meters,
        )
        if not self._attendance.insert_if_absent(record):
            current = self._attendance.get_for_class_and_student(session.class_id, student_id)
            return AlreadyConfirmed(confirmed_at=current.confirmed_at if current else None)

        logger.info(
            "Attendance confirmed: class=%s student=%s distance=%.1fm",
            session.class_id,
            student_id,
            fence.distance_meters,
        )
        return Confirmed(distance_meters=fence.distance_meters, confirmed_at=confirmed_at)
