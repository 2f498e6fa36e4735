from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Optional, Sequence

from ..classes.repository import ClassSessionRepository
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_ATTENDANCE_LIST_LIMIT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import AttendanceRecord
from .repository import AttendanceRepository

_STAFF_ROLES = {Role.ADMIN, Role.COORDINATOR, Role.TEACHER}


class RollCallService:
    """Teacher-driven attendance. Unlike self-confirmation, marks overwrite."""

    def __init__(self, attendance: AttendanceRepository, classes: ClassSessionRepository):
        self._attendance = attendance
        self._classes = classes

    def mark(
        self,
        *,
        current_role: Role,
        marked_by: str,
        class_id: str,
        student_id: str,
        status: AttendanceStatus | str,
        now: datetime,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        if current_role not in _STAFF_ROLES:
            raise AuthorizationError("Only staff can take attendance")

        student_id = require_non_empty(student_id, "Student")
        try:
            status = AttendanceStatus(status)
        except ValueError as e:
            raise ValidationError(f"Invalid status: {status!r}") from e

        session = self._classes.get_by_id(class_id)
        if not session:
            raise ValidationError("Class not found")

        record = AttendanceRecord(
            class_id=session.class_id,
            student_id=student_id,
            status=status,
            confirmed_at=now.replace(microsecond=0),
            confirmed_by=marked_by,
            notes=notes.strip() if notes else None,
        )
        self._attendance.upsert(record)
        return record

    def list_for_class(self, class_id: str, *, limit: int = DEFAULT_ATTENDANCE_LIST_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_class(class_id, limit)

    def summary_for_class(self, class_id: str) -> dict[str, int]:
        counts = Counter(r.status for r in self.list_for_class(class_id))
        return {s.value: counts.get(s, 0) for s in AttendanceStatus}
