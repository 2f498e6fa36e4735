from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: attendance of one student in one class.

    (class_id, student_id) is unique in storage.
    """

    class_id: str
    student_id: str
    status: AttendanceStatus
    confirmed_at: Optional[datetime]
    confirmed_by: Optional[str]
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    distance_from_institution: Optional[float] = None
    notes: Optional[str] = None
    attendance_id: Optional[str] = None
