from __future__ import annotations

from enum import Enum, IntEnum


class Role(str, Enum):
    """User roles used for authorization checks."""

    ADMIN = "admin"
    COORDINATOR = "coordinator"
    TEACHER = "teacher"
    STUDENT = "student"


class ValidationMethod(str, Enum):
    """How an institution wants students to confirm presence."""

    QRCODE = "qrcode"
    GEOLOCATION = "geolocation"
    CODE = "code"
    MANUAL = "manual"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"
    PENDING = "pending"


class LocationErrorCode(IntEnum):
    """Browser GeolocationPositionError codes."""

    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


class ResultCategory(str, Enum):
    """Groups confirmation outcomes by who has to act on them."""

    SUCCESS = "success"
    RETRYABLE = "retryable"
    TERMINAL = "terminal"
    ALREADY_SATISFIED = "already_satisfied"
    CONFIGURATION = "configuration"
    NOT_FOUND = "not_found"
