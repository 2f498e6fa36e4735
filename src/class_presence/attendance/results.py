"""Outcomes of a self-confirmation attempt.

Every outcome is a frozen dataclass carrying a stable `kind` (used on the
wire) and a `category` telling the caller who has to act on it. The window
evaluator and geofence validator return members of the same family so the
orchestrator can hand their denials back unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import ClassVar, Union

from ..core.enums import LocationErrorCode, ResultCategory


@dataclass(frozen=True)
class Confirmed:
    kind: ClassVar[str] = "confirmed"
    category: ClassVar[ResultCategory] = ResultCategory.SUCCESS

    distance_meters: float
    confirmed_at: datetime


@dataclass(frozen=True)
class AlreadyConfirmed:
    kind: ClassVar[str] = "already_confirmed"
    category: ClassVar[ResultCategory] = ResultCategory.ALREADY_SATISFIED

    confirmed_at: datetime | None


@dataclass(frozen=True)
class NotYetStarted:
    kind: ClassVar[str] = "not_yet_started"
    category: ClassVar[ResultCategory] = ResultCategory.RETRYABLE

    starts_at: datetime


@dataclass(frozen=True)
class Expired:
    kind: ClassVar[str] = "expired"
    category: ClassVar[ResultCategory] = ResultCategory.TERMINAL

    expired_at: datetime


@dataclass(frozen=True)
class WrongDate:
    kind: ClassVar[str] = "wrong_date"
    category: ClassVar[ResultCategory] = ResultCategory.TERMINAL

    class_date: date
    today: date


@dataclass(frozen=True)
class WrongValidationMethod:
    kind: ClassVar[str] = "wrong_validation_method"
    category: ClassVar[ResultCategory] = ResultCategory.CONFIGURATION

    method: str


@dataclass(frozen=True)
class OutOfRange:
    kind: ClassVar[str] = "out_of_range"
    category: ClassVar[ResultCategory] = ResultCategory.RETRYABLE

    distance_meters: float
    allowed_radius: float


@dataclass(frozen=True)
class LocationUnavailable:
    kind: ClassVar[str] = "location_unavailable"
    category: ClassVar[ResultCategory] = ResultCategory.RETRYABLE

    code: LocationErrorCode
    reason: str


@dataclass(frozen=True)
class Misconfigured:
    kind: ClassVar[str] = "configuration_error"
    category: ClassVar[ResultCategory] = ResultCategory.CONFIGURATION

    reason: str


@dataclass(frozen=True)
class NotFound:
    kind: ClassVar[str] = "not_found"
    category: ClassVar[ResultCategory] = ResultCategory.NOT_FOUND

    what: str


@dataclass(frozen=True)
class Cancelled:
    kind: ClassVar[str] = "cancelled"
    category: ClassVar[ResultCategory] = ResultCategory.RETRYABLE


@dataclass(frozen=True)
class WindowOpen:
    starts_at: datetime
    closes_at: datetime


@dataclass(frozen=True)
class InRange:
    distance_meters: float
    allowed_radius: float


WindowResult = Union[WindowOpen, NotYetStarted, Expired, WrongDate]
GeofenceResult = Union[InRange, OutOfRange, LocationUnavailable]
ConfirmationResult = Union[
    Confirmed,
    AlreadyConfirmed,
    NotYetStarted,
    Expired,
    WrongDate,
    WrongValidationMethod,
    OutOfRange,
    LocationUnavailable,
    Misconfigured,
    NotFound,
    Cancelled,
]
