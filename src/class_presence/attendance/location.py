from __future__ import annotations

import logging
from concurrent.futures import Executor
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Union

from ..common.geo import Coordinate
from ..common.validators import require_coordinate
from ..core.enums import LocationErrorCode
from ..core.exceptions import LocationError, ValidationError
from .results import LocationUnavailable

logger = logging.getLogger(__name__)

LOCATION_ERROR_REASONS: dict[LocationErrorCode, str] = {
    LocationErrorCode.PERMISSION_DENIED: (
        "Location permission was denied. Allow location access for this site and try again."
    ),
    LocationErrorCode.POSITION_UNAVAILABLE: (
        "Your position could not be determined. Turn on location services and try again."
    ),
    LocationErrorCode.TIMEOUT: "Getting your location took too long. Try again, ideally near a window or outdoors.",
}

_CODE_ALIASES = {
    "permission_denied": LocationErrorCode.PERMISSION_DENIED,
    "denied": LocationErrorCode.PERMISSION_DENIED,
    "position_unavailable": LocationErrorCode.POSITION_UNAVAILABLE,
    "unavailable": LocationErrorCode.POSITION_UNAVAILABLE,
    "timeout": LocationErrorCode.TIMEOUT,
}


class LocationProvider(Protocol):
    def get_current_location(self, timeout_ms: int) -> Coordinate:
        """Return the device position or raise LocationError."""

        raise NotImplementedError


def location_unavailable(code: LocationErrorCode, reason: Optional[str] = None) -> LocationUnavailable:
    code = LocationErrorCode(code)
    return LocationUnavailable(code=code, reason=reason or LOCATION_ERROR_REASONS[code])


def parse_location_error_code(value: Any) -> LocationErrorCode:
    if isinstance(value, str):
        key = value.strip().lower()
        if key in _CODE_ALIASES:
            return _CODE_ALIASES[key]
        if not key.isdigit():
            raise ValidationError(f"Unknown location error: {value!r}")
        value = int(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Unknown location error: {value!r}")
    try:
        return LocationErrorCode(value)
    except ValueError as e:
        raise ValidationError(f"Unknown location error: {value!r}") from e


@dataclass(frozen=True)
class ReportedLocation:
    """Position (or failure) already obtained by the browser and posted to us."""

    coordinate: Optional[Coordinate] = None
    error_code: Optional[LocationErrorCode] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ReportedLocation":
        if payload.get("location_error") is not None:
            return cls(error_code=parse_location_error_code(payload["location_error"]))
        if payload.get("latitude") is None or payload.get("longitude") is None:
            return cls(error_code=LocationErrorCode.POSITION_UNAVAILABLE)
        lat, lon = require_coordinate(payload["latitude"], payload["longitude"])
        return cls(coordinate=Coordinate(lat, lon))

    def get_current_location(self, timeout_ms: int) -> Coordinate:
        if self.coordinate is None:
            raise LocationError(self.error_code or LocationErrorCode.POSITION_UNAVAILABLE)
        return self.coordinate


def locate(provider: LocationProvider, *, timeout_ms: int, executor: Executor) -> Union[Coordinate, LocationUnavailable]:
    """Ask the provider for a position, giving up after `timeout_ms`."""
    future = executor.submit(provider.get_current_location, timeout_ms)
    try:
        return future.result(timeout=timeout_ms / 1000)
    except FutureTimeout:
        future.cancel()
        logger.info("Location request timed out after %sms", timeout_ms)
        return location_unavailable(LocationErrorCode.TIMEOUT)
    except LocationError as e:
        logger.info("Location unavailable: %s", e)
        return location_unavailable(e.code)
