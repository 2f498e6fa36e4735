from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Any

from ..core.exceptions import ConfigurationError


def parse_clock_time(value: Any, *, field_name: str = "time") -> time:
    """Normalize a wall-clock time.

    Accepts:
    - datetime.time
    - datetime.timedelta (mysql-connector returns TIME columns this way)
    - string 'HH:MM' or 'HH:MM:SS'

    Anything else raises ConfigurationError.
    """

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds())
        if total_seconds < 0 or total_seconds >= 86400:
            raise ConfigurationError(f"{field_name} out of range: {value!r}")
        return time(hour=total_seconds // 3600, minute=(total_seconds % 3600) // 60, second=total_seconds % 60)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
            raise ConfigurationError(f"Invalid {field_name}: {value!r}")
        try:
            return time(*(int(p) for p in parts))
        except ValueError as e:
            raise ConfigurationError(f"Invalid {field_name}: {value!r}") from e

    raise ConfigurationError(f"Missing or unsupported {field_name}: {value!r}")


def now_local() -> datetime:
    """Current server wall-clock time, taken as the institution's local time.

    Note: Only the HTTP layer calls this; services receive `now` explicitly.
    The server's TZ must match the institution (see `config/`).
    """
    return datetime.now()
