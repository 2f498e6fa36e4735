from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import Optional, Union

ClockValue = Union[time, timedelta, str, None]


@dataclass(frozen=True)
class ClassSession:
    """One scheduled occurrence of a class.

    start_time/end_time are kept as read from storage; the window evaluator
    parses them so malformed values surface as configuration errors.
    """

    class_id: str
    class_date: date
    start_time: ClockValue
    end_time: ClockValue
    institution_id: str
    title: Optional[str] = None
