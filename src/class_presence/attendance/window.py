from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..classes.model import ClassSession
from ..common.datetime_utils import parse_clock_time
from ..core.exceptions import ConfigurationError
from .results import Expired, NotYetStarted, WindowOpen, WindowResult, WrongDate


@dataclass(frozen=True)
class WindowEvaluator:
    """Decide whether a class currently accepts self-confirmation.

    The window runs from the scheduled start to the scheduled end plus the
    institution's tolerance. Tolerance only extends the end; nobody can
    confirm before the class starts. Both boundaries are inclusive.

    Times are interpreted in the frame of `now`: a naive `now` means naive
    local wall-clock times, an aware `now` lends its tzinfo to the session.
    """

    def bounds(self, session: ClassSession, tolerance_minutes: int, tzinfo=None) -> tuple[datetime, datetime]:
        if not isinstance(session.class_date, date):
            raise ConfigurationError(f"Class {session.class_id} has no valid date")
        if isinstance(tolerance_minutes, bool) or not isinstance(tolerance_minutes, int) or tolerance_minutes < 0:
            raise ConfigurationError(f"Invalid tolerance: {tolerance_minutes!r}")

        start_time = parse_clock_time(session.start_time, field_name="start time")
        end_time = parse_clock_time(session.end_time, field_name="end time")
        if start_time >= end_time:
            raise ConfigurationError(f"Class {session.class_id} ends before it starts ({start_time} >= {end_time})")

        start = datetime.combine(session.class_date, start_time, tzinfo=tzinfo)
        end = datetime.combine(session.class_date, end_time, tzinfo=tzinfo)
        return start, end + timedelta(minutes=tolerance_minutes)

    def evaluate(self, session: ClassSession, tolerance_minutes: int, now: datetime) -> WindowResult:
        start, closes_at = self.bounds(session, tolerance_minutes, now.tzinfo)

        today = now.date()
        if session.class_date != today:
            return WrongDate(class_date=session.class_date, today=today)
        if now < start:
            return NotYetStarted(starts_at=start)
        if now > closes_at:
            return Expired(expired_at=closes_at)
        return WindowOpen(starts_at=start, closes_at=closes_at)
