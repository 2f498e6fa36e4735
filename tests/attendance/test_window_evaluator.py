from datetime import date, datetime, time, timedelta, timezone

import pytest

from class_presence.attendance.results import Expired, NotYetStarted, WindowOpen, WrongDate
from class_presence.attendance.window import WindowEvaluator
from class_presence.classes.model import ClassSession
from class_presence.core.exceptions import ConfigurationError

DAY = date(2026, 2, 1)


def make_session(start="14:00", end="15:00", class_date=DAY) -> ClassSession:
    return ClassSession(class_id="c1", class_date=class_date, start_time=start, end_time=end, institution_id="i1")


def test_within_tolerance_after_end_is_open():
    result = WindowEvaluator().evaluate(make_session(), 15, datetime(2026, 2, 1, 15, 10))
    assert isinstance(result, WindowOpen)
    assert result.closes_at == datetime(2026, 2, 1, 15, 15)


def test_past_tolerance_is_expired():
    result = WindowEvaluator().evaluate(make_session(), 15, datetime(2026, 2, 1, 15, 16))
    assert result == Expired(expired_at=datetime(2026, 2, 1, 15, 15))


@pytest.mark.parametrize("tolerance", [0, 5, 15, 90])
def test_boundaries_are_inclusive(tolerance):
    evaluator = WindowEvaluator()
    start = datetime(2026, 2, 1, 14, 0)
    closes = datetime(2026, 2, 1, 15, 0) + timedelta(minutes=tolerance)

    assert isinstance(evaluator.evaluate(make_session(), tolerance, start), WindowOpen)
    assert isinstance(evaluator.evaluate(make_session(), tolerance, closes), WindowOpen)
    assert evaluator.evaluate(make_session(), tolerance, start - timedelta(seconds=1)) == NotYetStarted(starts_at=start)
    assert evaluator.evaluate(make_session(), tolerance, closes + timedelta(seconds=1)) == Expired(expired_at=closes)


def test_tolerance_does_not_open_window_before_start():
    result = WindowEvaluator().evaluate(make_session(), 60, datetime(2026, 2, 1, 13, 50))
    assert isinstance(result, NotYetStarted)


@pytest.mark.parametrize("hour", [0, 8, 14, 15, 23])
def test_other_day_is_wrong_date_regardless_of_time(hour):
    now = datetime(2026, 2, 2, hour, 30)
    result = WindowEvaluator().evaluate(make_session(), 15, now)
    assert result == WrongDate(class_date=DAY, today=date(2026, 2, 2))


def test_accepts_time_and_timedelta_values():
    session = make_session(start=time(14, 0), end=timedelta(hours=15))
    result = WindowEvaluator().evaluate(session, 0, datetime(2026, 2, 1, 14, 30))
    assert isinstance(result, WindowOpen)


def test_aware_now_uses_its_timezone():
    tz = timezone(timedelta(hours=-3))
    result = WindowEvaluator().evaluate(make_session(), 15, datetime(2026, 2, 1, 14, 0, tzinfo=tz))
    assert isinstance(result, WindowOpen)
    assert result.starts_at.tzinfo is tz


@pytest.mark.parametrize(
    "start,end",
    [("2pm", "15:00"), ("14:00", None), ("25:00", "26:00"), ("15:00", "14:00"), ("14:00", "14:00")],
)
def test_malformed_times_are_configuration_errors(start, end):
    with pytest.raises(ConfigurationError):
        WindowEvaluator().evaluate(make_session(start=start, end=end), 15, datetime(2026, 2, 1, 14, 30))


@pytest.mark.parametrize("tolerance", [-1, None, "15", 1.5])
def test_invalid_tolerance_is_configuration_error(tolerance):
    with pytest.raises(ConfigurationError):
        WindowEvaluator().evaluate(make_session(), tolerance, datetime(2026, 2, 1, 14, 30))
