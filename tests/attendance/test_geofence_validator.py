import math

import pytest

from class_presence.attendance.geofence import GeofenceValidator
from class_presence.attendance.results import InRange, LocationUnavailable, OutOfRange
from class_presence.common.geo import Coordinate, haversine_distance
from class_presence.core.constants import EARTH_RADIUS_METERS
from class_presence.core.enums import LocationErrorCode
from class_presence.core.exceptions import ConfigurationError

SAO_PAULO = Coordinate(-23.5505, -46.6333)


def north_of(origin: Coordinate, meters: float) -> Coordinate:
    return Coordinate(origin.latitude + math.degrees(meters / EARTH_RADIUS_METERS), origin.longitude)


def test_distance_to_self_is_zero():
    assert haversine_distance(SAO_PAULO, SAO_PAULO) == 0.0


def test_distance_is_symmetric():
    rio = Coordinate(-22.9068, -43.1729)
    assert haversine_distance(SAO_PAULO, rio) == pytest.approx(haversine_distance(rio, SAO_PAULO))


def test_distance_between_cities_is_realistic():
    rio = Coordinate(-22.9068, -43.1729)
    # Roughly 360 km as the crow flies.
    assert 355_000 < haversine_distance(SAO_PAULO, rio) < 365_000


def test_antipodal_points_do_not_fail():
    d = haversine_distance(Coordinate(0.0, 0.0), Coordinate(0.0, 180.0))
    assert d == pytest.approx(math.pi * EARTH_RADIUS_METERS)


def test_student_340m_away_is_out_of_range():
    result = GeofenceValidator().validate(north_of(SAO_PAULO, 340), SAO_PAULO, 100)
    assert isinstance(result, OutOfRange)
    assert result.distance_meters == pytest.approx(340, abs=0.5)
    assert result.allowed_radius == 100


def test_student_at_institution_is_in_range():
    result = GeofenceValidator().validate(SAO_PAULO, SAO_PAULO, 100)
    assert result == InRange(distance_meters=0.0, allowed_radius=100)


def test_distance_equal_to_radius_is_in_range():
    student = north_of(SAO_PAULO, 80)
    radius = haversine_distance(student, SAO_PAULO)
    assert isinstance(GeofenceValidator().validate(student, SAO_PAULO, radius), InRange)


def test_zero_coordinates_are_a_real_location():
    result = GeofenceValidator().validate(Coordinate(0.0, 0.0), Coordinate(0.0, 0.0), 100)
    assert isinstance(result, InRange)


def test_missing_institution_location_is_configuration_error():
    with pytest.raises(ConfigurationError):
        GeofenceValidator().validate(SAO_PAULO, None, 100)


@pytest.mark.parametrize("radius", [0, -10, float("nan"), None])
def test_invalid_radius_is_configuration_error(radius):
    with pytest.raises(ConfigurationError):
        GeofenceValidator().validate(SAO_PAULO, SAO_PAULO, radius)


def test_missing_student_location_is_never_in_range():
    result = GeofenceValidator().validate(None, SAO_PAULO, 100)
    assert isinstance(result, LocationUnavailable)
    assert result.code == LocationErrorCode.POSITION_UNAVAILABLE


def test_invalid_student_coordinates_are_unavailable():
    result = GeofenceValidator().validate(Coordinate(123.0, 0.0), SAO_PAULO, 100)
    assert isinstance(result, LocationUnavailable)
