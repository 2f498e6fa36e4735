from __future__ import annotations

import pytest

from class_presence.core.enums import Role
from class_presence.core.exceptions import ConfigurationError, ValidationError
from class_presence.institutions.mysql_policy_repository import MySQLPolicyRepository
from class_presence.institutions.service import PolicyService


class FakeCursor:
    """Reports affected rows like MySQL without FOUND_ROWS: unchanged rows count as 0."""

    def __init__(self, table):
        self._table = table
        self._row = None
        self.rowcount = -1

    def execute(self, sql, params=()):
        statement = " ".join(sql.split())
        if statement.startswith("SELECT"):
            self._row = self._table.get(params[0])
            self.rowcount = 1 if self._row else 0
        elif statement.startswith("UPDATE institution_settings"):
            latitude, longitude, radius, institution_id = params
            row = self._table.get(institution_id)
            new = {"latitude": latitude, "longitude": longitude, "geolocation_radius": radius}
            if row is None or all(row[k] == v for k, v in new.items()):
                self.rowcount = 0
            else:
                row.update(new)
                self.rowcount = 1
        else:
            raise AssertionError(f"unexpected statement: {statement}")

    def fetchone(self):
        return dict(self._row) if self._row else None

    def close(self):
        pass


class FakeConnection:
    def __init__(self, table):
        self._table = table
        self.commits = 0

    def cursor(self, dictionary=False):
        return FakeCursor(self._table)

    def commit(self):
        self.commits += 1

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnectionFactory:
    def __init__(self, rows):
        self.table = {r["institution_id"]: dict(r) for r in rows}

    def connect(self, *, with_database=True):
        return FakeConnection(self.table)


def _settings(**overrides):
    row = {
        "institution_id": "i1",
        "attendance_validation_method": "geolocation",
        "attendance_window_minutes": 15,
        "latitude": -23.5,
        "longitude": -46.6,
        "geolocation_radius": 100,
    }
    row.update(overrides)
    return row


def test_saving_unchanged_geolocation_succeeds():
    svc = PolicyService(MySQLPolicyRepository(FakeConnectionFactory([_settings()])))
    policy = svc.update_geolocation(
        current_role=Role.ADMIN, institution_id="i1", latitude=-23.5, longitude=-46.6, radius_meters=100
    )
    assert policy.location is not None
    assert policy.effective_radius == 100


def test_changed_geolocation_is_stored():
    factory = FakeConnectionFactory([_settings()])
    svc = PolicyService(MySQLPolicyRepository(factory))
    policy = svc.update_geolocation(
        current_role=Role.ADMIN, institution_id="i1", latitude=-22.9, longitude=-43.2, radius_meters=250
    )
    assert factory.table["i1"]["geolocation_radius"] == 250
    assert policy.location.latitude == pytest.approx(-22.9)


def test_missing_settings_row_is_reported():
    repo = MySQLPolicyRepository(FakeConnectionFactory([]))
    assert repo.update_geolocation(institution_id="i1", latitude=0, longitude=0, radius_meters=50) is False
    with pytest.raises(ValidationError):
        PolicyService(repo).update_geolocation(
            current_role=Role.ADMIN, institution_id="i1", latitude=0, longitude=0, radius_meters=50
        )


def test_unset_location_reads_as_none():
    repo = MySQLPolicyRepository(
        FakeConnectionFactory([_settings(latitude=None, longitude=None, geolocation_radius=None)])
    )
    policy = repo.get_for_institution("i1")
    assert policy.location is None
    assert policy.effective_radius == 100


def test_unknown_stored_method_is_configuration_error():
    repo = MySQLPolicyRepository(FakeConnectionFactory([_settings(attendance_validation_method="bluetooth")]))
    with pytest.raises(ConfigurationError):
        repo.get_for_institution("i1")
