from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    id, class_id, student_id, status, confirmed_at, confirmed_by,
    latitude, longitude, distance_from_institution, notes
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=str(r["id"]),
        class_id=str(r["class_id"]),
        student_id=str(r["student_id"]),
        status=AttendanceStatus(r["status"]),
        confirmed_at=r.get("confirmed_at"),
        confirmed_by=r.get("confirmed_by"),
        latitude=None if r.get("latitude") is None else float(r["latitude"]),
        longitude=None if r.get("longitude") is None else float(r["longitude"]),
        distance_from_institution=(
            None if r.get("distance_from_institution") is None else float(r["distance_from_institution"])
        ),
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_class_and_student(self, class_id: str, student_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE class_id=%s AND student_id=%s",
                (class_id, student_id),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_class(self, class_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE class_id=%s
                ORDER BY confirmed_at IS NULL, confirmed_at, student_id
                LIMIT %s
                """,
                (class_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def insert_if_absent(self, record: AttendanceRecord) -> bool:
        # Plain INSERT: the UNIQUE(class_id, student_id) key rejects the loser of a race.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(
                        id, class_id, student_id, status, confirmed_at, confirmed_by,
                        latitude, longitude, distance_from_institution, notes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.attendance_id or str(uuid.uuid4()),
                        record.class_id,
                        record.student_id,
                        record.status.value,
                        record.confirmed_at,
                        record.confirmed_by,
                        record.latitude,
                        record.longitude,
                        record.distance_from_institution,
                        record.notes,
                    ),
                )
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                return False
            raise
        return True

    def upsert(self, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(id, class_id, student_id, status, confirmed_at, confirmed_by, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    confirmed_at=VALUES(confirmed_at),
                    confirmed_by=VALUES(confirmed_by),
                    notes=VALUES(notes)
                """,
                (
                    record.attendance_id or str(uuid.uuid4()),
                    record.class_id,
                    record.student_id,
                    record.status.value,
                    record.confirmed_at,
                    record.confirmed_by,
                    record.notes,
                ),
            )
