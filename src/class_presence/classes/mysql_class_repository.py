from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import ClassSession
from .repository import ClassSessionRepository


class MySQLClassSessionRepository(ClassSessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: str) -> Optional[ClassSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT c.id, c.class_date, c.title, c.institution_id, ct.start_time, ct.end_time
                FROM classes c
                LEFT JOIN class_times ct ON ct.id = c.class_time_id
                WHERE c.id=%s
                """,
                (class_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ClassSession(
                class_id=str(r["id"]),
                class_date=r["class_date"],
                start_time=r.get("start_time"),
                end_time=r.get("end_time"),
                institution_id=str(r["institution_id"]),
                title=r.get("title"),
            )
