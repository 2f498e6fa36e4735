from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_class_and_student(self, class_id: str, student_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_class(self, class_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def insert_if_absent(self, record: AttendanceRecord) -> bool:
        """Insert the record unless (class_id, student_id) already exists.

        Must be atomic: returns False when another record holds the pair and
        never overwrites it.
        """

        raise NotImplementedError

    def upsert(self, record: AttendanceRecord) -> None:
        """Insert or replace status/confirmation fields. Roll call only."""

        raise NotImplementedError
