from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Mapping

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.roll_call import RollCallService
from .attendance.service import ConfirmationService
from .classes.mysql_class_repository import MySQLClassSessionRepository
from .classes.repository import ClassSessionRepository
from .core.constants import DEFAULT_LOCATION_TIMEOUT_MS, DEFAULT_LOCATION_WORKERS
from .database.connection import DatabaseConnection, DBConfig
from .institutions.mysql_policy_repository import MySQLPolicyRepository
from .institutions.repository import PolicyRepository
from .institutions.service import PolicyService


@dataclass(frozen=True)
class Container:
    classes_repo: ClassSessionRepository
    policies_repo: PolicyRepository
    attendance_repo: AttendanceRepository

    confirmation_service: ConfirmationService
    roll_call_service: RollCallService
    policy_service: PolicyService

    location_executor: Executor

    def close(self) -> None:
        # Hung location providers are abandoned, not joined.
        self.location_executor.shutdown(wait=False, cancel_futures=True)


def wire(
    *,
    classes_repo: ClassSessionRepository,
    policies_repo: PolicyRepository,
    attendance_repo: AttendanceRepository,
    location_timeout_ms: int = DEFAULT_LOCATION_TIMEOUT_MS,
    location_workers: int = DEFAULT_LOCATION_WORKERS,
    executor: Executor | None = None,
) -> Container:
    executor = executor or ThreadPoolExecutor(max_workers=location_workers, thread_name_prefix="locate")
    return Container(
        classes_repo=classes_repo,
        policies_repo=policies_repo,
        attendance_repo=attendance_repo,
        confirmation_service=ConfirmationService(
            classes_repo,
            policies_repo,
            attendance_repo,
            location_timeout_ms=location_timeout_ms,
            executor=executor,
        ),
        roll_call_service=RollCallService(attendance_repo, classes_repo),
        policy_service=PolicyService(policies_repo),
        location_executor=executor,
    )


def build_container(
    *,
    db_config: Mapping[str, Any],
    location_timeout_ms: int = DEFAULT_LOCATION_TIMEOUT_MS,
    location_workers: int = DEFAULT_LOCATION_WORKERS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return wire(
        classes_repo=MySQLClassSessionRepository(conn),
        policies_repo=MySQLPolicyRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        location_timeout_ms=location_timeout_ms,
        location_workers=location_workers,
    )
