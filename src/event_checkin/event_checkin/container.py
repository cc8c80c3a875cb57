from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .admins.mysql_admin_repository import MySQLAdminRepository
from .admins.service import AuthService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceLedger
from .checkin.service import CheckInService
from .core.constants import DEFAULT_DB_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository
from .registrations.model import Registration
from .registrations.mysql_registration_repository import MySQLRegistrationRepository
from .registrations.service import RegistrationService
from .reporting.live import AttendanceFeed, CachedStats, RegistrationCreated
from .reporting.service import ReportService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    events_repo: MySQLEventRepository
    registrations_repo: MySQLRegistrationRepository
    attendance_repo: MySQLAttendanceRepository
    admins_repo: MySQLAdminRepository

    feed: AttendanceFeed
    auth_service: AuthService
    registration_service: RegistrationService
    attendance_ledger: AttendanceLedger
    checkin_service: CheckInService
    report_service: ReportService
    cached_stats: CachedStats


def build_container(*, db_config: dict, stats_ttl_seconds: Optional[float] = None) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connection_timeout=int(db_config.get("connection_timeout", DEFAULT_DB_TIMEOUT_SECONDS)),
    )
    conn = DatabaseConnection.get_instance(config)

    events_repo = MySQLEventRepository(conn)
    registrations_repo = MySQLRegistrationRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    admins_repo = MySQLAdminRepository(conn)

    feed = AttendanceFeed()

    def publish_registration(reg: Registration) -> None:
        feed.publish(
            RegistrationCreated(
                registration_id=reg.registration_id,
                event_id=reg.event_id,
                created_at=reg.created_at,
            )
        )

    auth_service = AuthService(admins_repo)
    registration_service = RegistrationService(
        registrations_repo,
        events_repo,
        on_registered=publish_registration,
    )
    attendance_ledger = AttendanceLedger(attendance_repo)
    checkin_service = CheckInService(registration_service, attendance_ledger, events_repo, feed=feed)
    report_service = ReportService(registrations_repo, attendance_repo, events_repo)
    cached_stats = CachedStats(report_service, feed, ttl_seconds=stats_ttl_seconds)

    return Container(
        conn=conn,
        events_repo=events_repo,
        registrations_repo=registrations_repo,
        attendance_repo=attendance_repo,
        admins_repo=admins_repo,
        feed=feed,
        auth_service=auth_service,
        registration_service=registration_service,
        attendance_ledger=attendance_ledger,
        checkin_service=checkin_service,
        report_service=report_service,
        cached_stats=cached_stats,
    )
