from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.exceptions import AlreadyMarked
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Attendance
from .repository import AttendanceRepository


def _to_attendance(r: dict) -> Attendance:
    return Attendance(
        id=int(r["id"]),
        registration_id=r["registration_id"],
        attended_at=r["attended_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def has_attended(self, registration_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS hit FROM attendance WHERE registration_id=%s", (registration_id,))
            return fetchone(cur) is not None

    def get_by_registration_id(self, registration_id: str) -> Optional[Attendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, registration_id, attended_at FROM attendance WHERE registration_id=%s",
                (registration_id,),
            )
            r = fetchone(cur)
            return _to_attendance(r) if r else None

    def mark_attended(self, registration_id: str, *, attended_at: datetime) -> Attendance:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO attendance(registration_id, attended_at) VALUES(%s,%s)",
                    (registration_id, attended_at),
                )
                row_id = int(cur.lastrowid)
        except mysql_errors.IntegrityError as exc:
            if is_duplicate_key(exc, "uq_attendance_registration"):
                raise AlreadyMarked("Attendance already marked for this registration") from exc
            raise
        return Attendance(id=row_id, registration_id=registration_id, attended_at=attended_at)

    def list_all(self) -> Sequence[Attendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, registration_id, attended_at FROM attendance ORDER BY attended_at DESC")
            return [_to_attendance(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance")
            r = fetchone(cur)
            return int(r["n"]) if r else 0
