from __future__ import annotations

import logging
from datetime import datetime

from ..common.datetime_utils import now_local
from .model import Attendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Use case: record that a registration attended, at most once."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def has_attended(self, registration_id: str) -> bool:
        return self._attendance.has_attended(registration_id)

    def get(self, registration_id: str):
        return self._attendance.get_by_registration_id(registration_id)

    def mark_attended(self, registration_id: str, *, now: datetime | None = None) -> Attendance:
        """Raises ``AlreadyMarked`` if another caller got there first."""
        attendance = self._attendance.mark_attended(registration_id, attended_at=now or now_local())
        logger.info("Attendance marked for %s at %s", registration_id, attendance.attended_at)
        return attendance
