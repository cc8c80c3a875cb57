from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Attendance


class AttendanceRepository(Protocol):
    def has_attended(self, registration_id: str) -> bool:
        raise NotImplementedError

    def get_by_registration_id(self, registration_id: str) -> Optional[Attendance]:
        raise NotImplementedError

    def mark_attended(self, registration_id: str, *, attended_at: datetime) -> Attendance:
        """Insert the attendance row.

        Must raise ``AlreadyMarked`` when a row already exists. The unique key
        on registration_id is the only guard; concurrent callers race on it.
        """

        raise NotImplementedError

    def list_all(self) -> Sequence[Attendance]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
