from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Read-model joining a registration with its attendance (not persisted)."""

    name: str
    email: str
    registration_id: str
    status: AttendanceStatus
    timestamp: Optional[datetime] = None
    event_name: Optional[str] = None


@dataclass(frozen=True)
class DashboardStats:
    total_registrations: int
    total_attendance: int
    total_events: int
    attendance_rate: int

    def to_dict(self) -> dict:
        return {
            "totalRegistrations": self.total_registrations,
            "totalAttendance": self.total_attendance,
            "totalEvents": self.total_events,
            "attendanceRate": self.attendance_rate,
        }


@dataclass(frozen=True)
class ExportFile:
    filename: str
    mimetype: str
    content: bytes
