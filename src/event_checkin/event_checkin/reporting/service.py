from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..admins.service import AdminSession, require_admin
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_timestamp
from ..common.text import slugify
from ..core.constants import ALL_EVENTS, EXPORT_MISSING_EVENT, EXPORT_MISSING_TIMESTAMP
from ..core.enums import AttendanceStatus
from ..events.repository import EventRepository
from ..registrations.repository import RegistrationRepository
from .export import ExportSink
from .model import AttendanceRecord, DashboardStats, ExportFile

logger = logging.getLogger(__name__)


def attendance_rate(total_attendance: int, total_registrations: int) -> int:
    """Percentage rounded half up, 0 when nobody registered, never above 100."""
    if total_registrations <= 0:
        return 0
    rate = (200 * total_attendance + total_registrations) // (2 * total_registrations)
    return max(0, min(100, rate))


class ReportService:
    """Use case: admin statistics and the attendance report.

    Every call recomputes from the repositories; caching lives in
    ``reporting.live.CachedStats``.
    """

    def __init__(
        self,
        registrations: RegistrationRepository,
        attendance: AttendanceRepository,
        events: EventRepository,
    ):
        self._registrations = registrations
        self._attendance = attendance
        self._events = events

    def compute_stats(self, session: Optional[AdminSession]) -> DashboardStats:
        require_admin(session)
        total_regs = self._registrations.count()
        total_att = self._attendance.count()
        return DashboardStats(
            total_registrations=total_regs,
            total_attendance=total_att,
            total_events=self._events.count(),
            attendance_rate=attendance_rate(total_att, total_regs),
        )

    def filtered_records(
        self,
        session: Optional[AdminSession],
        event_filter: str = ALL_EVENTS,
    ) -> list[AttendanceRecord]:
        require_admin(session)
        event_id = None if event_filter in (None, "", ALL_EVENTS) else event_filter

        event_names = {e.id: e.name for e in self._events.list_all()}
        attended_at = {a.registration_id: a.attended_at for a in self._attendance.list_all()}

        records = []
        for reg in self._registrations.list_all(event_id=event_id):
            ts = attended_at.get(reg.registration_id)
            records.append(
                AttendanceRecord(
                    name=reg.name,
                    email=reg.email,
                    registration_id=reg.registration_id,
                    status=AttendanceStatus.PRESENT if ts is not None else AttendanceStatus.ABSENT,
                    timestamp=ts,
                    event_name=event_names.get(reg.event_id),
                )
            )
        return records

    def report_filename(self, event_filter: str = ALL_EVENTS) -> str:
        if event_filter in (None, "", ALL_EVENTS):
            label = "All Events"
        else:
            event = self._events.get_by_id(event_filter)
            label = event.name if event else "Event"
        return f"attendance-report-{slugify(label)}"

    def export(
        self,
        session: Optional[AdminSession],
        records: Sequence[AttendanceRecord],
        destination_name: str,
        sink: ExportSink,
    ) -> ExportFile:
        require_admin(session)
        rows = [to_export_row(r) for r in records]
        logger.info("Exporting %d attendance rows to %s", len(rows), destination_name)
        return sink.write(rows, destination_name)


def to_export_row(record: AttendanceRecord) -> dict:
    return {
        "Name": record.name,
        "Email": record.email,
        "Registration ID": record.registration_id,
        "Status": record.status.value,
        "Timestamp": format_timestamp(record.timestamp) or EXPORT_MISSING_TIMESTAMP,
        "Event": record.event_name or EXPORT_MISSING_EVENT,
    }
