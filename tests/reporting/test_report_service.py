from __future__ import annotations

import io

import pandas as pd
import pytest

from src.event_checkin.event_checkin.core.constants import ALL_EVENTS, EXPORT_COLUMNS
from src.event_checkin.event_checkin.core.enums import AttendanceStatus
from src.event_checkin.event_checkin.core.exceptions import AuthorizationError
from src.event_checkin.event_checkin.reporting.export import CsvExportSink, ExcelExportSink
from src.event_checkin.event_checkin.reporting.service import attendance_rate


class RecordingSink:
    def __init__(self):
        self.calls = []

    def write(self, rows, destination_name):
        self.calls.append((list(rows), destination_name))
        return "written"


def _seed(registration_service, checkin_service, fixed_now):
    ann = registration_service.register("E1", "Ann", "ann@x.com", now=fixed_now)
    bob = registration_service.register("E1", "Bob", "bob@x.com", now=fixed_now)
    cat = registration_service.register("E1", "Cat", "cat@x.com", now=fixed_now)
    dan = registration_service.register("E2", "Dan", "dan@x.com", now=fixed_now)
    checkin_service.scan(bob.qr_payload, now=fixed_now)
    return ann, bob, cat, dan


def test_filtered_records_for_event(registration_service, checkin_service, report_service, admin_session, fixed_now):
    ann, bob, cat, _ = _seed(registration_service, checkin_service, fixed_now)

    records = report_service.filtered_records(admin_session, "E1")

    assert [r.registration_id for r in records] == [ann.registration_id, bob.registration_id, cat.registration_id]
    present = [r for r in records if r.status == AttendanceStatus.PRESENT]
    assert len(present) == 1
    assert present[0].name == "Bob"
    assert present[0].timestamp == fixed_now
    assert all(r.timestamp is None for r in records if r.status == AttendanceStatus.ABSENT)
    assert {r.event_name for r in records} == {"Tech Summit"}


def test_filtered_records_all_events(registration_service, checkin_service, report_service, admin_session, fixed_now):
    _seed(registration_service, checkin_service, fixed_now)

    records = report_service.filtered_records(admin_session, ALL_EVENTS)

    assert len(records) == 4
    assert records[-1].event_name == "Design Meetup"


def test_three_registrations_one_attendance(registration_service, checkin_service, report_service, admin_session):
    regs = [registration_service.register("E2", n, f"{n}@x.com") for n in ("a", "b", "c")]
    checkin_service.scan(regs[0].qr_payload)

    records = report_service.filtered_records(admin_session)

    assert len(records) == 3
    assert sum(r.status == AttendanceStatus.PRESENT for r in records) == 1


def test_stats(registration_service, checkin_service, report_service, admin_session, fixed_now):
    _seed(registration_service, checkin_service, fixed_now)

    stats = report_service.compute_stats(admin_session)

    assert stats.total_registrations == 4
    assert stats.total_attendance == 1
    assert stats.total_events == 2
    assert stats.attendance_rate == 25


def test_stats_without_registrations(report_service, admin_session):
    assert report_service.compute_stats(admin_session).attendance_rate == 0


@pytest.mark.parametrize(
    "attended,registered,expected",
    [(0, 0, 0), (0, 5, 0), (1, 8, 13), (1, 3, 33), (2, 3, 67), (5, 5, 100), (7, 5, 100)],
)
def test_attendance_rate_rounds_half_up_within_bounds(attended, registered, expected):
    assert attendance_rate(attended, registered) == expected


def test_admin_session_is_required(report_service):
    with pytest.raises(AuthorizationError):
        report_service.compute_stats(None)
    with pytest.raises(AuthorizationError):
        report_service.filtered_records(None)


def test_export_hands_fixed_columns_to_sink(registration_service, checkin_service, report_service, admin_session, fixed_now):
    _seed(registration_service, checkin_service, fixed_now)
    records = report_service.filtered_records(admin_session, "E1")
    sink = RecordingSink()

    out = report_service.export(admin_session, records, "attendance-report-tech-summit", sink)

    assert out == "written"
    rows, name = sink.calls[0]
    assert name == "attendance-report-tech-summit"
    assert all(tuple(r.keys()) == EXPORT_COLUMNS for r in rows)
    assert rows[0]["Timestamp"] == "Not Attended"
    assert rows[0]["Status"] == "Absent"
    assert rows[1]["Timestamp"] == "2025-09-12 09:15:00"
    assert rows[1]["Event"] == "Tech Summit"


def test_report_filename(report_service):
    assert report_service.report_filename(ALL_EVENTS) == "attendance-report-all-events"
    assert report_service.report_filename("E2") == "attendance-report-design-meetup"
    assert report_service.report_filename("missing") == "attendance-report-event"


def test_excel_sink_writes_attendance_sheet():
    rows = [
        {
            "Name": "Ann",
            "Email": "ann@x.com",
            "Registration ID": "REG1",
            "Status": "Present",
            "Timestamp": "2025-09-12 09:15:00",
            "Event": "Tech Summit",
        }
    ]

    out = ExcelExportSink().write(rows, "attendance-report-all-events")

    assert out.filename == "attendance-report-all-events.xlsx"
    df = pd.read_excel(io.BytesIO(out.content), sheet_name="Attendance Report", engine="openpyxl")
    assert list(df.columns) == list(EXPORT_COLUMNS)
    assert df.iloc[0]["Registration ID"] == "REG1"


def test_csv_sink_writes_header_and_rows():
    out = CsvExportSink().write([dict.fromkeys(EXPORT_COLUMNS, "x")], "report")

    text = out.content.decode("utf-8-sig").splitlines()
    assert out.filename == "report.csv"
    assert text[0] == ",".join(EXPORT_COLUMNS)
    assert text[1] == "x,x,x,x,x,x"
