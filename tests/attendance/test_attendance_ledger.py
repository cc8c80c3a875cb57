from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.event_checkin.event_checkin.attendance.service import AttendanceLedger
from src.event_checkin.event_checkin.core.exceptions import AlreadyMarked


def test_mark_attended_once(attendance_repo, fixed_now):
    ledger = AttendanceLedger(attendance_repo)

    assert ledger.has_attended("REG1") is False
    att = ledger.mark_attended("REG1", now=fixed_now)

    assert att.attended_at == fixed_now
    assert ledger.has_attended("REG1") is True

    with pytest.raises(AlreadyMarked):
        ledger.mark_attended("REG1", now=fixed_now)
    assert attendance_repo.count() == 1


def test_concurrent_marks_insert_exactly_one_row(attendance_repo):
    ledger = AttendanceLedger(attendance_repo)
    n = 16
    barrier = threading.Barrier(n)

    def mark(_):
        barrier.wait()
        try:
            ledger.mark_attended("REG1")
            return "ok"
        except AlreadyMarked:
            return "dup"

    with ThreadPoolExecutor(max_workers=n) as pool:
        outcomes = list(pool.map(mark, range(n)))

    assert outcomes.count("ok") == 1
    assert outcomes.count("dup") == n - 1
    assert attendance_repo.count() == 1
