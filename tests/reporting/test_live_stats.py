from __future__ import annotations

import pytest

from src.event_checkin.event_checkin.core.exceptions import AuthorizationError
from src.event_checkin.event_checkin.reporting.live import AttendanceFeed, CachedStats


class CountingReports:
    def __init__(self, inner):
        self._inner = inner
        self.calls = 0

    def compute_stats(self, session):
        self.calls += 1
        return self._inner.compute_stats(session)


def test_cached_stats_reused_until_attendance_changes(
    registration_service, checkin_service, report_service, feed, admin_session
):
    reports = CountingReports(report_service)
    cache = CachedStats(reports, feed)
    reg = registration_service.register("E1", "Ann", "ann@x.com")

    assert cache.get(admin_session).total_attendance == 0
    assert cache.get(admin_session).total_attendance == 0
    assert reports.calls == 1

    checkin_service.scan(reg.qr_payload)

    assert cache.get(admin_session).total_attendance == 1
    assert reports.calls == 2


def test_cached_stats_still_checks_authorization(report_service, admin_session):
    cache = CachedStats(report_service)
    cache.get(admin_session)

    with pytest.raises(AuthorizationError):
        cache.get(None)


def test_failing_listener_does_not_break_publish():
    feed = AttendanceFeed()
    seen = []

    def broken(_):
        raise RuntimeError("boom")

    feed.subscribe(broken)
    feed.subscribe(seen.append)
    feed.publish("ping")

    assert seen == ["ping"]


def test_unsubscribe_and_close(report_service):
    feed = AttendanceFeed()
    seen = []
    unsubscribe = feed.subscribe(seen.append)
    unsubscribe()
    feed.publish("ping")
    assert seen == []

    cache = CachedStats(report_service, feed)
    cache.close()
    cache.close()


def test_cached_stats_expire_after_ttl(report_service, admin_session):
    reports = CountingReports(report_service)
    now = [100.0]
    cache = CachedStats(reports, ttl_seconds=30, clock=lambda: now[0])

    cache.get(admin_session)
    now[0] += 29
    cache.get(admin_session)
    assert reports.calls == 1

    now[0] += 1
    cache.get(admin_session)
    assert reports.calls == 2
