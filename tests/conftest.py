from __future__ import annotations

import sys
import threading
import types
from datetime import datetime
from typing import Optional

import pytest
from PIL import Image
from werkzeug.security import generate_password_hash

from src.event_checkin.event_checkin.admins.model import Admin
from src.event_checkin.event_checkin.admins.service import AdminSession, AuthService
from src.event_checkin.event_checkin.attendance.model import Attendance
from src.event_checkin.event_checkin.attendance.service import AttendanceLedger
from src.event_checkin.event_checkin.checkin.service import CheckInService
from src.event_checkin.event_checkin.core.exceptions import AlreadyMarked, AlreadyRegistered, GenerationCollision
from src.event_checkin.event_checkin.events.model import Event
from src.event_checkin.event_checkin.registrations.model import Registration
from src.event_checkin.event_checkin.registrations.service import RegistrationService
from src.event_checkin.event_checkin.reporting.live import AttendanceFeed
from src.event_checkin.event_checkin.reporting.service import ReportService


class InMemoryEvents:
    def __init__(self, events=()):
        self._events = {e.id: e for e in events}

    def get_by_id(self, event_id: str) -> Optional[Event]:
        return self._events.get(event_id)

    def list_all(self):
        return sorted(self._events.values(), key=lambda e: e.date)

    def count(self) -> int:
        return len(self._events)


class InMemoryRegistrations:
    """Enforces the same unique keys as the registrations table."""

    def __init__(self):
        self._lock = threading.Lock()
        self._rows: list[Registration] = []

    def get_by_event_and_email(self, event_id: str, email: str) -> Optional[Registration]:
        with self._lock:
            for r in self._rows:
                if r.event_id == event_id and r.email == email.lower():
                    return r
        return None

    def get_by_code(self, registration_id: str) -> Optional[Registration]:
        with self._lock:
            for r in self._rows:
                if r.registration_id == registration_id:
                    return r
        return None

    def get_by_code_and_event(self, registration_id: str, event_id: str) -> Optional[Registration]:
        reg = self.get_by_code(registration_id)
        if reg and reg.event_id == event_id:
            return reg
        return None

    def create(self, *, event_id, name, email, registration_id, qr_payload, created_at) -> Registration:
        email = email.lower()
        with self._lock:
            for r in self._rows:
                if r.event_id == event_id and r.email == email:
                    raise AlreadyRegistered("Already registered for this event", registration=r)
                if r.registration_id == registration_id:
                    raise GenerationCollision(registration_id)
            reg = Registration(
                id=len(self._rows) + 1,
                event_id=event_id,
                name=name,
                email=email,
                registration_id=registration_id,
                qr_payload=qr_payload,
                created_at=created_at,
            )
            self._rows.append(reg)
            return reg

    def list_all(self, *, event_id=None):
        with self._lock:
            return [r for r in self._rows if event_id is None or r.event_id == event_id]

    def count(self) -> int:
        with self._lock:
            return len(self._rows)


class InMemoryAttendance:
    """Enforces the unique key on registration_id like the attendance table."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_code: dict[str, Attendance] = {}

    def has_attended(self, registration_id: str) -> bool:
        with self._lock:
            return registration_id in self._by_code

    def get_by_registration_id(self, registration_id: str) -> Optional[Attendance]:
        with self._lock:
            return self._by_code.get(registration_id)

    def mark_attended(self, registration_id: str, *, attended_at: datetime) -> Attendance:
        with self._lock:
            if registration_id in self._by_code:
                raise AlreadyMarked("Attendance already marked for this registration")
            att = Attendance(id=len(self._by_code) + 1, registration_id=registration_id, attended_at=attended_at)
            self._by_code[registration_id] = att
            return att

    def list_all(self):
        with self._lock:
            return list(self._by_code.values())

    def count(self) -> int:
        with self._lock:
            return len(self._by_code)


class InMemoryAdmins:
    def __init__(self, admins=()):
        self._by_email = {a.email: a for a in admins}

    def get_by_email(self, email: str) -> Optional[Admin]:
        return self._by_email.get(email)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 9, 12, 9, 15, 0)


@pytest.fixture
def events_repo():
    return InMemoryEvents(
        [
            Event(id="E1", name="Tech Summit", date=datetime(2025, 9, 12, 9, 0), location="Hall A"),
            Event(id="E2", name="Design Meetup", date=datetime(2025, 9, 20, 18, 30), location="Room 3"),
        ]
    )


@pytest.fixture
def registrations_repo():
    return InMemoryRegistrations()


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def feed():
    return AttendanceFeed()


@pytest.fixture
def registration_service(registrations_repo, events_repo):
    return RegistrationService(registrations_repo, events_repo)


@pytest.fixture
def checkin_service(registration_service, attendance_repo, events_repo, feed):
    return CheckInService(registration_service, AttendanceLedger(attendance_repo), events_repo, feed=feed)


@pytest.fixture
def report_service(registrations_repo, attendance_repo, events_repo):
    return ReportService(registrations_repo, attendance_repo, events_repo)


@pytest.fixture
def admin_session(fixed_now) -> AdminSession:
    return AdminSession(admin_id=1, email="admin@example.com", issued_at=fixed_now)


@pytest.fixture
def admins_repo():
    return InMemoryAdmins(
        [
            Admin(admin_id=1, email="admin@example.com", password_hash=generate_password_hash("admin123")),
            Admin(
                admin_id=2,
                email="former@example.com",
                password_hash=generate_password_hash("pw"),
                is_active=False,
            ),
        ]
    )


@pytest.fixture
def auth_service(admins_repo):
    return AuthService(admins_repo)


@pytest.fixture
def fake_zbar(monkeypatch):
    """Replace pyzbar (and its native zbar library) with a scanner that finds
    a symbol for each bytes value the test appends to the returned list."""
    found = []

    def decode(img):
        assert isinstance(img, Image.Image)
        return [types.SimpleNamespace(data=data) for data in found]

    module = types.ModuleType("pyzbar.pyzbar")
    module.decode = decode
    package = types.ModuleType("pyzbar")
    package.pyzbar = module
    monkeypatch.setitem(sys.modules, "pyzbar", package)
    monkeypatch.setitem(sys.modules, "pyzbar.pyzbar", module)
    return found
