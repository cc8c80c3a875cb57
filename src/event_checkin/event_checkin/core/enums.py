from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status shown in attendance reports."""

    PRESENT = "Present"
    ABSENT = "Absent"


class ScanState(str, Enum):
    """States a single scan passes through in the check-in service."""

    IDLE = "IDLE"
    DECODING = "DECODING"
    VALIDATING = "VALIDATING"
    COMMITTING = "COMMITTING"
    SUCCESS = "SUCCESS"
    REJECTED = "REJECTED"


class RejectReason(str, Enum):
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    UNKNOWN_REGISTRATION = "UNKNOWN_REGISTRATION"
    ALREADY_ATTENDED = "ALREADY_ATTENDED"
