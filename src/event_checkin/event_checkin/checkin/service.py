from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..attendance.service import AttendanceLedger
from ..core.enums import RejectReason, ScanState
from ..core.exceptions import AlreadyMarked, DecodeError, NotFound
from ..credentials import codec
from ..events.repository import EventRepository
from ..registrations.model import Registration
from ..registrations.service import RegistrationService
from ..reporting.live import AttendanceFeed, AttendanceMarked
from .model import ScanResult

logger = logging.getLogger(__name__)

MESSAGES = {
    ScanState.SUCCESS: "Attendance marked successfully!",
    RejectReason.INVALID_CREDENTIAL: "Invalid QR code. Please scan a registration credential.",
    RejectReason.UNKNOWN_REGISTRATION: "Invalid QR code or registration not found",
    RejectReason.ALREADY_ATTENDED: "Attendance already marked for this registration",
}


class CheckInService:
    """Use case: turn one scanned payload into at most one attendance record.

    A scan moves Idle -> Decoding -> Validating -> Committing and ends in
    Success or Rejected. Storage failures propagate as ``StorageUnavailable``
    instead of becoming a rejection. Nothing is retried here.
    """

    def __init__(
        self,
        registrations: RegistrationService,
        ledger: AttendanceLedger,
        events: Optional[EventRepository] = None,
        *,
        feed: Optional[AttendanceFeed] = None,
    ):
        self._registrations = registrations
        self._ledger = ledger
        self._events = events
        self._feed = feed

    def scan(self, payload: str, *, now: datetime | None = None) -> ScanResult:
        self._enter(ScanState.DECODING)
        try:
            credential = codec.decode(payload)
        except DecodeError as exc:
            logger.info("Rejected scan: %s", exc)
            return self._reject(RejectReason.INVALID_CREDENTIAL)

        self._enter(ScanState.VALIDATING)
        try:
            registration = self._registrations.lookup(credential.registration_id, credential.event_id)
        except NotFound:
            logger.info("Rejected scan for unknown registration %s", credential.registration_id)
            return self._reject(RejectReason.UNKNOWN_REGISTRATION)

        if self._ledger.has_attended(registration.registration_id):
            return self._already_attended(registration)

        self._enter(ScanState.COMMITTING)
        try:
            attendance = self._ledger.mark_attended(registration.registration_id, now=now)
        except AlreadyMarked:
            # Another scanner won the race after our has_attended check.
            return self._already_attended(registration)

        self._enter(ScanState.SUCCESS)
        if self._feed is not None:
            self._feed.publish(
                AttendanceMarked(
                    registration_id=registration.registration_id,
                    event_id=registration.event_id,
                    attended_at=attendance.attended_at,
                )
            )
        return ScanResult(
            state=ScanState.SUCCESS,
            message=MESSAGES[ScanState.SUCCESS],
            registration=registration,
            event_name=self._event_name(registration),
            attended_at=attendance.attended_at,
        )

    def _enter(self, state: ScanState) -> None:
        logger.debug("Scan entering %s", state.value)

    def _reject(self, reason: RejectReason, registration: Registration | None = None) -> ScanResult:
        self._enter(ScanState.REJECTED)
        return ScanResult(
            state=ScanState.REJECTED,
            reason=reason,
            message=MESSAGES[reason],
            registration=registration,
            event_name=self._event_name(registration) if registration else None,
        )

    def _already_attended(self, registration: Registration) -> ScanResult:
        logger.info("Rejected duplicate scan for %s", registration.registration_id)
        result = self._reject(RejectReason.ALREADY_ATTENDED, registration)
        existing = self._ledger.get(registration.registration_id)
        if existing is None:
            return result
        return replace(result, attended_at=existing.attended_at)

    def _event_name(self, registration: Registration) -> Optional[str]:
        if self._events is None:
            return None
        event = self._events.get_by_id(registration.event_id)
        return event.name if event else None
