from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Registration


class RegistrationRepository(Protocol):
    def get_by_event_and_email(self, event_id: str, email: str) -> Optional[Registration]:
        raise NotImplementedError

    def get_by_code(self, registration_id: str) -> Optional[Registration]:
        raise NotImplementedError

    def get_by_code_and_event(self, registration_id: str, event_id: str) -> Optional[Registration]:
        raise NotImplementedError

    def create(
        self,
        *,
        event_id: str,
        name: str,
        email: str,
        registration_id: str,
        qr_payload: str,
        created_at: datetime,
    ) -> Registration:
        """Insert a registration.

        Must raise ``AlreadyRegistered`` when (event_id, email) is taken and
        ``GenerationCollision`` when registration_id is taken. Both are
        enforced by the store itself.
        """

        raise NotImplementedError

    def list_all(self, *, event_id: Optional[str] = None) -> Sequence[Registration]:
        """Registrations in creation order, optionally for one event."""

        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
