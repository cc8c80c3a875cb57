from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_email, require_non_empty
from ..core.exceptions import AlreadyRegistered, GenerationCollision, NotFound, ValidationError
from ..credentials import codec
from ..credentials.identifier import RegistrationIdGenerator
from ..events.repository import EventRepository
from .model import Registration
from .repository import RegistrationRepository

logger = logging.getLogger(__name__)


class RegistrationService:
    """Use case: register a participant for an event and issue a credential."""

    def __init__(
        self,
        registrations: RegistrationRepository,
        events: Optional[EventRepository] = None,
        *,
        id_generator: Optional[RegistrationIdGenerator] = None,
        on_registered: Optional[Callable[[Registration], None]] = None,
    ):
        self._registrations = registrations
        self._events = events
        self._ids = id_generator or RegistrationIdGenerator()
        self._on_registered = on_registered

    def register(self, event_id: str, name: str, email: str, *, now: datetime | None = None) -> Registration:
        event_id = require_non_empty(event_id, "Event")
        name = require_non_empty(name, "Name")
        email = require_email(email)

        if self._events is not None and self._events.get_by_id(event_id) is None:
            raise ValidationError("Event does not exist")

        # Fast path only; the unique (event_id, email) key decides races.
        existing = self._registrations.get_by_event_and_email(event_id, email)
        if existing:
            raise AlreadyRegistered("Already registered for this event", registration=existing)

        created_at = now or now_local()
        try:
            registration = self._insert(event_id, name, email, created_at)
        except GenerationCollision:
            logger.warning("Registration id collision for event %s, regenerating", event_id)
            try:
                registration = self._insert(event_id, name, email, created_at)
            except GenerationCollision as exc:
                raise ValidationError("Could not allocate a registration id, please try again") from exc

        logger.info("Registered %s for event %s as %s", email, event_id, registration.registration_id)
        if self._on_registered is not None:
            self._on_registered(registration)
        return registration

    def _insert(self, event_id: str, name: str, email: str, created_at: datetime) -> Registration:
        registration_id = self._ids.generate()
        return self._registrations.create(
            event_id=event_id,
            name=name,
            email=email,
            registration_id=registration_id,
            qr_payload=codec.encode(registration_id, event_id, email),
            created_at=created_at,
        )

    def lookup(self, registration_id: str, event_id: str) -> Registration:
        registration = self._registrations.get_by_code_and_event(registration_id, event_id)
        if registration is None:
            raise NotFound("Registration not found")
        return registration

    def get_by_code(self, registration_id: str) -> Registration:
        registration = self._registrations.get_by_code(registration_id)
        if registration is None:
            raise NotFound("Registration not found")
        return registration
