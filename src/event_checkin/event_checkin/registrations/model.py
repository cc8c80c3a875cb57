from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Registration:
    """Domain entity: one participant bound to one event.

    ``id`` is the internal row id; ``registration_id`` is the public code
    printed in the credential.
    """

    id: Optional[int]
    event_id: str
    name: str
    email: str
    registration_id: str
    qr_payload: str
    created_at: datetime
