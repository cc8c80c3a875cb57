from __future__ import annotations

import json
from dataclasses import dataclass

from ..core.exceptions import DecodeError

_FIELDS = ("registrationId", "eventId", "email")


@dataclass(frozen=True)
class Credential:
    registration_id: str
    event_id: str
    email: str


def encode(registration_id: str, event_id: str, email: str) -> str:
    """Serialize a credential into the payload that goes into the QR code."""
    return json.dumps(
        {"registrationId": registration_id, "eventId": event_id, "email": email},
        separators=(",", ":"),
        ensure_ascii=False,
    )


def decode(payload: str) -> Credential:
    """Parse a scanned payload.

    Extra fields are ignored so newer payloads stay readable. Anything that is
    not a JSON object carrying the three string fields raises ``DecodeError``.
    """

    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as exc:
        raise DecodeError("Credential is not valid JSON") from exc

    if not isinstance(data, dict):
        raise DecodeError("Credential must be a JSON object")

    for field in _FIELDS:
        if not isinstance(data.get(field), str):
            raise DecodeError(f"Credential field {field!r} is missing")

    return Credential(
        registration_id=data["registrationId"],
        event_id=data["eventId"],
        email=data["email"],
    )
