from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Event:
    """Domain entity: an event people register for. Owned outside this core."""

    id: str
    name: str
    date: datetime
    location: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
