from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Attendance:
    """Domain entity: the single attendance record of a registration."""

    id: Optional[int]
    registration_id: str
    attended_at: datetime
