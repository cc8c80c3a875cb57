from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import RejectReason, ScanState
from ..registrations.model import Registration


@dataclass(frozen=True)
class ScanResult:
    """Terminal outcome of one scan, ready for display to the operator."""

    state: ScanState
    message: str
    reason: Optional[RejectReason] = None
    registration: Optional[Registration] = None
    event_name: Optional[str] = None
    attended_at: Optional[datetime] = None

    @property
    def success(self) -> bool:
        return self.state == ScanState.SUCCESS
