from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Event


class EventRepository(Protocol):
    def get_by_id(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Event]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
