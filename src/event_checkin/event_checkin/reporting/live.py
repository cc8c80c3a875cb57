"""Change notifications and the cached dashboard aggregate they invalidate."""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Union

from ..admins.service import require_admin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceMarked:
    registration_id: str
    event_id: str
    attended_at: datetime


@dataclass(frozen=True)
class RegistrationCreated:
    registration_id: str
    event_id: str
    created_at: datetime


Notification = Union[AttendanceMarked, RegistrationCreated]
Listener = Callable[[Notification], None]


class AttendanceFeed:
    """In-process publish/subscribe feed for attendance and registration changes."""

    def __init__(self):
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def publish(self, notification: Notification) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(notification)
            except Exception:
                # The change is already committed; listener errors are only logged.
                logger.exception("Listener failed for %r", notification)


class CachedStats:
    """Keep the last computed stats until a change notification arrives.

    The feed only reaches this process, so with several workers a cached value
    also expires after ``ttl_seconds`` to pick up scans handled elsewhere.
    Authorization is checked on every read, cached or not.
    """

    def __init__(
        self,
        reports,
        feed: Optional[AttendanceFeed] = None,
        *,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._reports = reports
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._value = None
        self._computed_at = 0.0
        self._generation = 0
        self._lock = threading.Lock()
        self._unsubscribe = feed.subscribe(self._on_change) if feed is not None else None

    def _on_change(self, notification: Notification) -> None:
        logger.debug("Stats cache invalidated by %s", type(notification).__name__)
        self.invalidate()

    def invalidate(self) -> None:
        with self._lock:
            self._value = None
            self._generation += 1

    def get(self, session):
        require_admin(session)
        with self._lock:
            if self._value is not None and not self._expired():
                return self._value
            generation = self._generation

        value = self._reports.compute_stats(session)
        with self._lock:
            # Drop the result if a change landed while we were computing.
            if generation == self._generation:
                self._value = value
                self._computed_at = self._clock()
        return value

    def _expired(self) -> bool:
        if self._ttl_seconds is None:
            return False
        return self._clock() - self._computed_at >= self._ttl_seconds

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
