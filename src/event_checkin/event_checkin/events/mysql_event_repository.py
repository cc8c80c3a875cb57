from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Event
from .repository import EventRepository

_COLUMNS = "id, name, description, date, location, created_at"


def _to_event(r: dict) -> Event:
    return Event(
        id=str(r["id"]),
        name=r["name"],
        description=r.get("description"),
        date=r["date"],
        location=r.get("location") or "",
        created_at=r.get("created_at"),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events WHERE id=%s", (event_id,))
            r = fetchone(cur)
            return _to_event(r) if r else None

    def list_all(self) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events ORDER BY date ASC")
            return [_to_event(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM events")
            r = fetchone(cur)
            return int(r["n"]) if r else 0
