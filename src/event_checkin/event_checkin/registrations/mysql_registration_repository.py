from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.exceptions import AlreadyRegistered, GenerationCollision
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Registration
from .repository import RegistrationRepository

_COLUMNS = "id, event_id, name, email, registration_id, qr_payload, created_at"


def _to_registration(r: dict) -> Registration:
    return Registration(
        id=int(r["id"]),
        event_id=str(r["event_id"]),
        name=r["name"],
        email=r["email"],
        registration_id=r["registration_id"],
        qr_payload=r["qr_payload"],
        created_at=r["created_at"],
    )


class MySQLRegistrationRepository(RegistrationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_event_and_email(self, event_id: str, email: str) -> Optional[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM registrations WHERE event_id=%s AND email=%s",
                (event_id, email.lower()),
            )
            r = fetchone(cur)
            return _to_registration(r) if r else None

    def get_by_code(self, registration_id: str) -> Optional[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM registrations WHERE registration_id=%s",
                (registration_id,),
            )
            r = fetchone(cur)
            return _to_registration(r) if r else None

    def get_by_code_and_event(self, registration_id: str, event_id: str) -> Optional[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM registrations WHERE registration_id=%s AND event_id=%s",
                (registration_id, event_id),
            )
            r = fetchone(cur)
            return _to_registration(r) if r else None

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
        email = email.lower()
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO registrations(event_id, name, email, registration_id, qr_payload, created_at)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (event_id, name, email, registration_id, qr_payload, created_at),
                )
                row_id = int(cur.lastrowid)
        except mysql_errors.IntegrityError as exc:
            if is_duplicate_key(exc, "uq_registrations_event_email"):
                raise AlreadyRegistered(
                    "Already registered for this event",
                    registration=self.get_by_event_and_email(event_id, email),
                ) from exc
            if is_duplicate_key(exc, "uq_registrations_code"):
                raise GenerationCollision(f"Registration id {registration_id} is taken") from exc
            raise

        return Registration(
            id=row_id,
            event_id=event_id,
            name=name,
            email=email,
            registration_id=registration_id,
            qr_payload=qr_payload,
            created_at=created_at,
        )

    def list_all(self, *, event_id: Optional[str] = None) -> Sequence[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            if event_id is None:
                cur.execute(f"SELECT {_COLUMNS} FROM registrations ORDER BY created_at ASC, id ASC")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM registrations WHERE event_id=%s ORDER BY created_at ASC, id ASC",
                    (event_id,),
                )
            return [_to_registration(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM registrations")
            r = fetchone(cur)
            return int(r["n"]) if r else 0
