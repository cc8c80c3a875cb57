from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector import errors as mysql_errors

from ..core.exceptions import StorageUnavailable
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Connection drops, timeouts and server-side lock waits are transient.
_TRANSIENT_ERRORS = (mysql_errors.InterfaceError, mysql_errors.OperationalError)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except _TRANSIENT_ERRORS as exc:
        logger.error("Database connection failed: %s", exc)
        raise StorageUnavailable("Storage is temporarily unavailable") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except _TRANSIENT_ERRORS as exc:
        logger.error("Database operation failed: %s", exc)
        raise StorageUnavailable("Storage is temporarily unavailable") from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def is_duplicate_key(exc: mysql_errors.IntegrityError, key_name: str) -> bool:
    """True when ``exc`` is a duplicate entry on the unique key ``key_name``.

    MySQL reports the key as ``'<table>.<key>'`` (8.0+) or ``'<key>'``.
    """

    if getattr(exc, "errno", None) != errorcode.ER_DUP_ENTRY:
        return False
    message = str(getattr(exc, "msg", "") or exc)
    return f".{key_name}'" in message or f"'{key_name}'" in message
