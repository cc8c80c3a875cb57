from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from werkzeug.security import check_password_hash

from ..common.datetime_utils import now_local
from ..core.exceptions import AuthenticationError, AuthorizationError
from .repository import AdminRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminSession:
    """Proof of an authenticated admin, passed into every admin operation.

    The Flask layer stores these fields in the cookie session and rebuilds
    the object per request.
    """

    admin_id: int
    email: str
    issued_at: datetime


def require_admin(session: Optional[AdminSession]) -> AdminSession:
    if not isinstance(session, AdminSession):
        raise AuthorizationError("Admin login required")
    return session


class AuthService:
    """Use case: authenticate an admin (login)."""

    def __init__(self, admins: AdminRepository):
        self._admins = admins

    def authenticate(self, email: str, password: str, *, now: datetime | None = None) -> AdminSession:
        admin = self._admins.get_by_email((email or "").strip().lower())
        if not admin or not admin.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(admin.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Failed admin login for %s", admin.email)
            raise AuthenticationError("Invalid email or password")

        return AdminSession(admin_id=admin.admin_id, email=admin.email, issued_at=now or now_local())
