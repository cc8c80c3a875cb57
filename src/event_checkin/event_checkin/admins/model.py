from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Admin:
    """Domain entity: an operator allowed to view and export reports."""

    admin_id: int
    email: str
    password_hash: str
    is_active: bool = True
