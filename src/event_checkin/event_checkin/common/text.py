from __future__ import annotations

import re


def slugify(value: str) -> str:
    """Lower-case and collapse whitespace runs into single dashes."""
    return re.sub(r"\s+", "-", value.strip().lower())
