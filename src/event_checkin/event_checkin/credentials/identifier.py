from __future__ import annotations

import secrets
import string
import time
from typing import Callable, Optional

from ..core.constants import REGISTRATION_ID_PREFIX, REGISTRATION_ID_SUFFIX_LENGTH

_ALPHABET = string.digits + string.ascii_uppercase


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(_ALPHABET[rem])
    return "".join(reversed(out))


class RegistrationIdGenerator:
    """Produce public registration codes such as ``REGM3X9K2QAB7Q2ZD``.

    The code is the prefix, the current epoch milliseconds in base 36 and a
    random suffix. Uniqueness is enforced by the store, not here.
    """

    def __init__(
        self,
        *,
        prefix: str = REGISTRATION_ID_PREFIX,
        suffix_length: int = REGISTRATION_ID_SUFFIX_LENGTH,
        clock: Optional[Callable[[], float]] = None,
    ):
        self._prefix = prefix
        self._suffix_length = int(suffix_length)
        self._clock = clock or time.time

    def generate(self) -> str:
        millis = int(self._clock() * 1000)
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(self._suffix_length))
        return f"{self._prefix}{_base36(millis)}{suffix}"
