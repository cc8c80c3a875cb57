"""Helpers that turn scanner output into payload strings for ``CheckInService``."""
from __future__ import annotations

from typing import IO, Iterable, List, Optional

from PIL import Image, UnidentifiedImageError

from ..core.exceptions import DecodeError


def first_payload(frames: Iterable[Optional[str]]) -> Optional[str]:
    """Consume a lazy frame stream up to the first non-empty payload."""
    for frame in frames:
        if frame and frame.strip():
            return frame.strip()
    return None


def decode_image(stream: IO[bytes]) -> List[str]:
    """Decode every QR code found in an uploaded image.

    Raises ``DecodeError`` when the upload is not a readable image. Symbol bytes
    that are not UTF-8 are kept with replacement characters, so the codec
    rejects them like any other malformed payload.
    """
    # pyzbar loads the native zbar library on import; only image uploads need it.
    from pyzbar.pyzbar import decode as pyzbar_decode

    try:
        img = Image.open(stream).convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise DecodeError("Upload is not a readable image") from exc
    return [symbol.data.decode("utf-8", errors="replace") for symbol in pyzbar_decode(img)]
