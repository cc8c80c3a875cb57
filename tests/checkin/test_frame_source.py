from __future__ import annotations

import io

import pytest

from src.event_checkin.event_checkin.checkin.frame_source import decode_image, first_payload
from src.event_checkin.event_checkin.core.exceptions import DecodeError
from src.event_checkin.event_checkin.credentials import codec
from src.event_checkin.event_checkin.credentials.renderer import render_png


def test_first_payload_skips_empty_frames():
    assert first_payload([None, "", "   ", ' {"a": 1} ', "later"]) == '{"a": 1}'


def test_first_payload_stops_consuming_after_hit():
    consumed = []

    def frames():
        for f in [None, "first", "second"]:
            consumed.append(f)
            yield f

    assert first_payload(frames()) == "first"
    assert consumed == [None, "first"]


def test_first_payload_on_empty_stream():
    assert first_payload(iter(())) is None


def test_decode_image_returns_symbol_payloads(fake_zbar):
    payload = codec.encode("REG1", "E1", "ann@x.com")
    fake_zbar.append(payload.encode("utf-8"))

    assert decode_image(io.BytesIO(render_png(payload))) == [payload]


def test_decode_image_rejects_non_image(fake_zbar):
    with pytest.raises(DecodeError):
        decode_image(io.BytesIO(b"definitely not an image"))


def test_decode_image_keeps_undecodable_bytes_as_text(fake_zbar):
    fake_zbar.append(b"\xff\xfe latin-1 \xe9")

    (text,) = decode_image(io.BytesIO(render_png("anything")))

    assert "\ufffd" in text
    assert text.endswith("latin-1 \ufffd")
