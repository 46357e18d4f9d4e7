"""JSON encoding and decoding of string-formatted values."""

from __future__ import annotations

import datetime as _dt
import ipaddress
import json
import uuid as _uuid
from typing import Any
from urllib.parse import urlsplit

from .duration import format_duration, parse_duration


def marshal(value: Any) -> bytes:
    """Encode a value as JSON bytes."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode()


def unmarshal(data: bytes | str) -> Any:
    """Decode JSON bytes into Python values."""
    return json.loads(data)


def _string(data: bytes | str) -> str:
    value = json.loads(data)
    if not isinstance(value, str):
        raise ValueError(f"expected JSON string, got {type(value).__name__}")
    return value


def _quote(text: str) -> bytes:
    return json.dumps(text, ensure_ascii=False).encode()


def decode_ip(data):
    """Decode a JSON string holding an IPv4 or IPv6 address."""
    text = _string(data)
    try:
        return ipaddress.ip_address(text)
    except ValueError as exc:
        raise ValueError(f"bad ip format: {exc}") from exc


def encode_ip(address) -> bytes:
    return _quote(str(address))


def decode_date(data) -> _dt.date:
    text = _string(data)
    return _dt.datetime.strptime(text, "%Y-%m-%d").date()


def encode_date(value) -> bytes:
    return _quote(value.strftime("%Y-%m-%d"))


def decode_time(data) -> _dt.time:
    text = _string(data)
    return _dt.datetime.strptime(text, "%H:%M:%S").time()


def encode_time(value) -> bytes:
    return _quote(value.strftime("%H:%M:%S"))


def decode_date_time(data) -> _dt.datetime:
    """Decode an RFC 3339 timestamp."""
    text = _string(data)
    if "T" not in text or len(text) < 20:
        raise ValueError(f"invalid RFC 3339 time {text!r}")
    normalized = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    value = _dt.datetime.fromisoformat(normalized.replace("t", "T", 1))
    if value.tzinfo is None:
        raise ValueError(f"invalid RFC 3339 time {text!r}")
    return value


def encode_date_time(value: _dt.datetime) -> bytes:
    """Encode a datetime in RFC 3339 with second precision."""
    base = value.strftime("%Y-%m-%dT%H:%M:%S")
    offset = value.utcoffset()
    if offset is None or offset == _dt.timedelta(0):
        return _quote(base + "Z")
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return _quote(f"{base}{sign}{hours:02d}:{mins:02d}")


def decode_duration(data) -> int:
    """Decode a duration string into nanoseconds."""
    return parse_duration(_string(data))


def encode_duration(nanoseconds: int) -> bytes:
    return _quote(format_duration(nanoseconds))


def decode_uri(data) -> str:
    """Decode a request URI: absolute, or an absolute path."""
    text = _string(data)
    if not text:
        raise ValueError("empty url")
    if any(ord(c) < 0x20 or c == "\x7f" for c in text):
        raise ValueError(f"invalid control character in URL {text!r}")
    parts = urlsplit(text)
    if not parts.scheme and not text.startswith("/"):
        raise ValueError(f"invalid URI for request {text!r}")
    return text


def encode_uri(value) -> bytes:
    return _quote(str(value))


def decode_uuid(data) -> _uuid.UUID:
    return _uuid.UUID(_string(data))


def encode_uuid(value: _uuid.UUID) -> bytes:
    """Encode a UUID in canonical lower-case hyphenated form."""
    return b'"' + str(value).encode() + b'"'