"""RFC 6901 JSON Pointer resolution over raw JSON text."""

from __future__ import annotations

import json
from urllib.parse import unquote, urlsplit


class PointerError(ValueError):
    """Raised when a pointer or the document it points into is invalid."""


class NotFoundError(PointerError):
    """The requested value does not exist."""

    def __init__(self, pointer: str) -> None:
        self.pointer = pointer
        super().__init__(f"can't find value for {json.dumps(pointer)}")


_decoder = json.JSONDecoder()
_WS = " \t\n\r"


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _WS:
        pos += 1
    return pos


def _value_span(text: str, pos: int) -> tuple[int, int]:
    start = _skip_ws(text, pos)
    try:
        _, end = _decoder.raw_decode(text, start)
    except json.JSONDecodeError as exc:
        raise PointerError(f"invalid json: {exc}") from exc
    return start, end


def _validate(text: str) -> str:
    start, end = _value_span(text, 0)
    if _skip_ws(text, end) != len(text):
        raise PointerError("invalid json: trailing data")
    return text


def _expect(text: str, pos: int, char: str) -> int:
    pos = _skip_ws(text, pos)
    if pos >= len(text) or text[pos] != char:
        raise PointerError(f"invalid json: expected {char!r} at {pos}")
    return pos + 1


def _find_key(text: str, part: str) -> str | None:
    pos = _expect(text, 0, "{")
    result = None
    if _skip_ws(text, pos) < len(text) and text[_skip_ws(text, pos)] == "}":
        return None
    while True:
        key_start, key_end = _value_span(text, pos)
        key = json.loads(text[key_start:key_end])
        if not isinstance(key, str):
            raise PointerError("invalid json: object key is not a string")
        pos = _expect(text, key_end, ":")
        start, end = _value_span(text, pos)
        if key == part:
            result = text[start:end]
        pos = _skip_ws(text, end)
        if pos < len(text) and text[pos] == ",":
            pos += 1
            continue
        _expect(text, pos, "}")
        return result


def _find_index(text: str, part: str) -> str | None:
    if not part.isdigit() or not part.isascii():
        raise PointerError(f"index: invalid syntax {part!r}")
    index = int(part)
    pos = _expect(text, 0, "[")
    if _skip_ws(text, pos) < len(text) and text[_skip_ws(text, pos)] == "]":
        return None
    counter = 0
    result = None
    while True:
        start, end = _value_span(text, pos)
        if counter == index:
            result = text[start:end]
        counter += 1
        pos = _skip_ws(text, end)
        if pos < len(text) and text[pos] == ",":
            pos += 1
            continue
        _expect(text, pos, "]")
        return result


def _unescape(part: str) -> str:
    if "~1" not in part and "~0" not in part:
        return part
    return part.replace("~1", "/").replace("~0", "~")


def _find(ptr: str, text: str) -> str:
    if not ptr:
        return _validate(text)
    if ptr[0] != "/":
        raise PointerError(f"invalid pointer {ptr!r}: pointer must start with '/'")
    ptr = ptr[1:]
    for raw_part in ptr.split("/"):
        part = _unescape(raw_part)
        head = text[_skip_ws(text, 0):_skip_ws(text, 0) + 1]
        if head == "{":
            found = _find_key(text, part)
        elif head == "[":
            found = _find_index(text, part)
        else:
            raise PointerError(f"unexpected type at {part!r}")
        if found is None:
            raise NotFoundError(ptr)
        text = found
    return text


def _unquote_strict(text: str) -> str:
    for i, char in enumerate(text):
        if char == "%":
            chunk = text[i + 1:i + 3]
            if len(chunk) != 2 or any(c not in "0123456789abcdefABCDEF" for c in chunk):
                raise PointerError(f"unescape: invalid escape {text[i:i + 3]!r}")
    return unquote(text)


def resolve(ptr: str, buf: bytes | str) -> bytes:
    """Return the raw JSON bytes of the value the pointer names."""
    text = buf.decode() if isinstance(buf, (bytes, bytearray)) else buf
    if ptr in ("", "#"):
        result = _validate(text)
    elif ptr[0] == "/":
        result = _find(ptr, text)
    elif ptr[0] == "#":
        result = _find(_unquote_strict(ptr[1:]), text)
    else:
        if any(ord(c) < 0x20 or c == "\x7f" for c in ptr):
            raise PointerError(f"invalid control character in URL {ptr!r}")
        result = _find(_unquote_strict(urlsplit(ptr).fragment), text)
    return result.encode()