"""Formatting and parsing of durations in the compact "1h2m3.5s" notation."""

from __future__ import annotations

import re

_NANOSECOND = 1
_MICROSECOND = 1000
_MILLISECOND = 1000 * _MICROSECOND
_SECOND = 1000 * _MILLISECOND
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE

_UNITS = {
    "ns": _NANOSECOND,
    "us": _MICROSECOND,
    "µs": _MICROSECOND,
    "μs": _MICROSECOND,
    "ms": _MILLISECOND,
    "s": _SECOND,
    "m": _MINUTE,
    "h": _HOUR,
}

_MAX = (1 << 63) - 1
_COMPONENT = re.compile(r"(\d*)(?:\.(\d*))?([^\d.]*)")


def _frac(value: int, prec: int) -> tuple[str, int]:
    """Return the fraction of value/10**prec without trailing zeros, and the quotient."""
    quotient, remainder = divmod(value, 10**prec)
    if remainder == 0:
        return "", quotient
    digits = str(remainder).rjust(prec, "0").rstrip("0")
    return "." + digits, quotient


def format_duration(nanoseconds: int) -> str:
    """Format a signed 64-bit nanosecond count, e.g. ``"1h2m0.5s"``."""
    if nanoseconds == 0:
        return "0s"
    neg = nanoseconds < 0
    u = abs(nanoseconds)

    if u < _SECOND:
        if u < _MICROSECOND:
            prec, unit = 0, "ns"
        elif u < _MILLISECOND:
            prec, unit = 3, "µs"
        else:
            prec, unit = 6, "ms"
        frac, u = _frac(u, prec) if prec else ("", u)
        text = f"{u}{frac}{unit}"
    else:
        frac, u = _frac(u, 9)
        text = f"{u % 60}{frac}s"
        u //= 60
        if u > 0:
            text = f"{u % 60}m{text}"
            u //= 60
            if u > 0:
                text = f"{u}h{text}"

    return "-" + text if neg else text


def parse_duration(text: str) -> int:
    """Parse a duration string into nanoseconds; raise ValueError if malformed."""
    original = text
    if not text:
        raise ValueError(f"invalid duration {original!r}")
    neg = False
    if text[0] in "+-":
        neg = text[0] == "-"
        text = text[1:]
    if text == "0":
        return 0
    if not text:
        raise ValueError(f"invalid duration {original!r}")

    total = 0
    pos = 0
    while pos < len(text):
        match = _COMPONENT.match(text, pos)
        whole, frac, unit = match.group(1), match.group(2), match.group(3)
        if not whole and not frac:
            raise ValueError(f"invalid duration {original!r}")
        if not unit:
            raise ValueError(f"missing unit in duration {original!r}")
        if unit not in _UNITS:
            raise ValueError(f"unknown unit {unit!r} in duration {original!r}")
        scale = _UNITS[unit]
        value = int(whole or "0") * scale
        if frac:
            value += int(frac) * scale // 10 ** len(frac)
        total += value
        if total > _MAX + (1 if neg else 0):
            raise ValueError(f"invalid duration {original!r}")
        pos = match.end()
    return -total if neg else total