"""Upper-casing of a string's first character."""


def capitalize(s: str) -> str:
    """Return s with its first character upper-cased; the rest is unchanged."""
    if not s:
        return s
    first = s[0].upper()
    if len(first) != 1:
        first = s[0]
    return first + s[1:]