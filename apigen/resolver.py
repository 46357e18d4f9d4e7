"""Resolution of local schema references against a root document."""

from __future__ import annotations

import json

from .jsonpointer import resolve
from .raw_schema import RawSchema, parse_raw_schema


def split_uri(u: str) -> tuple[str, str]:
    """Split a reference into its base and its '#'-prefixed fragment."""
    hash_at = u.find("#")
    if hash_at == -1:
        return u, "#"
    fragment = u[hash_at:]
    if fragment == "#/":
        fragment = "#"
    return u[:hash_at], fragment


class RootResolver:
    """Resolves references into one root JSON document."""

    def __init__(self, root: bytes | str) -> None:
        self._root = root.encode() if isinstance(root, str) else bytes(root)

    def resolve_reference(self, ref: str) -> RawSchema | None:
        """Return the raw schema that ref points to; None if it points to null."""
        ref = ref.strip()
        base, fragment = split_uri(ref)
        if base:
            raise ValueError(f"external base {json.dumps(base)} is not supported")
        try:
            buf = resolve(fragment, self._root)
        except ValueError as exc:
            raise ValueError(f"resolve {json.dumps(ref)}: {exc}") from exc
        if buf.strip() == b"null":
            return None
        try:
            return parse_raw_schema(buf)
        except ValueError as exc:
            raise ValueError(f"unmarshal: {exc}") from exc