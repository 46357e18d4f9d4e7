"""Parsed JSON Schema model."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field, fields
from typing import Any

from .raw_schema import Discriminator


class SchemaType(str, enum.Enum):
    """JSON Schema type; EMPTY is used by oneOf, anyOf and allOf."""

    EMPTY = ""
    OBJECT = "object"
    ARRAY = "array"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"


def _equal(a: Any, b: Any, seen: set[tuple[int, int]]) -> bool:
    if a is b:
        return True
    if isinstance(a, _DeepEq):
        if type(a) is not type(b):
            return False
        key = (id(a), id(b))
        if key in seen:
            return True
        seen.add(key)
        return all(_equal(getattr(a, f.name), getattr(b, f.name), seen) for f in fields(a))
    if isinstance(a, (list, tuple)):
        return (
            isinstance(b, type(a))
            and len(a) == len(b)
            and all(_equal(x, y, seen) for x, y in zip(a, b))
        )
    if isinstance(a, dict):
        return (
            isinstance(b, dict)
            and a.keys() == b.keys()
            and all(_equal(a[k], b[k], seen) for k in a)
        )
    return a == b


class _DeepEq:
    """Structural equality that tolerates reference cycles."""

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return _equal(self, other, set())

    __hash__ = None  # type: ignore[assignment]


@dataclass(eq=False, kw_only=True)
class Schema(_DeepEq):
    """A resolved JSON Schema."""

    x_ogen_name: str = ""
    type: SchemaType = SchemaType.EMPTY
    format: str = ""
    description: str = ""
    ref: str = ""

    item: Schema | None = None
    additional_properties: bool = False
    pattern_properties: list[PatternProperty] = field(default_factory=list)
    enum: list[Any] = field(default_factory=list)
    properties: list[Property] = field(default_factory=list)

    nullable: bool = False

    one_of: list[Schema | None] = field(default_factory=list)
    any_of: list[Schema | None] = field(default_factory=list)
    all_of: list[Schema | None] = field(default_factory=list)
    discriminator: Discriminator | None = None

    maximum: str | None = None
    exclusive_maximum: bool = False
    minimum: str | None = None
    exclusive_minimum: bool = False
    multiple_of: str | None = None

    max_length: int | None = None
    min_length: int | None = None
    pattern: str = ""

    max_items: int | None = None
    min_items: int | None = None
    unique_items: bool = False

    max_properties: int | None = None
    min_properties: int | None = None

    examples: list[str] = field(default_factory=list)
    default: Any = None
    default_set: bool = False

    def add_example(self, raw: str | bytes | None) -> None:
        """Record a raw JSON example; empty values are ignored."""
        if raw:
            self.examples.append(raw)


@dataclass(eq=False)
class Property(_DeepEq):
    """A property of an object schema."""

    name: str
    description: str = ""
    schema: Schema | None = None
    required: bool = False


@dataclass(eq=False)
class PatternProperty(_DeepEq):
    """Properties whose names match a regular expression."""

    pattern: re.Pattern[str]
    schema: Schema | None = None