"""Turns raw JSON Schema documents into resolved Schema trees."""

from __future__ import annotations

import json
import re
from contextlib import contextmanager
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Callable, Iterator, Protocol, runtime_checkable

from .raw_schema import Discriminator, RawSchema
from .schema import PatternProperty, Property, Schema, SchemaType

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_TYPES = {
    "object": SchemaType.OBJECT,
    "array": SchemaType.ARRAY,
    "boolean": SchemaType.BOOLEAN,
    "integer": SchemaType.INTEGER,
    "number": SchemaType.NUMBER,
    "string": SchemaType.STRING,
}


class SchemaError(ValueError):
    """Raised when a schema cannot be parsed."""


@runtime_checkable
class ReferenceResolver(Protocol):
    """Looks up the raw schema that a reference points to."""

    def resolve_reference(self, ref: str) -> RawSchema | None:
        """Return the raw schema for ref, or raise if it cannot be found."""
        ...


class _NopResolver:
    def resolve_reference(self, ref: str) -> RawSchema | None:
        raise SchemaError("reference resolver is not provided")


@dataclass
class Settings:
    """Parser options.

    With infer_types set, a schema without "type" gets one from its other
    keywords: a schema with "items" is treated as an array, and so on.
    """

    resolver: ReferenceResolver | None = None
    infer_types: bool = False


@contextmanager
def _context(message: str) -> Iterator[None]:
    try:
        yield
    except SchemaError as exc:
        raise SchemaError(f"{message}: {exc}") from exc


def _load(raw: str | bytes) -> Any:
    def reject(name: str) -> Any:
        raise ValueError(f"invalid JSON literal {name}")

    try:
        return json.loads(raw, parse_constant=reject)
    except ValueError as exc:
        raise SchemaError(f"invalid value {raw!r}: {exc}") from exc


def _json_kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _infer_json_type(raw: str | bytes) -> str:
    value = _load(raw)
    kind = _json_kind(value)
    if kind in ("string", "number", "bool"):
        return kind
    if kind == "null":
        raise SchemaError(f"cannot infer type from {raw!r}")
    raise SchemaError(f"invalid value {raw!r}")


def _parse_type(typ: str) -> SchemaType:
    try:
        return _TYPES[typ]
    except KeyError:
        raise SchemaError(f"unexpected type: {typ!r}") from None


def _convert(schema: Schema, value: Any) -> Any:
    if value is None:
        # A null enum value is valid even if the schema is not nullable.
        return None
    kind = _json_kind(value)
    typ = schema.type

    def mismatch() -> SchemaError:
        return SchemaError(f"expected type {typ.value!r}, got {kind!r}")

    if typ is SchemaType.STRING:
        if kind != "string":
            raise mismatch()
        return value
    if typ is SchemaType.INTEGER:
        if kind != "number":
            raise mismatch()
        if isinstance(value, float):
            raise SchemaError("expected integer, got float")
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise SchemaError(f"integer {value} out of range")
        return value
    if typ is SchemaType.NUMBER:
        if kind != "number":
            raise mismatch()
        return float(value)
    if typ is SchemaType.BOOLEAN:
        if kind != "bool":
            raise mismatch()
        return value
    if typ is SchemaType.ARRAY:
        if kind != "array":
            raise mismatch()
        if schema.item is None:
            raise SchemaError("can't validate untyped array item")
        result = []
        for element in value:
            with _context("validate item"):
                result.append(_convert(schema.item, element))
        return result
    raise SchemaError(f"unexpected type: {typ.value!r}")


def _parse_json_value(schema: Schema, raw: str | bytes) -> Any:
    return _convert(schema, _load(raw))


def _enum_key(value: Any) -> Any:
    if isinstance(value, list):
        return ("list", tuple(_enum_key(v) for v in value))
    return (type(value).__name__, value)


def _parse_enum_values(schema: Schema, raw_values: list[str]) -> list[Any]:
    values: list[Any] = []
    seen: set[Any] = set()
    for raw in raw_values:
        with _context(f"parse value {raw!r}"):
            value = _parse_json_value(schema, raw)
        key = _enum_key(value)
        if key in seen:
            raise SchemaError(f"duplicate enum value: '{value}'")
        seen.add(key)
        values.append(value)
    return values


def _handle_nullable_enum(schema: Schema) -> None:
    # A nullable enum must list null among its values; null itself is not kept.
    if any(v is None for v in schema.enum):
        schema.nullable = True
    if schema.nullable:
        schema.enum = [v for v in schema.enum if v is not None]


class Parser:
    """Parses raw schemas, resolving and caching references."""

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings if settings is not None else Settings()
        self._resolver = settings.resolver if settings.resolver is not None else _NopResolver()
        self._infer_types = settings.infer_types
        self.refcache: dict[str, Schema] = {}

    def parse(self, schema: RawSchema | None) -> Schema | None:
        """Parse a raw schema; None yields None."""
        return self._parse(schema, set())

    def resolve(self, ref: str) -> Schema | None:
        """Parse the schema that ref points to."""
        return self._resolve(ref, set())

    def _parse(self, schema: RawSchema | None, ctx: set[str]) -> Schema | None:
        return self._parse1(schema, ctx, lambda s: self._extend_info(schema, s))

    def _parse1(
        self,
        schema: RawSchema | None,
        ctx: set[str],
        hook: Callable[[Schema], Schema],
    ) -> Schema | None:
        with _context("parse schema"):
            s = self._parse_schema(schema, ctx, hook)
        if schema is None or s is None:
            return s

        if schema.enum:
            with _context("parse enum values"):
                s.enum = _parse_enum_values(s, schema.enum)
            _handle_nullable_enum(s)

        if schema.default:
            with _context("parse default"):
                value = _parse_json_value(s, schema.default)
            if value is None and not s.nullable:
                raise SchemaError('unexpected default "null" value')
            s.default = value
            s.default_set = True

        annotation = schema.x_annotations.get("x-ogen-name")
        if annotation is not None:
            try:
                name = json.loads(annotation)
            except ValueError as exc:
                raise SchemaError(f"decode {annotation!r}: {exc}") from exc
            if not isinstance(name, str):
                raise SchemaError(f"decode {annotation!r}: expected string")
            s.x_ogen_name = name

        return s

    def _parse_schema(
        self,
        schema: RawSchema | None,
        ctx: set[str],
        hook: Callable[[Schema], Schema],
    ) -> Schema | None:
        if schema is None:
            return None

        if schema.ref:
            with _context(f"resolve {schema.ref!r}"):
                return self._resolve(schema.ref, ctx)

        if self._infer_types and not schema.type and schema.default:
            with _context("infer default type"):
                schema.type = _infer_json_type(schema.default)

        if schema.enum:
            typ = schema.type
            if self._infer_types and not typ:
                with _context("infer enum type"):
                    typ = _infer_json_type(schema.enum[0])
            with _context("type"):
                t = _parse_type(typ)
            return hook(Schema(type=t, format=schema.format))

        if schema.one_of:
            s = hook(Schema())
            with _context("oneOf"):
                s.one_of = self._parse_many(schema.one_of, ctx)
            return s

        if schema.any_of:
            s = hook(
                Schema(
                    max_properties=schema.max_properties,
                    min_properties=schema.min_properties,
                    min_items=schema.min_items,
                    max_items=schema.max_items,
                    unique_items=schema.unique_items,
                    minimum=schema.minimum,
                    maximum=schema.maximum,
                    exclusive_minimum=schema.exclusive_minimum,
                    exclusive_maximum=schema.exclusive_maximum,
                    multiple_of=schema.multiple_of,
                    max_length=schema.max_length,
                    min_length=schema.min_length,
                    pattern=schema.pattern,
                )
            )
            with _context("anyOf"):
                s.any_of = self._parse_many(schema.any_of, ctx)
            return s

        if schema.all_of:
            s = hook(Schema())
            with _context("allOf"):
                s.all_of = self._parse_many(schema.all_of, ctx)
            return s

        typ = schema.type
        if self._infer_types and not typ:
            typ = self._infer_from_keywords(schema)

        if typ == "object":
            return self._parse_object(schema, ctx, hook)
        if typ == "array":
            return self._parse_array(schema, ctx, hook)
        if typ in ("number", "integer"):
            self._check_multiple_of(schema.multiple_of)
            return hook(
                Schema(
                    type=SchemaType(schema.type),
                    format=schema.format,
                    minimum=schema.minimum,
                    maximum=schema.maximum,
                    exclusive_minimum=schema.exclusive_minimum,
                    exclusive_maximum=schema.exclusive_maximum,
                    multiple_of=schema.multiple_of,
                )
            )
        if typ == "boolean":
            return hook(Schema(type=SchemaType.BOOLEAN, format=schema.format))
        if typ == "string":
            return hook(
                Schema(
                    type=SchemaType.STRING,
                    format=schema.format,
                    max_length=schema.max_length,
                    min_length=schema.min_length,
                    pattern=schema.pattern,
                )
            )
        if typ == "null":
            return hook(Schema(type=SchemaType.NULL, nullable=True))
        if typ == "":
            return hook(Schema())
        raise SchemaError(f"unexpected schema type: {schema.type!r}")

    @staticmethod
    def _infer_from_keywords(schema: RawSchema) -> str:
        if (
            schema.properties
            or schema.additional_properties is not None
            or schema.pattern_properties
            or schema.max_properties is not None
            or schema.min_properties is not None
        ):
            return "object"
        if (
            schema.items is not None
            or schema.unique_items
            or schema.max_items is not None
            or schema.min_items is not None
        ):
            return "array"
        if (
            schema.maximum is not None
            or schema.minimum is not None
            or schema.exclusive_minimum
            or schema.exclusive_maximum
            or schema.multiple_of is not None
        ):
            return "number"
        if schema.max_length is not None or schema.min_length is not None or schema.pattern:
            return "string"
        return ""

    @staticmethod
    def _check_multiple_of(mul: str | bytes | None) -> None:
        if mul is None:
            return
        text = mul.decode() if isinstance(mul, (bytes, bytearray)) else mul
        try:
            rat = Fraction(text.strip())
        except (ValueError, ZeroDivisionError) as exc:
            raise SchemaError(f"invalid number {text!r}") from exc
        # The value of "multipleOf" must be strictly greater than 0.
        if rat <= 0:
            raise SchemaError(f"invalid multipleOf value {text!r}")

    def _parse_object(
        self, schema: RawSchema, ctx: set[str], hook: Callable[[Schema], Schema]
    ) -> Schema:
        if schema.items is not None:
            raise SchemaError("object cannot contain 'items' field")

        s = hook(
            Schema(
                type=SchemaType.OBJECT,
                max_properties=schema.max_properties,
                min_properties=schema.min_properties,
            )
        )

        additional = schema.additional_properties
        if additional is not None:
            s.additional_properties = True
            if not additional.is_bool:
                with _context("additionalProperties"):
                    s.item = self._parse(additional.schema, ctx)

        patterns = []
        for prop in schema.pattern_properties:
            try:
                regex = re.compile(prop.pattern)
            except re.error as exc:
                raise SchemaError(f"compile pattern {prop.pattern!r}: {exc}") from exc
            with _context(f"pattern schema {prop.pattern!r}"):
                sub = self._parse(prop.schema, ctx)
            patterns.append(PatternProperty(pattern=regex, schema=sub))
        if patterns:
            s.pattern_properties = patterns

        for spec in schema.properties:
            with _context(f"property {spec.name!r}"):
                prop_schema = self._parse(spec.schema, ctx)
            s.properties.append(
                Property(
                    name=spec.name,
                    description=spec.schema.description if spec.schema is not None else "",
                    schema=prop_schema,
                    required=spec.name in schema.required,
                )
            )
        return s

    def _parse_array(
        self, schema: RawSchema, ctx: set[str], hook: Callable[[Schema], Schema]
    ) -> Schema:
        array = hook(
            Schema(
                type=SchemaType.ARRAY,
                min_items=schema.min_items,
                max_items=schema.max_items,
                unique_items=schema.unique_items,
            )
        )
        if schema.items is None:
            return array
        if schema.properties:
            raise SchemaError("array cannot contain properties")
        with _context("item"):
            array.item = self._parse(schema.items, ctx)
        return array

    def _parse_many(self, schemas: list[RawSchema | None], ctx: set[str]) -> list[Schema | None]:
        result = []
        for index, schema in enumerate(schemas):
            with _context(f"[{index}]"):
                result.append(self._parse(schema, ctx))
        return result

    def _resolve(self, ref: str, ctx: set[str]) -> Schema | None:
        cached = self.refcache.get(ref)
        if cached is not None:
            return cached
        if ref in ctx:
            raise SchemaError("infinite recursion")

        ctx.add(ref)
        try:
            try:
                raw = self._resolver.resolve_reference(ref)
            except Exception as exc:
                raise SchemaError(f"find schema: {exc}") from exc

            def hook(s: Schema) -> Schema:
                s.ref = ref
                self.refcache[ref] = s
                return self._extend_info(raw, s)

            return self._parse1(raw, ctx, hook)
        finally:
            # Forget the ref so that sibling references are not mistaken for recursion.
            ctx.discard(ref)

    @staticmethod
    def _extend_info(schema: RawSchema, s: Schema) -> Schema:
        s.description = schema.description
        s.add_example(schema.example)
        # Nullable enums are handled after the enum values are parsed.
        if not s.enum:
            s.nullable = schema.nullable
        if schema.discriminator is not None:
            s.discriminator = Discriminator(
                property_name=schema.discriminator.property_name,
                mapping=dict(schema.discriminator.mapping),
            )
        return s