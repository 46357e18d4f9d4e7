"""Raw JSON Schema documents, decoded as written without interpretation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

_WS = " \t\n\r"
_decoder = json.JSONDecoder()
_KEEP = object()


def _text(data: bytes | bytearray | str) -> str:
    return bytes(data).decode("utf-8") if isinstance(data, (bytes, bytearray)) else data


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _WS:
        pos += 1
    return pos


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON literal {name}")


def _load(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid json: {exc}") from exc


def _members(text: str) -> list[tuple[str, str]]:
    """Split a valid JSON object into (key, raw value text) pairs, in order."""
    pos = _skip_ws(text, _skip_ws(text, 0) + 1)
    items: list[tuple[str, str]] = []
    if text[pos] == "}":
        return items
    while True:
        key, pos = _decoder.raw_decode(text, _skip_ws(text, pos))
        pos = _skip_ws(text, pos) + 1
        start = _skip_ws(text, pos)
        _, end = _decoder.raw_decode(text, start)
        items.append((key, text[start:end]))
        pos = _skip_ws(text, end)
        if text[pos] == "}":
            return items
        pos += 1


def _elements(text: str) -> list[str]:
    """Split a valid JSON array into raw element texts, in order."""
    pos = _skip_ws(text, _skip_ws(text, 0) + 1)
    items: list[str] = []
    if text[pos] == "]":
        return items
    while True:
        start = _skip_ws(text, pos)
        _, end = _decoder.raw_decode(text, start)
        items.append(text[start:end])
        pos = _skip_ws(text, end)
        if text[pos] == "]":
            return items
        pos += 1


def _compact(raw: str) -> str:
    """Drop insignificant whitespace from raw JSON, keeping every token as written."""
    out: list[str] = []
    in_string = False
    escaped = False
    for char in raw:
        if in_string:
            out.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char not in _WS:
            out.append(char)
            if char == '"':
                in_string = True
    return "".join(out)


def _q(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _obj(pairs: Iterable[tuple[str, str]]) -> str:
    return "{" + ",".join(f"{_q(k)}:{v}" for k, v in pairs) + "}"


def parse_num(data: bytes | str) -> str:
    """Validate raw JSON number text and return it as written."""
    text = _text(data).strip(_WS)
    value = _load(text)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"invalid number {text}")
    return text


@dataclass
class Discriminator:
    """Discriminator of a polymorphic schema."""

    property_name: str = ""
    mapping: dict[str, str] = field(default_factory=dict)

    def _json(self) -> str:
        pairs = [("propertyName", _q(self.property_name))]
        if self.mapping:
            pairs.append(("mapping", _obj((k, _q(v)) for k, v in self.mapping.items())))
        return _obj(pairs)


@dataclass
class RawProperty:
    """A named object property as written."""

    name: str
    schema: RawSchema | None = None


@dataclass
class RawPatternProperty:
    """A pattern property as written."""

    pattern: str
    schema: RawSchema | None = None


@dataclass
class AdditionalProperties:
    """additionalProperties: given either as a boolean or as a schema."""

    is_bool: bool = False
    schema: RawSchema = field(default_factory=lambda: RawSchema())

    def _json(self) -> str:
        return "true" if self.is_bool else self.schema.to_json()


def _schema_json(schema: RawSchema | None) -> str:
    return "null" if schema is None else schema.to_json()


@dataclass(kw_only=True)
class RawSchema:
    """A JSON Schema object exactly as it appears in the document."""

    ref: str = ""
    description: str = ""
    type: str = ""
    format: str = ""
    properties: list[RawProperty] = field(default_factory=list)
    additional_properties: AdditionalProperties | None = None
    pattern_properties: list[RawPatternProperty] = field(default_factory=list)
    required: list[str] = field(default_factory=list)
    items: RawSchema | None = None
    nullable: bool = False
    all_of: list[RawSchema | None] = field(default_factory=list)
    one_of: list[RawSchema | None] = field(default_factory=list)
    any_of: list[RawSchema | None] = field(default_factory=list)
    discriminator: Discriminator | None = None
    enum: list[str] = field(default_factory=list)
    multiple_of: str | None = None
    maximum: str | None = None
    exclusive_maximum: bool = False
    minimum: str | None = None
    exclusive_minimum: bool = False
    max_length: int | None = None
    min_length: int | None = None
    pattern: str = ""
    max_items: int | None = None
    min_items: int | None = None
    unique_items: bool = False
    max_properties: int | None = None
    min_properties: int | None = None
    default: str | None = None
    example: str | None = None
    deprecated: bool = False
    x_annotations: dict[str, str] = field(default_factory=dict)

    def to_json(self) -> str:
        """Encode as compact JSON; omits empty fields and x- annotations."""
        parts: list[tuple[str, str]] = []
        if self.ref:
            parts.append(("$ref", _q(self.ref)))
        if self.description:
            parts.append(("description", _q(self.description)))
        if self.type:
            parts.append(("type", _q(self.type)))
        if self.format:
            parts.append(("format", _q(self.format)))
        if self.properties:
            parts.append(
                ("properties", _obj((p.name, _schema_json(p.schema)) for p in self.properties))
            )
        if self.additional_properties is not None:
            parts.append(("additionalProperties", self.additional_properties._json()))
        if self.pattern_properties:
            parts.append(
                (
                    "patternProperties",
                    _obj((p.pattern, _schema_json(p.schema)) for p in self.pattern_properties),
                )
            )
        if self.required:
            parts.append(("required", "[" + ",".join(_q(r) for r in self.required) + "]"))
        if self.items is not None:
            parts.append(("items", self.items.to_json()))
        if self.nullable:
            parts.append(("nullable", "true"))
        for key, schemas in (("allOf", self.all_of), ("oneOf", self.one_of), ("anyOf", self.any_of)):
            if schemas:
                parts.append((key, "[" + ",".join(_schema_json(s) for s in schemas) + "]"))
        if self.discriminator is not None:
            parts.append(("discriminator", self.discriminator._json()))
        if self.enum:
            parts.append(("enum", "[" + ",".join(_compact(v) for v in self.enum) + "]"))
        if self.multiple_of:
            parts.append(("multipleOf", self.multiple_of))
        if self.maximum:
            parts.append(("maximum", self.maximum))
        if self.exclusive_maximum:
            parts.append(("exclusiveMaximum", "true"))
        if self.minimum:
            parts.append(("minimum", self.minimum))
        if self.exclusive_minimum:
            parts.append(("exclusiveMinimum", "true"))
        if self.max_length is not None:
            parts.append(("maxLength", str(self.max_length)))
        if self.min_length is not None:
            parts.append(("minLength", str(self.min_length)))
        if self.pattern:
            parts.append(("pattern", _q(self.pattern)))
        if self.max_items is not None:
            parts.append(("maxItems", str(self.max_items)))
        if self.min_items is not None:
            parts.append(("minItems", str(self.min_items)))
        if self.unique_items:
            parts.append(("uniqueItems", "true"))
        if self.max_properties is not None:
            parts.append(("maxProperties", str(self.max_properties)))
        if self.min_properties is not None:
            parts.append(("minProperties", str(self.min_properties)))
        if self.default:
            parts.append(("default", _compact(self.default)))
        if self.example:
            parts.append(("example", _compact(self.example)))
        if self.deprecated:
            parts.append(("deprecated", "true"))
        return _obj(parts)

    def to_dict(self) -> dict[str, Any]:
        """Return the schema as plain Python data, as to_json would encode it."""
        return json.loads(self.to_json())


def _type_error(key: str, expected: str, raw: str) -> ValueError:
    return ValueError(f"field {key!r}: expected {expected}, got {raw[:40]}")


def _string(key: str, raw: str) -> Any:
    value = json.loads(raw)
    if value is None:
        return _KEEP
    if not isinstance(value, str):
        raise _type_error(key, "string", raw)
    return value


def _boolean(key: str, raw: str) -> Any:
    value = json.loads(raw)
    if value is None:
        return _KEEP
    if not isinstance(value, bool):
        raise _type_error(key, "boolean", raw)
    return value


def _uint(key: str, raw: str) -> Any:
    value = json.loads(raw)
    if value is None:
        return _KEEP
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < 1 << 64:
        raise _type_error(key, "unsigned integer", raw)
    return value


def _strings(key: str, raw: str) -> Any:
    value = json.loads(raw)
    if value is None:
        return _KEEP
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise _type_error(key, "array of strings", raw)
    return value


def _num(key: str, raw: str) -> Any:
    try:
        return parse_num(raw)
    except ValueError as exc:
        raise ValueError(f"field {key!r}: {exc}") from exc


def _raws(key: str, raw: str) -> Any:
    if raw[0] == "n":
        return _KEEP
    if raw[0] != "[":
        raise _type_error(key, "array", raw)
    return _elements(raw)


def _object(key: str, raw: str) -> RawSchema:
    if raw[0] != "{":
        raise _type_error(key, "object", raw)
    return _build(raw)


def _schema(key: str, raw: str) -> Any:
    if raw[0] == "n":
        return _KEEP
    return _object(key, raw)


def _schemas(key: str, raw: str) -> Any:
    if raw[0] == "n":
        return _KEEP
    if raw[0] != "[":
        raise _type_error(key, "array", raw)
    return [None if item[0] == "n" else _object(key, item) for item in _elements(raw)]


def _schema_map(make: Callable[[str, RawSchema], Any]) -> Callable[[str, str], Any]:
    def convert(key: str, raw: str) -> Any:
        if raw[0] == "n":
            return _KEEP
        if raw[0] != "{":
            raise _type_error(key, "object", raw)
        return [
            make(name, RawSchema() if sub[0] == "n" else _object(f"{key}.{name}", sub))
            for name, sub in _members(raw)
        ]

    return convert


def _additional(key: str, raw: str) -> Any:
    head = raw[0]
    if head == "n":
        return _KEEP
    if head in "tf":
        return AdditionalProperties(is_bool=True)
    if head == "{":
        return AdditionalProperties(schema=_build(raw))
    raise ValueError(f"field {key!r}: unexpected type {raw[:40]}")


def _discriminator(key: str, raw: str) -> Any:
    if raw[0] == "n":
        return _KEEP
    if raw[0] != "{":
        raise _type_error(key, "object", raw)
    result = Discriminator()
    for name, sub in _members(raw):
        value = json.loads(sub)
        if name == "propertyName":
            if value is not None and not isinstance(value, str):
                raise _type_error("propertyName", "string", sub)
            result.property_name = value or ""
        elif name == "mapping" and value is not None:
            if not isinstance(value, dict) or not all(
                v is None or isinstance(v, str) for v in value.values()
            ):
                raise _type_error("mapping", "object of strings", sub)
            result.mapping = {k: v or "" for k, v in value.items()}
    return result


# A converter of None keeps the raw JSON text of the value as written.
_FIELDS: dict[str, tuple[str, Optional[Callable[[str, str], Any]]]] = {
    "$ref": ("ref", _string),
    "description": ("description", _string),
    "type": ("type", _string),
    "format": ("format", _string),
    "properties": ("properties", _schema_map(RawProperty)),
    "additionalProperties": ("additional_properties", _additional),
    "patternProperties": ("pattern_properties", _schema_map(RawPatternProperty)),
    "required": ("required", _strings),
    "items": ("items", _schema),
    "nullable": ("nullable", _boolean),
    "allOf": ("all_of", _schemas),
    "oneOf": ("one_of", _schemas),
    "anyOf": ("any_of", _schemas),
    "discriminator": ("discriminator", _discriminator),
    "enum": ("enum", _raws),
    "multipleOf": ("multiple_of", _num),
    "maximum": ("maximum", _num),
    "exclusiveMaximum": ("exclusive_maximum", _boolean),
    "minimum": ("minimum", _num),
    "exclusiveMinimum": ("exclusive_minimum", _boolean),
    "maxLength": ("max_length", _uint),
    "minLength": ("min_length", _uint),
    "pattern": ("pattern", _string),
    "maxItems": ("max_items", _uint),
    "minItems": ("min_items", _uint),
    "uniqueItems": ("unique_items", _boolean),
    "maxProperties": ("max_properties", _uint),
    "minProperties": ("min_properties", _uint),
    "default": ("default", None),
    "example": ("example", None),
    "deprecated": ("deprecated", _boolean),
}


def _build(text: str) -> RawSchema:
    if not text.lstrip(_WS).startswith("{"):
        raise ValueError(f"cannot decode schema from {text[:40]!r}: expected object")
    schema = RawSchema()
    for key, raw in _members(text):
        spec = _FIELDS.get(key)
        if spec is not None:
            attr, convert = spec
            value = raw if convert is None else convert(key, raw)
            if value is not _KEEP:
                setattr(schema, attr, value)
        elif key.startswith("x-"):
            schema.x_annotations[key] = raw
    return schema


def parse_raw_schema(data: bytes | str) -> RawSchema:
    """Decode a JSON Schema object, keeping raw values and x- annotations."""
    text = _text(data)
    _load(text)
    return _build(text.strip(_WS))