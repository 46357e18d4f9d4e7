# apigen

Building blocks for tools that generate code from OpenAPI v3 documents.

- `apigen.parser`: `Parser` turns a `RawSchema` into a resolved `Schema`
  tree. It follows `$ref` links through a `ReferenceResolver`, caches resolved
  references in `Parser.refcache`, parses enum values and defaults, and raises
  `SchemaError` on invalid schemas, including infinite reference recursion.
  `Settings(resolver=..., infer_types=...)` configures it; with `infer_types`
  a schema without `"type"` gets one from its other keywords.
- `apigen.schema`: the parsed model: `Schema`, `Property`, `PatternProperty`
  and the `SchemaType` enum.
- `apigen.raw_schema`: `RawSchema`, a schema exactly as written. Read one with
  `parse_raw_schema(data)`; write it back with `RawSchema.to_json()` or
  `RawSchema.to_dict()`. Numbers, enum values, defaults and examples keep
  their raw JSON text; `x-` keys are kept in `x_annotations`.
- `apigen.resolver`: `RootResolver(root)` resolves local `#/...` references
  inside one root document; `split_uri` splits a reference into base and
  fragment. External references raise `ValueError`.
- `apigen.jsonpointer`: `resolve(ptr, buf)` evaluates an RFC 6901 JSON
  Pointer (plain or `#`-fragment form) and returns the raw bytes of the value.
  It raises `NotFoundError` when the value is missing and `PointerError` for
  invalid pointers or JSON.
- `apigen.formats`: JSON codecs for string formats: `encode_`/`decode_`
  pairs for IP, date, time, date-time (RFC 3339), duration, URI and UUID,
  plus `marshal` and `unmarshal`.
- `apigen.duration`: `format_duration(nanoseconds)` and `parse_duration(text)`
  for duration strings such as `1h2m3.5s`.
- `apigen.errors`: `SecurityError`, `DecodeParamsError` and
  `DecodeRequestError`, all `OperationError`s with `operation_id()` and
  `code()` (HTTP 400).
- `apigen.capitalize`: `capitalize(s)` upper-cases the first character.

## Installation

```
pip install .
```

## Example

```python
from apigen.parser import Parser, Settings
from apigen.raw_schema import parse_raw_schema
from apigen.resolver import RootResolver
from apigen.jsonpointer import resolve

document = b'''{
  "components": {"schemas": {
    "Pet": {"type": "object",
            "properties": {"id": {"type": "integer"}},
            "required": ["id"]}
  }}
}'''

parser = Parser(Settings(resolver=RootResolver(document)))
pet = parser.resolve("#/components/schemas/Pet")
print(pet.type.value, [p.name for p in pet.properties])  # object ['id']

print(resolve("/components/schemas/Pet/type", document))  # b'"object"'

raw = parse_raw_schema(b'{"type": "string", "enum": ["a", "b"]}')
print(parser.parse(raw).enum)  # ['a', 'b']
```

Formats:

```python
from apigen.formats import encode_duration, decode_uuid
from apigen.duration import format_duration

format_duration(90 * 10**9)         # '1m30s'
encode_duration(1_500_000)          # b'"1.5ms"'
decode_uuid(b'"123e4567-e89b-12d3-a456-426614174000"')
```

## What this package does not do

It provides the schema model and helpers only. It has no command-line tool,
does not read whole OpenAPI documents into operations, does not write any
generated code, and contains no HTTP server or client.

## Running the tests

```
pip install .[test]
pytest
```