import pytest

from apigen.jsonpointer import NotFoundError
from apigen.raw_schema import RawProperty, RawSchema
from apigen.resolver import RootResolver, split_uri

ROOT = (
    b'{"components":{"schemas":{'
    b'"Pet":{"type":"object","properties":{"id":{"type":"integer"}},"required":["id"]},'
    b'"a/b":{"type":"string"},'
    b'"Nothing":null,'
    b'"Text":"hello"}}}'
)


@pytest.mark.parametrize(
    ("ref", "expected"),
    [
        ("#/components/schemas/Pet", ("", "#/components/schemas/Pet")),
        ("", ("", "#")),
        ("#/", ("", "#")),
        ("file.json#/a", ("file.json", "#/a")),
        ("file.json", ("file.json", "#")),
    ],
)
def test_split_uri(ref, expected):
    assert split_uri(ref) == expected


def test_resolves_component():
    schema = RootResolver(ROOT).resolve_reference("#/components/schemas/Pet")
    assert schema == RawSchema(
        type="object",
        properties=[RawProperty("id", RawSchema(type="integer"))],
        required=["id"],
    )


def test_reference_is_trimmed():
    schema = RootResolver(ROOT).resolve_reference("  #/components/schemas/Pet\n")
    assert schema.type == "object"


def test_escaped_segment():
    schema = RootResolver(ROOT.decode()).resolve_reference("#/components/schemas/a~1b")
    assert schema == RawSchema(type="string")


def test_root_reference():
    resolver = RootResolver(b'{"type":"string","maxLength":5}')
    assert resolver.resolve_reference("#") == RawSchema(type="string", max_length=5)
    assert resolver.resolve_reference("#/") == RawSchema(type="string", max_length=5)


def test_null_target_gives_none():
    assert RootResolver(ROOT).resolve_reference("#/components/schemas/Nothing") is None


def test_external_base_rejected():
    with pytest.raises(ValueError, match="external base"):
        RootResolver(ROOT).resolve_reference("other.json#/components/schemas/Pet")


def test_missing_reference():
    with pytest.raises(ValueError) as info:
        RootResolver(ROOT).resolve_reference("#/components/schemas/Missing")
    assert isinstance(info.value.__cause__, NotFoundError)


def test_non_object_target():
    with pytest.raises(ValueError, match="unmarshal"):
        RootResolver(ROOT).resolve_reference("#/components/schemas/Text")