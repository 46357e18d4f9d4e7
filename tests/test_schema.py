import re

import pytest

from apigen.raw_schema import Discriminator
from apigen.schema import PatternProperty, Property, Schema, SchemaType


def _pet(friend_name="friends"):
    pet = Schema(type=SchemaType.OBJECT, ref="#/components/schemas/Pet")
    pet.properties = [
        Property(name="id", schema=Schema(type=SchemaType.INTEGER), required=True),
        Property(
            name=friend_name,
            schema=Schema(type=SchemaType.ARRAY, item=pet),
            required=True,
        ),
    ]
    return pet


def test_add_example_skips_empty():
    s = Schema(type=SchemaType.STRING)
    s.add_example('"a"')
    s.add_example("")
    s.add_example(None)
    s.add_example('"b"')
    assert s.examples == ['"a"', '"b"']


def test_equal_simple_schemas():
    assert Schema(type=SchemaType.INTEGER) == Schema(type=SchemaType.INTEGER)
    assert Schema(type=SchemaType.INTEGER) != Schema(type=SchemaType.STRING)


def test_nested_properties_compare_by_value():
    left = Schema(
        type=SchemaType.OBJECT,
        properties=[Property(name="name", schema=Schema(type=SchemaType.STRING), required=True)],
    )
    right = Schema(
        type=SchemaType.OBJECT,
        properties=[Property(name="name", schema=Schema(type=SchemaType.STRING), required=True)],
    )
    other = Schema(
        type=SchemaType.OBJECT,
        properties=[Property(name="name", schema=Schema(type=SchemaType.STRING))],
    )
    assert left == right
    assert left != other


def test_recursive_schemas_compare_without_looping():
    assert _pet() == _pet()
    assert _pet() != _pet("enemies")


def test_item_is_shared_reference():
    pet = _pet()
    assert pet.properties[1].schema.item is pet


def test_schema_not_equal_to_other_types():
    assert (Schema() == "object") is False
    assert ["object", SchemaType.OBJECT].count(Schema(type=SchemaType.OBJECT)) == 0


def test_pattern_property_equality():
    assert PatternProperty(re.compile("^a"), Schema(type=SchemaType.STRING)) == PatternProperty(
        re.compile("^a"), Schema(type=SchemaType.STRING)
    )
    assert PatternProperty(re.compile("^a")) != PatternProperty(re.compile("^b"))


def test_discriminator_participates_in_equality():
    assert Schema(discriminator=Discriminator("kind")) == Schema(discriminator=Discriminator("kind"))
    assert Schema(discriminator=Discriminator("kind")) != Schema(discriminator=Discriminator("type"))


def test_enum_and_default_compare():
    a = Schema(type=SchemaType.STRING, enum=["a", "b"], default="a", default_set=True)
    b = Schema(type=SchemaType.STRING, enum=["a", "b"], default="a", default_set=True)
    assert a == b
    b.enum.append("c")
    assert a != b


def test_schema_is_unhashable():
    with pytest.raises(TypeError):
        hash(Schema())


def test_schema_type_from_string():
    assert SchemaType("array") is SchemaType.ARRAY
    with pytest.raises(ValueError):
        SchemaType("bool")