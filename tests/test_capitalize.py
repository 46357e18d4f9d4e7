from apigen.capitalize import capitalize


def test_capitalize_first_only():
    assert capitalize("fooBar") == "FooBar"


def test_capitalize_unicode():
    assert capitalize("десять") == "Десять"


def test_capitalize_empty_and_idempotent():
    assert capitalize("") == ""
    once = capitalize("abc")
    assert capitalize(once) == once