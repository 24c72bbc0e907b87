import pytest

from strawberry_django_bundles.utils import (
    decode_json,
    int_or_none,
    json_or_none,
    value_or_none,
    yes_no,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("yes", True),
        ("no", False),
        ("on", False),
        ("", None),
        ("0", None),
        (None, None),
    ],
)
def test_yes_no(value, expected):
    assert yes_no(value) is expected


def test_value_or_none():
    assert value_or_none("tabular") == "tabular"
    assert value_or_none("") is None
    assert value_or_none("0") is None
    assert value_or_none(0) is None


def test_int_or_none():
    assert int_or_none("3") == 3
    assert int_or_none(5) == 5
    assert int_or_none("") is None
    assert int_or_none("many") is None


def test_json_or_none():
    assert json_or_none([12, 13]) == "[12,13]"
    assert json_or_none({"pa_color": "blue"}) == '{"pa_color":"blue"}'
    assert json_or_none([]) is None
    assert json_or_none(None) is None


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ("{}", {}),
        ('{"3": 2}', {"3": 2}),
        ("[1, 2]", [1, 2]),
        ("[]", []),
        ("null", None),
        ("not json", None),
        ("", None),
        (None, None),
    ],
)
def test_decode_json(data, expected):
    assert decode_json(data) == expected
