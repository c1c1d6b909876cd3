import io
import math

import pytest

from metaloom._errors import ParameterEncodingError, UnsupportedParameterTypeError
from metaloom.core import decode_param, encode_param, encode_params


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("tx_news[item]", "tx_news[item]"),  # Strings are passed verbatim
        ("", ""),
        (12, "12"),
        (-1.5, "-1.5"),
        (None, "null"),
        ([1, "two", None], '[1,"two",null]'),
        ((1, 2), "[1,2]"),
        ({"a": 1}, '{"a":1}'),
    ],
)
def test_encode_param(value, expected):
    assert encode_param(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (["a&b"], '["a\\u0026b"]'),
        (["it's"], '["it\\u0027s"]'),
        (["<b>"], '["\\u003Cb\\u003E"]'),
        (['say "hi"'], '["say \\u0022hi\\u0022"]'),
        ({"k": "a\\b"}, '{"k":"a\\\\b"}'),  # Escaped backslashes are left alone
    ],
)
def test_encode_param_escapes_html_characters(value, expected):
    encoded = encode_param(value)
    assert encoded == expected
    assert not any(c in encoded for c in "&'<>")


def test_round_trip_of_structured_value():
    value = [1, "two", None]
    assert decode_param(encode_param(value)) == value


def test_round_trip_of_escaped_value():
    value = {"html": "<a href='x'>&\"</a>"}
    assert decode_param(encode_param(value)) == value


@pytest.mark.parametrize(
    "value",
    [
        True,
        object(),
        {1, 2},
        b"bytes",
    ],
)
def test_encode_unsupported_types(value):
    with pytest.raises(UnsupportedParameterTypeError, match="Unsupported handler parameter type"):
        encode_param(value)


def test_encode_open_resource():
    with io.StringIO() as handle:
        with pytest.raises(UnsupportedParameterTypeError):
            encode_param(handle)


@pytest.mark.parametrize("value", [math.nan, [math.inf], {"a": object()}])
def test_encode_failure(value):
    with pytest.raises(ParameterEncodingError):
        encode_param(value)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("hello", "hello"),  # Not JSON, returned as is
        ("[1,2]", [1, 2]),
        ('{"a":1}', {"a": 1}),
        ("12", 12),
        ("null", None),
        ("true", True),  # Not the string 'true'
        ("NaN", "NaN"),  # Strict JSON only
        ("Infinity", "Infinity"),
        ("", ""),
    ],
)
def test_decode_param(text, expected):
    assert decode_param(text) == expected


def test_decode_non_string_is_returned():
    assert decode_param(12) == 12


def test_encode_params():
    assert encode_params(["tx_news[item]", {"a": 1}, 3]) == "'tx_news[item]','{\"a\":1}','3'"


def test_encode_params_empty():
    assert encode_params([]) == ""
