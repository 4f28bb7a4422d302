import math

import pytest

from tomlemit.text import (
    encode_key,
    encode_literal_string,
    encode_quoted_string,
    encode_string,
    format_comment,
    format_float,
    needs_quoting,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("world", False),
        ("foo 🙂 ", False),
        ("has\ttab", False),
        ("it's", True),
        ("a\nb", True),
        ("a\rb", True),
        ("\x1a", True),
        ("\x7f", True),
        ("\x00", True),
    ],
)
def test_needs_quoting(value, expected):
    assert needs_quoting(value) is expected


def test_encode_literal_string():
    assert encode_literal_string("world") == "'world'"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("world", "'world'"),
        ("", "''"),
        ("'\b\f\r\t\"\\", "\"'\\b\\f\\r\\t\\\"\\\\\""),
        ("'Ę", "\"'Ę\""),
        ("'\u10A85", "\"'\u10A85\""),
        ("'😀", "\"'😀\""),
        ("'\u001A", "\"'\\u001A\""),
        ("hello\nworld", '"hello\\nworld"'),
        ("Hello\\World", "'Hello\\World'"),
        ("::2", "'::2'"),
    ],
)
def test_encode_string(value, expected):
    assert encode_string(value) == expected


def test_encode_string_multiline_forced():
    assert encode_string("hello\nworld", multiline=True) == '"""\nhello\nworld"""'


def test_encode_string_multiline_ignored_for_literal():
    assert encode_string("hello", multiline=True) == "'hello'"


def test_encode_quoted_string_control_characters():
    assert encode_quoted_string("\x00\x08\x1f\x7f") == '"\\u0000\\b\\u001F\\u007F"'


def test_encode_quoted_string_multiline_keeps_newlines():
    assert encode_quoted_string("a\nb\r", multiline=True) == '"""\na\nb\\r"""'


@pytest.mark.parametrize(
    "key, expected",
    [
        ("hello", "hello"),
        ("a-1", "a-1"),
        ("XZ_URL", "XZ_URL"),
        ("", "''"),
        ("hel\nlo", '"hel\\nlo"'),
        ('hel"lo', "'hel\"lo'"),
        ("map1.1", "'map1.1'"),
        ("+inf", "'+inf'"),
        ("-inf", "-inf"),
        ("#", "'#'"),
        ("a\n", '"a\\n"'),
        ("in\ner", '"in\\ner"'),
        ("it's", '"it\'s"'),
        ("Ę", "'Ę'"),
    ],
)
def test_encode_key(key, expected):
    assert encode_key(key) == expected


@pytest.mark.parametrize(
    "value, single, expected",
    [
        (1.1, True, "1.1"),
        (2.2, False, "2.2"),
        (42.0, True, "42.0"),
        (43.0, False, "43.0"),
        (0.0, False, "0.0"),
        (-0.0, False, "-0.0"),
        (1.1, False, "1.1"),
        (0.042, False, "0.042"),
        (-0.01, False, "-0.01"),
        (1e-7, False, "0.0000001"),
        (1e20, False, "100000000000000000000.0"),
        (3.1415, False, "3.1415"),
    ],
)
def test_format_float(value, single, expected):
    assert format_float(value, single) == expected


@pytest.mark.parametrize("single", [True, False])
def test_format_float_special_values(single):
    assert format_float(math.nan, single) == "nan"
    assert format_float(math.inf, single) == "inf"
    assert format_float(-math.inf, single) == "-inf"


def test_format_float_round_trips():
    for value in (0.1, 123.456, 6.626e-34, 224617.445991228):
        assert float(format_float(value)) == value


def test_format_comment_multiline():
    comment = "This is a multiline comment.\nThis is line 2."
    assert format_comment(comment) == (
        "# This is a multiline comment.\n# This is line 2.\n"
    )


def test_format_comment_indent():
    assert format_comment("my field A", "  ") == "  # my field A\n"


def test_format_comment_empty():
    assert format_comment("") == ""


def test_format_comment_trailing_and_blank_lines():
    assert format_comment("a\n") == "# a\n"
    assert format_comment("a\n\nb") == "# a\n# \n# b\n"