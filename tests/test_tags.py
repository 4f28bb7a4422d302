import dataclasses

import pytest

from tomlemit.tags import (
    COMMENT_TAG,
    TOML_TAG,
    FieldOptions,
    TagOptions,
    is_valid_name,
    parse_tag,
    toml_field,
)


def test_parse_tag_name_only():
    assert parse_tag("hello") == ("hello", TagOptions())


def test_parse_tag_empty():
    assert parse_tag("") == ("", TagOptions())


def test_parse_tag_options_without_name():
    assert parse_tag(",omitempty,multiline") == (
        "",
        TagOptions(multiline=True, omitempty=True),
    )


def test_parse_tag_name_and_options():
    assert parse_tag("dependencies,multiline,omitempty") == (
        "dependencies",
        TagOptions(multiline=True, omitempty=True),
    )


def test_parse_tag_inline_and_commented():
    assert parse_tag(",inline") == ("", TagOptions(inline=True))
    assert parse_tag("TLS,commented") == ("TLS", TagOptions(commented=True))


def test_parse_tag_dash_with_comma_is_a_name():
    assert parse_tag("-,") == ("-", TagOptions())


def test_parse_tag_ignores_unknown_options():
    assert parse_tag("name,bogus,,inline") == ("name", TagOptions(inline=True))


@pytest.mark.parametrize(
    "name, expected",
    [
        ("hello", True),
        ("#", True),
        ("pprof-listen", True),
        ("max-metrics-per-target", True),
        ("a b", True),
        ("Ę", True),
        ("x1", True),
        ("", False),
        ("\\", False),
        ('"', False),
        ("a'b", False),
        ("a,b", False),
    ],
)
def test_is_valid_name(name, expected):
    assert is_valid_name(name) is expected


def test_toml_field_metadata_and_default():
    host_spec = toml_field("host", comment="Host IP to connect to.", default="127.0.0.1")
    port_spec = toml_field("port", default=4242)

    assert host_spec.metadata[TOML_TAG] == "host"
    assert host_spec.metadata[COMMENT_TAG] == "Host IP to connect to."
    assert port_spec.metadata[TOML_TAG] == "port"
    assert port_spec.metadata[COMMENT_TAG] == ""

    config_cls = dataclasses.make_dataclass(
        "Config", [("host", str, host_spec), ("port", int, port_spec)]
    )
    host_field, port_field = dataclasses.fields(config_cls)
    assert host_field.metadata[TOML_TAG] == "host"
    assert port_field.metadata[TOML_TAG] == "port"
    assert config_cls() == config_cls(host="127.0.0.1", port=4242)


def test_toml_field_merges_existing_metadata():
    items_spec = toml_field(",multiline", default_factory=list, metadata={"extra": 1})

    assert dict(items_spec.metadata) == {"extra": 1, TOML_TAG: ",multiline", COMMENT_TAG: ""}

    doc_cls = dataclasses.make_dataclass("Doc", [("items", list, items_spec)])
    (items_field,) = dataclasses.fields(doc_cls)
    assert dict(items_field.metadata) == {"extra": 1, TOML_TAG: ",multiline", COMMENT_TAG: ""}
    assert doc_cls().items == []


def test_field_options_defaults():
    options = FieldOptions()
    assert (options.multiline, options.omitempty, options.commented, options.comment) == (
        False,
        False,
        False,
        "",
    )
    assert FieldOptions(comment="x") == FieldOptions(comment="x")
    assert FieldOptions(comment="x") != FieldOptions(comment="y")