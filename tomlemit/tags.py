"""Field tags: naming and options attached to dataclass fields."""

from __future__ import annotations

import dataclasses
import unicodedata
from typing import Any

__all__ = [
    "TOML_TAG",
    "COMMENT_TAG",
    "TagOptions",
    "FieldOptions",
    "parse_tag",
    "is_valid_name",
    "toml_field",
]

TOML_TAG = "toml"
COMMENT_TAG = "comment"

_ALLOWED_PUNCTUATION = frozenset("!#$%&()*+-./:;<=>?@[]^_{|}~ ")


@dataclasses.dataclass(frozen=True)
class TagOptions:
    """Options that follow the name in a field tag."""

    multiline: bool = False
    inline: bool = False
    omitempty: bool = False
    commented: bool = False


@dataclasses.dataclass(frozen=True)
class FieldOptions:
    """Options governing how a single value is emitted."""

    multiline: bool = False
    omitempty: bool = False
    commented: bool = False
    comment: str = ""


def parse_tag(tag: str) -> tuple[str, TagOptions]:
    """Split a tag such as ``"name,omitempty"`` into its name and options."""
    name, sep, raw = tag.partition(",")
    if not sep:
        return tag, TagOptions()

    flags = {option for option in raw.split(",") if option}
    return name, TagOptions(
        multiline="multiline" in flags,
        inline="inline" in flags,
        omitempty="omitempty" in flags,
        commented="commented" in flags,
    )


def is_valid_name(name: str) -> bool:
    """Return True if ``name`` may be used as a key name in a tag."""
    if not name:
        return False
    for char in name:
        if char in _ALLOWED_PUNCTUATION:
            continue
        category = unicodedata.category(char)
        if not (category.startswith("L") or category == "Nd"):
            return False
    return True


def toml_field(tag: str = "", comment: str = "", **kwargs: Any) -> Any:
    """Create a dataclass field carrying a TOML tag and an optional comment."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TOML_TAG] = tag
    metadata[COMMENT_TAG] = comment
    return dataclasses.field(metadata=metadata, **kwargs)