"""Serialization of Python values into TOML documents."""

from __future__ import annotations

import dataclasses
import datetime
import io
from decimal import Decimal
from typing import Any, TextIO

from tomlemit.tags import (
    COMMENT_TAG,
    TOML_TAG,
    FieldOptions,
    is_valid_name,
    parse_tag,
)
from tomlemit.text import encode_key, encode_string, format_comment, format_float

__all__ = ["EncodeError", "Encoder", "marshal"]

_MAX_INT64 = 2**63 - 1
_MIN_INT64 = -(2**63)


class EncodeError(ValueError):
    """Raised when a value cannot be represented as TOML."""


@dataclasses.dataclass(frozen=True)
class _Context:
    parent_key: tuple[str, ...] = ()
    key: str | None = None
    inside_kv: bool = False
    skip_table_header: bool = False
    inline: bool = False
    indent: int = 0
    commented: bool = False
    options: FieldOptions = FieldOptions()

    def shift_key(self) -> _Context:
        if self.key is None:
            return self
        return dataclasses.replace(
            self, parent_key=self.parent_key + (self.key,), key=None
        )

    def with_key(self, key: str) -> _Context:
        return dataclasses.replace(self, key=key)

    @property
    def is_root(self) -> bool:
        return not self.parent_key and self.key is None


@dataclasses.dataclass
class _Entry:
    key: str
    value: Any
    options: FieldOptions


@dataclasses.dataclass
class _Table:
    kvs: list[_Entry] = dataclasses.field(default_factory=list)
    tables: list[_Entry] = dataclasses.field(default_factory=list)

    @staticmethod
    def _push(entries: list[_Entry], key: str, value: Any, options: FieldOptions) -> None:
        if any(entry.key == key for entry in entries):
            return
        entries.append(_Entry(key, value, options))

    def push_kv(self, key: str, value: Any, options: FieldOptions) -> None:
        self._push(self.kvs, key, value, options)

    def push_table(self, key: str, value: Any, options: FieldOptions) -> None:
        self._push(self.tables, key, value, options)


def _is_text_marshaler(value: Any) -> bool:
    return callable(getattr(value, "marshal_text", None))


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _marshal_text(value: Any) -> str:
    try:
        return str(value.marshal_text())
    except EncodeError:
        raise
    except Exception as exc:
        raise EncodeError(f"toml: cannot marshal text: {exc}") from exc


def _exported_fields(value: Any):
    for field in dataclasses.fields(value):
        if field.name.startswith("_"):
            continue
        tag = field.metadata.get(TOML_TAG, "")
        if tag == "-":
            continue
        yield field, tag


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if _is_dataclass_instance(value):
        return all(_is_empty(getattr(value, f.name)) for f, _ in _exported_fields(value))
    if isinstance(value, (list, tuple, dict, str)):
        return len(value) == 0
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    return False


def _should_omit(options: FieldOptions, value: Any) -> bool:
    return options.omitempty and _is_empty(value)


def _will_convert_to_table(ctx: _Context, value: Any) -> bool:
    if value is None or isinstance(value, (datetime.date, datetime.time)):
        return False
    if _is_text_marshaler(value):
        return False
    if isinstance(value, dict) or _is_dataclass_instance(value):
        return not ctx.inline
    return False


def _will_convert_to_table_or_array_table(ctx: _Context, value: Any) -> bool:
    if ctx.inside_kv:
        return False
    if _is_sequence(value):
        if not value:
            return False
        return all(_will_convert_to_table(ctx, item) for item in value)
    return _will_convert_to_table(ctx, value)


def _fraction(microsecond: int) -> str:
    if not microsecond:
        return ""
    return "." + f"{microsecond:06d}".rstrip("0")


def _format_datetime(value: datetime.datetime) -> str:
    base = f"{value.date().isoformat()}T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    base += _fraction(value.microsecond)
    offset = value.utcoffset()
    if offset is None:
        return base
    seconds = int(offset.total_seconds())
    if seconds == 0:
        return base + "Z"
    sign = "+" if seconds > 0 else "-"
    seconds = abs(seconds)
    return f"{base}{sign}{seconds // 3600:02d}:{seconds % 3600 // 60:02d}"


def _format_time(value: datetime.time) -> str:
    return f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}{_fraction(value.microsecond)}"


class Encoder:
    """Writes TOML documents to a text stream."""

    def __init__(
        self,
        stream: TextIO,
        tables_inline: bool = False,
        arrays_multiline: bool = False,
        indent_symbol: str = "  ",
        indent_tables: bool = False,
        marshal_json_numbers: bool = False,
    ) -> None:
        self.stream = stream
        self.tables_inline = tables_inline
        self.arrays_multiline = arrays_multiline
        self.indent_symbol = indent_symbol
        self.indent_tables = indent_tables
        self.marshal_json_numbers = marshal_json_numbers

    def encode(self, value: Any) -> None:
        """Write the TOML representation of ``value`` to the stream."""
        if value is None:
            raise EncodeError("toml: cannot encode a nil interface")
        text = self._encode(_Context(inline=self.tables_inline), value)
        try:
            self.stream.write(text)
        except Exception as exc:
            raise EncodeError(f"toml: cannot write: {exc}") from exc

    def _indent(self, level: int) -> str:
        return self.indent_symbol * level

    def _comment(self, indent: int, comment: str) -> str:
        return format_comment(comment, self._indent(indent))

    def _encode(self, ctx: _Context, value: Any) -> str:
        if value is None:
            raise EncodeError("toml: encoding a nil interface is not supported")
        if isinstance(value, datetime.datetime):
            return _format_datetime(value)
        if isinstance(value, datetime.date):
            return value.isoformat()
        if isinstance(value, datetime.time):
            return _format_time(value)
        if isinstance(value, Decimal) and self.marshal_json_numbers:
            text = str(value)
            try:
                return self._encode(ctx, int(text))
            except ValueError:
                return self._encode(ctx, float(text))
        if _is_text_marshaler(value):
            if ctx.is_root:
                raise EncodeError(
                    f"toml: type {type(value).__name__} implementing marshal_text "
                    "cannot be a root element"
                )
            return encode_string(_marshal_text(value), ctx.options.multiline)
        if isinstance(value, Decimal):
            return encode_string(str(value), ctx.options.multiline)
        if isinstance(value, dict):
            return self._encode_map(ctx, value)
        if _is_dataclass_instance(value):
            return self._encode_struct(ctx, value)
        if _is_sequence(value):
            return self._encode_slice(ctx, value)
        if isinstance(value, str):
            return encode_string(value, ctx.options.multiline)
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            if value > _MAX_INT64:
                raise EncodeError(
                    f"toml: not encoding uint ({value}) greater than max int64 ({_MAX_INT64})"
                )
            if value < _MIN_INT64:
                raise EncodeError(f"toml: not encoding int ({value}) lower than min int64")
            return str(value)
        if isinstance(value, float):
            return format_float(value)
        raise EncodeError(f"toml: cannot encode value of type {type(value).__name__}")

    def _encode_kv(self, ctx: _Context, options: FieldOptions, value: Any) -> str:
        parts = []
        if not ctx.inline:
            parts.append(self._comment(ctx.indent, options.comment))
            if ctx.commented:
                parts.append("# ")
            parts.append(self._indent(ctx.indent))
        parts.append(encode_key(ctx.key or ""))
        parts.append(" = ")
        sub = dataclasses.replace(ctx, inside_kv=True).shift_key()
        sub = dataclasses.replace(sub, options=options)
        parts.append(self._encode(sub, value))
        return "".join(parts)

    @staticmethod
    def _key_to_string(key: Any) -> str:
        if isinstance(key, str):
            return key
        if _is_text_marshaler(key):
            return _marshal_text(key)
        raise EncodeError(f"toml: type {type(key).__name__} is not supported as a map key")

    def _encode_map(self, ctx: _Context, value: dict) -> str:
        table = _Table()
        empty = FieldOptions()
        for raw_key, item in value.items():
            if item is None:
                continue
            key = self._key_to_string(raw_key)
            if _will_convert_to_table_or_array_table(ctx, item):
                table.push_table(key, item, empty)
            else:
                table.push_kv(key, item, empty)
        table.kvs.sort(key=lambda e: e.key)
        table.tables.sort(key=lambda e: e.key)
        return self._encode_table(ctx, table)

    def _encode_struct(self, ctx: _Context, value: Any) -> str:
        table = _Table()
        for field, tag in _exported_fields(value):
            name, opts = parse_tag(tag)
            if not is_valid_name(name):
                name = field.name
            item = getattr(value, field.name)
            if item is None:
                continue
            options = FieldOptions(
                multiline=opts.multiline,
                omitempty=opts.omitempty,
                commented=opts.commented,
                comment=field.metadata.get(COMMENT_TAG, ""),
            )
            if opts.inline or not _will_convert_to_table_or_array_table(ctx, item):
                table.push_kv(name, item, options)
            else:
                table.push_table(name, item, options)
        return self._encode_table(ctx, table)

    def _encode_table_header(self, ctx: _Context) -> str:
        if not ctx.parent_key:
            return ""
        prefix = "# " if ctx.commented else ""
        keys = ".".join(encode_key(k) for k in ctx.parent_key)
        return (
            f"{self._comment(ctx.indent, ctx.options.comment)}"
            f"{prefix}{self._indent(ctx.indent)}[{keys}]\n"
        )

    def _encode_table(self, ctx: _Context, table: _Table) -> str:
        ctx = ctx.shift_key()
        if ctx.inside_kv or (ctx.inline and not ctx.is_root):
            return self._encode_table_inline(ctx, table)

        parts = []
        if not ctx.skip_table_header:
            parts.append(self._encode_table_header(ctx))
            if self.indent_tables and ctx.parent_key:
                ctx = dataclasses.replace(ctx, indent=ctx.indent + 1)
        ctx = dataclasses.replace(ctx, skip_table_header=False)

        has_kv = False
        for kv in table.kvs:
            if _should_omit(kv.options, kv.value):
                continue
            has_kv = True
            ctx = ctx.with_key(kv.key)
            sub = dataclasses.replace(ctx, commented=kv.options.commented or ctx.commented)
            parts.append(self._encode_kv(sub, kv.options, kv.value))
            parts.append("\n")

        first = True
        for entry in table.tables:
            if _should_omit(entry.options, entry.value):
                continue
            if first:
                first = False
                if has_kv:
                    parts.append("\n")
            else:
                parts.append("\n")
            ctx = dataclasses.replace(ctx.with_key(entry.key), options=entry.options)
            sub = dataclasses.replace(ctx, commented=ctx.commented or entry.options.commented)
            parts.append(self._encode(sub, entry.value))
        return "".join(parts)

    def _encode_table_inline(self, ctx: _Context, table: _Table) -> str:
        if table.tables:
            raise EncodeError("toml: inline table cannot contain nested tables")
        items = []
        for kv in table.kvs:
            if _should_omit(kv.options, kv.value):
                continue
            items.append(self._encode_kv(ctx.with_key(kv.key), kv.options, kv.value))
        return "{" + ", ".join(items) + "}"

    def _encode_slice(self, ctx: _Context, value: list | tuple) -> str:
        if not value:
            return "[]"
        if _will_convert_to_table_or_array_table(ctx, value):
            return self._encode_slice_as_array_table(ctx, value)
        return self._encode_slice_as_array(ctx, value)

    def _encode_slice_as_array_table(self, ctx: _Context, value: list | tuple) -> str:
        ctx = ctx.shift_key()
        header = "# " if ctx.commented else ""
        if self.indent_tables:
            header += self._indent(ctx.indent)
        header += "[[" + ".".join(encode_key(k) for k in ctx.parent_key) + "]]\n"
        ctx = dataclasses.replace(ctx, skip_table_header=True)

        parts = [self._comment(ctx.indent, ctx.options.comment)]
        if self.indent_tables:
            ctx = dataclasses.replace(ctx, indent=ctx.indent + 1)
        for position, item in enumerate(value):
            if position:
                parts.append("\n")
            parts.append(header)
            parts.append(self._encode(ctx, item))
        return "".join(parts)

    def _encode_slice_as_array(self, ctx: _Context, value: list | tuple) -> str:
        multiline = ctx.options.multiline or self.arrays_multiline
        sub = dataclasses.replace(ctx, options=FieldOptions())
        if not multiline:
            return "[" + ", ".join(self._encode(sub, item) for item in value) + "]"
        sub = dataclasses.replace(sub, indent=sub.indent + 1)
        pad = self._indent(sub.indent)
        body = ",\n".join(pad + self._encode(sub, item) for item in value)
        return f"[\n{body}\n{self._indent(ctx.indent)}]"


def marshal(value: Any) -> str:
    """Serialize ``value`` as a TOML document with default options."""
    buffer = io.StringIO()
    Encoder(buffer).encode(value)
    return buffer.getvalue()