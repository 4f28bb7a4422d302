# tomlemit

`tomlemit` writes Python values out as TOML documents. It handles mappings,
dataclasses, lists and tuples, strings, integers, floats, booleans, and
`datetime.datetime`, `datetime.date` and `datetime.time` values. A dataclass
field can carry options that control how it is written: a custom key, inline
tables, multiline strings or arrays, skipping empty values, comments, and
fields written out as comments.

## Installation

```
pip install tomlemit
```

## Quick start

```python
from tomlemit.encoder import marshal

doc = marshal({"hello": "world", "table": {"answer": 42}})
print(doc)
```

Output:

```
hello = 'world'

[table]
answer = 42
```

`marshal` returns the document as a string. Keys of a mapping are written in
sorted order. Fields of a dataclass are written in the order they are defined;
fields whose names start with an underscore are left out. Entries whose value
is `None` are skipped in mappings and dataclasses.

Strings are written as literal strings (`'...'`) unless they contain a single
quote, a newline or a control character, in which case they are written as
basic strings (`"..."`) with escapes.

## Writing to a stream

`Encoder` writes to any object that has a `write` method. Its keyword options
change how the output is laid out:

```python
import io
from tomlemit.encoder import Encoder

buf = io.StringIO()
Encoder(buf, indent_tables=True, indent_symbol="  ").encode(
    {"parent": {"hello": "world"}}
)
print(buf.getvalue())
```

Output:

```
[parent]
  hello = 'world'
```

The options are:

- `tables_inline`: write every table below the root as an inline table.
- `arrays_multiline`: write each array element on its own line.
- `indent_symbol`: the string repeated once per indentation level. The default
  is two spaces.
- `indent_tables`: indent tables and array tables.
- `marshal_json_numbers`: write `decimal.Decimal` values as integers or floats.
  Without it they are written as strings.

## Dataclass fields

Use `tomlemit.tags.toml_field` to give a dataclass field its options:

```python
from dataclasses import dataclass
from tomlemit.encoder import marshal
from tomlemit.tags import toml_field

@dataclass
class Config:
    host: str = toml_field("host", comment="Host IP to connect to.")
    port: int = toml_field("port,omitempty", default=0)

print(marshal(Config(host="127.0.0.1", port=4242)))
```

Output:

```
# Host IP to connect to.
host = '127.0.0.1'
port = 4242
```

A tag names the field and can add comma-separated options after the name:
`multiline`, `inline`, `omitempty` and `commented`. If the name is empty or not
a valid name, the field's own name is used. The tag `"-"` leaves the field
out. A `comment` may span several lines; each line becomes a `#` comment.

## Custom values

An object with a `marshal_text()` method is written as a string holding what
that method returns, and may also be used as a mapping key. Such an object
cannot be the root of a document.

## Errors

If a value cannot be written as TOML, `tomlemit.encoder.EncodeError` is raised.
This covers `None` at the root or inside an array, unsupported value or key
types, integers outside the signed 64-bit range, a failing `marshal_text()`,
and a stream whose `write` fails.

## Lower-level helpers

`tomlemit.text` has the helpers that quote strings and keys
(`encode_string`, `encode_key`, `encode_quoted_string`,
`encode_literal_string`, `needs_quoting`), format floats (`format_float`) and
write comment lines (`format_comment`). `tomlemit.tags` has `parse_tag`,
`is_valid_name`, `toml_field`, `TagOptions` and `FieldOptions`.

## What it does not do

`tomlemit` only writes TOML. It does not read or parse TOML documents, and it
has no command-line tool.