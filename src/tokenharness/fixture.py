"""Deserializer for the html5lib tokenizer fixture format.

Each expected token is a JSON array whose first element names its kind and
whose remaining elements are positional:

    ["Character", data]
    ["Comment", data]
    ["StartTag", name, {attributes}]          optional 4th element: self_closing
    ["EndTag", name]
    ["DOCTYPE", name, public_id, system_id, correct]

The kind is read first and then a reader for that kind consumes the rest.
"""

from __future__ import annotations

import json

from .canonical import CHARACTER, COMMENT, DOCTYPE, END_TAG, FIXTURE_KINDS, START_TAG
from .canonical import Comment, Doctype, EndTag, StartTag, Text
from .errors import InvalidLengthError, InvalidTypeError, UnknownVariantError

_ASCII_LOWER_TABLE = str.maketrans({chr(code): chr(code + 32) for code in range(65, 91)})

_MISSING = object()


def ascii_lower(value: str) -> str:
    """Lowercase A-Z only; other letters keep their case."""
    return value.translate(_ASCII_LOWER_TABLE)


class _Elements:
    """Positional cursor over one fixture record."""

    __slots__ = ("items", "pos")

    def __init__(self, items):
        self.items = items
        self.pos = 0

    def next(self, expected):
        # ``expected`` describes the arity for the error message ("3 or 4")
        if self.pos >= len(self.items):
            raise InvalidLengthError(self.pos, expected)
        value = self.items[self.pos]
        self.pos += 1
        return value

    def next_optional(self):
        if self.pos >= len(self.items):
            return _MISSING
        value = self.items[self.pos]
        self.pos += 1
        return value

    def end(self, expected):
        if self.pos != len(self.items):
            raise InvalidLengthError(len(self.items), expected)

    def string(self, expected, nullable=False):
        position = self.pos
        value = self.next(expected)
        if value is None and nullable:
            return None
        if not isinstance(value, str):
            raise InvalidTypeError(position, value, "a string or null" if nullable else "a string")
        return value

    def boolean(self, value, position):
        if not isinstance(value, bool):
            raise InvalidTypeError(position, value, "a boolean")
        return value


def _read_character(elements):
    data = elements.string("2")
    elements.end("2")
    return Text(data)


def _read_comment(elements):
    data = elements.string("2")
    elements.end("2")
    return Comment(data)


def _read_start_tag(elements):
    name = ascii_lower(elements.string("3 or 4"))

    position = elements.pos
    raw_attributes = elements.next("3 or 4")
    if not isinstance(raw_attributes, dict):
        raise InvalidTypeError(position, raw_attributes, "an object")
    attributes = {}
    for key, value in raw_attributes.items():
        if not isinstance(value, str):
            raise InvalidTypeError(position, value, "a string attribute value")
        # Later keys overwrite earlier ones that lowercase to the same name
        attributes[ascii_lower(key)] = value

    position = elements.pos
    self_closing = elements.next_optional()
    if self_closing is _MISSING:
        self_closing = False
    else:
        elements.boolean(self_closing, position)
    elements.end("3 or 4")
    return StartTag(name, attributes, self_closing)


def _read_end_tag(elements):
    name = ascii_lower(elements.string("2"))
    elements.end("2")
    return EndTag(name)


def _read_doctype(elements):
    name = elements.string("5", nullable=True)
    if name is not None:
        name = ascii_lower(name)
    public_id = elements.string("5", nullable=True)
    system_id = elements.string("5", nullable=True)
    position = elements.pos
    correct = elements.boolean(elements.next("5"), position)
    elements.end("5")
    return Doctype(name, public_id, system_id, force_quirks=not correct)


_READERS = {
    CHARACTER: _read_character,
    COMMENT: _read_comment,
    START_TAG: _read_start_tag,
    END_TAG: _read_end_tag,
    DOCTYPE: _read_doctype,
}


def token_from_fixture(record):
    """Turn one fixture array into a canonical token.

    Raises InvalidLengthError when the record is shorter or longer than its
    kind allows, UnknownVariantError for an unrecognized kind and
    InvalidTypeError when an element has the wrong JSON type.
    """
    if not isinstance(record, (list, tuple)):
        raise InvalidTypeError(None, record, "an array")

    elements = _Elements(record)
    kind = elements.next("2 or more")
    if not isinstance(kind, str):
        raise InvalidTypeError(0, kind, "a string")
    reader = _READERS.get(kind)
    if reader is None:
        raise UnknownVariantError(kind, FIXTURE_KINDS)
    return reader(elements)


def tokens_from_fixture(records):
    if not isinstance(records, (list, tuple)):
        raise InvalidTypeError(None, records, "an array of tokens")
    return [token_from_fixture(record) for record in records]


def loads(text):
    """Parse a JSON document holding a single record or a list of records."""
    data = json.loads(text)
    if data and isinstance(data, list) and isinstance(data[0], str):
        return token_from_fixture(data)
    return tokens_from_fixture(data)
