"""Decoding applied to raw tokenizer output before comparison.

The tokenizer under test hands out raw source slices; these helpers turn them
into the form the html5lib fixtures expect.
"""

from __future__ import annotations

import re

from .entities import decode_character_references
from .errors import UnescapeError
from .tokens import TextType

_UNICODE_ESCAPE = re.compile(r"\\u([0-9A-Fa-f]{4})")
_SURROGATE_PAIR = re.compile("[\ud800-\udbff][\udc00-\udfff]")


def decode_nulls(text: str) -> str:
    if "\0" not in text:
        return text
    return text.replace("\0", "\ufffd")


def decode_text(text: str, text_type: TextType) -> str:
    if text_type.replaces_unsafe_null:
        text = decode_nulls(text)
    if text_type.allows_entities:
        text = decode_character_references(text)
    return text


def decode_attr_value(text: str) -> str:
    return decode_character_references(decode_nulls(text), in_attribute=True)


def _join_surrogates(match):
    return match.group(0).encode("utf-16-le", "surrogatepass").decode("utf-16-le")


def unescape(text: str) -> str:
    """Resolve the ``\\uXXXX`` escapes of a double-escaped fixture string.

    Escaped surrogate pairs are joined into one character; lone surrogates
    are kept as they are. A backslash-u not followed by four hex digits
    raises UnescapeError.
    """
    if "\\u" not in text:
        return text

    pos = 0
    while True:
        index = text.find("\\u", pos)
        if index == -1:
            break
        if not _UNICODE_ESCAPE.match(text, index):
            raise UnescapeError(text, index)
        pos = index + 6

    decoded = _UNICODE_ESCAPE.sub(lambda match: chr(int(match.group(1), 16)), text)
    return _SURROGATE_PAIR.sub(_join_surrogates, decoded)
