from .accumulator import TokenList
from .canonical import Comment, Doctype, EndTag, StartTag, Text
from .errors import (
    FixtureError,
    InvalidLengthError,
    InvalidTypeError,
    TokenHarnessError,
    UnescapeError,
    UnknownVariantError,
)
from .fixture import loads, token_from_fixture, tokens_from_fixture
from .tokens import Attribute, CommentToken, DoctypeToken, Tag, TextChunk, TextType
from .unescape import unescape_token, unescape_tokens

__all__ = [
    "Attribute",
    "Comment",
    "CommentToken",
    "Doctype",
    "DoctypeToken",
    "EndTag",
    "FixtureError",
    "InvalidLengthError",
    "InvalidTypeError",
    "StartTag",
    "Tag",
    "Text",
    "TextChunk",
    "TextType",
    "TokenHarnessError",
    "TokenList",
    "UnescapeError",
    "UnknownVariantError",
    "loads",
    "token_from_fixture",
    "tokens_from_fixture",
    "unescape_token",
    "unescape_tokens",
]
