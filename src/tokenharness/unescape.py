"""Second pass over expected tokens of double-escaped fixtures."""

from .canonical import Comment, Doctype, EndTag, StartTag, Text
from .decoder import unescape


def _unescape_optional(value):
    return None if value is None else unescape(value)


def unescape_token(token):
    """Rewrite every string field of ``token`` in place.

    Fields are rewritten one after another; if one fails the UnescapeError
    propagates and the fields already rewritten keep their new value.
    """
    if isinstance(token, (Text, Comment)):
        token.data = unescape(token.data)
    elif isinstance(token, EndTag):
        token.name = unescape(token.name)
    elif isinstance(token, StartTag):
        token.name = unescape(token.name)
        for key, value in token.attributes.items():
            token.attributes[key] = unescape(value)
    elif isinstance(token, Doctype):
        token.name = _unescape_optional(token.name)
        token.public_id = _unescape_optional(token.public_id)
        token.system_id = _unescape_optional(token.system_id)
    else:
        raise TypeError(f"Not a canonical token: {type(token).__name__}")
    return token


def unescape_tokens(tokens):
    for token in tokens:
        unescape_token(token)
    return tokens
