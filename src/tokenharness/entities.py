"""HTML5 character reference decoding.

Decodes named references (&amp;, &notin;), legacy references written without
a semicolon (&amp, &copy) and numeric references (&#60;, &#x3C;) following
WHATWG HTML §13.2.5.72-§13.2.5.80.
"""

import html.entities

# Keys include the trailing semicolon where one is required ("amp;", "notin;").
# Legacy references appear a second time without it ("amp", "not").
NAMED_REFERENCES = html.entities.html5

_LONGEST_NAME = max(len(name) for name in NAMED_REFERENCES)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_DEC_DIGITS = frozenset("0123456789")

# §13.2.5.80 numeric character reference end state
NUMERIC_REPLACEMENTS = {
    0x80: 0x20AC, 0x82: 0x201A, 0x83: 0x0192, 0x84: 0x201E, 0x85: 0x2026,
    0x86: 0x2020, 0x87: 0x2021, 0x88: 0x02C6, 0x89: 0x2030, 0x8A: 0x0160,
    0x8B: 0x2039, 0x8C: 0x0152, 0x8E: 0x017D, 0x91: 0x2018, 0x92: 0x2019,
    0x93: 0x201C, 0x94: 0x201D, 0x95: 0x2022, 0x96: 0x2013, 0x97: 0x2014,
    0x98: 0x02DC, 0x99: 0x2122, 0x9A: 0x0161, 0x9B: 0x203A, 0x9C: 0x0153,
    0x9E: 0x017E, 0x9F: 0x0178,
}


def codepoint_to_char(codepoint):
    """Map a numeric reference value to the character it produces."""
    if codepoint == 0 or codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
        return "\ufffd"
    return chr(NUMERIC_REPLACEMENTS.get(codepoint, codepoint))


def _decode_numeric(text, start):
    """Decode a numeric reference whose "&#" begins at ``start``.

    Returns (decoded, end) or None when no digits follow.
    """
    length = len(text)
    pos = start + 2
    digits = _DEC_DIGITS
    base = 10
    if pos < length and text[pos] in "xX":
        digits = _HEX_DIGITS
        base = 16
        pos += 1

    digit_start = pos
    while pos < length and text[pos] in digits:
        pos += 1
    if pos == digit_start:
        return None

    codepoint = int(text[digit_start:pos], base)
    if pos < length and text[pos] == ";":
        pos += 1
    return codepoint_to_char(codepoint), pos


def _match_named(text, start):
    """Longest named reference matching right after the "&" at ``start``."""
    limit = min(len(text), start + 1 + _LONGEST_NAME)
    end = start + 1
    while end < limit and text[end].isascii() and text[end].isalnum():
        end += 1
    if end < limit and text[end] == ";":
        end += 1

    for stop in range(end, start + 1, -1):
        name = text[start + 1 : stop]
        if name in NAMED_REFERENCES:
            return name
    return None


def decode_character_references(text, in_attribute=False):
    """Decode every character reference in ``text``.

    In attribute values a legacy reference without its semicolon that is
    followed by "=" or an ASCII alphanumeric is left as literal text.
    """
    if "&" not in text:
        return text

    parts = []
    pos = 0
    length = len(text)
    while pos < length:
        amp = text.find("&", pos)
        if amp == -1:
            parts.append(text[pos:])
            break
        if amp > pos:
            parts.append(text[pos:amp])

        if amp + 1 < length and text[amp + 1] == "#":
            numeric = _decode_numeric(text, amp)
            if numeric is None:
                parts.append("&")
                pos = amp + 1
                continue
            decoded, pos = numeric
            parts.append(decoded)
            continue

        name = _match_named(text, amp)
        if name is None:
            parts.append("&")
            pos = amp + 1
            continue

        end = amp + 1 + len(name)
        if in_attribute and not name.endswith(";") and end < length:
            follower = text[end]
            if follower == "=" or (follower.isascii() and follower.isalnum()):
                parts.append(text[amp:end])
                pos = end
                continue

        parts.append(NAMED_REFERENCES[name])
        pos = end

    return "".join(parts)
