"""Token records delivered by the tokenizer under test.

These are the only shapes the accumulator understands. A tokenizer adapter
builds them from whatever its tokenizer emits, keeping every field raw: no
entity or null decoding has been applied yet.
"""

import enum


class TextType(enum.Enum):
    PLAINTEXT = "PLAINTEXT state"
    RCDATA = "RCDATA state"
    RAWTEXT = "RAWTEXT state"
    SCRIPT_DATA = "Script data state"
    DATA = "Data state"
    CDATA_SECTION = "CDATA section state"

    @property
    def allows_entities(self):
        return self in (TextType.DATA, TextType.RCDATA)

    @property
    def replaces_unsafe_null(self):
        return self not in (TextType.DATA, TextType.CDATA_SECTION)

    @classmethod
    def from_state_name(cls, name):
        """Look up the text type for an html5lib ``initialStates`` entry."""
        return cls(name)


class TextChunk:
    """One fragment of a text node.

    A text node may be split over several chunks; only the final one has
    ``last_in_text_node`` set.
    """

    __slots__ = ("last_in_text_node", "text", "text_type")

    def __init__(self, text, text_type=TextType.DATA, last_in_text_node=True):
        self.text = text
        self.text_type = text_type
        self.last_in_text_node = bool(last_in_text_node)

    def __repr__(self):
        last = "" if self.last_in_text_node else " ..."
        return f"<text:{self.text_type.name} {self.text!r}{last}>"


class Attribute:
    __slots__ = ("name", "value")

    def __init__(self, name, value=""):
        self.name = name
        self.value = value

    def __repr__(self):
        return f"{self.name}={self.value!r}"


def _to_attributes(attrs):
    """Normalize an attribute container to a list of Attribute.

    Accepts Attribute instances and (name, value) pairs in declaration order,
    or a dict, which can hold no duplicates.
    """
    if attrs is None:
        return []
    if isinstance(attrs, dict):
        return [Attribute(name, value) for name, value in attrs.items()]
    result = []
    for attr in attrs:
        if isinstance(attr, Attribute):
            result.append(attr)
        elif isinstance(attr, tuple) and len(attr) == 2:
            result.append(Attribute(*attr))
        else:
            raise TypeError(f"Attribute must be an Attribute or a (name, value) tuple, got {attr!r}")
    return result


class Tag:
    __slots__ = ("attrs", "kind", "name", "self_closing")

    START = 0
    END = 1

    def __init__(self, kind, name, attrs=None, self_closing=False):
        self.kind = kind
        self.name = name
        # Declaration order, duplicates included
        self.attrs = _to_attributes(attrs)
        self.self_closing = bool(self_closing)

    def __repr__(self):
        attrs = " ".join(repr(attr) for attr in self.attrs)
        closing = " /" if self.self_closing else ""
        kind_str = "start" if self.kind == self.START else "end"
        return f"<{kind_str}:{self.name}{closing} {attrs}>"


class CommentToken:
    __slots__ = ("data",)

    def __init__(self, data):
        self.data = data

    def __repr__(self):
        return f"<comment {self.data!r}>"


class DoctypeToken:
    __slots__ = ("force_quirks", "name", "public_id", "system_id")

    def __init__(self, name=None, public_id=None, system_id=None, force_quirks=False):
        self.name = name
        self.public_id = public_id
        self.system_id = system_id
        self.force_quirks = bool(force_quirks)

    def __repr__(self):
        return f"<doctype {self.name!r} {self.public_id!r} {self.system_id!r} quirks={self.force_quirks}>"
