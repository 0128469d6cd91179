"""Canonical tokens: the normalized form both sides of a comparison reduce to."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

CHARACTER = "Character"
COMMENT = "Comment"
START_TAG = "StartTag"
END_TAG = "EndTag"
DOCTYPE = "DOCTYPE"

FIXTURE_KINDS = (CHARACTER, COMMENT, START_TAG, END_TAG, DOCTYPE)


def first_wins(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    """Build an attribute map where the first declaration of a name wins.

    Pairs are inserted in reverse so the earliest one is written last.
    """
    return dict(reversed(list(pairs)))


@dataclass
class Text:
    data: str

    def to_list(self) -> list:
        return [CHARACTER, self.data]


@dataclass
class Comment:
    data: str

    def to_list(self) -> list:
        return [COMMENT, self.data]


@dataclass
class StartTag:
    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    self_closing: bool = False

    def to_list(self) -> list:
        record = [START_TAG, self.name, dict(self.attributes)]
        if self.self_closing:
            record.append(True)
        return record


@dataclass
class EndTag:
    name: str

    def to_list(self) -> list:
        return [END_TAG, self.name]


@dataclass
class Doctype:
    name: Optional[str] = None
    public_id: Optional[str] = None
    system_id: Optional[str] = None
    force_quirks: bool = False

    def to_list(self) -> list:
        # The fixture format stores "correct", the inverse of force_quirks
        return [DOCTYPE, self.name, self.public_id, self.system_id, not self.force_quirks]


CANONICAL_TYPES = (Text, Comment, StartTag, EndTag, Doctype)
