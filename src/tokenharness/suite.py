"""Loading html5lib tokenizer conformance files (``*.test``)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .decoder import unescape
from .errors import FixtureError
from .fixture import tokens_from_fixture
from .tokens import TextType
from .unescape import unescape_tokens

DEFAULT_STATES = ("Data state",)


@dataclass
class TokenizerTest:
    description: str
    input: str
    expected: list
    initial_states: List[TextType] = field(default_factory=lambda: [TextType.DATA])
    last_start_tag: Optional[str] = None
    double_escaped: bool = False
    errors: list = field(default_factory=list)


def _map_initial_states(names):
    states = []
    for name in names:
        try:
            states.append(TextType.from_state_name(name))
        except ValueError:
            raise FixtureError(f"unknown initial state {name!r}") from None
    return states


def parse_test(raw: dict) -> TokenizerTest:
    """Build a TokenizerTest from one entry of a ``.test`` file."""
    try:
        input_text = raw["input"]
        output = raw["output"]
    except KeyError as exc:
        raise FixtureError(f"tokenizer test is missing {exc.args[0]!r}") from None

    expected = tokens_from_fixture(output)
    double_escaped = bool(raw.get("doubleEscaped", False))
    if double_escaped:
        input_text = unescape(input_text)
        unescape_tokens(expected)

    return TokenizerTest(
        description=raw.get("description", ""),
        input=input_text,
        expected=expected,
        initial_states=_map_initial_states(raw.get("initialStates") or DEFAULT_STATES),
        last_start_tag=raw.get("lastStartTag"),
        double_escaped=double_escaped,
        errors=raw.get("errors", []),
    )


def load_tests(data: dict) -> List[TokenizerTest]:
    key = "tests" if "tests" in data else "xmlViolationTests"
    return [parse_test(raw) for raw in data.get(key, [])]


def load_test_file(path: Path) -> List[TokenizerTest]:
    return load_tests(json.loads(Path(path).read_text(encoding="utf-8")))
