"""Reduce a live tokenizer stream into a list of canonical tokens."""

from .canonical import Comment, Doctype, EndTag, StartTag, Text, first_wins
from .decoder import decode_attr_value, decode_nulls, decode_text
from .tokens import CommentToken, DoctypeToken, Tag, TextChunk


class _TextState:
    """Text token at the tail of the list and how much of it is decoded.

    ``token`` is None whenever the last pushed token was not text. Characters
    before ``decoded_until`` have been decoded already and must not be
    decoded again.
    """

    __slots__ = ("decoded_until", "open", "token")

    def __init__(self):
        self.token = None
        self.decoded_until = 0
        # A chunk arrived whose node has not seen its last chunk yet
        self.open = False

    def close(self):
        self.token = None
        self.decoded_until = 0
        self.open = False


class TokenList:
    """Collects canonical tokens from tokens pushed in emission order.

    Text nodes may arrive split over several chunks. Chunks are concatenated
    raw and decoded once, when the chunk marked ``last_in_text_node`` arrives.
    Consecutive text nodes end up in a single Text token, the same way the
    fixture format writes them.
    """

    __slots__ = ("_text", "debug_enabled", "tokens", "unterminated_text")

    def __init__(self, debug=False):
        self.tokens = []
        self.debug_enabled = bool(debug)
        # Text nodes closed by another token before their last chunk arrived
        self.unterminated_text = 0
        self._text = _TextState()

    def debug(self, message, indent=4):
        if self.debug_enabled:
            print(f"{' ' * indent}{message}")

    @property
    def has_open_text(self):
        """True while a text node is still waiting for its last chunk."""
        return self._text.open

    def push(self, token):
        if isinstance(token, TextChunk):
            self._push_text(token)
            return

        if self._text.open:
            self.unterminated_text += 1
            self.debug(f"text node left open: {self._text.token.data!r}")
        self._text.close()
        if isinstance(token, CommentToken):
            self._append(Comment(decode_nulls(token.data)))
        elif isinstance(token, Tag):
            if token.kind == Tag.START:
                self._append(
                    StartTag(
                        decode_nulls(token.name),
                        first_wins((decode_nulls(attr.name), decode_attr_value(attr.value)) for attr in token.attrs),
                        token.self_closing,
                    )
                )
            else:
                self._append(EndTag(decode_nulls(token.name)))
        elif isinstance(token, DoctypeToken):
            self._append(
                Doctype(
                    name=None if token.name is None else decode_nulls(token.name),
                    public_id=None if token.public_id is None else decode_nulls(token.public_id),
                    system_id=None if token.system_id is None else decode_nulls(token.system_id),
                    force_quirks=token.force_quirks,
                )
            )
        else:
            raise TypeError(f"Unsupported token type: {type(token).__name__}")

    def _push_text(self, chunk):
        state = self._text
        if state.token is None:
            state.token = Text(chunk.text)
            state.decoded_until = 0
            self._append(state.token)
        else:
            state.token.data += chunk.text

        if chunk.last_in_text_node:
            data = state.token.data
            decoded = decode_text(data[state.decoded_until :], chunk.text_type)
            state.token.data = data[: state.decoded_until] + decoded
            state.decoded_until = len(state.token.data)
            state.open = False
            self.debug(f"text closed: {state.token.data!r}")
        else:
            state.open = True
            self.debug(f"text chunk: {chunk.text!r} (node continues)")

    def _append(self, token):
        self.debug(f"token: {token!r}")
        self.tokens.append(token)

    def extend(self, tokens):
        for token in tokens:
            self.push(token)

    def finish(self):
        """Hand back the collected tokens as a plain list.

        A text node left open is returned as it stands, undecoded part included.
        """
        return self.tokens

    def __len__(self):
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)
