class TokenHarnessError(Exception):
    """Base class for all harness errors."""


class FixtureError(TokenHarnessError, ValueError):
    """A fixture record or test file could not be turned into tokens."""


class InvalidLengthError(FixtureError):
    def __init__(self, actual, expected):
        self.actual = actual
        self.expected = expected
        super().__init__(f"invalid length {actual}, expected {expected}")


class UnknownVariantError(FixtureError):
    position = 0

    def __init__(self, variant, expected):
        self.variant = variant
        self.expected = tuple(expected)
        choices = ", ".join(f"`{name}`" for name in self.expected)
        super().__init__(f"unknown variant `{variant}` at position 0, expected one of {choices}")


class InvalidTypeError(FixtureError):
    def __init__(self, position, value, expected):
        self.position = position
        self.value = value
        self.expected = expected
        where = "record" if position is None else f"position {position}"
        super().__init__(f"invalid type {type(value).__name__} at {where}, expected {expected}")


class UnescapeError(TokenHarnessError, ValueError):
    """A double-escaped string contains a malformed ``\\u`` escape."""

    def __init__(self, text, index):
        self.text = text
        self.index = index
        super().__init__(f"malformed unicode escape at index {index}: {text[index:index + 6]!r}")
