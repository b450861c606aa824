"""Decode errors"""


class LevelDatError(Exception):
    """Base class for all level.dat decode errors"""


class InvalidFormatError(LevelDatError, ValueError):
    """Bytes that don't fit the tag grammar.
    value is the offending type byte, if there is one.
    """

    def __init__(self, msg: str, value: int | None = None) -> None:
        super().__init__(msg)
        self.value = value


class ReadError(LevelDatError, OSError):
    """The stream ended before the required number of bytes were read"""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(f"Short read: expected {expected} bytes, got {received}")
        self.expected = expected
        self.received = received
