"""
Exceptions raised while decoding Bencoded data.
"""
__all__ = [
    "BencodeDecodeError",
    "InvalidToken",
    "MalformedInteger",
    "MalformedLength",
    "TruncatedInput",
    "TrailingData",
    "DuplicateKey",
    "NestingTooDeep",
]


class BencodeDecodeError(ValueError):
    """Base class for Bencode decoding errors.

    ``position`` is the byte offset in the input where the problem was found.
    """
    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at index {position}")
        self.position = position


class InvalidToken(BencodeDecodeError):
    """The lookahead byte does not start any Bencode value."""


class MalformedInteger(BencodeDecodeError):
    """An ``i...e`` integer is empty, has stray bytes, a leading zero, or is out of range."""


class MalformedLength(BencodeDecodeError):
    """A byte string length prefix is missing or badly formed."""


class TruncatedInput(BencodeDecodeError):
    """The buffer ended before the value was complete."""


class TrailingData(BencodeDecodeError):
    """Bytes remain after the top-level value."""


class DuplicateKey(BencodeDecodeError):
    """A dictionary key appeared twice (strict mode only)."""


class NestingTooDeep(BencodeDecodeError):
    """Lists/dicts are nested deeper than the decoder allows."""
