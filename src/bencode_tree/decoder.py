"""
Bencode decoder.

Recursive descent over an immutable buffer. Every ``_parse_*`` method takes the
offset to start at and returns ``(value, offset just past the value)``; the
decoder object itself only holds the buffer and its options.
"""
import logging
import re

from .errors import (
    BencodeDecodeError,
    DuplicateKey,
    InvalidToken,
    MalformedInteger,
    MalformedLength,
    NestingTooDeep,
    TrailingData,
    TruncatedInput,
)
from .structure import INT64_MAX, INT64_MIN, BencodeDict, BencodeInt, BencodeList, BencodeString

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256

_INT_BODY = re.compile(rb"(-?)([0-9]*)")
_LENGTH = re.compile(rb"[0-9]*")

_I, _L, _D, _E, _COLON = b"ilde:"


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into BencodeType trees.

    ``strict_keys`` rejects repeated dictionary keys instead of letting the
    last one win. ``max_depth`` bounds list/dict nesting.
    """
    def __init__(self, data: bytes, strict_keys: bool = False, max_depth: int = DEFAULT_MAX_DEPTH):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Can only decode bytes-like data, not {type(data).__name__}")
        self.data = bytes(data)
        self.strict_keys = strict_keys
        self.max_depth = max_depth

    def decode(self):
        """Decodes the whole buffer, which must hold exactly one value."""
        value, end = self.decode_at(0)
        if end != len(self.data):
            raise TrailingData(f"{len(self.data) - end} unexpected trailing bytes", end)
        return value

    def decode_at(self, pos: int):
        """Decodes one value starting at ``pos``. Returns ``(value, end)``."""
        return self._parse_value(pos, 0)

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self, pos: int, depth: int):
        if pos >= len(self.data):
            if depth:
                raise TruncatedInput("Unexpected end of input", pos)
            raise InvalidToken("Expected a value, found end of input", pos)

        ch = self.data[pos]

        if ch == _I:
            return self._parse_int(pos)

        if self.data[pos:pos + 1].isdigit():  # strings start with their length
            return self._parse_string(pos)

        if ch == _L:
            return self._parse_list(pos, depth + 1)

        if ch == _D:
            return self._parse_dict(pos, depth + 1)

        raise InvalidToken(f"Invalid token {bytes([ch])!r}", pos)

    def _parse_int(self, pos: int):
        """Parses ``i<digits>e`` starting at the ``i``."""
        m = _INT_BODY.match(self.data, pos + 1)
        sign, digits = m.group(1), m.group(2)
        end = m.end()

        if end >= len(self.data):
            raise TruncatedInput("Integer is missing its terminator", end)
        if self.data[end] != _E:
            raise MalformedInteger(f"Unexpected byte {self.data[end:end + 1]!r} in integer", end)
        if not digits:
            raise MalformedInteger("Integer has no digits", pos)
        if digits[0:1] == b"0" and len(digits) > 1:
            raise MalformedInteger("Integer has a leading zero", pos)
        if sign and digits == b"0":
            raise MalformedInteger("Negative zero is not allowed", pos)

        if len(digits) > 19:
            raise MalformedInteger("Integer does not fit in 64 bits", pos)

        num = int(digits)
        if sign:
            num = -num
        if not INT64_MIN <= num <= INT64_MAX:
            raise MalformedInteger("Integer does not fit in 64 bits", pos)

        return BencodeInt(num), end + 1

    def _parse_string(self, pos: int):
        """Parses ``<length>:<bytes>`` starting at the first length digit."""
        m = _LENGTH.match(self.data, pos)
        digits = m.group(0)
        colon = m.end()

        if not digits:
            raise MalformedLength("Expected a string length", pos)
        if colon >= len(self.data):
            raise TruncatedInput("String length is missing its ':'", colon)
        if self.data[colon] != _COLON:
            raise MalformedLength(f"Unexpected byte {self.data[colon:colon + 1]!r} in string length", colon)
        if digits[0:1] == b"0" and len(digits) > 1:
            raise MalformedLength("String length has a leading zero", pos)

        if len(digits) > len(str(len(self.data))):
            raise TruncatedInput("String declares more bytes than the input holds", pos)

        length = int(digits)
        start = colon + 1
        end = start + length
        if end > len(self.data):
            raise TruncatedInput(
                f"String declares {length} bytes but only {len(self.data) - start} remain", start
            )

        return BencodeString(self.data[start:end]), end

    def _parse_list(self, pos: int, depth: int):
        """Parses ``l<values>e``."""
        self._check_depth(pos, depth)
        pos += 1  # skip 'l'
        items = BencodeList()

        while True:
            if pos >= len(self.data):
                raise TruncatedInput("List is missing its terminator", pos)
            if self.data[pos] == _E:
                break
            item, pos = self._parse_value(pos, depth)
            items.append(item)

        return items, pos + 1  # skip 'e'

    def _parse_dict(self, pos: int, depth: int):
        """Parses ``d(<string><value>)*e``; keys may arrive in any order."""
        self._check_depth(pos, depth)
        pos += 1  # skip 'd'
        obj = BencodeDict()

        while True:
            if pos >= len(self.data):
                raise TruncatedInput("Dictionary is missing its terminator", pos)
            if self.data[pos] == _E:
                break

            # keys MUST be strings
            key_pos = pos
            key, pos = self._parse_string(pos)
            value, pos = self._parse_value(pos, depth)

            if key.value in obj:
                if self.strict_keys:
                    raise DuplicateKey(f"Duplicate dictionary key {key.value!r}", key_pos)
                logger.debug("Duplicate key %r at index %d overwrites earlier value", key.value, key_pos)
            obj[key.value] = value

        return obj, pos + 1  # skip 'e'

    def _check_depth(self, pos: int, depth: int):
        if depth > self.max_depth:
            raise NestingTooDeep(f"Nesting deeper than {self.max_depth} levels", pos)


def decode(data: bytes, *, strict_keys: bool = False, max_depth: int = DEFAULT_MAX_DEPTH):
    """
    Decodes a buffer holding exactly one Bencoded value.

    Raises a ``BencodeDecodeError`` subclass if the data is not valid Bencode.
    """
    decoder = BencodeDecoder(data, strict_keys=strict_keys, max_depth=max_depth)
    try:
        value = decoder.decode()
    except BencodeDecodeError as exc:
        logger.debug("Rejected %d-byte input: %s", len(decoder.data), exc)
        raise
    logger.debug("Decoded %d bytes into %s", len(decoder.data), type(value).__name__)
    return value


def decode_prefix(data: bytes, start: int = 0, *, strict_keys: bool = False, max_depth: int = DEFAULT_MAX_DEPTH):
    """
    Decodes the single value that begins at ``start``.

    Returns ``(value, end)`` where ``end`` is the offset just past the value;
    anything after it is left alone, so ``data[start:end]`` is the value's
    exact encoding.
    """
    if start < 0:
        raise ValueError("start must not be negative")
    decoder = BencodeDecoder(data, strict_keys=strict_keys, max_depth=max_depth)
    return decoder.decode_at(start)
