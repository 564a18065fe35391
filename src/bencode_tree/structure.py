"""
Data structures for representing Bencoded types.

A decoded (or hand-built) value is a tree of these four node types. Lists and
dicts own their children: they copy whatever iterable they are built from and
only ever hold other ``BencodeType`` nodes.
"""
from collections.abc import MutableMapping, MutableSequence

from .keys import as_key, key_position

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "from_native",
    "INT64_MIN",
    "INT64_MAX",
]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def _check_node(value):
    if not isinstance(value, BencodeType):
        raise TypeError(
            f"Bencode containers hold Bencode values, not {type(value).__name__}"
        )
    return value


def _check_child(parent, value):
    """Validates ``value`` as a new child of ``parent`` without creating a cycle."""
    _check_node(value)
    pending = [value]
    while pending:
        node = pending.pop()
        if node is parent:
            raise ValueError("A Bencode container cannot contain itself")
        if isinstance(node, BencodeList):
            pending.extend(node._items)
        elif isinstance(node, BencodeDict):
            pending.extend(node._values.values())
    return value


class BencodeType:
    """Base class for all Bencode data types."""
    __slots__ = ()

    def encode(self) -> bytes:
        """Returns the canonical Bencoded form of this value."""
        from .encoder import encode
        return encode(self)

    def encode_to(self, sink) -> None:
        """Writes the canonical Bencoded form of this value to ``sink``."""
        from .encoder import encode_to
        encode_to(self, sink)

    def to_native(self):
        """Returns this value as plain Python data; each subclass implements it."""
        raise NotImplementedError


class BencodeInt(BencodeType):
    """Represents a Bencoded integer (signed 64-bit)."""
    __slots__ = ("_value",)

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("BencodeInt requires an integer.")
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"BencodeInt value {value} does not fit in 64 bits.")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def to_native(self) -> int:
        return self._value

    def __eq__(self, other):
        if not isinstance(other, BencodeInt):
            return NotImplemented
        return self._value == other._value

    def __hash__(self):
        return hash((BencodeInt, self._value))

    def __repr__(self):
        return f"BencodeInt({self._value})"


class BencodeString(BencodeType):
    """Represents a Bencoded byte string."""
    __slots__ = ("_value",)

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes.")
        self._value = bytes(value)

    @property
    def value(self) -> bytes:
        return self._value

    def to_native(self) -> bytes:
        return self._value

    def __bytes__(self):
        return self._value

    def __len__(self):
        return len(self._value)

    def __eq__(self, other):
        if not isinstance(other, BencodeString):
            return NotImplemented
        return self._value == other._value

    def __hash__(self):
        return hash((BencodeString, self._value))

    def __repr__(self):
        return f"BencodeString({self._value!r})"


class BencodeList(BencodeType, MutableSequence):
    """Represents a Bencoded list."""
    __slots__ = ("_items",)

    def __init__(self, items=()):
        self._items = [_check_node(item) for item in items]

    def __getitem__(self, index):
        if isinstance(index, slice):
            return BencodeList(self._items[index])
        return self._items[index]

    def __setitem__(self, index, value):
        if isinstance(index, slice):
            self._items[index] = [_check_child(self, item) for item in value]
        else:
            self._items[index] = _check_child(self, value)

    def __delitem__(self, index):
        del self._items[index]

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def insert(self, index, value):
        self._items.insert(index, _check_child(self, value))

    def to_native(self) -> list:
        return [item.to_native() for item in self._items]

    def __eq__(self, other):
        if not isinstance(other, BencodeList):
            return NotImplemented
        return self._items == other._items

    __hash__ = None

    def __repr__(self):
        return f"BencodeList({self._items!r})"


class BencodeDict(BencodeType, MutableMapping):
    """
    Represents a Bencoded dictionary.

    Keys are bytes and are always kept in ascending byte order, whatever order
    they were inserted in, so iterating (and encoding) yields the canonical
    order. Assigning to an existing key replaces its value in place.
    """
    __slots__ = ("_keys", "_values")

    def __init__(self, items=None):
        self._keys = []
        self._values = {}
        if items is not None:
            if isinstance(items, (str, bytes, bytearray)):
                raise TypeError("BencodeDict requires a mapping or iterable of pairs.")
            self.update(items)

    def __getitem__(self, key):
        return self._values[as_key(key)]

    def __setitem__(self, key, value):
        key = as_key(key)
        _check_child(self, value)
        if key not in self._values:
            idx, _ = key_position(self._keys, key)
            self._keys.insert(idx, key)
        self._values[key] = value

    def __delitem__(self, key):
        key = as_key(key)
        idx, found = key_position(self._keys, key)
        if not found:
            raise KeyError(key)
        del self._keys[idx]
        del self._values[key]

    def __contains__(self, key):
        try:
            return as_key(key) in self._values
        except TypeError:
            return False

    def __len__(self):
        return len(self._keys)

    def __iter__(self):
        return iter(self._keys)

    def clear(self):
        self._keys.clear()
        self._values.clear()

    def insert(self, key, value) -> bool:
        """Adds ``key`` only if it is absent. Returns True if it was added."""
        if key in self:
            return False
        self[key] = value
        return True

    def to_native(self) -> dict:
        return {k: self._values[k].to_native() for k in self._keys}

    def __eq__(self, other):
        if not isinstance(other, BencodeDict):
            return NotImplemented
        return self._values == other._values

    __hash__ = None

    def __repr__(self):
        inner = ", ".join(f"{k!r}: {self._values[k]!r}" for k in self._keys)
        return f"BencodeDict({{{inner}}})"


def from_native(obj) -> BencodeType:
    """
    Builds a Bencode tree from plain Python data.

    ``str`` values and keys are UTF-8 encoded. Tuples become lists.
    """
    if isinstance(obj, BencodeType):
        return obj

    if isinstance(obj, bool):
        raise TypeError("Cannot bencode object of type bool")

    if isinstance(obj, int):
        return BencodeInt(obj)

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BencodeString(obj)

    if isinstance(obj, str):
        return BencodeString(obj.encode())

    if isinstance(obj, (list, tuple)):
        return BencodeList(from_native(x) for x in obj)

    if isinstance(obj, dict):
        result = BencodeDict()
        for key, value in obj.items():
            if isinstance(key, str):
                key = key.encode()
            result[key] = from_native(value)
        return result

    raise TypeError(f"Cannot bencode object of type {type(obj)}")
