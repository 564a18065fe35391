"""
Bencode encoder.

``encode`` returns the canonical bytes for a value; ``encode_to`` writes the
same bytes incrementally to any object with a ``write(bytes)`` method.
Plain Python data is accepted too and is converted with ``from_native``.
"""
import io

from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, from_native


def encode(obj) -> bytes:
    """Encodes a Python object or BencodeType into bencoded bytes."""
    buf = io.BytesIO()
    encode_to(obj, buf)
    return buf.getvalue()


def encode_to(obj, sink) -> None:
    """Writes the bencoded form of ``obj`` to ``sink``. The sink is not kept."""
    _write(from_native(obj), sink.write)


def _write(root, write) -> None:
    # One iterator per open container, so nesting depth is not bounded by
    # the interpreter's recursion limit.
    stack = [iter((root,))]

    while stack:
        for node in stack[-1]:
            if isinstance(node, BencodeInt):
                write(b"i%de" % node.value)

            elif isinstance(node, BencodeString):
                _write_bytes(node.value, write)

            elif isinstance(node, BencodeList):
                write(b"l")
                stack.append(iter(node))
                break

            elif isinstance(node, BencodeDict):
                write(b"d")
                stack.append(_dict_values(node, write))
                break

            else:
                raise TypeError(f"Cannot bencode object of type {type(node)}")
        else:
            stack.pop()
            if stack:
                write(b"e")


def _dict_values(node, write):
    """Yields each value of ``node`` right after writing its key."""
    # BencodeDict iterates in canonical key order already
    for key, value in node.items():
        _write_bytes(key, write)
        yield value


def _write_bytes(b: bytes, write) -> None:
    write(b"%d:" % len(b))
    write(b)


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return encode(BencodeInt(n))


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return encode(BencodeString(b))


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    return encode_bytes(s.encode())


def encode_list(lst: list) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    return encode(list(lst))


def encode_dict(d: dict) -> bytes:
    """Encodes a dictionary to bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse)."""
    return encode(dict(d))
