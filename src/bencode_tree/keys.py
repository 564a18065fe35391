"""
Ordering of Bencode dictionary keys.

Keys are compared byte by byte; when one key is a prefix of the other the
shorter one sorts first. No text decoding is ever involved, so ``b"Z"`` sorts
before ``b"a"`` and multi-byte UTF-8 sequences sort by their raw bytes.
"""
from bisect import bisect_left
from typing import List, Tuple

__all__ = ["compare_keys", "key_position", "as_key"]


def as_key(key) -> bytes:
    """Normalises a dictionary key (bytes-like or BencodeString) to ``bytes``."""
    if isinstance(key, bytes):
        return key
    # BencodeString provides __bytes__
    if isinstance(key, (bytearray, memoryview)) or hasattr(key, "__bytes__"):
        return bytes(key)
    raise TypeError(f"Bencode dictionary keys must be bytes, not {type(key).__name__}")


def compare_keys(a, b) -> int:
    """
    Returns <0, 0 or >0 as ``a`` sorts before, equal to, or after ``b``.

    This spells out the ordering ``bytes`` comparison already has. BencodeDict
    stores keys through ``key_position``, which bisects on raw ``bytes`` and
    so sorts exactly as this function does; use it with
    ``functools.cmp_to_key`` to order keys outside a dict.
    """
    a, b = as_key(a), as_key(b)
    for x, y in zip(a, b):
        if x != y:
            return x - y
    return len(a) - len(b)


def key_position(sorted_keys: List[bytes], key: bytes) -> Tuple[int, bool]:
    """
    Finds where ``key`` lives (or would be inserted) in ``sorted_keys``.

    Returns ``(index, found)``. ``sorted_keys`` must already be in
    ``compare_keys`` order; ``bytes`` rich comparison is the same ordering,
    which lets the search run in C via bisect.
    """
    idx = bisect_left(sorted_keys, key)
    found = idx < len(sorted_keys) and sorted_keys[idx] == key
    return idx, found
