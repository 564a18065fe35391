import pytest

from bencode_tree.keys import compare_keys, key_position
from bencode_tree.structure import (
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
    from_native,
)


def test_int_validation():
    with pytest.raises(TypeError):
        BencodeInt("1")
    with pytest.raises(TypeError):
        BencodeInt(True)
    with pytest.raises(TypeError):
        BencodeInt(1.0)
    with pytest.raises(ValueError):
        BencodeInt(2 ** 63)
    with pytest.raises(ValueError):
        BencodeInt(-(2 ** 63) - 1)


def test_string_validation():
    with pytest.raises(TypeError):
        BencodeString("spam")
    s = BencodeString(bytearray(b"spam"))
    assert s.value == b"spam"
    assert isinstance(s.value, bytes)
    assert len(s) == 4
    assert bytes(s) == b"spam"


def test_equality_and_hashing():
    assert BencodeInt(1) == BencodeInt(1)
    assert BencodeInt(1) != BencodeInt(2)
    assert BencodeInt(1) != BencodeString(b"1")
    assert BencodeInt(1) != 1
    assert len({BencodeString(b"a"), BencodeString(b"a")}) == 1
    with pytest.raises(TypeError):
        hash(BencodeList())
    with pytest.raises(TypeError):
        hash(BencodeDict())


def test_list_operations():
    lst = BencodeList()
    lst.append(BencodeInt(1))
    lst.append(BencodeString(b"x"))
    lst.append(BencodeInt(1))
    assert len(lst) == 3
    assert lst[1] == BencodeString(b"x")
    assert lst.index(BencodeString(b"x")) == 1
    assert lst.count(BencodeInt(1)) == 2

    lst.remove(BencodeInt(1))
    assert lst == BencodeList([BencodeString(b"x"), BencodeInt(1)])

    lst.insert(0, BencodeList())
    assert lst[0] == BencodeList()
    del lst[0]
    assert lst.pop() == BencodeInt(1)
    assert lst == BencodeList([BencodeString(b"x")])


def test_list_rejects_plain_values():
    with pytest.raises(TypeError):
        BencodeList([1, 2])
    lst = BencodeList()
    with pytest.raises(TypeError):
        lst.append(b"raw")
    with pytest.raises(TypeError):
        lst.extend([None])


def test_containers_reject_cycles():
    lst = BencodeList()
    with pytest.raises(ValueError):
        lst.append(lst)

    inner = BencodeList()
    outer = BencodeList([inner])
    with pytest.raises(ValueError):
        inner.append(outer)
    with pytest.raises(ValueError):
        inner[0:0] = [outer]
    assert len(inner) == 0

    d = BencodeDict()
    holder = BencodeList([d])
    with pytest.raises(ValueError):
        d[b"loop"] = holder
    with pytest.raises(ValueError):
        d[b"self"] = d
    assert len(d) == 0

    shared = BencodeInt(1)
    lst.append(shared)
    lst.append(shared)
    assert lst.encode() == b"li1ei1ee"


def test_list_copies_its_input():
    items = [BencodeInt(1)]
    lst = BencodeList(items)
    items.append(BencodeInt(2))
    assert len(lst) == 1


def test_list_slicing():
    lst = BencodeList([BencodeInt(i) for i in range(4)])
    assert lst[1:3] == BencodeList([BencodeInt(1), BencodeInt(2)])
    lst[0:2] = [BencodeString(b"a")]
    assert lst == BencodeList([BencodeString(b"a"), BencodeInt(2), BencodeInt(3)])


def test_dict_stays_sorted_through_mutation():
    d = BencodeDict()
    d[b"m"] = BencodeInt(1)
    d[b"z"] = BencodeInt(2)
    d[b"a"] = BencodeInt(3)
    assert list(d) == [b"a", b"m", b"z"]

    del d[b"m"]
    assert list(d) == [b"a", b"z"]

    d[b"b"] = BencodeInt(4)
    d.update({b"y": BencodeInt(5), b"0": BencodeInt(6)})
    assert list(d) == [b"0", b"a", b"b", b"y", b"z"]

    assert d.pop(b"y") == BencodeInt(5)
    assert list(d.items())[0] == (b"0", BencodeInt(6))

    d.clear()
    assert len(d) == 0
    assert list(d) == []


def test_dict_assign_overwrites():
    d = BencodeDict()
    d[b"k"] = BencodeInt(1)
    d[b"k"] = BencodeInt(2)
    assert len(d) == 1
    assert d[b"k"] == BencodeInt(2)


def test_dict_insert_only_if_absent():
    d = BencodeDict()
    assert d.insert(b"k", BencodeInt(1)) is True
    assert d.insert(b"k", BencodeInt(2)) is False
    assert d[b"k"] == BencodeInt(1)


def test_dict_key_forms():
    d = BencodeDict()
    d[BencodeString(b"a")] = BencodeInt(1)
    d[bytearray(b"b")] = BencodeInt(2)
    assert list(d) == [b"a", b"b"]
    assert d[b"a"] == BencodeInt(1)
    assert BencodeString(b"b") in d
    assert "a" not in d
    assert d.get(b"missing") is None
    with pytest.raises(TypeError):
        d["a"] = BencodeInt(1)
    with pytest.raises(TypeError):
        d[b"a"] = 1
    with pytest.raises(KeyError):
        del d[b"missing"]


def test_dict_equality_ignores_insertion_order():
    a = BencodeDict()
    a[b"x"] = BencodeInt(1)
    a[b"y"] = BencodeInt(2)
    b = BencodeDict()
    b[b"y"] = BencodeInt(2)
    b[b"x"] = BencodeInt(1)
    assert a == b
    assert a.encode() == b.encode()


def test_compare_keys():
    assert compare_keys(b"a", b"b") < 0
    assert compare_keys(b"b", b"a") > 0
    assert compare_keys(b"abc", b"abc") == 0
    assert compare_keys(b"ab", b"abc") < 0
    assert compare_keys(b"", b"a") < 0
    assert compare_keys(b"Z", b"a") < 0
    assert compare_keys(b"\xff", b"\x00\x00") > 0
    assert compare_keys(BencodeString(b"a"), b"a") == 0


def test_dict_order_agrees_with_compare_keys():
    from functools import cmp_to_key

    keys = [b"b", b"", b"ab", b"a", b"\xff", b"B", b"a\x00", b"\x80abc"]
    d = BencodeDict({k: BencodeInt(0) for k in keys})
    assert list(d) == sorted(keys, key=cmp_to_key(compare_keys))


def test_key_position():
    keys = [b"a", b"c", b"e"]
    assert key_position(keys, b"c") == (1, True)
    assert key_position(keys, b"d") == (2, False)
    assert key_position(keys, b"") == (0, False)
    assert key_position(keys, b"z") == (3, False)


def test_from_native_and_back():
    native = {"announce": "http://t", b"n": [1, -2, b"x", (3,)], "d": {}}
    tree = from_native(native)
    assert isinstance(tree, BencodeDict)
    assert list(tree) == [b"announce", b"d", b"n"]
    assert tree[b"n"] == BencodeList([
        BencodeInt(1), BencodeInt(-2), BencodeString(b"x"), BencodeList([BencodeInt(3)]),
    ])
    assert tree.to_native() == {b"announce": b"http://t", b"d": {}, b"n": [1, -2, b"x", [3]]}


def test_from_native_rejects_unsupported():
    for bad in (None, 1.5, True, {1: 2}, object()):
        with pytest.raises(TypeError):
            from_native(bad)


def test_from_native_passes_trees_through():
    node = BencodeInt(5)
    assert from_native(node) is node
