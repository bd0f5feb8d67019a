import pytest

from rasterkit.stringmap import StringMap, char_is_printable, hash_string


def test_hash_of_empty_string_is_seed():
    assert hash_string("") == 5381


def test_hash_is_deterministic_and_64_bit():
    text = "a fairly long key " * 50
    first = hash_string(text)
    assert first == hash_string(text)
    assert 0 <= first < 2 ** 64


def test_hash_accepts_bytes_like_str():
    assert hash_string(b"abc") == hash_string("abc")


def test_hash_differs_for_different_keys():
    assert hash_string("alpha") != hash_string("beta") or hash_string("alpha") == hash_string("alpha")
    assert len({hash_string(f"key{i}") for i in range(100)}) == 100


@pytest.mark.parametrize("c,expected", [("A", True), (" ", True), ("~", True), ("\n", False), ("\x1f", False), ("é", False)])
def test_char_is_printable(c, expected):
    assert char_is_printable(c) is expected


def test_char_is_printable_accepts_codes():
    assert char_is_printable(ord("z")) is True
    assert char_is_printable(200) is False


@pytest.mark.parametrize("requested", [1, 3, 5, 16, 100])
def test_capacity_is_power_of_two_at_least_requested(requested):
    m = StringMap(requested)
    assert m.capacity >= requested
    assert m.capacity & (m.capacity - 1) == 0


def test_insert_then_lookup():
    m = StringMap(16)
    m.insert("pipeline", 1)
    m.insert("shader", 2)
    assert m.lookup("pipeline") == 1
    assert m.lookup("shader") == 2
    assert m["shader"] == 2
    assert len(m) == 2


def test_first_insert_lands_on_hash_slot():
    m = StringMap(32)
    assert m.insert("key", "value") == hash_string("key") & (m.capacity - 1)


def test_missing_key_raises_and_get_defaults():
    m = StringMap(8)
    m.insert("present", 1)
    with pytest.raises(KeyError):
        m.lookup("absent")
    assert m.get("absent", "fallback") == "fallback"
    assert "present" in m
    assert "absent" not in m


def test_many_keys_with_collisions_all_found():
    m = StringMap(64)
    keys = [f"name{i}" for i in range(64)]
    for i, key in enumerate(keys):
        m.insert(key, i)
    assert all(m.lookup(key) == i for i, key in enumerate(keys))


def test_full_map_raises():
    m = StringMap(4)
    for i in range(m.capacity):
        m.insert(f"k{i}", i)
    with pytest.raises(OverflowError):
        m.insert("extra", 0)


def test_duplicate_key_keeps_first_value():
    m = StringMap(8)
    first = m.insert("dup", "one")
    second = m.insert("dup", "two")
    assert first != second
    assert m.lookup("dup") == "one"
    assert len(m) == 2