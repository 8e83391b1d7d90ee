import time

import pytest

from ngebut.memory import NotFoundError, Storage


def test_set_and_get_values():
    s = Storage(0)
    s.set("key1", b"value1", 0)
    s.set("key2", b"value2", 60)
    assert s.get("key1") == b"value1"
    assert s.get("key2") == b"value2"
    assert len(s) == 2


def test_set_copies_value():
    s = Storage(0)
    data = bytearray(b"value1")
    s.set("key1", data)
    data[0:1] = b"X"
    assert s.get("key1") == b"value1"


def test_get_missing_key_raises():
    s = Storage(0)
    with pytest.raises(NotFoundError) as info:
        s.get("nonexistent")
    assert info.value.key == "nonexistent"


def test_get_expired_key_raises_and_removes_it():
    s = Storage(0)
    s.set("expired", b"expired", 1e-9)
    time.sleep(0.01)
    with pytest.raises(NotFoundError):
        s.get("expired")
    assert len(s) == 0


def test_not_found_is_lookup_error():
    s = Storage(0)
    with pytest.raises(LookupError):
        s.get("missing")


def test_delete_existing_and_missing_key():
    s = Storage(0)
    s.set("key1", b"value1")
    s.delete("key1")
    assert s.has("key1") is False
    s.delete("nonexistent")
    assert len(s) == 0


def test_clear_removes_everything():
    s = Storage(0)
    s.set("key1", b"value1")
    s.set("key2", b"value2")
    s.clear()
    assert len(s) == 0
    assert s.has("key1") is False


def test_has():
    s = Storage(0)
    s.set("key1", b"value1", 0)
    s.set("key2", b"value2", 60)
    s.set("expired", b"expired", 1e-9)
    time.sleep(0.01)
    assert s.has("key1") is True
    assert s.has("key2") is True
    assert s.has("nonexistent") is False
    assert s.has("expired") is False


def test_overwrite_replaces_value():
    s = Storage(0)
    s.set("key", b"one")
    s.set("key", b"two")
    assert s.get("key") == b"two"
    assert len(s) == 1


def test_manual_cleanup_removes_only_expired():
    s = Storage(0)
    s.set("key1", b"value1", 0.01)
    s.set("key2", b"value2", 0.01)
    s.set("key3", b"value3", 10)
    time.sleep(0.05)
    assert len(s) == 3
    s.cleanup()
    assert len(s) == 1
    assert s.get("key3") == b"value3"


def test_background_cleanup():
    s = Storage(0.05)
    try:
        s.set("key1", b"value1", 0.01)
        s.set("key2", b"value2", 0.01)
        s.set("key3", b"value3", 10)
        time.sleep(0.3)
        assert len(s) == 1
        assert s.has("key3") is True
    finally:
        s.close()


def test_without_interval_nothing_is_swept():
    s = Storage(0)
    s.set("key1", b"value1", 0.01)
    time.sleep(0.1)
    assert len(s) == 1


def test_close_stops_background_cleanup():
    with Storage(0.02) as s:
        pass
    s.set("key1", b"value1", 0.01)
    time.sleep(0.15)
    assert len(s) == 1
    s.close()
    assert s.has("key1") is False