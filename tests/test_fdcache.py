import os
import time

import pytest

from ngebut.fdcache import FDCache, default_fd_cache


@pytest.fixture
def cache():
    c = FDCache(100, 300.0)
    yield c
    c.close()


def _open_temp(tmp_path, name, content=b""):
    path = tmp_path / name
    path.write_bytes(content)
    return open(path, "rb")


def test_new_fd_cache(cache):
    assert cache.max_size == 100
    assert cache.expiration == 300.0
    assert len(cache) == 0


def test_non_positive_expiration_rejected():
    with pytest.raises(ValueError):
        FDCache(10, 0)


def test_set_and_get(cache, tmp_path):
    f = _open_temp(tmp_path, "test")
    stat = os.fstat(f.fileno())
    cache.set(f.name, f, stat.st_mtime, stat.st_size)

    fd = cache.get(f.name)
    assert fd is not None
    assert fd.file is f
    assert fd.mod_time == stat.st_mtime
    assert fd.size == stat.st_size

    assert cache.get("nonexistent.txt") is None
    f.close()


def test_eviction(tmp_path):
    cache = FDCache(2, 300.0)
    try:
        files = [_open_temp(tmp_path, f"test{i}") for i in range(3)]
        for f in files:
            stat = os.fstat(f.fileno())
            cache.set(f.name, f, stat.st_mtime, stat.st_size)

        assert len(cache) <= 2
        assert cache.get(files[0].name) is None
        assert files[0].closed
        assert cache.get(files[1].name) is not None
        assert cache.get(files[2].name) is not None
    finally:
        cache.close()
        for f in files:
            f.close()


def test_remove(cache, tmp_path):
    f = _open_temp(tmp_path, "test")
    stat = os.fstat(f.fileno())
    cache.set(f.name, f, stat.st_mtime, stat.st_size)
    assert cache.get(f.name) is not None

    cache.remove(f.name)
    assert cache.get(f.name) is None
    assert f.closed


def test_clear(cache, tmp_path):
    files = [_open_temp(tmp_path, f"test{i}") for i in range(5)]
    for f in files:
        stat = os.fstat(f.fileno())
        cache.set(f.name, f, stat.st_mtime, stat.st_size)
    assert len(cache) == 5

    cache.clear()
    assert len(cache) == 0
    assert all(f.closed for f in files)


def test_is_modified(cache, tmp_path):
    f = _open_temp(tmp_path, "test", b"test data")
    stat = os.fstat(f.fileno())

    cache.set(f.name, f, stat.st_mtime - 3600, stat.st_size)
    assert cache.is_modified(f.name, stat.st_mtime) is True

    cache.set(f.name, f, stat.st_mtime, stat.st_size)
    assert cache.is_modified(f.name, stat.st_mtime) is False
    assert not f.closed
    assert cache.is_modified("missing", stat.st_mtime) is True
    f.close()


def test_count(cache, tmp_path):
    files = [_open_temp(tmp_path, f"test{i}") for i in range(3)]
    for f in files:
        stat = os.fstat(f.fileno())
        cache.set(f.name, f, stat.st_mtime, stat.st_size)
    assert len(cache) == 3
    for f in files:
        f.close()


def test_cleanup_drops_idle_entries(cache, tmp_path):
    idle = _open_temp(tmp_path, "idle")
    fresh = _open_temp(tmp_path, "fresh")
    cache.set(idle.name, idle, 0.0, 0)
    cache.set(fresh.name, fresh, 0.0, 0)
    cache.get(idle.name).last_access = time.time() - 1000

    cache.cleanup()
    assert cache.get(idle.name) is None
    assert idle.closed
    assert cache.get(fresh.name) is not None
    fresh.close()


def test_background_cleanup(tmp_path):
    cache = FDCache(10, 0.1)
    try:
        f = _open_temp(tmp_path, "test")
        cache.set(f.name, f, 0.0, 0)
        deadline = time.time() + 3
        while len(cache) and time.time() < deadline:
            time.sleep(0.05)
        assert len(cache) == 0
        assert f.closed
    finally:
        cache.close()


def test_default_fd_cache_is_shared():
    first = default_fd_cache()
    assert first is default_fd_cache()
    assert first.max_size == 100
    assert first.expiration == 300.0