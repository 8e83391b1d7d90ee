import threading

from ngebut.filebuffer import (
    READ_BUFFER_SIZE,
    get_buffer,
    get_read_buffer,
    release_buffer,
    release_read_buffer,
)


def test_buffer_pool():
    buf = get_buffer()
    assert len(buf) == 0

    data = b"test data"
    buf.extend(data)
    assert bytes(buf) == data

    release_buffer(buf)
    assert len(buf) == 0

    buf2 = get_buffer()
    assert len(buf2) == 0
    release_buffer(buf2)


def test_read_buffer_pool():
    buf = get_read_buffer()
    assert READ_BUFFER_SIZE == 64 * 1024
    assert len(buf) == 64 * 1024

    data = b"test data"
    buf[: len(data)] = data
    assert bytes(buf[: len(data)]) == data
    assert len(buf) == 64 * 1024

    release_read_buffer(buf)

    buf2 = get_read_buffer()
    assert len(buf2) == 64 * 1024
    release_read_buffer(buf2)


def _run_threads(work, count=10):
    threads = [threading.Thread(target=work) for _ in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def test_buffer_pool_concurrency():
    lengths = []
    contents = []
    lock = threading.Lock()

    def work():
        for _ in range(100):
            buf = get_buffer()
            buf.extend(b"test data")
            with lock:
                lengths.append(len(buf))
                contents.append(bytes(buf))
            release_buffer(buf)

    _run_threads(work)
    assert len(lengths) == 1000
    assert set(lengths) == {len(b"test data")}
    assert set(contents) == {b"test data"}

    final = get_buffer()
    assert len(final) == 0
    release_buffer(final)


def test_read_buffer_pool_concurrency():
    lengths = []
    lock = threading.Lock()

    def work():
        for _ in range(100):
            buf = get_read_buffer()
            with lock:
                lengths.append(len(buf))
            buf[:9] = b"test data"
            release_read_buffer(buf)

    _run_threads(work)
    assert len(lengths) == 1000
    assert set(lengths) == {64 * 1024}

    final = get_read_buffer()
    assert len(final) == 64 * 1024
    release_read_buffer(final)