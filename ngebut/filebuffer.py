"""Shared pools of buffers for reading files."""

from __future__ import annotations

from ngebut.pool import Pool

READ_BUFFER_SIZE = 64 * 1024
"""Length of the buffers handed out by :func:`get_read_buffer`."""

_buffer_pool: Pool[bytearray] = Pool(bytearray)
_read_buffer_pool: Pool[bytearray] = Pool(lambda: bytearray(READ_BUFFER_SIZE))


def get_buffer() -> bytearray:
    """Take an empty growable buffer."""
    return _buffer_pool.get()


def release_buffer(buf: bytearray) -> None:
    """Empty *buf* and return it to the pool."""
    del buf[:]
    _buffer_pool.put(buf)


def get_read_buffer() -> bytearray:
    """Take a fixed-length read buffer of :data:`READ_BUFFER_SIZE` bytes."""
    return _read_buffer_pool.get()


def release_read_buffer(buf: bytearray) -> None:
    """Return a read buffer to the pool."""
    _read_buffer_pool.put(buf)