"""Thread-safe object pools that reuse released items."""

from __future__ import annotations

import threading
from typing import Callable, Generic, List, Tuple, TypeVar

T = TypeVar("T")


class Pool(Generic[T]):
    """Hands out released items first, otherwise builds new ones with *factory*."""

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._items: List[T] = []
        self._lock = threading.Lock()

    def get(self) -> T:
        """Take the most recently released item, or a fresh one."""
        with self._lock:
            if self._items:
                return self._items.pop()
        return self._factory()

    def put(self, item: T) -> None:
        """Release *item* for reuse."""
        with self._lock:
            self._items.append(item)


class BufferPool(Pool[Tuple[bytearray, int]]):
    """Pool of bytearrays that are handed out empty.

    A buffer's capacity is taken as its length when it is released, but
    never less than the pool's default size.
    """

    def __init__(self, size: int, factory: Callable[[int], bytearray]) -> None:
        self.size = size
        self._make = factory
        super().__init__(lambda: (factory(size), size))

    def _take(self) -> Tuple[bytearray, int]:
        buf, capacity = super().get()
        del buf[:]
        return buf, capacity

    def get(self) -> bytearray:  # type: ignore[override]
        """Take an empty buffer."""
        return self._take()[0]

    def put(self, buf: bytearray) -> None:  # type: ignore[override]
        """Release *buf* for reuse."""
        super().put((buf, max(len(buf), self.size)))

    def get_with_size(self, size: int) -> bytearray:
        """Take an empty buffer whose capacity is at least *size*.

        A pooled buffer that is too small stays in the pool and a new one
        is built instead.
        """
        buf, capacity = self._take()
        if capacity < size:
            super().put((buf, capacity))
            return self._make(size)
        return buf