"""Thread-safe in-memory key/value storage with optional expiry."""

from __future__ import annotations

import threading
import time
import weakref
from dataclasses import dataclass
from typing import Any, Dict, Optional


class NotFoundError(LookupError):
    """Raised when a key is missing or has expired."""

    def __init__(self, key: str) -> None:
        super().__init__(f"key not found: {key}")
        self.key = key


@dataclass
class _Item:
    value: bytes
    expire_at: Optional[float]

    def expired(self, now: float) -> bool:
        return self.expire_at is not None and now > self.expire_at


def _cleanup_loop(ref: "weakref.ReferenceType[Storage]", stop: threading.Event, interval: float) -> None:
    while not stop.wait(interval):
        storage = ref()
        if storage is None:
            return
        storage.cleanup()
        del storage


class Storage:
    """Stores byte values by key, each with an optional time to live.

    When *cleanup_interval* (seconds) is positive, a background thread
    removes expired items at that interval until :meth:`close` is called.
    Expired items are also dropped lazily when they are looked up.
    """

    def __init__(self, cleanup_interval: float = 0) -> None:
        self._items: Dict[str, _Item] = {}
        self._lock = threading.Lock()
        self._stop: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        if cleanup_interval > 0:
            self._stop = threading.Event()
            self._thread = threading.Thread(
                target=_cleanup_loop,
                args=(weakref.ref(self), self._stop, cleanup_interval),
                daemon=True,
            )
            self._thread.start()

    def _live_item(self, key: str) -> Optional[_Item]:
        item = self._items.get(key)
        if item is None:
            return None
        if item.expired(time.monotonic()):
            del self._items[key]
            return None
        return item

    def get(self, key: str) -> bytes:
        """Return the value stored under *key*.

        Raises :class:`NotFoundError` when the key is missing or expired.
        """
        with self._lock:
            item = self._live_item(key)
        if item is None:
            raise NotFoundError(key)
        return item.value

    def set(self, key: str, value: bytes, ttl: float = 0) -> None:
        """Store a copy of *value* under *key*; a positive *ttl* (seconds) makes it expire."""
        expire_at = time.monotonic() + ttl if ttl > 0 else None
        item = _Item(bytes(value), expire_at)
        with self._lock:
            self._items[key] = item

    def delete(self, key: str) -> None:
        """Remove *key*, whether or not it exists."""
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> None:
        """Remove every key."""
        with self._lock:
            self._items.clear()

    def has(self, key: str) -> bool:
        """Tell whether *key* exists and has not expired."""
        with self._lock:
            return self._live_item(key) is not None

    def cleanup(self) -> None:
        """Remove every expired item."""
        now = time.monotonic()
        with self._lock:
            expired = [key for key, item in self._items.items() if item.expired(now)]
            for key in expired:
                del self._items[key]

    def close(self) -> None:
        """Stop the background cleanup thread, if any."""
        if self._stop is not None:
            self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()

    def __len__(self) -> int:
        """Number of stored items, including expired ones not yet removed."""
        with self._lock:
            return len(self._items)

    def __enter__(self) -> "Storage":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()