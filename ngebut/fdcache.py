"""Cache of open file objects with LRU eviction and idle expiry."""

from __future__ import annotations

import threading
import time
import weakref
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class FileDescriptor:
    """An open file together with the metadata it was cached with."""

    file: Any
    mod_time: float
    size: int
    last_access: float


def _cleanup_loop(ref: "weakref.ReferenceType[FDCache]", stop: threading.Event, interval: float) -> None:
    while not stop.wait(interval):
        cache = ref()
        if cache is None:
            return
        cache.cleanup()
        del cache


class FDCache:
    """Keeps up to *max_size* open files; idle ones are closed after *expiration* seconds.

    A background thread sweeps for idle files every ``expiration / 2``
    seconds until :meth:`close` is called.
    """

    def __init__(self, max_size: int = 100, expiration: float = 300.0) -> None:
        if expiration <= 0:
            raise ValueError("expiration must be positive")
        self.max_size = max_size
        self.expiration = expiration
        self._descriptors: "OrderedDict[str, FileDescriptor]" = OrderedDict()
        self._lock = threading.RLock()
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=_cleanup_loop,
            args=(weakref.ref(self), self._stop, expiration / 2),
            daemon=True,
        )
        self._thread.start()

    def get(self, path: str) -> Optional[FileDescriptor]:
        """Return the cached descriptor for *path*, or None, marking it as used."""
        with self._lock:
            entry = self._descriptors.get(path)
            if entry is not None:
                entry.last_access = time.time()
                self._descriptors.move_to_end(path)
            return entry

    def set(self, path: str, file: Any, mod_time: float, size: int) -> None:
        """Cache *file* for *path*, closing the least recently used one when full."""
        with self._lock:
            previous = self._descriptors.pop(path, None)
            if previous is not None and previous.file is not file:
                previous.file.close()
            if previous is None and len(self._descriptors) >= self.max_size:
                self._evict_lru()
            self._descriptors[path] = FileDescriptor(
                file=file, mod_time=mod_time, size=size, last_access=time.time()
            )

    def _evict_lru(self) -> None:
        if self._descriptors:
            _, oldest = self._descriptors.popitem(last=False)
            oldest.file.close()

    def remove(self, path: str) -> None:
        """Close and drop the file cached for *path*, if any."""
        with self._lock:
            entry = self._descriptors.pop(path, None)
            if entry is not None:
                entry.file.close()

    def is_modified(self, path: str, mod_time: float) -> bool:
        """Tell whether *mod_time* is newer than the cached one (or nothing is cached)."""
        with self._lock:
            entry = self._descriptors.get(path)
            if entry is None:
                return True
            return mod_time > entry.mod_time

    def cleanup(self) -> None:
        """Close and drop files idle for longer than the expiration period."""
        now = time.time()
        with self._lock:
            expired = [
                path
                for path, entry in self._descriptors.items()
                if now - entry.last_access > self.expiration
            ]
            for path in expired:
                self._descriptors.pop(path).file.close()

    def clear(self) -> None:
        """Close and drop every cached file."""
        with self._lock:
            for entry in self._descriptors.values():
                entry.file.close()
            self._descriptors.clear()

    def close(self) -> None:
        """Stop the background sweep."""
        self._stop.set()

    def __len__(self) -> int:
        with self._lock:
            return len(self._descriptors)


_default: Optional[FDCache] = None
_default_lock = threading.Lock()


def default_fd_cache() -> FDCache:
    """Return the shared cache (100 files, five-minute expiry)."""
    global _default
    with _default_lock:
        if _default is None:
            _default = FDCache(100, 300.0)
        return _default