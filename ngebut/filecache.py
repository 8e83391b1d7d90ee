"""In-memory cache of static file contents with size and count limits."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_SIZE = 100 * 1024 * 1024
DEFAULT_MAX_ITEMS = 1000


@dataclass
class CachedFile:
    """A file's contents and metadata as held in the cache."""

    data: bytes
    mod_time: float
    size: int
    content_type: str
    last_accessed: float


class Cache:
    """Least-recently-used cache bounded by total bytes and number of files."""

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE, max_items: int = DEFAULT_MAX_ITEMS) -> None:
        self.max_size = max_size
        self.max_items = max_items
        self._files: "OrderedDict[str, CachedFile]" = OrderedDict()
        self._current_size = 0
        self._lock = threading.RLock()

    def get(self, path: str) -> Optional[CachedFile]:
        """Return the cached file for *path*, or None, marking it as recently used."""
        with self._lock:
            entry = self._files.get(path)
            if entry is not None:
                entry.last_accessed = time.time()
                self._files.move_to_end(path)
            return entry

    def set(self, path: str, data: bytes, mod_time: float, size: int, content_type: str) -> None:
        """Cache a copy of *data* for *path*; files larger than the cache are skipped."""
        with self._lock:
            if size > self.max_size:
                return
            previous = self._files.pop(path, None)
            if previous is not None:
                self._current_size -= previous.size
            if self._current_size + size > self.max_size or len(self._files) >= self.max_items:
                self._evict(size)
            self._files[path] = CachedFile(
                data=bytes(data),
                mod_time=mod_time,
                size=size,
                content_type=content_type,
                last_accessed=time.time(),
            )
            self._current_size += size

    def _evict(self, needed: int) -> None:
        if needed > self.max_size:
            return
        while self._files and (
            self._current_size + needed > self.max_size or len(self._files) >= self.max_items
        ):
            _, oldest = self._files.popitem(last=False)
            self._current_size -= oldest.size

    def remove(self, path: str) -> None:
        """Drop *path* from the cache if present."""
        with self._lock:
            entry = self._files.pop(path, None)
            if entry is not None:
                self._current_size -= entry.size

    def clear(self) -> None:
        """Drop every cached file."""
        with self._lock:
            self._files.clear()
            self._current_size = 0

    def is_modified(self, path: str, mod_time: float) -> bool:
        """Tell whether *mod_time* is newer than the cached copy (or nothing is cached)."""
        with self._lock:
            entry = self._files.get(path)
            if entry is None:
                return True
            return mod_time > entry.mod_time

    @property
    def size(self) -> int:
        """Total bytes currently cached."""
        with self._lock:
            return self._current_size

    def __len__(self) -> int:
        with self._lock:
            return len(self._files)