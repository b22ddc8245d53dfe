"""link_scout.dedup: concurrency-safe "seen before?" sets."""

from __future__ import annotations

import threading
from typing import Set


class DedupStore:
    """Set of keys where the first caller of :meth:`check_and_mark` wins."""

    def __init__(self) -> None:
        self._seen: Set[str] = set()
        self._lock = threading.Lock()

    def check_and_mark(self, key: str) -> bool:
        """Return True exactly once per distinct *key*."""
        with self._lock:
            if key in self._seen:
                return False
            self._seen.add(key)
            return True

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)


__all__ = ["DedupStore"]
