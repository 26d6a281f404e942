from __future__ import annotations

from dataclasses import replace
from functools import lru_cache
from threading import Lock
from typing import Dict, List, Optional

from models.records import NoiseReading


class SubmittedReadingStore:
    """Process-lifetime holder for user-submitted readings. Nothing touches disk."""

    def __init__(self, capacity: int = 1000) -> None:
        self.capacity = capacity
        self._items: Dict[str, NoiseReading] = {}
        self._lock = Lock()

    def put(self, reading: NoiseReading) -> None:
        with self._lock:
            self._items[reading.id] = replace(reading)
            while len(self._items) > self.capacity:
                # dicts keep insertion order; drop the oldest submission
                self._items.pop(next(iter(self._items)))

    def get(self, reading_id: str) -> Optional[NoiseReading]:
        with self._lock:
            item = self._items.get(reading_id)
            if item is None:
                return None
            return replace(item)

    def list_recent(self) -> List[NoiseReading]:
        """Copies of all submissions, newest timestamp first."""
        with self._lock:
            items = [replace(item) for item in self._items.values()]
        return sorted(items, key=lambda item: item.timestamp, reverse=True)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


@lru_cache
def build_default_store() -> SubmittedReadingStore:
    return SubmittedReadingStore()
