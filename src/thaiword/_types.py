"""Data structures for thaiword."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Suggestion:
    word: str
    score: float   # 1.0 only for an exact match


class BoundedCache:
    """Insertion-ordered map that drops its oldest half when full."""

    __slots__ = ("_data", "max_size")

    def __init__(self, max_size: int) -> None:
        self._data: dict = {}
        self.max_size = max_size

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def put(self, key, value) -> None:
        data = self._data
        if key not in data and len(data) >= self.max_size:
            self.shrink(self.max_size // 2)
        data[key] = value

    def shrink(self, keep: int) -> None:
        """Keep only the ``keep`` most recently inserted entries."""
        data = self._data
        if len(data) <= keep:
            return
        if keep <= 0:
            data.clear()
            return
        recent = list(data.items())[-keep:]
        data.clear()
        data.update(recent)

    def clear(self) -> None:
        self._data.clear()
