"""Levenshtein-based word suggestions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ._config import validate_threshold
from ._text import ensure_text
from ._types import BoundedCache, Suggestion

if TYPE_CHECKING:
    from ._store import WordStore

DISTANCE_CACHE_SIZE = 1000


class Suggester(Protocol):
    threshold: float

    def suggest(
        self, word: str | bytes, store: WordStore, max_results: int = 5
    ) -> list[Suggestion]: ...

    def calculate_similarity(self, a: str, b: str) -> float: ...

    def clear_cache(self) -> None: ...

    def cache_stats(self) -> dict: ...


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings, one codepoint per edit."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            cost = 0 if ca == cb else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current
    return previous[-1]


class LevenshteinSuggester:
    """Suggest dictionary words close to a (usually short, misspelled) word.

    Only words whose length is within ``max_word_length_diff`` codepoints of
    the query are compared. Similarity is ``1 - distance / max(len)`` and
    results below ``threshold`` are dropped.
    """

    __slots__ = ("_threshold", "_max_word_length_diff", "_cache")

    def __init__(
        self,
        threshold: float = 0.6,
        max_word_length_diff: int = 3,
        cache_size: int = DISTANCE_CACHE_SIZE,
    ) -> None:
        self._threshold = validate_threshold(threshold)
        self._max_word_length_diff = max(1, max_word_length_diff)
        self._cache = BoundedCache(cache_size)

    @property
    def threshold(self) -> float:
        return self._threshold

    @threshold.setter
    def threshold(self, value: float) -> None:
        self._threshold = validate_threshold(value)

    @property
    def max_word_length_diff(self) -> int:
        return self._max_word_length_diff

    @max_word_length_diff.setter
    def max_word_length_diff(self, value: int) -> None:
        self._max_word_length_diff = max(1, value)

    def suggest(
        self, word: str | bytes, store: WordStore, max_results: int = 5
    ) -> list[Suggestion]:
        """Return up to ``max_results`` suggestions, best first.

        Raises:
            InvalidEncodingError: If ``word`` is not valid UTF-8.
        """
        word = ensure_text(word, "word").strip()
        if not word or max_results <= 0:
            return []

        length = len(word)
        diff = self._max_word_length_diff
        threshold = self._threshold

        suggestions: list[Suggestion] = []
        for candidate in store.words():
            if abs(len(candidate) - length) > diff:
                continue
            score = self.calculate_similarity(word, candidate)
            if score >= threshold:
                suggestions.append(Suggestion(candidate, score))

        suggestions.sort(key=lambda s: s.score, reverse=True)
        return suggestions[:max_results]

    def calculate_similarity(self, a: str, b: str) -> float:
        """Normalized similarity in [0.0, 1.0]; 1.0 for identical strings."""
        if a == b:
            return 1.0
        key = (a, b)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        longest = max(len(a), len(b))
        similarity = 1.0 - levenshtein(a, b) / longest
        self._cache.put(key, similarity)
        return similarity

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> dict:
        return {
            "cache_size": len(self._cache),
            "max_cache_size": self._cache.max_size,
            "threshold": self._threshold,
            "max_word_length_diff": self._max_word_length_diff,
        }
