"""Script-aware greedy longest-match tokenization strategies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Protocol

from ._errors import ConfigError
from ._text import (
    LATIN,
    LATIN_RUN_CHARS,
    NUMBER,
    NUMBER_RUN_CHARS,
    SPACE,
    THAI,
    classify,
    ensure_text,
    normalize_whitespace,
)
from ._types import BoundedCache

if TYPE_CHECKING:
    from ._store import WordStore

log = logging.getLogger(__name__)

MATCH_CACHE_SIZE = 1000

_MISS = object()


class Algorithm(Protocol):
    """Segmentation strategy: turns text into tokens using a WordStore."""

    name: str

    def process(self, text: str | bytes, store: WordStore) -> list[str]: ...

    def clear_cache(self) -> None: ...

    def cache_stats(self) -> dict: ...


def _run_end(text: str, start: int, allowed: frozenset[str]) -> int:
    end = start
    n = len(text)
    while end < n and text[end] in allowed:
        end += 1
    return end


def scan(text: str, thai_match: Callable[[int], str | None]) -> list[str]:
    """Walk normalized ``text`` and emit tokens.

    ``thai_match(position)`` returns the dictionary word starting at a Thai
    character, or None to fall back to that single character.
    """
    tokens: list[str] = []
    n = len(text)
    pos = 0
    while pos < n:
        ch = text[pos]
        kind = classify(ch)
        if kind == THAI:
            word = thai_match(pos) if pos + 1 < n else None
            if not word:
                word = ch
        elif kind == LATIN:
            word = text[pos:_run_end(text, pos, LATIN_RUN_CHARS)]
        elif kind == NUMBER:
            word = text[pos:_run_end(text, pos, NUMBER_RUN_CHARS)]
        elif kind == SPACE:
            # Input is already collapsed; one character per run.
            word = " "
        else:
            word = ch
        tokens.append(word)
        pos += len(word)
    return _post_process(tokens)


def _post_process(tokens: list[str]) -> list[str]:
    """Drop empty tokens and coalesce runs of space tokens."""
    merged: list[str] = []
    pending_space = False
    for token in tokens:
        if not token:
            continue
        if token == " ":
            pending_space = True
            continue
        if pending_space and merged:
            merged.append(" ")
        pending_space = False
        merged.append(token)
    return merged


def _prepare(text: str | bytes) -> str:
    return normalize_whitespace(ensure_text(text))


class LongestMatchingStrategy:
    """Greedy longest dictionary match via ``WordStore.find_longest_match``.

    Matches are memoized by the probed window ``text[pos:pos + lookahead]``.
    The cache is dropped whenever the store (or its contents) changes.
    """

    __slots__ = ("_cache", "_store", "_store_version")

    name = "longest"

    def __init__(self, cache_size: int = MATCH_CACHE_SIZE) -> None:
        self._cache = BoundedCache(cache_size)
        self._store: WordStore | None = None
        self._store_version = -1

    def process(self, text: str | bytes, store: WordStore) -> list[str]:
        text = _prepare(text)
        if not text:
            return []
        self._sync(store)

        lookahead = store.max_word_length
        cache = self._cache

        def thai_match(pos: int) -> str | None:
            window = text[pos:pos + lookahead]
            hit = cache.get(window, _MISS)
            if hit is _MISS:
                hit = store.find_longest_match(window, 0, lookahead)
                cache.put(window, hit)
            return hit

        return scan(text, thai_match)

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> dict:
        return {
            "cache_size": len(self._cache),
            "max_cache_size": self._cache.max_size,
        }

    def _sync(self, store: WordStore) -> None:
        if store is not self._store or store.version != self._store_version:
            if self._store is not None:
                log.debug("Word store changed; clearing match cache")
            self._cache.clear()
            self._store = store
            self._store_version = store.version


class AhoCorasickStrategy:
    """Greedy longest match computed from one Aho-Corasick pass.

    Collects the longest word starting at every position, then runs the same
    scan as LongestMatchingStrategy, so both produce identical tokens.
    """

    __slots__ = ()

    name = "aho-corasick"

    def process(self, text: str | bytes, store: WordStore) -> list[str]:
        text = _prepare(text)
        if not text:
            return []
        if not len(store):
            return scan(text, lambda pos: None)

        longest: dict[int, str] = {}
        for end_inclusive, word in store.automaton().iter(text):
            start = end_inclusive + 1 - len(word)
            current = longest.get(start)
            if current is None or len(word) > len(current):
                longest[start] = word

        return scan(text, longest.get)

    def clear_cache(self) -> None:
        pass

    def cache_stats(self) -> dict:
        return {"cache_size": 0, "max_cache_size": 0}


_ALGORITHMS: dict[str, type] = {
    LongestMatchingStrategy.name: LongestMatchingStrategy,
    AhoCorasickStrategy.name: AhoCorasickStrategy,
}


def make_algorithm(name: str) -> Algorithm:
    """Instantiate a strategy by name ("longest" or "aho-corasick")."""
    try:
        cls = _ALGORITHMS[name]
    except KeyError:
        raise ConfigError(
            f"Unknown algorithm {name!r}; expected one of {sorted(_ALGORITHMS)}"
        ) from None
    return cls()
