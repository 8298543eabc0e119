"""Hash-set word store with length statistics and a prefix trie."""

from __future__ import annotations

import logging
import sys
import unicodedata
from typing import Iterable

import ahocorasick

from ._errors import InvalidEncodingError, InvalidWordError
from ._text import ensure_text, is_thai

log = logging.getLogger(__name__)

# Most frequent Thai word lengths, probed before the rest.
COMMON_WORD_LENGTHS: tuple[int, ...] = (3, 4, 2, 5, 6, 1)
_COMMON = frozenset(COMMON_WORD_LENGTHS)


def _is_dictionary_word(word: str) -> bool:
    """Thai letters, punctuation, symbols and whitespace only."""
    for ch in word:
        if is_thai(ch) or ch.isspace():
            continue
        if unicodedata.category(ch)[0] in ("P", "S"):
            continue
        return False
    return True


class WordStore:
    """Set of known words.

    Besides O(1) membership, keeps ``length_histogram`` (codepoint length ->
    number of words) and ``max_word_length`` in step with every mutation, and
    mirrors the words into a pyahocorasick trie for prefix queries.
    """

    __slots__ = ("_words", "_lengths", "_max_word_length", "_automaton", "_version")

    def __init__(self, words: Iterable[str] | None = None) -> None:
        self._words: set[str] = set()
        self._lengths: dict[int, int] = {}
        self._max_word_length = 0
        self._automaton = ahocorasick.Automaton()
        self._version = 0
        if words is not None:
            for word in words:
                self.add(word)

    # -- Queries --

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def __len__(self) -> int:
        return len(self._words)

    def contains(self, word: str) -> bool:
        return word in self._words

    @property
    def word_count(self) -> int:
        return len(self._words)

    @property
    def max_word_length(self) -> int:
        return self._max_word_length

    @property
    def length_histogram(self) -> dict[int, int]:
        return dict(self._lengths)

    @property
    def version(self) -> int:
        """Bumped on every successful mutation."""
        return self._version

    def words(self) -> list[str]:
        """Snapshot of the current contents, in no particular order."""
        return list(self._words)

    def find_longest_match(
        self, text: str, position: int, max_length: int
    ) -> str | None:
        """Return the longest stored word starting at ``position`` in ``text``.

        Lengths are in codepoints and capped by ``max_length``, the longest
        stored word and the remaining text.
        """
        max_check = min(max_length, self._max_word_length, len(text) - position)
        if max_check <= 0:
            return None

        words = self._words
        lengths = self._lengths
        best: str | None = None
        best_len = 0

        for length in COMMON_WORD_LENGTHS:
            if length > max_check or length <= best_len or length not in lengths:
                continue
            candidate = text[position:position + length]
            if candidate in words:
                best = candidate
                best_len = length

        # Anything longer than the best common hit wins; scan down so the
        # first hit is the longest.
        for length in range(max_check, best_len, -1):
            if length in _COMMON or length not in lengths:
                continue
            candidate = text[position:position + length]
            if candidate in words:
                return candidate

        return best

    def has_prefix(self, prefix: str) -> bool:
        """True if some stored word starts with ``prefix``."""
        if not self._words:
            return False
        if prefix == "":
            return True
        return next(iter(self._automaton.keys(prefix)), None) is not None

    def automaton(self) -> ahocorasick.Automaton:
        """The word trie, converted to an Aho-Corasick automaton on demand."""
        if self._automaton.kind == ahocorasick.TRIE:
            self._automaton.make_automaton()
        return self._automaton

    def stats(self) -> dict:
        words_size = sys.getsizeof(self._words) + sum(
            sys.getsizeof(w) for w in self._words
        )
        return {
            "word_count": len(self._words),
            "max_word_length": self._max_word_length,
            "length_distribution": dict(sorted(self._lengths.items())),
            "estimated_memory_mb": round(words_size / 1024 / 1024, 3),
        }

    # -- Mutation --

    def add(self, word: str | bytes) -> bool:
        """Add a word. Returns False if it was already present.

        Raises:
            InvalidWordError: If the stripped word is empty or not UTF-8.
        """
        try:
            word = ensure_text(word, "word")
        except InvalidEncodingError as exc:
            raise InvalidWordError("word must be valid UTF-8", reason="encoding") from exc
        word = word.strip()
        if not word:
            raise InvalidWordError("cannot add an empty word", reason="empty")
        if word in self._words:
            return False
        self._insert(word)
        return True

    def remove(self, word: str) -> bool:
        """Remove a word. Returns False if it was not present."""
        if word not in self._words:
            return False

        self._words.discard(word)
        self._automaton.remove_word(word)

        length = len(word)
        count = self._lengths[length] - 1
        if count:
            self._lengths[length] = count
        else:
            del self._lengths[length]
            if length == self._max_word_length:
                self._max_word_length = max(self._lengths, default=0)
        self._version += 1
        return True

    def bulk_load(self, words: Iterable[str | bytes], *, thai_only: bool = True) -> int:
        """Clean and insert raw dictionary entries; returns how many were added.

        Blank and comment lines (``#`` or ``/``), entries that are not UTF-8
        and, with ``thai_only``, entries with Latin letters or digits are
        skipped. Anything after a ``/`` is treated as affix flags and dropped.
        """
        added = 0
        seen = 0
        for raw in words:
            seen += 1
            word = self._clean(raw, thai_only)
            if word is None or word in self._words:
                continue
            self._insert(word)
            added += 1
        log.info("Bulk load added %d of %d entries (%d words total)",
                 added, seen, len(self._words))
        return added

    # -- Internal methods --

    def _insert(self, word: str) -> None:
        self._words.add(word)
        self._automaton.add_word(word, word)
        length = len(word)
        self._lengths[length] = self._lengths.get(length, 0) + 1
        if length > self._max_word_length:
            self._max_word_length = length
        self._version += 1

    @staticmethod
    def _clean(raw: str | bytes, thai_only: bool) -> str | None:
        try:
            word = ensure_text(raw, "word").strip()
        except InvalidEncodingError:
            return None
        if not word or word.startswith(("#", "/")):
            return None
        word = word.split("/", 1)[0].strip()
        if not word:
            return None
        if thai_only and not _is_dictionary_word(word):
            return None
        return word
