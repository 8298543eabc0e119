"""ThaiSegmenter: cached, length-adaptive segmentation with suggestions."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Iterable, Mapping

import psutil

from ._basic_words import BASIC_WORDS
from ._config import EngineConfig
from ._errors import (
    ConfigError,
    InvalidEncodingError,
    SegmentationFailedError,
    SuggestionsDisabledError,
)
from ._store import WordStore
from ._suggest import LevenshteinSuggester
from ._text import (
    LATIN,
    NUMBER,
    SPACE,
    THAI,
    classify,
    ensure_text,
    is_boundary,
    normalize_whitespace,
)
from ._tokenizer import LongestMatchingStrategy, make_algorithm

if TYPE_CHECKING:
    from ._suggest import Suggester
    from ._tokenizer import Algorithm
    from ._types import Suggestion

log = logging.getLogger(__name__)

SHORT_TEXT_LIMIT = 50
MEDIUM_TEXT_LIMIT = 500
MAX_BOUNDARY_EXTENSION = 20
SEGMENT_CACHE_SIZE = 500

_SUGGESTION_OPTIONS = ("threshold", "max_suggestions", "max_word_length_diff")

_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _cache_key(text: str) -> int:
    """FNV-1a 64 of the UTF-8 text; hits are confirmed against the stored text."""
    h = _FNV_OFFSET
    for byte in text.encode("utf-8"):
        h = ((h ^ byte) * _FNV_PRIME) & _MASK64
    return h


def _new_stats() -> dict[str, Any]:
    return {
        "segments_processed": 0,
        "total_processing_time": 0.0,
        "cache_hits": 0,
        "cache_misses": 0,
        "memory_peak_mb": 0.0,
    }


def _stable_prefix(
    tokens: list[str], chunk_len: int, horizon: int
) -> tuple[list[str], int]:
    """Split off the tokens a cut at ``chunk_len`` cannot have changed.

    A Thai token depends on the next ``horizon`` characters and a Latin or
    number run on the character after it; tokens whose inputs lie fully
    inside the chunk are final. Returns (final tokens, characters consumed).
    """
    offset = 0
    for i, token in enumerate(tokens):
        kind = classify(token[0])
        end = offset + len(token)
        if kind == THAI and offset + horizon > chunk_len:
            return tokens[:i], offset
        if kind in (LATIN, NUMBER) and end >= chunk_len:
            return tokens[:i], offset
        offset = end
    return tokens, offset


class ThaiSegmenter:
    """Segments Thai text into words and suggests corrections.

    Wires a WordStore, a tokenization strategy and an optional suggester
    together, adds a whole-text result cache, and picks a processing path by
    text length. Counters in ``get_stats()`` never influence results.
    """

    __slots__ = (
        "_store", "_algorithm", "_suggester", "_config", "_stats",
        "_segment_cache", "_cache_version", "_process",
    )

    def __init__(
        self,
        store: WordStore | None = None,
        algorithm: Algorithm | str | None = None,
        suggester: Suggester | None = None,
        config: EngineConfig | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> None:
        if store is None:
            store = WordStore()
            store.bulk_load(BASIC_WORDS)
        self._store = store

        if algorithm is None:
            algorithm = LongestMatchingStrategy()
        elif isinstance(algorithm, str):
            algorithm = make_algorithm(algorithm)
        self._algorithm = algorithm

        if isinstance(config, EngineConfig):
            base = config
        else:
            base = EngineConfig.from_mapping(config)
        if suggester is not None:
            options.setdefault("enable_suggestions", True)
            explicit = "suggestion_threshold" in options or (
                isinstance(config, Mapping) and "suggestion_threshold" in config
            )
            if not explicit:
                options["suggestion_threshold"] = suggester.threshold
        self._config = base.with_changes(**options)

        self._suggester = suggester
        self._stats = _new_stats()
        self._segment_cache: dict[int, tuple[str, tuple[str, ...]]] = {}
        self._cache_version = store.version
        self._process: psutil.Process | None = None
        self._sync_suggester()

    # -- Accessors --

    @property
    def store(self) -> WordStore:
        return self._store

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def suggester(self) -> Suggester | None:
        return self._suggester

    @property
    def suggestions_enabled(self) -> bool:
        return self._config.enable_suggestions and self._suggester is not None

    # -- Segmentation API --

    def segment(self, text: str | bytes) -> list[str]:
        """Split ``text`` into words.

        Raises:
            InvalidEncodingError: If ``text`` is not valid UTF-8.
            SegmentationFailedError: On any unexpected internal failure.
        """
        text = ensure_text(text)
        if not text.strip():
            return []

        start = time.perf_counter()
        config = self._config
        try:
            if config.enable_caching:
                cached = self._get_cached(text)
                if cached is not None:
                    self._update_stats(True, start)
                    return list(cached)

            result = self._segment_uncached(text, config)

            if config.enable_caching:
                self._put_cached(text, result)
            self._update_stats(False, start)
            return result
        except InvalidEncodingError:
            raise
        except Exception as exc:
            raise SegmentationFailedError(f"Segmentation failed: {exc}") from exc

    def segment_to_string(self, text: str | bytes, delimiter: str = "|") -> str:
        return delimiter.join(self.segment(text))

    def segment_batch(self, texts: Iterable[str | bytes]) -> list[list[str]]:
        """Segment many texts, preserving order."""
        texts = list(texts)
        batch_size = self._config.batch_size
        results: list[list[str]] = []
        for i in range(0, len(texts), batch_size):
            results.extend(self.segment(t) for t in texts[i:i + batch_size])
            if i + batch_size < len(texts) and self._memory_exceeded():
                self.optimize_memory()
        return results

    def segment_with_suggestions(self, text: str | bytes) -> list[dict[str, Any]]:
        """Segment and attach suggestions to unknown single characters.

        Each entry is ``{"word": token}``; single-codepoint tokens missing
        from the store additionally get ``"suggestions"`` when suggestions
        are enabled and any were found.
        """
        tokens = self.segment(text)
        if not self.suggestions_enabled:
            return [{"word": token} for token in tokens]

        max_results = self._config.max_suggestions
        entries: list[dict[str, Any]] = []
        for token in tokens:
            entry: dict[str, Any] = {"word": token}
            if len(token) == 1 and not token.isspace() and token not in self._store:
                found = self._suggester.suggest(token, self._store, max_results)
                if found:
                    entry["suggestions"] = found
            entries.append(entry)
        return entries

    # -- Suggestion API --

    def suggest(
        self, word: str | bytes, max_results: int | None = None
    ) -> list[Suggestion]:
        """Suggest dictionary words similar to ``word``.

        Raises:
            SuggestionsDisabledError: If suggestions have not been enabled.
            InvalidEncodingError: If ``word`` is not valid UTF-8.
        """
        if not self.suggestions_enabled:
            raise SuggestionsDisabledError(
                "Suggestion feature is not enabled; call enable_suggestions() first"
            )
        if max_results is None:
            max_results = self._config.max_suggestions
        return self._suggester.suggest(word, self._store, max_results)

    def enable_suggestions(
        self, config: Mapping[str, Any] | None = None, **options: Any
    ) -> None:
        """Turn suggestions on.

        Options: ``threshold``, ``max_suggestions``, ``max_word_length_diff``.
        """
        options = {**dict(config or {}), **options}
        unknown = sorted(set(options) - set(_SUGGESTION_OPTIONS))
        if unknown:
            raise ConfigError(f"Unknown suggestion option(s): {', '.join(unknown)}")

        changes: dict[str, Any] = {"enable_suggestions": True}
        if options.get("threshold") is not None:
            changes["suggestion_threshold"] = options["threshold"]
        if options.get("max_suggestions") is not None:
            changes["max_suggestions"] = options["max_suggestions"]
        self._config = self._config.with_changes(**changes)
        self._sync_suggester()
        if options.get("max_word_length_diff") is not None:
            self._suggester.max_word_length_diff = options["max_word_length_diff"]

    def disable_suggestions(self) -> None:
        self._config = self._config.with_changes(enable_suggestions=False)

    # -- Configuration --

    def update_config(
        self, config: Mapping[str, Any] | None = None, **changes: Any
    ) -> None:
        """Apply option changes; they take effect on the next call."""
        self._config = self._config.with_changes(**{**dict(config or {}), **changes})
        self._sync_suggester()

    def get_config(self) -> EngineConfig:
        return self._config

    # -- Statistics and memory --

    def get_stats(self) -> dict[str, Any]:
        stats = dict(self._stats)
        processed = stats["segments_processed"]
        lookups = stats["cache_hits"] + stats["cache_misses"]
        stats["avg_processing_time"] = (
            stats["total_processing_time"] / processed if processed else 0.0
        )
        stats["cache_hit_ratio"] = stats["cache_hits"] / lookups if lookups else 0.0
        stats["segment_cache_size"] = len(self._segment_cache)
        stats["dictionary"] = self._store.stats()
        stats["algorithm"] = self._algorithm.cache_stats()
        if self._suggester is not None:
            stats["suggestions"] = self._suggester.cache_stats()
        return stats

    def reset_stats(self) -> None:
        self._stats = _new_stats()

    def optimize_memory(self) -> None:
        """Halve the segment cache and clear the strategy/suggester caches."""
        keep = SEGMENT_CACHE_SIZE // 2
        if len(self._segment_cache) > keep:
            recent = list(self._segment_cache.items())[-keep:]
            self._segment_cache = dict(recent)
        self._algorithm.clear_cache()
        if self._suggester is not None:
            self._suggester.clear_cache()
        log.debug("Memory optimized: segment cache at %d entries",
                  len(self._segment_cache))

    def clear_cache(self) -> None:
        self._segment_cache.clear()
        self._algorithm.clear_cache()
        if self._suggester is not None:
            self._suggester.clear_cache()

    # -- Internal methods --

    def _segment_uncached(self, text: str, config: EngineConfig) -> list[str]:
        n = len(text)
        if n <= SHORT_TEXT_LIMIT:
            return self._algorithm.process(text, self._store)
        if n <= MEDIUM_TEXT_LIMIT:
            result = self._algorithm.process(text, self._store)
            if self._memory_exceeded():
                self.optimize_memory()
            return result
        log.debug("Chunking %d-character text (chunk_size=%d)", n, config.chunk_size)
        return self._segment_chunked(text, config.chunk_size)

    def _segment_chunked(self, text: str, chunk_size: int) -> list[str]:
        """Tokenize long text chunk by chunk with identical results.

        Cuts prefer whitespace or punctuation near ``chunk_size``; tokens a
        cut could have affected are re-read from the next chunk.
        """
        text = normalize_whitespace(text)
        n = len(text)
        horizon = max(self._store.max_word_length, 1)
        result: list[str] = []
        pos = 0
        size = chunk_size
        while pos < n:
            end = n if pos + size >= n else self._extend_to_boundary(text, pos + size)
            tokens = self._algorithm.process(text[pos:end], self._store)
            consumed = end - pos
            if end < n:
                tokens, consumed = _stable_prefix(tokens, end - pos, horizon)
                if consumed == 0:
                    size *= 2
                    continue
            size = chunk_size
            result.extend(tokens)
            pos += consumed
            if pos < n and classify(text[pos]) == SPACE:
                if result:
                    result.append(" ")
                pos += 1
        return result

    @staticmethod
    def _extend_to_boundary(text: str, position: int) -> int:
        n = len(text)
        for i in range(MAX_BOUNDARY_EXTENSION):
            if position + i >= n:
                break
            if is_boundary(text[position + i]):
                return position + i
        return min(position + MAX_BOUNDARY_EXTENSION, n)

    def _get_cached(self, text: str) -> tuple[str, ...] | None:
        if self._store.version != self._cache_version:
            self._segment_cache.clear()
            self._cache_version = self._store.version
            return None
        entry = self._segment_cache.get(_cache_key(text))
        if entry is None or entry[0] != text:
            return None
        return entry[1]

    def _put_cached(self, text: str, result: list[str]) -> None:
        cache = self._segment_cache
        if len(cache) >= SEGMENT_CACHE_SIZE:
            keep = SEGMENT_CACHE_SIZE // 2
            log.debug("Segment cache full; keeping newest %d entries", keep)
            self._segment_cache = cache = dict(list(cache.items())[-keep:])
        cache[_cache_key(text)] = (text, tuple(result))

    def _update_stats(self, cache_hit: bool, start: float) -> None:
        if not self._config.enable_stats:
            return
        stats = self._stats
        stats["segments_processed"] += 1
        stats["total_processing_time"] += time.perf_counter() - start
        if cache_hit:
            stats["cache_hits"] += 1
            return
        stats["cache_misses"] += 1
        stats["memory_peak_mb"] = max(stats["memory_peak_mb"], self._memory_mb())

    def _memory_mb(self) -> float:
        if self._process is None:
            self._process = psutil.Process()
        return self._process.memory_info().rss / 1024 / 1024

    def _memory_exceeded(self) -> bool:
        return self._memory_mb() > self._config.memory_limit_mb

    def _sync_suggester(self) -> None:
        config = self._config
        if config.enable_suggestions and self._suggester is None:
            self._suggester = LevenshteinSuggester(threshold=config.suggestion_threshold)
        elif self._suggester is not None:
            self._suggester.threshold = config.suggestion_threshold
