"""thaiword: dictionary-driven Thai word segmentation with suggestions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from ._basic_words import BASIC_WORDS
from ._config import EngineConfig
from ._errors import (
    ChecksumError,
    ConfigError,
    DictionaryError,
    InvalidEncodingError,
    InvalidThresholdError,
    InvalidWordError,
    SegmentationFailedError,
    SnapshotVersionError,
    SuggestionsDisabledError,
    ThaiWordError,
)
from ._loader import load_snapshot, load_word_list, save_snapshot
from ._segmenter import ThaiSegmenter
from ._store import WordStore
from ._suggest import LevenshteinSuggester, levenshtein
from ._tokenizer import AhoCorasickStrategy, LongestMatchingStrategy, make_algorithm
from ._types import Suggestion

if TYPE_CHECKING:
    from pathlib import Path

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "load",
    "AhoCorasickStrategy",
    "BASIC_WORDS",
    "ChecksumError",
    "ConfigError",
    "DictionaryError",
    "EngineConfig",
    "InvalidEncodingError",
    "InvalidThresholdError",
    "InvalidWordError",
    "LevenshteinSuggester",
    "LongestMatchingStrategy",
    "SegmentationFailedError",
    "SnapshotVersionError",
    "Suggestion",
    "SuggestionsDisabledError",
    "ThaiSegmenter",
    "ThaiWordError",
    "WordStore",
    "levenshtein",
    "load_snapshot",
    "load_word_list",
    "make_algorithm",
    "save_snapshot",
]


def load(
    path: Path | str | None = None,
    *,
    snapshot_dir: Path | str | None = None,
    words: Iterable[str] | None = None,
    **options: Any,
) -> ThaiSegmenter:
    """Build a ready-to-use ThaiSegmenter.

    Args:
        path: Plain-text word list, one word per line.
        snapshot_dir: Directory written by ``save_snapshot``.
        words: Extra words to bulk-load.
        options: Passed to ThaiSegmenter (``algorithm``, ``suggester`` or any
            EngineConfig field).

    With no sources at all the bundled basic vocabulary is used.
    """
    if path is None and snapshot_dir is None and words is None:
        return ThaiSegmenter(**options)

    store = load_snapshot(snapshot_dir) if snapshot_dir is not None else WordStore()
    if path is not None:
        load_word_list(path, store)
    if words is not None:
        store.bulk_load(words)
    return ThaiSegmenter(store, **options)
