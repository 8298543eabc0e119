"""Local word lists and msgpack snapshots with SHA-256 verification."""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path

import msgpack

from ._errors import ChecksumError, DictionaryError, SnapshotVersionError
from ._store import WordStore

log = logging.getLogger(__name__)

_EXPECTED_VERSION = "1.0"

_WORDS_FILE = "words.bin"
_MANIFEST_FILE = "manifest.json"


def read_word_list(path: Path | str) -> list[bytes]:
    """Read raw lines of a plain-text word list (one word per line).

    Lines are returned undecoded; ``WordStore.bulk_load`` drops comments and
    lines that are not valid UTF-8.
    """
    path = Path(path)
    if not path.is_file():
        raise DictionaryError(f"Word list not found: {path}")
    return path.read_bytes().splitlines()


def load_word_list(
    path: Path | str,
    store: WordStore | None = None,
    *,
    thai_only: bool = True,
) -> WordStore:
    """Load a plain-text word list into ``store`` (a new one by default)."""
    if store is None:
        store = WordStore()
    lines = read_word_list(path)
    added = store.bulk_load(lines, thai_only=thai_only)
    log.info("Loaded %d words from %s", added, path)
    return store


def save_snapshot(store: WordStore, data_dir: Path | str) -> Path:
    """Write ``store`` to ``data_dir`` as words.bin plus manifest.json."""
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)

    payload = msgpack.packb(sorted(store.words()), use_bin_type=True)
    (data_dir / _WORDS_FILE).write_bytes(payload)

    manifest = {
        "version": _EXPECTED_VERSION,
        "word_count": len(store),
        "files": {_WORDS_FILE: hashlib.sha256(payload).hexdigest()},
    }
    with open(data_dir / _MANIFEST_FILE, "w") as f:
        json.dump(manifest, f, indent=2)

    log.info("Saved snapshot of %d words to %s", len(store), data_dir)
    return data_dir


def load_snapshot(data_dir: Path | str) -> WordStore:
    """Load a snapshot written by ``save_snapshot``.

    The payload is read once; its digest and word count must match the
    manifest before any word reaches the store.

    Raises:
        DictionaryError: Manifest or payload missing, or word count off.
        SnapshotVersionError: Manifest written by another snapshot version.
        ChecksumError: Payload digest differs from the manifest.
    """
    data_dir = Path(data_dir)
    try:
        manifest = json.loads((data_dir / _MANIFEST_FILE).read_text())
    except FileNotFoundError:
        raise DictionaryError(f"{_MANIFEST_FILE} not found in {data_dir}") from None

    if manifest.get("version") != _EXPECTED_VERSION:
        raise SnapshotVersionError(
            f"Snapshot version {manifest.get('version')!r} is not {_EXPECTED_VERSION!r}"
        )
    try:
        payload = (data_dir / _WORDS_FILE).read_bytes()
    except FileNotFoundError:
        raise DictionaryError(f"Missing snapshot file: {data_dir / _WORDS_FILE}") from None

    digest = hashlib.sha256(payload).hexdigest()
    recorded = manifest.get("files", {}).get(_WORDS_FILE)
    if digest != recorded:
        raise ChecksumError(f"{_WORDS_FILE} digest {digest[:16]} does not match manifest")

    words = msgpack.unpackb(payload, raw=False)
    if len(words) != manifest.get("word_count", len(words)):
        raise DictionaryError(
            f"{_WORDS_FILE} holds {len(words)} words, manifest lists {manifest['word_count']}"
        )
    store = WordStore(words)
    log.info("Loaded snapshot of %d words from %s", len(store), data_dir)
    return store
