"""Tests for word-list loading and snapshot save/load with validation."""

import json
from pathlib import Path

import pytest

import thaiword
from thaiword import (
    ChecksumError,
    DictionaryError,
    SnapshotVersionError,
    WordStore,
    load_snapshot,
    load_word_list,
    save_snapshot,
)
from thaiword._loader import read_word_list


@pytest.fixture
def word_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_bytes(
        "# Thai words\nสวัสดี\n\n  ครับ  \n// note\nผม/N\n".encode("utf-8")
        + b"\xff\xfe\n"
        + "hello\n".encode("utf-8")
    )
    return path


def test_read_word_list(word_file):
    lines = read_word_list(word_file)
    assert all(isinstance(line, bytes) for line in lines)
    assert len(lines) == 8


def test_load_word_list(word_file):
    store = load_word_list(word_file)
    assert sorted(store.words()) == sorted(["สวัสดี", "ครับ", "ผม"])


def test_load_word_list_into_existing_store(word_file):
    store = WordStore(["ค่ะ"])
    assert load_word_list(word_file, store) is store
    assert store.word_count == 4


def test_missing_word_list(tmp_path):
    with pytest.raises(DictionaryError, match="not found"):
        read_word_list(tmp_path / "missing.txt")


def test_snapshot_round_trip(tmp_path, store):
    save_snapshot(store, tmp_path / "snap")
    loaded = load_snapshot(tmp_path / "snap")
    assert sorted(loaded.words()) == sorted(store.words())
    assert loaded.length_histogram == store.length_histogram
    manifest = json.loads((tmp_path / "snap" / "manifest.json").read_text())
    assert manifest["word_count"] == store.word_count


def test_snapshot_keeps_any_word(tmp_path):
    """Snapshots restore words that bulk loading would filter out."""
    store = WordStore(["hello", "a/b", "#tag"])
    save_snapshot(store, tmp_path)
    assert sorted(load_snapshot(tmp_path).words()) == ["#tag", "a/b", "hello"]


def test_missing_directory():
    with pytest.raises(DictionaryError, match="manifest.json not found"):
        load_snapshot("/nonexistent/path")


def test_version_mismatch(tmp_path, store):
    """Tampered version should raise SnapshotVersionError."""
    save_snapshot(store, tmp_path)
    manifest_path = Path(tmp_path) / "manifest.json"
    with open(manifest_path) as f:
        manifest = json.load(f)
    manifest["version"] = "99.0"
    with open(manifest_path, "w") as f:
        json.dump(manifest, f)
    with pytest.raises(SnapshotVersionError):
        load_snapshot(tmp_path)


def test_checksum_mismatch(tmp_path, store):
    """Tampered file should raise ChecksumError."""
    save_snapshot(store, tmp_path)
    with open(Path(tmp_path) / "words.bin", "ab") as f:
        f.write(b"tampered")
    with pytest.raises(ChecksumError):
        load_snapshot(tmp_path)


def test_word_count_mismatch(tmp_path, store):
    save_snapshot(store, tmp_path)
    manifest_path = Path(tmp_path) / "manifest.json"
    manifest = json.loads(manifest_path.read_text())
    manifest["word_count"] += 1
    manifest_path.write_text(json.dumps(manifest))
    with pytest.raises(DictionaryError, match="manifest lists"):
        load_snapshot(tmp_path)


def test_missing_words_file(tmp_path, store):
    save_snapshot(store, tmp_path)
    (Path(tmp_path) / "words.bin").unlink()
    with pytest.raises(DictionaryError, match="Missing snapshot file"):
        load_snapshot(tmp_path)


def test_load_default():
    """Loading with no sources uses the bundled vocabulary."""
    segmenter = thaiword.load()
    assert segmenter.store.word_count == len(thaiword.BASIC_WORDS)


def test_load_sources(tmp_path, word_file):
    save_snapshot(WordStore(["สมชาย"]), tmp_path / "snap")
    segmenter = thaiword.load(
        word_file, snapshot_dir=tmp_path / "snap", words=["ชื่อ"], enable_caching=False,
    )
    assert segmenter.segment("สวัสดีครับผมชื่อสมชาย") == [
        "สวัสดี", "ครับ", "ผม", "ชื่อ", "สมชาย",
    ]
    assert segmenter.get_config().enable_caching is False
