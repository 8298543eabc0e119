"""Tests for WordStore: membership, statistics, longest match, prefixes."""

import pytest

from thaiword import InvalidWordError, WordStore


def test_add_and_contains():
    store = WordStore()
    assert store.add("สวัสดี") is True
    assert store.contains("สวัสดี")
    assert "สวัสดี" in store
    assert not store.contains("ครับ")


def test_add_is_idempotent():
    """Second add of the same word is a no-op returning False."""
    store = WordStore()
    assert store.add("ครับ") is True
    assert store.add("ครับ") is False
    assert store.word_count == 1


def test_add_strips_whitespace():
    store = WordStore()
    store.add("  ผม\n")
    assert store.contains("ผม")
    assert store.add("ผม") is False


def test_add_empty_word():
    store = WordStore()
    with pytest.raises(InvalidWordError) as excinfo:
        store.add("   ")
    assert excinfo.value.reason == "empty"


def test_add_invalid_bytes():
    store = WordStore()
    with pytest.raises(InvalidWordError) as excinfo:
        store.add(b"\xff\xfe")
    assert excinfo.value.reason == "encoding"


def test_add_lone_surrogate():
    store = WordStore()
    with pytest.raises(InvalidWordError) as excinfo:
        store.add("ก\ud800")
    assert excinfo.value.reason == "encoding"


def test_add_utf8_bytes():
    store = WordStore()
    assert store.add("ครับ".encode("utf-8")) is True
    assert store.contains("ครับ")


def test_length_statistics():
    store = WordStore(["ก", "กข", "ขค", "สวัสดี"])
    assert store.word_count == 4
    assert store.max_word_length == 6
    assert store.length_histogram == {1: 1, 2: 2, 6: 1}


def test_remove_updates_statistics():
    store = WordStore(["ก", "กข", "สวัสดี"])
    assert store.remove("สวัสดี") is True
    assert store.max_word_length == 2
    assert store.length_histogram == {1: 1, 2: 1}
    assert store.remove("สวัสดี") is False
    assert store.word_count == 2


def test_remove_last_word():
    store = WordStore(["ก"])
    store.remove("ก")
    assert store.word_count == 0
    assert store.max_word_length == 0
    assert store.length_histogram == {}


def test_version_changes_on_mutation():
    store = WordStore()
    v0 = store.version
    store.add("ก")
    v1 = store.version
    store.add("ก")
    assert store.version == v1
    store.remove("ก")
    assert v0 < v1 < store.version


def test_find_longest_match_prefers_longest():
    store = WordStore(["ตา", "ตาก", "ตากลม"])
    assert store.find_longest_match("ตากลมแรง", 0, 20) == "ตากลม"


def test_find_longest_match_uncommon_length():
    """Lengths outside the common set are still found."""
    word = "กขคงจฉช"  # 7 codepoints
    store = WordStore(["ก", "กข", word])
    assert store.find_longest_match(word + "ซ", 0, 20) == word


def test_find_longest_match_respects_max_length():
    store = WordStore(["ก", "กข", "กขคงจฉช"])
    assert store.find_longest_match("กขคงจฉชซ", 0, 5) == "กข"


def test_find_longest_match_at_position():
    store = WordStore(["ครับ", "ผม"])
    text = "ผมครับ"
    assert store.find_longest_match(text, 2, 10) == "ครับ"


def test_find_longest_match_miss():
    store = WordStore(["ครับ"])
    assert store.find_longest_match("ผม", 0, 10) is None
    assert store.find_longest_match("ครับ", 4, 10) is None


def test_find_longest_match_empty_store():
    assert WordStore().find_longest_match("ครับ", 0, 10) is None


def test_has_prefix():
    store = WordStore(["สวัสดี", "ครับ"])
    assert store.has_prefix("")
    assert store.has_prefix("สวั")
    assert store.has_prefix("ครับ")
    assert not store.has_prefix("ครับผม")
    assert not store.has_prefix("xyz")


def test_has_prefix_empty_store():
    assert not WordStore().has_prefix("")
    assert not WordStore().has_prefix("ก")


def test_has_prefix_after_remove():
    store = WordStore(["สวัสดี", "สวย"])
    store.remove("สวัสดี")
    assert not store.has_prefix("สวัส")
    assert store.has_prefix("สว")


def test_words_snapshot():
    store = WordStore(["ก", "ข"])
    words = store.words()
    store.add("ค")
    assert sorted(words) == ["ก", "ข"]
    assert sorted(store.words()) == ["ก", "ข", "ค"]


def test_bulk_load_cleans_entries():
    store = WordStore()
    added = store.bulk_load([
        "สวัสดี",
        "  ครับ  ",
        "",
        "# comment",
        "/ comment",
        "ผม/ABC",
        b"\xff\xfe",
        "hello",
        "ก.ค.",
        "สวัสดี",
    ])
    assert added == 4
    assert sorted(store.words()) == sorted(["สวัสดี", "ครับ", "ผม", "ก.ค."])


def test_bulk_load_without_thai_filter():
    store = WordStore()
    assert store.bulk_load(["hello", "ครับ"], thai_only=False) == 2
    assert store.contains("hello")


def test_stats():
    store = WordStore(["ก", "สวัสดี"])
    stats = store.stats()
    assert stats["word_count"] == 2
    assert stats["max_word_length"] == 6
    assert stats["length_distribution"] == {1: 1, 6: 1}
    assert stats["estimated_memory_mb"] >= 0.0
