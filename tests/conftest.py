"""Shared fixtures for thaiword tests."""

import pytest

from thaiword import ThaiSegmenter, WordStore

SAMPLE_WORDS = [
    "สวัสดี", "ครับ", "ค่ะ", "ผม", "ชื่อ", "สมชาย", "บาท",
    "ตา", "ตาก", "ตากลม", "ลม", "กิน", "ข้าว", "ไป", "มา",
]


@pytest.fixture
def store():
    """A small word store, rebuilt for every test."""
    return WordStore(SAMPLE_WORDS)


@pytest.fixture
def segmenter(store):
    """Segmenter over the sample store with default configuration."""
    return ThaiSegmenter(store)
