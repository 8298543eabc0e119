"""Input validation and character classification helpers."""

from __future__ import annotations

import unicodedata

from ._errors import InvalidEncodingError

THAI_START = 0x0E00
THAI_END = 0x0E7F

THAI = "thai"
LATIN = "latin"
NUMBER = "number"
SPACE = "space"
PUNCTUATION = "punctuation"
OTHER = "other"

_ASCII_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_DIGITS = frozenset("0123456789")
LATIN_RUN_CHARS = _ASCII_LETTERS | _DIGITS | frozenset("-_.@")
NUMBER_RUN_CHARS = _DIGITS | frozenset(".,")
_ASCII_PUNCT = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")


def ensure_text(value: str | bytes, what: str = "text") -> str:
    """Return ``value`` as ``str``, raising InvalidEncodingError if it is not UTF-8.

    ``bytes`` are decoded strictly; ``str`` is rejected when it holds lone
    surrogates, which cannot be encoded as UTF-8.
    """
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidEncodingError(f"{what} must be valid UTF-8") from exc
    if not isinstance(value, str):
        raise TypeError(f"{what} must be str or bytes, got {type(value).__name__}")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidEncodingError(f"{what} must be valid UTF-8") from exc
    return value


def is_thai(ch: str) -> bool:
    return THAI_START <= ord(ch) <= THAI_END


def is_punctuation(ch: str) -> bool:
    return ch in _ASCII_PUNCT or unicodedata.category(ch).startswith("P")


def classify(ch: str) -> str:
    """Classify a single character into one of the script classes."""
    if is_thai(ch):
        return THAI
    if ch in _ASCII_LETTERS:
        return LATIN
    if ch in _DIGITS:
        return NUMBER
    if ch.isspace():
        return SPACE
    if is_punctuation(ch):
        return PUNCTUATION
    return OTHER


def is_boundary(ch: str) -> bool:
    """Whitespace or punctuation: safe places to cut a long text."""
    return ch.isspace() or unicodedata.category(ch).startswith("P")


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run to one space and strip the ends."""
    return " ".join(text.split())
