"""thaiword error types."""


class ThaiWordError(Exception):
    """Base error for all thaiword failures."""


class InvalidEncodingError(ThaiWordError, ValueError):
    """Input text is not valid UTF-8."""


class InvalidWordError(ThaiWordError, ValueError):
    """Word rejected by the store.

    ``reason`` is ``"empty"`` or ``"encoding"``.
    """

    def __init__(self, message: str, reason: str) -> None:
        super().__init__(message)
        self.reason = reason


class InvalidThresholdError(ThaiWordError, ValueError):
    """Similarity threshold outside [0.0, 1.0]."""


class ConfigError(ThaiWordError, ValueError):
    """Unknown or invalid configuration option."""


class SuggestionsDisabledError(ThaiWordError):
    """suggest() called on an engine without a suggester."""


class SegmentationFailedError(ThaiWordError):
    """Unexpected failure inside segmentation; the cause is chained."""


class DictionaryError(ThaiWordError):
    """Word list or snapshot could not be read."""


class SnapshotVersionError(DictionaryError):
    """Snapshot manifest version mismatch."""


class ChecksumError(DictionaryError):
    """Snapshot checksum verification failed."""
