"""Engine configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping

from ._errors import ConfigError, InvalidThresholdError

_POSITIVE_INTS = ("batch_size", "max_suggestions", "chunk_size")


@dataclass(slots=True, frozen=True)
class EngineConfig:
    enable_caching: bool = True
    memory_limit_mb: float = 100
    batch_size: int = 1000
    enable_suggestions: bool = False
    suggestion_threshold: float = 0.6
    max_suggestions: int = 5
    chunk_size: int = 1000
    enable_stats: bool = True

    def __post_init__(self) -> None:
        validate_threshold(self.suggestion_threshold)
        for name in _POSITIVE_INTS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        if self.memory_limit_mb <= 0:
            raise ConfigError(
                f"memory_limit_mb must be positive, got {self.memory_limit_mb!r}"
            )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None = None) -> EngineConfig:
        """Build a config from a mapping, rejecting unknown keys."""
        return cls().with_changes(**dict(mapping or {}))

    def with_changes(self, **changes: Any) -> EngineConfig:
        """Return a copy with ``changes`` applied and validated."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration option(s): {', '.join(unknown)}")
        return replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def validate_threshold(threshold: float) -> float:
    if not (0.0 <= threshold <= 1.0):
        raise InvalidThresholdError(
            f"threshold must be in [0.0, 1.0], got {threshold}"
        )
    return float(threshold)
