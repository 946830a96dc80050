"""Configuration schema for gh-moles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _coerce_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _coerce_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class MolesConfig:
    """gh-moles configuration schema.

    None values indicate "not set" and are inherited from a lower layer.
    The `gh` executable is not configurable.
    """

    # Default KEEP_COUNT for `run cleanup`
    keep_count: int | None = None

    # Deletion pacing
    batch_size: int | None = None
    batch_pause: float | None = None  # seconds

    def merge(self, other: MolesConfig) -> MolesConfig:
        """Merge another config into this one.

        Values from `other` take precedence when they are not None.
        Returns a new MolesConfig instance.
        """
        return MolesConfig(
            keep_count=(
                other.keep_count if other.keep_count is not None else self.keep_count
            ),
            batch_size=(
                other.batch_size if other.batch_size is not None else self.batch_size
            ),
            batch_pause=(
                other.batch_pause
                if other.batch_pause is not None
                else self.batch_pause
            ),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MolesConfig:
        """Create a MolesConfig from a dictionary.

        Unknown keys are ignored. Values that cannot be coerced are dropped.
        """
        return cls(
            keep_count=_coerce_int(data.get("keep_count")),
            batch_size=_coerce_int(data.get("batch_size")),
            batch_pause=_coerce_float(data.get("batch_pause")),
        )


# Default configuration values (used when not specified anywhere)
DEFAULT_CONFIG = MolesConfig(
    keep_count=20,
    batch_size=5,
    batch_pause=1.0,
)
