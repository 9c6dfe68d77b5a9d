"""Per-run race configuration consumed by the optimizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_LINEUP_SIZE = 6
DEFAULT_SALARY_CAP = 50_000
DEFAULT_FIELD_SIZE = 40
DEFAULT_DIFFERENTIAL_WEIGHT = 1.0


class InvalidConfiguration(ValueError):
    """Raised when a race configuration cannot describe a valid search."""


def check_config(config: Any) -> None:
    """Raise InvalidConfiguration unless *config* describes a searchable race."""

    if config.lineup_size <= 0:
        raise InvalidConfiguration(f"lineup_size must be positive, got {config.lineup_size!r}")
    if config.salary_cap < 0:
        raise InvalidConfiguration(f"salary_cap must be non-negative, got {config.salary_cap!r}")
    if config.field_size <= 0:
        raise InvalidConfiguration(f"field_size must be positive, got {config.field_size!r}")


@dataclass(frozen=True)
class RaceConfig:
    lineup_size: int = DEFAULT_LINEUP_SIZE
    salary_cap: float = DEFAULT_SALARY_CAP
    differential_weight: float = DEFAULT_DIFFERENTIAL_WEIGHT
    field_size: int = DEFAULT_FIELD_SIZE
    track_name: Optional[str] = None

    def __post_init__(self) -> None:
        check_config(self)
