"""Venue to differential-weight lookup used when resolving a race config."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Tuple

from .race import (
    DEFAULT_DIFFERENTIAL_WEIGHT,
    DEFAULT_FIELD_SIZE,
    DEFAULT_LINEUP_SIZE,
    DEFAULT_SALARY_CAP,
    RaceConfig,
)


# Estimates based on passing difficulty and position volatility.
DEFAULT_VENUE_WEIGHTS: Mapping[str, float] = {
    "Daytona International Speedway": 0.3,
    "Talladega Superspeedway": 0.3,
    "Martinsville Speedway": 2.0,
    "Bristol Motor Speedway": 1.8,
    "Richmond Raceway": 1.7,
    "Nashville Superspeedway": 1.6,
    "Dover International Speedway": 1.5,
    "Darlington Raceway": 1.4,
    "Atlanta Motor Speedway": 1.2,
    "Phoenix Raceway": 1.3,
    "Kansas Speedway": 1.0,
    "Charlotte Motor Speedway": 1.0,
    "Pocono Raceway": 0.9,
    "Indianapolis Motor Speedway": 0.8,
    "Circuit of the Americas": 0.4,
    "Watkins Glen International": 0.5,
    "Iowa Speedway": 1.6,
}


def _venue_key(name: str) -> str:
    return " ".join(name.split()).upper()


class VenueWeights:
    """Case-insensitive venue lookup with an explicit default for unlisted tracks."""

    def __init__(
        self,
        weights: Optional[Mapping[str, float]] = None,
        default: float = DEFAULT_DIFFERENTIAL_WEIGHT,
    ) -> None:
        source = DEFAULT_VENUE_WEIGHTS if weights is None else weights
        self.default = float(default)
        self._names: Dict[str, str] = {}
        self._weights: Dict[str, float] = {}
        for name, weight in source.items():
            key = _venue_key(name)
            if not key:
                raise ValueError("venue names must not be blank")
            self._names[key] = name
            self._weights[key] = float(weight)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _venue_key(name) in self._weights

    def __len__(self) -> int:
        return len(self._weights)

    def get_weight(self, name: Optional[str]) -> float:
        """Return the weight for *name*, or the default when it is unlisted."""

        if not name:
            return self.default
        return self._weights.get(_venue_key(name), self.default)

    def items(self) -> Iterable[Tuple[str, float]]:
        return ((self._names[key], weight) for key, weight in self._weights.items())

    def as_dict(self) -> Dict[str, float]:
        return dict(self.items())


def resolve_config(
    track_name: Optional[str] = None,
    *,
    weights: Optional[VenueWeights] = None,
    differential_weight: Optional[float] = None,
    salary_cap: float = DEFAULT_SALARY_CAP,
    field_size: int = DEFAULT_FIELD_SIZE,
    lineup_size: int = DEFAULT_LINEUP_SIZE,
) -> RaceConfig:
    """Build a RaceConfig, resolving the differential weight from the venue table.

    An explicit ``differential_weight`` always wins over the table.
    """

    if differential_weight is None:
        lookup = weights if weights is not None else VenueWeights()
        differential_weight = lookup.get_weight(track_name)
    return RaceConfig(
        lineup_size=lineup_size,
        salary_cap=salary_cap,
        differential_weight=float(differential_weight),
        field_size=field_size,
        track_name=track_name,
    )
