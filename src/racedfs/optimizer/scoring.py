"""Driver scoring: base performance plus weighted position-differential upside."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from racedfs.models import DriverRecord


@dataclass(frozen=True)
class ScoredDriver:
    driver: DriverRecord
    score: float

    @property
    def name(self) -> str:
        return self.driver.name

    @property
    def salary(self) -> int:
        return self.driver.salary


def score_driver(driver: DriverRecord, differential_weight: float, field_size: int) -> float:
    """Return ``avg_points_per_game + differential_weight * (field_size - start_pos)``."""

    potential_gain = field_size - driver.start_pos
    return driver.avg_points_per_game + differential_weight * potential_gain


def score_drivers(drivers: Sequence[DriverRecord], config) -> List[ScoredDriver]:
    """Score a pool under *config*, preserving input order."""

    return [
        ScoredDriver(driver, score_driver(driver, config.differential_weight, config.field_size))
        for driver in drivers
    ]
