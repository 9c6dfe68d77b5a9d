"""Immutable result values produced by the optimizer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

from racedfs.config import RaceConfig
from racedfs.models import DriverRecord

from .evaluator import LineupTotals
from .scoring import ScoredDriver


class InfeasibilityReason(str, Enum):
    INSUFFICIENT_CANDIDATES = "insufficient_candidates"
    NO_FEASIBLE_LINEUP = "no_feasible_lineup"


@dataclass(frozen=True)
class Prediction:
    """Best lineup found for a pool, with its totals.

    ``truncated`` is only set when the search was cancelled early; an
    untruncated prediction is the global optimum for its pool and config.
    """

    lineup: Tuple[ScoredDriver, ...]
    total_salary: float
    total_score: float
    config: RaceConfig
    evaluated: int = 0
    truncated: bool = False

    @property
    def drivers(self) -> Tuple[DriverRecord, ...]:
        return tuple(member.driver for member in self.lineup)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(member.name for member in self.lineup)

    def render(self) -> str:
        lines = [
            f"Prediction (Total Salary: ${self.total_salary}, Combined Score: {self.total_score:.2f})"
        ]
        if self.truncated:
            lines[0] += " [search truncated]"
        for member in self.lineup:
            driver = member.driver
            lines.append(
                f"{driver.name} - Start: P{driver.start_pos}, Salary: ${driver.salary}, "
                f"Avg PPG: {driver.avg_points_per_game:.2f}, Score: {member.score:.2f}"
            )
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class InfeasibleResult:
    reason: InfeasibilityReason
    message: str
    pool_size: int
    lineup_size: int
    evaluated: int = 0
    truncated: bool = False

    def render(self) -> str:
        return f"No lineup found: {self.message}\n"

    def __str__(self) -> str:
        return self.render()


def aggregate(
    lineup: Sequence[ScoredDriver],
    totals: LineupTotals,
    config: RaceConfig,
    *,
    evaluated: int = 0,
    truncated: bool = False,
) -> Prediction:
    """Package the winning lineup into a Prediction."""

    return Prediction(
        lineup=tuple(lineup),
        total_salary=totals.salary,
        total_score=totals.score,
        config=config,
        evaluated=evaluated,
        truncated=truncated,
    )
