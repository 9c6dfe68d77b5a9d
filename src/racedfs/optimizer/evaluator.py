"""Salary and score totals for a candidate lineup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .scoring import ScoredDriver


@dataclass(frozen=True)
class LineupTotals:
    salary: float
    score: float


def evaluate_lineup(lineup: Sequence[ScoredDriver]) -> LineupTotals:
    salary = 0
    score = 0.0
    for member in lineup:
        salary += member.driver.salary
        score += member.score
    return LineupTotals(salary=salary, score=score)
