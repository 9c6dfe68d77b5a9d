"""Lineup optimizer: scoring, enumeration, search and result values."""

from .prediction import InfeasibilityReason, InfeasibleResult, Prediction, aggregate
from .scoring import ScoredDriver, score_driver, score_drivers
from .service import STRATEGIES, DuplicateDriverError, OptimizeResult, optimize

__all__ = [
    "DuplicateDriverError",
    "InfeasibilityReason",
    "InfeasibleResult",
    "OptimizeResult",
    "Prediction",
    "STRATEGIES",
    "ScoredDriver",
    "aggregate",
    "optimize",
    "score_driver",
    "score_drivers",
]
