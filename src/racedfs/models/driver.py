"""Canonical driver model shared across ingestion and optimizer layers."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class DriverRecord(BaseModel):
    """Normalized driver payload used by the lineup optimizer."""

    name: str = Field(..., min_length=1)
    salary: int = Field(..., ge=0)
    avg_points_per_game: float
    start_pos: int = Field(..., ge=1)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)
