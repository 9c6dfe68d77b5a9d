"""Persist and load venue weight profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from racedfs.config.race import DEFAULT_DIFFERENTIAL_WEIGHT
from racedfs.config.venues import DEFAULT_VENUE_WEIGHTS, VenueWeights


@dataclass
class WeightProfile:
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_VENUE_WEIGHTS))
    default: float = DEFAULT_DIFFERENTIAL_WEIGHT

    @classmethod
    def load(cls, path: Path) -> "WeightProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{path}: profile must be a JSON object")
        raw_weights = data.get("weights", {})
        if not isinstance(raw_weights, dict):
            raise ValueError(f"{path}: 'weights' must be an object mapping venue names to numbers")
        return cls(
            weights={str(name): float(value) for name, value in raw_weights.items()},
            default=float(data.get("default", DEFAULT_DIFFERENTIAL_WEIGHT)),
        )

    def save(self, path: Path) -> None:
        payload = {
            "default": self.default,
            "weights": self.weights,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def to_venue_weights(self) -> VenueWeights:
        return VenueWeights(self.weights, default=self.default)
