"""Configuration helpers for race parameters and venue weights."""

from .race import InvalidConfiguration, RaceConfig, check_config
from .venues import DEFAULT_VENUE_WEIGHTS, VenueWeights, resolve_config

__all__ = [
    "DEFAULT_VENUE_WEIGHTS",
    "InvalidConfiguration",
    "RaceConfig",
    "VenueWeights",
    "check_config",
    "resolve_config",
]
