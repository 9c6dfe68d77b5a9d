"""Input adapters that normalize raw driver data."""

from .drivers import (
    DEFAULT_DRIVER_MAPPING,
    DriverRow,
    load_driver_csv,
    load_records_from_csv,
    rows_to_records,
)

__all__ = [
    "DEFAULT_DRIVER_MAPPING",
    "DriverRow",
    "load_driver_csv",
    "load_records_from_csv",
    "rows_to_records",
]
