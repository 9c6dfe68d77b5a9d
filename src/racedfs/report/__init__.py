"""Result reporting helpers (CSV export, JSON payloads)."""

from .export import CSV_HEADERS, export_prediction_to_csv, prediction_to_dict

__all__ = [
    "CSV_HEADERS",
    "export_prediction_to_csv",
    "prediction_to_dict",
]
