"""CSV and JSON renderings of optimizer results."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Any, Dict

from racedfs.optimizer import InfeasibleResult, OptimizeResult, Prediction


CSV_HEADERS = ("name", "start_pos", "salary", "avg_points_per_game", "score")


def prediction_to_dict(result: OptimizeResult) -> Dict[str, Any]:
    """Return a JSON-ready payload for a prediction or an infeasible result."""

    if isinstance(result, InfeasibleResult):
        return {
            "status": "infeasible",
            "reason": result.reason.value,
            "message": result.message,
            "pool_size": result.pool_size,
            "lineup_size": result.lineup_size,
            "evaluated": result.evaluated,
            "truncated": result.truncated,
        }

    config = result.config
    return {
        "status": "ok",
        "track_name": config.track_name,
        "salary_cap": config.salary_cap,
        "differential_weight": config.differential_weight,
        "field_size": config.field_size,
        "total_salary": result.total_salary,
        "total_score": result.total_score,
        "evaluated": result.evaluated,
        "truncated": result.truncated,
        "drivers": [
            {
                "name": driver.name,
                "start_pos": driver.start_pos,
                "salary": driver.salary,
                "avg_points_per_game": driver.avg_points_per_game,
                "score": member.score,
            }
            for driver, member in zip(result.drivers, result.lineup)
        ],
    }


def export_prediction_to_csv(prediction: Prediction) -> str:
    """Write one row per lineup driver, in lineup order."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADERS)
    for member in prediction.lineup:
        driver = member.driver
        writer.writerow([
            driver.name,
            driver.start_pos,
            driver.salary,
            f"{driver.avg_points_per_game:.2f}",
            f"{member.score:.2f}",
        ])
    return buffer.getvalue()


__all__ = [
    "CSV_HEADERS",
    "export_prediction_to_csv",
    "prediction_to_dict",
]
