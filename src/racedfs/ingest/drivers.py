"""Helpers to load driver salary/performance CSVs and emit canonical records."""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel

from racedfs.models import DriverRecord


logger = logging.getLogger(__name__)


DEFAULT_DRIVER_MAPPING = {
    "name": "Name",
    "salary": "Salary",
    "avg_points_per_game": "AvgPointsPerGame",
    "start_pos": "StartPos",
}


class DriverRow(BaseModel):
    line_number: int = 0
    raw_name: str
    raw_salary: str
    raw_avg_points: str
    raw_start_pos: str

    @classmethod
    def from_mapping(
        cls,
        row: Mapping[str, Optional[str]],
        mapping: Mapping[str, str],
        *,
        line_number: int = 0,
    ) -> "DriverRow":
        def extract(key: str, *, default: str = "") -> str:
            column_spec = mapping.get(key, DEFAULT_DRIVER_MAPPING[key])
            if "|" in column_spec:
                columns = [part.strip() for part in column_spec.split("|")]
                parts = [(row.get(col) or "").strip() for col in columns if row.get(col)]
                return " ".join(parts) if parts else default
            value = row.get(column_spec)
            return value.strip() if value is not None else default

        return cls(
            line_number=line_number,
            raw_name=extract("name"),
            raw_salary=extract("salary", default="0"),
            raw_avg_points=extract("avg_points_per_game"),
            raw_start_pos=extract("start_pos"),
        )


def load_driver_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[DriverRow]:
    mapping = {**DEFAULT_DRIVER_MAPPING, **(mapping or {})}
    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        # Header is line 1.
        rows = [
            DriverRow.from_mapping(row, mapping, line_number=index)
            for index, row in enumerate(reader, start=2)
        ]
    logger.info("Loaded %s driver rows from %s", len(rows), path)
    return rows


def _parse_salary(raw_salary: str) -> int:
    text = raw_salary.strip()
    if text.startswith("-"):
        raise ValueError(f"salary '{raw_salary}' must not be negative")
    digits = re.sub(r"[^0-9]", "", text.split(".", 1)[0])
    if not digits:
        raise ValueError(f"salary '{raw_salary}' has no digits")
    return int(digits)


def _parse_points(raw_points: str) -> float:
    text = raw_points.strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"average points '{raw_points}' is not numeric") from None


def _parse_start_pos(raw_start: str) -> int:
    text = raw_start.strip().upper().lstrip("P")
    try:
        value = int(float(text))
    except ValueError:
        raise ValueError(f"start position '{raw_start}' is not a number") from None
    if value < 1:
        raise ValueError(f"start position '{raw_start}' must be 1 or greater")
    return value


def rows_to_records(rows: Sequence[DriverRow]) -> List[DriverRecord]:
    """Convert raw rows to driver records, keeping the first row per name."""

    records: List[DriverRecord] = []
    seen: set[str] = set()
    for row in rows:
        name = " ".join(row.raw_name.split())
        if not name:
            logger.warning("Skipping row %s without a driver name", row.line_number)
            continue
        if name in seen:
            logger.warning("Duplicate driver %s on row %s; keeping the first entry", name, row.line_number)
            continue
        try:
            record = DriverRecord(
                name=name,
                salary=_parse_salary(row.raw_salary),
                avg_points_per_game=_parse_points(row.raw_avg_points),
                start_pos=_parse_start_pos(row.raw_start_pos),
                metadata={"source_row": row.line_number},
            )
        except ValueError as exc:
            raise ValueError(f"row {row.line_number} ({name}): {exc}") from exc
        seen.add(name)
        records.append(record)
    return records


def load_records_from_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[DriverRecord]:
    rows = load_driver_csv(path, mapping=mapping)
    return rows_to_records(rows)
