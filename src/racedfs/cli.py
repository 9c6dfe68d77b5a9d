"""Command-line interface for building the best lineup from a driver CSV."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from racedfs.config import InvalidConfiguration, VenueWeights, resolve_config
from racedfs.config.race import DEFAULT_FIELD_SIZE, DEFAULT_LINEUP_SIZE, DEFAULT_SALARY_CAP
from racedfs.config_loader import WeightProfile
from racedfs.ingest import load_records_from_csv
from racedfs.optimizer import STRATEGIES, InfeasibleResult, optimize
from racedfs.report import export_prediction_to_csv, prediction_to_dict


EXIT_OK = 0
EXIT_INFEASIBLE = 1
EXIT_USAGE = 2


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pick the highest-scoring driver lineup under a salary cap")
    parser.add_argument("drivers", type=Path, help="Path to drivers CSV (Name, Salary, AvgPointsPerGame, StartPos)")
    parser.add_argument("--track", default=None, help="Track name used to look up the differential weight")
    parser.add_argument(
        "--differential-weight",
        type=float,
        default=None,
        help="Override the differential weight instead of looking it up by track",
    )
    parser.add_argument("--salary-cap", type=int, default=DEFAULT_SALARY_CAP, help="Maximum total lineup salary")
    parser.add_argument("--field-size", type=int, default=DEFAULT_FIELD_SIZE, help="Number of cars in the field")
    parser.add_argument("--lineup-size", type=int, default=DEFAULT_LINEUP_SIZE, help="Drivers per lineup")
    parser.add_argument("--weights", type=Path, default=None, help="Load venue weights from a JSON profile")
    parser.add_argument("--save-weights", type=Path, default=None, help="Save the active venue weights as JSON")
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for driver CSV columns (e.g., name=Driver, or name=First|Last)",
    )
    parser.add_argument("--strategy", choices=STRATEGIES, default=None, help="Search strategy")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes for the exhaustive search")
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write the lineup CSV")
    parser.add_argument("--report", type=Path, default=None, help="Optional path to write a JSON report")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g., INFO, DEBUG)")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        mapping = _parse_mapping(args.column)
        profile = WeightProfile.load(args.weights) if args.weights else WeightProfile()
        if args.save_weights:
            profile.save(args.save_weights)
            print(f"Saved venue weights to {args.save_weights}")
        weights: VenueWeights = profile.to_venue_weights()
        if args.track and args.differential_weight is None and args.track not in weights:
            print(
                f"Track {args.track!r} not in weight table; using default weight {weights.default:.2f}",
                file=sys.stderr,
            )

        config = resolve_config(
            args.track,
            weights=weights,
            differential_weight=args.differential_weight,
            salary_cap=args.salary_cap,
            field_size=args.field_size,
            lineup_size=args.lineup_size,
        )
        records = load_records_from_csv(args.drivers, mapping=mapping or None)
        result = optimize(records, config, strategy=args.strategy, workers=args.workers)
    except (InvalidConfiguration, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    print(result.render(), end="")

    if args.report:
        args.report.write_text(json.dumps(prediction_to_dict(result), indent=2), encoding="utf-8")
        print(f"Wrote report to {args.report}")

    if isinstance(result, InfeasibleResult):
        return EXIT_INFEASIBLE

    if args.output:
        args.output.write_text(export_prediction_to_csv(result), encoding="utf-8")
        print(f"Wrote lineup to {args.output}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
