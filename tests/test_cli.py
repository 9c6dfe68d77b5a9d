import json
from pathlib import Path

from racedfs.cli import EXIT_INFEASIBLE, EXIT_OK, EXIT_USAGE, main


DRIVER_ROWS = [
    "Name,Salary,AvgPointsPerGame,StartPos",
    "Kyle Larson,10000,45.5,1",
    "Denny Hamlin,10000,42.0,3",
    "William Byron,9000,38.25,5",
    "Chase Elliott,8000,36.0,10",
    "Ross Chastain,7000,30.5,18",
    "Chris Buescher,6000,28.0,25",
]


def _drivers_csv(tmp_path: Path, rows: list[str] = DRIVER_ROWS) -> Path:
    path = tmp_path / "drivers.csv"
    path.write_text("\n".join(rows) + "\n", encoding="utf-8")
    return path


def test_cli_prints_prediction_and_writes_outputs(tmp_path: Path, capsys):
    drivers = _drivers_csv(tmp_path)
    output = tmp_path / "lineup.csv"
    report = tmp_path / "report.json"

    code = main([
        str(drivers),
        "--differential-weight",
        "2.0",
        "--output",
        str(output),
        "--report",
        str(report),
    ])

    assert code == EXIT_OK
    out = capsys.readouterr().out
    assert "Prediction (Total Salary: $50000, Combined Score: 576.25)" in out
    assert "Kyle Larson - Start: P1" in out
    assert output.read_text(encoding="utf-8").startswith("name,start_pos,salary")
    assert json.loads(report.read_text(encoding="utf-8"))["total_score"] == 576.25


def test_cli_resolves_track_weight(tmp_path: Path):
    drivers = _drivers_csv(tmp_path)
    report = tmp_path / "report.json"

    code = main([str(drivers), "--track", "Iowa Speedway", "--report", str(report)])

    assert code == EXIT_OK
    assert json.loads(report.read_text(encoding="utf-8"))["differential_weight"] == 1.6


def test_cli_uses_weight_profile(tmp_path: Path):
    drivers = _drivers_csv(tmp_path)
    profile = tmp_path / "weights.json"
    profile.write_text(json.dumps({"default": 0.25, "weights": {"Home Oval": 3.0}}), encoding="utf-8")
    report = tmp_path / "report.json"

    code = main([str(drivers), "--weights", str(profile), "--track", "Elsewhere", "--report", str(report)])

    assert code == EXIT_OK
    assert json.loads(report.read_text(encoding="utf-8"))["differential_weight"] == 0.25


def test_cli_saves_weight_profile(tmp_path: Path):
    drivers = _drivers_csv(tmp_path)
    saved = tmp_path / "saved.json"

    assert main([str(drivers), "--save-weights", str(saved)]) == EXIT_OK
    assert json.loads(saved.read_text(encoding="utf-8"))["weights"]["Iowa Speedway"] == 1.6


def test_cli_reports_infeasible(tmp_path: Path, capsys):
    drivers = _drivers_csv(tmp_path)

    code = main([str(drivers), "--salary-cap", "1000", "--strategy", "bound"])

    assert code == EXIT_INFEASIBLE
    assert "No lineup found" in capsys.readouterr().out


def test_cli_rejects_invalid_configuration(tmp_path: Path, capsys):
    drivers = _drivers_csv(tmp_path)

    code = main([str(drivers), "--field-size", "0"])

    assert code == EXIT_USAGE
    assert "field_size" in capsys.readouterr().err


def test_cli_rejects_missing_file(tmp_path: Path):
    assert main([str(tmp_path / "missing.csv")]) == EXIT_USAGE


def test_cli_rejects_malformed_weight_profile(tmp_path: Path, capsys):
    drivers = _drivers_csv(tmp_path)
    profile = tmp_path / "weights.json"
    profile.write_text(json.dumps([1, 2]), encoding="utf-8")

    code = main([str(drivers), "--weights", str(profile)])

    assert code == EXIT_USAGE
    assert "JSON object" in capsys.readouterr().err
