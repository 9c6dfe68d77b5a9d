from pathlib import Path

import pytest

from racedfs.ingest import DriverRow, load_driver_csv, load_records_from_csv, rows_to_records


def _write_csv(path: Path, lines: list[str]) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def _row(**kwargs) -> DriverRow:
    return DriverRow.from_mapping(kwargs, {})


def test_load_records_from_default_columns(tmp_path: Path):
    path = _write_csv(
        tmp_path / "drivers.csv",
        [
            "Name,Salary,AvgPointsPerGame,StartPos",
            "Kyle Larson,10000,45.5,1",
            'Denny Hamlin,"$9,500",42.25,3',
            "Chris Buescher,6000,,25",
        ],
    )

    records = load_records_from_csv(path)

    assert [record.name for record in records] == ["Kyle Larson", "Denny Hamlin", "Chris Buescher"]
    assert records[1].salary == 9500
    assert records[1].avg_points_per_game == pytest.approx(42.25)
    assert records[2].avg_points_per_game == pytest.approx(0.0)
    assert records[0].metadata["source_row"] == 2


def test_load_driver_csv_custom_mapping(tmp_path: Path):
    path = _write_csv(
        tmp_path / "custom.csv",
        [
            "First,Last,Cost,FPPG,Grid",
            "Chase,Elliott,8000,36.0,P10",
        ],
    )

    rows = load_driver_csv(
        path,
        mapping={
            "name": "First|Last",
            "salary": "Cost",
            "avg_points_per_game": "FPPG",
            "start_pos": "Grid",
        },
    )
    records = rows_to_records(rows)

    assert records[0].name == "Chase Elliott"
    assert records[0].start_pos == 10
    assert records[0].salary == 8000


def test_rows_to_records_keeps_first_duplicate():
    rows = [
        _row(Name="Ross Chastain", Salary="7000", AvgPointsPerGame="30.5", StartPos="18"),
        _row(Name="Ross  Chastain", Salary="9000", AvgPointsPerGame="1.0", StartPos="2"),
    ]

    records = rows_to_records(rows)

    assert len(records) == 1
    assert records[0].salary == 7000


def test_rows_to_records_skips_blank_names():
    rows = [
        _row(Name="", Salary="7000", AvgPointsPerGame="30.5", StartPos="18"),
        _row(Name="William Byron", Salary="9000", AvgPointsPerGame="38.25", StartPos="5"),
    ]

    records = rows_to_records(rows)
    assert [record.name for record in records] == ["William Byron"]


@pytest.mark.parametrize(
    "field, value",
    [
        ("Salary", "n/a"),
        ("AvgPointsPerGame", "fast"),
        ("StartPos", "0"),
        ("StartPos", ""),
        ("Salary", "-5000"),
    ],
)
def test_rows_to_records_rejects_bad_values(field, value):
    raw = {"Name": "Bad Row", "Salary": "5000", "AvgPointsPerGame": "10", "StartPos": "12"}
    raw[field] = value

    with pytest.raises(ValueError, match="Bad Row"):
        rows_to_records([_row(**raw)])
