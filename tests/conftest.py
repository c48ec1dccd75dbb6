"""Pytest configuration and shared fixtures."""

import csv
from collections.abc import Callable
from pathlib import Path

import pytest

from f1flat.config.settings import LoaderSettings, LoadConfig, PathsConfig

NULL = r"\N"
URL = "http://en.wikipedia.org/wiki/"

CsvTable = tuple[list[str], list[list[str]]]


def _dataset() -> dict[str, CsvTable]:
    """A tiny, referentially consistent copy of the dataset's 14 files."""
    return {
        "circuits.csv": (
            ["circuitId", "circuitRef", "name", "location", "country", "lat", "lng", "alt", "url"],
            [
                ["1", "albert_park", "Albert Park Grand Prix Circuit", "Melbourne", "Australia", "-37.8497", "144.968", "10", URL + "Melbourne"],
                ["7", "villeneuve", "Circuit Gilles Villeneuve", "Montreal", "Canada", "45.5", "-73.5228", NULL, URL + "Montreal"],
            ],
        ),
        "constructors.csv": (
            ["constructorId", "constructorRef", "name", "nationality", "url"],
            [
                ["1", "mclaren", "McLaren", "British", URL + "McLaren"],
                ["6", "ferrari", "Ferrari", "Italian", URL + "Ferrari"],
            ],
        ),
        "drivers.csv": (
            ["driverId", "driverRef", "number", "code", "forename", "surname", "dob", "nationality", "url"],
            [
                ["1", "hamilton", "44", "HAM", "Lewis", "Hamilton", "1985-01-07", "British", URL + "Hamilton"],
                ["2", "heidfeld", NULL, NULL, "Nick", "Heidfeld", "1977-05-10", "German", URL + "Heidfeld"],
            ],
        ),
        "seasons.csv": (
            ["year", "url"],
            [
                ["2009", URL + "2009"],
                ["2021", "http://example.com/2021"],
            ],
        ),
        "races.csv": (
            ["raceId", "year", "round", "circuitId", "name", "date", "time", "url",
             "fp1_date", "fp1_time", "fp2_date", "fp2_time", "fp3_date", "fp3_time",
             "quali_date", "quali_time", "sprint_date", "sprint_time"],
            [
                ["1", "2009", "1", "1", "Australian Grand Prix", "2009-03-29", "06:00:00", URL + "2009_AUS"]
                + [NULL] * 10,
                ["1050", "2021", "7", "7", "Canadian Grand Prix", "2021-06-13", NULL, URL + "2021_CAN",
                 "2021-06-11", "18:00:00", "2021-06-11", "21:00:00", "2021-06-12", "17:30:00",
                 "2021-06-12", "21:00:00", "2021-06-12", "20:30:00"],
            ],
        ),
        "status.csv": (
            ["statusId", "status"],
            [["1", "Finished"], ["4", "Collision"], ["11", "+1 Lap"]],
        ),
        "constructor_results.csv": (
            ["constructorResultsId", "raceId", "constructorId", "points", "status"],
            [["1", "1", "1", "14", NULL], ["2", "1", "6", "0", "D"]],
        ),
        "constructor_standings.csv": (
            ["constructorStandingsId", "raceId", "constructorId", "points", "position", "positionText", "wins"],
            [["1", "1", "1", "14", "1", "1", "1"], ["2", "1", "6", "0", "2", "2", "0"]],
        ),
        "driver_standings.csv": (
            ["driverStandingsId", "raceId", "driverId", "points", "position", "positionText", "wins"],
            [["1", "1", "1", "10", "1", "1", "1"], ["2", "1", "2", "8", "2", "2", "0"]],
        ),
        "lap_times.csv": (
            ["raceId", "driverId", "lap", "position", "time", "milliseconds"],
            [
                ["1", "1", "1", "1", "1:38.109", "98109"],
                ["1", "1", "2", "1", "1:33.006", "93006"],
                ["1", "2", "1", "2", "1:39.000", "99000"],
                ["1050", "1", "1", "3", "1:20.500", "80500"],
                ["1050", "2", "1", "4", "1:21.250", "81250"],
            ],
        ),
        "pit_stops.csv": (
            ["raceId", "driverId", "stop", "lap", "time", "duration", "milliseconds"],
            [
                ["1", "1", "1", "16", "17:28:24", "23.227", "23227"],
                ["1050", "2", "1", "10", "20:49:51", "24.055", "24055"],
            ],
        ),
        "qualifying.csv": (
            ["qualifyId", "raceId", "driverId", "constructorId", "number", "position", "q1", "q2", "q3"],
            [
                ["1", "1", "1", "1", "22", "1", "1:26.572", "1:25.187", "1:26.714"],
                ["2", "1", "2", "6", "6", "2", "1:26.103", NULL, NULL],
            ],
        ),
        "results.csv": (
            ["resultId", "raceId", "driverId", "constructorId", "number", "grid", "position",
             "positionText", "positionOrder", "points", "laps", "time", "milliseconds",
             "fastestLap", "rank", "fastestLapTime", "fastestLapSpeed", "statusId"],
            [
                ["1", "1", "1", "1", "22", "1", "1", "1", "1", "10", "58", "1:34:50.616",
                 "5690616", "39", "2", "1:27.452", "218.300", "1"],
                ["2", "1", "2", "6", "6", "5", NULL, "R", "2", "0", "30", NULL,
                 NULL, NULL, NULL, NULL, NULL, "4"],
            ],
        ),
        "sprint_results.csv": (
            ["resultId", "raceId", "driverId", "constructorId", "number", "grid", "position",
             "positionText", "positionOrder", "points", "laps", "time", "milliseconds",
             "fastestLap", "fastestLapTime", "statusId"],
            [
                ["1", "1050", "1", "1", "44", "2", "1", "1", "1", "3", "17", "25:38.426",
                 "1538426", "14", "1:30.013", "1"],
                ["2", "1050", "2", "6", "5", "3", NULL, "R", "2", "0", "10", NULL,
                 NULL, NULL, NULL, "4"],
            ],
        ),
    }


def write_table(path: Path, header: list[str], rows: list[list[str]]) -> Path:
    """Write a CSV file the way the dataset ships it."""
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)
    return path


@pytest.fixture
def dataset() -> dict[str, CsvTable]:
    """Header and rows for every dataset file, keyed by file name."""
    return _dataset()


@pytest.fixture
def write_csv() -> Callable[[Path, list[str], list[list[str]]], Path]:
    """Return a helper writing a CSV file with a header row."""
    return write_table


@pytest.fixture
def source_dir(tmp_path: Path, dataset: dict[str, CsvTable]) -> Path:
    """Directory populated with all 14 dataset CSVs."""
    directory = tmp_path / "csv"
    directory.mkdir()
    for name, (header, rows) in dataset.items():
        write_table(directory / name, header, rows)
    return directory


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    """Store location inside a not yet existing directory."""
    return tmp_path / "out" / "f1.sqlite"


@pytest.fixture
def settings(source_dir: Path, output_path: Path) -> LoaderSettings:
    """Loader settings with small batches so every file spans several of them."""
    return LoaderSettings(
        paths=PathsConfig(source_dir=source_dir, output=output_path),
        load=LoadConfig(batch_size=2, progress_every=0),
    )


@pytest.fixture
def first_record(dataset: dict[str, CsvTable]) -> Callable[[str], dict[str, str]]:
    """Return a helper giving the first raw record of a dataset file."""

    def _first(csv_file: str) -> dict[str, str]:
        header, rows = dataset[csv_file]
        return dict(zip(header, rows[0], strict=True))

    return _first
