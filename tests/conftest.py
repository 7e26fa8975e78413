"""Shared fixtures: tiny FARS accident files written to a temp directory."""

from pathlib import Path

import pandas as pd
import pytest


def write_accidents(directory: Path, year: int, rows: list, compression: str = "bz2") -> Path:
    """Write *rows* of (STATE, MONTH, LATITUDE, LONGITUD) as a FARS file."""
    df = pd.DataFrame(rows, columns=["STATE", "MONTH", "LATITUDE", "LONGITUD"])
    # Extra columns the code must pass through untouched.
    df.insert(0, "ST_CASE", list(range(10001, 10001 + len(df))))
    df["FATALS"] = 1
    df["CITY"] = "N/A"
    suffix = ".csv.bz2" if compression == "bz2" else ".csv"
    path = directory / f"accident_{year}{suffix}"
    df.to_csv(path, index=False, compression=compression if compression == "bz2" else None)
    return path


@pytest.fixture
def data_dir(tmp_path):
    """Directory holding accident_2013 and accident_2014 files."""
    write_accidents(tmp_path, 2013, [
        (1, 3, 40.0, -75.0),
        (1, 3, 41.0, -74.0),
        (2, 5, 36.0, -80.0),
    ])
    write_accidents(tmp_path, 2014, [
        (1, 1, 40.5, -75.5),
        (1, 1, 99.9999, 999.9999),
        (1, 2, 45.0, 999.9999),
        (1, 12, 99.9999, -60.0),
        (6, 7, 34.0, -118.0),
    ])
    return tmp_path


@pytest.fixture
def in_data_dir(data_dir, monkeypatch):
    """Run the test with the accident files in the working directory."""
    monkeypatch.chdir(data_dir)
    return data_dir
