"""Tests for fars.data.reader: filenames, file reading and year loading."""

import logging
import re

import pandas as pd
import pytest

from conftest import write_accidents
from fars import summarize_years
from fars.data.reader import (
    SchemaError,
    load_state_table,
    load_years,
    make_filename,
    read_accidents,
    read_years,
    validate_columns,
)


class TestMakeFilename:
    @pytest.mark.parametrize("year", [2013, "2013", 2013.0, 2013.7, "2013.9", " 2013 "])
    def test_coerces_to_truncated_integer(self, year):
        assert make_filename(year) == "accident_2013.csv.bz2"

    @pytest.mark.parametrize("year", [1975, 0, -4, 30000])
    def test_any_integer_accepted(self, year):
        name = make_filename(year)
        assert re.fullmatch(r"accident_-?\d+\.csv\.bz2", name)
        assert name == make_filename(int(year))

    @pytest.mark.parametrize("year", ["twenty", "", None, float("nan")])
    def test_non_numeric_rejected(self, year):
        with pytest.raises(ValueError):
            make_filename(year)


class TestReadAccidents:
    def test_missing_file_names_the_file(self, tmp_path):
        missing = tmp_path / "accident_1899.csv.bz2"
        with pytest.raises(FileNotFoundError, match=re.escape(str(missing))):
            read_accidents(missing)

    def test_missing_relative_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(FileNotFoundError, match="accident_2099.csv.bz2"):
            read_accidents("accident_2099.csv.bz2")

    def test_reads_bz2_and_keeps_all_columns(self, data_dir):
        df = read_accidents(data_dir / "accident_2013.csv.bz2")
        assert list(df.columns) == [
            "ST_CASE", "STATE", "MONTH", "LATITUDE", "LONGITUD", "FATALS", "CITY",
        ]
        assert len(df) == 3
        assert pd.api.types.is_integer_dtype(df["STATE"])
        assert pd.api.types.is_float_dtype(df["LATITUDE"])

    def test_reads_plain_csv(self, tmp_path):
        path = write_accidents(tmp_path, 2010, [(4, 8, 33.0, -112.0)], compression="none")
        df = read_accidents(path)
        assert df.loc[0, "STATE"] == 4


class TestValidateColumns:
    def test_missing_columns(self):
        df = pd.DataFrame({"STATE": [1]})
        with pytest.raises(SchemaError, match="MONTH"):
            validate_columns(df, ["STATE", "MONTH"])

    def test_non_numeric_column(self):
        df = pd.DataFrame({"MONTH": ["March"]})
        with pytest.raises(SchemaError, match="MONTH"):
            validate_columns(df, ["MONTH"])

    def test_numeric_strings_converted(self):
        df = pd.DataFrame({"MONTH": ["3", "4"]})
        out = validate_columns(df, ["MONTH"])
        assert out["MONTH"].tolist() == [3, 4]
        assert df["MONTH"].tolist() == ["3", "4"]


class TestLoadYears:
    def test_tags_rows_with_integer_year(self, data_dir):
        (result,) = load_years(["2013"], data_dir=data_dir)
        assert result.ok
        assert result.error is None
        assert list(result.data.columns) == ["MONTH", "year"]
        assert result.data["year"].tolist() == [2013, 2013, 2013]
        assert result.data["MONTH"].tolist() == [3, 3, 5]

    def test_failures_are_captured_not_raised(self, data_dir):
        results = load_years([2013, 2099, "abc"], data_dir=data_dir)
        assert [r.ok for r in results] == [True, False, False]
        assert "accident_2099.csv.bz2" in results[1].error
        assert results[2].year == "abc"

    def test_uses_working_directory_by_default(self, in_data_dir):
        (result,) = load_years([2014])
        assert len(result.data) == 5


class TestReadYears:
    def test_placeholder_and_single_warning(self, data_dir, caplog):
        with caplog.at_level(logging.WARNING, logger="fars"):
            tables = read_years([2099, 2013], data_dir=data_dir)

        assert len(tables) == 2
        assert tables[0] is None
        assert len(tables[1]) == 3

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].getMessage() == "invalid year: 2099"
        assert warnings[0].year == "2099"

    def test_all_valid_no_warnings(self, data_dir, caplog):
        with caplog.at_level(logging.WARNING, logger="fars"):
            tables = read_years([2013, 2014], data_dir=data_dir)
        assert all(t is not None for t in tables)
        assert not caplog.records

    def test_file_without_month_is_an_invalid_year(self, tmp_path, caplog):
        pd.DataFrame({"STATE": [1]}).to_csv(
            tmp_path / "accident_2001.csv.bz2", index=False, compression="bz2"
        )
        with caplog.at_level(logging.WARNING, logger="fars"):
            tables = read_years([2001], data_dir=tmp_path)
        assert tables == [None]
        assert "invalid year: 2001" in caplog.text


class TestLoadStateTable:
    def test_missing_year_propagates(self, data_dir):
        with pytest.raises(FileNotFoundError, match="accident_2020.csv.bz2"):
            load_state_table(2020, data_dir=data_dir)

    def test_full_table_returned(self, data_dir):
        df = load_state_table(2014, data_dir=data_dir)
        assert len(df) == 5
        assert "FATALS" in df.columns


class TestCorruptFiles:
    def test_truncated_bz2_is_an_invalid_year(self, data_dir, caplog):
        good = (data_dir / "accident_2013.csv.bz2").read_bytes()
        (data_dir / "accident_2015.csv.bz2").write_bytes(good[: len(good) // 2])

        with caplog.at_level(logging.WARNING, logger="fars"):
            tables = read_years([2013, 2015], data_dir=data_dir)

        assert tables[1] is None
        assert len(tables[0]) == 3
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert [w.getMessage() for w in warnings] == ["invalid year: 2015"]

    def test_truncated_bz2_does_not_abort_summary(self, data_dir, caplog):
        good = (data_dir / "accident_2013.csv.bz2").read_bytes()
        (data_dir / "accident_2015.csv.bz2").write_bytes(good[: len(good) // 2])

        with caplog.at_level(logging.WARNING, logger="fars"):
            table = summarize_years([2013, 2015], data_dir=data_dir)

        assert table.columns.tolist() == [2013]
        assert table.loc[3, 2013] == 2
        assert caplog.text.count("invalid year: 2015") == 1

    def test_garbage_file_captured_by_load_years(self, tmp_path):
        (tmp_path / "accident_2016.csv.bz2").write_bytes(b"not a bzip2 stream")
        (result,) = load_years([2016], data_dir=tmp_path)
        assert not result.ok
        assert result.error
