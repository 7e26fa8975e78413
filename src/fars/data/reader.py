"""
FARS Data Reader (Imperative Shell)

Locates and parses the yearly FARS accident files and reduces them to
the columns the functional core needs.

Package Location: src/fars/data/reader.py

File convention:
   One file per year named ``accident_<year>.csv.bz2`` in the working
   directory (or in an explicit ``data_dir``).  pandas infers the bz2
   compression from the suffix, so plain ``.csv`` files read the same way.

Failure isolation:
   ``read_accidents`` raises on a missing file.  ``load_years`` converts
   every per-year failure into a ``YearResult`` with ``data=None`` and
   ``read_years`` logs one ``invalid year`` warning per failure, so a bad
   year never aborts the rest of the batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

import pandas as pd

from ..utils.coerce import as_integer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
FILENAME_TEMPLATE: str = "accident_{year}.csv.bz2"

# Column holding the year a row was loaded for (not present in the files).
YEAR_COLUMN: str = "year"

# Columns each consumer needs; the files carry many more which pass through.
SUMMARY_COLUMNS: List[str] = ["MONTH"]
MAP_COLUMNS: List[str] = ["STATE", "LATITUDE", "LONGITUD"]

PathLike = Union[str, Path]


class SchemaError(ValueError):
    """
    Raised when an accident table lacks a required column, or a required
    column cannot be interpreted as numeric.
    """
    pass


@dataclass
class YearResult:
    """Outcome of loading one requested year.

    Attributes:
        year:  The year as requested (number or string, uncoerced).
        data:  ``MONTH`` / ``year`` table on success, ``None`` on failure.
        error: Failure description, ``None`` on success.
    """

    year: Any
    data: Optional[pd.DataFrame] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def make_filename(year: Any) -> str:
    """
    Build the canonical FARS file name for *year*.

    The year is truncated to an integer first, so ``2013``, ``"2013"`` and
    ``2013.7`` all give ``accident_2013.csv.bz2``.  No range check is
    applied.

    Raises:
        ValueError: If *year* is not numeric.
    """
    return FILENAME_TEMPLATE.format(year=as_integer(year))


def read_accidents(filename: PathLike) -> pd.DataFrame:
    """
    Parse one FARS accident file into a DataFrame.

    Column names and pandas-inferred dtypes are preserved; no schema
    validation happens here.  ``low_memory=False`` keeps the parser from
    emitting mixed-dtype warnings on the wide FARS files.

    Args:
        filename: Path to a ``.csv`` or ``.csv.bz2`` file.

    Returns:
        DataFrame with one row per accident.

    Raises:
        FileNotFoundError: If no file exists at *filename*.
    """
    path = Path(filename)
    if not path.is_file():
        raise FileNotFoundError(f"file '{filename}' does not exist")

    df = pd.read_csv(path, compression="infer", low_memory=False)
    logger.debug("Read %d rows from %s", len(df), path)
    return df


def validate_columns(df: pd.DataFrame, required: Sequence[str]) -> pd.DataFrame:
    """
    Check that *required* columns exist and are numeric.

    Returns a copy in which each required column has been converted with
    ``pd.to_numeric``.  Blank cells become NaN; any other non-numeric
    value is a schema failure.

    Raises:
        SchemaError: Listing the missing columns, or naming the first
            column that holds non-numeric values.
    """
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise SchemaError(f"accident table is missing required columns: {missing}")

    df = df.copy()
    for col in required:
        try:
            df[col] = pd.to_numeric(df[col], errors="raise")
        except (TypeError, ValueError) as exc:
            raise SchemaError(f"column '{col}' is not numeric: {exc}") from exc
    return df


def load_years(
    years: Iterable[Any],
    data_dir: Optional[PathLike] = None,
) -> List[YearResult]:
    """
    Load the ``MONTH`` column of every requested year, tagged by year.

    Each year is handled independently: filename building, reading and
    schema validation failures are captured on its ``YearResult`` rather
    than raised.  Nothing is logged here; see ``read_years``.

    Args:
        years: Years as numbers or numeric strings.
        data_dir: Directory holding the files.  Defaults to the working
            directory.

    Returns:
        One ``YearResult`` per input year, in input order.  Successful
        results hold a two-column DataFrame ``[MONTH, year]`` whose
        ``year`` column is the integer year.
    """
    results: List[YearResult] = []
    for year in years:
        try:
            year_int = as_integer(year)
            path = _resolve_path(make_filename(year_int), data_dir)
            df = validate_columns(read_accidents(path), SUMMARY_COLUMNS)
        except Exception as exc:
            results.append(YearResult(year=year, error=str(exc)))
            continue

        df[YEAR_COLUMN] = year_int
        results.append(YearResult(year=year, data=df[["MONTH", YEAR_COLUMN]]))
    return results


def read_years(
    years: Iterable[Any],
    data_dir: Optional[PathLike] = None,
) -> List[Optional[pd.DataFrame]]:
    """
    Load several years, warning about and skipping the ones that fail.

    Args:
        years: Years as numbers or numeric strings.
        data_dir: Directory holding the files (default: working directory).

    Returns:
        List the same length and order as *years*.  Each entry is the
        ``[MONTH, year]`` table for that year, or ``None`` when the year
        could not be loaded.
    """
    tables: List[Optional[pd.DataFrame]] = []
    for result in load_years(years, data_dir=data_dir):
        if not result.ok:
            logger.warning(
                "invalid year: %s",
                result.year,
                extra={"year": str(result.year), "reason": result.error},
            )
        tables.append(result.data)
    return tables


def load_state_table(year: Any, data_dir: Optional[PathLike] = None) -> pd.DataFrame:
    """
    Read the full accident table for one year, ready for state mapping.

    Unlike ``read_years`` nothing is caught: a missing file propagates as
    ``FileNotFoundError``.

    Raises:
        FileNotFoundError: If the year's file does not exist.
        SchemaError: If STATE / LATITUDE / LONGITUD are missing or
            non-numeric.
    """
    path = _resolve_path(make_filename(year), data_dir)
    return validate_columns(read_accidents(path), MAP_COLUMNS)


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _resolve_path(filename: str, data_dir: Optional[PathLike]) -> Path:
    """Join *filename* onto *data_dir*, or leave it relative to cwd."""
    if data_dir is None:
        return Path(filename)
    return Path(data_dir) / filename
