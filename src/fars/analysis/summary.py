"""
FARS Monthly Summary (Functional Core)

Pure functions only. No I/O, no side effects.
Input is the list produced by ``fars.data.reader.read_years``; output is
a wide DataFrame of accident counts.

Package Location: src/fars/analysis/summary.py

Reduction:
    1. Concatenate the per-year ``[MONTH, year]`` tables, skipping ``None``
       placeholders left by years that failed to load.
    2. Count rows per ``(year, MONTH)``.
    3. Materialise one row per month 1..12 and one column per year, in
       the order the years were first seen.  Absent combinations are
       ``<NA>`` (nullable ``Int64``), never zero.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

MONTHS: List[int] = list(range(1, 13))


def summarize_frames(
    frames: Iterable[Optional[pd.DataFrame]],
    year_col: str = "year",
) -> pd.DataFrame:
    """
    Pivot per-year month tables into a month x year count table.

    A year appearing in more than one frame is counted once, from the
    first frame holding it; later rows for that year are dropped.

    Args:
        frames: Per-year DataFrames with columns ``MONTH`` and *year_col*,
            or ``None`` entries which are ignored.
        year_col: Name of the year tag column.

    Returns:
        DataFrame indexed by ``MONTH`` (1..12) with one ``Int64`` column
        per distinct year.  Columns are plain integers (e.g. ``2013``).
        With no usable frames the table has the twelve month rows and no
        columns.

    Raises:
        ValueError: If a frame lacks ``MONTH`` or *year_col*.
    """
    years: List[int] = []
    kept: List[pd.DataFrame] = []
    for df in frames:
        if df is None:
            continue
        missing = [c for c in ("MONTH", year_col) if c not in df.columns]
        if missing:
            raise ValueError(f"frame is missing required columns: {missing}")

        frame_years = [int(y) for y in pd.unique(df[year_col].dropna())]
        new_years = [y for y in frame_years if y not in years]
        if frame_years and not new_years:
            continue
        rows = df.loc[df[year_col].isin(new_years), ["MONTH", year_col]]
        years.extend(new_years)
        kept.append(rows)

    counts = _count_by_year_month(kept, year_col)

    table = pd.DataFrame(
        {year: [counts.get((year, month), pd.NA) for month in MONTHS] for year in years},
        index=pd.Index(MONTHS, name="MONTH"),
        dtype="Int64",
    )
    table.columns.name = year_col
    return table


def _count_by_year_month(
    frames: List[pd.DataFrame],
    year_col: str,
) -> Dict[Tuple[int, int], int]:
    """Return ``{(year, month): row_count}`` across *frames*."""
    if not frames:
        return {}

    combined = pd.concat(frames, ignore_index=True)
    combined = combined.dropna(subset=["MONTH", year_col])
    if combined.empty:
        return {}

    combined["MONTH"] = combined["MONTH"].astype(int)
    combined[year_col] = combined[year_col].astype(int)

    sizes = combined.groupby([year_col, "MONTH"]).size()
    return {(int(y), int(m)): int(n) for (y, m), n in sizes.items()}
