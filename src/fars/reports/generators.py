"""
FARS Report Generator (Imperative Shell)

Thin orchestration layer: calls reader.py to load accident files, calls
the functional core to summarise / filter, calls plotting to build
figures, and optionally writes CSV / HTML.

Package Location: src/fars/reports/generators.py

Usage::

    from fars import summarize_years, map_state

    table = summarize_years([2013, 2014, 2015])
    fig = map_state(1, 2013, show=False)

    from pathlib import Path
    from fars.reports.generators import ReportGenerator

    gen = ReportGenerator(data_dir=Path("data"), output_dir=Path("out"))
    gen.write_summary([2013, 2014])      # out/fars_summary_2013-2014.csv
    gen.write_state_map(1, 2013)         # out/fars_state_1_2013.html
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import pandas as pd
import plotly.graph_objects as go

from ..data import reader
from ..analysis.summary import summarize_frames
from ..analysis.state import (
    bounding_box,
    check_state,
    scrub_coordinates,
    select_state,
)
from ..plotting.state_map import plot_state_map
from ..utils.coerce import as_integer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def summarize_years(
    years: Iterable[Any],
    data_dir: Optional[PathLike] = None,
) -> pd.DataFrame:
    """
    Monthly accident counts for each requested year.

    Years whose file is missing or unreadable are logged as
    ``invalid year: <year>`` warnings and left out; the remaining years
    are unaffected.

    Args:
        years: Years as numbers or numeric strings.
        data_dir: Directory holding ``accident_<year>.csv.bz2`` files
            (default: working directory).

    Returns:
        DataFrame indexed by ``MONTH`` (1..12) with one nullable-integer
        column per valid year, in request order.
    """
    if pd.api.types.is_scalar(years):
        years = [years]
    frames = reader.read_years(years, data_dir=data_dir)
    return summarize_frames(frames, year_col=reader.YEAR_COLUMN)


def map_state(
    state_code: Any,
    year: Any,
    data_dir: Optional[PathLike] = None,
    show: bool = True,
) -> Optional[go.Figure]:
    """
    Plot one year's accident locations for one state.

    Args:
        state_code: FARS state code (number or numeric string).
        year: A single year.  Sequences are rejected.
        data_dir: Directory holding the accident files.
        show: Call ``fig.show()`` before returning.

    Returns:
        The map figure, or ``None`` when the state has no accidents to
        plot (an info message is logged; this is not an error).

    Raises:
        FileNotFoundError: If the year's file does not exist.
        fars.analysis.state.InvalidStateError: If *state_code* does not
            occur in the year's STATE column.
        fars.data.reader.SchemaError: If required columns are missing.
        TypeError: If *year* is a list / tuple / Series.
    """
    if isinstance(year, (list, tuple, set, pd.Series)):
        raise TypeError("map_state takes a single year, not a sequence of years")

    year_int = as_integer(year)
    data = reader.load_state_table(year_int, data_dir=data_dir)
    code = check_state(data, state_code)

    df_state = select_state(data, code)
    if df_state.empty:
        logger.info("no accidents to plot", extra={"state": code, "year": year_int})
        return None

    df_state = scrub_coordinates(df_state)
    bbox = bounding_box(df_state)
    if bbox is None:
        logger.warning(
            "State %s has no valid coordinates in %s; showing full extent",
            code,
            year_int,
        )

    fig = plot_state_map(df_state, state_code=code, year=year_int, bbox=bbox)
    if show:
        fig.show()
    return fig


# ---------------------------------------------------------------------------
# File output
# ---------------------------------------------------------------------------

class ReportGenerator:
    """
    Writes FARS summaries and state maps to an output directory.

    Responsibilities
    ----------------
    - Delegate all file reading to ``reader.py`` via the entry points.
    - Write the summary table as CSV and maps as standalone HTML.

    Args:
        data_dir: Directory holding the accident files (``None`` = cwd).
        output_dir: Directory for generated files; created on demand.
    """

    def __init__(
        self,
        data_dir: Optional[PathLike] = None,
        output_dir: PathLike = ".",
    ) -> None:
        self.data_dir = Path(data_dir) if data_dir is not None else None
        self.output_dir = Path(output_dir)

    def write_summary(self, years: Iterable[Any]) -> Path:
        """
        Summarise *years* and save ``fars_summary_<y1>-<yn>.csv``.

        Returns:
            Path of the written CSV.
        """
        table = summarize_years(list(years), data_dir=self.data_dir)
        return self.save_summary(table)

    def save_summary(self, table: pd.DataFrame) -> Path:
        """Write an already computed summary table to CSV."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        label = '-'.join(str(y) for y in table.columns) or 'empty'
        out_path = self.output_dir / f'fars_summary_{label}.csv'
        table.to_csv(out_path)
        logger.info("Summary saved → %s", out_path)
        return out_path

    def write_state_map(self, state_code: Any, year: Any) -> Optional[Path]:
        """
        Build the state map and save ``fars_state_<code>_<year>.html``.

        Returns:
            Path of the written HTML, or ``None`` when there was nothing
            to plot.
        """
        fig = map_state(state_code, year, data_dir=self.data_dir, show=False)
        if fig is None:
            return None

        self.output_dir.mkdir(parents=True, exist_ok=True)
        out_path = (
            self.output_dir
            / f'fars_state_{as_integer(state_code)}_{as_integer(year)}.html'
        )
        fig.write_html(str(out_path))
        logger.info("State map saved → %s", out_path)
        return out_path
