"""
FARS State Accident Map (Functional Core)

Pure function – no file I/O, no side effects.
Input: one state's accidents (sentinels already scrubbed) + bounding box.
Output: plotly.graph_objects.Figure.

Package Location: src/fars/plotting/state_map.py

Base layer:
    US state boundaries come from plotly's built-in geo subunits
    (``showsubunits``) on a Mercator projection, clipped to the bounding
    box via the geo lat/lon axis ranges.  When no bounding box is
    available the full continental extent is shown instead.

Markers:
    One small dot per accident at (LONGITUD, LATITUDE).  Rows whose
    coordinates are NaN are left out of the trace.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd
import plotly.graph_objects as go

from ..analysis.state import BoundingBox, state_name

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_MARKER_STYLE: Dict[str, Any] = {
    'color': 'black',
    'size': 3,
    'symbol': 'circle',
    'opacity': 0.8,
}

_BOUNDARY_COLOR: str = 'dimgray'

# Half-width in degrees given to an axis whose min equals its max.
_MIN_HALF_SPAN: float = 0.5

# Hover fields shown when the column exists in the data.
_HOVER_FIELDS = ('ST_CASE', 'MONTH', 'DAY', 'FATALS')


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def plot_state_map(
    df_state: pd.DataFrame,
    state_code: int,
    year: int,
    bbox: Optional[BoundingBox],
) -> go.Figure:
    """
    Build the accident-location map for one state and year.

    Args:
        df_state: Accidents for a single state with numeric ``LATITUDE``
            and ``LONGITUD`` columns; sentinel values must already be NaN.
        state_code: FARS state code (used for the title).
        year: Data year (used for the title).
        bbox: Extent to clip the boundary layer to, or ``None`` for the
            default continental view.

    Returns:
        ``plotly.graph_objects.Figure`` ready for ``fig.show()`` or
        serialisation.
    """
    df = df_state.dropna(subset=['LATITUDE', 'LONGITUD'])

    fig = go.Figure()
    fig.add_trace(go.Scattergeo(
        lon=df['LONGITUD'],
        lat=df['LATITUDE'],
        mode='markers',
        marker=dict(_MARKER_STYLE),
        name='Accident',
        showlegend=False,
        text=_hover_text(df),
        hovertemplate=(
            '%{text}<br>'
            'Lat: %{lat:.4f}<br>'
            'Lon: %{lon:.4f}<extra></extra>'
        ),
    ))

    geo = dict(
        scope='north america',
        projection_type='mercator',
        resolution=50,
        showsubunits=True,
        subunitcolor=_BOUNDARY_COLOR,
        subunitwidth=1,
        showcountries=True,
        countrycolor=_BOUNDARY_COLOR,
        showland=True,
        landcolor='white',
        showlakes=False,
    )
    if bbox is not None:
        geo['lataxis_range'] = _axis_range(bbox.lat_min, bbox.lat_max)
        geo['lonaxis_range'] = _axis_range(bbox.lon_min, bbox.lon_max)

    fig.update_geos(**geo)
    fig.update_layout(
        title=f'{state_name(state_code)} – Fatal Accidents {year} (n={len(df)})',
        margin=dict(l=10, r=10, t=50, b=10),
        template='plotly_white',
    )
    return fig


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _hover_text(df: pd.DataFrame) -> list[str]:
    """One hover label per row built from whichever ``_HOVER_FIELDS`` exist."""
    fields = [f for f in _HOVER_FIELDS if f in df.columns]
    if not fields:
        return ['Accident'] * len(df)
    return [
        '<br>'.join(f'{f}: {row[f]}' for f in fields)
        for _, row in df[fields].iterrows()
    ]


def _axis_range(lo: float, hi: float) -> list[float]:
    """Geo axis range for [lo, hi], widened when the extent is a single point."""
    if hi - lo <= 0:
        return [lo - _MIN_HALF_SPAN, hi + _MIN_HALF_SPAN]
    return [lo, hi]
