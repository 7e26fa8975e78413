"""
FARS State Selection (Functional Core)

Pure functions only. No I/O, no plotting.
Validates a requested state code, filters a year's accidents to that
state, scrubs sentinel coordinates and computes the plot bounding box.

Package Location: src/fars/analysis/state.py

Sentinel Rule:
    FARS encodes unknown positions with out-of-range values (e.g. 99.9999
    latitude, 999.9999 longitude).  ``LONGITUD > 900`` and
    ``LATITUDE > 90`` are replaced with NaN before any numeric use, so
    they are never plotted and never widen the bounding box.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from ..utils.coerce import as_integer

LATITUDE_SENTINEL: float = 90
LONGITUDE_SENTINEL: float = 900

# FARS state codes are the US Census FIPS codes (plus PR and VI).
STATE_NAMES: Dict[int, str] = {
    1: 'Alabama',         2: 'Alaska',          4: 'Arizona',
    5: 'Arkansas',        6: 'California',      8: 'Colorado',
    9: 'Connecticut',     10: 'Delaware',       11: 'District of Columbia',
    12: 'Florida',        13: 'Georgia',        15: 'Hawaii',
    16: 'Idaho',          17: 'Illinois',       18: 'Indiana',
    19: 'Iowa',           20: 'Kansas',         21: 'Kentucky',
    22: 'Louisiana',      23: 'Maine',          24: 'Maryland',
    25: 'Massachusetts',  26: 'Michigan',       27: 'Minnesota',
    28: 'Mississippi',    29: 'Missouri',       30: 'Montana',
    31: 'Nebraska',       32: 'Nevada',         33: 'New Hampshire',
    34: 'New Jersey',     35: 'New Mexico',     36: 'New York',
    37: 'North Carolina', 38: 'North Dakota',   39: 'Ohio',
    40: 'Oklahoma',       41: 'Oregon',         42: 'Pennsylvania',
    43: 'Puerto Rico',    44: 'Rhode Island',   45: 'South Carolina',
    46: 'South Dakota',   47: 'Tennessee',      48: 'Texas',
    49: 'Utah',           50: 'Vermont',        51: 'Virginia',
    52: 'Virgin Islands', 53: 'Washington',     54: 'West Virginia',
    55: 'Wisconsin',      56: 'Wyoming',
}


class InvalidStateError(ValueError):
    """
    Raised when a state code does not occur in the loaded year's STATE
    column.
    """

    def __init__(self, state_code: Any) -> None:
        self.state_code = state_code
        super().__init__(f"invalid STATE number: {state_code}")


@dataclass(frozen=True)
class BoundingBox:
    """Latitude / longitude extent of the plotted accidents (degrees)."""

    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float


def state_name(state_code: int) -> str:
    """Human-readable name for a FARS state code."""
    return STATE_NAMES.get(int(state_code), f'State {state_code}')


def check_state(df: pd.DataFrame, state_code: Any) -> int:
    """
    Coerce *state_code* to int and confirm it appears in ``df['STATE']``.

    Returns:
        The integer state code.

    Raises:
        InvalidStateError: If the code is absent from the table.
        ValueError: If *state_code* is not numeric.
    """
    code = as_integer(state_code)
    present = set(df['STATE'].dropna().astype(int).unique().tolist())
    if code not in present:
        raise InvalidStateError(code)
    return code


def select_state(df: pd.DataFrame, state_code: int) -> pd.DataFrame:
    """Return the rows of *df* whose STATE equals *state_code*."""
    return df.loc[df['STATE'] == state_code].copy()


def scrub_coordinates(df: pd.DataFrame) -> pd.DataFrame:
    """
    Replace sentinel coordinates with NaN.

    Latitude and longitude are scrubbed independently, matching how the
    source data flags each one separately.

    Args:
        df: DataFrame with numeric ``LATITUDE`` and ``LONGITUD`` columns.

    Returns:
        Copy of *df* with ``LATITUDE > 90`` and ``LONGITUD > 900`` set
        to NaN (both columns become float).
    """
    df = df.copy()
    df['LATITUDE'] = df['LATITUDE'].astype(float)
    df['LONGITUD'] = df['LONGITUD'].astype(float)
    df.loc[df['LATITUDE'] > LATITUDE_SENTINEL, 'LATITUDE'] = np.nan
    df.loc[df['LONGITUD'] > LONGITUDE_SENTINEL, 'LONGITUD'] = np.nan
    return df


def bounding_box(df: pd.DataFrame) -> Optional[BoundingBox]:
    """
    Min / max of the non-missing coordinates in *df*.

    Expects sentinels already scrubbed (see ``scrub_coordinates``).

    Only rows with both coordinates present count, so a row with one
    sentinel value cannot stretch the box along the other axis.

    Returns:
        ``BoundingBox``, or ``None`` when no row has both coordinates.
    """
    located = df.dropna(subset=['LATITUDE', 'LONGITUD'])
    if located.empty:
        return None
    lat = located['LATITUDE']
    lon = located['LONGITUD']
    return BoundingBox(
        lat_min=float(lat.min()),
        lat_max=float(lat.max()),
        lon_min=float(lon.min()),
        lon_max=float(lon.max()),
    )
