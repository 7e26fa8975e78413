"""
FARS Analysis Package (Functional Core)

This package contains pure transformation functions with no I/O.
All functions accept DataFrames and return transformed data.

Modules:
- summary: month x year accident count table
- state:   state validation, sentinel scrubbing and bounding box
"""

from .summary import (
    MONTHS,
    summarize_frames,
)

from .state import (
    LATITUDE_SENTINEL,
    LONGITUDE_SENTINEL,
    STATE_NAMES,
    BoundingBox,
    InvalidStateError,
    state_name,
    check_state,
    select_state,
    scrub_coordinates,
    bounding_box,
)

__all__ = [
    # Summary
    'MONTHS',
    'summarize_frames',
    # State
    'LATITUDE_SENTINEL',
    'LONGITUDE_SENTINEL',
    'STATE_NAMES',
    'BoundingBox',
    'InvalidStateError',
    'state_name',
    'check_state',
    'select_state',
    'scrub_coordinates',
    'bounding_box',
]
