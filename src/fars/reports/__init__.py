"""
FARS Reports Package (Imperative Shell)

Public entry points and file writers.  No analysis logic lives here;
this package calls the functional core (src/fars/analysis/) and plotting
(src/fars/plotting/) via the data reader (src/fars/data/reader.py).

Modules:
    generators: summarize_years(), map_state() and the ReportGenerator
                class that writes CSV / HTML output.
"""

from .generators import (
    ReportGenerator,
    map_state,
    summarize_years,
)

__all__ = [
    'ReportGenerator',
    'map_state',
    'summarize_years',
]
