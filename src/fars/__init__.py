"""
FARS - Fatality Analysis Reporting System toolkit

Loads the yearly NHTSA FARS accident files (``accident_<year>.csv.bz2``),
summarises monthly accident counts across years and maps accident
locations for a single state.

Structure:
- data/     : Imperative Shell (file I/O, schema checks)
- analysis/ : Functional Core (pure transformations)
- plotting/ : (plotting functions)
- reports/  : public entry points and report writers
"""

from .reports.generators import map_state, summarize_years

__version__ = "0.1.0"

__all__ = [
    'map_state',
    'summarize_years',
]
