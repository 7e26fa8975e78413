"""
FARS Data Package (Imperative Shell)

This package handles all file I/O for the FARS toolkit.

Modules:
- reader: filename convention, CSV/bz2 parsing, schema checks and the
          multi-year loader
"""

from .reader import (
    FILENAME_TEMPLATE,
    YEAR_COLUMN,
    SchemaError,
    YearResult,
    make_filename,
    read_accidents,
    validate_columns,
    load_years,
    read_years,
    load_state_table,
)

__all__ = [
    'FILENAME_TEMPLATE',
    'YEAR_COLUMN',
    'SchemaError',
    'YearResult',
    'make_filename',
    'read_accidents',
    'validate_columns',
    'load_years',
    'read_years',
    'load_state_table',
]
