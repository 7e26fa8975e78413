"""Centralized integer coercion for years and state codes."""

import math
from typing import Any


def as_integer(value: Any) -> int:
    """Coerce a number or numeric-looking string to ``int``.

    Fractional parts are truncated toward zero, never rounded, so
    ``2013.9`` and ``"2013.9"`` both become ``2013``.

    Args:
        value: Number or string such as ``2013``, ``"2013"`` or ``2013.0``.

    Returns:
        Truncated integer value.

    Raises:
        ValueError: If *value* is not numeric, or is NaN / infinite.
    """
    if isinstance(value, bool):
        raise ValueError(f"Cannot interpret {value!r} as an integer.")
    if isinstance(value, int):
        return value

    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Cannot interpret {value!r} as an integer.")

    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"Cannot interpret {value!r} as an integer.")
    return int(number)
