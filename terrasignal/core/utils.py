"""Utility helpers for core modules."""

from __future__ import annotations

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round ``value`` to ``ndigits`` decimals, with halves rounded up.

    Python's built-in :func:`round` uses banker's rounding; the published
    figures (carbon value, deficit percent, monthly totals) are defined with
    halves rounded towards positive infinity, so every computation in the
    package goes through this helper.
    """
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Return ``value`` rounded half-up to the nearest integer."""
    return int(math.floor(value + 0.5))


def mean(values) -> float:
    """Arithmetic mean of ``values`` or ``0.0`` for an empty sequence."""
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)
