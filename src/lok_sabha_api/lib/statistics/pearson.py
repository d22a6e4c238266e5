"""Pearson correlation and percentage helpers."""

import math
from collections.abc import Sequence

import pandas as pd


def pearson_correlation(x_values: Sequence[float], y_values: Sequence[float]) -> float | None:
    """Compute the Pearson correlation coefficient of paired samples.

    Args:
        x_values: First sample.
        y_values: Second sample, paired index-by-index with ``x_values``.

    Returns:
        The coefficient, clamped to [-1, 1] against rounding drift, or None
        when the samples are empty, unequal in length, or either has zero
        variance.
    """
    if len(x_values) == 0 or len(x_values) != len(y_values):
        return None

    r = pd.Series(x_values, dtype="float64").corr(pd.Series(y_values, dtype="float64"))
    if not math.isfinite(r):
        return None
    return max(-1.0, min(1.0, float(r)))


def percentage(part: float, whole: float) -> float:
    """Return ``part`` as a percentage of ``whole``, or 0.0 when ``whole`` is not positive."""
    if whole <= 0:
        return 0.0
    return part * 100.0 / whole
