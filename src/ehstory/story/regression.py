"""
Ordinary least-squares trend line for a scene's two plotted dimensions.

The fitted line is sampled across the x extent and returned in data space, so the
renderer maps it through the same (possibly non-linear) scales as the marks and it
bends correctly on a sqrt or log axis.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

__all__ = [
    "MIN_POINTS",
    "LinearFit",
    "fit_line",
    "sample_line",
    "trend_line",
]

# Regression over one or two points is not meaningful.
MIN_POINTS = 3


@dataclass(frozen=True)
class LinearFit:
    slope: float
    intercept: float
    n: int

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


def fit_line(xs: Sequence[float | None], ys: Sequence[float | None]) -> LinearFit | None:
    """
    Fit y = slope * x + intercept over pairs where both values are present.

    Returns:
        LinearFit | None: None when fewer than MIN_POINTS pairs remain or x has no variance.
    """
    pairs = [(x, y) for x, y in zip(xs, ys, strict=True) if x is not None and y is not None]
    if len(pairs) < MIN_POINTS:
        return None
    arr = np.asarray(pairs, dtype=float)
    x, y = arr[:, 0], arr[:, 1]
    if np.ptp(x) == 0:
        return None
    slope, intercept = np.polyfit(x, y, 1)
    return LinearFit(slope=float(slope), intercept=float(intercept), n=len(pairs))


def sample_line(fit: LinearFit, x_min: float, x_max: float, samples: int = 50) -> list[tuple[float, float]]:
    """Points (x, y) at samples + 1 evenly spaced x positions from x_min to x_max."""
    xline = np.linspace(x_min, x_max, samples + 1)
    return [(float(x), fit.predict(float(x))) for x in xline]


def trend_line(
    xs: Sequence[float | None], ys: Sequence[float | None], samples: int = 50
) -> list[tuple[float, float]]:
    """Sampled OLS polyline in data space; empty when the fit is skipped."""
    fit = fit_line(xs, ys)
    if fit is None:
        return []
    present = [float(x) for x, y in zip(xs, ys, strict=True) if x is not None and y is not None]
    return sample_line(fit, min(present), max(present), samples)
