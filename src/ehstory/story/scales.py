"""
Scale Builder: visual-encoding functions derived from the filtered data's own extent.

Scales
- LinearScale — affine map of the domain onto the range.
- SqrtScale — power scale with exponent 0.5 (sign preserving), so rate-like values are
  compared by area rather than by length and outliers do not dominate.
- LogScale — base-10 log; used for income with the domain floored at INCOME_FLOOR.
  When clamped, zero or negative values map to the start of the range.

Every scale exposes kind/domain/range/clamp so the chart adapter can configure the
renderer's own scale identically, and invert() so pixel-space geometry (annotation
boxes, animation frames) can be carried back into data space.

Notes:
    - A degenerate domain (lo == hi) maps every value to the middle of the range.
    - Domains must be finite; ScaleError otherwise. An empty value set raises
      EmptyDomainError so scene builders can take the placeholder path.
    - The radius scale is anchored at zero (domain [0, max population]) so mark area is
      proportional to population, then clamped to the pixel range.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Literal

import polars as pl

from ehstory.core.constants import DEFAULT_POPULATION, INCOME_COLORS, INCOME_FLOOR, UNKNOWN_COLOR
from ehstory.core.errors import EmptyDomainError, ScaleError

__all__ = [
    "ScaleKind",
    "ContinuousScale",
    "LinearScale",
    "SqrtScale",
    "RadiusScale",
    "LogScale",
    "SceneScales",
    "extent",
    "build_position_scale",
    "build_radius_scale",
    "income_color",
    "build_scales",
]

ScaleKind = Literal["linear", "sqrt", "log"]


def _identity(v: float) -> float:
    return v


def _sqrt_signed(v: float) -> float:
    return math.copysign(math.sqrt(abs(v)), v)


def _square_signed(v: float) -> float:
    return math.copysign(v * v, v)


def _exp10(v: float) -> float:
    return 10.0**v


@dataclass(frozen=True)
class ContinuousScale:
    """Domain -> range map through a monotonic transform (base for the concrete scales)."""

    domain: tuple[float, float]
    range: tuple[float, float]
    clamp: bool = False

    kind: ScaleKind = "linear"
    _forward: Callable[[float], float] = _identity
    _backward: Callable[[float], float] = _identity

    def __post_init__(self) -> None:
        lo, hi = self.domain
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise ScaleError(f"{self.kind} scale domain must be finite, got {self.domain}")
        if not all(math.isfinite(v) for v in self.range):
            raise ScaleError(f"{self.kind} scale range must be finite, got {self.range}")

    def _t_domain(self) -> tuple[float, float]:
        return (self._forward(self.domain[0]), self._forward(self.domain[1]))

    def __call__(self, value: float) -> float:
        t0, t1 = self._t_domain()
        r0, r1 = self.range
        if t1 == t0:
            return (r0 + r1) / 2.0
        u = (self._forward(value) - t0) / (t1 - t0)
        if self.clamp:
            u = min(1.0, max(0.0, u))
        return r0 + u * (r1 - r0)

    def invert(self, pixel: float) -> float:
        t0, t1 = self._t_domain()
        r0, r1 = self.range
        if r1 == r0:
            return self.domain[0]
        u = (pixel - r0) / (r1 - r0)
        if self.clamp:
            u = min(1.0, max(0.0, u))
        return self._backward(t0 + u * (t1 - t0))


class LinearScale(ContinuousScale):
    def __init__(
        self, domain: tuple[float, float], range: tuple[float, float], clamp: bool = False
    ) -> None:
        super().__init__(domain, range, clamp, "linear", _identity, _identity)


class SqrtScale(ContinuousScale):
    def __init__(
        self, domain: tuple[float, float], range: tuple[float, float], clamp: bool = False
    ) -> None:
        super().__init__(domain, range, clamp, "sqrt", _sqrt_signed, _square_signed)


class LogScale(ContinuousScale):
    def __init__(
        self, domain: tuple[float, float], range: tuple[float, float], clamp: bool = False
    ) -> None:
        if domain[0] <= 0 or domain[1] <= 0:
            raise ScaleError(f"log scale domain must be strictly positive, got {domain}")
        super().__init__(domain, range, clamp, "log", math.log10, _exp10)

    def __call__(self, value: float) -> float:
        # log10 is undefined at or below zero; a clamped scale pins such values to the floor
        if value <= 0:
            if not self.clamp:
                raise ScaleError(f"log scale cannot map non-positive value {value}")
            value = self.domain[0]
        return super().__call__(value)


def extent(values: Iterable[float | None]) -> tuple[float, float]:
    """
    Min/max of the non-null values.

    Raises:
        EmptyDomainError: If there are no non-null values.
    """
    vals = [float(v) for v in values if v is not None]
    if not vals:
        raise EmptyDomainError("cannot derive a domain from an empty value set")
    return (min(vals), max(vals))


def build_position_scale(
    kind: ScaleKind, values: Sequence[float | None], range: tuple[float, float]
) -> ContinuousScale:
    """
    Position scale over the values' extent.

    Args:
        kind: "log" floors the domain at INCOME_FLOOR and clamps; "sqrt" uses
            [0, max * 1.1]; "linear" uses the plain extent.
        values: Plotted values of the filtered records.
        range: Pixel range, e.g. (0, width) or (height, 0).

    Returns:
        ContinuousScale

    Raises:
        EmptyDomainError: If `values` holds no non-null value.
    """
    lo, hi = extent(values)
    if kind == "log":
        lo = max(lo, INCOME_FLOOR)
        return LogScale((lo, max(hi, lo)), range, clamp=True)
    if kind == "sqrt":
        return SqrtScale((0.0, hi * 1.1), range)
    return LinearScale((lo, hi), range)


@dataclass(frozen=True)
class RadiusScale:
    """Sqrt scale anchored at zero population, floored at the minimum visible radius."""

    base: ContinuousScale
    min_radius: float

    def __call__(self, population: float | None) -> float:
        v = DEFAULT_POPULATION if population is None else population
        return max(self.min_radius, self.base(v))


def build_radius_scale(
    populations: Sequence[float | None], range: tuple[float, float] = (3.0, 25.0)
) -> RadiusScale:
    """
    Square-root radius scale: area proportional to population, clamped to `range`.

    Missing populations count as DEFAULT_POPULATION.

    Examples:
        >>> r = build_radius_scale([4e6, 1e6], (3, 25))
        >>> r(4e6) / r(1e6)
        2.0
    """
    filled = [DEFAULT_POPULATION if p is None else p for p in populations]
    _, hi = extent(filled)
    r_min, r_max = range
    if hi <= 0:
        return RadiusScale(LinearScale((0.0, 0.0), (r_min, r_min)), r_min)
    return RadiusScale(SqrtScale((0.0, hi), (0.0, r_max), clamp=True), r_min)


def income_color(tier: str | None) -> str:
    """Fixed hue for an income tier; unknown or missing tiers are neutral gray."""
    if tier is None:
        return UNKNOWN_COLOR
    return INCOME_COLORS.get(tier, UNKNOWN_COLOR)


@dataclass(frozen=True)
class SceneScales:
    """Encodings for one render pass; recreated on every render."""

    x: ContinuousScale
    y: ContinuousScale
    r: RadiusScale
    color: Callable[[str | None], str] = income_color


def build_scales(
    frame: pl.DataFrame,
    *,
    x_field: str,
    y_field: str,
    x_kind: ScaleKind,
    y_kind: ScaleKind,
    width: int,
    height: int,
    radius_range: tuple[float, float],
) -> SceneScales:
    """
    Derive x/y/r scales from the filtered frame's actual extent.

    Raises:
        EmptyDomainError: If the frame has no rows (callers render a placeholder).
    """
    if frame.height == 0:
        raise EmptyDomainError("no records to scale")
    return SceneScales(
        x=build_position_scale(x_kind, frame.get_column(x_field).to_list(), (0.0, float(width))),
        y=build_position_scale(y_kind, frame.get_column(y_field).to_list(), (float(height), 0.0)),
        r=build_radius_scale(frame.get_column("total_population").to_list(), radius_range),
    )
