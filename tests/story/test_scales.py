from __future__ import annotations

import math

import polars as pl
import pytest

from ehstory.core.constants import INCOME_COLORS, UNKNOWN_COLOR
from ehstory.core.errors import EmptyDomainError, ScaleError
from ehstory.story.scales import (
    LinearScale,
    LogScale,
    SqrtScale,
    build_position_scale,
    build_radius_scale,
    build_scales,
    extent,
    income_color,
)


def test_linear_scale_maps_and_inverts() -> None:
    s = LinearScale((0.0, 100.0), (0.0, 500.0))
    assert s(50) == pytest.approx(250.0)
    assert s.invert(250.0) == pytest.approx(50.0)


def test_sqrt_scale_compares_by_area() -> None:
    s = SqrtScale((0.0, 100.0), (0.0, 10.0))
    assert s(25) == pytest.approx(5.0)
    assert s.invert(5.0) == pytest.approx(25.0)


def test_log_scale_requires_positive_domain_and_clamps() -> None:
    with pytest.raises(ScaleError):
        LogScale((0.0, 1000.0), (0.0, 1.0))
    s = LogScale((100.0, 10000.0), (0.0, 200.0), clamp=True)
    assert s(1000) == pytest.approx(100.0)
    assert s(1) == pytest.approx(0.0)
    assert s(1e9) == pytest.approx(200.0)


def test_log_scale_pins_zero_income_to_range_start_when_clamped() -> None:
    s = LogScale((100.0, 10000.0), (0.0, 200.0), clamp=True)
    assert s(0.0) == pytest.approx(0.0)
    assert s(-5.0) == pytest.approx(0.0)

    unclamped = LogScale((100.0, 10000.0), (0.0, 200.0))
    with pytest.raises(ScaleError):
        unclamped(0.0)


def test_small_populations_share_the_minimum_radius_next_to_a_giant() -> None:
    # Zero-anchored sqrt: 13M against 1.4B is ~2.4 px, floored to the 3 px minimum
    r = build_radius_scale([1_400_000_000, 13_276_513, 59_392_255], (3.0, 25.0))
    assert r(13_276_513) == pytest.approx(3.0)
    assert r(5_000_000) == pytest.approx(3.0)
    assert r(59_392_255) > 3.0


def test_non_finite_domain_is_rejected() -> None:
    with pytest.raises(ScaleError):
        LinearScale((0.0, math.inf), (0.0, 1.0))


def test_degenerate_domain_maps_to_middle_of_range() -> None:
    s = build_position_scale("linear", [42.0, 42.0], (0.0, 300.0))
    assert s(42.0) == pytest.approx(150.0)
    assert math.isfinite(s.invert(10.0))


def test_empty_values_raise_empty_domain_error() -> None:
    with pytest.raises(EmptyDomainError):
        extent([None, None])
    with pytest.raises(EmptyDomainError):
        build_position_scale("sqrt", [], (0.0, 1.0))


def test_position_scale_domains_by_kind() -> None:
    log = build_position_scale("log", [20.0, 5000.0], (0.0, 1.0))
    assert log.domain == (100.0, 5000.0)
    assert log.clamp is True

    sqrt = build_position_scale("sqrt", [0.5, 10.0], (360.0, 0.0))
    assert sqrt.domain == pytest.approx((0.0, 11.0))

    lin = build_position_scale("linear", [30.0, None, 90.0], (0.0, 1.0))
    assert lin.domain == (30.0, 90.0)


def test_radius_is_area_proportional_to_population() -> None:
    r = build_radius_scale([4e6, 1e6], (3.0, 25.0))
    assert r(4e6) == pytest.approx(25.0)
    assert r(4e6) / r(1e6) == pytest.approx(2.0)


def test_radius_is_clamped_to_range_and_defaults_missing_population() -> None:
    r = build_radius_scale([1_400_000_000, 10, None], (3.0, 25.0))
    assert r(10) == pytest.approx(3.0)
    assert r(1e12) == pytest.approx(25.0)
    assert r(None) == pytest.approx(r(1_000_000))


def test_income_colors_are_fixed() -> None:
    assert income_color("Low income") == INCOME_COLORS["Low income"]
    assert income_color(None) == UNKNOWN_COLOR
    assert income_color("Other") == UNKNOWN_COLOR


def test_build_scales_bounds_are_finite_and_empty_frame_raises() -> None:
    frame = pl.DataFrame(
        {
            "x": [500.0, 20000.0, 63000.0],
            "y": [0.1, 7.7, 0.4],
            "total_population": [1e6, 6e7, None],
        }
    )
    scales = build_scales(
        frame,
        x_field="x",
        y_field="y",
        x_kind="log",
        y_kind="sqrt",
        width=940,
        height=360,
        radius_range=(3.0, 25.0),
    )
    for v in frame.get_column("x"):
        assert 0.0 <= scales.x(v) <= 940.0
    for v in frame.get_column("y"):
        assert 0.0 <= scales.y(v) <= 360.0
    assert all(math.isfinite(b) for b in (*scales.x.domain, *scales.y.domain))

    with pytest.raises(EmptyDomainError):
        build_scales(
            frame.head(0),
            x_field="x",
            y_field="y",
            x_kind="log",
            y_kind="sqrt",
            width=940,
            height=360,
            radius_range=(3.0, 25.0),
        )
