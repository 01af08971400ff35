"""
Scene registry and the pure scene builder.

build_scene() turns (dataset, scene number, that scene's filters, settings) into a
declarative SceneDescription: pixel-space marks keyed for transitions, axis specs that
carry each scale's kind/domain/range, the sampled trend line, resolved annotations and
the legend. When nothing survives filtering it returns a Placeholder with the scene's
no-data message instead of building scales on an empty domain.

Scenes
1. Global landscape: income per capita (log) vs HIV incidence (sqrt), year + region.
2. Education factor: chosen education metric vs HIV incidence (sqrt), year + region,
   with an OLS trend line.
3. Behavioral impact: adult literacy vs condom use, all years from 2010, region +
   income tier, keyed by country and year, with an OLS trend line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from ehstory.core.constants import EDUCATION_METRICS, FIELD_LABELS, INCOME_COLORS, INCOME_TIERS
from ehstory.core.errors import EmptyDomainError
from ehstory.io.config import StorySettings
from ehstory.io.dataset import Dataset

from .annotations import SCENE1_ANCHORS, Annotation, NarrativeAnchor, place_annotations
from .filters import FilterCriteria, filter_observations, require_fields
from .regression import trend_line
from .scales import ContinuousScale, LinearScale, LogScale, ScaleKind, SqrtScale, build_scales
from .state import SceneFilters
from .transitions import Mark

__all__ = [
    "SceneSpec",
    "Axis",
    "SceneDescription",
    "Placeholder",
    "SCENES",
    "INCOME_TICKS",
    "build_scene",
    "mark_key",
]

logger = logging.getLogger(__name__)

INCOME_TICKS: tuple[float, ...] = (200, 500, 1000, 2000, 5000, 10000, 20000, 50000, 100000)

AxisFormat = Literal["income", "decimal", "percent"]


@dataclass(frozen=True)
class SceneSpec:
    """Static configuration of one scene."""

    scene: int
    title: str
    subtitle: str
    x_field: str | None
    y_field: str
    x_kind: ScaleKind
    y_kind: ScaleKind
    x_format: AxisFormat
    y_format: AxisFormat
    radius_range: tuple[float, float]
    stagger_ms: float
    empty_message: str
    controls: tuple[str, ...]
    extra_required: tuple[str, ...] = ()
    key_with_year: bool = False
    min_year: int | None = None
    trend: bool = False
    gridlines: bool = False
    x_ticks: tuple[float, ...] | None = None
    legend_corner: Literal["left", "right"] = "right"
    anchors: tuple[NarrativeAnchor, ...] = ()

    def x_for(self, filters: SceneFilters) -> str:
        """Plotted x field; Scene 2 reads it from the metric toggle."""
        if self.x_field is not None:
            return self.x_field
        return filters.metric if filters.metric in EDUCATION_METRICS else next(iter(EDUCATION_METRICS))

    def criteria(self, filters: SceneFilters) -> FilterCriteria:
        return FilterCriteria(
            year=filters.year if "year" in self.controls else None,
            region=filters.region if "region" in self.controls else None,
            income=filters.income if "income" in self.controls else None,
            min_year=self.min_year,
        )


SCENES: dict[int, SceneSpec] = {
    1: SceneSpec(
        scene=1,
        title="The Global Landscape",
        subtitle="Does national income predict HIV incidence?",
        x_field="income_per_capita",
        y_field="hiv_incidence_rate",
        x_kind="log",
        y_kind="sqrt",
        x_format="income",
        y_format="decimal",
        radius_range=(3.0, 25.0),
        stagger_ms=20.0,
        empty_message="No data available for the selected filters",
        controls=("year", "region"),
        gridlines=True,
        x_ticks=INCOME_TICKS,
        anchors=SCENE1_ANCHORS,
    ),
    2: SceneSpec(
        scene=2,
        title="The Education Factor",
        subtitle="Countries with more schooling tend to see fewer new infections.",
        x_field=None,
        y_field="hiv_incidence_rate",
        x_kind="linear",
        y_kind="sqrt",
        x_format="percent",
        y_format="decimal",
        radius_range=(4.0, 20.0),
        stagger_ms=15.0,
        empty_message="Limited education data available",
        controls=("year", "region", "metric"),
        extra_required=("income_per_capita",),
        trend=True,
    ),
    3: SceneSpec(
        scene=3,
        title="Behavioral Impact",
        subtitle="Literacy and condom use, every observation since 2010.",
        x_field="adult_literacy_rate",
        y_field="condom_use_average",
        x_kind="linear",
        y_kind="linear",
        x_format="percent",
        y_format="percent",
        radius_range=(4.0, 20.0),
        stagger_ms=10.0,
        empty_message="Limited behavioral data available",
        controls=("region", "income"),
        key_with_year=True,
        min_year=2010,
        trend=True,
        legend_corner="left",
    ),
}


@dataclass(frozen=True)
class Axis:
    field: str
    title: str
    kind: ScaleKind
    domain: tuple[float, float]
    range: tuple[float, float]
    clamp: bool = False
    format: AxisFormat = "decimal"
    ticks: tuple[float, ...] | None = None

    def to_scale(self) -> ContinuousScale:
        """Rebuild the scale this axis was described from (used to invert frame positions)."""
        cls = {"linear": LinearScale, "sqrt": SqrtScale, "log": LogScale}[self.kind]
        return cls(self.domain, self.range, clamp=self.clamp)


@dataclass(frozen=True)
class SceneDescription:
    scene: int
    title: str
    width: int
    height: int
    x: Axis
    y: Axis
    marks: tuple[Mark, ...]
    stagger_ms: float
    trend: tuple[tuple[float, float], ...] = ()
    annotations: tuple[Annotation, ...] = ()
    legend: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    legend_corner: Literal["left", "right"] = "right"
    gridlines: bool = False


@dataclass(frozen=True)
class Placeholder:
    scene: int
    title: str
    message: str
    width: int
    height: int


def mark_key(row: dict[str, object], *, with_year: bool) -> str:
    """Stable identifier: country code (else name), plus the year where a country repeats."""
    base = str(row.get("country_code") or row.get("country_name"))
    return f"{base}_{row.get('year')}" if with_year else base


def _x_title(layout: SceneSpec, x_field: str) -> str:
    if layout.x_field is None:
        return EDUCATION_METRICS[x_field]
    return FIELD_LABELS.get(x_field, x_field)


def _y_title(layout: SceneSpec) -> str:
    title = FIELD_LABELS.get(layout.y_field, layout.y_field)
    return f"{title} - Square Root Scale" if layout.y_kind == "sqrt" and layout.scene != 1 else title


def build_scene(
    dataset: Dataset,
    scene: int,
    filters: SceneFilters,
    settings: StorySettings | None = None,
) -> SceneDescription | Placeholder:
    """
    Filter, scale and describe one scene.

    Args:
        dataset (Dataset): Loaded store; never mutated.
        scene (int): Scene number (1..3).
        filters (SceneFilters): That scene's control values.
        settings (StorySettings | None): Dimensions and trend sampling; defaults if None.

    Returns:
        SceneDescription | Placeholder

    Raises:
        KeyError: If `scene` is not a registered scene.
    """
    cfg = settings or StorySettings()
    layout = SCENES[scene]
    x_field = layout.x_for(filters)
    y_field = layout.y_field

    frame = filter_observations(dataset.frame, layout.criteria(filters))
    frame = require_fields(frame, (x_field, y_field, *layout.extra_required))

    try:
        scales = build_scales(
            frame,
            x_field=x_field,
            y_field=y_field,
            x_kind=layout.x_kind,
            y_kind=layout.y_kind,
            width=cfg.chart_width,
            height=cfg.chart_height,
            radius_range=layout.radius_range,
        )
    except EmptyDomainError:
        logger.debug("Scene %d has no records for %s", scene, filters)
        return Placeholder(
            scene=scene,
            title=layout.title,
            message=layout.empty_message,
            width=cfg.chart_width,
            height=cfg.chart_height,
        )

    marks: list[Mark] = []
    seen: dict[str, int] = {}
    for row in frame.iter_rows(named=True):
        key = mark_key(row, with_year=layout.key_with_year)
        n = seen.get(key, 0)
        seen[key] = n + 1
        if n:
            key = f"{key}#{n}"
        marks.append(
            Mark(
                key=key,
                px=scales.x(row[x_field]),
                py=scales.y(row[y_field]),
                r=scales.r(row["total_population"]),
                color=scales.color(row["income_group"]),
                datum=row,
            )
        )

    trend: list[tuple[float, float]] = []
    if layout.trend:
        trend = trend_line(
            frame.get_column(x_field).to_list(),
            frame.get_column(y_field).to_list(),
            samples=cfg.trend_samples,
        )

    annotations = place_annotations(frame, layout.anchors, scales, x_field=x_field, y_field=y_field)

    return SceneDescription(
        scene=scene,
        title=layout.title,
        width=cfg.chart_width,
        height=cfg.chart_height,
        x=Axis(
            field=x_field,
            title=_x_title(layout, x_field),
            kind=scales.x.kind,
            domain=scales.x.domain,
            range=scales.x.range,
            clamp=scales.x.clamp,
            format=layout.x_format,
            ticks=layout.x_ticks,
        ),
        y=Axis(
            field=y_field,
            title=_y_title(layout),
            kind=scales.y.kind,
            domain=scales.y.domain,
            range=scales.y.range,
            clamp=scales.y.clamp,
            format=layout.y_format,
        ),
        marks=tuple(marks),
        stagger_ms=layout.stagger_ms,
        trend=tuple(trend),
        annotations=tuple(annotations),
        legend=tuple((tier, INCOME_COLORS[tier]) for tier in reversed(INCOME_TIERS)),
        legend_corner=layout.legend_corner,
        gridlines=layout.gridlines,
    )

