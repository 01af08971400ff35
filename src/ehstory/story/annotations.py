"""
Narrative annotations placed by pattern-matching the filtered records.

An anchor is a small piece of configuration: which records it looks for (income tier,
indicator, comparison, threshold, optionally a preferred country), where the text goes
relative to the chosen record, and whether to outline every match with a dashed box.
Placements are tried in order and the first one with a match wins; an anchor with no
match is skipped without a trace.

Text and box geometry is computed in pixels (offsets are pixel offsets) and carried
back to data space with the scales' invert(), so the renderer can place them with the
same scales as the marks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

import polars as pl

from .scales import SceneScales

__all__ = [
    "Match",
    "Placement",
    "NarrativeAnchor",
    "TextLabel",
    "Box",
    "Annotation",
    "place_annotations",
    "SCENE1_ANCHORS",
]


@dataclass(frozen=True)
class Match:
    """Record predicate: `field op threshold`, optionally restricted by tier and country."""

    field: str
    op: Literal[">", "<"]
    threshold: float
    income_group: str | None = None
    country: str | None = None

    def select(self, frame: pl.DataFrame) -> pl.DataFrame:
        col = pl.col(self.field)
        preds = [col.is_not_null(), col > self.threshold if self.op == ">" else col < self.threshold]
        if self.income_group is not None:
            preds.append(pl.col("income_group") == self.income_group)
        if self.country is not None:
            preds.append(pl.col("country_name") == self.country)
        return frame.filter(*preds)


@dataclass(frozen=True)
class Placement:
    match: Match
    lines: tuple[str, ...]
    dx: float = 20.0
    dy: float = 0.0
    # "max"/"min" choose the most extreme match on the matched field
    pick: Literal["max", "min"] = "max"
    line_gap: float = 12.0


@dataclass(frozen=True)
class NarrativeAnchor:
    name: str
    placements: tuple[Placement, ...]
    box: Match | None = None
    box_color: str = "#6b7280"
    box_pad: tuple[float, float] = (30.0, 20.0)


@dataclass(frozen=True)
class TextLabel:
    text: str
    px: float
    py: float
    x: float
    y: float


@dataclass(frozen=True)
class Box:
    color: str
    px0: float
    py0: float
    px1: float
    py1: float
    x0: float
    y0: float
    x1: float
    y1: float


@dataclass(frozen=True)
class Annotation:
    name: str
    labels: tuple[TextLabel, ...] = field(default_factory=tuple)
    box: Box | None = None


def _bounding_box(
    rows: pl.DataFrame, anchor: NarrativeAnchor, scales: SceneScales, x_field: str, y_field: str
) -> Box:
    pxs = [scales.x(v) for v in rows.get_column(x_field).to_list()]
    pys = [scales.y(v) for v in rows.get_column(y_field).to_list()]
    pad_x, pad_y = anchor.box_pad
    px0, px1 = min(pxs) - pad_x, max(pxs) + pad_x
    py0, py1 = min(pys) - pad_y, max(pys) + pad_y
    return Box(
        color=anchor.box_color,
        px0=px0,
        py0=py0,
        px1=px1,
        py1=py1,
        x0=scales.x.invert(px0),
        y0=scales.y.invert(py0),
        x1=scales.x.invert(px1),
        y1=scales.y.invert(py1),
    )


def _place_text(
    frame: pl.DataFrame, placement: Placement, scales: SceneScales, x_field: str, y_field: str
) -> tuple[TextLabel, ...]:
    matches = placement.match.select(frame).drop_nulls([x_field, y_field])
    if matches.height == 0:
        return ()
    ordered = matches.sort(placement.match.field, descending=placement.pick == "max")
    row = ordered.row(0, named=True)
    base_x = scales.x(row[x_field]) + placement.dx
    base_y = scales.y(row[y_field]) + placement.dy
    labels: list[TextLabel] = []
    for i, text in enumerate(placement.lines):
        py = base_y + i * placement.line_gap
        labels.append(
            TextLabel(text=text, px=base_x, py=py, x=scales.x.invert(base_x), y=scales.y.invert(py))
        )
    return tuple(labels)


def place_annotations(
    frame: pl.DataFrame,
    anchors: tuple[NarrativeAnchor, ...],
    scales: SceneScales,
    *,
    x_field: str,
    y_field: str,
) -> list[Annotation]:
    """
    Resolve each anchor against the filtered frame.

    Returns:
        list[Annotation]: One entry per anchor that matched something (text or box).
    """
    out: list[Annotation] = []
    for anchor in anchors:
        box = None
        if anchor.box is not None:
            boxed = anchor.box.select(frame).drop_nulls([x_field, y_field])
            if boxed.height > 0:
                box = _bounding_box(boxed, anchor, scales, x_field, y_field)
        labels: tuple[TextLabel, ...] = ()
        for placement in anchor.placements:
            labels = _place_text(frame, placement, scales, x_field, y_field)
            if labels:
                break
        if labels or box is not None:
            out.append(Annotation(name=anchor.name, labels=labels, box=box))
    return out


_UMI_LINES = ("Upper middle income does not", "guarantee low HIV incidence")
_LOW_LINES = ("Low income doesn't necessarily mean high HIV incidence",)

SCENE1_ANCHORS: tuple[NarrativeAnchor, ...] = (
    NarrativeAnchor(
        name="upper_middle_high_hiv",
        box=Match("hiv_incidence_rate", ">", 1.0, income_group="Upper middle income"),
        box_color="#059669",
        placements=(
            Placement(
                Match("hiv_incidence_rate", ">", 1.0, country="South Africa"),
                _UMI_LINES,
                dx=20.0,
                dy=0.0,
                line_gap=10.0,
            ),
            Placement(
                Match("hiv_incidence_rate", ">", 1.0, income_group="Upper middle income"),
                _UMI_LINES,
                dx=20.0,
                dy=-20.0,
                line_gap=15.0,
            ),
            Placement(
                Match("hiv_incidence_rate", ">", 0.5, income_group="Upper middle income"),
                ("Income level alone doesn't predict health outcomes",),
                dx=20.0,
                dy=-10.0,
            ),
        ),
    ),
    NarrativeAnchor(
        name="low_income_low_hiv",
        box=Match("hiv_incidence_rate", "<", 0.2, income_group="Low income"),
        box_color="#dc2626",
        placements=(
            Placement(
                Match("hiv_incidence_rate", "<", 0.5, country="Afghanistan"),
                _LOW_LINES,
                dx=-150.0,
                dy=15.0,
                pick="min",
            ),
            Placement(
                Match("hiv_incidence_rate", "<", 0.2, income_group="Low income"),
                _LOW_LINES,
                dx=-150.0,
                dy=15.0,
                pick="min",
            ),
        ),
    ),
)
