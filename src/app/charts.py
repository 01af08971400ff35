"""
Altair adapter for scene descriptions.

Every chart is drawn in data space with Vega-Lite scales configured from the
description's axes (same kind, domain, range and clamp, no zero/nice padding), so
the bubbles land exactly where the scene builder placed them. Transition frames
carry pixel positions; they are inverted through the same axes before plotting.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

import altair as alt

from ehstory.core.constants import UNKNOWN_COLOR
from ehstory.story.scenes import Axis, Placeholder, SceneDescription
from ehstory.story.transitions import Mark

from .labels import format_value, tick_label_expr, tooltip_rows

__all__ = [
    "mark_values",
    "placeholder_chart",
    "scene_chart",
]

UNKNOWN_TIER = "Unknown"
HOVER = "hover"


# Uniform chart defaults for a professional look
def _apply_chart_defaults(ch: alt.TopLevelMixin) -> alt.TopLevelMixin:
    try:
        return (
            ch.configure_axis(labelFontSize=12, titleFontSize=12)
            .configure_legend(labelFontSize=12, titleFontSize=12)
            .configure_title(fontSize=14)
            .configure_view(strokeOpacity=0)
        )
    except Exception:
        # If configuration fails (e.g., non-top-level), return chart as-is
        return ch


# ----------------------------
# Encodings
# ----------------------------


def _scale(axis: Axis) -> alt.Scale:
    return alt.Scale(
        type=axis.kind,
        domain=list(axis.domain),
        range=list(axis.range),
        clamp=axis.clamp,
        zero=False,
        nice=False,
    )


def _x(axis: Axis, *, grid: bool) -> alt.X:
    ax: dict[str, Any] = {"title": axis.title, "grid": grid}
    if axis.ticks is not None:
        ax["values"] = [t for t in axis.ticks if axis.domain[0] <= t <= axis.domain[1]]
    label_expr = tick_label_expr(axis.format)
    if label_expr is not None:
        ax["labelExpr"] = label_expr
    return alt.X("x:Q", scale=_scale(axis), axis=alt.Axis(**ax))


def _y(axis: Axis, *, grid: bool) -> alt.Y:
    ax: dict[str, Any] = {"title": axis.title, "grid": grid}
    label_expr = tick_label_expr(axis.format)
    if label_expr is not None:
        ax["labelExpr"] = label_expr
    return alt.Y("y:Q", scale=_scale(axis), axis=alt.Axis(**ax))


def _color(description: SceneDescription) -> alt.Color:
    domain = [tier for tier, _ in description.legend] + [UNKNOWN_TIER]
    colors = [color for _, color in description.legend] + [UNKNOWN_COLOR]
    return alt.Color(
        "tier:N",
        scale=alt.Scale(domain=domain, range=colors),
        legend=alt.Legend(
            title="Income Level",
            orient="top-left" if description.legend_corner == "left" else "top-right",
            symbolType="circle",
        ),
    )


# ----------------------------
# Data
# ----------------------------


def mark_values(description: SceneDescription, marks: Sequence[Mark] | None = None) -> list[dict[str, Any]]:
    """Rows for the bubble layer: data-space x/y, area-sized, tier-colored, with tooltip text.

    Args:
        description (SceneDescription): Scene whose axes define the data space.
        marks (Sequence[Mark] | None): Frame to draw; defaults to the scene's end state.

    Returns:
        list[dict[str, Any]]: One row per mark, in draw order.
    """
    x_scale = description.x.to_scale()
    y_scale = description.y.to_scale()
    rows: list[dict[str, Any]] = []
    for m in description.marks if marks is None else marks:
        x = x_scale.invert(m.px)
        y = y_scale.invert(m.py)
        row: dict[str, Any] = {
            "key": m.key,
            "x": x,
            "y": y,
            "size": math.pi * m.r * m.r,
            "opacity": m.opacity,
            "tier": m.datum.get("income_group") or UNKNOWN_TIER,
            "x_label": format_value(description.x.format, m.datum.get(description.x.field, x)),
            "y_label": format_value(description.y.format, m.datum.get(description.y.field, y)),
        }
        row.update(
            tooltip_rows(
                m.datum,
                description.x.field,
                description.x.format,
                description.y.field,
                description.y.format,
            )
        )
        rows.append(row)
    return rows


# ----------------------------
# Charts
# ----------------------------


def placeholder_chart(placeholder: Placeholder) -> alt.TopLevelMixin:
    """Centered message in place of a scene that has nothing to plot."""
    return _apply_chart_defaults(
        alt.Chart(alt.Data(values=[]))
        .mark_text(fontSize=16, color="#6b7280")
        .encode(text=alt.value(placeholder.message))
        .properties(width=placeholder.width, height=placeholder.height, title=placeholder.title)
    )


def _hover() -> alt.Parameter:
    return alt.selection_point(
        name=HOVER,
        on="mouseover",
        clear="mouseout",
        nearest=True,
        fields=["key"],
        empty=False,
    )


def _bubbles(
    description: SceneDescription, values: list[dict[str, Any]], hover: alt.Parameter
) -> alt.Chart:
    return (
        alt.Chart(alt.Data(values=values))
        .mark_circle(stroke="#ffffff", strokeWidth=1)
        .encode(
            x=_x(description.x, grid=description.gridlines),
            y=_y(description.y, grid=description.gridlines),
            size=alt.Size("size:Q", scale=None),
            opacity=alt.Opacity("opacity:Q", scale=None),
            color=_color(description),
            strokeWidth=alt.condition(hover, alt.value(2.5), alt.value(1)),
            tooltip=[
                alt.Tooltip("tt_country:N", title="Country"),
                alt.Tooltip("tt_region:N", title="Region"),
                alt.Tooltip("tt_income:N", title="Income Level"),
                alt.Tooltip("tt_year:N", title="Year"),
                alt.Tooltip("tt_x:N", title=description.x.title),
                alt.Tooltip("tt_y:N", title=description.y.title),
                alt.Tooltip("tt_population:N", title="Population"),
            ],
        )
        .add_params(hover)
    )


def _crosshair(
    description: SceneDescription, values: list[dict[str, Any]], hover: alt.Parameter
) -> list[alt.Chart]:
    base = alt.Chart(alt.Data(values=values)).transform_filter(hover)
    x_enc = _x(description.x, grid=False)
    y_enc = _y(description.y, grid=False)
    return [
        base.mark_rule(color="#6b7280", strokeDash=[3, 3]).encode(x=x_enc),
        base.mark_rule(color="#6b7280", strokeDash=[3, 3]).encode(y=y_enc),
        base.mark_text(align="left", dx=4, dy=-4, fontSize=11, color="#374151").encode(
            x=x_enc, y=alt.value(description.height), text="x_label:N"
        ),
        base.mark_text(align="left", dx=4, dy=-4, fontSize=11, color="#374151").encode(
            x=alt.value(0), y=y_enc, text="y_label:N"
        ),
    ]


def _trend(description: SceneDescription) -> alt.Chart:
    pts = [{"x": x, "y": y} for x, y in description.trend]
    return (
        alt.Chart(alt.Data(values=pts))
        .mark_line(color="#6b7280", strokeDash=[5, 5], strokeWidth=2, opacity=0.8, clip=True)
        .encode(x=_x(description.x, grid=False), y=_y(description.y, grid=False))
    )


def _annotation_layers(description: SceneDescription) -> list[alt.Chart]:
    boxes = [
        {"x": b.x0, "x2": b.x1, "y": b.y0, "y2": b.y1, "stroke": b.color}
        for b in (a.box for a in description.annotations)
        if b is not None
    ]
    labels = [
        {"x": lab.x, "y": lab.y, "text": lab.text}
        for a in description.annotations
        for lab in a.labels
    ]
    layers: list[alt.Chart] = []
    x_enc = _x(description.x, grid=False)
    y_enc = _y(description.y, grid=False)
    if boxes:
        layers.append(
            alt.Chart(alt.Data(values=boxes))
            .mark_rect(fillOpacity=0, strokeDash=[5, 5], strokeWidth=2, clip=True)
            .encode(
                x=x_enc,
                x2="x2:Q",
                y=y_enc,
                y2="y2:Q",
                stroke=alt.Stroke("stroke:N", scale=None),
            )
        )
    if labels:
        layers.append(
            alt.Chart(alt.Data(values=labels))
            .mark_text(align="left", baseline="middle", fontSize=11, fontWeight="bold", color="#374151")
            .encode(x=x_enc, y=y_enc, text="text:N")
        )
    return layers


def scene_chart(description: SceneDescription, marks: Sequence[Mark] | None = None) -> alt.TopLevelMixin:
    """Layered bubble chart for one scene (or one transition frame of it).

    Args:
        description (SceneDescription): Output of ehstory.story.build_scene.
        marks (Sequence[Mark] | None): Transition frame to draw instead of the end state.

    Returns:
        alt.TopLevelMixin: Configured layer chart.
    """
    values = mark_values(description, marks)
    hover = _hover()
    layers: list[alt.Chart] = []
    if description.trend:
        layers.append(_trend(description))
    layers.append(_bubbles(description, values, hover))
    layers.extend(_crosshair(description, values, hover))
    # Narrative text only on settled frames
    if marks is None:
        layers.extend(_annotation_layers(description))
    ch = alt.layer(*layers).properties(
        width=description.width,
        height=description.height,
        title=description.title,
    )
    return _apply_chart_defaults(ch)
