from __future__ import annotations

import math
from typing import Any

import pytest

from app.charts import mark_values, placeholder_chart, scene_chart
from ehstory.io.dataset import Dataset
from ehstory.io.fallback import fallback_records
from ehstory.story.scenes import Placeholder, SceneDescription, build_scene
from ehstory.story.state import SceneFilters
from ehstory.story.transitions import frame_at, plan_transition


def find_in_spec(obj: Any, predicate) -> bool:
    """Recursively scan a chart spec dict for a predicate match."""
    if isinstance(obj, dict):
        if predicate(obj):
            return True
        return any(find_in_spec(v, predicate) for v in obj.values())
    if isinstance(obj, list):
        return any(find_in_spec(v, predicate) for v in obj)
    return False


def all_rows(spec: dict) -> list[dict]:
    """Rows from consolidated datasets and any inline data values."""
    rows: list[dict] = []
    for values in spec.get("datasets", {}).values():
        rows.extend(values)

    def _collect(obj: Any) -> None:
        if isinstance(obj, dict):
            if isinstance(obj.get("values"), list) and obj is not spec.get("datasets"):
                rows.extend(v for v in obj["values"] if isinstance(v, dict))
            for v in obj.values():
                _collect(v)
        elif isinstance(obj, list):
            for v in obj:
                _collect(v)

    _collect({k: v for k, v in spec.items() if k != "datasets"})
    return rows


def _scene(scene: int, filters: SceneFilters) -> SceneDescription:
    desc = build_scene(Dataset.from_records(fallback_records(), source="memory"), scene, filters)
    assert isinstance(desc, SceneDescription)
    return desc


def test_scene1_chart_uses_log_and_sqrt_scales_from_description() -> None:
    desc = _scene(1, SceneFilters(year=2021))
    spec = scene_chart(desc).to_dict()

    assert "layer" in spec
    assert spec["width"] == desc.width and spec["height"] == desc.height
    assert find_in_spec(
        spec,
        lambda d: d.get("field") == "x"
        and d.get("scale", {}).get("type") == "log"
        and d["scale"].get("domain") == list(desc.x.domain)
        and d["scale"].get("zero") is False,
    )
    assert find_in_spec(spec, lambda d: d.get("field") == "y" and d.get("scale", {}).get("type") == "sqrt")
    # Area sized marks bypass Vega-Lite's size scale
    assert find_in_spec(spec, lambda d: d.get("field") == "size" and d.get("scale", "missing") is None)


def test_bubble_rows_are_area_sized_and_tier_colored() -> None:
    desc = _scene(1, SceneFilters(year=2021))

    rows = {r["key"]: r for r in mark_values(desc)}

    zaf = next(m for m in desc.marks if m.key == "ZAF")
    assert rows["ZAF"]["size"] == pytest.approx(math.pi * zaf.r**2)
    assert rows["ZAF"]["x"] == pytest.approx(6374)
    assert rows["ZAF"]["tier"] == "Upper middle income"
    assert rows["ZAF"]["x_label"] == "$6.4k"
    assert rows["ZAF"]["tt_country"] == "South Africa"
    assert rows["RWA"]["x_label"] == "$822"


def test_chart_has_hover_crosshair_and_fixed_legend() -> None:
    desc = _scene(1, SceneFilters(year=2021))
    spec = scene_chart(desc).to_dict()

    assert find_in_spec(spec, lambda d: d.get("name") == "hover" and "select" in d)
    assert find_in_spec(
        spec, lambda d: isinstance(d.get("filter"), dict) and d["filter"].get("param") == "hover"
    )
    assert find_in_spec(
        spec,
        lambda d: d.get("field") == "tier"
        and d.get("scale", {}).get("range", [None])[0] == "#2563eb"
        and d.get("legend", {}).get("orient") == "top-right",
    )


def test_annotations_render_on_settled_frame_only() -> None:
    desc = _scene(1, SceneFilters(year=2021))

    settled = scene_chart(desc).to_dict()
    texts = {r.get("text") for r in all_rows(settled)}
    assert "Upper middle income does not" in texts

    plan = plan_transition([], desc.marks)
    moving = scene_chart(desc, frame_at(plan, 100.0)).to_dict()
    assert "Upper middle income does not" not in {r.get("text") for r in all_rows(moving)}


def test_scene2_chart_draws_trend_line() -> None:
    desc = _scene(2, SceneFilters(year=2021, metric="adult_literacy_rate"))
    spec = scene_chart(desc).to_dict()

    assert find_in_spec(spec, lambda d: d.get("type") == "line" and d.get("strokeDash") == [5, 5])
    assert find_in_spec(spec, lambda d: d.get("field") == "x" and d.get("scale", {}).get("type") == "linear")


def test_scene3_legend_is_top_left() -> None:
    desc = _scene(3, SceneFilters())
    spec = scene_chart(desc).to_dict()
    assert find_in_spec(spec, lambda d: d.get("orient") == "top-left")


def test_placeholder_chart_shows_message() -> None:
    ph = Placeholder(scene=2, title="The Education Factor", message="Limited education data available", width=940, height=360)
    spec = placeholder_chart(ph).to_dict()

    assert find_in_spec(spec, lambda d: d.get("value") == "Limited education data available")
    assert spec["width"] == 940
