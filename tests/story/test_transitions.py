from __future__ import annotations

import pytest

from ehstory.story.transitions import (
    Mark,
    ease_quad_in_out,
    frame_at,
    frame_times,
    keyed_diff,
    plan_transition,
)


def _m(key: str, px: float, r: float = 10.0, color: str = "#2563eb") -> Mark:
    return Mark(key=key, px=px, py=100.0, r=r, color=color)


def test_keyed_diff_classifies_added_retained_removed() -> None:
    prev = [_m("USA", 10), _m("ZAF", 20), _m("RWA", 30)]
    curr = [_m("RWA", 35), _m("KEN", 40), _m("USA", 15)]

    d = keyed_diff(prev, curr)

    assert d.added == ("KEN",)
    assert d.retained == ("RWA", "USA")
    assert d.removed == ("ZAF",)


def test_ease_endpoints_and_midpoint() -> None:
    assert ease_quad_in_out(0.0) == 0.0
    assert ease_quad_in_out(1.0) == 1.0
    assert ease_quad_in_out(0.5) == pytest.approx(0.5)
    assert ease_quad_in_out(0.25) < 0.25


def test_plan_lanes_delays_and_durations() -> None:
    prev = [_m("USA", 10), _m("ZAF", 20)]
    curr = [_m("USA", 50), _m("KEN", 40), _m("RWA", 60)]

    plan = plan_transition(prev, curr, duration_ms=800, stagger_ms=20)

    assert [tw.key for tw in plan.update] == ["USA"]
    assert [(tw.key, tw.delay_ms) for tw in plan.enter] == [("KEN", 20.0), ("RWA", 40.0)]
    assert [(tw.key, tw.duration_ms) for tw in plan.exit] == [("ZAF", 400.0)]
    assert plan.total_ms == pytest.approx(840.0)


def test_frame_at_start_middle_and_end() -> None:
    prev = [_m("USA", 0.0, color="#000000"), _m("ZAF", 20)]
    curr = [_m("USA", 100.0, color="#ffffff"), _m("KEN", 40)]
    plan = plan_transition(prev, curr, duration_ms=800, stagger_ms=0)

    start = {m.key: m for m in frame_at(plan, 0.0)}
    assert start["USA"].px == pytest.approx(0.0)
    assert start["KEN"].r == 0.0 and start["KEN"].opacity == 0.0
    assert start["ZAF"].r == pytest.approx(10.0)

    mid = {m.key: m for m in frame_at(plan, 400.0)}
    assert mid["USA"].px == pytest.approx(50.0)
    assert mid["USA"].color == "#808080"
    assert "ZAF" not in mid  # exit finished at half the duration

    end = plan.final()
    assert [m.key for m in end] == ["USA", "KEN"]
    assert end == curr


def test_first_render_is_all_entrances() -> None:
    curr = [_m("A", 1), _m("B", 2)]
    plan = plan_transition([], curr)
    assert plan.update == () and plan.exit == ()
    assert plan.final() == curr


def test_frame_times_end_exactly_at_total() -> None:
    plan = plan_transition([_m("A", 0)], [_m("A", 10)], duration_ms=800)
    times = frame_times(plan, 5)
    assert times == pytest.approx([0.0, 200.0, 400.0, 600.0, 800.0])
    assert frame_times(plan, 1) == [800.0]
