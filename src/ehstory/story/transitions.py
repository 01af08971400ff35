"""
Keyed diff and the three animation lanes (entrance, update, exit).

A render produces a list of marks keyed by a stable identifier. Comparing it with the
previously rendered list classifies keys as added, retained or removed; each class gets
its own lane of tweens:

- entrance: from zero radius/opacity to the target, staggered by the mark's index so
  many shapes do not pop in at once;
- update: straight from the old position/size/color to the new one, which is what
  makes a filter change read as countries moving rather than a chart being replaced;
- exit: to zero radius/opacity over half the duration, then dropped.

Everything here is pure and renderer-agnostic; frame_at() samples the plan at any time
so an adapter can play it with whatever animation primitive it has.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Literal

__all__ = [
    "Mark",
    "KeyedDiff",
    "Tween",
    "TransitionPlan",
    "keyed_diff",
    "plan_transition",
    "ease_quad_in_out",
    "frame_at",
    "frame_times",
]

Lane = Literal["enter", "update", "exit"]


@dataclass(frozen=True)
class Mark:
    """One bubble in pixel space, with the record it represents."""

    key: str
    px: float
    py: float
    r: float
    color: str
    opacity: float = 0.7
    datum: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class KeyedDiff:
    added: tuple[str, ...]
    retained: tuple[str, ...]
    removed: tuple[str, ...]


def keyed_diff(previous: Sequence[Mark], current: Sequence[Mark]) -> KeyedDiff:
    """Classify keys; added/retained follow `current` order, removed follows `previous`."""
    prev_keys = {m.key for m in previous}
    curr_keys = {m.key for m in current}
    return KeyedDiff(
        added=tuple(m.key for m in current if m.key not in prev_keys),
        retained=tuple(m.key for m in current if m.key in prev_keys),
        removed=tuple(m.key for m in previous if m.key not in curr_keys),
    )


def ease_quad_in_out(t: float) -> float:
    t *= 2
    if t <= 1:
        return t * t / 2
    t -= 1
    return (t * (2 - t) + 1) / 2


def _lerp(a: float, b: float, u: float) -> float:
    return a + (b - a) * u


def _lerp_color(a: str, b: str, u: float) -> str:
    if a == b or len(a) != 7 or len(b) != 7:
        return b if u >= 0.5 else a
    ca = [int(a[i : i + 2], 16) for i in (1, 3, 5)]
    cb = [int(b[i : i + 2], 16) for i in (1, 3, 5)]
    return "#" + "".join(f"{round(_lerp(x, y, u)):02x}" for x, y in zip(ca, cb, strict=True))


@dataclass(frozen=True)
class Tween:
    key: str
    lane: Lane
    start: Mark
    end: Mark
    delay_ms: float
    duration_ms: float

    @property
    def end_ms(self) -> float:
        return self.delay_ms + self.duration_ms

    def progress(self, t_ms: float) -> float:
        if self.duration_ms <= 0:
            return 1.0 if t_ms >= self.delay_ms else 0.0
        return min(1.0, max(0.0, (t_ms - self.delay_ms) / self.duration_ms))

    def at(self, t_ms: float) -> Mark:
        u = ease_quad_in_out(self.progress(t_ms))
        return replace(
            self.end,
            px=_lerp(self.start.px, self.end.px, u),
            py=_lerp(self.start.py, self.end.py, u),
            r=_lerp(self.start.r, self.end.r, u),
            opacity=_lerp(self.start.opacity, self.end.opacity, u),
            color=_lerp_color(self.start.color, self.end.color, u),
        )


@dataclass(frozen=True)
class TransitionPlan:
    diff: KeyedDiff
    order: tuple[str, ...]
    enter: tuple[Tween, ...]
    update: tuple[Tween, ...]
    exit: tuple[Tween, ...]

    @property
    def total_ms(self) -> float:
        ends = [tw.end_ms for tw in (*self.enter, *self.update, *self.exit)]
        return max(ends, default=0.0)

    def final(self) -> list[Mark]:
        """End state: entering and updated marks at their targets, exits gone."""
        return frame_at(self, self.total_ms)


def plan_transition(
    previous: Sequence[Mark],
    current: Sequence[Mark],
    *,
    duration_ms: float = 800.0,
    stagger_ms: float = 20.0,
) -> TransitionPlan:
    """
    Build the three lanes for moving from `previous` to `current`.

    Args:
        previous: Marks of the last render of this scene (empty on first render).
        current: Marks of this render.
        duration_ms: Entrance/update duration; exits use half.
        stagger_ms: Per-index entrance delay.

    Returns:
        TransitionPlan
    """
    diff = keyed_diff(previous, current)
    prev_by_key = {m.key: m for m in previous}
    added = set(diff.added)

    enter: list[Tween] = []
    update: list[Tween] = []
    for idx, mark in enumerate(current):
        if mark.key in added:
            start = replace(mark, r=0.0, opacity=0.0)
            enter.append(Tween(mark.key, "enter", start, mark, idx * stagger_ms, duration_ms))
        else:
            update.append(Tween(mark.key, "update", prev_by_key[mark.key], mark, 0.0, duration_ms))

    exit_: list[Tween] = []
    for key in diff.removed:
        old = prev_by_key[key]
        exit_.append(Tween(key, "exit", old, replace(old, r=0.0, opacity=0.0), 0.0, duration_ms / 2))

    return TransitionPlan(
        diff=diff,
        order=tuple(m.key for m in current),
        enter=tuple(enter),
        update=tuple(update),
        exit=tuple(exit_),
    )


def frame_at(plan: TransitionPlan, t_ms: float) -> list[Mark]:
    """Sample every lane at time t; exited marks are removed once their tween completes."""
    live = {tw.key: tw for tw in (*plan.enter, *plan.update)}
    marks = [live[key].at(t_ms) for key in plan.order]
    marks.extend(tw.at(t_ms) for tw in plan.exit if tw.progress(t_ms) < 1.0)
    return marks


def frame_times(plan: TransitionPlan, frame_count: int) -> list[float]:
    """`frame_count` evenly spaced sample times ending exactly at the plan's total."""
    total = plan.total_ms
    if frame_count <= 1 or total <= 0:
        return [total]
    return [total * i / (frame_count - 1) for i in range(frame_count)]
