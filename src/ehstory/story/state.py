"""
Navigation/interaction controller as a reducer over an immutable session state.

StoryState holds the only session state there is: the current scene and each scene's
own filter values. Actions are plain frozen dataclasses and reduce() returns a new
state, so every transition can be tested without a UI:

- Navigate(scene) — direct jump via a scene indicator; out-of-range targets are
  rejected and the state is returned unchanged.
- Step(delta) — previous/next; clamped at the first and last scene, never wraps.
- SetFilter(scene, field, value) — change one scene's filter; other scenes keep theirs.

Continuous inputs (the year slider) are debounced before re-rendering; discrete inputs
(dropdowns, radio buttons) render immediately. render_delay_ms() encodes that rule.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from typing import Any

from ehstory.core.constants import ALL, FIRST_SCENE, LAST_SCENE, SCENE_IDS
from ehstory.core.errors import StateError

__all__ = [
    "SceneFilters",
    "StoryState",
    "Navigate",
    "Step",
    "SetFilter",
    "Action",
    "NavigationView",
    "initial_state",
    "reduce",
    "navigation_view",
    "CONTINUOUS_FIELDS",
    "render_delay_ms",
]

logger = logging.getLogger(__name__)

# Filter fields driven by sliders (debounced before rendering).
CONTINUOUS_FIELDS: frozenset[str] = frozenset({"year"})


@dataclass(frozen=True)
class SceneFilters:
    """Per-scene control values; a scene ignores fields it has no control for."""

    year: int | None = None
    region: str = ALL
    metric: str = "secondary_school_enrollment"
    income: str = ALL


@dataclass(frozen=True)
class StoryState:
    scene: int = FIRST_SCENE
    filters: dict[int, SceneFilters] = field(
        default_factory=lambda: {sid: SceneFilters() for sid in SCENE_IDS}
    )

    def filters_for(self, scene: int) -> SceneFilters:
        return self.filters.get(scene, SceneFilters())


@dataclass(frozen=True)
class Navigate:
    scene: int


@dataclass(frozen=True)
class Step:
    delta: int


@dataclass(frozen=True)
class SetFilter:
    scene: int
    field: str
    value: Any


Action = Navigate | Step | SetFilter

_FILTER_FIELDS = frozenset(f.name for f in fields(SceneFilters))


def initial_state(default_year: int | None = None) -> StoryState:
    """Scene 1 active; every scene's year starts at `default_year` (the latest year)."""
    return StoryState(
        scene=FIRST_SCENE,
        filters={sid: SceneFilters(year=default_year) for sid in SCENE_IDS},
    )


def reduce(state: StoryState, action: Action) -> StoryState:
    """
    Apply one action and return the next state.

    Raises:
        StateError: For SetFilter on an unknown scene or field.
    """
    if isinstance(action, Navigate):
        if action.scene not in SCENE_IDS:
            logger.debug("Rejected navigation to scene %r", action.scene)
            return state
        return replace(state, scene=action.scene)

    if isinstance(action, Step):
        target = min(LAST_SCENE, max(FIRST_SCENE, state.scene + action.delta))
        if target == state.scene:
            return state
        return replace(state, scene=target)

    if isinstance(action, SetFilter):
        if action.scene not in SCENE_IDS:
            raise StateError(f"unknown scene {action.scene!r}")
        if action.field not in _FILTER_FIELDS:
            raise StateError(f"unknown filter field {action.field!r}")
        current = state.filters_for(action.scene)
        if getattr(current, action.field) == action.value:
            return state
        filters = dict(state.filters)
        filters[action.scene] = replace(current, **{action.field: action.value})
        return replace(state, filters=filters)

    raise StateError(f"unsupported action {action!r}")


@dataclass(frozen=True)
class NavigationView:
    prev_disabled: bool
    next_disabled: bool
    indicators: tuple[tuple[int, bool], ...]


def navigation_view(state: StoryState) -> NavigationView:
    """Button enablement and (scene, is_active) indicator pairs for the current state."""
    return NavigationView(
        prev_disabled=state.scene == FIRST_SCENE,
        next_disabled=state.scene == LAST_SCENE,
        indicators=tuple((sid, sid == state.scene) for sid in SCENE_IDS),
    )


def render_delay_ms(action: Action, debounce_ms: int) -> int:
    """Delay before rendering in response to `action`: debounce sliders, not dropdowns."""
    if isinstance(action, SetFilter) and action.field in CONTINUOUS_FIELDS:
        return max(0, int(debounce_ms))
    return 0
