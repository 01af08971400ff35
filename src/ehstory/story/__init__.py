"""
ehstory.story — pure scene logic: filtering, encodings, narrative layers and navigation.

## Responsibilities
- Narrow the Dataset Store to the records a scene shows (filters).
- Derive position, radius and color encodings from the filtered extent (scales).
- Fit and sample the OLS trend line (regression).
- Resolve narrative anchors against the visible records (annotations).
- Describe enter/update/exit lanes between two renders of a scene (transitions).
- Assemble one scene into a renderer-agnostic SceneDescription (scenes).
- Hold the current scene and per-scene filters behind a reducer (state).

## Public API
- build_scene, SceneDescription, Placeholder, SCENES — scene assembly.
- StoryState, Navigate, Step, SetFilter, reduce, initial_state, navigation_view — controller.
- plan_transition, frame_at, frame_times — transition planning and sampling.
- FilterCriteria, filter_observations — record selection.

## Import DAG discipline
- Depends on stdlib, polars and ehstory.core / ehstory.io.
- MUST NOT import streamlit, altair or the app package.
"""

from .filters import FilterCriteria, filter_observations, require_fields
from .scenes import SCENES, Axis, Placeholder, SceneDescription, SceneSpec, build_scene, mark_key
from .state import (
    Navigate,
    SceneFilters,
    SetFilter,
    Step,
    StoryState,
    initial_state,
    navigation_view,
    reduce,
    render_delay_ms,
)
from .transitions import Mark, TransitionPlan, frame_at, frame_times, plan_transition

__all__ = [
    "FilterCriteria",
    "filter_observations",
    "require_fields",
    "SCENES",
    "Axis",
    "Placeholder",
    "SceneDescription",
    "SceneSpec",
    "build_scene",
    "mark_key",
    "Navigate",
    "SceneFilters",
    "SetFilter",
    "Step",
    "StoryState",
    "initial_state",
    "navigation_view",
    "reduce",
    "render_delay_ms",
    "Mark",
    "TransitionPlan",
    "frame_at",
    "frame_times",
    "plan_transition",
]
