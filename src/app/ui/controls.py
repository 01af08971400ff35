"""
Per-scene filter widgets.

Each scene owns its controls; widget keys are namespaced by scene ("s2_region") and
every widget is seeded from the scene's SceneFilters in StoryState rather than from
Streamlit's widget memory, which is dropped for widgets that are not rendered on a
run. Changing a control dispatches SetFilter for that scene only.

Controls
- Scene 1: year slider, region dropdown.
- Scene 2: year slider, region dropdown, education metric toggle.
- Scene 3: region dropdown, income tier dropdown (all years from 2010).
"""

from __future__ import annotations

import streamlit as st

from ehstory.core.constants import ALL, EDUCATION_METRICS, INCOME_TIERS
from ehstory.io import Dataset
from ehstory.story import SCENES, SceneFilters, SetFilter

from .session import dispatch, get_state


def _widget_key(scene: int, field: str) -> str:
    return f"s{scene}_{field}"


def _on_change(scene: int, field: str) -> None:
    dispatch(SetFilter(scene, field, st.session_state[_widget_key(scene, field)]))


def _year_slider(dataset: Dataset, scene: int, filters: SceneFilters) -> None:
    years = sorted(dataset.years)
    if not years:
        st.info("No years available in the dataset.")
        return
    value = filters.year if filters.year in years else years[-1]
    if len(years) == 1:
        st.caption(f"Year: {value}")
        return
    st.select_slider(
        "Year",
        options=years,
        value=value,
        key=_widget_key(scene, "year"),
        on_change=_on_change,
        args=(scene, "year"),
    )


def _region_select(dataset: Dataset, scene: int, filters: SceneFilters) -> None:
    options = [ALL, *dataset.regions]
    st.selectbox(
        "Region",
        options=options,
        index=options.index(filters.region) if filters.region in options else 0,
        format_func=lambda v: "All Regions" if v == ALL else v,
        key=_widget_key(scene, "region"),
        on_change=_on_change,
        args=(scene, "region"),
    )


def _metric_toggle(scene: int, filters: SceneFilters) -> None:
    options = list(EDUCATION_METRICS)
    st.radio(
        "Education metric",
        options=options,
        index=options.index(filters.metric) if filters.metric in options else 0,
        format_func=lambda v: EDUCATION_METRICS[v],
        horizontal=True,
        key=_widget_key(scene, "metric"),
        on_change=_on_change,
        args=(scene, "metric"),
    )


def _income_select(dataset: Dataset, scene: int, filters: SceneFilters) -> None:
    present = set(dataset.income_groups)
    options = [ALL, *(t for t in INCOME_TIERS if t in present)]
    st.selectbox(
        "Income level",
        options=options,
        index=options.index(filters.income) if filters.income in options else 0,
        format_func=lambda v: "All Income Levels" if v == ALL else v,
        key=_widget_key(scene, "income"),
        on_change=_on_change,
        args=(scene, "income"),
    )


def render_controls(dataset: Dataset, scene: int) -> SceneFilters:
    """Render the active scene's controls and return its (possibly updated) filters."""
    filters = get_state().filters_for(scene)
    wanted = SCENES[scene].controls
    cols = st.columns(len(wanted))
    for col, field in zip(cols, wanted, strict=True):
        with col:
            if field == "year":
                _year_slider(dataset, scene, filters)
            elif field == "region":
                _region_select(dataset, scene, filters)
            elif field == "metric":
                _metric_toggle(scene, filters)
            elif field == "income":
                _income_select(dataset, scene, filters)
    return get_state().filters_for(scene)
