"""
Streamlit application orchestrator for the Education-Health story.

This module composes the page: settings and dataset loading, the scene heading and
narrative, the active scene's controls, the chart (played through app.ui.player)
and the navigation bar. Supporting concerns live in focused modules under app.ui.*
(session, controls, navigation, player).

Responsibilities:
    - Configure the Streamlit page and logging.
    - Load StorySettings (env > TOML > defaults) and the cached Dataset.
    - Seed session state from the dataset's latest year.
    - Mount the active scene and the navigation bar.

Notes:
    - Scene content is produced by ehstory.story.build_scene; this module never
      filters or scales data itself.
"""

from __future__ import annotations

import logging
from dataclasses import replace

import streamlit as st

from app.data import describe_scene, latest_year, load_story_dataset
from ehstory.core.errors import StoryError
from ehstory.io import ConfigError, DatasetLoadError, StorySettings, configure_logging
from ehstory.story import SCENES

from .controls import render_controls
from .navigation import render_navigation
from .player import play_scene
from .session import get_state, init_session

logger = logging.getLogger(__name__)

INTRO = (
    "How do education and wealth shape a country's HIV epidemic? "
    "Three scenes walk from income, to schooling, to behavior."
)


def _load_settings(default_data: str | None) -> StorySettings | None:
    try:
        settings = StorySettings.load().validate()
    except ConfigError as e:
        st.error(f"Invalid configuration: {e}")
        return None
    if default_data:
        settings = replace(settings, data_source=default_data)
    return settings


def streamlit_app(default_data: str | None = None, default_scene: int | None = None) -> None:
    """Render the story application.

    Args:
        default_data (str | None): Optional dataset path/URL overriding the configured source.
        default_scene (int | None): Scene to open on the first run of a session.

    Returns:
        None

    Notes:
        - A failed load falls back to the embedded sample (when enabled) and shows a
          warning; with fallback disabled the error is shown and rendering stops.
    """
    st.set_page_config(page_title="The Education-Health Connection", layout="wide")

    settings = _load_settings(default_data)
    if settings is None:
        return
    configure_logging(settings.log_level)

    try:
        with st.spinner("Loading indicators ..."):
            dataset = load_story_dataset(settings)
    except DatasetLoadError as e:
        st.error(str(e))
        return
    if dataset.is_fallback:
        st.warning("Could not load the dataset; showing the embedded sample instead.")

    init_session(latest_year(dataset), default_scene=default_scene, debounce_ms=settings.debounce_ms)
    state = get_state()
    layout = SCENES[state.scene]

    st.title("The Education-Health Connection")
    st.caption(INTRO)

    st.subheader(f"Scene {layout.scene}: {layout.title}")
    st.markdown(layout.subtitle)

    filters = render_controls(dataset, layout.scene)
    try:
        description = describe_scene(dataset, layout.scene, filters, settings)
    except StoryError as e:  # pragma: no cover - surfaced to the reader
        logger.exception("Scene %d failed to build", layout.scene)
        st.error(f"Failed to build scene {layout.scene}: {e}")
    else:
        play_scene(description, settings)

    render_navigation()
    st.caption(f"{dataset.height} records from {dataset.source}")
