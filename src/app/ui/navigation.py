"""
Scene navigation bar: Previous/Next buttons and one indicator per scene.

Buttons never mutate session state directly; each click dispatches an action through
ehstory.story.state.reduce so clamping and rejection live in one tested place.
"""

from __future__ import annotations

import streamlit as st

from ehstory.story import SCENES, Navigate, Step, navigation_view

from .session import dispatch, get_state


def render_navigation() -> None:
    """Render Previous / indicators / Next for the current StoryState."""
    view = navigation_view(get_state())
    cols = st.columns([2] + [1] * len(view.indicators) + [2])

    cols[0].button(
        "← Previous",
        key="nav_prev",
        disabled=view.prev_disabled,
        on_click=dispatch,
        args=(Step(-1),),
        use_container_width=True,
    )
    for col, (scene, active) in zip(cols[1:-1], view.indicators, strict=True):
        col.button(
            str(scene),
            key=f"nav_scene_{scene}",
            help=SCENES[scene].title,
            type="primary" if active else "secondary",
            on_click=dispatch,
            args=(Navigate(scene),),
            use_container_width=True,
        )
    cols[-1].button(
        "Next →",
        key="nav_next",
        disabled=view.next_disabled,
        on_click=dispatch,
        args=(Step(1),),
        use_container_width=True,
    )
