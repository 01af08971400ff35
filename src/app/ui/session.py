"""
Session-state glue between Streamlit and the story reducer.

Streamlit keeps `st.session_state` across reruns of one browser session; this module
is the only place that reads or writes the story keys in it:

- "story_state": the ehstory StoryState (current scene, per-scene filters).
- "story_marks": last rendered marks per scene, the `previous` side of a transition.
- "story_delay_ms": pending render delay set by a debounced input.

Widget callbacks call dispatch(); page code calls get_state().
"""

from __future__ import annotations

import logging

import streamlit as st

from ehstory.story import Navigate, StoryState, initial_state, reduce, render_delay_ms
from ehstory.story.state import Action
from ehstory.story.transitions import Mark

logger = logging.getLogger(__name__)

STATE_KEY = "story_state"
MARKS_KEY = "story_marks"
DELAY_KEY = "story_delay_ms"
DEBOUNCE_KEY = "story_debounce_ms"


def init_session(default_year: int | None, *, default_scene: int | None = None, debounce_ms: int = 50) -> None:
    """Seed the story keys on the first run of a session; later runs keep what is there."""
    if STATE_KEY not in st.session_state:
        state = initial_state(default_year)
        if default_scene is not None:
            state = reduce(state, Navigate(default_scene))
        st.session_state[STATE_KEY] = state
    if MARKS_KEY not in st.session_state:
        st.session_state[MARKS_KEY] = {}
    if DELAY_KEY not in st.session_state:
        st.session_state[DELAY_KEY] = 0
    st.session_state[DEBOUNCE_KEY] = int(debounce_ms)


def get_state() -> StoryState:
    return st.session_state.get(STATE_KEY) or initial_state()


def dispatch(action: Action) -> None:
    """Reduce `action` into the session state and schedule its render delay."""
    before = get_state()
    after = reduce(before, action)
    st.session_state[STATE_KEY] = after
    delay = render_delay_ms(action, int(st.session_state.get(DEBOUNCE_KEY, 50)))
    st.session_state[DELAY_KEY] = delay
    if after is not before:
        logger.debug("Applied %r (scene %d -> %d)", action, before.scene, after.scene)


def take_render_delay_ms() -> int:
    """Pop the pending render delay (0 when none)."""
    delay = int(st.session_state.get(DELAY_KEY, 0))
    st.session_state[DELAY_KEY] = 0
    return delay


def previous_marks(scene: int) -> tuple[Mark, ...]:
    return tuple(st.session_state.get(MARKS_KEY, {}).get(scene, ()))


def remember_marks(scene: int, marks: tuple[Mark, ...]) -> None:
    st.session_state.setdefault(MARKS_KEY, {})[scene] = marks
