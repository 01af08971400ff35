"""
Transition playback for one scene.

A Streamlit rerun redraws the page, so motion is played as a short sequence of Altair
charts written into the same st.empty() slot: the scene's TransitionPlan is sampled
with frame_at() at evenly spaced times and each frame replaces the previous one. A new
interaction starts a new rerun, which stops the current playback; the next plan starts
from the marks remembered for that scene.
"""

from __future__ import annotations

import logging
import time

import streamlit as st

from ehstory.io import StorySettings
from ehstory.story import SceneDescription, frame_at, frame_times, plan_transition
from ehstory.story.scenes import Placeholder

from app.charts import placeholder_chart, scene_chart

from .session import previous_marks, remember_marks, take_render_delay_ms

logger = logging.getLogger(__name__)


def play_scene(description: SceneDescription | Placeholder, settings: StorySettings) -> None:
    """Draw a scene, animating from its last rendered marks when animation is enabled.

    Args:
        description (SceneDescription | Placeholder): Output of build_scene.
        settings (StorySettings): transition_ms, frame_count and animate are read here.
    """
    delay = take_render_delay_ms()
    if delay:
        # Slider debounce; a further change reruns the script and supersedes this one
        time.sleep(delay / 1000.0)

    slot = st.empty()
    if isinstance(description, Placeholder):
        slot.altair_chart(placeholder_chart(description), theme=None, use_container_width=False)
        remember_marks(description.scene, ())
        return

    previous = previous_marks(description.scene)
    # Remember first: an interrupted playback still starts the next plan from here
    remember_marks(description.scene, description.marks)

    if settings.animate and previous != description.marks:
        plan = plan_transition(
            previous,
            description.marks,
            duration_ms=float(settings.transition_ms),
            stagger_ms=description.stagger_ms,
        )
        times = frame_times(plan, settings.frame_count)
        step_s = plan.total_ms / max(len(times) - 1, 1) / 1000.0
        logger.debug(
            "Scene %d: +%d ~%d -%d over %.0f ms",
            description.scene,
            len(plan.diff.added),
            len(plan.diff.retained),
            len(plan.diff.removed),
            plan.total_ms,
        )
        for t in times[:-1]:
            frame = scene_chart(description, frame_at(plan, t))
            slot.altair_chart(frame, theme=None, use_container_width=False)
            time.sleep(step_s)

    slot.altair_chart(scene_chart(description), theme=None, use_container_width=False)
