"""
Story app UI package.

This package contains the Streamlit UI for the Education-Health story. It exposes
the page orchestrator and focused modules for separate concerns.

Modules:
    - app: Streamlit application orchestrator (streamlit_app).
    - session: StoryState in st.session_state and action dispatch.
    - controls: Per-scene filter widgets.
    - navigation: Previous/Next buttons and scene indicators.
    - player: Transition playback into a single chart slot.

Usage:
    from app.ui import streamlit_app
    streamlit_app(default_data="data/processed_data.json", default_scene=1)
"""

from __future__ import annotations

from .app import streamlit_app

__all__ = [
    "streamlit_app",
]
