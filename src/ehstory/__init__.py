"""
ehstory — The Education–Health Connection, a three-scene narrative over World Bank indicators.

## Responsibilities
- Load the observation dataset once (with an embedded fallback sample).
- Filter, scale and describe each scene as plain data (no rendering library).
- Hold the navigation/filter session state behind a pure reducer.

## Public API
- core — constants, errors and the pydantic Observation model.
- io — StorySettings configuration and the Dataset Store.
- story — filters, scales, regression, annotations, transitions, scenes, state.

## Import DAG discipline
- core depends on stdlib + pydantic only.
- io depends on core, polars, requests.
- story depends on core, io (Dataset/StorySettings types) and polars.
- Nothing under ehstory imports streamlit or altair; the app package adapts
  scene descriptions to charts.
"""

from __future__ import annotations

__version__ = "0.3.0"
