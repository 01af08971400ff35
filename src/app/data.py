from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import streamlit as st

from ehstory.core.constants import SCENE_IDS
from ehstory.io import Dataset, StorySettings, load_dataset
from ehstory.story import SceneDescription, SceneFilters, build_scene
from ehstory.story.scenes import Placeholder

__all__ = [
    "CacheConfig",
    "load_story_dataset",
    "describe_scene",
    "latest_year",
]

# ---------- Cache configuration (factory of cached callables) ----------


@dataclass(frozen=True)
class CacheConfig:
    """Hashable cache configuration for Streamlit caching.

    Note: Streamlit's decorator parameters (ttl) are fixed at decoration time. We
    build and memoize decorated callables per (name, ttl) so the app can switch them
    at runtime while still benefiting from caching.
    """

    ttl: int | None = None

    @classmethod
    def from_settings(cls, settings: StorySettings) -> CacheConfig:
        return cls(ttl=settings.cache_ttl or None)


# Registry of decorated functions by (loader_name, CacheConfig)
_CACHE_REGISTRY: dict[tuple[str, CacheConfig], Callable[..., Any]] = {}


def _get_resource(loader_name: str, cfg: CacheConfig, fn: Callable[..., Any]) -> Callable[..., Any]:
    # Dataset holds a Polars frame; share one instance instead of pickling copies.
    key = (loader_name, cfg)
    if key not in _CACHE_REGISTRY:
        _CACHE_REGISTRY[key] = st.cache_resource(ttl=cfg.ttl)(fn)
    return _CACHE_REGISTRY[key]


# ---------- Loaders (internal implementations) ----------


def _load_story_dataset_impl(source: str, use_fallback: bool) -> Dataset:
    return load_dataset(source, fallback=use_fallback)


# ---------- Public loader APIs (dispatch to cached implementations) ----------


def load_story_dataset(settings: StorySettings, *, cfg: CacheConfig | None = None) -> Dataset:
    """Load the observation store once per (source, fallback) and cache it across reruns."""
    cache = cfg or CacheConfig.from_settings(settings)
    fn = _get_resource("load_story_dataset", cache, _load_story_dataset_impl)
    return fn(settings.data_source, settings.use_fallback)  # type: ignore[no-any-return]


def latest_year(dataset: Dataset) -> int | None:
    return dataset.years[0] if dataset.years else None


def describe_scene(
    dataset: Dataset, scene: int, filters: SceneFilters, settings: StorySettings
) -> SceneDescription | Placeholder:
    """Build one scene; out-of-range scene numbers fall back to the first scene."""
    return build_scene(dataset, scene if scene in SCENE_IDS else SCENE_IDS[0], filters, settings)
