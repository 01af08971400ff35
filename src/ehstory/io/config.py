"""
Configuration for the ehstory package.

Defines StorySettings, a frozen dataclass carrying runtime configuration for loading the
dataset and rendering the three scenes. Defaults mirror the published story layout
(1100x500 canvas minus margins, 800 ms transitions, 50 ms slider debounce).

Precedence
- Environment variables (EHSTORY_*) > TOML (./ehstory.toml or [tool.ehstory] in
  ./pyproject.toml) > defaults.

Import DAG discipline
- Depends only on stdlib and ehstory.io.errors.
- Does not import story or app layers.

Notes
- Unparseable values are ignored field by field so a typo in one variable does not
  discard the rest of the configuration. validate() is the strict check.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .errors import ConfigError

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class StorySettings:
    """
    Runtime settings for the story.

    Attributes:
        data_source (str): Path or http(s) URL of the JSON observation array.
        use_fallback (bool): Substitute the embedded sample when the load fails.
        chart_width (int): Plot area width in pixels (excluding margins).
        chart_height (int): Plot area height in pixels (excluding margins).
        transition_ms (int): Duration of entrance/update transitions; exits take half.
        debounce_ms (int): Delay before re-rendering after a continuous input (slider).
        animate (bool): Play transitions frame by frame; False renders the end state only.
        frame_count (int): Number of intermediate frames per transition.
        trend_samples (int): Segments of the sampled trend line (points = samples + 1).
        cache_ttl (int): Seconds the loaded dataset stays cached (0 disables TTL).
        log_level (str): Root level for ehstory/app loggers.

    Examples:
        >>> from ehstory.io.config import StorySettings
        >>> StorySettings(chart_width=600).chart_width
        600
    """

    data_source: str = "data/processed_data.json"
    use_fallback: bool = True
    chart_width: int = 940
    chart_height: int = 360
    transition_ms: int = 800
    debounce_ms: int = 50
    animate: bool = True
    frame_count: int = 12
    trend_samples: int = 50
    cache_ttl: int = 600
    log_level: str = "INFO"

    @classmethod
    def _apply_mapping(cls, base: StorySettings, cfg: dict[str, Any] | None) -> StorySettings:
        """Apply a loose config mapping onto StorySettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        def _bool(v: Any) -> bool:
            if isinstance(v, bool):
                return v
            if isinstance(v, (int, float)):
                return bool(v)
            if isinstance(v, str):
                return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
            return False

        if "data_source" in cfg and isinstance(cfg["data_source"], str) and cfg["data_source"]:
            s = replace(s, data_source=cfg["data_source"])

        for name in ("use_fallback", "animate"):
            if name in cfg:
                s = replace(s, **{name: _bool(cfg[name])})

        for name in (
            "chart_width",
            "chart_height",
            "transition_ms",
            "debounce_ms",
            "frame_count",
            "trend_samples",
            "cache_ttl",
        ):
            if name in cfg:
                try:
                    s = replace(s, **{name: int(cfg[name])})
                except (TypeError, ValueError):
                    pass

        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            level = cfg["log_level"].strip().upper()
            if level in _LOG_LEVELS:
                s = replace(s, log_level=level)

        return s

    @classmethod
    def from_env(cls, base: StorySettings | None = None, prefix: str = "EHSTORY_") -> StorySettings:
        """
        Build StorySettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - EHSTORY_DATA_SOURCE
            - EHSTORY_USE_FALLBACK (1/0/true/false/yes/no/on/off)
            - EHSTORY_CHART_WIDTH, EHSTORY_CHART_HEIGHT
            - EHSTORY_TRANSITION_MS, EHSTORY_DEBOUNCE_MS
            - EHSTORY_ANIMATE, EHSTORY_FRAME_COUNT
            - EHSTORY_TREND_SAMPLES
            - EHSTORY_CACHE_TTL
            - EHSTORY_LOG_LEVEL
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for name in (
            "data_source",
            "use_fallback",
            "chart_width",
            "chart_height",
            "transition_ms",
            "debounce_ms",
            "animate",
            "frame_count",
            "trend_samples",
            "cache_ttl",
            "log_level",
        ):
            v = os.getenv(prefix + name.upper())
            if v:
                mapping[name] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> StorySettings:
        """
        Build StorySettings from a TOML file.

        Search order when `path` is None:
            1) ./ehstory.toml (with either a [story] table or top-level keys)
            2) ./pyproject.toml under [tool.ehstory]

        Returns defaults if no file is present or none parses.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "ehstory.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("ehstory") if isinstance(tool, dict) else None
            elif isinstance(data.get("story"), dict):
                cfg = data["story"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> StorySettings:
        """
        Load StorySettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (ehstory.toml, pyproject.toml).

        Returns:
            StorySettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s

    def validate(self) -> StorySettings:
        """
        Check numeric settings are usable; return self for chaining.

        Raises:
            ConfigError: If a dimension, frame count or sample count is not positive, or a
                delay/TTL is negative.
        """
        for name in ("chart_width", "chart_height", "frame_count", "trend_samples"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be >= 1, got {getattr(self, name)}")
        for name in ("transition_ms", "debounce_ms", "cache_ttl"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0, got {getattr(self, name)}")
        return self


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the ehstory and app loggers at the given level."""
    fmt = logging.Formatter("%(levelname)s %(name)s: %(message)s")
    for name in ("ehstory", "app"):
        logger = logging.getLogger(name)
        logger.setLevel(level.upper() if level.upper() in _LOG_LEVELS else "INFO")
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(fmt)
            logger.addHandler(handler)
