from __future__ import annotations

import logging
from pathlib import Path

import pytest

from ehstory.io.config import StorySettings, configure_logging
from ehstory.io.errors import ConfigError

_ENV_KEYS = [
    "EHSTORY_DATA_SOURCE",
    "EHSTORY_USE_FALLBACK",
    "EHSTORY_CHART_WIDTH",
    "EHSTORY_CHART_HEIGHT",
    "EHSTORY_TRANSITION_MS",
    "EHSTORY_DEBOUNCE_MS",
    "EHSTORY_ANIMATE",
    "EHSTORY_FRAME_COUNT",
    "EHSTORY_TREND_SAMPLES",
    "EHSTORY_CACHE_TTL",
    "EHSTORY_LOG_LEVEL",
]


def _clear_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_story_toml(tmp: Path, content: str) -> Path:
    p = tmp / "ehstory.toml"
    p.write_text(content)
    return p


def test_story_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    # Arrange TOML
    _write_story_toml(
        tmp_path,
        """
        [story]
        data_source = "toml.json"
        transition_ms = 400
        animate = false
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    # Arrange ENV that should override TOML
    monkeypatch.setenv("EHSTORY_DATA_SOURCE", "https://example.org/env.json")
    monkeypatch.setenv("EHSTORY_TRANSITION_MS", "1200")

    # Act
    s = StorySettings.load()

    # Assert precedence: env > TOML > defaults
    assert s.data_source == "https://example.org/env.json"
    assert s.transition_ms == 1200
    assert s.animate is False  # TOML only
    assert s.debounce_ms == 50  # default


def test_story_settings_from_top_level_toml_keys(tmp_path: Path, monkeypatch) -> None:
    _write_story_toml(tmp_path, 'chart_width = 600\nlog_level = "debug"\n')
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = StorySettings.load()

    assert s.chart_width == 600
    assert s.log_level == "DEBUG"


def test_story_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.ehstory]\nframe_count = 4\nuse_fallback = "no"\n')
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = StorySettings.load()

    assert s.frame_count == 4
    assert s.use_fallback is False


def test_story_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = StorySettings.load()

    assert s == StorySettings()
    assert s.transition_ms == 800
    assert s.trend_samples == 50


def test_story_settings_ignores_unparseable_values_field_by_field(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("EHSTORY_CHART_HEIGHT", "tall")
    monkeypatch.setenv("EHSTORY_LOG_LEVEL", "chatty")
    monkeypatch.setenv("EHSTORY_CHART_WIDTH", "500")

    s = StorySettings.load()

    assert s.chart_height == 360
    assert s.log_level == "INFO"
    assert s.chart_width == 500


@pytest.mark.parametrize(
    "field,value",
    [("chart_width", 0), ("frame_count", -1), ("debounce_ms", -5), ("trend_samples", 0)],
)
def test_validate_rejects_out_of_range_numbers(field: str, value: int) -> None:
    with pytest.raises(ConfigError):
        StorySettings(**{field: value}).validate()


def test_configure_logging_sets_level_once() -> None:
    configure_logging("debug")
    configure_logging("debug")
    logger = logging.getLogger("ehstory")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
