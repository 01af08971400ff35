"""
ehstory.io — settings and the loaded-once Dataset Store.

## Public API
- StorySettings — env > TOML > defaults configuration.
- configure_logging — attach handlers for ehstory/app loggers.
- Dataset, load_dataset, read_records — all-or-nothing dataset loading with fallback.
- IoError, ConfigError, DatasetLoadError — IO-layer errors.
"""

from __future__ import annotations

from .config import StorySettings, configure_logging
from .dataset import FALLBACK_SOURCE, OBSERVATION_SCHEMA, Dataset, load_dataset, read_records
from .errors import ConfigError, DatasetLoadError, IoError

__all__ = [
    "StorySettings",
    "configure_logging",
    "Dataset",
    "FALLBACK_SOURCE",
    "OBSERVATION_SCHEMA",
    "load_dataset",
    "read_records",
    "IoError",
    "ConfigError",
    "DatasetLoadError",
]
