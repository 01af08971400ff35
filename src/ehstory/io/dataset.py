"""
Dataset Store for ehstory.io.

Loads the observation array exactly once, validates every record against
ehstory.core.schema.Observation, and materializes an immutable Polars frame plus the
derived option sets used by the filter controls (regions, income groups, years).

Source of truth
- Record model and column descriptor: ehstory.core.schema (Observation, OBSERVATION_COLUMNS)
- Fallback sample: ehstory.io.fallback

Import DAG discipline:
- Depends on stdlib, polars, requests and ehstory.core.*.
- Must not import story or app layers.

Notes
- All-or-nothing: one invalid record fails the whole load with DatasetLoadError, which
  load_dataset converts into the fallback sample unless fallback=False.
- Nothing in the frame is mutated after load; filtered views are new frames.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import polars as pl
import requests
from pydantic import ValidationError

from ehstory.core.schema import OBSERVATION_COLUMNS, Observation

from .errors import DatasetLoadError
from .fallback import fallback_records

__all__ = [
    "OBSERVATION_SCHEMA",
    "FALLBACK_SOURCE",
    "Dataset",
    "read_records",
    "load_dataset",
]

logger = logging.getLogger(__name__)

_DTYPES: dict[str, pl.DataType] = {"str": pl.Utf8(), "i64": pl.Int64(), "f64": pl.Float64()}

OBSERVATION_SCHEMA: dict[str, pl.DataType] = {
    name: _DTYPES[kind] for name, kind in OBSERVATION_COLUMNS.items()
}

FALLBACK_SOURCE = "fallback"


@dataclass(frozen=True)
class Dataset:
    """
    Immutable, loaded-once observation store.

    Attributes:
        frame (pl.DataFrame): All observations in source order (schema OBSERVATION_SCHEMA).
        source (str): Where the records came from, or "fallback".
        regions (tuple[str, ...]): Distinct non-null regions, sorted.
        income_groups (tuple[str, ...]): Distinct non-null income tiers, sorted.
        years (tuple[int, ...]): Distinct years, sorted descending.
    """

    frame: pl.DataFrame
    source: str
    regions: tuple[str, ...]
    income_groups: tuple[str, ...]
    years: tuple[int, ...]

    @classmethod
    def from_records(cls, records: list[dict[str, Any]], *, source: str) -> Dataset:
        """
        Validate records and build the store.

        Args:
            records (list[dict[str, Any]]): JSON-shaped observation dicts.
            source (str): Label recorded on the dataset.

        Returns:
            Dataset

        Raises:
            DatasetLoadError: If any record fails Observation validation.
        """
        rows: list[dict[str, Any]] = []
        for idx, raw in enumerate(records):
            if not isinstance(raw, dict):
                raise DatasetLoadError(f"record {idx} is not an object")
            try:
                obs = Observation.model_validate(raw)
            except ValidationError as e:
                raise DatasetLoadError(f"record {idx} failed validation: {e}") from e
            rows.append(obs.model_dump())

        frame = pl.DataFrame(rows, schema=OBSERVATION_SCHEMA)
        return cls(
            frame=frame,
            source=source,
            regions=_distinct_sorted(frame, "region"),
            income_groups=_distinct_sorted(frame, "income_group"),
            years=tuple(sorted(set(frame.get_column("year").to_list()), reverse=True)),
        )

    @property
    def height(self) -> int:
        return self.frame.height

    @property
    def is_fallback(self) -> bool:
        return self.source == FALLBACK_SOURCE

    def year_bounds(self) -> tuple[int, int]:
        """Return (min_year, max_year); (0, 0) for an empty store."""
        if not self.years:
            return (0, 0)
        return (self.years[-1], self.years[0])


def _distinct_sorted(frame: pl.DataFrame, column: str) -> tuple[str, ...]:
    values = frame.get_column(column).drop_nulls().unique().to_list()
    return tuple(sorted(v for v in values if v))


def read_records(source: str | Path, *, timeout: float = 10.0) -> list[dict[str, Any]]:
    """
    Fetch and parse the JSON observation array from a path or http(s) URL.

    Args:
        source (str | Path): Local file path or URL.
        timeout (float): Request timeout in seconds for URLs.

    Returns:
        list[dict[str, Any]]: Raw records (not yet validated).

    Raises:
        DatasetLoadError: On missing file, HTTP failure, invalid JSON or a non-array payload.
    """
    src = str(source)
    try:
        if src.startswith(("http://", "https://")):
            resp = requests.get(src, timeout=timeout)
            resp.raise_for_status()
            payload = resp.json()
        else:
            path = Path(src)
            if not path.exists():
                raise DatasetLoadError(f"Dataset not found: {path}")
            payload = json.loads(path.read_text(encoding="utf-8"))
    except DatasetLoadError:
        raise
    except (OSError, ValueError, requests.RequestException) as e:
        raise DatasetLoadError(f"Failed to read dataset from {src}: {e}") from e

    if not isinstance(payload, list):
        raise DatasetLoadError(f"Dataset at {src} must be a JSON array, got {type(payload).__name__}")
    return payload


def load_dataset(source: str | Path, *, fallback: bool = True, timeout: float = 10.0) -> Dataset:
    """
    Load the dataset once, substituting the embedded sample on failure.

    Args:
        source (str | Path): Local path or URL of the JSON array.
        fallback (bool): If True (default), recover from DatasetLoadError with the
            embedded sample; if False, re-raise.
        timeout (float): Request timeout for URLs.

    Returns:
        Dataset: Loaded store; `source` is "fallback" when the sample was used.

    Raises:
        DatasetLoadError: Only when fallback is False.
    """
    try:
        records = read_records(source, timeout=timeout)
        ds = Dataset.from_records(records, source=str(source))
    except DatasetLoadError as e:
        if not fallback:
            raise
        logger.warning("%s; using embedded fallback sample", e)
        ds = Dataset.from_records(fallback_records(), source=FALLBACK_SOURCE)
    logger.info(
        "Data loaded: %d records, %d regions (source=%s)", ds.height, len(ds.regions), ds.source
    )
    return ds
