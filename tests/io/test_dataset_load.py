from __future__ import annotations

import json
import logging
from pathlib import Path

import polars as pl
import pytest
import requests

from ehstory.io import dataset as dataset_mod
from ehstory.io.dataset import (
    FALLBACK_SOURCE,
    OBSERVATION_SCHEMA,
    Dataset,
    load_dataset,
    read_records,
)
from ehstory.io.errors import DatasetLoadError
from ehstory.io.fallback import fallback_records


def _write_json(tmp: Path, payload: object) -> Path:
    p = tmp / "processed_data.json"
    p.write_text(json.dumps(payload), encoding="utf-8")
    return p


def test_from_records_builds_frame_and_option_sets() -> None:
    ds = Dataset.from_records(fallback_records(), source="memory")

    assert ds.height == 18
    assert dict(ds.frame.schema) == OBSERVATION_SCHEMA
    assert ds.years == (2021, 2015, 2010)
    assert ds.year_bounds() == (2010, 2021)
    assert "Sub-Saharan Africa" in ds.regions
    assert list(ds.regions) == sorted(ds.regions)
    assert set(ds.income_groups) == {
        "Low income",
        "Lower middle income",
        "Upper middle income",
        "High income",
    }
    # Absent indicator stays null, not zero
    assert ds.frame.get_column("secondary_school_enrollment").null_count() == ds.height


def test_load_dataset_reads_local_json(tmp_path: Path, caplog) -> None:
    records = fallback_records()[:3]
    path = _write_json(tmp_path, records)

    with caplog.at_level(logging.INFO, logger="ehstory"):
        ds = load_dataset(path)

    assert ds.source == str(path)
    assert not ds.is_fallback
    assert ds.height == 3
    assert "Data loaded: 3 records" in caplog.text


def test_one_invalid_record_fails_the_whole_load(tmp_path: Path) -> None:
    records = fallback_records()[:3]
    records[1]["income_group"] = "Very high income"
    path = _write_json(tmp_path, records)

    with pytest.raises(DatasetLoadError, match="record 1"):
        load_dataset(path, fallback=False)


def test_load_dataset_falls_back_and_warns(tmp_path: Path, caplog) -> None:
    missing = tmp_path / "nope.json"

    with caplog.at_level(logging.WARNING, logger="ehstory"):
        ds = load_dataset(missing)

    assert ds.is_fallback
    assert ds.source == FALLBACK_SOURCE
    assert ds.height == len(fallback_records())
    assert "fallback" in caplog.text


def test_read_records_rejects_non_array_payload(tmp_path: Path) -> None:
    path = _write_json(tmp_path, {"records": []})
    with pytest.raises(DatasetLoadError, match="JSON array"):
        read_records(path)


def test_read_records_wraps_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(DatasetLoadError):
        read_records(path)


def test_read_records_fetches_urls_with_requests(monkeypatch) -> None:
    calls = {}

    class _Resp:
        def raise_for_status(self) -> None:
            return None

        def json(self) -> list[dict]:
            return fallback_records()[:2]

    def fake_get(url: str, timeout: float) -> _Resp:
        calls["url"] = url
        calls["timeout"] = timeout
        return _Resp()

    monkeypatch.setattr(dataset_mod.requests, "get", fake_get, raising=True)

    out = read_records("https://example.org/data.json", timeout=3.0)

    assert len(out) == 2
    assert calls == {"url": "https://example.org/data.json", "timeout": 3.0}


def test_http_failure_becomes_dataset_load_error(monkeypatch) -> None:
    def fake_get(url: str, timeout: float):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(dataset_mod.requests, "get", fake_get, raising=True)

    with pytest.raises(DatasetLoadError, match="offline"):
        read_records("https://example.org/data.json")


def test_frame_is_not_mutated_by_filtering() -> None:
    ds = Dataset.from_records(fallback_records(), source="memory")
    before = ds.frame.clone()
    ds.frame.filter(pl.col("year") == 2021)
    assert ds.frame.equals(before)
