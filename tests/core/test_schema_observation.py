from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from ehstory.core.constants import INCOME_TIERS
from ehstory.core.errors import SchemaError, StoryError
from ehstory.core.schema import OBSERVATION_COLUMNS, Observation


def _base(**overrides) -> dict:
    rec = {
        "country_name": "Rwanda",
        "country_code": "RWA",
        "year": 2021,
        "region": "Sub-Saharan Africa",
        "income_group": "Low income",
        "income_per_capita": 822,
        "hiv_incidence_rate": 0.26,
    }
    rec.update(overrides)
    return rec


def test_observation_accepts_minimal_record_and_keeps_absence_distinct_from_zero() -> None:
    obs = Observation.model_validate(_base(adult_literacy_rate=0))
    assert obs.adult_literacy_rate == 0.0
    assert obs.life_expectancy is None
    assert obs.condom_use_average is None


def test_observation_key_prefers_code_then_name() -> None:
    assert Observation.model_validate(_base()).key == "RWA"
    assert Observation.model_validate(_base(country_code="")).key == "Rwanda"
    assert Observation.model_validate(_base(country_code=None)).key == "Rwanda"


@pytest.mark.parametrize("tier", INCOME_TIERS)
def test_observation_accepts_every_income_tier(tier: str) -> None:
    assert Observation.model_validate(_base(income_group=tier)).income_group == tier


def test_observation_rejects_unknown_income_tier() -> None:
    with pytest.raises(ValidationError) as ei:
        Observation.model_validate(_base(income_group="Middle income"))
    assert "income_group must be one of" in str(ei.value)


def test_observation_allows_missing_categoricals() -> None:
    obs = Observation.model_validate(_base(region="  ", income_group=None))
    assert obs.region is None
    assert obs.income_group is None


@pytest.mark.parametrize("bad", [-1.0, math.inf, math.nan])
def test_observation_rejects_negative_or_non_finite_indicators(bad: float) -> None:
    with pytest.raises(ValidationError):
        Observation.model_validate(_base(hiv_incidence_rate=bad))


def test_observation_ignores_unknown_keys_and_is_frozen() -> None:
    obs = Observation.model_validate(_base(gdp_growth=3.1))
    assert not hasattr(obs, "gdp_growth")
    with pytest.raises(ValidationError):
        obs.year = 2020  # type: ignore[misc]


def test_schema_error_is_a_story_value_error() -> None:
    assert issubclass(SchemaError, StoryError)
    assert issubclass(SchemaError, ValueError)


def test_observation_columns_follow_model_fields() -> None:
    assert list(OBSERVATION_COLUMNS) == list(Observation.model_fields)
    assert OBSERVATION_COLUMNS["year"] == "i64"
    assert OBSERVATION_COLUMNS["total_population"] == "f64"
