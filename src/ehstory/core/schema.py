"""
Pydantic v2 model for a single country-year observation, plus its column descriptor.

Responsibilities
- Define the canonical Observation model used to validate loaded records.
- Reject unknown income tiers and numeric indicators that are negative or non-finite.
- Keep absence (None) distinct from zero for every numeric indicator.
- Publish OBSERVATION_COLUMNS, the ordered column -> dtype-name descriptor the IO layer
  materializes as a Polars schema.

Style
- Zero-IO (stdlib + pydantic only).
- Google-style docstrings with sections such as Attributes, Raises, Examples.

References
- constants: src/ehstory/core/constants.py (INCOME_TIERS, NUMERIC_FIELDS)
- errors: src/ehstory/core/errors.py (SchemaError)
- tests: tests/core/test_schema_observation.py
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .constants import INCOME_TIERS, NUMERIC_FIELDS
from .errors import SchemaError

__all__ = [
    "Observation",
    "OBSERVATION_COLUMNS",
]

# Ordered descriptor; dtype names are resolved to Polars dtypes in ehstory.io.dataset.
OBSERVATION_COLUMNS: dict[str, str] = {
    "country_name": "str",
    "country_code": "str",
    "year": "i64",
    "region": "str",
    "income_group": "str",
    **{name: "f64" for name in NUMERIC_FIELDS},
}


class Observation(BaseModel):
    """
    One country-year record with economic, educational and health indicators.

    Attributes:
        country_name (str): Display name.
        country_code (str | None): ISO3 code; stable across years for a given country.
        year (int): Observation year.
        region (str | None): World Bank region label.
        income_group (str | None): One of INCOME_TIERS when present.
        income_per_capita (float | None): GNI per capita, USD.
        hiv_incidence_rate (float | None): New infections per 1,000 uninfected.
        adult_literacy_rate (float | None): Percent of adults.
        secondary_school_enrollment (float | None): Gross enrollment ratio, percent.
        condom_use_average (float | None): Percent, averaged over available surveys.
        total_population (float | None): Headcount.
        life_expectancy (float | None): Years at birth.

    Raises:
        pydantic.ValidationError: Wrapping SchemaError when income_group is not a known
            tier, or a numeric field is negative, NaN or infinite.

    Examples:
        >>> from ehstory.core.schema import Observation
        >>> obs = Observation(country_name="Rwanda", country_code="RWA", year=2021,
        ...                   income_group="Low income", hiv_incidence_rate=0.26)
        >>> obs.life_expectancy is None
        True
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    country_name: str
    country_code: str | None = None
    year: int
    region: str | None = None
    income_group: str | None = None
    income_per_capita: float | None = None
    hiv_incidence_rate: float | None = None
    adult_literacy_rate: float | None = None
    secondary_school_enrollment: float | None = None
    condom_use_average: float | None = None
    total_population: float | None = None
    life_expectancy: float | None = None

    @field_validator("country_code", "region", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("income_group", mode="before")
    @classmethod
    def _check_income_group(cls, v: Any) -> Any:
        """
        Accept a known income tier (or blank/None).

        Raises:
            SchemaError: If the value is not one of INCOME_TIERS.
        """
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        if v not in INCOME_TIERS:
            raise SchemaError(f"income_group must be one of {INCOME_TIERS}, got {v!r}")
        return v

    @field_validator(*NUMERIC_FIELDS, mode="after")
    @classmethod
    def _check_indicator(cls, v: float | None) -> float | None:
        if v is None:
            return None
        if not math.isfinite(v):
            raise SchemaError(f"indicator must be finite, got {v!r}")
        if v < 0:
            raise SchemaError(f"indicator must be non-negative, got {v!r}")
        return v

    @property
    def key(self) -> str:
        """Stable mark identifier: country code, else country name."""
        return self.country_code or self.country_name
