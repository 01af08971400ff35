"""
Filter Engine: (dataset frame, criteria) -> filtered frame.

Categorical criteria are exact matches where "all" (or None) passes every record for
that dimension. After categorical filtering the minimum-viability rule drops records
that carry neither income per capita nor life expectancy. Polars filters keep input
order, and nothing here mutates the input frame.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import polars as pl

from ehstory.core.constants import ALL, ANCHOR_FIELDS

__all__ = [
    "FilterCriteria",
    "filter_observations",
    "require_fields",
]


@dataclass(frozen=True)
class FilterCriteria:
    """
    Recognized filter options.

    Attributes:
        year (int | str | None): Exact year, or "all"/None for every year.
        region (str | None): Exact region, or "all"/None.
        income (str | None): Exact income tier, or "all"/None.
        min_year (int | None): Inclusive lower bound on year (Scene 3 aggregates 2010+).
    """

    year: int | str | None = None
    region: str | None = ALL
    income: str | None = ALL
    min_year: int | None = None


def _is_open(value: object) -> bool:
    return value is None or value == ALL


def filter_observations(frame: pl.DataFrame, criteria: FilterCriteria | None = None) -> pl.DataFrame:
    """
    Apply categorical criteria, then the minimum-viability rule.

    Args:
        frame (pl.DataFrame): Observation frame (OBSERVATION_SCHEMA columns).
        criteria (FilterCriteria | None): Options; None means no categorical filtering.

    Returns:
        pl.DataFrame: Subset of `frame` in input order.

    Examples:
        >>> filter_observations(ds.frame, FilterCriteria(year=2021, region="Sub-Saharan Africa"))
    """
    c = criteria or FilterCriteria()
    predicates: list[pl.Expr] = []
    if not _is_open(c.year):
        predicates.append(pl.col("year") == int(c.year))  # type: ignore[arg-type]
    if c.min_year is not None:
        predicates.append(pl.col("year") >= int(c.min_year))
    if not _is_open(c.region):
        predicates.append(pl.col("region") == c.region)
    if not _is_open(c.income):
        predicates.append(pl.col("income_group") == c.income)

    # Minimum viability: at least one anchor indicator present
    predicates.append(pl.any_horizontal([pl.col(f).is_not_null() for f in ANCHOR_FIELDS]))
    return frame.filter(*predicates)


def require_fields(frame: pl.DataFrame, fields: Iterable[str]) -> pl.DataFrame:
    """Drop records missing any of `fields` (plot eligibility); order preserved."""
    need = list(dict.fromkeys(fields))
    if not need:
        return frame
    return frame.filter(pl.all_horizontal([pl.col(f).is_not_null() for f in need]))
