"""
Embedded fallback sample used when the dataset resource cannot be loaded.

Ten countries for 2021 plus 2015 and 2010 points for four of them, in the same record
shape as data/processed_data.json. Secondary school enrollment is absent from the
sample, so Scene 2 falls back to its placeholder unless literacy is selected.
"""

from __future__ import annotations

from typing import Any, Final

_COLUMNS: Final[tuple[str, ...]] = (
    "country_name",
    "country_code",
    "year",
    "region",
    "income_group",
    "income_per_capita",
    "hiv_incidence_rate",
    "adult_literacy_rate",
    "life_expectancy",
    "total_population",
    "condom_use_average",
)

_ROWS: Final[tuple[tuple[Any, ...], ...]] = (
    ("United States", "USA", 2021, "North America", "High income", 63593, 0.38, 99, 78.86, 331893745, 61),
    ("Germany", "DEU", 2021, "Europe & Central Asia", "High income", 46208, 0.12, 99, 81.33, 83129285, 65),
    ("South Africa", "ZAF", 2021, "Sub-Saharan Africa", "Upper middle income", 6374, 7.7, 87, 64.13, 59392255, 45),
    ("Brazil", "BRA", 2021, "Latin America & Caribbean", "Upper middle income", 7507, 0.41, 93, 75.88, 213993437, 55),
    ("India", "IND", 2021, "South Asia", "Lower middle income", 1947, 0.07, 74, 69.66, 1380004385, 32),
    ("China", "CHN", 2021, "East Asia & Pacific", "Upper middle income", 10500, 0.03, 97, 78.21, 1412360000, 48),
    ("Nigeria", "NGA", 2021, "Sub-Saharan Africa", "Lower middle income", 2097, 0.52, 62, 54.69, 218541212, 28),
    ("Thailand", "THA", 2021, "East Asia & Pacific", "Upper middle income", 7189, 0.06, 93, 77.15, 69950850, 72),
    ("Kenya", "KEN", 2021, "Sub-Saharan Africa", "Lower middle income", 1816, 1.4, 82, 66.7, 54027487, 58),
    ("Rwanda", "RWA", 2021, "Sub-Saharan Africa", "Low income", 822, 0.26, 73, 69.0, 13276513, 54),
    ("United States", "USA", 2015, "North America", "High income", 56863, 0.42, 99, 78.69, 321418820, 58),
    ("South Africa", "ZAF", 2015, "Sub-Saharan Africa", "Upper middle income", 5724, 10.2, 85, 62.77, 55386367, 42),
    ("Thailand", "THA", 2015, "East Asia & Pacific", "Upper middle income", 5970, 0.09, 93, 76.43, 68863514, 68),
    ("Rwanda", "RWA", 2015, "Sub-Saharan Africa", "Low income", 697, 0.35, 68, 66.1, 11917508, 48),
    ("United States", "USA", 2010, "North America", "High income", 48374, 0.48, 99, 78.54, 309321666, 54),
    ("South Africa", "ZAF", 2010, "Sub-Saharan Africa", "Upper middle income", 7275, 15.1, 82, 58.09, 51216964, 38),
    ("Thailand", "THA", 2010, "East Asia & Pacific", "Upper middle income", 5112, 0.15, 92, 75.24, 66402316, 62),
    ("Rwanda", "RWA", 2010, "Sub-Saharan Africa", "Low income", 594, 0.68, 63, 62.3, 10412820, 35),
)


def fallback_records() -> list[dict[str, Any]]:
    """Return a fresh copy of the embedded sample as JSON-shaped dicts."""
    return [dict(zip(_COLUMNS, row, strict=True)) for row in _ROWS]
