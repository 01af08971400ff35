"""
Story-wide constants: indicator field names, income tiers, palette and scene numbering.

This module is zero-IO and uses only the Python standard library. Every other module
reads its vocabulary from here so the same tier always gets the same color, in every
scene and on every render.

Notes:
    - INCOME_TIERS is ordered from lowest to highest tier.
    - Colors for tiers are fixed; do not derive them from the data.
"""

from __future__ import annotations

from typing import Final

__all__ = [
    "NUMERIC_FIELDS",
    "ANCHOR_FIELDS",
    "INCOME_TIERS",
    "INCOME_COLORS",
    "UNKNOWN_COLOR",
    "EDUCATION_METRICS",
    "FIELD_LABELS",
    "ALL",
    "SCENE_IDS",
    "FIRST_SCENE",
    "LAST_SCENE",
    "DEFAULT_POPULATION",
    "INCOME_FLOOR",
]

# Nullable numeric indicators carried by every observation.
NUMERIC_FIELDS: Final[tuple[str, ...]] = (
    "income_per_capita",
    "hiv_incidence_rate",
    "adult_literacy_rate",
    "secondary_school_enrollment",
    "condom_use_average",
    "total_population",
    "life_expectancy",
)

# A record must carry at least one of these to be usable at all.
ANCHOR_FIELDS: Final[tuple[str, str]] = ("income_per_capita", "life_expectancy")

INCOME_TIERS: Final[tuple[str, ...]] = (
    "Low income",
    "Lower middle income",
    "Upper middle income",
    "High income",
)

INCOME_COLORS: Final[dict[str, str]] = {
    "Low income": "#dc2626",
    "Lower middle income": "#d97706",
    "Upper middle income": "#059669",
    "High income": "#2563eb",
}

UNKNOWN_COLOR: Final[str] = "#9ca3af"

# Scene 2 metric toggle: field -> axis label
EDUCATION_METRICS: Final[dict[str, str]] = {
    "secondary_school_enrollment": "Secondary School Enrollment (%)",
    "adult_literacy_rate": "Adult Literacy Rate (%)",
}

FIELD_LABELS: Final[dict[str, str]] = {
    "income_per_capita": "Income Per Capita (USD) - Log Scale",
    "hiv_incidence_rate": "HIV Incidence Rate (per 1,000)",
    "adult_literacy_rate": "Adult Literacy Rate (%)",
    "secondary_school_enrollment": "Secondary School Enrollment (%)",
    "condom_use_average": "Condom Use Rate (%)",
    "total_population": "Population",
    "life_expectancy": "Life Expectancy (years)",
}

# Sentinel accepted by every categorical filter.
ALL: Final[str] = "all"

SCENE_IDS: Final[tuple[int, int, int]] = (1, 2, 3)
FIRST_SCENE: Final[int] = SCENE_IDS[0]
LAST_SCENE: Final[int] = SCENE_IDS[-1]

# Radius fallback for records with no population figure.
DEFAULT_POPULATION: Final[float] = 1_000_000.0

# Lower bound of the income log domain (avoids log(0)).
INCOME_FLOOR: Final[float] = 100.0
