"""
Value formatting shared by the chart adapter and the UI.

This module centralizes small cross-cutting helpers (value formatting for axes,
crosshair labels and tooltips). It sits beside app.charts rather than under app.ui
so the chart adapter never imports the page package.

Notes:
    - Formatting mirrors the published story: income as "$822", "$6.4k" or "$64k",
      percentages and rates with one decimal place.
    - This module contains no Streamlit state manipulation.
"""

from __future__ import annotations

import math
from typing import Any


def format_income(value: float | None) -> str:
    """Format income per capita the way the story labels dollars.

    Below $1k the whole dollar amount is shown, from $1k to $10k one decimal of
    thousands, and from $10k whole thousands.

    Args:
        value (float | None): Income in USD.

    Returns:
        str: "$822", "$6.4k" or "$64k" style label, or "n/a" when missing.

    Examples:
        >>> format_income(12345)
        '$12k'
    """
    if value is None:
        return "n/a"
    if value >= 10_000:
        return f"${math.floor(value / 1000 + 0.5)}k"
    if value >= 1000:
        return f"${value / 1000:.1f}k"
    return f"${math.floor(value + 0.5)}"


def format_percent(value: float | None) -> str:
    """One-decimal percentage ("42.0%"); "n/a" when missing."""
    if value is None:
        return "n/a"
    return f"{value:.1f}%"


def format_decimal(value: float | None) -> str:
    if value is None:
        return "n/a"
    return f"{value:.1f}"


def format_population(value: float | None) -> str:
    """Population in millions with one decimal ("59.4M"); "n/a" when missing."""
    if value is None:
        return "n/a"
    if value >= 1e6:
        return f"{value / 1e6:.1f}M"
    return f"{value:,.0f}"


_FORMATTERS = {
    "income": format_income,
    "percent": format_percent,
    "decimal": format_decimal,
}


def format_value(kind: str, value: float | None) -> str:
    """Dispatch on an axis format name ("income", "percent", "decimal")."""
    return _FORMATTERS.get(kind, format_decimal)(value)


def tick_label_expr(kind: str) -> str | None:
    """Vega expression for axis tick labels matching format_value, or None for defaults."""
    if kind == "income":
        return (
            "datum.value >= 10000 ? '$' + format(datum.value / 1000, '.0f') + 'k'"
            " : datum.value >= 1000 ? '$' + format(datum.value / 1000, '.1f') + 'k'"
            " : '$' + format(datum.value, '.0f')"
        )
    if kind == "percent":
        return "format(datum.value, '~g') + '%'"
    return None


def tooltip_rows(datum: dict[str, Any], x_field: str, x_format: str, y_field: str, y_format: str) -> dict[str, str]:
    """Human-readable tooltip fields for one record.

    Args:
        datum (dict[str, Any]): Observation record behind the mark.
        x_field (str): Plotted x indicator.
        x_format (str): Format name for x.
        y_field (str): Plotted y indicator.
        y_format (str): Format name for y.

    Returns:
        dict[str, str]: Keys tt_country, tt_region, tt_income, tt_year, tt_x, tt_y, tt_population.
    """
    return {
        "tt_country": str(datum.get("country_name") or "n/a"),
        "tt_region": str(datum.get("region") or "n/a"),
        "tt_income": str(datum.get("income_group") or "n/a"),
        "tt_year": str(datum.get("year") or "n/a"),
        "tt_x": format_value(x_format, datum.get(x_field)),
        "tt_y": format_value(y_format, datum.get(y_field)),
        "tt_population": format_population(datum.get("total_population")),
    }
