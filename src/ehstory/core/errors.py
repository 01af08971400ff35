"""
Core exception types raised by schema validation, scale construction and the story reducer.

Provides typed exceptions for core-domain failures:
- SchemaError for observation records that violate the data model.
- ScaleError for scales asked to map a degenerate or non-finite domain.
- EmptyDomainError when a scene has no records left to scale.
- StateError for reducer actions that name an unknown scene field.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - EmptyDomainError is an expected condition: scene builders catch it and return
      a placeholder instead of a chart.

Examples:
    >>> from ehstory.core.errors import EmptyDomainError, ScaleError
    >>> issubclass(EmptyDomainError, ScaleError)
    True
"""

from __future__ import annotations

__all__ = [
    "StoryError",
    "SchemaError",
    "ScaleError",
    "EmptyDomainError",
    "StateError",
]


class StoryError(Exception):
    """Base class for ehstory errors."""


class SchemaError(StoryError, ValueError):
    """Observation record failed model validation (bad tier, negative or non-finite value)."""


class ScaleError(StoryError, ValueError):
    """Scale construction failure (non-finite or inverted domain)."""


class EmptyDomainError(ScaleError):
    """No values to derive a scale domain from."""


class StateError(StoryError, ValueError):
    """Reducer received an action it cannot apply."""
