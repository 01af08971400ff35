"""
Custom exceptions for the ehstory.io module.

Purpose
- Provide IO-layer specific error types that map cleanly to responsibilities in ehstory.io.
- Keep ehstory.core as the source of truth for record validation errors (see ehstory.core.errors).

Source of truth and boundaries
- ehstory.core.errors.SchemaError is raised by the Observation model validators.
- ehstory.io raises Io* errors for configuration and dataset loading concerns:
  - ConfigError: invalid settings values.
  - DatasetLoadError: the dataset resource could not be fetched, parsed or validated.

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in ehstory.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from ehstory.core errors.
    """


class ConfigError(IoError):
    """
    Raised when StorySettings hold values that cannot drive a render.

    Examples:
        - Non-positive chart width or height
        - Negative transition or debounce delay
    """


class DatasetLoadError(IoError):
    """
    Raised when the dataset resource cannot be loaded in full.

    Notes:
        Loading is all-or-nothing: a single invalid record fails the whole load. The
        Dataset Store catches this and substitutes the embedded fallback sample unless
        the caller disabled the fallback.
    """
