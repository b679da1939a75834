from __future__ import annotations


class GridError(Exception):
    """Base error for the grid overlay engine."""


class GridConfigurationError(GridError, ValueError):
    """Raised when a lines group, axis, viewport or theme cannot be used as configured."""
