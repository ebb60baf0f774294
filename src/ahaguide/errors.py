"""Error types raised by the guideline store and query façade."""

from __future__ import annotations


class InvalidQueryError(ValueError):
    """Raised when a blank query reaches the search path."""


class GuidelineLoadError(RuntimeError):
    """Raised when a persisted guideline file cannot be read or parsed."""


__all__ = ["GuidelineLoadError", "InvalidQueryError"]
