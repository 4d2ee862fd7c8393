"""Structured parsing/validation errors for the extraction pipeline."""

from __future__ import annotations
from typing import Any


class ParsingError(Exception):
    """Base class for parsing related issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ValidationError(ParsingError):
    """Raised when an extracted row cannot become a ClubRow (no usable name).

    Extractors catch it and drop the row; it never aborts a run.
    """


class UnknownSourceError(ParsingError, ValueError):
    """Raised when a source identifier is not one of the supported sources."""
