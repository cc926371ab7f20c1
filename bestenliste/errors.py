"""Exception types raised by the Bestenliste pipeline."""
from __future__ import annotations

from typing import Optional


class BestenlisteError(Exception):
    """Base class for every error the pipeline raises."""


class FetchError(BestenlisteError):
    """Raised when the ranking page cannot be retrieved."""


class SchemaMismatch(BestenlisteError):
    """Raised when the page layout does not look like a ranking table."""


class ParseError(BestenlisteError, ValueError):
    """Raised when a table row cannot be interpreted as an entry."""

    def __init__(
        self,
        message: str,
        *,
        column: Optional[int] = None,
        field: Optional[str] = None,
        raw: Optional[str] = None,
        row_index: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.column = column
        self.field = field
        self.raw = raw
        self.row_index = row_index
