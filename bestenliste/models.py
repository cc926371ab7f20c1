"""Data models for season ranking entries."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ParseError


@dataclass(frozen=True)
class Entry:
    """One athlete's best result in a season ranking."""

    year: int
    rank: int
    name: str
    club: str
    score: float


@dataclass(frozen=True)
class RowResult:
    """Outcome of parsing a single table row."""

    index: int
    entry: Optional[Entry] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.entry is not None
