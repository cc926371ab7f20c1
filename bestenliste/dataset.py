"""Turn raw ranking rows into filtered, optionally grouped, entries."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Sequence

import pandas as pd

from .models import Entry, RowResult
from .parser import COLUMNS, ColumnSpec, try_parse_row

logger = logging.getLogger(__name__)

ON_ERROR_POLICIES = ("abort", "skip")

ENTRY_COLUMNS = ["year", "rank", "name", "club", "score"]


def iter_results(
    rows: Sequence[Sequence[str]],
    *,
    year: int,
    columns: Sequence[ColumnSpec] = COLUMNS,
) -> Iterator[RowResult]:
    """Yield one :class:`RowResult` per data row, skipping the header row."""

    for index, cells in enumerate(rows):
        if index == 0:
            continue
        yield try_parse_row(cells, year=year, index=index, columns=columns)


def iter_entries(
    rows: Sequence[Sequence[str]],
    *,
    year: int,
    on_error: str = "abort",
    columns: Sequence[ColumnSpec] = COLUMNS,
) -> Iterator[Entry]:
    """Lazily parse *rows* into entries.

    With ``on_error="abort"`` the first malformed row raises its
    :class:`~bestenliste.errors.ParseError`. With ``on_error="skip"`` the row
    is logged and dropped.
    """

    if on_error not in ON_ERROR_POLICIES:
        raise ValueError(f"Unknown error policy {on_error!r}")

    for result in iter_results(rows, year=year, columns=columns):
        if result.ok:
            logger.debug("Parsed row %d: %s", result.index, result.entry)
            yield result.entry
            continue
        if on_error == "abort":
            raise result.error
        logger.warning("Skipping row %d: %s", result.index, result.error)


def scored(entries: Iterable[Entry]) -> Iterator[Entry]:
    """Drop entries without a qualifying total (score of zero)."""

    return (entry for entry in entries if entry.score != 0)


def filter_club(entries: Iterable[Entry], club: str) -> List[Entry]:
    """Keep entries whose club matches *club* exactly."""

    return [entry for entry in entries if entry.club == club]


def group_by_club(entries: Iterable[Entry]) -> Dict[str, List[Entry]]:
    """Bucket entries by club, keeping rank order inside each bucket.

    The returned mapping is ordered alphabetically by club name.
    """

    bucket: Dict[str, List[Entry]] = {}
    for entry in entries:
        bucket.setdefault(entry.club, []).append(entry)
    return {club: bucket[club] for club in sorted(bucket)}


class EntryDataset:
    """Re-iterable view over the scored entries of one ranking table.

    Nothing is cached: every iteration parses the stored rows again.
    """

    def __init__(
        self,
        rows: Sequence[Sequence[str]],
        *,
        year: int,
        on_error: str = "abort",
        columns: Sequence[ColumnSpec] = COLUMNS,
    ) -> None:
        if on_error not in ON_ERROR_POLICIES:
            raise ValueError(f"Unknown error policy {on_error!r}")
        self.rows = rows
        self.year = year
        self.on_error = on_error
        self.columns = columns

    def parsed(self) -> Iterator[Entry]:
        return iter_entries(
            self.rows, year=self.year, on_error=self.on_error, columns=self.columns
        )

    def __iter__(self) -> Iterator[Entry]:
        return scored(self.parsed())

    def for_club(self, club: str) -> List[Entry]:
        entries = filter_club(self, club)
        if not entries:
            logger.warning("No entries found for club %r", club)
        return entries

    def by_club(self) -> Dict[str, List[Entry]]:
        return group_by_club(self)


def build_dataset(
    rows: Sequence[Sequence[str]],
    *,
    year: int,
    on_error: str = "abort",
) -> List[Entry]:
    """Parse and filter *rows* eagerly into a list of scored entries."""

    return list(EntryDataset(rows, year=year, on_error=on_error))


def entries_to_frame(entries: Iterable[Entry]) -> pd.DataFrame:
    """Tabulate entries with one column per field."""

    records = [
        {
            "year": entry.year,
            "rank": entry.rank,
            "name": entry.name,
            "club": entry.club,
            "score": entry.score,
        }
        for entry in entries
    ]
    return pd.DataFrame.from_records(records, columns=ENTRY_COLUMNS)
