"""HTML parsing utilities for season ranking tables."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, List, Sequence

from bs4 import BeautifulSoup

from .errors import ParseError, SchemaMismatch
from .models import Entry, RowResult


def _parse_int(raw: str) -> int:
    # Rankings are often printed as ordinals ("1.").
    return int(raw.strip().rstrip("."))


def _parse_float(raw: str) -> float:
    return float(raw.strip().replace(",", "."))


def _text(raw: str) -> str:
    return raw


@dataclass(frozen=True)
class ColumnSpec:
    """Maps a fixed cell position onto an :class:`Entry` field."""

    index: int
    field: str
    coerce: Callable[[str], Any] = _text
    aliases: FrozenSet[str] = frozenset()


COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec(0, "rank", _parse_int, frozenset({"platz", "rang", "rank", "pl"})),
    ColumnSpec(1, "name", _text, frozenset({"name", "athlet", "athletin", "heber"})),
    ColumnSpec(2, "club", _text, frozenset({"verein", "club", "team", "mannschaft"})),
    ColumnSpec(
        3,
        "score",
        _parse_float,
        frozenset({"punkte", "max punkte", "points", "relativpunkte"}),
    ),
)


def _normalise_header(text: str) -> str:
    cleaned = re.sub(r"[^\w ]", " ", text.strip().lower())
    return " ".join(cleaned.split())


def _required_cells(columns: Sequence[ColumnSpec]) -> int:
    return max(column.index for column in columns) + 1


def parse_row(
    cells: Sequence[str],
    *,
    year: int,
    columns: Sequence[ColumnSpec] = COLUMNS,
) -> Entry:
    """Convert the cell texts of one table row into an :class:`Entry`.

    Cells are addressed by position; anything beyond the configured columns is
    ignored. Numeric columns that cannot be coerced raise :class:`ParseError`.
    """

    required = _required_cells(columns)
    if len(cells) < required:
        raise ParseError(f"Expected at least {required} cells, found {len(cells)}")

    values = {}
    for column in columns:
        raw = cells[column.index]
        try:
            values[column.field] = column.coerce(raw)
        except ValueError as exc:
            raise ParseError(
                f"Could not parse '{column.field}' in column {column.index} from {raw!r}",
                column=column.index,
                field=column.field,
                raw=raw,
            ) from exc
    return Entry(year=year, **values)


def try_parse_row(
    cells: Sequence[str],
    *,
    year: int,
    index: int,
    columns: Sequence[ColumnSpec] = COLUMNS,
) -> RowResult:
    try:
        entry = parse_row(cells, year=year, columns=columns)
    except ParseError as exc:
        exc.row_index = index
        return RowResult(index=index, error=exc)
    return RowResult(index=index, entry=entry)


def extract_rows(html: str) -> List[List[str]]:
    """Return the cell texts of every row in the first table of *html*.

    The header row is included. Rows without any visible text are dropped.
    """

    doc = BeautifulSoup(html, "lxml")
    table = doc.find("table")
    if table is None:
        raise SchemaMismatch("No table found in the ranking page")

    rows: List[List[str]] = []
    for tr in table.find_all("tr"):
        cells = [cell.get_text(" ", strip=True) for cell in tr.find_all(["td", "th"])]
        if any(cells):
            rows.append(cells)
    return rows


def validate_header(
    header: Sequence[str],
    columns: Sequence[ColumnSpec] = COLUMNS,
) -> None:
    """Check that *header* carries the labels the column layout expects."""

    required = _required_cells(columns)
    if len(header) < required:
        raise SchemaMismatch(
            f"Header has {len(header)} cells, expected at least {required}"
        )
    for column in columns:
        if not column.aliases:
            continue
        label = _normalise_header(header[column.index])
        if label not in column.aliases:
            raise SchemaMismatch(
                f"Column {column.index} header {header[column.index]!r} "
                f"does not look like '{column.field}'"
            )


def check_row_count(rows: Sequence[Sequence[str]], expected: int) -> None:
    """Compare the number of data rows (header excluded) with *expected*."""

    actual = max(len(rows) - 1, 0)
    if actual != expected:
        raise SchemaMismatch(f"Expected {expected} data rows, found {actual}")
