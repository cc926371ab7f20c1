"""Toolkit for parsing and charting weightlifting season rankings."""

from .errors import BestenlisteError, FetchError, ParseError, SchemaMismatch
from .models import Entry, RowResult
from .parser import COLUMNS, ColumnSpec, extract_rows, parse_row, try_parse_row
from .dataset import EntryDataset, build_dataset, group_by_club
from .scraper import fetch_html, load_rows

__all__ = [
    "BestenlisteError",
    "COLUMNS",
    "ColumnSpec",
    "Entry",
    "EntryDataset",
    "FetchError",
    "ParseError",
    "RowResult",
    "SchemaMismatch",
    "build_dataset",
    "extract_rows",
    "fetch_html",
    "group_by_club",
    "load_rows",
    "parse_row",
    "try_parse_row",
]
