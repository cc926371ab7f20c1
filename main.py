"""Weightlifting season ranking explorer.

Downloads one Bestenliste page, parses its results table into entries, drops
athletes without a qualifying total and renders interactive Plotly charts:
all athletes, one club, and every club side by side.

Usage
-----
python main.py --url <ranking url> --year 2024 --club "AC Germania"

Without ``--output-dir`` the charts open in the browser via Plotly.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, Optional

from bestenliste.charts import (
    club_figure,
    clubs_comparison_figure,
    rank_score_figure,
    write_figure,
)
from bestenliste.dataset import EntryDataset
from bestenliste.errors import BestenlisteError
from bestenliste.parser import check_row_count, validate_header
from bestenliste.scraper import DEFAULT_URL, DEFAULT_YEAR, load_rows

logger = logging.getLogger(__name__)


def run(
    url: str,
    *,
    year: int,
    club: Optional[str] = None,
    skip_malformed: bool = False,
    check_header: bool = False,
    expected_rows: Optional[int] = None,
    output_dir: Optional[Path] = None,
) -> Dict[str, object]:
    """Execute the pipeline and return the figures keyed by view name.

    Every figure is built before any is written, so a parse failure leaves no
    partial output behind.
    """

    rows = load_rows(url)
    if check_header and rows:
        validate_header(rows[0])
    if expected_rows is not None:
        check_row_count(rows, expected_rows)

    dataset = EntryDataset(
        rows, year=year, on_error="skip" if skip_malformed else "abort"
    )
    entries = list(dataset)
    logger.info("Parsed %d scored entries for %d", len(entries), year)

    figures: Dict[str, object] = {
        "athletes": rank_score_figure(entries, title=f"Bestenliste {year}"),
        "clubs": clubs_comparison_figure(entries),
    }
    if club:
        figures["club"] = club_figure(entries, club)

    if output_dir is not None:
        for key, fig in figures.items():
            write_figure(fig, output_dir / f"bestenliste_{year}_{key}.html")
    return figures


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--url", default=DEFAULT_URL, help="Ranking page to fetch.")
    parser.add_argument(
        "--year",
        type=int,
        default=DEFAULT_YEAR,
        help=f"Season the ranking belongs to (default: {DEFAULT_YEAR}).",
    )
    parser.add_argument("--club", help="Also chart this club (exact name).")
    parser.add_argument(
        "--skip-malformed",
        action="store_true",
        help="Log and skip rows that cannot be parsed instead of aborting.",
    )
    parser.add_argument(
        "--check-header",
        action="store_true",
        help="Fail if the first table row does not look like the expected header.",
    )
    parser.add_argument(
        "--expected-rows",
        type=int,
        help="Fail unless the table has exactly this many data rows.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Write the charts as HTML files here instead of opening them.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging for detailed progress information.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output, showing only warnings and errors.",
    )

    args = parser.parse_args()

    if args.verbose and args.quiet:
        parser.error("--verbose and --quiet are mutually exclusive")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        figures = run(
            args.url,
            year=args.year,
            club=args.club,
            skip_malformed=args.skip_malformed,
            check_header=args.check_header,
            expected_rows=args.expected_rows,
            output_dir=args.output_dir,
        )
    except BestenlisteError as exc:
        raise SystemExit(f"Failed to build charts: {exc}") from exc

    if args.output_dir is None:
        for fig in figures.values():
            fig.show()


if __name__ == "__main__":
    main()
