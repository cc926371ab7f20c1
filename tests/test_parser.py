import pytest

from bestenliste.errors import ParseError, SchemaMismatch
from bestenliste.parser import (
    check_row_count,
    extract_rows,
    parse_row,
    try_parse_row,
    validate_header,
)


def test_parses_well_formed_row():
    entry = parse_row(["1", "Alice", "ClubA", "120.5"], year=2024)

    assert entry.year == 2024
    assert entry.rank == 1
    assert entry.name == "Alice"
    assert entry.club == "ClubA"
    assert entry.score == 120.5


def test_extra_cells_are_ignored():
    entry = parse_row(["7", "Bob", "ClubB", "88.75", "2001", "+89"], year=2023)

    assert entry.rank == 7
    assert entry.score == 88.75


def test_accepts_ordinal_rank_and_decimal_comma():
    entry = parse_row(["3.", "Carol", "ClubA", "95,25"], year=2024)

    assert entry.rank == 3
    assert entry.score == pytest.approx(95.25)


def test_non_numeric_rank_names_column_and_raw_value():
    with pytest.raises(ParseError) as excinfo:
        parse_row(["x", "Dave", "ClubC", "50.0"], year=2024)

    assert excinfo.value.column == 0
    assert excinfo.value.field == "rank"
    assert excinfo.value.raw == "x"


def test_non_numeric_score_raises():
    with pytest.raises(ParseError) as excinfo:
        parse_row(["4", "Eve", "ClubC", "n/a"], year=2024)

    assert excinfo.value.column == 3
    assert excinfo.value.raw == "n/a"


def test_short_row_raises():
    with pytest.raises(ParseError):
        parse_row(["5", "Frank", "ClubD"], year=2024)


def test_try_parse_row_wraps_errors():
    good = try_parse_row(["1", "Alice", "ClubA", "120.5"], year=2024, index=1)
    bad = try_parse_row(["x", "Dave", "ClubC", "50.0"], year=2024, index=2)

    assert good.ok and good.entry.name == "Alice"
    assert not bad.ok
    assert bad.entry is None
    assert bad.error.row_index == 2


def test_extract_rows_reads_first_table():
    html = """
    <html><body>
      <table>
        <tr><th>Platz</th><th>Name</th><th>Verein</th><th>Max. Punkte</th></tr>
        <tr><td>1</td><td> Alice </td><td>ClubA</td><td>120.5</td></tr>
        <tr><td></td><td></td><td></td><td></td></tr>
        <tr><td>2</td><td>Bob</td><td>ClubB</td><td>0.0</td></tr>
      </table>
      <table><tr><td>other</td></tr></table>
    </body></html>
    """

    rows = extract_rows(html)

    assert rows == [
        ["Platz", "Name", "Verein", "Max. Punkte"],
        ["1", "Alice", "ClubA", "120.5"],
        ["2", "Bob", "ClubB", "0.0"],
    ]


def test_extract_rows_without_table_raises():
    with pytest.raises(SchemaMismatch):
        extract_rows("<html><body><p>Keine Daten</p></body></html>")


def test_validate_header_accepts_known_labels():
    validate_header(["Pl.", "Name", "Verein", "Max. Punkte", "Jahrgang"])


@pytest.mark.parametrize(
    "header",
    [
        ["Platz", "Name", "Verein"],
        ["Platz", "Name", "Jahrgang", "Punkte"],
    ],
)
def test_validate_header_rejects_unexpected_layout(header):
    with pytest.raises(SchemaMismatch):
        validate_header(header)


def test_check_row_count_excludes_header():
    rows = [["Platz", "Name", "Verein", "Punkte"]] + [["1", "A", "C", "1"]] * 390

    check_row_count(rows, 390)
    with pytest.raises(SchemaMismatch):
        check_row_count(rows, 391)


def test_extract_rows_keeps_spaces_around_inline_markup():
    html = """
    <table>
      <tr><th>Platz</th><th>Name</th><th>Verein</th><th>Punkte</th></tr>
      <tr><td>1</td><td><a href="/athlet/7">Anna</a> Schmidt</td><td>AC <b>Germania</b> Berlin</td><td>120,5</td></tr>
      <tr><td>2</td><td>Max<br/>Mustermann</td><td>TSV Heidelberg</td><td>99,0</td></tr>
    </table>
    """

    rows = extract_rows(html)

    assert rows[1][1:3] == ["Anna Schmidt", "AC Germania Berlin"]
    assert rows[2][1] == "Max Mustermann"
