"""Tests for PDF table reconstruction on synthetic fragments."""

from homeledger.domain.entities import TextFragment
from homeledger.domain.table_reconstruction import (
    ReconstructionParams,
    cluster_columns,
    group_lines,
    is_footer_row,
    line_to_cells,
    merge_wrapped_rows,
    reconstruct_tables,
)


def frag(text, x, y, page=0):
    return TextFragment(text=text, page_index=page, x=x, y=y)


def test_group_lines_tolerates_jitter():
    """Fragments within the tolerance band share a line, sorted by x."""
    fragments = [
        frag("450.00", 330, 101.2),
        frag("01/03/24", 40, 100.0),
        frag("SWIGGY", 110, 99.4),
        frag("02/03/24", 40, 116.0),
    ]
    lines = group_lines(fragments, line_tolerance=2.5)
    assert [[f.text for f in line] for line in lines] == [["01/03/24", "SWIGGY", "450.00"], ["02/03/24"]]


def test_cluster_columns_requires_support():
    """A start position seen on a single line is not a column."""
    lines = [
        [frag("a", 40, 0), frag("b", 110, 0)],
        [frag("c", 41.5, 10), frag("d", 112, 10), frag("stray", 260, 10)],
        [frag("e", 39, 20), frag("f", 109, 20)],
    ]
    assert cluster_columns(lines, column_tolerance=12, min_support=2) == [39, 109]


def test_cluster_columns_single_line_keeps_everything():
    lines = [[frag("a", 40, 0), frag("b", 200, 0)]]
    assert cluster_columns(lines, column_tolerance=12, min_support=2) == [40, 200]


def test_line_to_cells_fills_blanks_and_joins():
    positions = [40, 110, 330, 420]
    line = [frag("01/03/24", 40, 0), frag("UPI", 110, 0), frag("SWIGGY", 140, 0), frag("99.00", 420, 0)]
    assert line_to_cells(line, positions) == ["01/03/24", "UPI SWIGGY", "", "99.00"]


def test_reconstruct_tables_orders_pages():
    fragments = [
        frag("p2", 40, 10, page=1),
        frag("Date", 40, 10, page=0),
        frag("Narration", 110, 10, page=0),
        frag("01/03/24", 40, 30, page=0),
        frag("X", 110, 30, page=0),
    ]
    tables = reconstruct_tables(fragments, ReconstructionParams())
    assert [t.page_index for t in tables] == [0, 1]
    assert tables[0].rows == [["Date", "Narration"], ["01/03/24", "X"]]
    assert tables[0].column_count == 2
    assert tables[1].rows == [["p2"]]


def test_merge_wrapped_narration():
    """A narration-only line continues the previous transaction."""
    rows = [
        ["01/03/24", "NEFT CR-ACME CORP", "", "85,000.00", "1,34,550.00"],
        ["", "SALARY FOR MARCH", "", "", ""],
        ["", "2024", "", "", ""],
        ["02/03/24", "ZOMATO", "300.00", "", "1,34,250.00"],
    ]
    merged = merge_wrapped_rows(rows, narration_index=1, key_indices=[0, 2, 3])
    assert len(merged) == 2
    assert merged[0][1] == "NEFT CR-ACME CORP SALARY FOR MARCH 2024"
    assert merged[1][1] == "ZOMATO"


def test_merge_does_not_attach_to_keyless_rows():
    rows = [
        ["", "Transactions", "", "", ""],
        ["", "continued", "", "", ""],
    ]
    assert len(merge_wrapped_rows(rows, narration_index=1, key_indices=[0, 2, 3])) == 2


def test_merge_keeps_lines_with_other_content():
    rows = [
        ["01/03/24", "A", "1.00", "", "9.00"],
        ["", "B", "", "", "8.00"],
    ]
    assert len(merge_wrapped_rows(rows, narration_index=1, key_indices=[0, 2, 3])) == 2


def test_rows_on_reference_layout():
    """Single-line amount columns survive when laid on another page's columns."""
    fragments = [
        frag("10/03/24", 40, 10),
        frag("NETFLIX", 110, 10),
        frag("649.00", 331, 10),
        frag("12/03/24", 40, 30),
        frag("INTEREST", 110, 30),
        frag("35.00", 421, 30),
    ]
    (table,) = reconstruct_tables(fragments, ReconstructionParams())
    assert table.column_count == 2

    assert table.rows_on([40, 110, 330, 420, 500]) == [
        ["10/03/24", "NETFLIX", "649.00", "", ""],
        ["12/03/24", "INTEREST", "", "35.00", ""],
    ]


def test_footer_rows():
    assert is_footer_row(["Page 2 of 5", ""])
    assert is_footer_row(["", "Opening Balance", "10,000.00"])
    assert is_footer_row(["Total", "", "12,000.00"])
    assert is_footer_row(["*** End of Statement ***"])
    assert not is_footer_row(["01/03/24", "TOTAL GAS STATION", "500.00"])
    assert not is_footer_row(["01/03/24", "PAGE INDUSTRIES LTD", "500.00"])
