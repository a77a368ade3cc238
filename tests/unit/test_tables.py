"""Unit tests for paginated tables."""

import pytest

from app.pdf import theme
from app.pdf.tables import ColumnSpec, TableSpec, build_table, column_widths, draw_flowing_table

COLUMNS = [ColumnSpec("Item", 3), ColumnSpec("Amount", 1, "right")]


def _spec(row_count: int, total: bool = False) -> TableSpec:
    return TableSpec(
        columns=COLUMNS,
        rows=[[f"Row {i}", f"{i}.00"] for i in range(row_count)],
        total_row=["Total", "0.00"] if total else None,
        zebra_fill=theme.PALETTE["block"],
        total_fill=theme.PALETTE["grid"],
    )


def test_column_widths_follow_weights():
    assert column_widths(COLUMNS, 400) == pytest.approx([300, 100])


def test_column_widths_ignore_zero_weights_total():
    assert column_widths([ColumnSpec("A", 0)], 100) == [0.0]


def test_build_table_includes_header_and_total_rows(fonts):
    table = build_table(_spec(3, total=True), 400, fonts)
    assert len(table._cellvalues) == 5
    assert table.repeatRows == 1


def test_cell_text_is_escaped(fonts):
    spec = TableSpec(columns=COLUMNS, rows=[["Q&A <b>", "1.00"]])
    table = build_table(spec, 400, fonts)
    assert table._cellvalues[1][0].getPlainText() == "Q&A <b>"


def test_short_table_stays_on_one_page(surface):
    end = draw_flowing_table(
        surface, _spec(3), 100, x=theme.MARGIN, width=theme.CONTENT_WIDTH,
        top=theme.CONTENT_TOP, bottom=theme.CONTENT_BOTTOM,
    )
    assert 100 < end < theme.CONTENT_BOTTOM
    assert surface.page_count == 1


def test_long_table_flows_and_repeats_header(surface, pdf_pages):
    end = draw_flowing_table(
        surface, _spec(120, total=True), 400, x=theme.MARGIN, width=theme.CONTENT_WIDTH,
        top=theme.CONTENT_TOP, bottom=theme.CONTENT_BOTTOM,
    )
    assert surface.page_count >= 3
    assert theme.CONTENT_TOP < end <= theme.CONTENT_BOTTOM

    pages = pdf_pages(surface.finish())
    assert "Row 0" in pages[0]
    for page in pages[1:]:
        assert "Item" in page and "Amount" in page
    assert "Row 119" in pages[-1]
    assert "Total" in pages[-1]


def test_table_moves_to_next_page_when_nothing_fits(surface):
    draw_flowing_table(
        surface, _spec(2), theme.CONTENT_BOTTOM - 5, x=theme.MARGIN, width=theme.CONTENT_WIDTH,
        top=theme.CONTENT_TOP, bottom=theme.CONTENT_BOTTOM,
    )
    assert surface.page_count == 2
