"""
Paginated tables built on reportlab's platypus Table.

A table is drawn at the current cursor; when it does not fit above the
bottom limit it is split, the fitting part is drawn, a new page is
started and the remainder continues at ``top`` with the header row
repeated.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Paragraph, Table, TableStyle

from app.pdf import theme
from app.pdf.fonts import FontConfig
from app.pdf.surface import Surface

logger = logging.getLogger(__name__)

_ALIGNMENTS = {"left": TA_LEFT, "right": TA_RIGHT, "center": TA_CENTER}


@dataclass(frozen=True)
class ColumnSpec:
    title: str
    weight: float
    align: str = "left"


@dataclass
class TableSpec:
    """Columns, body rows and the look of a flowing table."""

    columns: Sequence[ColumnSpec]
    rows: list[list[str]]
    total_row: Optional[list[str]] = None
    font_size: float = theme.BODY_SIZE
    padding: float = 6
    header_fill: object = field(default_factory=lambda: theme.PALETTE["block"])
    header_text: object = field(default_factory=lambda: theme.PALETTE["text"])
    text_color: object = field(default_factory=lambda: theme.PALETTE["text"])
    border: object = field(default_factory=lambda: theme.PALETTE["border"])
    zebra_fill: Optional[object] = None
    total_fill: Optional[object] = None


def column_widths(columns: Sequence[ColumnSpec], width: float) -> list[float]:
    """Share ``width`` among columns in proportion to their weights."""
    total = sum(col.weight for col in columns) or 1.0
    return [width * col.weight / total for col in columns]


def _style(spec: TableSpec, fonts: FontConfig, align: str, bold: bool, color) -> ParagraphStyle:
    return ParagraphStyle(
        name=f"cell-{align}-{'b' if bold else 'r'}",
        fontName=fonts.face(bold),
        fontSize=spec.font_size,
        leading=spec.font_size * 1.3,
        textColor=color,
        alignment=_ALIGNMENTS.get(align, TA_LEFT),
    )


def build_table(spec: TableSpec, width: float, fonts: FontConfig) -> Table:
    def row_cells(values: Sequence[str], bold: bool, color) -> list[Paragraph]:
        return [
            Paragraph(escape(str(value)), _style(spec, fonts, col.align, bold, color))
            for value, col in zip(values, spec.columns)
        ]

    data = [row_cells([col.title for col in spec.columns], True, spec.header_text)]
    data += [row_cells(row, False, spec.text_color) for row in spec.rows]
    if spec.total_row is not None:
        data.append(row_cells(spec.total_row, True, spec.text_color))

    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), spec.header_fill),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), spec.padding),
        ("BOTTOMPADDING", (0, 0), (-1, -1), spec.padding),
        ("LEFTPADDING", (0, 0), (-1, -1), spec.padding),
        ("RIGHTPADDING", (0, 0), (-1, -1), spec.padding),
        ("LINEBELOW", (0, 0), (-1, -1), 0.5, spec.border),
        ("BOX", (0, 0), (-1, -1), 0.5, spec.border),
    ]
    if spec.zebra_fill is not None and spec.rows:
        commands.append(("ROWBACKGROUNDS", (0, 1), (-1, len(spec.rows)), [theme.PALETTE["white"], spec.zebra_fill]))
    if spec.total_row is not None and spec.total_fill is not None:
        total_index = len(spec.rows) + 1
        commands.append(("BACKGROUND", (0, total_index), (-1, total_index), spec.total_fill))

    return Table(
        data,
        colWidths=column_widths(spec.columns, width),
        repeatRows=1,
        style=TableStyle(commands),
    )


def draw_flowing_table(
    surface: Surface,
    spec: TableSpec,
    y: float,
    *,
    x: float,
    width: float,
    top: float,
    bottom: float,
) -> float:
    """
    Draw ``spec`` starting at ``y``, continuing onto new pages as needed.

    Returns the y just below the last drawn part.
    """
    table = build_table(spec, width, surface.fonts)
    canvas = surface.canvas
    while True:
        available = bottom - y
        _, height = table.wrapOn(canvas, width, available)
        if height <= available:
            table.drawOn(canvas, x, surface.height - y - height)
            return y + height

        parts = table.split(width, available)
        if len(parts) < 2:
            if y <= top:
                # Not even the header and one row fit on an empty page
                logger.warning("Table row taller than the page; drawing it unsplit")
                table.drawOn(canvas, x, surface.height - y - height)
                return y + height
            surface.new_page()
            y = top
            continue

        head, table = parts[0], parts[1]
        _, head_height = head.wrapOn(canvas, width, available)
        head.drawOn(canvas, x, surface.height - y - head_height)
        surface.new_page()
        y = top
