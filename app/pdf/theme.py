"""
Shared layout tokens: page grid, spacing scale, palette and type scale.

Coordinates are PostScript points, measured from the top-left corner
(see surface.Surface). Statement constants are expressed in millimetres.
"""

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm


def rgb(r: int, g: int, b: int) -> colors.Color:
    """0-255 channels to a reportlab Color."""
    return colors.Color(r / 255.0, g / 255.0, b / 255.0)


def hex_color(value: str) -> colors.Color:
    return colors.HexColor(value if value.startswith("#") else f"#{value}")


PAGE_WIDTH, PAGE_HEIGHT = A4

# ---- Proposal grid: margins and the 8/12/16/22/32 spacing scale ----
MARGIN = 52
SPACE_8 = 8
SPACE_12 = 12
SPACE_16 = 16
SPACE_22 = 22
SPACE_32 = 32
SECTION_GAP = SPACE_22
COLUMN_GUTTER = SPACE_32
HEADER_H = 44
FOOTER_H = 44

CONTENT_TOP = MARGIN + HEADER_H
CONTENT_BOTTOM = PAGE_HEIGHT - FOOTER_H - SPACE_22
CONTENT_WIDTH = PAGE_WIDTH - MARGIN * 2

# ---- Palette (black / white / greys) ----
PALETTE = {
    "text": hex_color("#0B0F14"),
    "text_secondary": hex_color("#6B7280"),
    "border": hex_color("#E5E7EB"),
    "block": hex_color("#F6F7F9"),
    "grid": hex_color("#E8E8E8"),
    "pricing_card": hex_color("#F5F6F7"),
    "card_bg": hex_color("#F4F4F5"),
    "accent": hex_color("#252525"),
    "white": colors.white,
}

# ---- Type scale ----
TITLE_SIZE = 52
HERO_AMOUNT_SIZE = 28
SECTION_TITLE_SIZE = 12
SUBTITLE_SIZE = 11
BODY_SIZE = 10
META_SIZE = 9
SMALL_SIZE = 8

BODY_LINE_H = 13.5
META_LINE_H = 11
ROW_GAP = 6
BULLET_GAP = 4

# ---- Cover ----
COVER_MARGIN = 40
COVER_BAND_FRACTION = 0.62
COVER_BAND_COLOR = hex_color("#252525")
COVER_DARK_GREY = hex_color("#2F2F2F")
COVER_DATE_COLOR = rgb(220, 220, 220)
COVER_LOGO_WIDTH = 118
COVER_LOGO_BAND_GAP = 12
COVER_TITLE_BAND_FRACTION = 0.18
COVER_FOR_WIDTH_FRACTION = 0.5
COVER_FOR_SIZE_LARGE = 18
COVER_FOR_SIZE_SMALL = 14
COVER_FOR_BOTTOM_MARGIN = 130
COVER_FOR_MAX_LINES = 4

# Packaged logo viewBox (1264.17 x 217.92); used when no raster is available
LOGO_ASPECT = 1264.17 / 217.92

# ---- Tag pills ----
PILL_HEIGHT = 16
PILL_PAD_X = 7
PILL_GAP = 6
PILL_RADIUS = 8

# ---- Statements (timesheet / invoice): grayscale, print-friendly ----
GRAY = {
    "black": rgb(0, 0, 0),
    "dark": rgb(45, 45, 45),
    "medium": rgb(100, 100, 100),
    "light": rgb(160, 160, 160),
    "border": rgb(220, 220, 220),
    "row_alt": rgb(248, 249, 250),
    "header_bg": rgb(55, 55, 55),
    "header_text": rgb(255, 255, 255),
}

STATEMENT_MARGIN = 18 * mm
STATEMENT_HEADER_TOP = 12 * mm
STATEMENT_LOGO_H = 9 * mm
STATEMENT_CREDENTIAL_LINE_H = 5 * mm
STATEMENT_META_LINE_H = 5.5 * mm
STATEMENT_TOTALS_LINE_H = 7 * mm
STATEMENT_FOOTER_OFFSET = 18 * mm
STATEMENT_TABLE_FONT_SIZE = 9
STATEMENT_CELL_PADDING = 4
