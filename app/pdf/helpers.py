"""
Layout helpers shared by the proposal pages.

Every drawing helper takes the top ``y`` of the area it fills and
returns the ``y`` just below what it drew. Helpers used inside cards
have a matching ``measure_*`` function built on the same line layout,
so measuring and drawing cannot disagree.
"""

from typing import Optional, Sequence

from app.pdf import theme
from app.pdf.fonts import FontConfig
from app.pdf.surface import Surface
from app.pdf.text import clamp_lines, fit_line, make_measure, wrap_to_width


def first_baseline(top: float, size: float) -> float:
    return top + size * 0.8


# ==================== Paragraphs ====================

def layout_paragraph(
    text: str,
    width: float,
    fonts: FontConfig,
    size: float = theme.BODY_SIZE,
    bold: bool = False,
    max_lines: Optional[int] = None,
) -> list[str]:
    measure = make_measure(fonts.face(bold), size)
    lines = wrap_to_width(text, width, measure)
    if max_lines is not None:
        lines = clamp_lines(lines, max_lines, width, measure)
    return lines


def draw_paragraph(
    surface: Surface,
    x: float,
    y: float,
    lines: list[str],
    size: float = theme.BODY_SIZE,
    line_height: float = theme.BODY_LINE_H,
    color=None,
    bold: bool = False,
) -> float:
    surface.lines(
        x,
        first_baseline(y, size),
        lines,
        size,
        line_height,
        color if color is not None else theme.PALETTE["text"],
        bold=bold,
    )
    return y + len(lines) * line_height


# ==================== Section chrome ====================

def section_label(surface: Surface, x: float, y: float, label: str) -> float:
    """Small uppercase secondary-grey label."""
    surface.text(
        x,
        first_baseline(y, theme.META_SIZE),
        label.upper(),
        theme.META_SIZE,
        theme.PALETTE["text_secondary"],
        bold=True,
    )
    return y + theme.META_LINE_H + theme.SPACE_8


def divider(surface: Surface, x: float, y: float, width: float, gap: float = theme.SPACE_12) -> float:
    surface.line(x, y, x + width, y, theme.PALETTE["border"], width=0.5)
    return y + gap


SECTION_HEADING_H = theme.META_LINE_H + theme.SPACE_8 / 2 + theme.SPACE_12


def section_heading(surface: Surface, x: float, y: float, label: str, width: float) -> float:
    """Label plus divider; always advances by SECTION_HEADING_H."""
    y = section_label(surface, x, y, label)
    return divider(surface, x, y - theme.SPACE_8 / 2, width)


# ==================== Key / value stack ====================

KEY_COLUMN_RATIO = 0.3


def layout_key_values(
    pairs: Sequence[tuple[str, str]], width: float, fonts: FontConfig
) -> list[tuple[str, list[str]]]:
    value_width = width * (1 - KEY_COLUMN_RATIO)
    measure = make_measure(fonts.regular, theme.BODY_SIZE)
    return [(label, wrap_to_width(value, value_width, measure)) for label, value in pairs]


def measure_key_values(pairs: Sequence[tuple[str, str]], width: float, fonts: FontConfig) -> float:
    rows = layout_key_values(pairs, width, fonts)
    return sum(_key_value_row_height(lines) for _, lines in rows)


def _key_value_row_height(lines: list[str]) -> float:
    return max(theme.META_LINE_H, len(lines) * theme.BODY_LINE_H) + theme.ROW_GAP


def key_value_stack(
    surface: Surface, x: float, y: float, pairs: Sequence[tuple[str, str]], width: float
) -> float:
    """Label column in secondary grey, value column wrapped in primary text."""
    value_x = x + width * KEY_COLUMN_RATIO
    for label, lines in layout_key_values(pairs, width, surface.fonts):
        surface.text(
            x,
            first_baseline(y, theme.BODY_SIZE),
            label,
            theme.META_SIZE,
            theme.PALETTE["text_secondary"],
        )
        draw_paragraph(surface, value_x, y, lines)
        y += _key_value_row_height(lines)
    return y


# ==================== Tag pills ====================

def layout_tags(
    tags: Sequence[str], max_width: float, fonts: FontConfig
) -> list[list[tuple[str, float]]]:
    """Rows of (tag, pill_width); a pill moves to the next row when it would overflow."""
    measure = make_measure(fonts.regular, theme.SMALL_SIZE)
    rows: list[list[tuple[str, float]]] = [[]]
    used = 0.0
    for tag in tags:
        pill_w = min(measure(tag) + theme.PILL_PAD_X * 2, max_width)
        needed = pill_w if not rows[-1] else used + theme.PILL_GAP + pill_w
        if rows[-1] and needed > max_width:
            rows.append([])
            needed = pill_w
        rows[-1].append((tag, pill_w))
        used = needed
    return rows if rows[0] else []


def measure_tags(tags: Sequence[str], max_width: float, fonts: FontConfig) -> float:
    rows = layout_tags(tags, max_width, fonts)
    if not rows:
        return 0.0
    return len(rows) * theme.PILL_HEIGHT + (len(rows) - 1) * theme.PILL_GAP + theme.SPACE_8


def tag_list(surface: Surface, x: float, y: float, tags: Sequence[str], max_width: float) -> float:
    rows = layout_tags(tags, max_width, surface.fonts)
    if not rows:
        return y
    measure = make_measure(surface.fonts.regular, theme.SMALL_SIZE)
    for row in rows:
        px = x
        for tag, pill_w in row:
            surface.rounded_rect(
                px,
                y,
                pill_w,
                theme.PILL_HEIGHT,
                theme.PILL_RADIUS,
                fill=None,
                stroke=theme.PALETTE["border"],
            )
            label = fit_line(tag, pill_w - theme.PILL_PAD_X * 2, measure)
            surface.text(
                px + theme.PILL_PAD_X,
                y + theme.PILL_HEIGHT / 2 + theme.SMALL_SIZE * 0.35,
                label,
                theme.SMALL_SIZE,
                theme.PALETTE["text"],
            )
            px += pill_w + theme.PILL_GAP
        y += theme.PILL_HEIGHT + theme.PILL_GAP
    return y - theme.PILL_GAP + theme.SPACE_8


# ==================== Milestones ====================

MILESTONE_INDENT = 14
MILESTONE_MIN_ROW = 20


def layout_milestones(
    items: Sequence[tuple[str, str]], width: float, fonts: FontConfig
) -> list[tuple[list[str], str]]:
    """(wrapped label lines, duration) per milestone."""
    measure = make_measure(fonts.bold, theme.BODY_SIZE)
    return [
        (wrap_to_width(label, width - MILESTONE_INDENT, measure), duration)
        for label, duration in items
    ]


def _milestone_row_height(label_lines: list[str], duration: str) -> float:
    line_count = len(label_lines) + (1 if duration else 0)
    return max(MILESTONE_MIN_ROW, line_count * theme.BODY_LINE_H + theme.SPACE_8)


def measure_milestones(items: Sequence[tuple[str, str]], width: float, fonts: FontConfig) -> float:
    return sum(_milestone_row_height(lines, d) for lines, d in layout_milestones(items, width, fonts))


def milestone_list(
    surface: Surface, x: float, y: float, items: Sequence[tuple[str, str]], width: float
) -> float:
    """Vertical accent rule with one marker per milestone and separators between rows."""
    rows = layout_milestones(items, width, surface.fonts)
    if not rows:
        return y
    top = y
    markers = []
    for index, (label_lines, duration) in enumerate(rows):
        row_h = _milestone_row_height(label_lines, duration)
        markers.append(y + theme.BODY_SIZE * 0.45)
        cursor = draw_paragraph(surface, x + MILESTONE_INDENT, y, label_lines, bold=True)
        if duration:
            surface.text(
                x + MILESTONE_INDENT,
                first_baseline(cursor, theme.META_SIZE),
                duration,
                theme.META_SIZE,
                theme.PALETTE["text_secondary"],
            )
        y += row_h
        if index < len(rows) - 1:
            surface.line(
                x + MILESTONE_INDENT, y - theme.SPACE_8 / 2, x + width, y - theme.SPACE_8 / 2,
                theme.PALETTE["border"], width=0.4,
            )
    surface.line(x + 3, markers[0], x + 3, max(markers[-1], top + 1), theme.PALETTE["accent"], width=1)
    for marker_y in markers:
        surface.rect(x + 1, marker_y - 2, 4, 4, fill=theme.PALETTE["accent"])
    return y


# ==================== Lists ====================

BULLET_INDENT = 12


def layout_bullets(items: Sequence[str], width: float, fonts: FontConfig) -> list[list[str]]:
    measure = make_measure(fonts.regular, theme.BODY_SIZE)
    return [wrap_to_width(item, width - BULLET_INDENT, measure) for item in items]


def measure_bullets(items: Sequence[str], width: float, fonts: FontConfig) -> float:
    return sum(
        len(lines) * theme.BODY_LINE_H + theme.BULLET_GAP
        for lines in layout_bullets(items, width, fonts)
    )


def bullet_list(
    surface: Surface,
    x: float,
    y: float,
    items: Sequence[str],
    width: float,
    numbered: bool = False,
    color=None,
) -> float:
    for index, lines in enumerate(layout_bullets(items, width, surface.fonts), start=1):
        marker = f"{index}." if numbered else "•"
        surface.text(
            x,
            first_baseline(y, theme.BODY_SIZE),
            marker,
            theme.BODY_SIZE,
            theme.PALETTE["text_secondary"],
        )
        y = draw_paragraph(surface, x + BULLET_INDENT, y, lines, color=color) + theme.BULLET_GAP
    return y


def numbered_list(surface: Surface, x: float, y: float, items: Sequence[str], width: float) -> float:
    return bullet_list(surface, x, y, items, width, numbered=True)


# ==================== Cards ====================

CARD_PADDING = 14
CARD_RADIUS = 6


def card(surface: Surface, x: float, y: float, width: float, height: float, fill=None, stroke=None) -> float:
    """Rounded background panel; content is drawn by the caller."""
    surface.rounded_rect(
        x,
        y,
        width,
        height,
        CARD_RADIUS,
        fill=fill if fill is not None else theme.PALETTE["card_bg"],
        stroke=stroke,
    )
    return y + height
