"""
Measured blocks: fixed-width content whose height is computed first and
then drawn into exactly that height.

measure() never touches a canvas, so side-by-side cards can be sized to
the taller of the pair before either is drawn.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from app.pdf import theme
from app.pdf.fonts import FontConfig
from app.pdf.helpers import (
    CARD_PADDING,
    bullet_list,
    card,
    draw_paragraph,
    first_baseline,
    key_value_stack,
    layout_paragraph,
    measure_bullets,
    measure_key_values,
)
from app.pdf.surface import Surface
from app.pdf.text import fit_line, make_measure

TITLE_BLOCK_H = theme.META_LINE_H + theme.SPACE_12


class Block(ABC):
    """Two-phase layout unit: measure(width) then render(..., height)."""

    def __init__(self, fonts: FontConfig):
        self.fonts = fonts

    @abstractmethod
    def measure(self, width: float) -> float:
        """Height needed at ``width``."""

    @abstractmethod
    def render(self, surface: Surface, x: float, y: float, width: float, height: float) -> None:
        """Draw into the (x, y, width, height) box."""

    def draw(self, surface: Surface, x: float, y: float, width: float) -> float:
        height = self.measure(width)
        self.render(surface, x, y, width, height)
        return y + height


def equal_height(blocks: Sequence[Block], width: float) -> float:
    return max((block.measure(width) for block in blocks), default=0.0)


def draw_side_by_side(
    surface: Surface,
    blocks: Sequence[Block],
    x: float,
    y: float,
    total_width: float,
    gutter: float = theme.COLUMN_GUTTER,
) -> float:
    """Equal-width, equal-height columns; returns the y below the row."""
    if not blocks:
        return y
    col_w = (total_width - gutter * (len(blocks) - 1)) / len(blocks)
    height = equal_height(blocks, col_w)
    for index, block in enumerate(blocks):
        block.render(surface, x + index * (col_w + gutter), y, col_w, height)
    return y + height


def _card_title(surface: Surface, x: float, y: float, title: str) -> float:
    surface.text(
        x,
        first_baseline(y, theme.META_SIZE),
        title.upper(),
        theme.META_SIZE,
        theme.PALETTE["text_secondary"],
        bold=True,
    )
    return y + TITLE_BLOCK_H


# ==================== Cards ====================

class CardBlock(Block):
    """Titled card with a wrapped body paragraph."""

    def __init__(self, fonts: FontConfig, title: str, body: str = "", fill=None):
        super().__init__(fonts)
        self.title = title
        self.body = body
        self.fill = fill

    def _inner(self, width: float) -> float:
        return width - CARD_PADDING * 2

    def _body_lines(self, inner_width: float) -> list[str]:
        return layout_paragraph(self.body, inner_width, self.fonts) if self.body else []

    def content_height(self, width: float) -> float:
        return len(self._body_lines(self._inner(width))) * theme.BODY_LINE_H

    def measure(self, width: float) -> float:
        return CARD_PADDING * 2 + TITLE_BLOCK_H + self.content_height(width)

    def render(self, surface: Surface, x: float, y: float, width: float, height: float) -> None:
        card(surface, x, y, width, height, fill=self.fill, stroke=theme.PALETTE["border"])
        inner_x = x + CARD_PADDING
        cursor = _card_title(surface, inner_x, y + CARD_PADDING, self.title)
        self.render_content(surface, inner_x, cursor, self._inner(width))

    def render_content(self, surface: Surface, x: float, y: float, width: float) -> None:
        draw_paragraph(surface, x, y, self._body_lines(width))


class BulletCardBlock(CardBlock):
    """Titled card listing bullets (commercial notes, terms)."""

    def __init__(self, fonts: FontConfig, title: str, bullets: Sequence[str], fill=None):
        super().__init__(fonts, title, fill=fill)
        self.bullets = list(bullets)

    def content_height(self, width: float) -> float:
        return measure_bullets(self.bullets, self._inner(width), self.fonts)

    def render_content(self, surface: Surface, x: float, y: float, width: float) -> None:
        bullet_list(surface, x, y, self.bullets, width)


class KeyValueCardBlock(CardBlock):
    """Label/value rows followed by an optional bold closing line."""

    def __init__(
        self,
        fonts: FontConfig,
        title: str,
        pairs: Sequence[tuple[str, str]],
        closing: Optional[str] = None,
        fill=None,
    ):
        super().__init__(fonts, title, fill=fill)
        self.pairs = list(pairs)
        self.closing = closing

    def _closing_lines(self, inner_width: float) -> list[str]:
        if not self.closing:
            return []
        return layout_paragraph(
            self.closing, inner_width, self.fonts, size=theme.SUBTITLE_SIZE, bold=True
        )

    def content_height(self, width: float) -> float:
        height = measure_key_values(self.pairs, self._inner(width), self.fonts)
        closing = self._closing_lines(self._inner(width))
        if closing:
            height += theme.SPACE_8 + len(closing) * theme.BODY_LINE_H
        return height

    def render_content(self, surface: Surface, x: float, y: float, width: float) -> None:
        y = key_value_stack(surface, x, y, self.pairs, width)
        closing = self._closing_lines(width)
        if closing:
            draw_paragraph(
                surface, x, y + theme.SPACE_8, closing, size=theme.SUBTITLE_SIZE, bold=True
            )


SIGNATURE_ROW_H = 28


class AcceptanceCardBlock(CardBlock):
    """Client line, acceptance statement and signature rows."""

    def __init__(
        self,
        fonts: FontConfig,
        client_line: str,
        statement: str,
        signature_labels: Sequence[str] = ("Signature", "Date", "Name"),
        fill=None,
    ):
        super().__init__(fonts, "Acceptance", body=statement, fill=fill)
        self.client_line = client_line
        self.signature_labels = list(signature_labels)

    def content_height(self, width: float) -> float:
        return (
            theme.BODY_LINE_H
            + theme.SPACE_8
            + super().content_height(width)
            + len(self.signature_labels) * SIGNATURE_ROW_H
        )

    def render_content(self, surface: Surface, x: float, y: float, width: float) -> None:
        measure = make_measure(self.fonts.bold, theme.BODY_SIZE)
        y = draw_paragraph(surface, x, y, [fit_line(self.client_line, width, measure)], bold=True)
        y += theme.SPACE_8
        y = draw_paragraph(surface, x, y, self._body_lines(width))
        for label in self.signature_labels:
            y += SIGNATURE_ROW_H
            rule_y = y - theme.SPACE_12
            surface.line(x, rule_y, x + width, rule_y, theme.PALETTE["text_secondary"], width=0.5)
            surface.text(x, rule_y + theme.META_SIZE + 1, label, theme.META_SIZE, theme.PALETTE["text_secondary"])


# ==================== Pricing ====================

HERO_PADDING = 20
HERO_AMOUNT_MIN_SIZE = 14


class HeroBandBlock(Block):
    """Full-width band: large total on the left, terms lines on the right."""

    def __init__(
        self,
        fonts: FontConfig,
        amount: str,
        caption: str,
        currency_code: str,
        right_lines: Sequence[str],
    ):
        super().__init__(fonts)
        self.amount = amount
        self.caption = caption
        self.currency_code = currency_code
        self.right_lines = list(right_lines)

    def measure(self, width: float) -> float:
        left = (
            theme.META_LINE_H * 2 + theme.SPACE_8 * 2 + theme.HERO_AMOUNT_SIZE
        )
        right = len(self.right_lines) * theme.META_LINE_H
        return HERO_PADDING * 2 + max(left, right)

    def amount_layout(self, width: float) -> tuple[str, float]:
        """Amount text and font size that fit the left half of the band."""
        max_w = width / 2 - HERO_PADDING
        size = theme.HERO_AMOUNT_SIZE
        while size > HERO_AMOUNT_MIN_SIZE and make_measure(self.fonts.bold, size)(self.amount) > max_w:
            size -= 1
        return fit_line(self.amount, max_w, make_measure(self.fonts.bold, size)), size

    def render(self, surface: Surface, x: float, y: float, width: float, height: float) -> None:
        surface.rect(x, y, width, height, fill=theme.PALETTE["pricing_card"])
        surface.rect(x, y, 3, height, fill=theme.PALETTE["accent"])
        inner_x = x + HERO_PADDING
        top = y + HERO_PADDING
        surface.text(
            inner_x,
            first_baseline(top, theme.META_SIZE),
            self.caption.upper(),
            theme.META_SIZE,
            theme.PALETTE["text_secondary"],
            bold=True,
        )
        amount_top = top + theme.META_LINE_H + theme.SPACE_8
        amount, amount_size = self.amount_layout(width)
        # A shrunk amount keeps the full-size baseline
        surface.text(
            inner_x,
            first_baseline(amount_top, theme.HERO_AMOUNT_SIZE),
            amount,
            amount_size,
            theme.PALETTE["text"],
            bold=True,
        )
        code_top = amount_top + theme.HERO_AMOUNT_SIZE + theme.SPACE_8
        surface.text(
            inner_x,
            first_baseline(code_top, theme.META_SIZE),
            self.currency_code,
            theme.META_SIZE,
            theme.PALETTE["text_secondary"],
        )
        right_x = x + width - HERO_PADDING
        measure = make_measure(self.fonts.regular, theme.META_SIZE)
        max_w = width / 2 - HERO_PADDING
        surface.lines(
            right_x,
            first_baseline(top, theme.META_SIZE),
            [fit_line(line, max_w, measure) for line in self.right_lines],
            theme.META_SIZE,
            theme.META_LINE_H,
            theme.PALETTE["text_secondary"],
            align="right",
        )


TOTALS_ROW_H = 18
TOTALS_WIDTH_RATIO = 0.45


class TotalsBlock(Block):
    """Right-aligned label/amount rows with a rule above the final row."""

    def __init__(self, fonts: FontConfig, rows: Sequence[tuple[str, str]]):
        super().__init__(fonts)
        self.rows = list(rows)

    def measure(self, width: float) -> float:
        return len(self.rows) * TOTALS_ROW_H + theme.SPACE_8

    def render(self, surface: Surface, x: float, y: float, width: float, height: float) -> None:
        block_w = width * TOTALS_WIDTH_RATIO
        left = x + width - block_w
        right = x + width
        for index, (label, amount) in enumerate(self.rows):
            is_total = index == len(self.rows) - 1
            if is_total:
                surface.line(left, y + 2, right, y + 2, theme.PALETTE["border"], width=0.8)
                y += theme.SPACE_8
            size = theme.SUBTITLE_SIZE if is_total else theme.BODY_SIZE
            color = theme.PALETTE["text"] if is_total else theme.PALETTE["text_secondary"]
            baseline = first_baseline(y, size)
            surface.text(left, baseline, label, size, color, bold=is_total)
            surface.text(right, baseline, amount, size, theme.PALETTE["text"], bold=is_total, align="right")
            y += TOTALS_ROW_H
