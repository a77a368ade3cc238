"""
Cover page: decorative background, website label, logo sitting on the
band boundary, and the "Offer" / "For: CLIENT" / date block inside the
dark band. No header or page chrome other than the shared footer.
"""

from dataclasses import dataclass

from app.pdf import theme
from app.pdf.proposal.context import ProposalContext
from app.pdf.surface import Surface
from app.pdf.text import Measure, clamp_lines, make_measure, normalize_text, wrap_to_width

FOR_LINE_SPACING = 1.2


@dataclass(frozen=True)
class ForBlockLayout:
    """Geometry of the "For: CLIENT" block, top-down points."""

    font_size: float
    lines: list[str]
    line_height: float
    top: float
    bottom: float
    min_top: float
    max_bottom: float

    @property
    def first_baseline(self) -> float:
        return self.top + self.font_size * 0.8


def band_top(page_height: float) -> float:
    return page_height * theme.COVER_BAND_FRACTION


def title_baseline(page_height: float) -> float:
    top = band_top(page_height)
    return top + (page_height - top) * theme.COVER_TITLE_BAND_FRACTION


def date_reserve_top(page_height: float) -> float:
    """Top of the region kept free for the date stamp."""
    return page_height - theme.COVER_MARGIN - theme.META_SIZE - theme.SPACE_16


def for_label(client_name: str) -> str:
    name = normalize_text(client_name, fallback="").upper() or "CLIENT"
    return f"For: {name}"


def layout_for_block(
    client_name: str,
    page_width: float,
    page_height: float,
    measure_for_size,
) -> ForBlockLayout:
    """
    Wrap the client label to half the page width at the large size; if
    that needs more than one line, re-wrap at the small size. The block is
    anchored above the bottom margin and kept between the title and the
    date stamp, dropping trailing lines with an ellipsis if it still would
    not fit.

    ``measure_for_size(size) -> Measure`` supplies text widths.
    """
    label = for_label(client_name)
    max_width = page_width * theme.COVER_FOR_WIDTH_FRACTION

    size = theme.COVER_FOR_SIZE_LARGE
    measure: Measure = measure_for_size(size)
    lines = wrap_to_width(label, max_width, measure)
    if len(lines) > 1:
        size = theme.COVER_FOR_SIZE_SMALL
        measure = measure_for_size(size)
        lines = wrap_to_width(label, max_width, measure)

    line_height = size * FOR_LINE_SPACING
    min_top = title_baseline(page_height) + theme.SPACE_16
    max_bottom = date_reserve_top(page_height)
    max_lines = max(1, min(theme.COVER_FOR_MAX_LINES, int((max_bottom - min_top) // line_height)))
    lines = clamp_lines(lines, max_lines, max_width, measure)

    height = len(lines) * line_height
    bottom = page_height - theme.COVER_MARGIN - theme.COVER_FOR_BOTTOM_MARGIN
    top = bottom - height
    if top < min_top:
        top = min_top
        bottom = top + height
    return ForBlockLayout(
        font_size=size,
        lines=lines,
        line_height=line_height,
        top=top,
        bottom=bottom,
        min_top=min_top,
        max_bottom=max_bottom,
    )


def draw_cover_page(surface: Surface, ctx: ProposalContext) -> None:
    w, h = surface.width, surface.height
    top_of_band = band_top(h)

    background = ctx.assets.cover_background
    if background is not None:
        surface.image(background.png, 0, 0, w, h)
    else:
        surface.rect(0, 0, w, h, fill=theme.PALETTE["white"])
        surface.rect(0, top_of_band, w, h - top_of_band, fill=theme.COVER_BAND_COLOR)

    surface.text_right(
        w - theme.COVER_MARGIN,
        theme.COVER_MARGIN,
        ctx.settings.website_url,
        theme.META_SIZE,
        theme.PALETTE["text_secondary"],
    )

    # Logo right of centre, resting just above the band
    logo = ctx.assets.logo
    logo_w = theme.COVER_LOGO_WIDTH
    logo_h = round(logo_w / (logo.aspect if logo else theme.LOGO_ASPECT))
    logo_x = w - theme.COVER_MARGIN - logo_w
    logo_y = top_of_band - logo_h - theme.COVER_LOGO_BAND_GAP
    if logo is not None:
        surface.image(logo.png, logo_x, logo_y, logo_w, logo_h)
    else:
        surface.text(logo_x, logo_y + logo_h - 6, ctx.settings.brand_name, 18, theme.COVER_DARK_GREY, bold=True)

    white = theme.PALETTE["white"]
    surface.text_right(w - theme.COVER_MARGIN, title_baseline(h), "Offer", theme.TITLE_SIZE, white, bold=True)

    layout = layout_for_block(
        ctx.data.client_name,
        w,
        h,
        lambda size: make_measure(ctx.fonts.bold, size),
    )
    surface.lines(
        theme.COVER_MARGIN,
        layout.first_baseline,
        layout.lines,
        layout.font_size,
        layout.line_height,
        white,
        bold=True,
    )

    surface.text_right(
        w - theme.COVER_MARGIN,
        h - theme.COVER_MARGIN,
        ctx.issued_dotted,
        theme.META_SIZE,
        theme.COVER_DATE_COLOR,
    )
