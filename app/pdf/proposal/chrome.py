"""
Header/footer stamping for proposals.

Runs once, when the document is finished and the page count is final:
every page gets the footer; pages after the cover also get the header.
"""

from app.pdf import theme
from app.pdf.proposal.context import ProposalContext
from app.pdf.surface import Surface
from app.pdf.text import fit_line, make_measure

HEADER_TOP = theme.MARGIN - 24
HEADER_LOGO_H = 12
HEADER_LABEL = "Project Proposal"
FOOTER_RULE_Y = theme.PAGE_HEIGHT - theme.FOOTER_H + 10


def draw_header(surface: Surface, ctx: ProposalContext) -> None:
    x = theme.MARGIN
    right = surface.width - theme.MARGIN
    baseline = HEADER_TOP + HEADER_LOGO_H - 2

    logo = ctx.assets.logo
    if logo is not None:
        logo_w = HEADER_LOGO_H * logo.aspect
        surface.image(logo.png, x, HEADER_TOP, logo_w, HEADER_LOGO_H)
        label_x = x + logo_w + theme.SPACE_8
    else:
        brand = ctx.settings.brand_name
        surface.text(x, baseline, brand, theme.BODY_SIZE, theme.PALETTE["text"], bold=True)
        label_x = x + surface.measure(brand, theme.BODY_SIZE, bold=True) + 6
    surface.text(label_x, baseline, HEADER_LABEL, theme.META_SIZE, theme.PALETTE["text_secondary"])

    meta = make_measure(ctx.fonts.regular, theme.SMALL_SIZE)
    meta_width = theme.CONTENT_WIDTH / 2
    surface.text_right(
        right, HEADER_TOP + 6, fit_line(ctx.issued_long, meta_width, meta),
        theme.SMALL_SIZE, theme.PALETTE["text_secondary"],
    )
    surface.text_right(
        right, HEADER_TOP + 16, fit_line(ctx.proposal_id, meta_width, meta),
        theme.SMALL_SIZE, theme.PALETTE["text_secondary"],
    )
    rule_y = HEADER_TOP + 24
    surface.line(x, rule_y, right, rule_y, theme.PALETTE["border"], width=0.3)


def draw_footer(surface: Surface, ctx: ProposalContext, page: int, total: int) -> None:
    x = theme.MARGIN
    right = surface.width - theme.MARGIN
    surface.line(x, FOOTER_RULE_Y, right, FOOTER_RULE_Y, theme.PALETTE["border"], width=0.3)
    baseline = FOOTER_RULE_Y + 12
    surface.text_center(
        surface.width / 2, baseline, f"Page {page} of {total}",
        theme.META_SIZE, theme.PALETTE["text_secondary"],
    )
    if page == 1:
        return
    side = make_measure(ctx.fonts.regular, theme.SMALL_SIZE)
    side_width = theme.CONTENT_WIDTH / 2 - 40
    surface.text(
        x, baseline, fit_line(ctx.settings.contact_line, side_width, side),
        theme.SMALL_SIZE, theme.PALETTE["text_secondary"],
    )
    surface.text_right(
        right, baseline, f"Valid {ctx.validity_days} days",
        theme.SMALL_SIZE, theme.PALETTE["text_secondary"],
    )


def apply_page_chrome(surface: Surface, ctx: ProposalContext) -> None:
    """Register the stamping pass; it runs when the surface is finished."""

    def stamp(target: Surface, page: int, total: int) -> None:
        if page > 1:
            draw_header(target, ctx)
        draw_footer(target, ctx, page, total)

    surface.stamp_pages(stamp)
