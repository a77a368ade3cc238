"""
Pricing page: hero band with the total, flowing line-item table, totals
breakdown, commercial notes, then Terms and Acceptance side by side.
"""

from app.pdf import theme
from app.pdf.blocks import (
    AcceptanceCardBlock,
    Block,
    BulletCardBlock,
    HeroBandBlock,
    TotalsBlock,
    draw_side_by_side,
    equal_height,
)
from app.pdf.proposal.context import ProposalContext
from app.pdf.surface import Surface
from app.pdf.tables import ColumnSpec, TableSpec, draw_flowing_table
from app.pdf.text import PLACEHOLDER, normalize_text, split_into_bullets

MAX_NOTE_CHARS = 110
MAX_NOTES = 5

PRICING_COLUMNS = (
    ColumnSpec("Deliverable", 35),
    ColumnSpec("Timeline", 24),
    ColumnSpec("Tech", 23),
    ColumnSpec("Price", 18, align="right"),
)

DEFAULT_COMMERCIAL_NOTES = (
    "Fixed price for the scope described in this proposal.",
    "Changes outside the agreed scope are estimated and approved separately.",
    "Includes project management, QA and handover documentation.",
)

ACCEPTANCE_STATEMENT = "By signing below, the client accepts this proposal, its scope and its terms."


def commercial_notes(ctx: ProposalContext) -> list[str]:
    notes = split_into_bullets(ctx.data.why_to_invest, MAX_NOTE_CHARS, MAX_NOTES)
    return notes or list(DEFAULT_COMMERCIAL_NOTES)


def terms_bullets(ctx: ProposalContext) -> list[str]:
    return [
        f"Payment: {ctx.settings.payment_terms}.",
        f"This proposal is valid for {ctx.validity_days} days from {ctx.issued_long}.",
        "Timelines start after kickoff and receipt of the first payment.",
        "Intellectual property transfers to the client on final payment.",
    ]


def acceptance_client_line(ctx: ProposalContext) -> str:
    client = normalize_text(ctx.data.client_name, fallback="Client")
    company = normalize_text(ctx.data.client_company, fallback="")
    return f"{client} — {company}" if company else client


def build_pricing_table(ctx: ProposalContext) -> TableSpec:
    rows = []
    for item in ctx.data.products:
        rows.append(
            [
                normalize_text(item.name),
                normalize_text(item.timeline),
                ", ".join(item.tech_stack) or PLACEHOLDER,
                ctx.money(item.price) if item.price is not None else PLACEHOLDER,
            ]
        )
    return TableSpec(
        columns=PRICING_COLUMNS,
        rows=rows,
        font_size=theme.META_SIZE,
        zebra_fill=theme.PALETTE["block"],
        header_fill=theme.PALETTE["grid"],
    )


def hero_block(ctx: ProposalContext) -> HeroBandBlock:
    return HeroBandBlock(
        ctx.fonts,
        amount=ctx.money(ctx.data.total_price),
        caption="Total investment",
        currency_code=ctx.settings.proposal_currency_code,
        right_lines=[
            ctx.settings.payment_terms,
            f"Valid for {ctx.validity_days} days from issue",
            f"Proposal {ctx.proposal_id}",
        ],
    )


def totals_block(ctx: ProposalContext) -> TotalsBlock:
    return TotalsBlock(
        ctx.fonts,
        [
            ("Subtotal", ctx.money(ctx.data.line_items_subtotal())),
            ("Taxes", PLACEHOLDER),
            ("Total", ctx.money(ctx.data.total_price)),
        ],
    )


def _ensure_room(surface: Surface, y: float, needed: float) -> float:
    """Start a new page when ``needed`` points do not fit above the footer."""
    if y + needed > theme.CONTENT_BOTTOM and y > theme.CONTENT_TOP:
        surface.new_page()
        return theme.CONTENT_TOP
    return y


def _draw_block(surface: Surface, block: Block, y: float) -> float:
    y = _ensure_room(surface, y, block.measure(theme.CONTENT_WIDTH))
    return block.draw(surface, theme.MARGIN, y, theme.CONTENT_WIDTH) + theme.SECTION_GAP


def draw_pricing_page(surface: Surface, ctx: ProposalContext) -> None:
    surface.new_page()
    y = theme.CONTENT_TOP
    y = _draw_block(surface, hero_block(ctx), y)

    y = draw_flowing_table(
        surface,
        build_pricing_table(ctx),
        y,
        x=theme.MARGIN,
        width=theme.CONTENT_WIDTH,
        top=theme.CONTENT_TOP,
        bottom=theme.CONTENT_BOTTOM,
    ) + theme.SPACE_16

    y = _draw_block(surface, totals_block(ctx), y)
    y = _draw_block(
        surface,
        BulletCardBlock(ctx.fonts, "Commercial Notes", commercial_notes(ctx)),
        y,
    )

    pair = [
        BulletCardBlock(ctx.fonts, "Terms", terms_bullets(ctx), fill=theme.PALETTE["white"]),
        AcceptanceCardBlock(
            ctx.fonts,
            acceptance_client_line(ctx),
            ACCEPTANCE_STATEMENT,
            fill=theme.PALETTE["white"],
        ),
    ]
    col_w = (theme.CONTENT_WIDTH - theme.COLUMN_GUTTER) / 2
    y = _ensure_room(surface, y, equal_height(pair, col_w))
    draw_side_by_side(surface, pair, theme.MARGIN, y, theme.CONTENT_WIDTH)
