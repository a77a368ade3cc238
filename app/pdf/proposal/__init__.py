"""Offer proposal composers: cover, overview, pricing, then page chrome."""

from app.pdf.proposal.chrome import apply_page_chrome
from app.pdf.proposal.context import ProposalContext
from app.pdf.proposal.cover import draw_cover_page, layout_for_block
from app.pdf.proposal.overview import draw_overview_page
from app.pdf.proposal.pricing import draw_pricing_page
from app.pdf.surface import Surface

__all__ = [
    "ProposalContext",
    "compose_proposal",
    "layout_for_block",
]


def compose_proposal(surface: Surface, ctx: ProposalContext) -> None:
    """Lay out every proposal page in order and register the chrome pass."""
    draw_cover_page(surface, ctx)
    draw_overview_page(surface, ctx)
    draw_pricing_page(surface, ctx)
    apply_page_chrome(surface, ctx)
