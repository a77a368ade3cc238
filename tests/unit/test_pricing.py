"""Unit tests for the proposal pricing page."""

from dataclasses import replace

from app.pdf.proposal.pricing import (
    DEFAULT_COMMERCIAL_NOTES,
    MAX_NOTE_CHARS,
    MAX_NOTES,
    acceptance_client_line,
    build_pricing_table,
    commercial_notes,
    draw_pricing_page,
    hero_block,
    terms_bullets,
    totals_block,
)
from app.pdf.text import PLACEHOLDER


def test_pricing_table_rows(proposal_context):
    spec = build_pricing_table(proposal_context)
    assert spec.rows[1] == ["Web app", "6 weeks", "React, Node, Figma", "€9,000.00"]
    assert spec.rows[2][2] == PLACEHOLDER
    assert spec.total_row is None


def test_unpriced_item_shows_placeholder(proposal_context, minimal_proposal):
    from app.models import LineItem

    data = minimal_proposal.model_copy(update={"products": [LineItem(name="Extra")]})
    spec = build_pricing_table(replace(proposal_context, data=data))
    assert spec.rows == [["Extra", PLACEHOLDER, PLACEHOLDER, PLACEHOLDER]]


def test_hero_shows_caller_total(proposal_context):
    hero = hero_block(proposal_context)
    assert hero.amount == "€12,000.00"
    assert hero.currency_code == "EUR"
    assert hero.right_lines[-1] == "Proposal PROP-20250304-abcd"


def test_totals_breakdown(proposal_context):
    assert totals_block(proposal_context).rows == [
        ("Subtotal", "€12,000.00"),
        ("Taxes", PLACEHOLDER),
        ("Total", "€12,000.00"),
    ]


def test_commercial_notes_from_why_to_invest(proposal_context):
    assert commercial_notes(proposal_context) == [
        "Faster checkout lifts conversion.",
        "Lower hosting costs.",
        "Easier hiring.",
    ]


def test_commercial_notes_default_and_caps(proposal_context, minimal_proposal):
    empty = replace(proposal_context, data=minimal_proposal)
    assert commercial_notes(empty) == list(DEFAULT_COMMERCIAL_NOTES)

    verbose = minimal_proposal.model_copy(update={"why_to_invest": "\n".join(["word " * 60] * 9)})
    notes = commercial_notes(replace(proposal_context, data=verbose))
    assert len(notes) == MAX_NOTES
    assert all(len(note) <= MAX_NOTE_CHARS + 1 for note in notes)


def test_terms_and_acceptance_lines(proposal_context):
    terms = terms_bullets(proposal_context)
    assert terms[0] == "Payment: 50% upfront, 50% on delivery."
    assert "valid for 14 days from March 4, 2025" in terms[1]
    assert acceptance_client_line(proposal_context) == "Jane Doe — Acme & Co. LLC"


def test_zero_total_with_empty_table(surface, proposal_context, minimal_proposal, pdf_pages):
    draw_pricing_page(surface, replace(proposal_context, data=minimal_proposal))
    text = pdf_pages(surface.finish())[1]
    assert "€0.00" in text
    assert "Deliverable" in text
    assert "ACCEPTANCE" in text and "TERMS" in text


def test_many_line_items_flow_onto_more_pages(surface, proposal_context, minimal_proposal):
    from app.models import LineItem

    products = [LineItem(name=f"Deliverable {i}", price=100, timeline="1 week") for i in range(60)]
    data = minimal_proposal.model_copy(update={"products": products, "total_price": 6000})
    draw_pricing_page(surface, replace(proposal_context, data=data))
    assert surface.page_count >= 3
