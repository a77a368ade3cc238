"""Unit tests for export input models."""

from datetime import date

import pytest
from pydantic import ValidationError

from app.models import (
    ClientRef,
    LineItem,
    ProposalInput,
    RenderedDocument,
    TimesheetEntry,
    TimesheetExportInput,
    format_money,
)


class TestProposalInput:
    def test_accepts_camel_case_payload(self):
        proposal = ProposalInput.model_validate(
            {
                "clientName": "Jane",
                "pageTitle": "Portal",
                "whyToInvest": "Because.",
                "totalPrice": 100,
                "products": [{"name": "A", "price": 100, "techStack": "React, Node"}],
            }
        )
        assert proposal.client_name == "Jane"
        assert proposal.why_to_invest == "Because."
        assert proposal.products[0].tech_stack == ["React", "Node"]

    def test_accepts_field_names(self):
        proposal = ProposalInput(client_name="Jane", page_title="Portal")
        assert proposal.total_price == 0.0
        assert proposal.products == []

    def test_requires_client_and_title(self):
        with pytest.raises(ValidationError):
            ProposalInput.model_validate({"pageTitle": "Portal"})

    def test_subtotal_treats_missing_price_as_zero(self):
        proposal = ProposalInput(
            client_name="Jane",
            page_title="Portal",
            products=[LineItem(name="A", price=100), LineItem(name="B")],
        )
        assert proposal.line_items_subtotal() == 100

    def test_unique_tech_tags_keep_first_occurrence_order(self, sample_proposal):
        assert sample_proposal.unique_tech_tags() == ["Figma", "React", "Node"]

    def test_tech_stack_drops_empty_tags(self):
        assert LineItem(tech_stack=" , React ,, ").tech_stack == ["React"]

    def test_null_strings_become_empty(self):
        item = LineItem.model_validate({"name": None, "timeline": None})
        assert item.name == "" and item.timeline == ""


class TestTimesheetModels:
    def test_totals_use_supplied_values(self, sample_timesheet):
        assert sample_timesheet.total_hours_value() == 14
        assert sample_timesheet.total_pay_value() == 960

    def test_totals_fall_back_to_entries(self):
        project = TimesheetExportInput(
            project_name="P",
            entries=[
                TimesheetEntry(date=date(2025, 1, 1), hours_worked=1.5, hourly_rate=10, total_pay=15),
                TimesheetEntry(date=date(2025, 1, 2), hours_worked=2, hourly_rate=10, total_pay=20),
            ],
        )
        assert project.total_hours_value() == 3.5
        assert project.total_pay_value() == 35

    def test_negative_hours_rejected(self):
        with pytest.raises(ValidationError):
            TimesheetEntry(date=date(2025, 1, 1), hours_worked=-1, hourly_rate=10, total_pay=0)

    def test_camel_case_entry(self):
        entry = TimesheetEntry.model_validate(
            {"date": "2025-01-01", "hoursWorked": 2, "hourlyRate": 50, "totalPay": 100}
        )
        assert entry.hours_worked == 2


class TestCommon:
    def test_client_display_name(self):
        assert ClientRef(name="Jane", company="Acme").display_name() == "Jane"
        assert ClientRef(name=" ", company="Acme").display_name() == "Acme"
        assert ClientRef().display_name() is None

    def test_format_money(self):
        assert format_money(960) == "$960.00"
        assert format_money(1234.5, "€") == "€1,234.50"
        assert format_money(-5) == "-$5.00"

    def test_rendered_document_size(self):
        doc = RenderedDocument(document_id="X", filename="x.pdf", content=b"%PDF-1.4")
        assert doc.size_bytes == 8
