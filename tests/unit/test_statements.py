"""Unit tests for timesheet and invoice statements."""

from datetime import date, datetime

from app.models import DateRange
from app.pdf.statements import (
    CompanyInfo,
    StatementContext,
    build_invoice_table,
    build_timesheet_table,
    compose_invoice,
    compose_timesheet,
    invoice_meta_lines,
    long_date,
    render_meta_block,
    short_date,
    timesheet_meta_lines,
)
from app.pdf.tables import build_table

ISSUED = date(2025, 3, 4)


def test_date_formats():
    assert short_date(ISSUED) == "Mar 4, 2025"
    assert long_date(ISSUED) == "March 4, 2025"


def test_credential_lines_skip_missing_fields():
    company = CompanyInfo(name="Zulbera", email="hi@zulbera.test", vat_number="HK123")
    assert company.credential_lines() == ["Zulbera", "hi@zulbera.test", "VAT: HK123"]
    assert CompanyInfo().credential_lines() == []


class TestTimesheet:
    def test_rows_and_total_row(self, sample_timesheet):
        spec = build_timesheet_table(sample_timesheet)
        assert spec.rows == [
            ["Mar 1, 2025", "8.0", "$70.00", "$560.00", "Setup"],
            ["Mar 2, 2025", "4.0", "$50.00", "$200.00", "-"],
            ["Mar 3, 2025", "2.0", "$100.00", "$200.00", "Review"],
        ]
        assert spec.total_row == ["Total", "14.0", "", "$960.00", ""]

    def test_total_row_is_bold(self, sample_timesheet, fonts):
        table = build_table(build_timesheet_table(sample_timesheet), 500, fonts)
        assert len(table._cellvalues) == 5
        assert table._cellvalues[4][0].style.fontName == fonts.bold
        assert table._cellvalues[1][0].style.fontName == fonts.regular

    def test_totals_fall_back_to_entry_sums(self, sample_timesheet):
        data = sample_timesheet.model_copy(update={"total_hours": None, "total_pay": None})
        assert build_timesheet_table(data).total_row == ["Total", "14.0", "", "$960.00", ""]

    def test_meta_lines(self, sample_timesheet):
        assert timesheet_meta_lines(sample_timesheet, ISSUED) == [
            ("Project", "Portal Rebuild"),
            ("Client", "Jane Doe (Acme)"),
            ("Status", "PENDING"),
            ("Generated", "March 4, 2025"),
        ]

    def test_meta_lines_with_period_and_description(self, sample_timesheet):
        data = sample_timesheet.model_copy(
            update={
                "is_paid": True,
                "description": "Sprint 3",
                "date_range": DateRange(start_date=date(2025, 3, 1), end_date=date(2025, 3, 3)),
            }
        )
        lines = dict(timesheet_meta_lines(data, ISSUED))
        assert lines["Status"] == "PAID"
        assert lines["Description"] == "Sprint 3"
        assert lines["Period"] == "Mar 1, 2025 - Mar 3, 2025"

    def test_compose(self, surface, sample_timesheet, settings, fonts, pdf_pages):
        ctx = StatementContext.from_settings(settings, fonts, ISSUED)
        compose_timesheet(surface, sample_timesheet, ctx)
        pages = pdf_pages(surface.finish())
        assert len(pages) == 1
        text = pages[0]
        assert "Portal Rebuild" in text
        assert "$960.00" in text
        assert "Total pay" in text
        assert "Page 1 of 1" in text
        assert settings.statement_tagline in text

    def test_long_timesheet_numbers_every_page(self, surface, sample_timesheet, settings, fonts, pdf_pages):
        entries = sample_timesheet.entries * 30
        data = sample_timesheet.model_copy(update={"entries": entries, "total_hours": None, "total_pay": None})
        compose_timesheet(surface, data, StatementContext.from_settings(settings, fonts, ISSUED))
        pages = pdf_pages(surface.finish())
        assert len(pages) >= 2
        for number, text in enumerate(pages, start=1):
            assert f"Page {number} of {len(pages)}" in text


class TestInvoice:
    def test_meta_lines(self, sample_invoice):
        assert invoice_meta_lines(sample_invoice) == [
            ("Invoice number", "INV 2025-001"),
            ("Due date", "April 1, 2025"),
            ("Status", "PENDING"),
            ("Client", "Acme"),
        ]

    def test_meta_lines_paid_without_client(self, sample_invoice):
        data = sample_invoice.model_copy(
            update={"client": None, "status": "PAID", "paid_at": datetime(2025, 3, 20, 9, 30)}
        )
        lines = dict(invoice_meta_lines(data))
        assert lines["Client"] == "—"
        assert lines["Paid"] == "March 20, 2025"

    def test_single_row_table(self, sample_invoice):
        spec = build_invoice_table(sample_invoice)
        assert spec.rows == [["Portal rebuild, milestone 1", "1", "$2,450.50", "$2,450.50"]]
        assert spec.total_row is None

    def test_description_fallback(self, sample_invoice):
        data = sample_invoice.model_copy(update={"description": "  "})
        assert build_invoice_table(data).rows[0][0] == "Invoice amount"

    def test_compose(self, surface, sample_invoice, settings, fonts, pdf_pages):
        compose_invoice(surface, sample_invoice, StatementContext.from_settings(settings, fonts, ISSUED))
        text = pdf_pages(surface.finish())[0]
        assert "INV 2025-001" in text
        assert "$2,450.50" in text
        assert "Page 1 of 1" in text


def test_meta_block_advances_per_wrapped_line(surface):
    short = render_meta_block(surface, [("Project", "Portal")], 100)
    long = render_meta_block(surface, [("Description", "word " * 200)], 100)
    assert long > short
    assert render_meta_block(surface, [], 100) == 100
