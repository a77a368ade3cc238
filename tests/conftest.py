"""Shared pytest fixtures."""

import io
from datetime import date, datetime

import pytest
from PIL import Image

from app.config import Settings
from app.models import (
    ClientRef,
    InvoiceExportInput,
    LineItem,
    ProposalInput,
    TimesheetEntry,
    TimesheetExportInput,
)
from app.pdf.assets import BrandAssets, PillowBackend
from app.pdf.fonts import FontConfig
from app.pdf.proposal import ProposalContext
from app.pdf.surface import Surface

ISSUE_DATE = date(2025, 3, 4)


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, output_dir=tmp_path / "exports")


@pytest.fixture
def fonts():
    return FontConfig()


@pytest.fixture
def surface(fonts):
    """A fresh A4 drawing surface."""
    return Surface(fonts)


@pytest.fixture
def no_assets():
    """Brand assets as if every asset failed to load."""
    return BrandAssets()


@pytest.fixture
def png_bytes():
    """PNG factory: png_bytes(width, height)."""

    def make(width: int, height: int) -> bytes:
        buffer = io.BytesIO()
        Image.new("RGBA", (width, height), (37, 37, 37, 255)).save(buffer, format="PNG")
        return buffer.getvalue()

    return make


@pytest.fixture
def raster_assets(png_bytes):
    """Small in-memory logo and cover background."""
    from app.pdf.assets import rasterize

    return BrandAssets(
        logo=rasterize(png_bytes(1264, 218), 600, 120),
        cover_background=rasterize(png_bytes(60, 84), 60, 84),
    )


class FailingBackend(PillowBackend):
    """Backend whose decode always fails, like a corrupt image."""

    def decode(self, data: bytes, zoom: float = 1.0):
        from app.exceptions import AssetLoadError

        raise AssetLoadError("corrupt image")


@pytest.fixture
def failing_backend():
    return FailingBackend()


@pytest.fixture
def sample_proposal():
    """ProposalInput with three priced line items."""
    return ProposalInput(
        client_name="Jane Doe",
        client_email="jane@acme.test",
        client_company="Acme & Co. LLC",
        page_title="Customer Portal Rebuild",
        description="A rebuild of the customer portal with a modern stack and faster checkout.",
        what_we_need="Brand guidelines\nAccess to the current API",
        roadmap="Discovery, design, build, launch.",
        why_to_invest="Faster checkout lifts conversion. Lower hosting costs. Easier hiring.",
        products=[
            LineItem(name="Discovery", price=1500, timeline="1 week", tech_stack=["Figma"]),
            LineItem(name="Web app", price=9000, timeline="6 weeks", tech_stack="React, Node, Figma"),
            LineItem(name="Launch support", price=1500, timeline="2 weeks", tech_stack=[]),
        ],
        total_price=12000,
    )


@pytest.fixture
def minimal_proposal():
    """No optional free text and no line items."""
    return ProposalInput(client_name="Acme", page_title="Landing page", total_price=0)


@pytest.fixture
def proposal_context(sample_proposal, settings, fonts, no_assets):
    return ProposalContext(
        data=sample_proposal,
        proposal_id="PROP-20250304-abcd",
        issued_on=ISSUE_DATE,
        fonts=fonts,
        assets=no_assets,
        settings=settings,
    )


@pytest.fixture
def sample_timesheet():
    """Three entries: 8h@$70, 4h@$50, 2h@$100 -> 14h / $960."""
    return TimesheetExportInput(
        project_name="Portal Rebuild",
        client=ClientRef(name="Jane Doe", company="Acme"),
        is_paid=False,
        entries=[
            TimesheetEntry(date=date(2025, 3, 1), hours_worked=8, hourly_rate=70, total_pay=560, notes="Setup"),
            TimesheetEntry(date=date(2025, 3, 2), hours_worked=4, hourly_rate=50, total_pay=200),
            TimesheetEntry(date=date(2025, 3, 3), hours_worked=2, hourly_rate=100, total_pay=200, notes="Review"),
        ],
        total_hours=14,
        total_pay=960,
    )


@pytest.fixture
def sample_invoice():
    return InvoiceExportInput(
        invoice_number="INV 2025-001",
        amount=2450.5,
        due_date=datetime(2025, 4, 1),
        status="PENDING",
        description="Portal rebuild, milestone 1",
        client=ClientRef(company="Acme"),
    )


@pytest.fixture
def pdf_pages():
    """Extract per-page text from PDF bytes."""
    from pypdf import PdfReader

    def extract(content: bytes) -> list[str]:
        reader = PdfReader(io.BytesIO(content))
        return [page.extract_text() or "" for page in reader.pages]

    return extract


@pytest.fixture
def export_storage(tmp_path):
    """ExportStorage writing to a temporary directory."""
    from app.services.export_storage import ExportStorage

    return ExportStorage(base_path=tmp_path / "saved")


@pytest.fixture
async def async_client():
    """httpx AsyncClient for the FastAPI app."""
    from httpx import AsyncClient, ASGITransport
    from app.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
