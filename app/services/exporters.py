"""
Document exporters.

Each exporter loads brand assets, lays out its pages on a fresh Surface
in a worker thread and returns a RenderedDocument. BaseExporter fixes
the flow (logging, timing, ID generation, error wrapping); subclasses
only supply the composer and the filename.

Usage:
    document = await generate_offer_proposal_pdf(proposal)
    await get_export_storage().save(document)
"""

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Generic, Optional, TypeVar

from app.config import Settings, get_settings
from app.exceptions import DocumentExportError, GenerationError, InputValidationError
from app.models import (
    InvoiceExportInput,
    ProposalInput,
    RenderedDocument,
    TimesheetExportInput,
)
from app.pdf.assets import BrandAssets, ImageBackend, load_brand_assets
from app.pdf.filenames import invoice_filename, proposal_filename, timesheet_filename
from app.pdf.fonts import FontConfig
from app.pdf.proposal import ProposalContext, compose_proposal
from app.pdf.statements import StatementContext, compose_invoice, compose_timesheet
from app.pdf.surface import Surface

InputT = TypeVar("InputT")

logger = logging.getLogger(__name__)

TOTAL_TOLERANCE = 0.005


class BaseExporter(ABC, Generic[InputT]):
    """
    Template method for every export.

    Flow:
    1. Log start
    2. Load brand assets (failures degrade to text fallbacks)
    3. Compose pages on a new Surface in a worker thread
    4. Log completion with elapsed time

    Attributes:
        _id_prefix: Document ID prefix (e.g. "PROP", "TS", "INV")
        _exporter_name: Name used in log lines
        _include_cover: Whether the cover background must be rasterized
    """

    _id_prefix: str = "DOC"
    _exporter_name: str = "BaseExporter"
    _include_cover: bool = False

    def __init__(
        self,
        settings: Optional[Settings] = None,
        backend: Optional[ImageBackend] = None,
        assets: Optional[BrandAssets] = None,
    ):
        """
        Args:
            settings: Settings instance. None uses get_settings().
            backend: Image backend for asset rasterization. None uses Pillow.
            assets: Pre-loaded brand assets. None loads them on each export.
        """
        self.settings = settings or get_settings()
        self.backend = backend
        self.fonts = FontConfig.from_settings(self.settings)
        self._assets = assets

    def _generate_id(self, today: date) -> str:
        """
        Standard document ID.

        Format: {PREFIX}-{YYYYMMDD}-{4 hex chars}
        Example: PROP-20240115-a1b2
        """
        return f"{self._id_prefix}-{today.strftime('%Y%m%d')}-{uuid.uuid4().hex[:4]}"

    async def load_assets(self) -> BrandAssets:
        if self._assets is None:
            self._assets = await load_brand_assets(
                self.settings, backend=self.backend, include_cover=self._include_cover
            )
        return self._assets

    async def export(
        self,
        data: InputT,
        today: Optional[date] = None,
        document_id: Optional[str] = None,
    ) -> RenderedDocument:
        """
        Produce one PDF.

        Args:
            data: Export input.
            today: Issue date printed on the document. Defaults to today.
            document_id: Fixed ID for deterministic output.

        Returns:
            The finished document (not yet saved).

        Raises:
            GenerationError: Layout or drawing failed; nothing is returned.
        """
        today = today or date.today()
        document_id = document_id or self._generate_id(today)
        logger.info(f"[{self._exporter_name}] export started: {document_id} ({self._describe(data)})")
        start_time = datetime.now()

        try:
            assets = await self.load_assets()
            document = await asyncio.to_thread(self._render, data, assets, document_id, today)
        except DocumentExportError as e:
            elapsed = (datetime.now() - start_time).total_seconds()
            logger.error(f"[{self._exporter_name}] export failed ({elapsed:.2f}s): {e.message}")
            raise
        except Exception as e:
            elapsed = (datetime.now() - start_time).total_seconds()
            logger.error(f"[{self._exporter_name}] export failed ({elapsed:.2f}s): {e}", exc_info=True)
            raise GenerationError(
                f"Failed to generate {document_id}",
                details={"document_id": document_id, "error": str(e)},
            ) from e

        elapsed = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"[{self._exporter_name}] export finished: {document.filename}, "
            f"{document.page_count} pages, {document.size_bytes} bytes, {elapsed:.2f}s"
        )
        return document

    def _render(self, data: InputT, assets: BrandAssets, document_id: str, today: date) -> RenderedDocument:
        surface = Surface(self.fonts, title=self._title(data))
        self._compose(surface, data, assets, document_id, today)
        page_count = surface.page_count
        content = surface.finish()
        return RenderedDocument(
            document_id=document_id,
            filename=self._filename(data, today),
            content=content,
            page_count=page_count,
        )

    def _describe(self, data: InputT) -> str:
        return type(data).__name__

    def _title(self, data: InputT) -> str:
        return ""

    @abstractmethod
    def _compose(
        self, surface: Surface, data: InputT, assets: BrandAssets, document_id: str, today: date
    ) -> None:
        """Lay out every page on ``surface`` (runs in a worker thread)."""

    @abstractmethod
    def _filename(self, data: InputT, today: date) -> str:
        """Download filename for ``data``."""


class ProposalExporter(BaseExporter[ProposalInput]):
    """Cover, overview and pricing pages with header/footer chrome."""

    _id_prefix = "PROP"
    _exporter_name = "ProposalExporter"
    _include_cover = True

    def _describe(self, data: ProposalInput) -> str:
        return f"{data.client_name} / {data.page_title}, {len(data.products)} line items"

    def _title(self, data: ProposalInput) -> str:
        return f"Proposal - {data.page_title}"

    def _compose(self, surface, data, assets, document_id, today) -> None:
        subtotal = data.line_items_subtotal()
        if data.products and abs(subtotal - data.total_price) > TOTAL_TOLERANCE:
            logger.warning(
                f"[{self._exporter_name}] {document_id}: total_price {data.total_price:.2f} "
                f"differs from line-item subtotal {subtotal:.2f}; showing total_price as Total"
            )
        ctx = ProposalContext(
            data=data,
            proposal_id=document_id,
            issued_on=today,
            fonts=self.fonts,
            assets=assets,
            settings=self.settings,
        )
        compose_proposal(surface, ctx)

    def _filename(self, data: ProposalInput, today: date) -> str:
        return proposal_filename(data.client_name)


class TimesheetExporter(BaseExporter[TimesheetExportInput]):
    """Timesheet statement for one project."""

    _id_prefix = "TS"
    _exporter_name = "TimesheetExporter"

    def _describe(self, data: TimesheetExportInput) -> str:
        return f"{data.project_name}, {len(data.entries)} entries"

    def _title(self, data: TimesheetExportInput) -> str:
        return f"Timesheet - {data.project_name}"

    def _compose(self, surface, data, assets, document_id, today) -> None:
        ctx = StatementContext.from_settings(self.settings, self.fonts, today, logo=assets.logo)
        compose_timesheet(surface, data, ctx)

    def _filename(self, data: TimesheetExportInput, today: date) -> str:
        return timesheet_filename(data.project_name, today)


class InvoiceExporter(BaseExporter[InvoiceExportInput]):
    """Single-amount invoice statement."""

    _id_prefix = "INV"
    _exporter_name = "InvoiceExporter"

    def _describe(self, data: InvoiceExportInput) -> str:
        return f"invoice {data.invoice_number}"

    def _title(self, data: InvoiceExportInput) -> str:
        return f"Invoice {data.invoice_number}"

    def _compose(self, surface, data, assets, document_id, today) -> None:
        ctx = StatementContext.from_settings(self.settings, self.fonts, today, logo=assets.logo)
        compose_invoice(surface, data, ctx)

    def _filename(self, data: InvoiceExportInput, today: date) -> str:
        return invoice_filename(data.invoice_number)


# ==================== Entry points ====================

async def generate_offer_proposal_pdf(
    data: ProposalInput,
    settings: Optional[Settings] = None,
    today: Optional[date] = None,
    proposal_id: Optional[str] = None,
) -> RenderedDocument:
    """Render the offer proposal for ``data``."""
    return await ProposalExporter(settings).export(data, today=today, document_id=proposal_id)


async def export_timesheet_pdf(
    data: TimesheetExportInput,
    settings: Optional[Settings] = None,
    today: Optional[date] = None,
) -> RenderedDocument:
    return await TimesheetExporter(settings).export(data, today=today)


async def export_invoice_pdf(
    data: InvoiceExportInput,
    settings: Optional[Settings] = None,
    today: Optional[date] = None,
) -> RenderedDocument:
    return await InvoiceExporter(settings).export(data, today=today)


async def export_all_timesheets(
    projects: list[TimesheetExportInput],
    is_paid: bool,
    settings: Optional[Settings] = None,
    today: Optional[date] = None,
) -> list[RenderedDocument]:
    """
    One independent timesheet per project with the requested paid status.

    Args:
        projects: Candidate projects.
        is_paid: Export paid (True) or pending (False) projects.

    Returns:
        Rendered documents in project order.

    Raises:
        InputValidationError: No project has the requested status.
    """
    selected = [project for project in projects if project.is_paid == is_paid]
    if not selected:
        status = "paid" if is_paid else "pending"
        raise InputValidationError(
            f"No {status} projects to export",
            details={"is_paid": is_paid, "candidates": len(projects)},
        )

    exporter = TimesheetExporter(settings)
    await exporter.load_assets()
    logger.info(f"[TimesheetExporter] exporting {len(selected)} of {len(projects)} projects")
    return list(await asyncio.gather(*(exporter.export(p, today=today) for p in selected)))
