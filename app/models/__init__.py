"""Data models for the document export service."""

from .common import ExportModel, ClientRef, RenderedDocument, format_money
from .proposal import LineItem, ProposalInput
from .timesheet import TimesheetEntry, DateRange, TimesheetExportInput
from .invoice import InvoiceExportInput

__all__ = [
    # Common
    "ExportModel",
    "ClientRef",
    "RenderedDocument",
    "format_money",
    # Proposal
    "LineItem",
    "ProposalInput",
    # Timesheet
    "TimesheetEntry",
    "DateRange",
    "TimesheetExportInput",
    # Invoice
    "InvoiceExportInput",
]
