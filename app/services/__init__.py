"""Services for the document export system."""

from .export_storage import ExportStorage, get_export_storage
from .exporters import (
    BaseExporter,
    ProposalExporter,
    TimesheetExporter,
    InvoiceExporter,
    generate_offer_proposal_pdf,
    export_timesheet_pdf,
    export_invoice_pdf,
    export_all_timesheets,
)

__all__ = [
    "ExportStorage",
    "get_export_storage",
    "BaseExporter",
    "ProposalExporter",
    "TimesheetExporter",
    "InvoiceExporter",
    "generate_offer_proposal_pdf",
    "export_timesheet_pdf",
    "export_invoice_pdf",
    "export_all_timesheets",
]
