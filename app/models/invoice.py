"""Invoice export model."""

from datetime import datetime
from typing import Optional
from pydantic import Field

from app.models.common import ClientRef, ExportModel


class InvoiceExportInput(ExportModel):
    invoice_number: str = Field(..., description="Invoice number")
    amount: float = Field(..., description="Invoice amount")
    due_date: datetime
    status: str = Field("PENDING", description="PENDING, PAID, OVERDUE ...")
    paid_at: Optional[datetime] = None
    description: Optional[str] = None
    client: Optional[ClientRef] = None
