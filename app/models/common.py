"""
Shared data models.
Money formatting and the rendered-document result used by every exporter.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ExportModel(BaseModel):
    """
    Base for export inputs.

    Accepts both the camelCase keys sent by the dashboard
    (e.g. clientName, pageTitle) and the snake_case field names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ClientRef(ExportModel):
    """Client identity attached to a timesheet project or invoice."""

    name: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None

    def display_name(self) -> Optional[str]:
        """Name, else company, else None."""
        for value in (self.name, self.company):
            if value and value.strip():
                return value.strip()
        return None


class RenderedDocument(BaseModel):
    """A finished PDF, ready to be saved or streamed as a download."""

    document_id: str = Field(..., description="Document ID (e.g. PROP-20240115-a1b2)")
    filename: str = Field(..., description="Sanitized download filename")
    content: bytes = Field(..., description="PDF bytes")
    page_count: int = Field(0, description="Number of pages in the document")

    @property
    def size_bytes(self) -> int:
        return len(self.content)


def format_money(amount: float, symbol: str = "$") -> str:
    """Two decimals with thousands separators: 1234.5 -> '$1,234.50'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
