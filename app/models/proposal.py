"""Offer proposal input models."""

from typing import Optional, Union
from pydantic import Field, field_validator

from app.models.common import ExportModel


class LineItem(ExportModel):
    """One deliverable of the offer: a priced row of the pricing table."""

    name: str = Field("", description="Deliverable name")
    price: Optional[float] = Field(None, description="Price (omitted -> shown as '—')")
    timeline: str = Field("", description="Free-text duration, e.g. '2 weeks'")
    tech_stack: list[str] = Field(default_factory=list, description="Technology tags")

    @field_validator("tech_stack", mode="before")
    @classmethod
    def _split_tech_stack(cls, value: Union[str, list, None]) -> list[str]:
        """Accept 'React, Node' as well as ['React', 'Node']."""
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        return [str(tag).strip() for tag in value if str(tag).strip()]

    @field_validator("name", "timeline", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value


class ProposalInput(ExportModel):
    """
    Everything the proposal exporter needs.

    total_price is trusted for display; line_items_subtotal() is computed
    independently for the pricing breakdown.
    """

    client_name: str = Field(..., description="Client name (cover and prepared-for card)")
    client_email: Optional[str] = None
    client_company: Optional[str] = None
    client_phone: Optional[str] = None

    page_title: str = Field(..., description="Project title")
    description: Optional[str] = Field("", description="Project description")
    what_we_need: Optional[str] = None
    roadmap: Optional[str] = None
    why_to_invest: Optional[str] = None

    products: list[LineItem] = Field(default_factory=list)
    total_price: float = Field(0.0, description="Caller-computed total")

    def line_items_subtotal(self) -> float:
        return sum(item.price or 0.0 for item in self.products)

    def unique_tech_tags(self) -> list[str]:
        """Ordered union of every line item's tags (first occurrence wins)."""
        seen: dict[str, None] = {}
        for item in self.products:
            for tag in item.tech_stack:
                seen.setdefault(tag, None)
        return list(seen)
