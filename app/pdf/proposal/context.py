"""Per-document values shared by the proposal composers."""

from dataclasses import dataclass
from datetime import date

from app.config import Settings
from app.models import ProposalInput, format_money
from app.pdf.assets import BrandAssets
from app.pdf.fonts import FontConfig


@dataclass(frozen=True)
class ProposalContext:
    data: ProposalInput
    proposal_id: str
    issued_on: date
    fonts: FontConfig
    assets: BrandAssets
    settings: Settings

    def money(self, amount: float) -> str:
        return format_money(amount, self.settings.proposal_currency_symbol)

    @property
    def validity_days(self) -> int:
        return self.settings.proposal_validity_days

    @property
    def issued_long(self) -> str:
        """e.g. 'March 4, 2025'."""
        return f"{self.issued_on:%B} {self.issued_on.day}, {self.issued_on.year}"

    @property
    def issued_dotted(self) -> str:
        return self.issued_on.strftime("%d.%m.%Y")
