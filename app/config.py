from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings.
    Values are read from environment variables (or a .env file).
    """

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = ["http://localhost:5173"]
    log_level: str = "INFO"

    # Brand: name used for text fallbacks, website on the cover, footer contact line
    brand_name: str = "Zulbera"
    website_url: str = "www.zulbera.com"
    contact_line: str = "hello@zulbera.com  ·  www.zulbera.com"
    logo_path: Optional[Path] = None  # None -> packaged app/pdf/resources/logo.svg
    logo_box_width: int = 600
    logo_box_height: int = 120
    cover_background_scale: float = 2.0

    # Company credentials printed on timesheet/invoice headers
    company_name: str = "Zulbera"
    company_address: Optional[str] = (
        "Suite C, Level 7, World Trust Tower, 50 Stanley Street, Central, Hong Kong"
    )
    company_email: Optional[str] = None
    company_phone: Optional[str] = None
    company_vat_number: Optional[str] = None
    company_registration_number: Optional[str] = None

    # Proposal
    proposal_currency_symbol: str = "€"
    proposal_currency_code: str = "EUR"
    proposal_validity_days: int = 14
    payment_terms: str = "50% upfront, 50% on delivery"
    tech_stack_style: str = "inline"  # "inline" (joined text) or "tags" (pills)

    # Statements (timesheet / invoice)
    statement_currency_symbol: str = "$"
    statement_tagline: Optional[str] = "Made with care by Zulbera"

    # Fonts: built-in family unless both TTF paths are given and load cleanly
    font_family: str = "Helvetica"
    font_regular_path: Optional[Path] = None
    font_bold_path: Optional[Path] = None

    # Output directory for saved exports
    output_dir: Path = Path("workspace/outputs/exports")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """
    Return the cached settings instance.
    The environment is read once per process.
    """
    return Settings()
