"""
Health check endpoints.
Used to confirm the server is up and answering.
"""

from fastapi import APIRouter

from app.config import get_settings

router = APIRouter()


@router.get("")
async def health_check():
    """Returns {"status": "healthy"} while the server is running."""
    return {"status": "healthy"}


@router.get("/detail")
async def health_check_detail():
    """
    Detailed status.
    Also reports the export configuration in use (brand, fonts, output directory).
    """
    settings = get_settings()
    return {
        "status": "healthy",
        "config": {
            "brand_name": settings.brand_name,
            "font_family": settings.font_family,
            "custom_fonts_configured": bool(settings.font_regular_path and settings.font_bold_path),
            "custom_logo_configured": settings.logo_path is not None,
            "proposal_currency": settings.proposal_currency_code,
            "output_dir": str(settings.output_dir),
        },
    }
