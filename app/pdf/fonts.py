"""
Font configuration for every composer.

One FontConfig value is built per exporter and passed explicitly into
the layout code, so the typeface decision lives in a single place.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError

logger = logging.getLogger(__name__)


# Built-in (non-embedded) families: family -> (regular, bold)
BUILTIN_FAMILIES = {
    "Helvetica": ("Helvetica", "Helvetica-Bold"),
    "Times": ("Times-Roman", "Times-Bold"),
    "Courier": ("Courier", "Courier-Bold"),
}


@dataclass(frozen=True)
class FontConfig:
    """Regular and bold face names as registered with reportlab."""

    regular: str = "Helvetica"
    bold: str = "Helvetica-Bold"

    def face(self, bold: bool = False) -> str:
        return self.bold if bold else self.regular

    @classmethod
    def builtin(cls, family: str = "Helvetica") -> "FontConfig":
        regular, bold = BUILTIN_FAMILIES.get(family, BUILTIN_FAMILIES["Helvetica"])
        return cls(regular=regular, bold=bold)

    @classmethod
    def from_settings(cls, settings) -> "FontConfig":
        """
        Resolve the configured typeface.

        TTF faces are embedded only when both paths are given and load
        cleanly; otherwise the built-in family is used.
        """
        family = settings.font_family
        regular_path: Optional[Path] = settings.font_regular_path
        bold_path: Optional[Path] = settings.font_bold_path

        if regular_path is None or bold_path is None:
            if family not in BUILTIN_FAMILIES:
                logger.warning(f"Unknown built-in font family '{family}', using Helvetica")
            return cls.builtin(family)

        regular_name, bold_name = f"{family}", f"{family}-Bold"
        try:
            _register_ttf(regular_name, Path(regular_path))
            _register_ttf(bold_name, Path(bold_path))
        except (TTFError, OSError) as e:
            logger.warning(f"Font '{family}' could not be embedded, using Helvetica: {e}")
            return cls.builtin("Helvetica")
        return cls(regular=regular_name, bold=bold_name)


def _register_ttf(name: str, path: Path) -> None:
    if name in pdfmetrics.getRegisteredFontNames():
        return
    pdfmetrics.registerFont(TTFont(name, str(path)))
