"""
Download filenames for exported documents.

Every name is reduced to [A-Za-z0-9_-] before its suffix is added so it
is safe on any filesystem and in a Content-Disposition header.
"""

import re
from datetime import date
from typing import Optional

_WHITESPACE = re.compile(r"\s+")
_UNSAFE = re.compile(r"[^a-zA-Z0-9_-]")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def safe_stem(value: Optional[str], fallback: str) -> str:
    """Whitespace to underscores, then drop everything outside [A-Za-z0-9_-]."""
    stem = _UNSAFE.sub("", _WHITESPACE.sub("_", (value or "").strip()))
    return stem or fallback


def proposal_filename(client_name: Optional[str]) -> str:
    return f"{safe_stem(client_name, 'proposal')}_proposal.pdf"


def timesheet_filename(project_name: Optional[str], today: date) -> str:
    stem = _NON_ALNUM.sub("_", project_name or "") or "timesheet"
    return f"{stem}_{today.isoformat()}.pdf"


def invoice_filename(invoice_number: Optional[str]) -> str:
    return f"Invoice_{safe_stem(invoice_number, 'draft')}.pdf"
