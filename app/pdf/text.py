"""
Text normalization, measurement and wrapping.

All wrapping is width-based: callers pass a ``measure`` callable
(see make_measure) so the same code serves every font and size.
"""

import re
from typing import Callable, Iterator, Optional

from reportlab.pdfbase import pdfmetrics

Measure = Callable[[str], float]

PLACEHOLDER = "—"
ELLIPSIS = "…"

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_WHITESPACE = re.compile(r"\s+")
_BULLET_MARKER = re.compile(r"^\s*(?:[-*•·]|\d+[.)])\s+")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?;])\s+")


def normalize_text(raw: Optional[object], fallback: str = PLACEHOLDER) -> str:
    """
    Collapse whitespace runs to single spaces, trim, and drop control
    characters. Empty results become ``fallback``.

    normalize_text(normalize_text(x)) == normalize_text(x).
    """
    if raw is None:
        return fallback
    text = _CONTROL_CHARS.sub("", str(raw))
    text = _WHITESPACE.sub(" ", text).strip()
    return text or fallback


def clean_multiline(raw: Optional[object]) -> str:
    """Like normalize_text, but keeps line breaks between paragraphs."""
    if raw is None:
        return ""
    lines = [normalize_text(line, fallback="") for line in str(raw).splitlines()]
    return "\n".join(lines).strip("\n")


def make_measure(font_name: str, size: float) -> Measure:
    def measure(text: str) -> float:
        return pdfmetrics.stringWidth(text, font_name, size)

    return measure


def iter_wrapped_lines(text: str, max_width: float, measure: Measure) -> Iterator[str]:
    """
    Greedy word wrap. Explicit newlines are hard breaks; a single word
    wider than ``max_width`` is emitted alone on its own line.
    """
    for paragraph in str(text).split("\n"):
        words = paragraph.split()
        if not words:
            yield ""
            continue
        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if measure(candidate) <= max_width:
                current = candidate
            else:
                yield current
                current = word
        yield current


def wrap_to_width(text: str, max_width: float, measure: Measure) -> list[str]:
    return list(iter_wrapped_lines(text, max_width, measure))


def truncate_with_ellipsis(text: str, max_chars: int) -> str:
    """Cut to ``max_chars`` and append an ellipsis; result length <= max_chars + 1."""
    max_chars = max(0, max_chars)
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + ELLIPSIS


def fit_line(text: str, max_width: float, measure: Measure) -> str:
    """Shorten ``text`` with a trailing ellipsis until it fits ``max_width``."""
    if measure(text) <= max_width:
        return text
    cut = text.rstrip(ELLIPSIS)
    while cut and measure(cut + ELLIPSIS) > max_width:
        cut = cut[:-1].rstrip()
    return cut + ELLIPSIS if cut else ELLIPSIS


def clamp_lines(lines: list[str], max_lines: int, max_width: float, measure: Measure) -> list[str]:
    """Keep at most ``max_lines``; the last kept line is ellipsized when cut."""
    if len(lines) <= max_lines:
        return lines
    kept = lines[:max_lines]
    if not kept:
        return kept
    kept[-1] = fit_line(kept[-1] + ELLIPSIS, max_width, measure)
    return kept


def split_into_bullets(text: Optional[str], max_chars: int, max_items: int) -> list[str]:
    """
    Break free text into bullet strings: one per line, or per sentence
    when the text is a single paragraph. Markers like "-" or "1." are
    stripped; each bullet is capped at ``max_chars``.
    """
    if not text:
        return []
    raw_lines = [line for line in str(text).splitlines() if line.strip()]
    if len(raw_lines) <= 1:
        raw_lines = _SENTENCE_BREAK.split(raw_lines[0]) if raw_lines else []

    bullets = []
    for line in raw_lines:
        item = normalize_text(_BULLET_MARKER.sub("", line), fallback="")
        if item:
            bullets.append(truncate_with_ellipsis(item, max_chars))
        if len(bullets) >= max_items:
            break
    return bullets
