"""
Overview page: prepared-for card across the full width, then two
independent columns of sections. A section is drawn only when its data
is present; there are never empty headings. A section that would run
past the content area is left out whole rather than cut mid-way.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from app.pdf import theme
from app.pdf.blocks import KeyValueCardBlock
from app.pdf.fonts import FontConfig
from app.pdf.helpers import (
    SECTION_HEADING_H,
    bullet_list,
    draw_paragraph,
    layout_paragraph,
    measure_bullets,
    measure_milestones,
    measure_tags,
    milestone_list,
    numbered_list,
    section_heading,
    tag_list,
)
from app.pdf.proposal.context import ProposalContext
from app.pdf.surface import Surface
from app.pdf.text import clean_multiline, normalize_text, truncate_with_ellipsis

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_CHARS = 380
MAX_SCOPE_ITEMS = 8
MAX_TIMELINE_ITEMS = 6
MAX_FREE_TEXT_LINES = 14
TECH_SEPARATOR = " • "

NEXT_STEPS = (
    "Review this proposal and confirm scope.",
    "Sign-off and kickoff schedule.",
)

# (surface, x, y, width) -> y below the section body
SectionBody = Callable[[Surface, float, float, float], float]
# (fonts, width) -> body height
SectionMeasure = Callable[[FontConfig, float], float]


@dataclass(frozen=True)
class Section:
    title: str
    measure: SectionMeasure
    draw: SectionBody

    def height(self, fonts: FontConfig, width: float) -> float:
        return SECTION_HEADING_H + self.measure(fonts, width)


def _has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def _with_remainder(items: list, cap: int, more) -> list:
    if len(items) <= cap:
        return items
    return items[:cap] + [more(len(items) - cap)]


def prepared_for_pairs(ctx: ProposalContext) -> list[tuple[str, str]]:
    """Client contact rows, omitting any field the caller did not supply."""
    data = ctx.data
    fields = [
        ("Client", data.client_name),
        ("Company", data.client_company),
        ("Email", data.client_email),
        ("Phone", data.client_phone),
    ]
    pairs = [(label, normalize_text(value)) for label, value in fields if _has_text(value)]
    pairs.append(("Date", ctx.issued_long))
    return pairs


def timeline_items(ctx: ProposalContext) -> list[tuple[str, str]]:
    items = []
    for index, item in enumerate(ctx.data.products, start=1):
        if not (item.name.strip() or item.timeline.strip()):
            continue
        label = normalize_text(item.name, fallback=f"Phase {index}")
        items.append((label, normalize_text(item.timeline, fallback="")))
    return _with_remainder(items, MAX_TIMELINE_ITEMS, lambda n: (f"+ {n} more", ""))


def scope_items(ctx: ProposalContext) -> list[str]:
    names = [normalize_text(item.name) for item in ctx.data.products if item.name.strip()]
    return _with_remainder(names, MAX_SCOPE_ITEMS, lambda n: f"+ {n} more")


def _free_text_lines(text: str, fonts: FontConfig, width: float, bold: bool, size: float) -> list[str]:
    return layout_paragraph(text, width, fonts, size=size, bold=bold, max_lines=MAX_FREE_TEXT_LINES)


def _free_text(title: str, text: str) -> Section:
    return Section(
        title,
        lambda fonts, width: len(_free_text_lines(text, fonts, width, False, theme.BODY_SIZE))
        * theme.BODY_LINE_H,
        lambda surface, x, y, width: draw_paragraph(
            surface, x, y, _free_text_lines(text, surface.fonts, width, False, theme.BODY_SIZE)
        ),
    )


def _summary(page_title: str, description: str) -> Section:
    def title_lines(fonts: FontConfig, width: float) -> list[str]:
        if not page_title:
            return []
        return _free_text_lines(page_title, fonts, width, True, theme.SUBTITLE_SIZE)

    def description_lines(fonts: FontConfig, width: float) -> list[str]:
        if not description:
            return []
        return _free_text_lines(description, fonts, width, False, theme.BODY_SIZE)

    def measure(fonts: FontConfig, width: float) -> float:
        height = len(description_lines(fonts, width)) * theme.BODY_LINE_H
        if page_title:
            height += len(title_lines(fonts, width)) * theme.BODY_LINE_H + theme.SPACE_8 / 2
        return height

    def draw(surface: Surface, x: float, y: float, width: float) -> float:
        if page_title:
            lines = title_lines(surface.fonts, width)
            y = draw_paragraph(surface, x, y, lines, size=theme.SUBTITLE_SIZE, bold=True)
            y += theme.SPACE_8 / 2
        return draw_paragraph(surface, x, y, description_lines(surface.fonts, width))

    return Section("Project Summary", measure, draw)


def left_sections(ctx: ProposalContext) -> list[Section]:
    data = ctx.data
    sections: list[Section] = []

    if _has_text(data.page_title) or _has_text(data.description):
        description = truncate_with_ellipsis(
            normalize_text(data.description, fallback=""), MAX_DESCRIPTION_CHARS
        )
        sections.append(_summary(normalize_text(data.page_title, fallback=""), description))

    if _has_text(data.what_we_need):
        sections.append(_free_text("What We Need", clean_multiline(data.what_we_need)))

    milestones = timeline_items(ctx)
    if milestones:
        sections.append(
            Section(
                "Timeline",
                lambda fonts, width: measure_milestones(milestones, width, fonts),
                lambda surface, x, y, width: milestone_list(surface, x, y, milestones, width),
            )
        )

    if _has_text(data.roadmap):
        sections.append(_free_text("Roadmap", clean_multiline(data.roadmap)))

    services = scope_items(ctx)
    if services:
        sections.append(
            Section(
                "Services & Deliverables",
                lambda fonts, width: measure_bullets(services, width, fonts),
                lambda surface, x, y, width: bullet_list(surface, x, y, services, width),
            )
        )
    return sections


def right_sections(ctx: ProposalContext) -> list[Section]:
    tags = ctx.data.unique_tech_tags()
    sections: list[Section] = []

    if ctx.settings.tech_stack_style == "tags" and tags:
        sections.append(
            Section(
                "Tech Stack",
                lambda fonts, width: measure_tags(tags, width, fonts),
                lambda surface, x, y, width: tag_list(surface, x, y, tags, width),
            )
        )
    else:
        text = TECH_SEPARATOR.join(tags) if tags else "To be confirmed during discovery."
        sections.append(_free_text("Tech Stack", text))

    steps = list(NEXT_STEPS)

    def next_steps(surface: Surface, x: float, y: float, width: float) -> float:
        y = numbered_list(surface, x, y, steps, width)
        surface.text(
            x,
            y + theme.SPACE_8,
            f"Valid for {ctx.validity_days} days",
            theme.META_SIZE,
            theme.PALETTE["text_secondary"],
        )
        return y + theme.SPACE_8 + theme.META_LINE_H

    sections.append(
        Section(
            "Next Steps",
            lambda fonts, width: measure_bullets(steps, width, fonts) + theme.SPACE_8 + theme.META_LINE_H,
            next_steps,
        )
    )
    return sections


def draw_column(surface: Surface, x: float, y: float, width: float, sections: list[Section]) -> float:
    """
    Sections stacked with their own cursor; returns the column's final y.

    Sections that no longer fit above the content bottom are skipped so
    nothing is drawn into the footer or off the page.
    """
    skipped = []
    for section in sections:
        if y + section.height(surface.fonts, width) > theme.CONTENT_BOTTOM:
            skipped.append(section.title)
            continue
        y = section_heading(surface, x, y, section.title, width)
        y = section.draw(surface, x, y, width) + theme.SECTION_GAP
    if skipped:
        logger.warning(f"Overview column out of space; left out: {', '.join(skipped)}")
    return y


def draw_overview_page(surface: Surface, ctx: ProposalContext) -> None:
    surface.new_page()
    x = theme.MARGIN
    y = theme.CONTENT_TOP

    card = KeyValueCardBlock(
        ctx.fonts,
        "Prepared for",
        prepared_for_pairs(ctx),
        closing=normalize_text(ctx.data.page_title),
    )
    y = card.draw(surface, x, y, theme.CONTENT_WIDTH) + theme.SECTION_GAP

    col_w = (theme.CONTENT_WIDTH - theme.COLUMN_GUTTER) / 2
    draw_column(surface, x, y, col_w, left_sections(ctx))
    draw_column(surface, x + col_w + theme.COLUMN_GUTTER, y, col_w, right_sections(ctx))
