"""
Timesheet and invoice statements.

Grayscale, print-friendly single-purpose layout: logo and company
credentials, a label/value meta block, a bordered table with an
optional bold total row, a totals block, and a footer stamped on every
page once the page count is known.
"""

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from reportlab.lib.units import mm

from app.config import Settings
from app.models import InvoiceExportInput, TimesheetExportInput, format_money
from app.pdf import theme
from app.pdf.assets import RasterAsset
from app.pdf.fonts import FontConfig
from app.pdf.surface import Surface
from app.pdf.tables import ColumnSpec, TableSpec, draw_flowing_table
from app.pdf.text import PLACEHOLDER, make_measure, normalize_text, wrap_to_width

TIMESHEET_COLUMNS = (
    ColumnSpec("Date", 35),
    ColumnSpec("Hours", 25, align="right"),
    ColumnSpec("Rate", 30, align="right"),
    ColumnSpec("Total Pay", 35, align="right"),
    ColumnSpec("Notes", 57),
)

INVOICE_COLUMNS = (
    ColumnSpec("Description", 90),
    ColumnSpec("Qty", 20, align="right"),
    ColumnSpec("Unit Price", 35, align="right"),
    ColumnSpec("Amount", 35, align="right"),
)


def short_date(value: dt.date) -> str:
    """'Mar 4, 2025'."""
    return f"{value:%b} {value.day}, {value.year}"


def long_date(value: dt.date) -> str:
    """'March 4, 2025'."""
    return f"{value:%B} {value.day}, {value.year}"


@dataclass(frozen=True)
class CompanyInfo:
    name: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    vat_number: Optional[str] = None
    registration_number: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompanyInfo":
        return cls(
            name=settings.company_name,
            address=settings.company_address,
            email=settings.company_email,
            phone=settings.company_phone,
            vat_number=settings.company_vat_number,
            registration_number=settings.company_registration_number,
        )

    def credential_lines(self) -> list[str]:
        """Only the fields that are present, in a fixed order."""
        lines = [self.name, self.address, self.email, self.phone]
        if self.vat_number:
            lines.append(f"VAT: {self.vat_number}")
        if self.registration_number:
            lines.append(f"Reg: {self.registration_number}")
        return [line for line in lines if line and line.strip()]


@dataclass(frozen=True)
class StatementContext:
    fonts: FontConfig
    company: CompanyInfo
    issued_on: dt.date
    brand_name: str = "Zulbera"
    currency_symbol: str = "$"
    tagline: Optional[str] = None
    logo: Optional[RasterAsset] = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        fonts: FontConfig,
        issued_on: dt.date,
        logo: Optional[RasterAsset] = None,
    ) -> "StatementContext":
        return cls(
            fonts=fonts,
            company=CompanyInfo.from_settings(settings),
            issued_on=issued_on,
            brand_name=settings.brand_name,
            currency_symbol=settings.statement_currency_symbol,
            tagline=settings.statement_tagline,
            logo=logo,
        )

    def money(self, amount: float) -> str:
        return format_money(amount, self.currency_symbol)


# ==================== Page parts ====================

def content_bottom(surface: Surface) -> float:
    return surface.height - theme.STATEMENT_FOOTER_OFFSET - 8 * mm


def render_header(surface: Surface, ctx: StatementContext) -> float:
    """Logo (or brand text) left, credentials right; returns the y below the header."""
    top = theme.STATEMENT_HEADER_TOP
    x = theme.STATEMENT_MARGIN
    logo_h = theme.STATEMENT_LOGO_H

    if ctx.logo is not None:
        surface.image(ctx.logo.png, x, top, logo_h * ctx.logo.aspect, logo_h)
    else:
        surface.text(x, top + logo_h - 1 * mm, ctx.brand_name, 15, theme.GRAY["dark"], bold=True)

    lines = ctx.company.credential_lines()
    right = surface.width - theme.STATEMENT_MARGIN
    last_baseline = surface.lines(
        right,
        top + 5 * mm,
        lines,
        9,
        theme.STATEMENT_CREDENTIAL_LINE_H,
        theme.GRAY["medium"],
        align="right",
    )
    header_bottom = top + logo_h + 14 * mm
    return max(header_bottom, last_baseline + 8 * mm)


def render_meta_block(surface: Surface, lines: list[tuple[str, str]], y: float) -> float:
    """Bold "Label: " followed by the value; long values wrap under themselves."""
    if not lines:
        return y
    x = theme.STATEMENT_MARGIN
    width = surface.width - theme.STATEMENT_MARGIN * 2
    measure = make_measure(surface.fonts.regular, 9)
    for label, value in lines:
        prefix = f"{label}: "
        surface.text(x, y, prefix, 9, theme.GRAY["dark"], bold=True)
        value_x = x + surface.measure(prefix, 9, bold=True)
        wrapped = wrap_to_width(value, width - (value_x - x), measure)
        y = surface.lines(value_x, y, wrapped, 9, theme.STATEMENT_META_LINE_H, theme.GRAY["dark"])
    return y + 8 * mm


def statement_table(columns, rows: list[list[str]], total_row: Optional[list[str]] = None) -> TableSpec:
    return TableSpec(
        columns=columns,
        rows=rows,
        total_row=total_row,
        font_size=theme.STATEMENT_TABLE_FONT_SIZE,
        padding=theme.STATEMENT_CELL_PADDING,
        header_fill=theme.GRAY["header_bg"],
        header_text=theme.GRAY["header_text"],
        text_color=theme.GRAY["dark"],
        border=theme.GRAY["border"],
        total_fill=theme.GRAY["row_alt"],
    )


def render_table(surface: Surface, spec: TableSpec, y: float) -> float:
    return draw_flowing_table(
        surface,
        spec,
        y,
        x=theme.STATEMENT_MARGIN,
        width=surface.width - theme.STATEMENT_MARGIN * 2,
        top=theme.STATEMENT_MARGIN,
        bottom=content_bottom(surface),
    )


def render_totals(
    surface: Surface, items: list[tuple[str, str]], y: float, align_right: bool = True
) -> float:
    """Label/value pairs at 10 pt; ``y`` is the first baseline."""
    needed = len(items) * theme.STATEMENT_TOTALS_LINE_H
    if y + needed > content_bottom(surface):
        surface.new_page()
        y = theme.STATEMENT_MARGIN + 10
    right = surface.width - theme.STATEMENT_MARGIN
    label_x = right - 50 * mm if align_right else theme.STATEMENT_MARGIN
    for label, value in items:
        surface.text(label_x, y, label, 10, theme.GRAY["dark"], bold=True)
        if align_right:
            surface.text_right(right, y, value, 10, theme.GRAY["dark"])
        else:
            surface.text(label_x + 50 * mm, y, value, 10, theme.GRAY["dark"])
        y += theme.STATEMENT_TOTALS_LINE_H
    return y


def render_footer(surface: Surface, page: int, total: int, tagline: Optional[str] = None) -> None:
    footer_y = surface.height - theme.STATEMENT_FOOTER_OFFSET
    left = theme.STATEMENT_MARGIN
    right = surface.width - theme.STATEMENT_MARGIN
    surface.line(left, footer_y - 4 * mm, right, footer_y - 4 * mm, theme.GRAY["border"], width=0.3)
    center = surface.width / 2
    surface.text_center(center, footer_y + 2 * mm, f"Page {page} of {total}", 8, theme.GRAY["light"])
    if tagline:
        surface.text_center(center, footer_y + 7 * mm, tagline, 8, theme.GRAY["light"])


def add_page_numbers_and_footer(surface: Surface, tagline: Optional[str] = None) -> None:
    surface.stamp_pages(lambda target, page, total: render_footer(target, page, total, tagline))


# ==================== Timesheet ====================

def timesheet_meta_lines(data: TimesheetExportInput, issued_on: dt.date) -> list[tuple[str, str]]:
    lines = [("Project", normalize_text(data.project_name))]
    client = data.client
    if client is not None and client.display_name():
        name = normalize_text(client.name, fallback="")
        company = normalize_text(client.company, fallback="")
        lines.append(("Client", f"{name} ({company})" if name and company else client.display_name()))
    if data.description and data.description.strip():
        lines.append(("Description", normalize_text(data.description)))
    lines.append(("Status", "PAID" if data.is_paid else "PENDING"))
    if data.date_range is not None:
        period = f"{short_date(data.date_range.start_date)} - {short_date(data.date_range.end_date)}"
        lines.append(("Period", period))
    lines.append(("Generated", long_date(issued_on)))
    return lines


def build_timesheet_table(data: TimesheetExportInput, currency_symbol: str = "$") -> TableSpec:
    rows = [
        [
            short_date(entry.date),
            f"{entry.hours_worked:.1f}",
            format_money(entry.hourly_rate, currency_symbol),
            format_money(entry.total_pay, currency_symbol),
            normalize_text(entry.notes, fallback="-"),
        ]
        for entry in data.entries
    ]
    total_row = [
        "Total",
        f"{data.total_hours_value():.1f}",
        "",
        format_money(data.total_pay_value(), currency_symbol),
        "",
    ]
    return statement_table(TIMESHEET_COLUMNS, rows, total_row)


def compose_timesheet(surface: Surface, data: TimesheetExportInput, ctx: StatementContext) -> None:
    y = render_header(surface, ctx)
    y = render_meta_block(surface, timesheet_meta_lines(data, ctx.issued_on), y)
    y = render_table(surface, build_timesheet_table(data, ctx.currency_symbol), y)
    render_totals(
        surface,
        [
            ("Entries", str(len(data.entries))),
            ("Total hours", f"{data.total_hours_value():.1f}h"),
            ("Total pay", ctx.money(data.total_pay_value())),
        ],
        y + 8 * mm,
    )
    add_page_numbers_and_footer(surface, ctx.tagline)


# ==================== Invoice ====================

def invoice_meta_lines(data: InvoiceExportInput) -> list[tuple[str, str]]:
    client = data.client.display_name() if data.client is not None else None
    lines = [
        ("Invoice number", normalize_text(data.invoice_number)),
        ("Due date", long_date(data.due_date.date())),
        ("Status", normalize_text(data.status)),
        ("Client", client or PLACEHOLDER),
    ]
    if data.paid_at is not None:
        lines.append(("Paid", long_date(data.paid_at.date())))
    return lines


def build_invoice_table(data: InvoiceExportInput, currency_symbol: str = "$") -> TableSpec:
    description = normalize_text(data.description, fallback="Invoice amount")
    amount = format_money(data.amount, currency_symbol)
    return statement_table(INVOICE_COLUMNS, [[description, "1", amount, amount]])


def compose_invoice(surface: Surface, data: InvoiceExportInput, ctx: StatementContext) -> None:
    y = render_header(surface, ctx)
    y = render_meta_block(surface, invoice_meta_lines(data), y)
    y = render_table(surface, build_invoice_table(data, ctx.currency_symbol), y)
    render_totals(surface, [("Total", ctx.money(data.amount))], y + 8 * mm)
    add_page_numbers_and_footer(surface, ctx.tagline)
