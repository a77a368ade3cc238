"""
Top-down drawing surface over a reportlab canvas.

Layout code works in points measured from the top-left corner of the
page; this module flips coordinates into reportlab's bottom-up space.
Finished pages are held back until finish() so a stamping callback can
revisit every page once the final page count is known.
"""

import io
import logging
from typing import Callable, Optional, Union

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from app.pdf.fonts import FontConfig
from app.pdf.text import make_measure

logger = logging.getLogger(__name__)

# (surface, page_number, page_count) -> None
PageStamper = Callable[["Surface", int, int], None]


class DeferredCanvas(canvas.Canvas):
    """Canvas that keeps page states and emits them all on save()."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._page_states: list[dict] = []
        self.page_stamper: Optional[Callable[[int, int], None]] = None

    def showPage(self):
        self._page_states.append(dict(self.__dict__))
        self._startPage()

    @property
    def page_count(self) -> int:
        # Held pages plus the one currently being drawn
        return len(self._page_states) + 1

    def save(self):
        self._page_states.append(dict(self.__dict__))
        states, stamper = self._page_states, self.page_stamper
        total = len(states)
        for index, state in enumerate(states, start=1):
            self.__dict__.update(state)
            if stamper is not None:
                stamper(index, total)
            super().showPage()
        super().save()


class Surface:
    """Drawing primitives in top-down page coordinates."""

    def __init__(self, fonts: FontConfig, pagesize: tuple[float, float] = A4, title: str = ""):
        self.fonts = fonts
        self.width, self.height = pagesize
        self._buffer = io.BytesIO()
        self.canvas = DeferredCanvas(self._buffer, pagesize=pagesize, pageCompression=1)
        if title:
            self.canvas.setTitle(title)
        self._finished = False

    # ==================== Text ====================

    def measure(self, text: str, size: float, bold: bool = False) -> float:
        return make_measure(self.fonts.face(bold), size)(text)

    def text(
        self,
        x: float,
        baseline: float,
        value: str,
        size: float,
        color,
        bold: bool = False,
        align: str = "left",
    ) -> None:
        """Draw one line; ``baseline`` is measured from the page top."""
        c = self.canvas
        c.setFont(self.fonts.face(bold), size)
        c.setFillColor(color)
        y = self.height - baseline
        if align == "right":
            c.drawRightString(x, y, value)
        elif align == "center":
            c.drawCentredString(x, y, value)
        else:
            c.drawString(x, y, value)

    def text_right(self, x: float, baseline: float, value: str, size: float, color, bold: bool = False) -> None:
        self.text(x, baseline, value, size, color, bold=bold, align="right")

    def text_center(self, x: float, baseline: float, value: str, size: float, color, bold: bool = False) -> None:
        self.text(x, baseline, value, size, color, bold=bold, align="center")

    def lines(
        self,
        x: float,
        first_baseline: float,
        values: list[str],
        size: float,
        line_height: float,
        color,
        bold: bool = False,
        align: str = "left",
    ) -> float:
        """Draw consecutive lines; returns the baseline after the last one."""
        baseline = first_baseline
        for value in values:
            self.text(x, baseline, value, size, color, bold=bold, align=align)
            baseline += line_height
        return baseline

    # ==================== Shapes ====================

    def line(self, x1: float, y1: float, x2: float, y2: float, color, width: float = 0.5) -> None:
        c = self.canvas
        c.setStrokeColor(color)
        c.setLineWidth(width)
        c.line(x1, self.height - y1, x2, self.height - y2)

    def rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        fill=None,
        stroke=None,
        line_width: float = 0.5,
    ) -> None:
        c = self.canvas
        self._apply_paint(fill, stroke, line_width)
        c.rect(x, self.height - y - h, w, h, stroke=int(stroke is not None), fill=int(fill is not None))

    def rounded_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        radius: float,
        fill=None,
        stroke=None,
        line_width: float = 0.5,
    ) -> None:
        c = self.canvas
        self._apply_paint(fill, stroke, line_width)
        c.roundRect(
            x,
            self.height - y - h,
            w,
            h,
            radius,
            stroke=int(stroke is not None),
            fill=int(fill is not None),
        )

    def image(self, data: Union[bytes, ImageReader], x: float, y: float, w: float, h: float) -> None:
        reader = data if isinstance(data, ImageReader) else ImageReader(io.BytesIO(data))
        self.canvas.drawImage(reader, x, self.height - y - h, width=w, height=h, mask="auto")

    def _apply_paint(self, fill, stroke, line_width: float) -> None:
        c = self.canvas
        if fill is not None:
            c.setFillColor(fill)
        if stroke is not None:
            c.setStrokeColor(stroke)
            c.setLineWidth(line_width)

    # ==================== Pages ====================

    def new_page(self) -> None:
        self.canvas.showPage()

    @property
    def page_number(self) -> int:
        return self.canvas.getPageNumber()

    @property
    def page_count(self) -> int:
        return self.canvas.page_count

    def stamp_pages(self, stamper: PageStamper) -> None:
        """Register a callback run on every page when the document is finished."""
        self.canvas.page_stamper = lambda number, total: stamper(self, number, total)

    def finish(self) -> bytes:
        """Emit all pages (running the stamper) and return the PDF bytes."""
        if not self._finished:
            self.canvas.save()
            self._finished = True
        return self._buffer.getvalue()
