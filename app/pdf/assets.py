"""
Brand asset loading and rasterization.

Logos and the decorative cover background are decoded (PNG/JPEG via
Pillow, SVG via PyMuPDF), fitted into a bounding box without ever being
upscaled, and re-encoded as PNG. Loading failures never abort a
document: load_brand_assets() returns None for any asset that failed
and the composers fall back to text or flat fills.
"""

import asyncio
import base64
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Union

import pymupdf
from PIL import Image, UnidentifiedImageError

from app.config import Settings
from app.exceptions import AssetLoadError, MeasurementError
from app.pdf import theme

logger = logging.getLogger(__name__)

PACKAGED_LOGO = Path(__file__).parent / "resources" / "logo.svg"

# Decorative Z outline, in its own 1080-unit coordinate space
COVER_OUTLINE_PATHS = (
    "M511.7,490.6l-89.4-267.2c-19.5-58.4,24-118.8,85.6-118.8h302.1c60.1,0,91.1,71.8,49.8,115.5"
    "l-271.6,287.4c-23.7,25.1-65.7,15.9-76.6-16.9h0Z",
    "M392.7,438.6l-298.2,1.6c-42-7-64.8-53.2-44.8-90.8l205.3-219.3c2.2-2.4,6.7-7.3,9-9.6"
    "c25.8-25.3,57.8-20.5,68.7,11.7l91.4,270.7c6.6,19.4-9.7,38.9-29.9,36-.5,0-.9,0-1.4,0Z",
    "M687.3,641.4l298.2-1.6c42,7,64.8,53.2,44.8,90.8l-205.3,219.3c-2.2,2.4-6.7,7.3-9,9.6"
    "c-25.8,25.3-57.8,20.5-68.7-11.7l-91.4-270.7c-6.6-19.4,9.7-38.9,29.9-36,.5,0,1,0,1.4,0h0Z",
    "M567.7,585.4l89.4,267.2c19.5,58.4-24,118.7-85.6,118.7h-302.1c-60.1,0-91.1-71.8-49.8-115.5"
    "l271.6-287.4c23.7-25.1,65.7-15.9,76.6,16.9h0Z",
)
COVER_OUTLINE_SCALE = 0.62
COVER_OUTLINE_TOP = 28
COVER_OUTLINE_SIZE = 1080
COVER_OUTLINE_STROKE = "#2e2e2f"


@dataclass(frozen=True)
class RasterAsset:
    """PNG bytes plus the pixel size they were rasterized to."""

    png: bytes
    width: int
    height: int

    @property
    def aspect(self) -> float:
        return self.width / self.height

    @property
    def data_uri(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.png).decode("ascii")


@dataclass(frozen=True)
class BrandAssets:
    logo: Optional[RasterAsset] = None
    cover_background: Optional[RasterAsset] = None


class ImageBackend(Protocol):
    """Decodes image bytes and draws them onto an offscreen raster."""

    def decode(self, data: bytes, zoom: float = 1.0) -> Image.Image: ...

    def rasterize(self, image: Image.Image, max_width: int, max_height: int) -> bytes: ...


def _looks_like_svg(data: bytes) -> bool:
    head = data[:512].lstrip().lower()
    return head.startswith(b"<svg") or (head.startswith(b"<?xml") and b"<svg" in data[:2048].lower())


class PillowBackend:
    """Pillow raster surface; SVG sources are rendered with PyMuPDF first."""

    def decode(self, data: bytes, zoom: float = 1.0) -> Image.Image:
        if _looks_like_svg(data):
            data = self._render_svg(data, zoom)
            zoom = 1.0
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise AssetLoadError("Image could not be decoded", details=str(e)) from e
        if zoom != 1.0:
            size = (max(1, round(image.width * zoom)), max(1, round(image.height * zoom)))
            image = image.resize(size, Image.Resampling.LANCZOS)
        return image

    def _render_svg(self, data: bytes, zoom: float) -> bytes:
        try:
            with pymupdf.open(stream=data, filetype="svg") as doc:
                pixmap = doc[0].get_pixmap(matrix=pymupdf.Matrix(zoom, zoom), alpha=True)
                return pixmap.tobytes("png")
        except (RuntimeError, ValueError) as e:
            raise AssetLoadError("SVG could not be rendered", details=str(e)) from e

    def rasterize(self, image: Image.Image, max_width: int, max_height: int) -> bytes:
        width, height = fit_within(image.width, image.height, max_width, max_height)
        try:
            canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))
            canvas.alpha_composite(image.convert("RGBA").resize((width, height), Image.Resampling.LANCZOS))
        except (ValueError, MemoryError) as e:
            raise MeasurementError("Raster surface unavailable", details=str(e)) from e
        buffer = io.BytesIO()
        canvas.save(buffer, format="PNG")
        return buffer.getvalue()


def fit_within(width: int, height: int, max_width: int, max_height: int) -> tuple[int, int]:
    """
    Uniform scale into the box, never upscaling.

    scale = min(max_width / width, max_height / height, 1); dimensions
    are rounded to whole pixels.
    """
    if width <= 0 or height <= 0:
        raise MeasurementError("Image has no natural size", details={"width": width, "height": height})
    if max_width <= 0 or max_height <= 0:
        raise MeasurementError("Bounding box is empty", details={"max_width": max_width, "max_height": max_height})
    scale = min(max_width / width, max_height / height, 1.0)
    return max(1, round(width * scale)), max(1, round(height * scale))


def rasterize(
    source: Union[bytes, str, Path],
    max_width: int,
    max_height: int,
    backend: Optional[ImageBackend] = None,
    zoom: float = 1.0,
) -> RasterAsset:
    """Load ``source`` (bytes or a file path) and fit it into max_width x max_height."""
    backend = backend or PillowBackend()
    if isinstance(source, (str, Path)):
        try:
            data = Path(source).read_bytes()
        except OSError as e:
            raise AssetLoadError(f"Image file could not be read: {source}", details=str(e)) from e
    else:
        data = source

    image = backend.decode(data, zoom=zoom)
    png = backend.rasterize(image, max_width, max_height)
    width, height = fit_within(image.width, image.height, max_width, max_height)
    return RasterAsset(png=png, width=width, height=height)


# ==================== Cover background ====================

def build_cover_background_svg(page_width: int = 595, page_height: int = 842) -> str:
    """White page with the stroked Z outline above a dark band."""
    band_top = round(page_height * theme.COVER_BAND_FRACTION)
    outline_width = COVER_OUTLINE_SIZE * COVER_OUTLINE_SCALE
    tx = (page_width - outline_width) / 2
    style = (
        f"fill:none;stroke:{COVER_OUTLINE_STROKE};stroke-miterlimit:10;stroke-width:10px"
    )
    paths = "\n".join(f'<path d="{d}"/>' for d in COVER_OUTLINE_PATHS)
    return "\n".join(
        [
            f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {page_width} {page_height}" '
            f'width="{page_width}" height="{page_height}">',
            f'<rect width="{page_width}" height="{page_height}" fill="white"/>',
            f'<g transform="translate({tx},{COVER_OUTLINE_TOP}) scale({COVER_OUTLINE_SCALE})" style="{style}">',
            paths,
            "</g>",
            f'<rect x="0" y="{band_top}" width="{page_width}" height="{page_height - band_top}" fill="#252525"/>',
            "</svg>",
        ]
    )


def render_cover_background(scale: float = 2.0, backend: Optional[ImageBackend] = None) -> RasterAsset:
    page_width, page_height = round(theme.PAGE_WIDTH), round(theme.PAGE_HEIGHT)
    svg = build_cover_background_svg(page_width, page_height).encode("utf-8")
    return rasterize(
        svg,
        round(page_width * scale),
        round(page_height * scale),
        backend=backend,
        zoom=scale,
    )


# ==================== Loading ====================

def _load_logo(settings: Settings, backend: Optional[ImageBackend]) -> RasterAsset:
    return rasterize(
        settings.logo_path or PACKAGED_LOGO,
        settings.logo_box_width,
        settings.logo_box_height,
        backend=backend,
    )


async def _try_load(name: str, loader, *args) -> Optional[RasterAsset]:
    try:
        return await asyncio.to_thread(loader, *args)
    except (AssetLoadError, MeasurementError) as e:
        logger.warning(f"[Assets] {name} unavailable, using fallback: {e.message}")
        return None


async def load_brand_assets(
    settings: Settings,
    backend: Optional[ImageBackend] = None,
    include_cover: bool = True,
) -> BrandAssets:
    """Rasterize the logo (and optionally the cover background) concurrently."""
    loads = [_try_load("logo", _load_logo, settings, backend)]
    if include_cover:
        loads.append(
            _try_load("cover background", render_cover_background, settings.cover_background_scale, backend)
        )
    results = await asyncio.gather(*loads)
    logo = results[0]
    cover = results[1] if include_cover else None
    logger.info(
        f"[Assets] loaded: logo={'yes' if logo else 'no'}, "
        f"cover={'yes' if cover else 'no'}"
    )
    return BrandAssets(logo=logo, cover_background=cover)
