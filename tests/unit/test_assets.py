"""Unit tests for brand asset rasterization."""

import io

import pytest
from PIL import Image

from app.config import Settings
from app.exceptions import AssetLoadError, MeasurementError
from app.pdf import theme
from app.pdf.assets import (
    COVER_OUTLINE_PATHS,
    PACKAGED_LOGO,
    BrandAssets,
    build_cover_background_svg,
    fit_within,
    load_brand_assets,
    rasterize,
)


class TestFitWithin:
    def test_scales_down_uniformly(self):
        assert fit_within(1264, 218, 600, 120) == (600, 103)

    def test_never_upscales(self):
        assert fit_within(100, 50, 600, 120) == (100, 50)

    def test_height_bound(self):
        assert fit_within(100, 400, 600, 120) == (30, 120)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0)])
    def test_zero_size_raises(self, width, height):
        with pytest.raises(MeasurementError):
            fit_within(width, height, 600, 120)


def test_rasterize_png_keeps_logo_aspect(png_bytes):
    asset = rasterize(png_bytes(1264, 218), 600, 120)
    assert asset.width == 600
    assert abs(asset.height - 600 / theme.LOGO_ASPECT) <= 1
    with Image.open(io.BytesIO(asset.png)) as image:
        assert image.size == (asset.width, asset.height)
        assert image.mode == "RGBA"


def test_rasterize_small_image_is_not_upscaled(png_bytes):
    asset = rasterize(png_bytes(40, 20), 600, 120)
    assert (asset.width, asset.height) == (40, 20)


def test_data_uri(png_bytes):
    asset = rasterize(png_bytes(4, 4), 10, 10)
    assert asset.data_uri.startswith("data:image/png;base64,")


def test_rasterize_packaged_svg_logo():
    asset = rasterize(PACKAGED_LOGO, 600, 120)
    assert asset.width == 600
    assert abs(asset.height - 600 / theme.LOGO_ASPECT) <= 1


def test_rasterize_rejects_garbage():
    with pytest.raises(AssetLoadError):
        rasterize(b"definitely not an image", 100, 100)


def test_rasterize_missing_file(tmp_path):
    with pytest.raises(AssetLoadError):
        rasterize(tmp_path / "missing.png", 100, 100)


def test_cover_background_svg_layout():
    svg = build_cover_background_svg(595, 842)
    assert svg.count("<path ") == len(COVER_OUTLINE_PATHS) == 4
    assert 'y="522"' in svg
    assert 'fill="#252525"' in svg


async def test_load_brand_assets_defaults(settings):
    assets = await load_brand_assets(settings)
    assert assets.logo is not None
    assert assets.cover_background is not None
    assert assets.cover_background.width == round(round(theme.PAGE_WIDTH) * settings.cover_background_scale)


async def test_load_brand_assets_skips_cover(settings):
    assets = await load_brand_assets(settings, include_cover=False)
    assert assets.logo is not None
    assert assets.cover_background is None


async def test_load_brand_assets_falls_back_on_failure(settings, failing_backend, caplog):
    with caplog.at_level("WARNING"):
        assets = await load_brand_assets(settings, backend=failing_backend)
    assert assets == BrandAssets(None, None)
    assert "unavailable" in caplog.text


async def test_load_brand_assets_custom_logo(tmp_path, png_bytes):
    logo = tmp_path / "logo.png"
    logo.write_bytes(png_bytes(200, 100))
    settings = Settings(_env_file=None, logo_path=logo)
    assets = await load_brand_assets(settings, include_cover=False)
    assert (assets.logo.width, assets.logo.height) == (200, 100)
