import json

import pytest
from PIL import Image

from mandelbrot_renderer.api import RenderConfig, render
from mandelbrot_renderer.rendering.image_output import ImageExporter, RenderMetadata


@pytest.fixture
def buffer():
    return render(RenderConfig(width=10, height=6, max_iterations=30))


@pytest.fixture
def metadata():
    return RenderMetadata.from_config(RenderConfig(width=10, height=6, max_iterations=30), 0.5)


class TestRenderMetadata:
    def test_from_config(self, metadata):
        assert metadata.center == (-0.75, 0.0)
        assert metadata.resolution == (10, 6)
        assert metadata.inside_color == (255, 0, 0)
        assert metadata.timestamp

    def test_json_round_trip(self, metadata):
        assert RenderMetadata.from_json(metadata.to_json()) == metadata


class TestImageExporter:
    @pytest.mark.parametrize("suffix,fmt", [(".png", "PNG"), (".tif", "TIFF"), (".bmp", "BMP")])
    def test_lossless_formats_keep_pixels(self, buffer, tmp_path, suffix, fmt):
        path = ImageExporter().save_image(buffer, tmp_path / f"image{suffix}")
        with Image.open(path) as img:
            assert img.format == fmt
            assert img.size == (10, 6)
            assert img.convert("RGB").tobytes() == buffer.data

    def test_jpeg_writes_companion_metadata(self, buffer, metadata, tmp_path):
        exporter = ImageExporter()
        path = exporter.save_image(buffer, tmp_path / "image.jpg", metadata, quality=90)
        with Image.open(path) as img:
            assert img.format == "JPEG"
        companion = tmp_path / "image.json"
        assert json.loads(companion.read_text())["max_iterations"] == 30
        assert exporter.extract_metadata(path) == metadata

    def test_png_metadata_round_trip(self, buffer, metadata, tmp_path):
        exporter = ImageExporter()
        path = exporter.save_image(buffer, tmp_path / "image.png", metadata)
        with Image.open(path) as img:
            assert img.text["Software"].startswith("mandelbrot-renderer")
        assert exporter.extract_metadata(path) == metadata

    def test_unsupported_suffix(self, buffer, tmp_path):
        with pytest.raises(ValueError, match="Unsupported format"):
            ImageExporter().save_image(buffer, tmp_path / "image.xyz")

    def test_missing_directory_raises_os_error(self, buffer, tmp_path):
        with pytest.raises(OSError):
            ImageExporter().save_image(buffer, tmp_path / "missing" / "image.png")


def test_metadata_fields_describe_the_render(metadata):
    assert set(metadata.to_dict()) == {
        "center", "zoom", "resolution", "max_iterations", "multiplier",
        "outside_color", "inside_color", "second_color",
        "render_time_seconds", "backend", "timestamp", "software_version",
    }
