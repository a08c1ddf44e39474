"""Tests for the image compressor."""
import os
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from app.core import CompressionError, compress_image, target_size


def _write(path: Path, content: bytes) -> str:
    path.write_bytes(content)
    return str(path)


class TestTargetSize:
    def test_wide_image_is_scaled_to_max_width(self):
        assert target_size(1600, 1200) == (800, 600)

    def test_height_is_rounded(self):
        assert target_size(1000, 333) == (800, 266)

    def test_narrow_image_keeps_its_size(self):
        assert target_size(640, 480) == (640, 480)
        assert target_size(800, 10) == (800, 10)

    def test_height_never_reaches_zero(self):
        assert target_size(10000, 1) == (800, 1)

    def test_custom_max_width(self):
        assert target_size(400, 200, max_width=100) == (100, 50)


class TestCompressImage:
    @pytest.mark.parametrize("size", [(1600, 1200), (3000, 1000), (1001, 2000)])
    def test_output_is_at_most_800_wide_with_same_aspect(self, tmp_path: Path, make_image: Callable, size):
        src = _write(tmp_path / "in.jpg", make_image(size=size))
        out = str(tmp_path / "out.jpg")

        result = compress_image(src, out)

        with Image.open(out) as img:
            width, height = img.size
            assert img.format == "JPEG"
        assert width == 800
        assert abs(height - size[1] * 800 / size[0]) <= 1
        assert (result["width"], result["height"]) == (width, height)

    def test_small_image_is_not_upscaled(self, tmp_path: Path, make_image: Callable):
        src = _write(tmp_path / "in.png", make_image(size=(320, 240), fmt="PNG"))
        out = str(tmp_path / "out.jpg")

        compress_image(src, out)

        with Image.open(out) as img:
            assert img.size == (320, 240)

    def test_png_with_alpha_is_flattened_onto_white(self, tmp_path: Path, make_image: Callable):
        src = _write(
            tmp_path / "in.png",
            make_image(size=(1000, 500), fmt="PNG", mode="RGBA", color=(0, 0, 0, 0)),
        )
        out = str(tmp_path / "out.jpg")

        compress_image(src, out)

        with Image.open(out) as img:
            assert img.mode == "RGB"
            assert all(channel >= 250 for channel in img.getpixel((10, 10)))

    def test_grayscale_jpeg(self, tmp_path: Path, make_image: Callable):
        src = _write(tmp_path / "in.jpeg", make_image(size=(1200, 900), mode="L", color=128))
        out = str(tmp_path / "out.jpg")

        compress_image(src, out)

        with Image.open(out) as img:
            assert img.size == (800, 600)

    def test_sixteen_bit_grayscale_png_keeps_its_tone(self, tmp_path: Path):
        src = tmp_path / "in.png"
        Image.new("I;16", (1000, 100), 32768).save(src, format="PNG")
        out = str(tmp_path / "out.jpg")

        compress_image(str(src), out)

        with Image.open(out) as img:
            assert img.size == (800, 80)
            pixel = img.convert("L").getpixel((400, 40))
        assert abs(pixel - 128) <= 2

    def test_result_metrics(self, tmp_path: Path, make_image: Callable):
        src = _write(tmp_path / "in.jpg", make_image())
        out = str(tmp_path / "out.jpg")

        result = compress_image(src, out)

        assert result["output_path"] == out
        assert result["original_size"] == os.path.getsize(src)
        assert result["compressed_size"] == os.path.getsize(out)
        assert result["compression_time"] >= 0
        assert result["compression_ratio"] > 0

    def test_decoder_follows_extension(self, tmp_path: Path, make_image: Callable):
        src = _write(tmp_path / "in.jpg", make_image(fmt="PNG"))

        with pytest.raises(CompressionError, match="Error decoding image"):
            compress_image(src, str(tmp_path / "out.jpg"))

    def test_garbage_raises_compression_error(self, tmp_path: Path):
        src = _write(tmp_path / "in.png", b"\x89PNG but not really")
        out = tmp_path / "out.jpg"

        with pytest.raises(CompressionError):
            compress_image(src, str(out))
        assert not out.exists()

    def test_missing_input_raises_compression_error(self, tmp_path: Path):
        with pytest.raises(CompressionError, match="Error opening image"):
            compress_image(str(tmp_path / "missing.jpg"), str(tmp_path / "out.jpg"))

    def test_unsupported_extension(self, tmp_path: Path, make_image: Callable):
        src = _write(tmp_path / "in.gif", make_image(fmt="GIF", mode="P", color=1))

        with pytest.raises(CompressionError, match="Unsupported image type"):
            compress_image(src, str(tmp_path / "out.jpg"))

    def test_unwritable_output(self, tmp_path: Path, make_image: Callable):
        src = _write(tmp_path / "in.jpg", make_image())

        with pytest.raises(CompressionError, match="Error encoding compressed image"):
            compress_image(src, str(tmp_path / "no-such-dir" / "out.jpg"))
