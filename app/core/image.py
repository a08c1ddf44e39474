"""
Image compression: resize to a maximum width and re-encode as JPEG.

JPEG and PNG inputs are decoded with Pillow, scaled down with a Lanczos
filter so the width never exceeds the configured maximum, flattened to RGB
and written as a JPEG with Pillow's default quality.
"""
import os
import logging
from typing import Dict, Any, Tuple
from PIL import Image

from app.core.errors import CompressionError
from app.utils.metrics import measure_compression_performance, PerformanceTimer

# Set up logging
logger = logging.getLogger(__name__)

# Image compression constants
DEFAULT_MAX_WIDTH = 800
OUTPUT_FORMAT = "JPEG"
OUTPUT_EXTENSION = ".jpg"
IMAGE_FORMATS = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
}
# 16-bit grayscale PNGs decode to one of these
WIDE_INTEGER_MODES = ("I", "I;16", "I;16B", "I;16L", "I;16N")


def target_size(width: int, height: int, max_width: int = DEFAULT_MAX_WIDTH) -> Tuple[int, int]:
    """
    Compute the output dimensions for an image.

    Args:
        width: Source width in pixels
        height: Source height in pixels
        max_width: Maximum output width

    Returns:
        (width, height) scaled to max_width with the aspect ratio preserved,
        or the source size if it is already narrow enough
    """
    if width <= max_width:
        return width, height
    return max_width, max(1, round(height * max_width / width))


def _flatten_to_rgb(img: Image.Image) -> Image.Image:
    if img.mode in WIDE_INTEGER_MODES:
        # Scale 0..65535 down to 0..255
        return img.convert("I").point(lambda v: v * (1 / 256)).convert("L")
    # JPEG has no alpha channel
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if img.mode not in ("RGB", "L"):
        return img.convert("RGB")
    return img


def compress_image(
    input_path: str,
    output_path: str,
    max_width: int = DEFAULT_MAX_WIDTH
) -> Dict[str, Any]:
    """
    Resize a JPEG or PNG image and save it as a JPEG.

    Args:
        input_path: Path to the uploaded image; its extension selects the decoder
        output_path: Path to write the JPEG to
        max_width: Maximum width of the output image

    Returns:
        Dictionary with the output path, dimensions and compression metrics

    Raises:
        CompressionError: If the image cannot be read, decoded or written
    """
    ext = os.path.splitext(input_path)[1].lower()
    image_format = IMAGE_FORMATS.get(ext)
    if image_format is None:
        raise CompressionError(f"Unsupported image type: {ext or 'no extension'}")

    try:
        original_size = os.path.getsize(input_path)
    except OSError as e:
        logger.error(f"Error opening image {input_path}: {e}")
        raise CompressionError(f"Error opening image: {e}") from e

    with PerformanceTimer() as timer:
        try:
            with Image.open(input_path, formats=[image_format]) as img:
                img.load()
                source_width, source_height = img.size
                new_size = target_size(source_width, source_height, max_width)
                rgb = _flatten_to_rgb(img)
                if new_size != rgb.size:
                    resized = rgb.resize(new_size, Image.Resampling.LANCZOS)
                else:
                    resized = rgb.copy()
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            logger.error(f"Error decoding image {input_path}: {e}")
            raise CompressionError(f"Error decoding image: {e}") from e

        try:
            resized.save(output_path, format=OUTPUT_FORMAT)
        except (OSError, ValueError) as e:
            logger.error(f"Error encoding compressed image {output_path}: {e}")
            raise CompressionError(f"Error encoding compressed image: {e}") from e

    compressed_size = os.path.getsize(output_path)
    logger.info(
        f"Resized {source_width}x{source_height} -> {new_size[0]}x{new_size[1]}, "
        f"{original_size} -> {compressed_size} bytes"
    )

    result = {
        "output_path": output_path,
        "original_size": original_size,
        "compressed_size": compressed_size,
        "compression_time": timer.execution_time,
        "width": new_size[0],
        "height": new_size[1],
    }
    result.update(measure_compression_performance(original_size, compressed_size, timer.execution_time))
    return result
