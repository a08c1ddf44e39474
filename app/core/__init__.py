"""
Compressors for the file compression service.

- image: resize JPEG/PNG uploads and re-encode them as JPEG (Pillow)
- pdf: optimize PDF uploads (pikepdf)
"""
import logging
from typing import Dict, Any

from app.core.errors import CompressionError
from app.core.image import (
    OUTPUT_EXTENSION as IMAGE_EXTENSION,
    DEFAULT_MAX_WIDTH,
    IMAGE_FORMATS,
    compress_image,
    target_size
)
from app.core.pdf import OUTPUT_EXTENSION as PDF_EXTENSION, compress_pdf

# Set up logging
logger = logging.getLogger(__name__)

IMAGE = "image"
PDF = "pdf"

OUTPUT_EXTENSIONS = {
    IMAGE: IMAGE_EXTENSION,
    PDF: PDF_EXTENSION,
}


def compress_file(
    category: str,
    input_path: str,
    output_path: str,
    max_width: int = DEFAULT_MAX_WIDTH
) -> Dict[str, Any]:
    """
    Compress a staged upload with the compressor for its category.

    Args:
        category: "image" or "pdf"
        input_path: Path to the staged upload
        output_path: Path to write the compressed file to
        max_width: Maximum width for images

    Returns:
        Result dictionary from the compressor

    Raises:
        CompressionError: If the category is unknown or compression fails
    """
    if category not in OUTPUT_EXTENSIONS:
        raise CompressionError(f"No compressor for category: {category}")

    logger.debug(f"Compressing {input_path} as {category} to {output_path}")

    if category == IMAGE:
        return compress_image(input_path, output_path, max_width)
    return compress_pdf(input_path, output_path)


__all__ = [
    'IMAGE',
    'PDF',
    'OUTPUT_EXTENSIONS',
    'CompressionError',
    'DEFAULT_MAX_WIDTH',
    'IMAGE_FORMATS',
    'compress_image',
    'compress_pdf',
    'compress_file',
    'target_size'
]
