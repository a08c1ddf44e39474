"""
PDF compression through pikepdf.

The document is opened, unreferenced page resources are dropped and the
file is saved again with compressed streams. No compression levels or
object stream settings are tuned.
"""
import os
import logging
from typing import Dict, Any
import pikepdf

from app.core.errors import CompressionError
from app.utils.metrics import measure_compression_performance, PerformanceTimer

# Set up logging
logger = logging.getLogger(__name__)

OUTPUT_EXTENSION = ".pdf"


def compress_pdf(input_path: str, output_path: str) -> Dict[str, Any]:
    """
    Optimize a PDF file.

    Args:
        input_path: Path to the uploaded PDF
        output_path: Path to write the optimized PDF to

    Returns:
        Dictionary with the output path and compression metrics

    Raises:
        CompressionError: If the PDF cannot be read or written
    """
    try:
        original_size = os.path.getsize(input_path)
    except OSError as e:
        logger.error(f"Error opening PDF {input_path}: {e}")
        raise CompressionError(f"Error opening PDF: {e}") from e

    with PerformanceTimer() as timer:
        try:
            with pikepdf.open(input_path) as pdf:
                page_count = len(pdf.pages)
                pdf.remove_unreferenced_resources()
                pdf.save(output_path, compress_streams=True)
        except (pikepdf.PdfError, OSError) as e:
            logger.error(f"Error compressing PDF {input_path}: {e}")
            raise CompressionError(f"Error compressing PDF: {e}") from e

    compressed_size = os.path.getsize(output_path)
    logger.info(f"Optimized PDF with {page_count} pages, {original_size} -> {compressed_size} bytes")

    result = {
        "output_path": output_path,
        "original_size": original_size,
        "compressed_size": compressed_size,
        "compression_time": timer.execution_time,
        "page_count": page_count,
    }
    result.update(measure_compression_performance(original_size, compressed_size, timer.execution_time))
    return result
