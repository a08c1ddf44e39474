"""
Storage layout and upload file handling.

Uploads are staged in one directory and compressed results are written to
another. Every request gets its own file ID which names both files.
"""
import os
import shutil
import logging
import uuid
from typing import Optional, BinaryIO, Dict, Any

# Set up logging
logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024

FILE_CATEGORIES = {
    ".jpg": "image",
    ".jpeg": "image",
    ".png": "image",
    ".pdf": "pdf",
}


def _format_size(num_bytes: int) -> str:
    if num_bytes % (1024 * 1024) == 0:
        return f"{num_bytes // (1024 * 1024)} MB"
    return f"{num_bytes} bytes"


class UploadTooLarge(Exception):
    """Raised when an upload streams more bytes than allowed"""

    def __init__(self, max_size: int):
        super().__init__(f"Upload exceeds maximum size of {_format_size(max_size)}")
        self.max_size = max_size


class UploadSaveError(Exception):
    """Raised when a staged upload cannot be created or written"""


def file_extension(filename: Optional[str]) -> str:
    """Lowercase extension of a client supplied filename, including the dot."""
    if not filename:
        return ""
    return os.path.splitext(os.path.basename(filename))[1].lower()


def file_category(filename: Optional[str]) -> Optional[str]:
    """
    Classify an upload by its extension.

    Args:
        filename: Client supplied filename

    Returns:
        "image" for .jpg/.jpeg/.png, "pdf" for .pdf, None for anything else
    """
    return FILE_CATEGORIES.get(file_extension(filename))


def new_file_id() -> str:
    """
    Generate an identifier for one upload.

    Returns:
        Random UUID4 hex string naming both the staged and the compressed file
    """
    return uuid.uuid4().hex


def save_upload(source: BinaryIO, destination: str, max_size: int) -> int:
    """
    Stream an uploaded file to disk.

    Args:
        source: File-like object positioned at the start of the upload
        destination: Path to write to
        max_size: Maximum number of bytes accepted

    Returns:
        Number of bytes written

    Raises:
        UploadTooLarge: If the upload is larger than max_size (the partial
            file is removed)
        UploadSaveError: If the destination cannot be created or written
    """
    try:
        out = open(destination, "wb")
    except OSError as e:
        logger.error(f"Error creating staging file {destination}: {e}")
        raise UploadSaveError(f"Error saving uploaded file: {e}") from e

    written = 0
    with out:
        try:
            while True:
                chunk = source.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_size:
                    break
                out.write(chunk)
        except OSError as e:
            logger.error(f"Error writing staging file {destination}: {e}")
            raise UploadSaveError(f"Error writing uploaded file: {e}") from e

    if written > max_size:
        os.remove(destination)
        raise UploadTooLarge(max_size)

    return written


def directory_status(path: str) -> Dict[str, Any]:
    """
    Report whether a directory exists, is writable and how much space is free.

    Args:
        path: Directory to inspect

    Returns:
        Dictionary with exists, writable and free_space_mb keys (plus error
        messages for checks that failed)
    """
    status = {"path": os.path.abspath(path), "exists": os.path.isdir(path)}
    if not status["exists"]:
        return status

    test_file = os.path.join(path, f".write_test_{new_file_id()}")
    try:
        with open(test_file, "w") as f:
            f.write("test")
        os.remove(test_file)
        status["writable"] = True
    except OSError as e:
        status["writable"] = False
        status["write_error"] = str(e)

    try:
        status["free_space_mb"] = round(shutil.disk_usage(path).free / (1024 * 1024), 2)
    except OSError as e:
        status["space_error"] = str(e)

    return status


class Storage:
    """
    Owns the staging and output directories.

    Args:
        upload_dir: Directory for raw uploads
        compressed_dir: Directory for compressed results
    """

    def __init__(self, upload_dir: str, compressed_dir: str):
        self.upload_dir = upload_dir
        self.compressed_dir = compressed_dir

    def ensure_directories(self) -> None:
        """Create both directories if they do not exist (raises OSError on failure)."""
        for path in (self.upload_dir, self.compressed_dir):
            os.makedirs(path, exist_ok=True)
            logger.debug(f"Directory ready: {path}")

    def staging_path(self, file_id: str, ext: str) -> str:
        return os.path.join(self.upload_dir, f"{file_id}{ext}")

    def compressed_path(self, file_id: str, ext: str) -> str:
        return os.path.join(self.compressed_dir, f"{file_id}{ext}")

    def status(self) -> Dict[str, Any]:
        return {
            "uploads": directory_status(self.upload_dir),
            "compressed": directory_status(self.compressed_dir),
        }
