"""
Upload endpoint: POST /compress.

Accepts a multipart form with a single file under the "file" field, stages
it, compresses it according to its extension and returns the URL of the
compressed result.
"""
import os
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from app.config import Settings
from app.core import CompressionError, OUTPUT_EXTENSIONS, compress_file
from app.models.compression import CompressResponse
from app.api.dependencies import get_settings, get_storage
from app.utils.file_handling import (
    Storage,
    UploadSaveError,
    UploadTooLarge,
    file_category,
    file_extension,
    new_file_id,
    save_upload
)

# Set up logging
logger = logging.getLogger(__name__)

COMPRESSED_URL_PREFIX = "/uploads/compressed"
SUCCESS_MESSAGE = "File compressed successfully!"
UNSUPPORTED_MESSAGE = "Unsupported file type"

router = APIRouter(tags=["Compression"])


def _content_length(request: Request) -> int:
    value = request.headers.get("content-length", "")
    return int(value) if value.isdigit() else -1


@router.post("/compress", response_model=CompressResponse)
async def compress_upload(
    request: Request,
    settings: Settings = Depends(get_settings),
    storage: Storage = Depends(get_storage)
):
    """
    Compress an uploaded JPEG, PNG or PDF file.

    Images are resized to at most the configured width and re-encoded as
    JPEG; PDFs are optimized. The response points at the compressed file
    under /uploads/compressed/.
    """
    content_length = _content_length(request)
    if content_length > settings.max_upload_size:
        message = str(UploadTooLarge(settings.max_upload_size))
        logger.warning(f"Rejected upload of {content_length} bytes: {message}")
        raise HTTPException(status_code=413, detail=message)

    try:
        form = await request.form()
    except (StarletteHTTPException, MultiPartException) as e:
        reason = getattr(e, "detail", None) or getattr(e, "message", None) or str(e)
        logger.warning(f"Could not parse upload form: {reason}")
        raise HTTPException(status_code=500, detail=f"Error uploading file: {reason}")

    try:
        upload = form.get("file")
        if upload is None:
            raise HTTPException(
                status_code=500,
                detail="Error uploading file: no file field named 'file' in form"
            )
        if not isinstance(upload, UploadFile):
            raise HTTPException(
                status_code=500,
                detail="Error uploading file: field 'file' is not a file upload"
            )

        category = file_category(upload.filename)
        if category is None:
            logger.warning(f"Unsupported file type: {upload.filename!r}")
            raise HTTPException(status_code=400, detail=UNSUPPORTED_MESSAGE)

        file_id = new_file_id()
        staging_path = storage.staging_path(file_id, file_extension(upload.filename))

        try:
            size = await run_in_threadpool(save_upload, upload.file, staging_path, settings.max_upload_size)
        except UploadTooLarge as e:
            logger.warning(f"Upload {upload.filename!r} rejected: {e}")
            raise HTTPException(status_code=413, detail=str(e))
        except UploadSaveError as e:
            raise HTTPException(status_code=500, detail=str(e))
    finally:
        await form.close()

    logger.info(f"Received {upload.filename!r} ({size} bytes) as {file_id}, compressing as {category}")

    try:
        result = await run_in_threadpool(
            compress_file,
            category,
            staging_path,
            storage.compressed_path(file_id, OUTPUT_EXTENSIONS[category]),
            settings.max_image_width
        )
    except CompressionError as e:
        raise HTTPException(status_code=500, detail=f"Error compressing file: {e.reason}")

    output_name = os.path.basename(result["output_path"])
    logger.info(
        f"Compressed {file_id}: {result['original_size']} -> {result['compressed_size']} bytes "
        f"in {result['compression_time']:.3f}s"
    )

    return CompressResponse(
        message=SUCCESS_MESSAGE,
        file=f"{COMPRESSED_URL_PREFIX}/{output_name}",
        file_id=file_id,
        original_size=result["original_size"],
        compressed_size=result["compressed_size"],
        compression_ratio=result["compression_ratio"],
        space_savings_percent=result["space_savings_percent"],
        compression_time=result["compression_time"]
    )
