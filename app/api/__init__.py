"""
API module for the file compression service.
"""
import os
import time
import logging
import platform
from typing import Optional
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import Settings
from app.api.compress import router as compress_router, COMPRESSED_URL_PREFIX
from app.models.compression import HealthResponse
from app.utils.file_handling import Storage

# Set up logging
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    The returned app owns its settings and storage; both are available to
    handlers through app.state. The staging and output directories are
    created here.

    Args:
        settings: Service settings (defaults to Settings() read from the environment)

    Returns:
        Configured FastAPI application

    Raises:
        OSError: If the storage directories cannot be created
    """
    if settings is None:
        settings = Settings()

    storage = Storage(settings.upload_dir, settings.compressed_dir)
    try:
        storage.ensure_directories()
    except OSError as e:
        logger.critical(f"Error creating storage directories: {e}")
        raise

    app = FastAPI(
        title="File Compressor",
        description="""
        Upload a JPEG, PNG or PDF file and get back a link to a compressed copy:
        - Images are resized to a maximum width and re-encoded as JPEG
        - PDFs are optimized with pikepdf
        """,
        version=__version__
    )
    app.state.settings = settings
    app.state.storage = storage

    app.include_router(compress_router)

    app.mount("/static", StaticFiles(directory=settings.static_dir, check_dir=False), name="static")
    app.mount(COMPRESSED_URL_PREFIX, StaticFiles(directory=storage.compressed_dir), name="compressed")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render HTTP errors as plain text."""
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unexpected errors."""
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "An unexpected error occurred", "error": str(exc)}
        )

    @app.get("/", include_in_schema=False)
    async def serve_index():
        """Serve the upload page."""
        index_path = os.path.join(settings.static_dir, "index.html")
        if not os.path.isfile(index_path):
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(index_path, media_type="text/html")

    # Health check endpoints
    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Check if the API is running."""
        return HealthResponse(status="healthy", version=__version__)

    @app.get("/health/detailed")
    async def detailed_health_check():
        """
        Provides detailed health information including system metrics,
        compression library versions and storage directory status.
        """
        import PIL
        import pikepdf
        from app.utils.metrics import get_cpu_mem, get_disk_usage

        cpu_mem = get_cpu_mem()
        system_info = {
            "cpu_usage": cpu_mem["cpu_usage"],
            "memory_usage": cpu_mem["memory_usage"],
            "disk_usage": get_disk_usage(storage.upload_dir),
            "python_version": platform.python_version(),
            "platform": platform.platform()
        }

        compression_status = {
            "pillow": {"status": "ok", "version": PIL.__version__},
            "pikepdf": {
                "status": "ok",
                "version": pikepdf.__version__,
                "qpdf_version": pikepdf.__libqpdf_version__
            }
        }

        return {
            "status": "healthy",
            "version": __version__,
            "system": system_info,
            "compression": compression_status,
            "storage": storage.status(),
            "timestamp": time.time()
        }

    logger.info(
        f"File compressor ready: uploads in {storage.upload_dir}, "
        f"compressed files in {storage.compressed_dir}"
    )
    return app
