"""
File Compressor Entry Point

This file serves as the main entry point for the application,
building the FastAPI application defined in the app package.

Run with uvicorn:
    uvicorn main:app --port 8080
or directly:
    python main.py
"""
import logging
import sys

from app.config import Settings

settings = Settings()

# Configure logging based on environment variables
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Configure root logger
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format=LOG_FORMAT,
    stream=sys.stdout
)

# Set up logger
logger = logging.getLogger(__name__)

# Check that required dependencies are installed
try:
    import PIL
    import pikepdf
    logger.info(f"Pillow {PIL.__version__} and pikepdf {pikepdf.__version__} are available")
except ImportError as e:
    logger.critical(f"Missing required dependency: {str(e)}")
    logger.critical("Please install all dependencies: pip install -e .")
    sys.exit(1)

from app import create_app

try:
    app = create_app(settings)
except OSError:
    # create_app has already logged the reason
    sys.exit(1)

# Entry point for running with uvicorn
if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on {settings.host}:{settings.port} with {settings.workers} workers")

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        reload=settings.debug
    )
