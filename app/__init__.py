"""
File Compressor Application

This package implements a FastAPI service that compresses a single uploaded
file and returns a link to the result:
- JPEG/PNG images are resized to a maximum width and re-encoded as JPEG
- PDF documents are optimized with pikepdf

Uploads are staged in ./uploads and results are written to
./uploads/compressed, where they are served as static files.
"""
__version__ = "1.0.0"

# Export the application factory
from app.api import create_app

__all__ = ['create_app', '__version__']
