"""
Data models for the file compression API.

This module provides Pydantic models for response validation and
documentation.
"""
from app.models.base import BaseCompressionResponse

from app.models.compression import (
    CompressResponse,
    HealthResponse
)

__all__ = [
    'BaseCompressionResponse',
    'CompressResponse',
    'HealthResponse'
]
