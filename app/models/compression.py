"""
Data models for compression API responses.
"""
from pydantic import BaseModel, Field

from app.models.base import BaseCompressionResponse


class CompressResponse(BaseCompressionResponse):
    """Response model for POST /compress"""
    message: str = Field(..., description="Human readable result message")
    file: str = Field(..., description="URL of the compressed file")


class HealthResponse(BaseModel):
    """Response model for the basic health check"""
    status: str
    version: str
