"""
Base models for the file compression API.
"""
from pydantic import BaseModel, Field


class BaseCompressionResponse(BaseModel):
    """Common fields for compression operation responses"""
    file_id: str = Field(..., description="Unique identifier for the upload and its compressed file")
    original_size: int = Field(..., description="Size of the uploaded file in bytes")
    compressed_size: int = Field(..., description="Size of the compressed file in bytes")
    compression_ratio: float = Field(
        ..., description="Compression ratio (original_size / compressed_size)"
    )
    space_savings_percent: float = Field(
        ..., description="Percentage of space saved through compression"
    )
    compression_time: float = Field(
        ..., description="Time taken for compression operation in seconds"
    )
