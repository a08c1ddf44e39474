"""
Runtime configuration for the file compression service.

All values default to the service's fixed layout (port 8080, ./uploads,
./uploads/compressed, ./static, 10 MB uploads) and can be overridden
through environment variables named after the fields, e.g. PORT=9000.
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_UPLOAD_SIZE = 10 * 1024 * 1024
MAX_IMAGE_WIDTH = 800


class Settings(BaseSettings):
    """Service settings"""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    upload_dir: str = Field("./uploads", description="Staging directory for raw uploads")
    compressed_dir: str = Field("./uploads/compressed", description="Output directory for compressed files")
    static_dir: str = Field("./static", description="Directory holding the front end assets")
    max_upload_size: int = Field(MAX_UPLOAD_SIZE, gt=0, description="Maximum multipart body size in bytes")
    max_image_width: int = Field(MAX_IMAGE_WIDTH, gt=0, description="Maximum width of compressed images in pixels")
    host: str = Field("0.0.0.0", description="Interface to listen on")
    port: int = Field(8080, gt=0, lt=65536, description="Port to listen on")
    workers: int = Field(1, gt=0, description="Number of uvicorn worker processes")
    debug: bool = Field(False, description="Enable auto-reload")
    log_level: str = Field("INFO", description="Root log level")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()
