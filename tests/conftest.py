"""Shared test fixtures for the file compressor tests."""
import io
from pathlib import Path
from typing import Callable, Generator

import pikepdf
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.api import create_app
from app.config import Settings

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing the storage directories at a temporary location."""
    return Settings(
        upload_dir=str(tmp_path / "uploads"),
        compressed_dir=str(tmp_path / "uploads" / "compressed"),
        static_dir=str(STATIC_DIR),
    )


@pytest.fixture()
def client(settings: Settings) -> Generator[TestClient, None, None]:
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture()
def make_image() -> Callable[..., bytes]:
    """Return a factory producing encoded image bytes."""

    def _make(size=(1600, 1200), fmt="JPEG", mode="RGB", color=(200, 60, 40)) -> bytes:
        img = Image.new(mode, size, color)
        buf = io.BytesIO()
        img.save(buf, format=fmt)
        return buf.getvalue()

    return _make


@pytest.fixture()
def make_pdf() -> Callable[..., bytes]:
    """Return a factory producing a PDF with blank pages."""

    def _make(pages: int = 2) -> bytes:
        pdf = pikepdf.new()
        for _ in range(pages):
            pdf.add_blank_page(page_size=(612, 792))
        buf = io.BytesIO()
        pdf.save(buf)
        return buf.getvalue()

    return _make
