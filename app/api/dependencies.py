"""
Request dependencies giving handlers access to the application's settings
and storage.
"""
from fastapi import Request

from app.config import Settings
from app.utils.file_handling import Storage


def get_settings(request: Request) -> Settings:
    """
    Settings of the application serving the request.

    Args:
        request: Incoming request

    Returns:
        Settings stored on app.state by create_app
    """
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    """
    Storage of the application serving the request.

    Args:
        request: Incoming request

    Returns:
        Storage stored on app.state by create_app
    """
    return request.app.state.storage
