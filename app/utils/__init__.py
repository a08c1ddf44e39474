"""
Utility functions for the file compression service.
"""
from app.utils.metrics import (
    get_cpu_mem,
    get_disk_usage,
    measure_compression_performance,
    PerformanceTimer
)

from app.utils.file_handling import (
    FILE_CATEGORIES,
    Storage,
    UploadSaveError,
    UploadTooLarge,
    directory_status,
    file_category,
    file_extension,
    new_file_id,
    save_upload
)

__all__ = [
    # Metrics utilities
    'get_cpu_mem',
    'get_disk_usage',
    'measure_compression_performance',
    'PerformanceTimer',

    # File handling utilities
    'FILE_CATEGORIES',
    'Storage',
    'UploadSaveError',
    'UploadTooLarge',
    'directory_status',
    'file_category',
    'file_extension',
    'new_file_id',
    'save_upload'
]
