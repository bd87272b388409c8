"""Utility functions for SkinWatch."""

from .path_utils import (
    resolve_path,
    config_home,
    views_file,
    settings_file,
    with_extension,
    ensure_directory_exists,
)
from .logging_utils import setup_logger

__all__ = [
    # Path utilities
    'resolve_path',
    'config_home',
    'views_file',
    'settings_file',
    'with_extension',
    'ensure_directory_exists',
    # Logging utilities
    'setup_logger',
]
