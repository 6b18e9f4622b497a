"""Utility modules for the note junction grouping tools.
"""

from .io_utils import load_settings, read_structured_file, reload_settings
from .logging_utils import get_logger, setup_logging
from .path_utils import ensure_directory_exists, get_config_path, get_project_root
from .settings import validate_settings

__all__ = [
    # Logging utilities
    "setup_logging",
    "get_logger",
    # Path utilities
    "get_project_root",
    "ensure_directory_exists",
    "get_config_path",
    # I/O utilities
    "load_settings",
    "reload_settings",
    "read_structured_file",
    # Settings validation
    "validate_settings",
]
