"""
Utility module.

Common utilities for logging and file handling.
"""

from .logging import setup_logging, get_logger
from .files import ensure_dir, write_text, append_text

__all__ = ["setup_logging", "get_logger", "ensure_dir", "write_text", "append_text"]
