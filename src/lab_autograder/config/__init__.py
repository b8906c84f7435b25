"""
Configuration module.

Handles loading and validation of lab configurations: deadline,
submission marks, file names, and output locations.
"""

from .loader import ConfigLoader
from .models import ConfigError, GradingConfig

__all__ = ["ConfigLoader", "ConfigError", "GradingConfig"]
