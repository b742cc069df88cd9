"""
================================================================================
Harness Tools Common Utilities
================================================================================

Exports:
    - ConfigLoader: YAML + environment variable configuration
    - ConfigurationError: Raised for unreadable configuration files
    - init_logger: Loguru setup

================================================================================
"""

from .config_loader import ConfigLoader, ConfigurationError
from .global_config import init_logger

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "init_logger",
]
