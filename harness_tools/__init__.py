"""
================================================================================
Harness Tools
================================================================================

Shared infrastructure for the SauceDemo UI harness.

Modules:
    - common: Configuration loading and Loguru setup
    - report_tools: Allure attachment helpers

Example:
    from harness_tools.common import ConfigLoader, init_logger

    init_logger()
    headless = ConfigLoader().get_bool("headless", False)

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
