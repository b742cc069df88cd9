"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for the SauceDemo login flow.

Components:
    - browser_kind: Browser name normalization (Chromium default)
    - driver_factory: Browser sessions with the stability policy applied
    - driver_manager: One browser session per worker
    - page_init: Navigation + readiness gate with bounded retries
    - element_actions: Waiting/retrying element interactions
    - page_base: Base page object

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_kind import BrowserKind
from .driver_factory import BrowserSession, create_session
from .driver_manager import DriverManager, current_worker_id
from .exceptions import (
    ElementNotFoundError,
    HarnessError,
    NotStartedError,
    PageInitializationError,
    ProvisioningError,
    RenderingInvariantError,
    StaleElementError,
)
from .page_base import BasePage
from .page_init import ElementReadyProbe, PageInitializer, RetryPolicy, initialize_page
from .settings import HarnessSettings

__all__ = [
    "BrowserKind",
    "BrowserSession",
    "create_session",
    "DriverManager",
    "current_worker_id",
    "HarnessError",
    "ProvisioningError",
    "NotStartedError",
    "ElementNotFoundError",
    "StaleElementError",
    "RenderingInvariantError",
    "PageInitializationError",
    "BasePage",
    "ElementReadyProbe",
    "PageInitializer",
    "RetryPolicy",
    "initialize_page",
    "HarnessSettings",
]
