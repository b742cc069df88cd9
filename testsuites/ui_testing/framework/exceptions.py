"""
================================================================================
Harness Exceptions
================================================================================

Error taxonomy for the driver lifecycle and page initialization.

    HarnessError
    ├── ProvisioningError        browser could not be launched
    ├── NotStartedError          get() before start() on a worker
    ├── ElementNotFoundError     transient: element not attached yet
    ├── StaleElementError        transient: element/context detached
    ├── RenderingInvariantError  element "ready" but zero-sized or disabled
    └── PageInitializationError  all attempts failed

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional


class HarnessError(Exception):
    """Base class for all harness errors."""


class ProvisioningError(HarnessError):
    """The driver factory could not produce a browser session."""

    def __init__(self, message: str, browser_kind: Optional[str] = None):
        super().__init__(message)
        self.browser_kind = browser_kind


class NotStartedError(HarnessError):
    """No browser session is registered for the requesting worker."""

    def __init__(self, worker_id: str):
        super().__init__(f"Browser session not started for worker '{worker_id}'")
        self.worker_id = worker_id


class ElementNotFoundError(HarnessError):
    """Element could not be located in the DOM."""

    def __init__(self, selector: str, message: str = ""):
        super().__init__(message or f"Element not found: {selector}")
        self.selector = selector


class StaleElementError(HarnessError):
    """Element or execution context was detached while being used."""


class RenderingInvariantError(HarnessError):
    """
    Element passed the readiness checks but is not actually usable
    (zero rendered dimensions, or disabled).
    """


class PageInitializationError(HarnessError):
    """Page could not be brought to a ready state within the allowed attempts."""

    def __init__(self, url: str, attempts: int, last_error: Optional[BaseException]):
        reason = str(last_error) if last_error is not None else "Unknown"
        super().__init__(
            f"Failed to initialize page {url} after {attempts} attempts. "
            f"Last error: {reason}"
        )
        self.url = url
        self.attempts = attempts
        self.last_error = last_error


__all__ = [
    "HarnessError",
    "ProvisioningError",
    "NotStartedError",
    "ElementNotFoundError",
    "StaleElementError",
    "RenderingInvariantError",
    "PageInitializationError",
]
