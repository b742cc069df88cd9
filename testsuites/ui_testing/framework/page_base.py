"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - The worker's BrowserSession and its Playwright page
    - Element actions with explicit waits (no implicit waits)
    - Navigation utilities

Page objects never assert; tests and step definitions do.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any

import allure
from loguru import logger

from .driver_factory import BrowserSession
from .driver_manager import DriverManager
from .element_actions import ElementActions
from .settings import DEFAULT_BASE_URL


# Matches the per-attempt timeout used by page initialization
DEFAULT_WAIT_TIMEOUT = 20.0


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/"

            def login(self, username: str, password: str) -> "LoginPage":
                self.actions.type_text("#user-name", username)
                ...
    """

    # Override in subclasses
    URL_PATH: str = "/"

    def __init__(
        self,
        session: BrowserSession,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_WAIT_TIMEOUT,
    ):
        """
        Initialize page object.

        Args:
            session: The worker's browser session
            base_url: Base URL for the application
            timeout: Explicit wait timeout in seconds
        """
        self.session = session
        self.page = session.page
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.actions = ElementActions(self.page, default_timeout=int(timeout * 1000))

    @classmethod
    def for_worker(cls, manager: DriverManager, worker_id: str, **kwargs: Any):
        """
        Build the page object on the worker's running session.

        Raises:
            NotStartedError: No session was started for ``worker_id``
        """
        return cls(manager.get(worker_id), **kwargs)

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def title(self) -> str:
        """Current document title."""
        return self.session.title

    def navigate(self) -> None:
        """Navigate to this page and wait for the full load event."""
        with allure.step(f"Navigate to {self.URL_PATH}"):
            self.session.get(self.url, timeout=self.timeout)
            logger.debug(f"Navigated to: {self.url}")


__all__ = [
    "BasePage",
    "DEFAULT_WAIT_TIMEOUT",
]
