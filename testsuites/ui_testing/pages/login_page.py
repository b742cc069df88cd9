"""
================================================================================
Login Page Object
================================================================================

The Swag Labs login screen.

Design goals:
  - CSS-first locators (ids with data-test fallbacks)
  - Explicit waits before every interaction
  - Hard clear so the page's own validation sees empty inputs
  - Fluent API: actions return the page object; no assertions here

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from testsuites.ui_testing.framework.page_base import BasePage


class LoginPage(BasePage):
    """Login page object."""

    URL_PATH = "/"

    USERNAME_INPUT = "#user-name, [data-test='username']"
    PASSWORD_INPUT = "#password, [data-test='password']"
    LOGIN_BUTTON = "#login-button, [data-test='login-button']"
    ERROR_MESSAGE = "[data-test='error'], .error-message-container h3"

    @allure.step("Open login page")
    def open(self) -> "LoginPage":
        """Navigate to the login page and wait for the form."""
        self.navigate()
        self._ensure_on_login()
        return self

    def _ensure_on_login(self) -> None:
        """Make sure the login form is visible; reload once if it is not."""
        try:
            self.actions.wait_for_element(self.USERNAME_INPUT, "Username field")
        except PlaywrightTimeoutError:
            logger.warning("Login form not visible, reloading page once")
            self.page.reload(wait_until=self.session.page_load_strategy)
            self.actions.wait_for_element(self.USERNAME_INPUT, "Username field")

    def type_username(self, username: str) -> "LoginPage":
        self._ensure_on_login()
        self.actions.type_text(self.USERNAME_INPUT, username, description="Username field")
        return self

    def type_password(self, password: str) -> "LoginPage":
        self._ensure_on_login()
        self.actions.type_text(self.PASSWORD_INPUT, password, description="Password field")
        return self

    def clear_username(self) -> "LoginPage":
        """Clear the username field; raises if it still holds a value."""
        self._ensure_on_login()
        self._hard_clear(self.USERNAME_INPUT, "Username")
        return self

    def clear_password(self) -> "LoginPage":
        """Clear the password field; raises if it still holds a value."""
        self._ensure_on_login()
        self._hard_clear(self.PASSWORD_INPUT, "Password")
        return self

    def _hard_clear(self, selector: str, label: str) -> None:
        self.actions.clear_input(selector, description=f"{label} field")
        if self.actions.get_value(selector):
            raise RuntimeError(f"{label} input did not clear properly")

    def click_login(self) -> "LoginPage":
        self.actions.click_element(self.LOGIN_BUTTON, description="Login button")
        return self

    @allure.step("Login (username={username})")
    def login(self, username: str, password: str) -> "LoginPage":
        """Type username, type password, click Login."""
        self._ensure_on_login()
        self.type_username(username)
        self.type_password(password)
        self.click_login()
        return self

    def get_error_text(self) -> str:
        """Error banner text shown after a rejected login."""
        return self.actions.get_text(self.ERROR_MESSAGE, description="Error banner")

    def is_error_displayed(self, timeout: int = 2000) -> bool:
        return self.actions.is_visible(self.ERROR_MESSAGE, timeout=timeout)
