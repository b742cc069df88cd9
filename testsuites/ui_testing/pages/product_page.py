"""
Product (inventory) page object: the page shown after a successful login.
"""

from __future__ import annotations

from testsuites.ui_testing.framework.page_base import BasePage


class ProductPage(BasePage):
    """Inventory page."""

    URL_PATH = "/inventory.html"

    HEADER_TITLE = ".app_logo"

    def get_header_text(self) -> str:
        """Header logo text; "Swag Labs" once logged in."""
        return self.actions.get_text(self.HEADER_TITLE, description="Header logo")

    def is_loaded(self, timeout: int = None) -> bool:
        """True once the header is visible; waits up to the page timeout."""
        return self.actions.is_visible(
            self.HEADER_TITLE, timeout=timeout or self.actions.default_timeout
        )
