"""
================================================================================
Driver Factory
================================================================================

Creates ready-to-use browser sessions, one Playwright instance per session.

Every strategy applies the same stability policy:
    - Autofill, credential storage and save-password prompts disabled
    - Notification and popup permission prompts suppressed
    - Headless: fixed 1920x1080 viewport / headed: maximized window
    - Navigation waits for the full "load" event

Unknown browser kinds fall back to Chromium.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Type

import allure
from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    BrowserType,
    Error as PlaywrightError,
    Locator,
    Page,
    Playwright,
    sync_playwright,
)

from .browser_kind import BrowserKind
from .exceptions import ProvisioningError


HEADLESS_VIEWPORT: Dict[str, int] = {"width": 1920, "height": 1080}

# "load" waits for the full document, never a partially parsed one
PAGE_LOAD_STRATEGY = "load"

CLEAR_STORAGE_SCRIPT = """
() => {
    try { window.sessionStorage.clear(); } catch (e) {}
    try { window.localStorage.clear(); } catch (e) {}
}
"""


# =============================================================================
# Session Handle
# =============================================================================

@dataclass
class BrowserSession:
    """
    One live browser bound to one worker.

    Wraps the Playwright objects behind the small surface the harness needs:
    navigation, element lookup, state cleanup and teardown.
    """

    kind: BrowserKind
    headless: bool
    playwright: Playwright
    browser: Browser
    context: BrowserContext
    page: Page
    created_at: datetime = field(default_factory=datetime.now)
    page_load_strategy: str = PAGE_LOAD_STRATEGY

    def get(self, url: str, timeout: Optional[float] = None) -> None:
        """
        Navigate and block until the document has fully loaded.

        Args:
            url: Absolute URL
            timeout: Navigation timeout in seconds (Playwright default if None)
        """
        options: Dict[str, Any] = {"wait_until": self.page_load_strategy}
        if timeout is not None:
            options["timeout"] = timeout * 1000
        self.page.goto(url, **options)
        logger.debug(f"Navigated to {url}")

    def find_element(self, selector: str) -> Locator:
        """Return a locator for the first element matching ``selector``."""
        return self.page.locator(selector).first

    def wait_for_condition(self, script: str, timeout: float, polling: float = 0.5) -> None:
        """
        Poll a JS predicate until it returns truthy.

        Raises:
            playwright TimeoutError: predicate still false after ``timeout`` seconds
        """
        self.page.wait_for_function(script, timeout=timeout * 1000, polling=polling * 1000)

    def clear_state(self) -> None:
        """Delete all cookies plus session/local storage of the current origin."""
        self.context.clear_cookies()
        self.page.evaluate(CLEAR_STORAGE_SCRIPT)
        logger.debug("Cookies and web storage cleared")

    def screenshot(self, full_page: bool = False) -> bytes:
        return self.page.screenshot(full_page=full_page)

    @property
    def title(self) -> str:
        return self.page.title()

    @property
    def url(self) -> str:
        return self.page.url

    def describe(self) -> Dict[str, Any]:
        """Diagnostic summary (used in logs and Allure attachments)."""
        return {
            "browser": self.kind.value,
            "headless": self.headless,
            "created_at": self.created_at.isoformat(),
            "version": self.browser.version,
        }

    def quit(self) -> None:
        """
        Close the context and browser, then stop Playwright.

        All three are attempted; the first failure is re-raised afterwards.
        """
        first_error: Optional[BaseException] = None
        for close in (self.context.close, self.browser.close, self.playwright.stop):
            try:
                close()
            except Exception as e:
                logger.warning(f"Browser teardown step failed: {e}")
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise first_error
        logger.debug(f"{self.kind.value} session closed")


# =============================================================================
# Browser Strategies
# =============================================================================

class BrowserStrategy:
    """
    Base strategy: one subclass per browser kind.

    Subclasses supply launch/context options; ``create()`` performs the
    launch sequence and converts launch failures into ProvisioningError.
    """

    kind: BrowserKind = BrowserKind.CHROMIUM

    def __init__(self, playwright_factory: Optional[Callable[[], Any]] = None):
        self._playwright_factory = playwright_factory or sync_playwright

    def launcher(self, playwright: Playwright) -> BrowserType:
        raise NotImplementedError

    def launch_options(self, headless: bool) -> Dict[str, Any]:
        raise NotImplementedError

    def context_options(self, headless: bool) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "ignore_https_errors": True,
            "permissions": [],
        }
        if headless:
            options["viewport"] = dict(HEADLESS_VIEWPORT)
        else:
            options["no_viewport"] = True
        return options

    def prepare_page(self, page: Page, headless: bool) -> None:
        """Hook for per-browser adjustments after the first page opens."""

    def create(self, headless: bool) -> BrowserSession:
        """
        Launch a browser and open its first page.

        Raises:
            ProvisioningError: Playwright or the browser binary failed to start
        """
        try:
            playwright = self._playwright_factory().start()
        except (PlaywrightError, OSError) as e:
            raise ProvisioningError(
                f"Could not start Playwright driver: {e}", self.kind.value
            ) from e

        browser: Optional[Browser] = None
        try:
            browser = self.launcher(playwright).launch(**self.launch_options(headless))
            context = browser.new_context(**self.context_options(headless))
            page = context.new_page()
            self.prepare_page(page, headless)
        except (PlaywrightError, OSError) as e:
            self._cleanup_failed_launch(playwright, browser)
            raise ProvisioningError(
                f"Could not launch {self.kind.value} (headless={headless}): {e}",
                self.kind.value,
            ) from e

        logger.info(f"Browser started: {self.kind.value} (headless={headless})")
        return BrowserSession(
            kind=self.kind,
            headless=headless,
            playwright=playwright,
            browser=browser,
            context=context,
            page=page,
        )

    @staticmethod
    def _cleanup_failed_launch(playwright: Any, browser: Optional[Any]) -> None:
        for close in ([browser.close] if browser is not None else []) + [playwright.stop]:
            try:
                close()
            except Exception as e:
                logger.debug(f"Ignoring cleanup error after failed launch: {e}")


class ChromiumStrategy(BrowserStrategy):
    """Chromium with password manager, autofill and prompts disabled."""

    kind = BrowserKind.CHROMIUM

    ARGS: List[str] = [
        "--disable-save-password-bubble",
        "--password-store=basic",
        "--disable-features=PasswordManagerOnboarding,PasswordLeakDetection,"
        "AutofillServerCommunication,AutofillEnableAccountWalletStorage",
        "--disable-extensions",
        "--disable-popup-blocking",
        "--disable-notifications",
        "--disable-gpu",
        "--disable-dev-shm-usage",
        "--disable-blink-features=AutomationControlled",
    ]

    def launcher(self, playwright: Playwright) -> BrowserType:
        return playwright.chromium

    def launch_options(self, headless: bool) -> Dict[str, Any]:
        args = list(self.ARGS)
        if headless:
            args.append(
                f"--window-size={HEADLESS_VIEWPORT['width']},{HEADLESS_VIEWPORT['height']}"
            )
        else:
            args.append("--start-maximized")
        return {
            "headless": headless,
            "args": args,
            "ignore_default_args": ["--enable-automation"],
        }


class FirefoxStrategy(BrowserStrategy):
    """Firefox with signon/formautofill and notification prompts disabled."""

    kind = BrowserKind.FIREFOX

    USER_PREFS: Dict[str, Any] = {
        "signon.rememberSignons": False,
        "signon.autofillForms": False,
        "signon.formlessCapture.enabled": False,
        "extensions.formautofill.creditCards.enabled": False,
        "extensions.formautofill.addresses.enabled": False,
        "dom.webnotifications.enabled": False,
        "permissions.default.desktop-notification": 2,
        "dom.disable_open_during_load": False,
    }

    MAXIMIZE_SCRIPT = "() => [window.screen.availWidth, window.screen.availHeight]"

    def launcher(self, playwright: Playwright) -> BrowserType:
        return playwright.firefox

    def launch_options(self, headless: bool) -> Dict[str, Any]:
        return {
            "headless": headless,
            "firefox_user_prefs": dict(self.USER_PREFS),
        }

    def prepare_page(self, page: Page, headless: bool) -> None:
        # Firefox has no --start-maximized; size the page to the screen instead
        if headless:
            return
        width, height = page.evaluate(self.MAXIMIZE_SCRIPT)
        page.set_viewport_size({"width": int(width), "height": int(height)})


STRATEGIES: Dict[BrowserKind, Type[BrowserStrategy]] = {
    BrowserKind.CHROMIUM: ChromiumStrategy,
    BrowserKind.FIREFOX: FirefoxStrategy,
}


def get_strategy(
    kind: Any,
    playwright_factory: Optional[Callable[[], Any]] = None,
) -> BrowserStrategy:
    """Return the strategy for ``kind``; unknown kinds get Chromium."""
    strategy_cls = STRATEGIES.get(BrowserKind.from_value(kind), ChromiumStrategy)
    return strategy_cls(playwright_factory)


@allure.step("Launch browser: {kind} (headless={headless})")
def create_session(kind: Any, headless: bool = False) -> BrowserSession:
    """
    Create a browser session.

    Args:
        kind: BrowserKind or browser name
        headless: Run without a visible window

    Returns:
        Ready BrowserSession

    Raises:
        ProvisioningError: Browser could not be launched
    """
    return get_strategy(kind).create(headless)


SessionFactory = Callable[[BrowserKind, bool], BrowserSession]


__all__ = [
    "BrowserSession",
    "BrowserStrategy",
    "ChromiumStrategy",
    "FirefoxStrategy",
    "STRATEGIES",
    "SessionFactory",
    "get_strategy",
    "create_session",
    "HEADLESS_VIEWPORT",
    "PAGE_LOAD_STRATEGY",
]
