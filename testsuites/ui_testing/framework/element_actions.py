# ================================================================================
# Element Actions Module
# ================================================================================
#
# Element interaction helpers used by the page objects, with built-in waits,
# retry on transient failures and Allure step integration.
#
# Key Features:
#   - Wait for visibility/clickability before every action
#   - Retry only on transient failures (timeout, not found, stale)
#   - Hard clear for inputs that resist a plain fill("")
#   - Allure step integration
#
# ================================================================================

import time
from functools import wraps
from typing import Callable, Union

import allure
from loguru import logger
from playwright.sync_api import Locator, Page

from .page_init import FailureClass, classify_failure, normalize_error


HARD_CLEAR_SCRIPT = """
el => {
    el.value = '';
    el.setAttribute('value', '');
    el.removeAttribute('value');
    el.autocomplete = 'off';
    ['input', 'change', 'keyup', 'blur'].forEach(type => {
        el.dispatchEvent(new Event(type, { bubbles: true, cancelable: true }));
    });
}
"""


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 3,
        delay_seconds: float = 0.5,
        backoff_multiplier: float = 2.0,
        max_delay_seconds: float = 5.0
    ):
        """
        Initialize retry configuration.

        Args:
            max_attempts: Maximum number of attempts
            delay_seconds: Initial delay between retries
            backoff_multiplier: Multiplier for exponential backoff
            max_delay_seconds: Maximum delay between retries
        """
        self.max_attempts = max_attempts
        self.delay_seconds = delay_seconds
        self.backoff_multiplier = backoff_multiplier
        self.max_delay_seconds = max_delay_seconds


def with_retry(config: RetryConfig = None):
    """
    Decorator retrying an element action on transient failures.

    Non-transient errors (assertion failures, rendering problems,
    programming errors) are raised on the first occurrence.

    Args:
        config: RetryConfig object for controlling retry behavior
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            delay = config.delay_seconds

            for attempt in range(1, config.max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    error = normalize_error(e)
                    if classify_failure(error) is FailureClass.FATAL:
                        raise
                    if attempt == config.max_attempts:
                        logger.error(
                            f"All {config.max_attempts} attempts failed for "
                            f"{func.__name__}: {error}"
                        )
                        raise
                    logger.warning(
                        f"Attempt {attempt}/{config.max_attempts} failed for "
                        f"{func.__name__}: {error}. Retrying in {delay}s..."
                    )
                    time.sleep(delay)
                    delay = min(
                        delay * config.backoff_multiplier,
                        config.max_delay_seconds
                    )

        return wrapper
    return decorator


class ElementActions:
    """
    Element interaction methods for one Playwright page.

    Example:
        actions = ElementActions(page)
        actions.type_text("#user-name", "standard_user", description="Username field")
        actions.click_element("#login-button", description="Login button")
    """

    def __init__(self, page: Page, default_timeout: int = 20000):
        """
        Args:
            page: Playwright Page object
            default_timeout: Default timeout for operations in milliseconds
        """
        self.page = page
        self.default_timeout = default_timeout

    @allure.step("Click element: {description}")
    @with_retry()
    def click_element(
        self,
        selector: Union[str, Locator],
        description: str = "",
        timeout: int = None,
    ) -> None:
        """Wait until the element is clickable, then click it."""
        timeout = timeout or self.default_timeout
        locator = self._get_locator(selector)

        logger.info(f"Clicking element: {description or selector}")
        locator.wait_for(state="visible", timeout=timeout)
        locator.click(timeout=timeout)
        logger.debug(f"Successfully clicked: {description or selector}")

    @allure.step("Type text: {description}")
    @with_retry()
    def type_text(
        self,
        selector: Union[str, Locator],
        text: str,
        description: str = "",
        timeout: int = None
    ) -> None:
        """
        Append text to an input, keystroke by keystroke.

        Existing content is kept, like typing into the field by hand.
        """
        timeout = timeout or self.default_timeout
        locator = self._get_locator(selector)

        logger.info(f"Typing into: {description or selector}")
        locator.wait_for(state="visible", timeout=timeout)
        locator.press_sequentially(text, timeout=timeout)

    @allure.step("Clear input: {description}")
    @with_retry()
    def clear_input(
        self,
        selector: Union[str, Locator],
        description: str = "",
        timeout: int = None
    ) -> None:
        """
        Clear an input so that the page's own JS sees it empty.

        Select-all + delete through the keyboard, reset the value in JS,
        fire input/change events, clear() as a backstop, then poll until
        the value reads back empty.
        """
        timeout = timeout or self.default_timeout
        locator = self._get_locator(selector)

        locator.wait_for(state="visible", timeout=timeout)
        locator.click(timeout=timeout)
        locator.press("ControlOrMeta+a")
        locator.press("Backspace")
        locator.evaluate(HARD_CLEAR_SCRIPT)
        locator.clear(timeout=timeout)

        self.page.wait_for_function(
            "el => !el.value",
            arg=locator.element_handle(timeout=timeout),
            timeout=timeout,
        )
        logger.debug(f"Cleared: {description or selector}")

    @allure.step("Get text: {description}")
    def get_text(
        self,
        selector: Union[str, Locator],
        description: str = "",
        timeout: int = None
    ) -> str:
        """Visible text of the element, stripped."""
        timeout = timeout or self.default_timeout
        locator = self._get_locator(selector)

        locator.wait_for(state="visible", timeout=timeout)
        text = (locator.inner_text(timeout=timeout) or "").strip()

        logger.debug(f"Got text from {description or selector}: '{text}'")
        return text

    def get_value(
        self,
        selector: Union[str, Locator],
        timeout: int = None
    ) -> str:
        """Current value of an input."""
        timeout = timeout or self.default_timeout
        return self._get_locator(selector).input_value(timeout=timeout)

    def wait_for_element(
        self,
        selector: Union[str, Locator],
        description: str = "",
        state: str = "visible",
        timeout: int = None
    ) -> Locator:
        """
        Wait for an element to reach a specific state.

        Args:
            selector: CSS selector or Locator object
            description: Human-readable description for reporting
            state: Expected state - "visible", "hidden", "attached", "detached"
            timeout: Wait timeout in milliseconds
        """
        timeout = timeout or self.default_timeout
        locator = self._get_locator(selector)

        logger.debug(f"Waiting for {description or selector} to be {state}")
        locator.wait_for(state=state, timeout=timeout)
        return locator

    def is_visible(
        self,
        selector: Union[str, Locator],
        timeout: int = 5000
    ) -> bool:
        """True if the element becomes visible within ``timeout`` ms."""
        try:
            self._get_locator(selector).wait_for(state="visible", timeout=timeout)
            return True
        except Exception:
            return False

    def _get_locator(self, selector: Union[str, Locator]) -> Locator:
        """Convert selector to Locator if needed."""
        if isinstance(selector, Locator):
            return selector
        return self.page.locator(selector).first
