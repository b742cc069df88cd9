"""
================================================================================
Page Initialization
================================================================================

Precondition gate run before every test case: navigate to the application,
wait until the document (and jQuery, when present) is idle, then confirm the
key element is ready for interaction.

State machine:

    ATTEMPTING --probe ok--------------------------> SUCCEEDED
    ATTEMPTING --transient, attempts left--> cleanup, sleep, ATTEMPTING
    ATTEMPTING --transient, no attempts left-------> EXHAUSTED (PageInitializationError)
    ATTEMPTING --anything else---------------------> raised immediately

Which failures are transient is decided by FAILURE_POLICY, an ordered
(exception type -> failure class) table; unlisted exceptions are fatal.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Tuple, Type

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .driver_factory import BrowserSession
from .exceptions import (
    ElementNotFoundError,
    PageInitializationError,
    RenderingInvariantError,
    StaleElementError,
)


DOCUMENT_COMPLETE_SCRIPT = "() => document.readyState === 'complete'"

JQUERY_IDLE_SCRIPT = (
    "() => (typeof window.jQuery === 'undefined') ? true : (window.jQuery.active === 0)"
)

IN_VIEWPORT_SCRIPT = """
el => {
    const r = el.getBoundingClientRect();
    const w = window.innerWidth || document.documentElement.clientWidth;
    const h = window.innerHeight || document.documentElement.clientHeight;
    return r.bottom > 0 && r.right > 0 && r.top < h && r.left < w;
}
"""

# Playwright reports detached elements as plain errors; these markers
# identify the ones that mean "stale reference"
STALE_MARKERS: Tuple[str, ...] = (
    "not attached to the DOM",
    "Element is detached",
    "Execution context was destroyed",
    "Frame was detached",
)


class InitState(str, Enum):
    ATTEMPTING = "ATTEMPTING"
    SUCCEEDED = "SUCCEEDED"
    EXHAUSTED = "EXHAUSTED"


class FailureClass(str, Enum):
    TRANSIENT = "transient"
    FATAL = "fatal"


# Ordered: first isinstance() match wins
FAILURE_POLICY: Sequence[Tuple[Type[BaseException], FailureClass]] = (
    (RenderingInvariantError, FailureClass.FATAL),
    (PlaywrightTimeoutError, FailureClass.TRANSIENT),
    (ElementNotFoundError, FailureClass.TRANSIENT),
    (StaleElementError, FailureClass.TRANSIENT),
)


def normalize_error(error: BaseException) -> BaseException:
    """Map Playwright "detached" errors onto StaleElementError."""
    if isinstance(error, PlaywrightError) and not isinstance(error, PlaywrightTimeoutError):
        message = str(error)
        if any(marker in message for marker in STALE_MARKERS):
            stale = StaleElementError(message)
            stale.__cause__ = error
            return stale
    return error


def classify_failure(
    error: BaseException,
    policy: Sequence[Tuple[Type[BaseException], FailureClass]] = FAILURE_POLICY,
) -> FailureClass:
    for error_type, failure_class in policy:
        if isinstance(error, error_type):
            return failure_class
    return FailureClass.FATAL


@dataclass(frozen=True)
class RetryPolicy:
    """
    Attempt limits for page initialization.

    Attributes:
        max_attempts: Attempts before giving up
        attempt_timeout: Timeout in seconds for each wait inside an attempt
        retry_delay: Fixed pause in seconds between attempts
        jitter: Upper bound in seconds of a random extra pause (0 disables)
    """

    max_attempts: int = 3
    attempt_timeout: float = 20.0
    retry_delay: float = 0.5
    jitter: float = 0.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    @classmethod
    def from_config(cls, config: Any) -> "RetryPolicy":
        """Build from a ConfigLoader-like object (``get(key, default)``)."""
        defaults = cls()
        return cls(
            max_attempts=int(config.get("page_init.max_attempts", defaults.max_attempts)),
            attempt_timeout=float(config.get("page_init.attempt_timeout", defaults.attempt_timeout)),
            retry_delay=float(config.get("page_init.retry_delay", defaults.retry_delay)),
            jitter=float(config.get("page_init.jitter", defaults.jitter)),
        )

    def next_delay(self) -> float:
        if self.jitter > 0:
            return self.retry_delay + random.uniform(0, self.jitter)
        return self.retry_delay


@dataclass(frozen=True)
class PageInitResult:
    url: str
    state: InitState
    attempts: int
    cleanups: int


ReadinessProbe = Callable[[BrowserSession, float], None]


class ElementReadyProbe:
    """
    Readiness probe for one key element.

    Passes when the element is attached, visible, actionable (Playwright's
    trial click: stable, enabled, receiving events), inside the viewport,
    non-zero sized and enabled. Timeouts are transient; an element that is
    actionable but zero-sized, off-screen or disabled raises
    RenderingInvariantError.
    """

    def __init__(self, selector: str):
        self.selector = selector

    def __call__(self, session: BrowserSession, timeout: float) -> None:
        timeout_ms = timeout * 1000
        element = session.find_element(self.selector)

        try:
            element.wait_for(state="attached", timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise ElementNotFoundError(self.selector) from e
        logger.debug(f"{self.selector} present in DOM")

        element.wait_for(state="visible", timeout=timeout_ms)
        logger.debug(f"{self.selector} visible")

        element.click(trial=True, timeout=timeout_ms)

        box = element.bounding_box()
        if not box or box["width"] == 0 or box["height"] == 0:
            raise RenderingInvariantError(
                f"{self.selector} has zero dimensions - not properly rendered"
            )
        if not element.evaluate(IN_VIEWPORT_SCRIPT):
            raise RenderingInvariantError(f"{self.selector} is outside the viewport")
        if not element.is_enabled():
            raise RenderingInvariantError(f"{self.selector} is not enabled")

        logger.debug(
            f"{self.selector} interactable ({box['width']}x{box['height']}, enabled=True)"
        )

    def __repr__(self) -> str:
        return f"ElementReadyProbe({self.selector!r})"


class PageInitializer:
    """
    Runs the page initialization state machine against one session.

    Usage:
        initializer = PageInitializer(session, RetryPolicy())
        initializer.run("https://www.saucedemo.com/", ElementReadyProbe("#user-name"))
    """

    def __init__(
        self,
        session: BrowserSession,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    @allure.step("Initialize page: {url}")
    def run(self, url: str, probe: ReadinessProbe) -> PageInitResult:
        """
        Bring ``url`` to a ready state.

        Raises:
            PageInitializationError: Every attempt failed transiently
            RenderingInvariantError: Element is structurally unusable
        """
        max_attempts = self.policy.max_attempts
        state = InitState.ATTEMPTING
        attempt = 0
        cleanups = 0
        last_error: Optional[BaseException] = None

        while state is InitState.ATTEMPTING:
            attempt += 1
            logger.info(f"Page load attempt {attempt}/{max_attempts}")
            try:
                self._attempt(url, probe)
            except Exception as raw:
                error = normalize_error(raw)
                if classify_failure(error) is FailureClass.FATAL:
                    logger.error(f"Attempt {attempt}/{max_attempts} failed with non-retryable error: {raw}")
                    raise

                last_error = error
                logger.warning(f"Attempt {attempt}/{max_attempts} failed: {error}")
                if attempt >= max_attempts:
                    state = InitState.EXHAUSTED
                else:
                    logger.info("Retrying page load after cleanup...")
                    self._cleanup()
                    cleanups += 1
            else:
                state = InitState.SUCCEEDED

        if state is InitState.EXHAUSTED:
            error = PageInitializationError(url, attempt, last_error)
            logger.error(str(error))
            raise error from last_error

        logger.info(f"Page successfully loaded on attempt {attempt}")
        return PageInitResult(url=url, state=state, attempts=attempt, cleanups=cleanups)

    def _attempt(self, url: str, probe: ReadinessProbe) -> None:
        timeout = self.policy.attempt_timeout

        self.session.get(url, timeout=timeout)
        self.session.wait_for_condition(DOCUMENT_COMPLETE_SCRIPT, timeout=timeout)
        logger.debug("DOM is complete")

        self.session.wait_for_condition(JQUERY_IDLE_SCRIPT, timeout=timeout)
        logger.debug("jQuery is idle (if present)")

        probe(self.session, timeout)

    def _cleanup(self) -> None:
        # Best effort: the page may still be navigating after a timeout
        try:
            self.session.clear_state()
        except PlaywrightError as e:
            logger.warning(f"State cleanup between attempts failed: {e}")
        self._sleep(self.policy.next_delay())


def initialize_page(
    session: BrowserSession,
    url: str,
    selector: str,
    policy: Optional[RetryPolicy] = None,
) -> PageInitResult:
    """Convenience wrapper: run PageInitializer with an ElementReadyProbe."""
    return PageInitializer(session, policy).run(url, ElementReadyProbe(selector))


__all__ = [
    "InitState",
    "FailureClass",
    "FAILURE_POLICY",
    "RetryPolicy",
    "PageInitResult",
    "ReadinessProbe",
    "ElementReadyProbe",
    "PageInitializer",
    "classify_failure",
    "normalize_error",
    "initialize_page",
]
