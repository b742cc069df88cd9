"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for browser lifecycle and page objects.

Lifecycle per test:
    1. start a browser session for this worker (no-op if already running)
    2. clear cookies, then run the page initialization gate on the login page
    3. hand page objects to the test
    4. stop the worker's session

A session-scoped finalizer sweeps any session a worker failed to stop.

================================================================================
"""

from typing import Generator

import allure
import pytest
from loguru import logger

from harness_tools.report_tools.allure_utils import (
    attach_failure_screenshot,
    attach_session_info,
)
from testsuites.ui_testing.framework.driver_factory import BrowserSession
from testsuites.ui_testing.framework.driver_manager import DriverManager, current_worker_id
from testsuites.ui_testing.framework.page_init import ElementReadyProbe, PageInitializer
from testsuites.ui_testing.framework.settings import HarnessSettings
from testsuites.ui_testing.pages.login_page import LoginPage
from testsuites.ui_testing.pages.product_page import ProductPage


# ================================================================================
# Session Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def harness_settings() -> HarnessSettings:
    """Settings from config.yaml, env vars and command line options."""
    settings = HarnessSettings.from_config()
    logger.info(
        f"UI harness: browser={settings.browser.value} headless={settings.headless} "
        f"base_url={settings.base_url}"
    )
    return settings


@pytest.fixture(scope="session")
def driver_manager(harness_settings: HarnessSettings) -> Generator[DriverManager, None, None]:
    """
    One registry per test process.

    The finalizer stops whatever a worker left running.
    """
    manager = DriverManager(headless=harness_settings.headless)
    yield manager
    manager.stop_all()


@pytest.fixture
def worker_key() -> str:
    """Registry key for the worker running this test."""
    return current_worker_id()


@pytest.fixture
def browser_session(
    driver_manager: DriverManager,
    harness_settings: HarnessSettings,
    worker_key: str,
) -> Generator[BrowserSession, None, None]:
    """
    Started, initialized browser session on the login page.
    """
    logger.info("==== Test initialization started ====")
    session = driver_manager.start(harness_settings.browser, worker_key)
    try:
        attach_session_info(session)
        session.clear_state()
        PageInitializer(session, harness_settings.retry_policy).run(
            harness_settings.base_url,
            ElementReadyProbe(harness_settings.ready_selector),
        )
        logger.info("Login page successfully loaded and ready for interaction")
        yield session
    finally:
        logger.info("==== Test teardown started ====")
        driver_manager.stop(worker_key)
        logger.info("==== Test finished ====")


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(browser_session: BrowserSession, harness_settings: HarnessSettings) -> LoginPage:
    return LoginPage(
        browser_session,
        base_url=harness_settings.base_url,
        timeout=harness_settings.default_timeout,
    )


@pytest.fixture
def product_page(browser_session: BrowserSession, harness_settings: HarnessSettings) -> ProductPage:
    return ProductPage(
        browser_session,
        base_url=harness_settings.base_url,
        timeout=harness_settings.default_timeout,
    )


@pytest.fixture
def test_data():
    """Credentials published on the SauceDemo login page."""
    return {
        "password": "secret_sauce",
        "accepted_users": [
            "standard_user",
            "problem_user",
            "performance_glitch_user",
            "error_user",
            "visual_user",
        ],
        "locked_out_user": "locked_out_user",
    }


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Attach a full-page screenshot to the Allure report when a UI test fails.

    Runs before fixture teardown, so the session is still alive.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        session = getattr(item, "funcargs", {}).get("browser_session")
        if session is not None:
            with allure.step("Capture failure screenshot"):
                attach_failure_screenshot(session)
