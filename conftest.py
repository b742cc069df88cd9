"""
Repository-level pytest configuration.

Why this exists:
  - Register the harness command line options (browser, headless, UI opt-in)
  - Initialize Loguru once per test process
  - Keep UI tests (real browser + network) opt-in so the unit suite runs anywhere
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from harness_tools.common import init_logger


def pytest_addoption(parser):
    group = parser.getgroup("harness", "SauceDemo UI harness")
    group.addoption(
        "--run-ui",
        action="store_true",
        default=False,
        help="Run browser tests (marked 'ui'); skipped by default",
    )
    group.addoption(
        "--browser-kind",
        action="store",
        default=None,
        help="Browser for UI tests: chromium (default) or firefox. Overrides BROWSER.",
    )
    group.addoption(
        "--headless",
        action="store_true",
        default=None,
        help="Run the browser headless. Overrides HEADLESS.",
    )


def pytest_configure(config):
    # Command line wins over config.yaml; ConfigLoader reads these env vars
    if config.getoption("--browser-kind"):
        os.environ["BROWSER"] = config.getoption("--browser-kind")
    if config.getoption("--headless"):
        os.environ["HEADLESS"] = "true"
    init_logger()


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-ui") or os.getenv("RUN_UI_TESTS", "").lower() in ("1", "true", "yes"):
        return
    skip_ui = pytest.mark.skip(reason="UI test: pass --run-ui (or RUN_UI_TESTS=1) to run")
    for item in items:
        if "ui" in item.keywords:
            item.add_marker(skip_ui)


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
