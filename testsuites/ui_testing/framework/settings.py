"""
Harness settings assembled from config.yaml and the environment.

Recognized keys (env override in brackets):
    browser [BROWSER]                 chromium | firefox
    headless [HEADLESS]               bool
    ui.base_url [UI_BASE_URL]
    ui.default_timeout [UI_DEFAULT_TIMEOUT]
    page_init.* [PAGE_INIT_*]         see RetryPolicy
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from harness_tools.common import ConfigLoader

from .browser_kind import BrowserKind
from .page_init import RetryPolicy


DEFAULT_BASE_URL = "https://www.saucedemo.com/"
DEFAULT_READY_SELECTOR = "#user-name, [data-test='username']"


@dataclass(frozen=True)
class HarnessSettings:
    browser: BrowserKind = BrowserKind.CHROMIUM
    headless: bool = False
    base_url: str = DEFAULT_BASE_URL
    default_timeout: float = 20.0
    ready_selector: str = DEFAULT_READY_SELECTOR
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)

    @classmethod
    def from_config(cls, config: Optional[Any] = None) -> "HarnessSettings":
        config = config or ConfigLoader()
        return cls(
            browser=BrowserKind.from_value(config.get("browser", BrowserKind.primary().value)),
            headless=config.get_bool("headless", False),
            base_url=config.get("ui.base_url", DEFAULT_BASE_URL),
            default_timeout=float(config.get("ui.default_timeout", 20.0)),
            ready_selector=config.get("page_init.ready_selector", DEFAULT_READY_SELECTOR),
            retry_policy=RetryPolicy.from_config(config),
        )


__all__ = [
    "HarnessSettings",
    "DEFAULT_BASE_URL",
    "DEFAULT_READY_SELECTOR",
]
