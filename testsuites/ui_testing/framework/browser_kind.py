"""
Browser kind resolution.

Normalizes whatever was configured (``BROWSER`` env var, config.yaml,
``--browser`` option) into a supported kind. Chromium is the primary
kind and the fallback for anything unrecognized.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict


class BrowserKind(str, Enum):
    """Supported browser kinds."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"

    @classmethod
    def primary(cls) -> "BrowserKind":
        return cls.CHROMIUM

    @classmethod
    def from_value(cls, value: Any) -> "BrowserKind":
        """
        Resolve a configured browser name.

        None, empty and unknown names resolve to the primary kind.

        Examples:
            >>> BrowserKind.from_value(" Firefox ")
            <BrowserKind.FIREFOX: 'firefox'>
            >>> BrowserKind.from_value("safari")
            <BrowserKind.CHROMIUM: 'chromium'>
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.primary()
        return _ALIASES.get(str(value).strip().lower(), cls.primary())


# Accepted spellings per kind
_ALIASES: Dict[str, BrowserKind] = {
    "chromium": BrowserKind.CHROMIUM,
    "chrome": BrowserKind.CHROMIUM,
    "primary": BrowserKind.CHROMIUM,
    "firefox": BrowserKind.FIREFOX,
    "ff": BrowserKind.FIREFOX,
    "secondary": BrowserKind.FIREFOX,
}


__all__ = ["BrowserKind"]
