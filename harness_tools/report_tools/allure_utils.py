"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by fixtures, hooks and the page initializer.

Features:
- Text / JSON / PNG attachments
- Browser session diagnostics
- Failure screenshot capture that never masks the original failure

================================================================================
"""

import json
from typing import Any, Optional

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_png(png: bytes, name: str = "Screenshot"):
    """Attach a PNG image to Allure report."""
    allure.attach(
        png,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


def attach_session_info(session: Any, name: str = "Browser Session"):
    """
    Attach a short description of a browser session.

    Args:
        session: BrowserSession (anything exposing describe())
        name: Attachment name
    """
    attach_json(session.describe(), name=name)


def attach_failure_screenshot(session: Any, name: str = "failure_screenshot") -> Optional[bytes]:
    """
    Capture and attach a full-page screenshot for a failed test.

    A broken or already-closed browser must not replace the real test
    failure, so capture errors are logged and None is returned.
    """
    try:
        png = session.screenshot(full_page=True)
    except Exception as e:
        logger.warning(f"Failed to capture screenshot on failure: {e}")
        return None

    attach_png(png, name=name)
    return png


__all__ = [
    "attach_json",
    "attach_png",
    "attach_session_info",
    "attach_failure_screenshot",
]
