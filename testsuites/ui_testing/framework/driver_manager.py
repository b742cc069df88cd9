"""
================================================================================
Driver Manager
================================================================================

Browser session lifecycle per worker.

One DriverManager is created per test process and handed to every consumer
(pytest fixtures, behave context, page objects). It keeps at most one live
BrowserSession per worker key; the key is always passed in explicitly.

Guarantees:
    - start() is idempotent for a worker until stop() is called
    - get() never starts a session; it raises NotStartedError instead
    - stop() on a worker without a session is a no-op
    - stop() removes the registry entry even when quitting the browser fails

Usage:
    manager = DriverManager(headless=True)
    worker = current_worker_id()

    manager.start(BrowserKind.CHROMIUM, worker)
    session = manager.get(worker)
    session.get("https://www.saucedemo.com/")
    manager.stop(worker)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import threading
from typing import Dict, List, Optional

import allure
from loguru import logger

from .browser_kind import BrowserKind
from .driver_factory import BrowserSession, SessionFactory, create_session
from .exceptions import NotStartedError


def current_worker_id() -> str:
    """
    Build the worker key for the calling context.

    Combines the pytest-xdist worker name (``main`` outside xdist) with the
    current thread name, so threads inside one xdist worker stay separate.
    """
    xdist_worker = os.environ.get("PYTEST_XDIST_WORKER", "main")
    return f"{xdist_worker}:{threading.current_thread().name}"


class DriverManager:
    """
    Registry of browser sessions keyed by worker.

    Each worker only ever touches its own key, so the registry needs no
    lock around session creation or teardown.
    """

    def __init__(
        self,
        headless: bool = False,
        factory: Optional[SessionFactory] = None,
    ):
        """
        Args:
            headless: Headless flag passed to the factory for every session
            factory: Callable(kind, headless) -> BrowserSession
        """
        self.headless = headless
        self._factory: SessionFactory = factory or create_session
        self._sessions: Dict[str, BrowserSession] = {}

    @allure.step("Start browser session")
    def start(self, kind: BrowserKind, worker_id: str) -> BrowserSession:
        """
        Start a session for ``worker_id`` unless one is already running.

        Returns:
            The worker's session (existing or newly created)

        Raises:
            ProvisioningError: Factory could not launch the browser
        """
        existing = self._sessions.get(worker_id)
        if existing is not None:
            logger.debug(f"Session already running for {worker_id}, start() ignored")
            return existing

        kind = BrowserKind.from_value(kind)
        logger.info(f"Starting {kind.value} session for {worker_id} (headless={self.headless})")
        session = self._factory(kind, self.headless)
        self._sessions[worker_id] = session
        return session

    def get(self, worker_id: str) -> BrowserSession:
        """
        Return the worker's session.

        Raises:
            NotStartedError: start() was not called for this worker
        """
        session = self._sessions.get(worker_id)
        if session is None:
            raise NotStartedError(worker_id)
        return session

    @allure.step("Stop browser session")
    def stop(self, worker_id: str) -> None:
        """Quit the worker's browser, if any, and forget it."""
        session = self._sessions.get(worker_id)
        if session is None:
            return

        try:
            session.quit()
        finally:
            self._sessions.pop(worker_id, None)
        logger.info(f"Browser session closed for {worker_id}")

    def stop_all(self) -> None:
        """
        Stop every session still registered.

        Meant for end-of-run cleanup; any session found here was leaked by
        a worker that never called stop(). Teardown errors are logged so one
        broken browser does not keep the others alive.
        """
        leaked = self.active_workers()
        if leaked:
            logger.warning(f"Stopping {len(leaked)} leaked session(s): {leaked}")
        for worker_id in leaked:
            try:
                self.stop(worker_id)
            except Exception as e:
                logger.error(f"Failed to stop session for {worker_id}: {e}")

    def is_started(self, worker_id: str) -> bool:
        return worker_id in self._sessions

    def active_workers(self) -> List[str]:
        return list(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = [
    "DriverManager",
    "current_worker_id",
]
