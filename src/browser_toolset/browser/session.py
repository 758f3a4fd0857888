"""
Browser Session

Owns the single Playwright browser and page used by every tool.
The session is created lazily by ``open_browser`` and passed explicitly to
each primitive; there is no module-level browser state.
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import AsyncIterator, Optional

from dotenv import load_dotenv
from playwright.async_api import (
    Browser,
    Error as PlaywrightError,
    Page,
    Playwright,
    async_playwright,
)

from ..config import env_flag, env_int
from ..errors import NoSessionError, SessionBusyError, SessionError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


@dataclass
class BrowserConfig:
    """
    Configuration for the browser session.

    Only the launch mode and channel are read from the environment; the
    timeouts are per-deployment defaults that callers may override.
    """

    # Visible browser by default, like a human watching the workflow
    headless: bool = False

    # Installed browser build ("chrome", "msedge", ...); None = bundled Chromium
    channel: Optional[str] = "chrome"

    # Slow motion delay in ms (useful for debugging)
    slow_mo: int = 0

    viewport_width: int = 1280
    viewport_height: int = 720

    navigation_timeout_ms: int = 30000
    fill_timeout_ms: int = 10000

    # How long after a click returns to wait for a navigation to start
    navigation_grace_ms: int = 1000

    # Upper bound for a written value to show up in the field
    fill_verify_timeout_ms: int = 1000

    screenshot_dir: Path = field(default_factory=lambda: Path("."))

    @classmethod
    def from_env(cls) -> "BrowserConfig":
        """
        Create BrowserConfig from environment variables.

        Environment variables:
            BROWSER_HEADLESS: true/false (default: false)
            BROWSER_CHANNEL: browser channel (default: chrome, empty = bundled)
            BROWSER_SLOW_MO: int in ms (default: 0)
        """
        channel = os.getenv("BROWSER_CHANNEL", "chrome").strip() or None

        return cls(
            headless=env_flag("BROWSER_HEADLESS", False),
            channel=channel,
            slow_mo=env_int("BROWSER_SLOW_MO", 0),
        )


class BrowserSession:
    """
    The one browser and page of an automation run.

    Invariant: ``page`` is set if and only if ``browser`` is set.

    Usage:
        >>> async with BrowserSession(config) as session:
        ...     await session.ensure()
        ...     await session.page.goto("https://example.com")
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        """
        Initialize the session without launching anything.

        Args:
            config: Browser configuration (uses env if None)
        """
        self.config = config or BrowserConfig.from_env()

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._page: Optional[Page] = None
        self._lock = asyncio.Lock()
        self._last_screenshot_ms = 0

    @property
    def is_open(self) -> bool:
        """Check if the browser is running."""
        return self._browser is not None

    @property
    def page(self) -> Optional[Page]:
        return self._page

    @property
    def busy(self) -> bool:
        """True while a tool call holds the session, including a launch in progress."""
        return self._lock.locked()

    def require_page(self, tool: Optional[str] = None) -> Page:
        """
        Return the open page or fail with NoSessionError.

        Args:
            tool: Name of the calling tool, for the error context
        """
        if self._page is None:
            raise NoSessionError(tool)
        return self._page

    async def ensure(self) -> "BrowserSession":
        """
        Launch the browser and open its page unless already running.

        Returns:
            This session

        Raises:
            SessionError: If Playwright or the browser fails to start
        """
        if self._browser is not None:
            return self

        logger.info(
            "Launching chromium (headless=%s, channel=%s)",
            self.config.headless,
            self.config.channel,
        )

        launch_options = {
            "headless": self.config.headless,
            "slow_mo": self.config.slow_mo,
        }
        if self.config.channel:
            launch_options["channel"] = self.config.channel

        try:
            self._playwright = await async_playwright().start()
            browser = await self._playwright.chromium.launch(**launch_options)
            page = await browser.new_page(
                viewport={
                    "width": self.config.viewport_width,
                    "height": self.config.viewport_height,
                },
            )
        except PlaywrightError as e:
            await self._stop_playwright()
            raise SessionError(
                f"Failed to launch browser: {e.message}",
                headless=self.config.headless,
                channel=self.config.channel,
            ) from e

        page.set_default_navigation_timeout(self.config.navigation_timeout_ms)
        self._browser = browser
        self._page = page
        return self

    async def close(self) -> None:
        """
        Close the browser and stop Playwright.

        Safe to call when nothing is open. Handles are cleared even if the
        engine fails to shut down cleanly.

        Raises:
            SessionError: If the browser could not be closed
        """
        browser = self._browser
        self._browser = None
        self._page = None

        try:
            if browser is not None:
                logger.info("Closing browser")
                await browser.close()
        except PlaywrightError as e:
            raise SessionError(f"Failed to close browser: {e.message}") from e
        finally:
            await self._stop_playwright()

    async def _stop_playwright(self) -> None:
        if self._playwright is None:
            return
        playwright = self._playwright
        self._playwright = None
        try:
            await playwright.stop()
        except PlaywrightError as e:
            logger.warning("Playwright did not stop cleanly: %s", e.message)

    @asynccontextmanager
    async def acquire(self, tool: Optional[str] = None) -> AsyncIterator["BrowserSession"]:
        """
        Hold the session exclusively for one tool call.

        Raises:
            SessionBusyError: If another call is in progress
        """
        if self.busy:
            raise SessionBusyError(tool)
        async with self._lock:
            yield self

    def next_screenshot_stamp(self, now_ms: int) -> int:
        """Return a millisecond token strictly greater than any handed out before."""
        stamp = max(now_ms, self._last_screenshot_ms + 1)
        self._last_screenshot_ms = stamp
        return stamp

    async def __aenter__(self) -> "BrowserSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def create_session(config: Optional[BrowserConfig] = None) -> BrowserSession:
    """
    Factory function to create a browser session.

    The browser is not launched until ``ensure()`` (the open_browser tool).

    Args:
        config: Browser configuration (uses env if None)

    Returns:
        BrowserSession instance (not yet launched)
    """
    return BrowserSession(config)
