"""
Element Locator

Resolves a selector to the first visible matching element within a bounded
wait and scrolls it into view before any interaction.
"""

import logging
import time
from dataclasses import dataclass

from playwright.async_api import (
    Error as PlaywrightError,
    Locator,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)

from ..errors import ElementNotFoundError

logger = logging.getLogger(__name__)

# Floor for the post-wait steps so a nearly expired budget still gets a try
MIN_STEP_TIMEOUT_MS = 100


@dataclass
class LocatedElement:
    """A visible element ready for interaction."""

    locator: Locator
    selector: str
    timeout_ms: int
    elapsed_ms: int

    @property
    def remaining_ms(self) -> int:
        """Unused part of the locate budget, never below MIN_STEP_TIMEOUT_MS."""
        return max(self.timeout_ms - self.elapsed_ms, MIN_STEP_TIMEOUT_MS)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


async def locate(page: Page, selector: str, timeout_ms: int) -> LocatedElement:
    """
    Wait for ``selector`` to match a visible element and return the first match.

    The selector is passed to Playwright untouched; a selector the engine
    cannot parse is reported the same way as one that never matches.

    Args:
        page: Playwright Page instance
        selector: CSS or text selector, used verbatim
        timeout_ms: Maximum wait in milliseconds

    Returns:
        LocatedElement wrapping the first match, scrolled into view

    Raises:
        ElementNotFoundError: If nothing visible matches within the timeout
    """
    start = time.monotonic()

    try:
        await page.wait_for_selector(selector, state="visible", timeout=timeout_ms)
    except PlaywrightTimeoutError as e:
        raise ElementNotFoundError(selector, timeout_ms, _elapsed_ms(start)) from e
    except PlaywrightError as e:
        raise ElementNotFoundError(
            selector, timeout_ms, _elapsed_ms(start), reason=e.message
        ) from e

    element = LocatedElement(
        locator=page.locator(selector).first,
        selector=selector,
        timeout_ms=timeout_ms,
        elapsed_ms=_elapsed_ms(start),
    )

    try:
        await element.locator.scroll_into_view_if_needed(timeout=element.remaining_ms)
    except PlaywrightError as e:
        # Detached or hidden again between the wait and the scroll
        raise ElementNotFoundError(
            selector, timeout_ms, _elapsed_ms(start), reason=e.message
        ) from e

    element.elapsed_ms = _elapsed_ms(start)
    logger.debug("Located %r in %dms", selector, element.elapsed_ms)
    return element
