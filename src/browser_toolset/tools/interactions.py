"""
Browser Interaction Tools

Click and fill primitives built on the element locator:
- click_selector: click, then settle any navigation the click started
- fill_input: clear, write, and confirm the field reflects the value
"""

import asyncio
import logging

from playwright.async_api import (
    Error as PlaywrightError,
    Frame,
    Page,
    Request,
    expect,
)
from pydantic import Field

from ..browser.locator import LocatedElement, locate
from ..browser.session import BrowserSession
from ..errors import InteractionError, NavigationError, ValidationError
from .base import ToolArgs, ToolResult, tool

logger = logging.getLogger(__name__)

DEFAULT_CLICK_TIMEOUT_MS = 20000


class ClickArgs(ToolArgs):
    selector: str = Field(
        min_length=1,
        description="CSS or text selector, e.g. '#submit' or 'text=\"Sign Up\"'",
    )
    timeout_ms: int = Field(
        default=DEFAULT_CLICK_TIMEOUT_MS,
        alias="timeoutMs",
        gt=0,
        description="How long to wait for the element to become visible, in ms",
    )


class FillArgs(ToolArgs):
    selector: str = Field(
        min_length=1,
        description="CSS or text selector of the input field",
    )
    text: str = Field(description="Exact value the field must end up holding")


async def _click(element: LocatedElement) -> None:
    try:
        await element.locator.click(timeout=element.remaining_ms)
    except PlaywrightError as e:
        raise InteractionError(element.selector, "click", e.message) from e


async def _click_and_settle(
    page: Page,
    element: LocatedElement,
    grace_ms: int,
    navigation_timeout_ms: int,
) -> bool:
    """
    Click, then report whether the click navigated the main frame.

    Listeners go up before the click so nothing the click triggers is missed.
    The grace period starts once the click has returned. A navigation counts
    as started when the main frame issues its document request, or commits
    (same-document navigations send no request). A started navigation is
    only reported once the new document reaches DOM-content-loaded.

    Returns:
        True if the click navigated the page
    """
    loop = asyncio.get_running_loop()
    requested: asyncio.Future = loop.create_future()
    committed: asyncio.Future = loop.create_future()

    def on_request(request: Request) -> None:
        if (
            not requested.done()
            and request.is_navigation_request()
            and request.frame == page.main_frame
        ):
            requested.set_result(request.url)

    def on_frame_navigated(frame: Frame) -> None:
        if not committed.done() and frame == page.main_frame:
            committed.set_result(True)

    page.on("request", on_request)
    page.on("framenavigated", on_frame_navigated)
    try:
        await _click(element)

        started, _ = await asyncio.wait(
            {requested, committed},
            timeout=grace_ms / 1000,
            return_when=asyncio.FIRST_COMPLETED,
        )
        if not started:
            return False

        target = requested.result() if requested.done() else page.url
        try:
            await asyncio.wait_for(committed, timeout=navigation_timeout_ms / 1000)
        except asyncio.TimeoutError as e:
            raise NavigationError(
                target, f"no document committed within {navigation_timeout_ms}ms"
            ) from e
    finally:
        page.remove_listener("request", on_request)
        page.remove_listener("framenavigated", on_frame_navigated)
        for future in (requested, committed):
            future.cancel()

    try:
        await page.wait_for_load_state("domcontentloaded", timeout=navigation_timeout_ms)
    except PlaywrightError as e:
        raise NavigationError(page.url, e.message) from e
    return True


@tool(
    name="click_selector",
    description=(
        "Click an element using a CSS or text selector. Waits for the element "
        "to be visible, scrolls it into view, and waits for any page load the "
        "click triggers."
    ),
    args_model=ClickArgs,
)
async def click_selector(session: BrowserSession, args: ClickArgs) -> ToolResult:
    """
    Click the first visible element matching a selector.

    Raises:
        ElementNotFoundError: Nothing visible matched within timeout_ms
        InteractionError: The engine rejected the click
        NavigationError: A navigation started but never loaded
    """
    page = session.require_page("click_selector")
    element = await locate(page, args.selector, args.timeout_ms)

    navigated = await _click_and_settle(
        page,
        element,
        grace_ms=session.config.navigation_grace_ms,
        navigation_timeout_ms=session.config.navigation_timeout_ms,
    )

    return ToolResult(
        data={
            "clicked": args.selector,
            "navigated": navigated,
            "url": page.url,
        },
        metadata={"locate_ms": element.elapsed_ms},
    )


async def _read_back(element: LocatedElement, expected: str, timeout_ms: int) -> str:
    """Wait for the field to show ``expected``, then return what it actually holds."""
    try:
        await expect(element.locator).to_have_value(expected, timeout=timeout_ms)
    except AssertionError:
        logger.debug("%r never showed the written value", element.selector)

    try:
        return await element.locator.input_value(timeout=timeout_ms)
    except PlaywrightError as e:
        raise InteractionError(element.selector, "read back", e.message) from e


@tool(
    name="fill_input",
    description=(
        "Fill an input field by selector. Clears the field first, writes the "
        "text, then reads the value back and fails unless it matches exactly."
    ),
    args_model=FillArgs,
)
async def fill_input(session: BrowserSession, args: FillArgs) -> ToolResult:
    """
    Clear a field, write text into it and confirm the DOM holds exactly that text.

    Raises:
        ElementNotFoundError: The field never became visible
        InteractionError: The field rejected the clear or the write
        ValidationError: The read-back value differs from ``text``
    """
    page = session.require_page("fill_input")
    element = await locate(page, args.selector, session.config.fill_timeout_ms)
    locator = element.locator

    try:
        # Select-all + delete empties controls where fill() alone would append
        await locator.click(click_count=3, timeout=element.remaining_ms)
        await page.keyboard.press("Backspace")
        await locator.fill(args.text, timeout=element.remaining_ms)
    except PlaywrightError as e:
        raise InteractionError(args.selector, "fill", e.message) from e

    actual = await _read_back(element, args.text, session.config.fill_verify_timeout_ms)
    if actual != args.text:
        raise ValidationError(args.selector, expected=args.text, actual=actual)

    return ToolResult(
        data={
            "filled": args.selector,
            "value": args.text,
            "actualValue": actual,
        },
    )
