"""
Navigation Tools

Directs the page to a URL and reports where it ended up.
"""

from playwright.async_api import Error as PlaywrightError
from pydantic import Field

from ..browser.session import BrowserSession
from ..errors import NavigationError
from .base import ToolArgs, ToolResult, tool


class OpenUrlArgs(ToolArgs):
    url: str = Field(
        min_length=1,
        description="The URL to open (e.g., 'https://example.com')",
    )


def normalize_url(url: str) -> str:
    """Prefix https:// when the URL carries no scheme at all."""
    url = url.strip()
    if "://" in url or url.startswith(("about:", "data:")):
        return url
    return f"https://{url}"


@tool(
    name="open_url",
    description=(
        "Open a webpage in the browser. Waits until the DOM content is loaded, "
        "not for every image or script, and returns the final URL and title."
    ),
    args_model=OpenUrlArgs,
)
async def open_url(session: BrowserSession, args: OpenUrlArgs) -> ToolResult:
    """
    Navigate to a URL.

    Args:
        session: Open browser session
        args: Validated arguments

    Returns:
        ToolResult with the final URL, title and HTTP status

    Raises:
        NavigationError: If the page does not reach DOM-content-loaded
    """
    page = session.require_page("open_url")
    url = normalize_url(args.url)
    timeout = session.config.navigation_timeout_ms

    try:
        response = await page.goto(url, wait_until="domcontentloaded", timeout=timeout)
        title = await page.title()
    except PlaywrightError as e:
        raise NavigationError(url, e.message) from e

    return ToolResult(
        data={
            "url": page.url,
            "title": title,
            # None for about:blank, file:// and same-document navigations
            "status": response.status if response else None,
        },
        metadata={"requested_url": url},
    )
