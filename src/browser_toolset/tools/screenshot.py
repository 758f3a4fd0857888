"""
Screenshot Tools

Full-page capture to a uniquely named PNG in the screenshot directory.
"""

import time
from pathlib import Path

from playwright.async_api import Error as PlaywrightError

from ..browser.session import BrowserSession
from ..errors import ScreenshotCaptureError, ScreenshotWriteError
from .base import NoArgs, ToolResult, tool


def screenshot_path(session: BrowserSession) -> Path:
    """
    Pick the next unused ``screenshot-<ms>.png`` path.

    The millisecond token never repeats within a session and skips files
    already on disk, so artifacts are never overwritten.
    """
    directory = Path(session.config.screenshot_dir)
    while True:
        stamp = session.next_screenshot_stamp(int(time.time() * 1000))
        path = directory / f"screenshot-{stamp}.png"
        if not path.exists():
            return path


def write_artifact(path: Path, image: bytes) -> None:
    """Write the image to a file that must not exist yet."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "xb") as f:
            f.write(image)
    except OSError as e:
        raise ScreenshotWriteError(str(path), e.strerror or str(e)) from e


@tool(
    name="take_screenshot",
    description="Take a full-page screenshot of the current page and save it as a PNG file.",
)
async def take_screenshot(session: BrowserSession, args: NoArgs) -> ToolResult:
    """
    Capture the whole scrollable page.

    Returns:
        ToolResult with the artifact name (savedAs) and its absolute path

    Raises:
        ScreenshotCaptureError: If the engine cannot render the page
        ScreenshotWriteError: If the image cannot be stored
    """
    page = session.require_page("take_screenshot")

    try:
        image = await page.screenshot(full_page=True)
    except PlaywrightError as e:
        raise ScreenshotCaptureError(page.url, e.message) from e

    path = screenshot_path(session)
    write_artifact(path, image)

    return ToolResult(
        data={
            "savedAs": path.name,
            "path": str(path.absolute()),
        },
        metadata={"url": page.url, "bytes": len(image)},
    )
