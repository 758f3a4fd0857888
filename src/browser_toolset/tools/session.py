"""
Session Tools

Open and close the single browser session.
"""

from ..browser.session import BrowserSession
from .base import NoArgs, ToolResult, tool


@tool(
    name="open_browser",
    description=(
        "Launch the browser and open a blank page. Call this once before any "
        "other tool; calling it again reuses the running browser."
    ),
    requires_session=False,
)
async def open_browser(session: BrowserSession, args: NoArgs) -> ToolResult:
    already_open = session.is_open
    await session.ensure()

    return ToolResult(
        data={
            "message": (
                "Browser already running" if already_open else "Browser launched successfully"
            ),
            "already_open": already_open,
            "headless": session.config.headless,
            "channel": session.config.channel,
        },
    )


@tool(
    name="close_browser",
    description="Close the browser. Safe to call when no browser is open.",
    requires_session=False,
)
async def close_browser(session: BrowserSession, args: NoArgs) -> ToolResult:
    was_open = session.is_open
    await session.close()
    return ToolResult(data={"closed": was_open})
