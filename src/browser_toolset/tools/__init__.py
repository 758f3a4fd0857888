"""
Browser Toolset Tools

The operations exposed to the controller:
- Session (open_browser, close_browser)
- Navigation (open_url)
- Interactions (click_selector, fill_input)
- Screenshot (take_screenshot)

Importing this package registers every tool.
"""

from .session import open_browser, close_browser
from .navigation import open_url, normalize_url
from .interactions import click_selector, fill_input, DEFAULT_CLICK_TIMEOUT_MS
from .screenshot import take_screenshot
from .base import (
    ToolArgs,
    ToolInvocation,
    ToolResult,
    ToolSpec,
    tool,
    get_tool,
    get_all_tools,
    get_tool_schemas,
    invoke_tool,
    run_tool,
)

__all__ = [
    # Session
    "open_browser",
    "close_browser",
    # Navigation
    "open_url",
    "normalize_url",
    # Interactions
    "click_selector",
    "fill_input",
    "DEFAULT_CLICK_TIMEOUT_MS",
    # Screenshot
    "take_screenshot",
    # Base
    "ToolArgs",
    "ToolInvocation",
    "ToolResult",
    "ToolSpec",
    "tool",
    "get_tool",
    "get_all_tools",
    "get_tool_schemas",
    "invoke_tool",
    "run_tool",
]
