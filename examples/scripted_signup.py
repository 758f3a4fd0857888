#!/usr/bin/env python
"""
Scripted Signup Example

Calls the browser tools directly, in a fixed order, without an LLM
controller. Useful to check selectors for a form before handing the
workflow to the agent.

Usage:
    python examples/scripted_signup.py https://ui.chaicode.com

Requirements:
    - Browser toolset installed: pip install -e .
    - Chromium installed: playwright install chromium
"""

import asyncio
import sys

from browser_toolset import BrowserSession, invoke_tool
from browser_toolset.config import configure_logging
from browser_toolset.console import print_error, print_result, print_tool_call
from browser_toolset.errors import ToolError

STEPS = [
    ("open_browser", {}),
    ("take_screenshot", {}),
    ("click_selector", {"selector": 'text="Sign Up"'}),
    ("fill_input", {"selector": "#firstName", "text": "Jane"}),
    ("fill_input", {"selector": "#lastName", "text": "Doe"}),
    ("fill_input", {"selector": 'input[type="email"]', "text": "jane@example.com"}),
    ("fill_input", {"selector": "#password", "text": "s3cret-pass"}),
    ("fill_input", {"selector": "#confirmPassword", "text": "s3cret-pass"}),
    ("take_screenshot", {}),
    ("click_selector", {"selector": 'button:has-text("Create Account")'}),
    ("take_screenshot", {}),
]


async def main(start_url: str) -> int:
    """Run the steps, stopping at the first failure."""
    async with BrowserSession() as session:
        steps = list(STEPS)
        steps.insert(1, ("open_url", {"url": start_url}))

        for name, arguments in steps:
            print_tool_call(name, arguments)
            try:
                result = await invoke_tool(session, name, arguments)
            except ToolError as e:
                print_error(e.message, error_type=e.code)
                return 1
            print_result(result.to_dict())

    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "https://ui.chaicode.com")))
