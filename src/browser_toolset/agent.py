"""
Automation Agent

Connects the browser toolset to a Claude Agent SDK client. The model decides
which tool to call next; this module only wires the tools in, streams the
conversation and guarantees the browser is closed afterwards.
"""

import logging
import os
from pathlib import Path
from typing import Any, AsyncIterator, Optional

from claude_agent_sdk import ClaudeAgentOptions, ClaudeSDKClient

from .browser.session import BrowserConfig, BrowserSession
from .errors import SessionError
from .sdk_adapter import SERVER_NAME, create_browser_server, get_allowed_tools

logger = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 40

SYSTEM_PROMPT = """You are a website automation agent. You drive one browser \
through a UI workflow using these tools (via mcp__browser__*):

- open_browser: launch the browser; always call it first
- open_url: open a page and report its final URL and title
- click_selector: click an element by CSS or text selector (e.g. text="Sign Up")
- fill_input: clear a field, type a value and confirm the field holds it
- take_screenshot: save a full-page screenshot
- close_browser: close the browser when the workflow is done

Rules:
- Call one tool at a time and wait for its result before the next call
- Prefer stable selectors: ids, names, input types, visible button text
- A failed tool result names the error; element_not_found means the selector \
matched nothing visible, so inspect the page and try a better selector
- Never claim a field is filled unless fill_input succeeded for it
- Take a screenshot after important steps such as submitting a form
"""


class AutomationAgent:
    """
    Runs automation tasks through the Claude Agent SDK with the browser tools.

    Owns the BrowserSession unless one is passed in, and closes it on exit.
    """

    def __init__(
        self,
        session: Optional[BrowserSession] = None,
        browser_config: Optional[BrowserConfig] = None,
        working_dir: Optional[Path | str] = None,
        max_turns: int = DEFAULT_MAX_TURNS,
        model: Optional[str] = None,
    ):
        """
        Initialize the agent.

        Args:
            session: Existing BrowserSession (creates one if None)
            browser_config: Browser configuration (uses env if None)
            working_dir: Working directory for the SDK client
            max_turns: Maximum agent iterations
            model: Model alias or id (default: AGENT_MODEL env or "sonnet")
        """
        if session is not None:
            self.session = session
            self._owns_session = False
        else:
            self.session = BrowserSession(browser_config)
            self._owns_session = True

        self.working_dir = Path(working_dir) if working_dir else Path.cwd()
        self.max_turns = max_turns
        self.model = model or os.getenv("AGENT_MODEL", "sonnet")
        self._options: Optional[ClaudeAgentOptions] = None

    def _create_sdk_options(self) -> ClaudeAgentOptions:
        """Create Claude Agent SDK options with the browser MCP server."""
        return ClaudeAgentOptions(
            mcp_servers={SERVER_NAME: create_browser_server(self.session)},
            allowed_tools=get_allowed_tools(),
            model=self.model,
            max_turns=self.max_turns,
            cwd=self.working_dir,
            system_prompt=SYSTEM_PROMPT,
        )

    @property
    def options(self) -> ClaudeAgentOptions:
        if self._options is None:
            self._options = self._create_sdk_options()
        return self._options

    async def run_stream(self, task: str) -> AsyncIterator[Any]:
        """
        Run a task and stream SDK messages as they arrive.

        Args:
            task: Natural language description of the workflow

        Yields:
            SDK messages
        """
        async with ClaudeSDKClient(options=self.options) as client:
            await client.query(task)
            async for message in client.receive_response():
                yield message

    async def run(self, task: str) -> list[Any]:
        """Run a task and collect every message."""
        return [message async for message in self.run_stream(task)]

    async def close(self) -> None:
        """Close the browser if this agent owns it."""
        if not self._owns_session:
            return
        try:
            await self.session.close()
        except SessionError as e:
            logger.error("Browser teardown failed: %s", e.message)

    async def __aenter__(self) -> "AutomationAgent":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def create_agent(
    session: Optional[BrowserSession] = None,
    browser_config: Optional[BrowserConfig] = None,
    working_dir: Optional[Path | str] = None,
    max_turns: int = DEFAULT_MAX_TURNS,
    model: Optional[str] = None,
) -> AutomationAgent:
    """
    Factory function to create an AutomationAgent.

    Example:
        >>> async with create_agent() as agent:
        ...     async for msg in agent.run_stream("Sign up on https://example.com"):
        ...         print(msg)
    """
    return AutomationAgent(
        session=session,
        browser_config=browser_config,
        working_dir=working_dir,
        max_turns=max_turns,
        model=model,
    )
