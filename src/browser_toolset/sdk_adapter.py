"""
SDK Adapter Layer

Exposes the browser toolset to the Claude Agent SDK:
- invocation_to_sdk_format(): Convert a ToolInvocation to SDK response format
- adapt_tool_for_sdk(): Wrap a registered tool as an SDK tool
- create_browser_server(): Create an in-process MCP server with every tool
"""

import json
from typing import Any, Callable

from claude_agent_sdk import tool as sdk_tool, create_sdk_mcp_server

from browser_toolset.browser.session import BrowserSession
from browser_toolset.tools import get_all_tools, run_tool
from browser_toolset.tools.base import ToolInvocation, ToolSpec

SERVER_NAME = "browser"


def invocation_to_sdk_format(invocation: ToolInvocation) -> dict[str, Any]:
    """
    Convert a finished invocation to SDK response format.

    Successes become a JSON text block; failures keep their error code and
    context so the controller can tell a wrong selector from a broken page.

    Args:
        invocation: Completed ToolInvocation

    Returns:
        SDK-compatible response dict with content blocks and is_error flag
    """
    text = json.dumps(invocation.to_dict(), indent=2, default=str)
    return {
        "content": [{"type": "text", "text": text}],
        "is_error": not invocation.succeeded,
    }


def adapt_tool_for_sdk(spec: ToolSpec, session: BrowserSession) -> Callable:
    """
    Adapt a registered tool for SDK compatibility.

    Args:
        spec: Registry entry of the tool
        session: Session every call runs against

    Returns:
        SDK-compatible async function decorated with @sdk_tool
    """

    async def adapted_tool(args: dict[str, Any]) -> dict[str, Any]:
        invocation = await run_tool(session, spec.name, args)
        return invocation_to_sdk_format(invocation)

    return sdk_tool(spec.name, spec.description, spec.input_schema)(adapted_tool)


def create_browser_server(
    session: BrowserSession,
    server_name: str = SERVER_NAME,
    server_version: str = "1.0.0",
):
    """
    Create an in-process MCP server wrapping every browser tool.

    Tool naming convention: mcp__<server_name>__<tool_name>
    Example: mcp__browser__click_selector, mcp__browser__fill_input

    Args:
        session: The browser session shared by all tools
        server_name: Name for the MCP server (default: "browser")
        server_version: Version string (default: "1.0.0")

    Returns:
        SDK MCP server configuration to use with ClaudeAgentOptions
    """
    adapted_tools = [
        adapt_tool_for_sdk(spec, session) for spec in get_all_tools().values()
    ]

    return create_sdk_mcp_server(
        name=server_name,
        version=server_version,
        tools=adapted_tools,
    )


def get_allowed_tools(server_name: str = SERVER_NAME) -> list[str]:
    """
    Get list of allowed tool names for ClaudeAgentOptions.

    Args:
        server_name: Name of the MCP server (default: "browser")

    Returns:
        List of tool names like ["mcp__browser__open_browser", ...]
    """
    return [f"mcp__{server_name}__{name}" for name in get_all_tools()]
