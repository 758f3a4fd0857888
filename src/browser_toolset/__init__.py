"""
Browser Toolset

Verified browser actions for an external instruction-following controller.
"""

from .browser import BrowserConfig, BrowserSession, create_session
from .tools import get_tool_schemas, invoke_tool, run_tool

__version__ = "0.1.0"

__all__ = [
    "BrowserConfig",
    "BrowserSession",
    "create_session",
    "get_tool_schemas",
    "invoke_tool",
    "run_tool",
]
