"""
Browser Session Module

Provides the Playwright session and element locator shared by every tool.
"""

from .session import BrowserSession, BrowserConfig, create_session
from .locator import LocatedElement, locate

__all__ = [
    "BrowserSession",
    "BrowserConfig",
    "create_session",
    "LocatedElement",
    "locate",
]
