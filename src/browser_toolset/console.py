"""
Rich Console Output

Terminal display of agent text, tool calls, results and errors.
Configured via environment variables for customizable appearance.
"""

import json
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


@dataclass
class ConsoleConfig:
    """
    Console configuration loaded from environment variables.

    Attributes:
        color_action: Border color of tool call panels
        color_result: Border color of result panels
        show_timestamps: Whether to display timestamps
    """

    color_action: str = "green"
    color_result: str = "yellow"
    show_timestamps: bool = True

    @classmethod
    def from_env(cls) -> "ConsoleConfig":
        """Load configuration from environment variables."""
        return cls(
            color_action=os.getenv("COLOR_ACTION", "green"),
            color_result=os.getenv("COLOR_RESULT", "yellow"),
            show_timestamps=os.getenv("SHOW_TIMESTAMPS", "true").lower() == "true",
        )


class AgentConsole:
    """Rich console wrapper with consistent panel styling."""

    def __init__(self, config: Optional[ConsoleConfig] = None, console: Optional[Console] = None):
        self.config = config or ConsoleConfig.from_env()
        self.console = console or Console()

    def _title(self, label: str) -> str:
        if self.config.show_timestamps:
            return f"{datetime.now().strftime('%H:%M:%S')} {label}"
        return label

    def _panel(self, content: Any, label: str, border_style: str) -> None:
        self.console.print(
            Panel(
                content,
                title=self._title(label),
                title_align="left",
                border_style=border_style,
                padding=(0, 1),
            )
        )

    def print(self, *args, **kwargs) -> None:
        """Passthrough to underlying Rich console."""
        self.console.print(*args, **kwargs)


# Global console instance
_console: Optional[AgentConsole] = None


def get_console() -> AgentConsole:
    """Get or create the global console instance."""
    global _console
    if _console is None:
        _console = AgentConsole()
    return _console


def format_params(params: dict[str, Any]) -> Table:
    """Format tool arguments as a two-column table, truncating long values."""
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Param", style="bold")
    table.add_column("Value")

    for key, value in params.items():
        str_value = str(value)
        if len(str_value) > 100:
            str_value = str_value[:97] + "..."
        table.add_row(key, str_value)

    return table


def print_tool_call(
    tool_name: str,
    arguments: dict[str, Any],
    *,
    console: Optional[AgentConsole] = None,
) -> None:
    """
    Print a tool call block.

    Args:
        tool_name: Tool id, with or without the mcp__browser__ prefix
        arguments: Arguments passed to the tool
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    content = Text()
    content.append("⚡ ", style="bold")
    content.append(tool_name.rsplit("__", 1)[-1], style="bold green")

    console._panel(content, "[ACTION]", console.config.color_action)
    if arguments:
        console.print(format_params(arguments))


def print_result(
    content: Any,
    *,
    success: bool = True,
    title: Optional[str] = None,
    console: Optional[AgentConsole] = None,
) -> None:
    """
    Print a result block.

    Args:
        content: Result text, or a mapping rendered as JSON
        success: Whether the action was successful
        title: Custom title (overrides default "[RESULT]")
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    if not isinstance(content, str):
        content = json.dumps(content, indent=2, default=str)

    text = Text()
    text.append("✓ " if success else "✗ ", style="bold green" if success else "bold red")
    text.append(content)

    console._panel(text, title or "[RESULT]", console.config.color_result)


def print_error(
    error_message: str,
    *,
    error_type: Optional[str] = None,
    console: Optional[AgentConsole] = None,
) -> None:
    """
    Print an error block.

    Args:
        error_message: The error message
        error_type: Type/category of error
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    content = Text()
    content.append("Error", style="bold red")
    if error_type:
        content.append(f" ({error_type})", style="dim red")
    content.append("\n\n")
    content.append(error_message)

    console._panel(content, "[RESULT]", "red")
