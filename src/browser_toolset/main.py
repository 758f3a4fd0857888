"""
Browser Toolset CLI Entry Point

Runs one automation task: the Claude Agent SDK plans the workflow and calls
the browser tools; the browser is closed however the run ends.

Usage:
    browser-toolset "Sign up on https://example.com as Jane Doe"
    python -m browser_toolset.main "Your task" --headless --verbose
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from claude_agent_sdk import AssistantMessage, ResultMessage, TextBlock, ToolUseBlock
from dotenv import load_dotenv

from browser_toolset.agent import DEFAULT_MAX_TURNS, create_agent
from browser_toolset.browser.session import BrowserConfig
from browser_toolset.config import configure_logging, get_logger
from browser_toolset.console import get_console, print_error, print_result, print_tool_call

# Load environment variables
load_dotenv()

logger = get_logger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Drive a browser through a UI workflow with an LLM controller",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    browser-toolset "Open https://example.com and take a screenshot"
    browser-toolset "Fill the signup form" --headless --channel ""
        """,
    )

    parser.add_argument(
        "task",
        help="Natural language description of the workflow",
    )

    parser.add_argument(
        "--headless",
        action="store_true",
        default=None,
        help="Run the browser without a window (default: BROWSER_HEADLESS)",
    )

    parser.add_argument(
        "--channel",
        type=str,
        default=None,
        help="Browser channel such as 'chrome'; empty string uses bundled Chromium",
    )

    parser.add_argument(
        "--model", "-m",
        type=str,
        default=None,
        help="Model for the controller (default: AGENT_MODEL or sonnet)",
    )

    parser.add_argument(
        "--max-turns",
        type=int,
        default=DEFAULT_MAX_TURNS,
        help=f"Maximum agent iterations (default: {DEFAULT_MAX_TURNS})",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show tool calls and debug logging",
    )

    return parser.parse_args(argv)


def build_browser_config(args: argparse.Namespace) -> BrowserConfig:
    """Environment configuration with CLI overrides applied."""
    config = BrowserConfig.from_env()
    if args.headless is not None:
        config.headless = args.headless
    if args.channel is not None:
        config.channel = args.channel or None
    return config


def _display_message(message, verbose: bool) -> Optional[bool]:
    """
    Display an SDK message to the console.

    Returns:
        The run outcome for a ResultMessage, None for any other message
    """
    if isinstance(message, AssistantMessage):
        for block in message.content:
            if isinstance(block, TextBlock):
                text = block.text.strip()
                if text:
                    get_console().print(text)
            elif isinstance(block, ToolUseBlock) and verbose:
                print_tool_call(block.name, block.input)

    elif isinstance(message, ResultMessage):
        if message.is_error:
            print_error(str(message.result or message.subtype), error_type="ExecutionError")
            return False
        print_result(str(message.result or "Task finished"), success=True)
        return True

    return None


async def run_task(args: argparse.Namespace) -> bool:
    """
    Run the automation task.

    Returns:
        True if the controller reported success, False otherwise
    """
    console = get_console()
    outcome = False

    async with create_agent(
        browser_config=build_browser_config(args),
        max_turns=args.max_turns,
        model=args.model,
    ) as agent:
        console.print(f"[bold]Task:[/bold] {args.task}\n")
        async for message in agent.run_stream(args.task):
            result = _display_message(message, args.verbose)
            if result is not None:
                outcome = result

    return outcome


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(level=logging.DEBUG if args.verbose else None, verbose=args.verbose)

    try:
        success = asyncio.run(run_task(args))
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Task interrupted by user[/yellow]")
        return 1
    except Exception as e:
        logger.debug("Agent run failed", exc_info=True)
        print_error(str(e), error_type=type(e).__name__)
        return 1

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
