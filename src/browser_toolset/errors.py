"""
Tool Errors

Typed failures raised by the browser toolset. Every error carries a stable
``code`` and a ``context`` dict so the controller (or a human reading the log)
can diagnose a failed call without re-running it.
"""

from typing import Any, Optional


class ToolError(Exception):
    """Base class for every failure surfaced through the tool façade."""

    code: str = "tool_error"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Render the error as a structured mapping."""
        return {"error": self.code, "message": self.message, **self.context}


class NoSessionError(ToolError):
    """A primitive was invoked before open_browser."""

    code = "no_session"

    def __init__(self, tool: Optional[str] = None):
        super().__init__("No page. Call open_browser first.", tool=tool)


class SessionError(ToolError):
    """The browser engine failed to launch or to shut down."""

    code = "session_error"


class SessionBusyError(ToolError):
    """Another tool call is still using the page."""

    code = "session_busy"

    def __init__(self, tool: Optional[str] = None):
        super().__init__(
            "Browser session is busy with another tool call; "
            "wait for it to finish before calling again.",
            tool=tool,
        )


class ElementNotFoundError(ToolError):
    """No element matching the selector became visible in time."""

    code = "element_not_found"

    def __init__(
        self,
        selector: str,
        timeout_ms: int,
        elapsed_ms: int,
        reason: Optional[str] = None,
    ):
        message = (
            f"No visible element matches selector {selector!r} "
            f"after {elapsed_ms}ms (timeout {timeout_ms}ms)"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            selector=selector,
            timeout_ms=timeout_ms,
            elapsed_ms=elapsed_ms,
        )
        self.selector = selector
        self.timeout_ms = timeout_ms
        self.elapsed_ms = elapsed_ms


class InteractionError(ToolError):
    """The engine rejected an interaction with an already located element."""

    code = "interaction_failed"

    def __init__(self, selector: str, action: str, reason: str):
        super().__init__(
            f"Failed to {action} {selector!r}: {reason}",
            selector=selector,
            action=action,
        )
        self.selector = selector


class NavigationError(ToolError):
    """The page did not reach the requested URL or load milestone."""

    code = "navigation_failed"

    def __init__(self, url: str, reason: str):
        super().__init__(f"Navigation to {url!r} failed: {reason}", url=url)
        self.url = url


class ValidationError(ToolError):
    """A field's read-back value differs from what was written."""

    code = "validation_failed"

    def __init__(self, selector: str, expected: str, actual: str):
        super().__init__(
            f"Validation failed for {selector!r}: "
            f"expected {expected!r}, but got {actual!r}",
            selector=selector,
            expected=expected,
            actual=actual,
        )
        self.selector = selector
        self.expected = expected
        self.actual = actual


class ScreenshotWriteError(ToolError, OSError):
    """The screenshot artifact could not be written."""

    code = "screenshot_write_failed"

    def __init__(self, path: str, reason: str):
        ToolError.__init__(
            self, f"Failed to write screenshot {path}: {reason}", path=path
        )
        self.path = path


class ScreenshotCaptureError(ToolError):
    """The engine could not render the page (crashed or closed target)."""

    code = "screenshot_failed"

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to capture {url}: {reason}", url=url)
        self.url = url


class ToolArgumentError(ToolError):
    """Tool arguments do not match the declared schema."""

    code = "invalid_arguments"

    def __init__(self, tool: str, errors: list[str]):
        super().__init__(
            f"Invalid arguments for {tool}: " + "; ".join(errors),
            tool=tool,
            errors=errors,
        )


class UnknownToolError(ToolError):
    """No tool is registered under the requested name."""

    code = "unknown_tool"

    def __init__(self, tool: str, available: list[str]):
        super().__init__(
            f"Unknown tool {tool!r}. Available: {', '.join(available)}",
            tool=tool,
            available=available,
        )
