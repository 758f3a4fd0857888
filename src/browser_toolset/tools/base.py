"""
Base Tool Infrastructure

Provides the foundation for the browser toolset:
- Tool decorator for registration with a pydantic argument model
- ToolResult for standardized responses
- ToolInvocation records for each call
- Dispatch by name with argument validation
"""

import logging
import time
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Awaitable, Callable, Optional, Type

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from ..browser.session import BrowserSession
from ..errors import SessionBusyError, ToolArgumentError, ToolError, UnknownToolError

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """
    Standardized result from tool execution.

    Failures are raised as ToolError, so a returned result is always a
    confirmed success.

    Attributes:
        success: Whether the tool executed successfully
        data: Operation-specific fields (url, title, filled, savedAs, ...)
        metadata: Additional context (timing, selectors tried, ...)
    """

    success: bool = True
    data: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Flat mapping handed to the controller."""
        return {"success": self.success, **self.data}

    def __str__(self) -> str:
        return f"Success: {self.data}"


class ToolArgs(BaseModel):
    """Base argument model: unknown fields rejected, aliases or field names accepted."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class NoArgs(ToolArgs):
    """Arguments of a tool that takes none."""


ToolHandler = Callable[[BrowserSession, Any], Awaitable[ToolResult]]


@dataclass
class ToolSpec:
    """Registry entry for one tool."""

    name: str
    description: str
    args_model: Type[ToolArgs]
    function: ToolHandler
    requires_session: bool = True

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema of the arguments, using the wire (alias) names."""
        return self.args_model.model_json_schema(by_alias=True)

    def validate(self, arguments: Optional[dict[str, Any]]) -> ToolArgs:
        """
        Validate raw arguments against the tool's model.

        Raises:
            ToolArgumentError: Listing every offending field
        """
        try:
            return self.args_model.model_validate(arguments or {})
        except PydanticValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
                for err in e.errors()
            ]
            raise ToolArgumentError(self.name, errors) from e


@dataclass
class ToolInvocation:
    """One call through the façade: name, arguments and outcome."""

    name: str
    arguments: dict[str, Any]
    result: Optional[ToolResult] = None
    error: Optional[ToolError] = None
    duration_ms: int = 0

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.result is not None

    def to_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {"success": False, **self.error.to_dict()}
        return self.result.to_dict()


# Tool registry for all registered tools
_TOOL_REGISTRY: dict[str, ToolSpec] = {}


def tool(
    name: str,
    description: str,
    args_model: Type[ToolArgs] = NoArgs,
    requires_session: bool = True,
):
    """
    Decorator to register a coroutine as a browser tool.

    The decorated coroutine receives the session and a validated instance of
    ``args_model``. It returns a ToolResult on success and raises ToolError
    otherwise.

    Args:
        name: Tool identifier (e.g., "open_url")
        description: Human-readable description of what the tool does
        args_model: Pydantic model declaring the arguments and their defaults
        requires_session: Whether the tool needs open_browser to have run

    Example:
        >>> class OpenUrlArgs(ToolArgs):
        ...     url: str
        >>> @tool(name="open_url", description="Open a webpage", args_model=OpenUrlArgs)
        ... async def open_url(session, args):
        ...     page = session.require_page("open_url")
        ...     await page.goto(args.url)
        ...     return ToolResult(data={"url": page.url})
    """

    def decorator(func: ToolHandler) -> ToolHandler:
        @wraps(func)
        async def wrapper(session: BrowserSession, args: ToolArgs) -> ToolResult:
            result = await func(session, args)
            if isinstance(result, ToolResult):
                return result
            return ToolResult(data=dict(result or {}))

        wrapper.tool_name = name
        wrapper.tool_description = description

        _TOOL_REGISTRY[name] = ToolSpec(
            name=name,
            description=description,
            args_model=args_model,
            function=wrapper,
            requires_session=requires_session,
        )

        return wrapper

    return decorator


def get_tool(name: str) -> Optional[ToolSpec]:
    """Get a tool by name from the registry."""
    return _TOOL_REGISTRY.get(name)


def get_all_tools() -> dict[str, ToolSpec]:
    """Get all registered tools."""
    return _TOOL_REGISTRY.copy()


def get_tool_schemas() -> list[dict[str, Any]]:
    """
    Get tool schemas in a format suitable for LLM function calling.

    Returns list of tool definitions with name, description, and input schema.
    """
    return [
        {
            "name": spec.name,
            "description": spec.description,
            "input_schema": spec.input_schema,
        }
        for spec in _TOOL_REGISTRY.values()
    ]


async def _dispatch(
    session: BrowserSession,
    name: str,
    arguments: dict[str, Any],
) -> ToolResult:
    spec = _TOOL_REGISTRY.get(name)
    if spec is None:
        raise UnknownToolError(name, sorted(_TOOL_REGISTRY))

    # A call in flight (open_browser still launching included) is reported as
    # busy; after that the session precondition wins over argument errors
    if session.busy:
        raise SessionBusyError(name)
    if spec.requires_session:
        session.require_page(name)

    args = spec.validate(arguments)

    async with session.acquire(name):
        return await spec.function(session, args)


async def run_tool(
    session: BrowserSession,
    name: str,
    arguments: Optional[dict[str, Any]] = None,
) -> ToolInvocation:
    """
    Invoke a tool and record the outcome instead of raising ToolError.

    Args:
        session: The browser session all tools share
        name: Registered tool name
        arguments: Raw arguments from the controller

    Returns:
        Completed ToolInvocation carrying either a result or an error
    """
    invocation = ToolInvocation(name=name, arguments=dict(arguments or {}))
    start = time.monotonic()

    try:
        invocation.result = await _dispatch(session, name, invocation.arguments)
    except ToolError as e:
        invocation.error = e
    finally:
        invocation.duration_ms = int((time.monotonic() - start) * 1000)

    if invocation.error is not None:
        logger.warning(
            "%s failed after %dms [%s]: %s",
            name,
            invocation.duration_ms,
            invocation.error.code,
            invocation.error.message,
        )
    else:
        logger.info("%s succeeded in %dms", name, invocation.duration_ms)

    return invocation


async def invoke_tool(
    session: BrowserSession,
    name: str,
    arguments: Optional[dict[str, Any]] = None,
) -> ToolResult:
    """
    Invoke a tool by name.

    Args:
        session: The browser session all tools share
        name: Registered tool name
        arguments: Raw arguments from the controller

    Returns:
        ToolResult whose postconditions are confirmed

    Raises:
        ToolError: The typed failure of the call
    """
    invocation = await run_tool(session, name, arguments)
    if invocation.error is not None:
        raise invocation.error
    return invocation.result
