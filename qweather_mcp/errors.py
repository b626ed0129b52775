"""
Error types for the QWeather MCP server.
"""
from typing import List, Optional, Tuple
from mcp import ErrorData, McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class QWeatherError(Exception):
    """Base class for weather server errors."""
    pass


class ToolValidationError(QWeatherError):
    """Tool arguments failed schema validation.

    Carries every violated field, not just the first one.
    """

    def __init__(self, tool: str, violations: List[Tuple[str, str]]):
        self.tool = tool
        self.violations = violations
        details = ", ".join(f"{path}: {message}" for path, message in violations)
        super().__init__(f"Invalid arguments: {details}")


class SigningError(QWeatherError):
    """The request credential could not be minted."""
    pass


class UpstreamError(QWeatherError):
    """A QWeather request failed (bad status, transport error or bad body)."""

    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        if status_code is not None:
            message = f"HTTP error! status: {status_code} ({url})"
        else:
            message = f"Request to {url} failed: {reason}"
        super().__init__(message)


class UnknownToolError(QWeatherError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


def to_mcp_error(error: QWeatherError) -> McpError:
    """Translate a weather server error into an MCP protocol error."""
    if isinstance(error, ToolValidationError):
        code = INVALID_PARAMS
    elif isinstance(error, UnknownToolError):
        code = METHOD_NOT_FOUND
    else:
        code = INTERNAL_ERROR
    return McpError(ErrorData(code=code, message=str(error)))
