"""
Error types.

TavilyError and its subclasses are raised inside a tool call and reported
back to the agent as an error result. ProtocolError subclasses abort the
request itself and map to JSON-RPC error codes.
"""
from typing import Any, Optional

from .mcp.models import ERROR_INTERNAL_ERROR, ERROR_INVALID_PARAMS, ERROR_METHOD_NOT_FOUND


class TavilyError(Exception):
    """Base error for anything that fails inside a tool invocation."""

    code = "TAVILY_ERROR"

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(TavilyError):
    """Required input missing or mistyped. Raised before any backend I/O."""

    code = "INVALID_PARAMS"


class BackendError(TavilyError):
    """The provider answered with a non-success status."""

    code = "API_ERROR"

    def __init__(self, status_code: int, status_text: str, message: Optional[str] = None) -> None:
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(
            message or f"API request failed: {status_text}",
            details={"status": status_code},
        )


class TransportError(TavilyError):
    """The provider could not be reached."""

    code = "TRANSPORT_ERROR"


class ConfigurationError(TavilyError):
    """Fatal startup error."""

    code = "CONFIG_ERROR"


# ============ PROTOCOL ERRORS ============

class ProtocolError(Exception):
    """Request-level failure, reported as a JSON-RPC error instead of a tool result."""

    code = ERROR_INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnknownToolError(ProtocolError):
    code = ERROR_METHOD_NOT_FOUND

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class InvalidRequestError(ProtocolError):
    code = ERROR_INVALID_PARAMS


def format_error(error: BaseException) -> str:
    """Human-readable message for an error result."""
    if isinstance(error, TavilyError):
        return f"Tavily API Error ({error.code}): {error.message}"
    return f"Error: {error}"
