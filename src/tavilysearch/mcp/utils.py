"""
MCP utilities - handler functions for processing JSON-RPC requests.
"""
import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .models import (
    MCPError,
    MCPRequest,
    ToolsCallParams,
    ERROR_INTERNAL_ERROR,
    ERROR_INVALID_PARAMS,
)
from ..dispatcher import Dispatcher
from ..errors import ProtocolError

logger = logging.getLogger(__name__)


def _error(request: MCPRequest, code: int, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": request.id,
        "error": MCPError(code=code, message=message).model_dump(exclude_none=True)
    }


def handle_tools_list(request: MCPRequest, dispatcher: Dispatcher) -> dict[str, Any]:
    """
    Handle tools/list request.
    Returns all registered tools in MCP format.
    """
    try:
        tools_json = [schema.model_dump() for schema in dispatcher.list_tools()]
    except Exception as e:
        logger.error("tools/list failed: %s", e, exc_info=True)
        return _error(request, ERROR_INTERNAL_ERROR, str(e))

    return {
        "jsonrpc": "2.0",
        "id": request.id,
        "result": {
            "tools": tools_json
        }
    }


async def handle_tools_call(request: MCPRequest, dispatcher: Dispatcher) -> dict[str, Any]:
    """
    Handle tools/call request.
    Executes a tool and returns the result. Tool failures come back as a
    result with isError=True; routing failures as a JSON-RPC error.
    """
    if request.params is not None and not isinstance(request.params, dict):
        return _error(request, ERROR_INVALID_PARAMS, "tools/call params must be an object")

    try:
        params = ToolsCallParams.model_validate(request.params or {})
    except PydanticValidationError as e:
        return _error(request, ERROR_INVALID_PARAMS, f"Invalid tools/call params: {e}")

    try:
        result = await dispatcher.dispatch(params.name, params.arguments)
    except ProtocolError as e:
        return _error(request, e.code, e.message)

    return {
        "jsonrpc": "2.0",
        "id": request.id,
        "result": result.model_dump()
    }
