"""
MCP server - FastAPI routes for JSON-RPC requests.
"""
from fastapi import APIRouter, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from .models import (
    MCPError,
    MCPRequest,
    ERROR_INVALID_REQUEST,
    ERROR_METHOD_NOT_FOUND
)
from .utils import handle_tools_list, handle_tools_call

router = APIRouter()


@router.post("/mcp")
async def mcp_endpoint(request: MCPRequest, http_request: Request):
    """
    Main MCP endpoint.
    Routes requests based on method field.
    """
    dispatcher = http_request.app.state.dispatcher

    # Route: tools/list
    if request.method == "tools/list":
        return handle_tools_list(request, dispatcher)

    # Route: tools/call
    elif request.method == "tools/call":
        return await handle_tools_call(request, dispatcher)

    # Error: unknown method
    else:
        return {
            "jsonrpc": "2.0",
            "id": request.id,
            "error": MCPError(
                code=ERROR_METHOD_NOT_FOUND,
                message=f"Method '{request.method}' not found"
            ).model_dump(exclude_none=True)
        }


async def invalid_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Body that is not a JSON-RPC request (no id, no method, not an object).
    Answered as a JSON-RPC error instead of FastAPI's 422.
    """
    body = exc.body if isinstance(exc.body, dict) else {}
    request_id = body.get("id")
    if not isinstance(request_id, (int, str)) or isinstance(request_id, bool):
        request_id = None

    return JSONResponse({
        "jsonrpc": "2.0",
        "id": request_id,
        "error": MCPError(
            code=ERROR_INVALID_REQUEST,
            message="Invalid JSON-RPC request",
            data={"errors": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ]}
        ).model_dump(exclude_none=True)
    })
