"""
MCP protocol models - JSON-RPC 2.0 format.
"""
from typing import Any, Optional, Union
from pydantic import BaseModel, Field


# ============ BASE MODELS ============

class MCPRequest(BaseModel):
    """Base request - all MCP requests have these fields."""
    jsonrpc: str = Field(default="2.0")
    id: Union[int, str] = Field(...)
    method: str = Field(...)
    # validated per method, so a bad shape becomes a JSON-RPC error
    params: Optional[Any] = Field(default=None)


# ============ TOOLS/CALL ============

class ToolsCallParams(BaseModel):
    """params of a tools/call request. arguments stays untyped until normalized."""
    name: str = Field(...)
    arguments: Optional[Any] = Field(default=None)


# ============ ERROR HANDLING ============

class MCPError(BaseModel):
    """Error structure."""
    code: int = Field(...)
    message: str = Field(...)
    data: Optional[dict[str, Any]] = Field(default=None)


# Error codes
ERROR_INVALID_REQUEST = -32600
ERROR_METHOD_NOT_FOUND = -32601
ERROR_INVALID_PARAMS = -32602
ERROR_INTERNAL_ERROR = -32603
