"""
Tool schema definitions.

FieldSpec: one declared parameter of a tool.
ToolSchema: JSON-serializable format for MCP responses.
ToolDefinition: Internal storage that includes the handler and params model.
ToolResult: What a tools/call returns to the agent.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Literal, Optional

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from .search.cache import ResultCache
    from .search.client import TavilyGateway


FieldType = Literal["string", "number", "boolean", "string[]"]


class FieldSpec(BaseModel):
    """A single parameter descriptor."""

    model_config = {"frozen": True}

    name: str
    type: FieldType
    description: str = ""
    required: bool = False
    default: Any = None
    enum: Optional[tuple[Any, ...]] = None
    # Number fields that only take whole values (max_results, days, ...)
    integer: bool = False

    def json_schema(self) -> dict[str, Any]:
        """Render this field as a JSON Schema property."""
        if self.type == "string[]":
            prop: dict[str, Any] = {"type": "array", "items": {"type": "string"}}
        else:
            prop = {"type": self.type}
        if self.description:
            prop["description"] = self.description
        if self.enum is not None:
            prop["enum"] = list(self.enum)
        if self.default is not None:
            prop["default"] = self.default
        return prop


class ToolSchema(BaseModel):
    """
    MCP-compliant tool format.
    Sent to agents via tools/list response.
    """
    name: str = Field(..., description="Unique tool identifier")
    description: str = Field(..., description="What the tool does")
    inputSchema: dict[str, Any] = Field(..., description="JSON Schema for parameters")


@dataclass
class ToolContext:
    """Collaborators handed to every tool handler."""

    gateway: "TavilyGateway"
    cache: "ResultCache"


ToolHandler = Callable[[Any, ToolContext], Awaitable[str]]


@dataclass(frozen=True)
class ToolDefinition:
    """
    Internal tool storage.
    Includes the params model the normalizer builds and the handler to execute.
    """
    name: str
    description: str
    fields: tuple[FieldSpec, ...]
    params_model: type[BaseModel]
    function: ToolHandler = field(compare=False)

    @property
    def inputSchema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {spec.name: spec.json_schema() for spec in self.fields},
            "required": [spec.name for spec in self.fields if spec.required],
        }

    def to_schema(self) -> ToolSchema:
        """Convert to MCP-compliant format (drops function)."""
        return ToolSchema(
            name=self.name,
            description=self.description,
            inputSchema=self.inputSchema
        )


# ============ RESULTS ============

class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Result of a tool invocation, in the MCP tools/call result shape."""

    content: list[TextContent]
    isError: bool = False

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=[TextContent(text=message)], isError=True)
