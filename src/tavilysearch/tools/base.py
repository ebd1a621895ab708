"""
Tool registry and decorator.
NOTE:
1. MCP uses JSON Schema for tool input definitions. Each tool declares its
   parameters as FieldSpec entries and the registry renders them to JSON Schema.
2. Registration order is the order tools/list reports them in.
"""
from typing import Callable, Sequence

from pydantic import BaseModel

from .schemas import FieldSpec, ToolDefinition, ToolHandler

# In-memory storage for all registered tools
TOOL_REGISTRY: dict[str, ToolDefinition] = {}


def get_all_tools() -> list[ToolDefinition]:
    """Return all registered tools."""
    return list(TOOL_REGISTRY.values())


def get_tool(name: str) -> ToolDefinition | None:
    """Get a tool by name."""
    return TOOL_REGISTRY.get(name)


def tool(
    name: str,
    description: str,
    fields: Sequence[FieldSpec],
    params_model: type[BaseModel],
) -> Callable[[ToolHandler], ToolHandler]:
    """
    Decorator to register an async handler as an MCP tool.

    Usage:
        @tool(name="echo", description="Returns what you send",
              fields=[FieldSpec(name="query", type="string", required=True)],
              params_model=EchoParams)
        async def echo(params: EchoParams, ctx: ToolContext) -> str:
            return params.query

    NOTE: The handler receives the normalized params model, never the raw
    arguments. The original function is returned unchanged.
    """
    def decorator(func: ToolHandler) -> ToolHandler:
        names = [spec.name for spec in fields]
        if len(set(names)) != len(names):
            raise ValueError(f"Tool '{name}' declares a field twice")

        missing = set(names) - set(params_model.model_fields)
        if missing:
            raise ValueError(
                f"Tool '{name}' declares fields not on {params_model.__name__}: {sorted(missing)}"
            )

        TOOL_REGISTRY[name] = ToolDefinition(
            name=name,
            description=description,
            fields=tuple(fields),
            params_model=params_model,
            function=func,
        )
        return func

    return decorator
