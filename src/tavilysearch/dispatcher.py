"""
Tool call dispatcher.

Routes (tool name, raw arguments) to a registered tool:
normalize -> cache/gateway (inside the tool) -> format -> ToolResult.
This is the only place where errors raised during a tool call become
error results.
"""
import logging
from typing import Any, Mapping, Optional

from .config import Settings
from .errors import InvalidRequestError, UnknownToolError, format_error
from .tools import ToolContext, ToolResult, ToolSchema, get_all_tools, get_tool, normalize
from .tools.search.cache import ResultCache
from .tools.search.client import TavilyGateway

logger = logging.getLogger(__name__)


class Dispatcher:
    """Executes tool calls against one gateway and one cache."""

    def __init__(
        self,
        gateway: TavilyGateway,
        cache: Optional[ResultCache] = None,
        *,
        strict: bool = False,
        defaults: Optional[Mapping[str, Any]] = None,
    ):
        """
        Args:
            gateway: Backend the tools search through
            cache: Result cache; a fresh one when omitted
            strict: Reject mistyped optional arguments
            defaults: Deployment overrides for declared argument defaults
        """
        self.context = ToolContext(gateway=gateway, cache=cache if cache is not None else ResultCache())
        self.strict = strict
        self.defaults = dict(defaults or {})

    @property
    def cache(self) -> ResultCache:
        return self.context.cache

    @property
    def gateway(self) -> TavilyGateway:
        return self.context.gateway

    def list_tools(self) -> list[ToolSchema]:
        """Descriptors for capability discovery, in registration order."""
        return [t.to_schema() for t in get_all_tools()]

    async def dispatch(self, tool_name: str, arguments: Any = None) -> ToolResult:
        """
        Execute one tool call.

        Raises:
            UnknownToolError: No tool named tool_name
            InvalidRequestError: arguments is not a mapping

        Any other failure is returned as a ToolResult with isError=True.
        """
        tool = get_tool(tool_name)
        if tool is None:
            raise UnknownToolError(tool_name)

        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise InvalidRequestError(f"Arguments for {tool_name} must be an object")

        logger.debug("%s: received", tool_name)
        try:
            params = normalize(tool, arguments, strict=self.strict, defaults=self.defaults)
            logger.debug("%s: validated", tool_name)
            text = await tool.function(params, self.context)
        except Exception as e:
            logger.warning("%s failed: %s", tool_name, e, exc_info=True)
            return ToolResult.error(format_error(e))

        logger.debug("%s: returned %d chars", tool_name, len(text))
        return ToolResult.text(text)

    async def aclose(self) -> None:
        await self.gateway.aclose()


def build_dispatcher(settings: Settings) -> Dispatcher:
    """Wire a Dispatcher from deployment settings."""
    gateway = TavilyGateway(
        api_key=settings.tavily_api_key,
        api_url=settings.tavily_api_url,
        timeout=settings.request_timeout,
    )
    return Dispatcher(
        gateway,
        ResultCache(),
        strict=settings.strict_validation,
        defaults=settings.domain_defaults(),
    )
