"""
Tavily search tools.

Importing this module registers, in order: tavily_search,
tavily_get_search_context, tavily_qna_search.
"""
import dataclasses
import json
import logging

from ..base import TOOL_REGISTRY, tool
from ..schemas import FieldSpec, ToolContext
from .cache import make_cache_key
from .client import build_context_payload, build_qna_payload, build_search_payload
from .formatters import (
    FORMATTERS,
    Formatter,
    build_search_context,
    extract_answer,
    format_response,
    register_formatter,
)
from .schemas import ContextParams, QnAParams, SearchParams

logger = logging.getLogger(__name__)

TIME_RANGES = ("day", "week", "month", "year", "d", "w", "m", "y")


def _common_fields(query_description: str, search_depth: str) -> list[FieldSpec]:
    return [
        FieldSpec(name="query", type="string", required=True, description=query_description),
        FieldSpec(
            name="search_depth",
            type="string",
            enum=("basic", "advanced"),
            default=search_depth,
            description='The depth of the search ("basic" for faster results, "advanced" for more thorough search)',
        ),
        FieldSpec(
            name="topic",
            type="string",
            enum=("general", "news"),
            default="general",
            description="The category of the search",
        ),
        FieldSpec(
            name="days",
            type="number",
            integer=True,
            description="Number of days back from today to include (news topic only)",
        ),
        FieldSpec(
            name="time_range",
            type="string",
            enum=TIME_RANGES,
            description="Time range back from today to filter results",
        ),
        FieldSpec(
            name="max_results",
            type="number",
            integer=True,
            default=5,
            description="Maximum number of results to return",
        ),
        FieldSpec(
            name="include_domains",
            type="string[]",
            default=[],
            description="List of trusted domains to include in search",
        ),
        FieldSpec(
            name="exclude_domains",
            type="string[]",
            default=[],
            description="List of domains to exclude from search",
        ),
    ]


SEARCH_FIELDS = [
    *_common_fields("Search query", search_depth="basic"),
    FieldSpec(
        name="include_images",
        type="boolean",
        default=False,
        description="Include query-related images in the response",
    ),
    FieldSpec(
        name="include_image_descriptions",
        type="boolean",
        default=False,
        description="Include a description for each image",
    ),
    FieldSpec(
        name="include_answer",
        type="boolean",
        default=False,
        description="Include an AI-generated answer based on search results",
    ),
    FieldSpec(
        name="include_raw_content",
        type="boolean",
        default=False,
        description="Include the cleaned HTML content of each result",
    ),
    FieldSpec(
        name="response_format",
        type="string",
        enum=tuple(FORMATTERS),
        default="text",
        description="Format of the search results",
    ),
    FieldSpec(
        name="cache_ttl",
        type="number",
        default=3600,
        description="Cache time-to-live in seconds",
    ),
    FieldSpec(
        name="force_refresh",
        type="boolean",
        default=False,
        description="Force fresh results ignoring cache",
    ),
]

CONTEXT_FIELDS = [
    *_common_fields("Search query for context generation", search_depth="advanced"),
    FieldSpec(
        name="max_tokens",
        type="number",
        integer=True,
        default=2000,
        description="Maximum length of generated context, in characters",
    ),
    FieldSpec(
        name="response_format",
        type="string",
        enum=("text", "json"),
        default="text",
        description="Format of the context response",
    ),
]

QNA_FIELDS = [
    *_common_fields("Question to be answered", search_depth="advanced"),
    FieldSpec(
        name="response_format",
        type="string",
        enum=("text", "json"),
        default="text",
        description="Format of the answer response",
    ),
]


@tool(
    name="tavily_search",
    description="Search the web using Tavily Search API, optimized for high-quality, factual results",
    fields=SEARCH_FIELDS,
    params_model=SearchParams,
)
async def tavily_search(params: SearchParams, ctx: ToolContext) -> str:
    key = make_cache_key(params)

    result = None if params.force_refresh else ctx.cache.get(key)
    if result is not None:
        logger.info("Cache hit for '%s'", params.query)
    else:
        result = await ctx.gateway.search(build_search_payload(params))
        ctx.cache.put(key, result, params.cache_ttl)

    return format_response(result, params.response_format)


@tool(
    name="tavily_get_search_context",
    description="Generate context for RAG applications using Tavily search",
    fields=CONTEXT_FIELDS,
    params_model=ContextParams,
)
async def tavily_get_search_context(params: ContextParams, ctx: ToolContext) -> str:
    # Not cached
    result = await ctx.gateway.search(build_context_payload(params))
    context = build_search_context(result, params.max_tokens)

    if params.response_format == "json":
        return json.dumps({"query": params.query, "context": context}, indent=2, ensure_ascii=False)
    return context


@tool(
    name="tavily_qna_search",
    description="Get direct answers to questions using Tavily search",
    fields=QNA_FIELDS,
    params_model=QnAParams,
)
async def tavily_qna_search(params: QnAParams, ctx: ToolContext) -> str:
    # Not cached
    result = await ctx.gateway.search(build_qna_payload(params))
    answer = extract_answer(result)

    if params.response_format == "json":
        return json.dumps({"query": params.query, "answer": answer}, indent=2, ensure_ascii=False)
    return answer


def register_response_format(name: str, formatter: Formatter) -> None:
    """
    Add an output format and offer it as a tavily_search response_format.

    The registered tool is replaced so that the listed schema and the
    normalizer both accept the new name.
    """
    register_formatter(name, formatter)

    search_tool = TOOL_REGISTRY["tavily_search"]
    fields = tuple(
        spec.model_copy(update={"enum": tuple(FORMATTERS)}) if spec.name == "response_format" else spec
        for spec in search_tool.fields
    )
    TOOL_REGISTRY["tavily_search"] = dataclasses.replace(search_tool, fields=fields)
    logger.info("Registered response format '%s'", name)
