"""
Response formatters.

Each formatter renders a SearchResult as one string and has no side effects.
"""
import json
from typing import Callable

from ...errors import ValidationError
from .schemas import SearchResult

Formatter = Callable[[SearchResult], str]


def format_text(data: SearchResult) -> str:
    output = f'Search Results for "{data.query}":\n\n'
    if data.answer:
        output += f"Summary: {data.answer}\n\nDetailed Sources:\n"

    sources = []
    for i, result in enumerate(data.results, start=1):
        source = f"{i}. {result.title}\n"
        source += f"   URL: {result.url}\n"
        if result.published_date:
            source += f"   Published: {result.published_date}\n"
        source += f"   Content: {result.content}\n"
        sources.append(source)
    return output + "\n".join(sources)


def format_json(data: SearchResult) -> str:
    return json.dumps(data.model_dump(exclude_none=True), indent=2, ensure_ascii=False)


def format_markdown(data: SearchResult) -> str:
    output = f"# Search Results: {data.query}\n\n"
    if data.answer:
        output += f"## Summary\n{data.answer}\n\n## Sources\n"

    sources = []
    for result in data.results:
        source = f"### {result.title}\n"
        source += f"- URL: [{result.url}]({result.url})\n"
        if result.published_date:
            source += f"- Published: {result.published_date}\n"
        source += f"\n{result.content}\n"
        sources.append(source)
    return output + "\n---\n".join(sources)


FORMATTERS: dict[str, Formatter] = {
    "text": format_text,
    "json": format_json,
    "markdown": format_markdown,
}


def register_formatter(name: str, formatter: Formatter) -> None:
    """Add or replace an output format."""
    FORMATTERS[name] = formatter


def format_response(data: SearchResult, mode: str = "text") -> str:
    """Render data in the requested format."""
    formatter = FORMATTERS.get(mode)
    if formatter is None:
        raise ValidationError(f"Unknown response format: {mode}")
    return formatter(data)


# ============ CONTEXT / QNA ============

NO_ANSWER = "No answer found."


def build_search_context(data: SearchResult, max_tokens: int) -> str:
    """
    Join result contents with blank lines and cut to max_tokens.

    NOTE: max_tokens counts characters, not model tokens.
    """
    context = "\n\n".join(result.content for result in data.results)
    return context[:max(max_tokens, 0)]


def extract_answer(data: SearchResult) -> str:
    return data.answer or NO_ANSWER
