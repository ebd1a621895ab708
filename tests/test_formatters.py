"""Tests for the response formatters."""

import json

import pytest

from tavilysearch.errors import ValidationError
from tavilysearch.tools.search.formatters import (
    FORMATTERS,
    NO_ANSWER,
    build_search_context,
    extract_answer,
    format_response,
    register_formatter,
)
from tavilysearch.tools.search.schemas import SearchResult


def test_text_format(rust_result):
    output = format_response(rust_result, "text")

    assert output == (
        'Search Results for "rust ownership":\n'
        "\n"
        "Summary: Rust uses ownership to manage memory.\n"
        "\n"
        "Detailed Sources:\n"
        "1. Ownership - Rust Book\n"
        "   URL: https://doc.rust-lang.org/book/ch04-00-ownership.html\n"
        "   Content: Ownership is a set of rules that govern how a Rust program manages memory.\n"
        "\n"
        "2. Rust by Example: Ownership\n"
        "   URL: https://doc.rust-lang.org/rust-by-example/scope/move.html\n"
        "   Published: 2024-05-01\n"
        "   Content: Because variables are in charge of freeing their own resources, "
        "resources can only have one owner.\n"
    )


def test_text_format_without_answer(rust_result):
    output = format_response(rust_result.model_copy(update={"answer": None}), "text")
    assert output.startswith('Search Results for "rust ownership":\n\n1. Ownership - Rust Book\n')
    assert "Summary" not in output


def test_markdown_format(rust_result):
    output = format_response(rust_result, "markdown")

    assert output.startswith(
        "# Search Results: rust ownership\n\n"
        "## Summary\nRust uses ownership to manage memory.\n\n## Sources\n"
        "### Ownership - Rust Book\n"
        "- URL: [https://doc.rust-lang.org/book/ch04-00-ownership.html]"
        "(https://doc.rust-lang.org/book/ch04-00-ownership.html)\n"
    )
    assert "\n---\n### Rust by Example: Ownership\n" in output
    assert "- Published: 2024-05-01\n" in output
    assert output.count("\n---\n") == 1


def test_json_format_omits_absent_fields(rust_result):
    data = json.loads(format_response(rust_result, "json"))

    assert list(data) == ["query", "answer", "response_time", "results"]
    assert list(data["results"][0]) == ["title", "url", "content", "score"]
    assert data["results"][1]["published_date"] == "2024-05-01"


def test_json_format_is_indented(rust_result):
    assert format_response(rust_result, "json").startswith('{\n  "query": "rust ownership",')


@pytest.mark.parametrize("mode", ["text", "json", "markdown"])
def test_formatting_is_deterministic(rust_result, mode):
    assert format_response(rust_result, mode) == format_response(rust_result, mode)


def test_unknown_format_is_rejected(rust_result):
    with pytest.raises(ValidationError):
        format_response(rust_result, "html")


def test_register_formatter(rust_result):
    register_formatter("titles", lambda data: "|".join(r.title for r in data.results))
    try:
        assert format_response(rust_result, "titles") == "Ownership - Rust Book|Rust by Example: Ownership"
    finally:
        FORMATTERS.pop("titles")


def test_search_context_joins_and_truncates_characters(rust_result):
    full = build_search_context(rust_result, 10_000)
    assert full == "\n\n".join(r.content for r in rust_result.results)
    assert build_search_context(rust_result, 10) == full[:10]


def test_extract_answer_falls_back():
    result = SearchResult(query="q", results=[])
    assert extract_answer(result) == NO_ANSWER == "No answer found."
    assert extract_answer(result.model_copy(update={"answer": "42"})) == "42"
