"""
Pydantic schemas for Tavily search responses and tool parameters.
"""
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

SearchDepth = Literal["basic", "advanced"]
Topic = Literal["general", "news"]
TimeRange = Literal["day", "week", "month", "year", "d", "w", "m", "y"]


# ============ RESPONSES ============

class SearchHit(BaseModel):
    """Individual search result."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = Field(description="Title of the page")
    url: str = Field(description="URL of the search result")
    content: str = Field(default="", description="Relevant excerpt from the page")
    raw_content: Optional[str] = Field(default=None, description="Full page content if requested")
    score: float = Field(default=0.0, description="Relevance score (0-1)")
    published_date: Optional[str] = Field(default=None, description="Publication date if available")

    @field_validator("title", "url", "content", mode="before")
    @classmethod
    def null_as_blank(cls, value):
        # the provider sends null for pages it could not read
        return "" if value is None else value


class SearchImage(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    url: str
    description: Optional[str] = None


class SearchResult(BaseModel):
    """Response from the Tavily search endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    query: str = Field(description="The query that was searched")
    answer: Optional[str] = Field(default=None, description="AI-generated answer, if requested")
    response_time: float = Field(default=0.0, description="Round-trip time in seconds")
    results: list[SearchHit] = Field(default_factory=list)
    images: Optional[list[Union[str, SearchImage]]] = Field(default=None)


# ============ PARAMETERS ============

class _Params(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    query: str = Field(min_length=1)
    search_depth: SearchDepth
    topic: Topic = "general"
    days: Optional[int] = None
    time_range: Optional[TimeRange] = None
    max_results: int = 5
    include_domains: list[str] = Field(default_factory=list)
    exclude_domains: list[str] = Field(default_factory=list)


class SearchParams(_Params):
    """Normalized arguments of tavily_search."""

    search_depth: SearchDepth = "basic"
    include_images: bool = False
    include_image_descriptions: bool = False
    include_answer: bool = False
    include_raw_content: bool = False
    # any name in FORMATTERS; the tool schema carries the enum
    response_format: str = "text"
    cache_ttl: float = 3600
    force_refresh: bool = False


class ContextParams(_Params):
    """Normalized arguments of tavily_get_search_context."""

    search_depth: SearchDepth = "advanced"
    max_tokens: int = 2000
    response_format: Literal["text", "json"] = "text"


class QnAParams(_Params):
    """Normalized arguments of tavily_qna_search."""

    search_depth: SearchDepth = "advanced"
    response_format: Literal["text", "json"] = "text"
