"""
Tavily search gateway.

One POST to the search endpoint per call; no retries, no backoff.
"""
import logging
import time
from typing import Any, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from ...errors import BackendError, TransportError
from .schemas import ContextParams, QnAParams, SearchParams, SearchResult

logger = logging.getLogger(__name__)

_SHARED_FIELDS = (
    "query",
    "search_depth",
    "topic",
    "days",
    "time_range",
    "max_results",
)


def _payload(params: Any, *extra: str) -> dict[str, Any]:
    payload = {name: getattr(params, name) for name in (*_SHARED_FIELDS, *extra)}
    payload["include_domains"] = list(params.include_domains)
    payload["exclude_domains"] = list(params.exclude_domains)
    return payload


def build_search_payload(params: SearchParams) -> dict[str, Any]:
    """Request body for tavily_search."""
    return _payload(
        params,
        "include_images",
        "include_image_descriptions",
        "include_answer",
        "include_raw_content",
    )


def build_context_payload(params: ContextParams) -> dict[str, Any]:
    """Request body for tavily_get_search_context."""
    payload = _payload(params, "max_tokens")
    payload["include_answer"] = False
    return payload


def build_qna_payload(params: QnAParams) -> dict[str, Any]:
    """Request body for tavily_qna_search. The answer is always requested."""
    payload = _payload(params)
    payload["include_answer"] = True
    return payload


class TavilyGateway:
    """Async client for the Tavily search endpoint."""

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.tavily.com/search",
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            api_key: Tavily API key, sent as a bearer token
            api_url: Search endpoint
            timeout: Request timeout in seconds; None waits indefinitely
            client: Pre-built client (tests inject one with a mock transport)
        """
        self.api_key = api_key
        self.api_url = api_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def search(self, payload: dict[str, Any]) -> SearchResult:
        """
        Run one search.

        Args:
            payload: Request body; keys with None values are not sent

        Returns:
            SearchResult with response_time measured locally

        Raises:
            BackendError: Non-2xx status or an unreadable body
            TransportError: The request never got a response
        """
        body = {key: value for key, value in payload.items() if value is not None}
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        logger.info("Tavily search: '%s' (depth=%s)", body.get("query"), body.get("search_depth"))
        start = time.perf_counter()
        try:
            response = await self._client.post(self.api_url, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Tavily request failed: %s", e)
            message = str(e).strip() or type(e).__name__
            raise TransportError(f"Request to Tavily failed: {message}") from e
        response_time = time.perf_counter() - start

        if not response.is_success:
            logger.warning("Tavily returned HTTP %s", response.status_code)
            raise BackendError(response.status_code, response.reason_phrase)

        try:
            data = response.json()
            return SearchResult.model_validate({**data, "response_time": response_time})
        except (ValueError, TypeError, PydanticValidationError) as e:
            raise BackendError(
                response.status_code,
                response.reason_phrase,
                message=f"Invalid response from Tavily: {e}",
            ) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
