from typing import Any

import pytest

from tavilysearch.dispatcher import Dispatcher
from tavilysearch.tools.search.cache import ResultCache
from tavilysearch.tools.search.schemas import SearchResult

RUST_RESPONSE = {
    "query": "rust ownership",
    "answer": "Rust uses ownership to manage memory.",
    "response_time": 0.42,
    "results": [
        {
            "title": "Ownership - Rust Book",
            "url": "https://doc.rust-lang.org/book/ch04-00-ownership.html",
            "content": "Ownership is a set of rules that govern how a Rust program manages memory.",
            "score": 0.9,
        },
        {
            "title": "Rust by Example: Ownership",
            "url": "https://doc.rust-lang.org/rust-by-example/scope/move.html",
            "content": "Because variables are in charge of freeing their own resources, resources can only have one owner.",
            "score": 0.7,
            "published_date": "2024-05-01",
        },
    ],
}


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGateway:
    """Stands in for TavilyGateway; records every payload it receives."""

    def __init__(self, response: dict[str, Any] | None = None, error: Exception | None = None) -> None:
        self.response = response if response is not None else RUST_RESPONSE
        self.error = error
        self.payloads: list[dict[str, Any]] = []
        self.closed = False

    @property
    def calls(self) -> int:
        return len(self.payloads)

    async def search(self, payload: dict[str, Any]) -> SearchResult:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return SearchResult.model_validate(self.response)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ResultCache:
    return ResultCache(clock=clock)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def dispatcher(gateway: FakeGateway, cache: ResultCache) -> Dispatcher:
    return Dispatcher(gateway, cache)


@pytest.fixture
def rust_result() -> SearchResult:
    return SearchResult.model_validate(RUST_RESPONSE)
