"""Pytest configuration and fixtures for search-summarizer tests."""

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from search_summarizer.gateways import GatewayResult
from search_summarizer.models import SavedSearch, SearchResponse, SearchResult
from search_summarizer.saved import SavedSearchStore
from search_summarizer.workflow import Orchestrator


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "e2e: End-to-end tests requiring real API keys")


@pytest.fixture
def make_result() -> Callable[..., SearchResult]:
    """Factory for search results with sensible defaults."""

    def _make(score: float, n: int = 0, text: str | None = None, **kwargs) -> SearchResult:
        return SearchResult(
            id=kwargs.pop("id", f"https://example.com/{n}"),
            url=kwargs.pop("url", f"https://www.example.com/{n}"),
            title=kwargs.pop("title", f"Result {n}"),
            snippet=kwargs.pop("snippet", f"Snippet {n}"),
            text=text if text is not None else f"Full text {n}",
            score=score,
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_response(make_result) -> SearchResponse:
    """Three results, deliberately not in score order."""
    return SearchResponse(results=(make_result(0.9, 0), make_result(0.95, 1), make_result(0.7, 2)))


@pytest.fixture
def saved_entry(sample_response) -> SavedSearch:
    return SavedSearch(query="capital of France", results=sample_response, summary="**Paris** is the capital.")


@pytest.fixture
def store(tmp_path) -> SavedSearchStore:
    return SavedSearchStore(tmp_path / "saved_searches.json")


@pytest.fixture
def search_gateway(sample_response) -> AsyncMock:
    gateway = AsyncMock()
    gateway.search.return_value = GatewayResult.success(sample_response)
    return gateway


@pytest.fixture
def summarize_gateway() -> AsyncMock:
    gateway = AsyncMock()
    gateway.summarize.return_value = GatewayResult.success("## Answer\n\n**Paris** is the capital of France.")
    return gateway


@pytest.fixture
def orchestrator(search_gateway, summarize_gateway, store) -> Orchestrator:
    return Orchestrator(search_gateway=search_gateway, summarize_gateway=summarize_gateway, store=store)
