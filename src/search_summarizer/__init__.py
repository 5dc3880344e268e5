"""Web search with LLM-written summaries and locally saved answers."""

from .config import settings
from .exceptions import (
    ConfigurationError,
    EmptyQueryError,
    InvalidIndexError,
    LLMProviderError,
    PersistenceError,
    SearchSummarizerError,
    UpstreamError,
)
from .models import SavedSearch, SearchResponse, SearchResult
from .providers import get_llm
from .saved import SavedSearchStore
from .workflow import Orchestrator, SessionState, select_top

__all__ = [
    "settings",
    "get_llm",
    "Orchestrator",
    "SavedSearch",
    "SavedSearchStore",
    "SearchResponse",
    "SearchResult",
    "SessionState",
    "select_top",
    "SearchSummarizerError",
    "ConfigurationError",
    "LLMProviderError",
    "UpstreamError",
    "EmptyQueryError",
    "PersistenceError",
    "InvalidIndexError",
]
