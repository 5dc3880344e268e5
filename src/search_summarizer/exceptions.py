"""Custom exceptions for the search summarizer."""


class SearchSummarizerError(Exception):
    """Base exception for search summarizer errors."""

    pass


class ConfigurationError(SearchSummarizerError):
    """Raised when required configuration (usually a credential) is missing."""

    pass


class LLMProviderError(ConfigurationError):
    """Raised when LLM provider configuration is invalid."""

    pass


class UpstreamError(SearchSummarizerError):
    """Raised when the search or summarization service fails.

    Covers network failures, auth and quota rejections, and malformed responses.
    """

    def __init__(self, message: str, service: str = "upstream"):
        super().__init__(message)
        self.service = service


class EmptyQueryError(SearchSummarizerError):
    """Raised when a query with no text is submitted."""

    pass


class PersistenceError(SearchSummarizerError):
    """Raised when saved searches cannot be serialized or written."""

    pass


class InvalidIndexError(SearchSummarizerError):
    """Raised when a saved-search index does not exist."""

    def __init__(self, index: int, size: int):
        super().__init__(f"No saved search at index {index} (have {size})")
        self.index = index
        self.size = size
