"""Tests for the chat model and gateway factories."""

from unittest.mock import MagicMock, patch

import pytest

from search_summarizer.config import AppSettings
from search_summarizer.exceptions import ConfigurationError, LLMProviderError
from search_summarizer.gateways import ExaSearchGateway, SummarizationGateway
from search_summarizer.providers import build_search_gateway, build_summarization_gateway, get_llm


class TestGetLLM:
    """Test the get_llm factory function."""

    def test_openai_provider(self):
        with patch("search_summarizer.providers.ChatOpenAI") as mock:
            mock.return_value = MagicMock()
            get_llm("openai", "gpt-3.5-turbo", api_key="test-key")
            mock.assert_called_once_with(model="gpt-3.5-turbo", api_key="test-key", base_url=None)

    def test_openai_with_base_url(self):
        with patch("search_summarizer.providers.ChatOpenAI") as mock:
            mock.return_value = MagicMock()
            get_llm("openai", "gpt-4", api_key="test-key", base_url="http://localhost:8000")
            mock.assert_called_once_with(model="gpt-4", api_key="test-key", base_url="http://localhost:8000")

    def test_anthropic_provider(self):
        with patch("search_summarizer.providers.ChatAnthropic") as mock:
            mock.return_value = MagicMock()
            get_llm("anthropic", "claude-3-opus", api_key="test-key")
            mock.assert_called_once_with(model="claude-3-opus", api_key="test-key")

    def test_google_provider(self):
        with patch("search_summarizer.providers.ChatGoogle") as mock:
            mock.return_value = MagicMock()
            get_llm("google", "gemini-pro", api_key="test-key")
            mock.assert_called_once_with(model="gemini-pro", api_key="test-key")

    def test_groq_provider(self):
        with patch("search_summarizer.providers.ChatGroq") as mock:
            mock.return_value = MagicMock()
            get_llm("groq", "mixtral-8x7b", api_key="test-key")
            mock.assert_called_once_with(model="mixtral-8x7b", api_key="test-key")

    def test_openrouter_provider(self):
        with patch("search_summarizer.providers.ChatOpenRouter") as mock:
            mock.return_value = MagicMock()
            get_llm("openrouter", "openai/gpt-4", api_key="test-key")
            mock.assert_called_once_with(model="openai/gpt-4", api_key="test-key")

    def test_ollama_no_key_required(self):
        with patch("search_summarizer.providers.ChatOllama") as mock:
            mock.return_value = MagicMock()
            get_llm("ollama", "llama2")
            mock.assert_called_once_with(model="llama2", host=None)

    def test_azure_requires_endpoint(self):
        with pytest.raises(LLMProviderError, match="AZURE_ENDPOINT"):
            get_llm("azure_openai", "gpt-4", api_key="test-key")

    def test_azure_with_endpoint(self):
        with patch("search_summarizer.providers.ChatAzureOpenAI") as mock:
            mock.return_value = MagicMock()
            get_llm("azure_openai", "gpt-4", api_key="test-key", azure_endpoint="https://test.openai.azure.com")
            mock.assert_called_once_with(
                model="gpt-4",
                api_key="test-key",
                azure_endpoint="https://test.openai.azure.com",
                api_version="2024-02-01",
            )


class TestErrorHandling:
    def test_missing_api_key_error_message_includes_env_var(self):
        with pytest.raises(LLMProviderError, match="OPENAI_API_KEY"):
            get_llm("openai", "gpt-4")

    def test_unsupported_provider_error(self):
        with pytest.raises(LLMProviderError, match="Unsupported provider"):
            get_llm("invalid_provider", "model", api_key="key")

    def test_constructor_failure_wrapped(self):
        with patch("search_summarizer.providers.ChatOpenAI", side_effect=TypeError("bad arg")):
            with pytest.raises(LLMProviderError, match="Failed to initialize openai LLM"):
                get_llm("openai", "gpt-4", api_key="key")

    def test_llm_provider_error_is_configuration_error(self):
        assert issubclass(LLMProviderError, ConfigurationError)


class TestGatewayBuilders:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for var in ("EXA_API_KEY", "OPENAI_API_KEY", "SUMMARIZER_SEARCH_API_KEY", "SUMMARIZER_LLM_API_KEY", "SUMMARIZER_LLM_PROVIDER"):
            monkeypatch.delenv(var, raising=False)

    def test_search_gateway_requires_key(self):
        with pytest.raises(ConfigurationError, match="EXA_API_KEY"):
            build_search_gateway(AppSettings())

    def test_search_gateway_from_env(self, monkeypatch):
        monkeypatch.setenv("EXA_API_KEY", "exa-key")
        gateway = build_search_gateway(AppSettings())
        assert isinstance(gateway, ExaSearchGateway)
        assert gateway.api_key == "exa-key"

    def test_summarization_gateway_uses_configured_model(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        with patch("search_summarizer.providers.ChatOpenAI") as mock:
            gateway = build_summarization_gateway(AppSettings())
        assert isinstance(gateway, SummarizationGateway)
        mock.assert_called_once_with(model="gpt-3.5-turbo", api_key="sk-test", base_url=None)
