"""Chat model and gateway factories using browser-use native providers."""

from typing import TYPE_CHECKING

from browser_use import (
    ChatAnthropic,
    ChatAzureOpenAI,
    ChatGoogle,
    ChatGroq,
    ChatOllama,
    ChatOpenAI,
)
from browser_use.llm.openrouter.chat import ChatOpenRouter

from .config import NO_KEY_PROVIDERS, SEARCH_API_KEY_ENV_VAR, STANDARD_ENV_VAR_NAMES, AppSettings
from .exceptions import ConfigurationError, LLMProviderError
from .gateways import ExaSearchGateway, SummarizationGateway

if TYPE_CHECKING:
    from browser_use.llm.base import BaseChatModel


def get_llm(
    provider: str,
    model: str,
    api_key: str | None = None,
    base_url: str | None = None,
    **kwargs,
) -> "BaseChatModel":
    """Create the summarization chat model.

    Supported providers:
    - openai: OpenAI GPT models (default)
    - anthropic: Claude models
    - google: Gemini models
    - azure_openai: Azure-hosted OpenAI models
    - groq: Groq-hosted models
    - openrouter: OpenRouter API
    - ollama: Local Ollama models (no API key required)

    Args:
        provider: LLM provider name
        model: Model name/identifier
        api_key: API key for the provider (not required for ollama)
        base_url: Custom base URL for OpenAI-compatible APIs
        **kwargs: Provider-specific options:
            - azure_endpoint: Azure OpenAI endpoint URL
            - azure_api_version: Azure OpenAI API version (default: 2024-02-01)

    Returns:
        Configured BaseChatModel instance

    Raises:
        LLMProviderError: If provider is unsupported or API key is missing
    """
    requires_api_key = provider not in NO_KEY_PROVIDERS and not base_url
    if requires_api_key and not api_key:
        standard_var = STANDARD_ENV_VAR_NAMES.get(provider, "API key")
        raise LLMProviderError(f"API key required for provider '{provider}'. Set {standard_var} or SUMMARIZER_LLM_API_KEY environment variable.")

    try:
        match provider:
            case "openai":
                return ChatOpenAI(model=model, api_key=api_key, base_url=base_url)

            case "anthropic":
                return ChatAnthropic(model=model, api_key=api_key)

            case "google":
                return ChatGoogle(model=model, api_key=api_key)

            case "azure_openai":
                azure_endpoint = kwargs.get("azure_endpoint")
                azure_api_version = kwargs.get("azure_api_version") or "2024-02-01"
                if not azure_endpoint:
                    raise LLMProviderError("Azure OpenAI requires SUMMARIZER_LLM_AZURE_ENDPOINT to be set.")
                return ChatAzureOpenAI(
                    model=model,
                    api_key=api_key,
                    azure_endpoint=azure_endpoint,
                    api_version=azure_api_version,
                )

            case "groq":
                return ChatGroq(model=model, api_key=api_key)

            case "openrouter":
                return ChatOpenRouter(model=model, api_key=api_key)

            case "ollama":
                return ChatOllama(model=model, host=base_url)

            case _:
                raise LLMProviderError(f"Unsupported provider: {provider}")

    except LLMProviderError:
        raise
    except Exception as e:
        raise LLMProviderError(f"Failed to initialize {provider} LLM: {e}") from e


def build_search_gateway(app_settings: AppSettings) -> ExaSearchGateway:
    """Create the search gateway from settings.

    Raises:
        ConfigurationError: If no search API key is configured
    """
    api_key = app_settings.search.get_api_key()
    if not api_key:
        raise ConfigurationError(f"Search API key required. Set {SEARCH_API_KEY_ENV_VAR} or SUMMARIZER_SEARCH_API_KEY environment variable.")
    return ExaSearchGateway(api_key=api_key, base_url=app_settings.search.base_url)


def build_summarization_gateway(app_settings: AppSettings) -> SummarizationGateway:
    """Create the summarization gateway from settings."""
    llm_settings = app_settings.llm
    llm = get_llm(
        provider=llm_settings.provider,
        model=llm_settings.model_name,
        api_key=llm_settings.get_api_key_for_provider(),
        base_url=llm_settings.base_url,
        azure_endpoint=llm_settings.azure_endpoint,
        azure_api_version=llm_settings.azure_api_version,
    )
    return SummarizationGateway(llm)
