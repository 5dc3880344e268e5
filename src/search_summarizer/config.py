"""Configuration management using Pydantic settings with optional file persistence."""

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Paths ---

APP_NAME = "search-summarizer"
SAVED_SEARCHES_FILENAME = "saved_searches.json"


def get_config_dir() -> Path:
    """Get the configuration directory (e.g. ~/.config/search-summarizer)."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home() / ".config")).expanduser()
    else:
        base = Path("~/.config").expanduser()

    path = base / APP_NAME
    path.mkdir(parents=True, exist_ok=True)
    return path


CONFIG_FILE = get_config_dir() / "config.json"


def load_config_file() -> dict[str, Any]:
    """Load settings from the JSON config file if it exists."""
    if not CONFIG_FILE.exists():
        return {}

    try:
        text = CONFIG_FILE.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        return json.loads(text)
    except (OSError, ValueError):
        return {}


def save_config_file(config_data: dict[str, Any]) -> None:
    """Save settings to the JSON config file."""
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(config_data, indent=2), encoding="utf-8")


# Standard environment variable names for API keys
# For providers with multiple common env var names, use a list (first match wins)
STANDARD_ENV_VAR_NAMES: dict[str, str | list[str]] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "google": ["GEMINI_API_KEY", "GOOGLE_API_KEY"],
    "azure_openai": "AZURE_OPENAI_API_KEY",
    "groq": "GROQ_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
}

# Providers that don't require an API key
NO_KEY_PROVIDERS = frozenset({"ollama"})

SEARCH_API_KEY_ENV_VAR = "EXA_API_KEY"

ProviderType = Literal[
    "openai",
    "anthropic",
    "google",
    "azure_openai",
    "groq",
    "openrouter",
    "ollama",
]


class LLMSettings(BaseSettings):
    """Summarization model configuration."""

    model_config = SettingsConfigDict(env_prefix="SUMMARIZER_LLM_")

    provider: ProviderType = Field(default="openai")
    model_name: str = Field(default="gpt-3.5-turbo")
    api_key: Optional[SecretStr] = Field(default=None, description="Generic API key override (highest priority)")
    base_url: Optional[str] = Field(default=None, description="Custom base URL for OpenAI-compatible APIs")

    # Azure OpenAI specific
    azure_endpoint: Optional[str] = Field(default=None, description="Azure OpenAI endpoint URL")
    azure_api_version: Optional[str] = Field(default="2024-02-01", description="Azure OpenAI API version")

    def get_api_key_for_provider(self) -> Optional[str]:
        """Resolve API key with priority: generic > standard > prefixed.

        Priority order:
        1. SUMMARIZER_LLM_API_KEY (generic override, applies to any provider)
        2. <PROVIDER>_API_KEY (standard name, e.g., OPENAI_API_KEY, GEMINI_API_KEY)
        3. SUMMARIZER_LLM_<PROVIDER>_API_KEY

        Returns:
            The resolved API key or None if not found.
        """
        if self.api_key:
            return self.api_key.get_secret_value()

        standard_vars = STANDARD_ENV_VAR_NAMES.get(self.provider)
        if standard_vars:
            if isinstance(standard_vars, str):
                standard_vars = [standard_vars]
            for var_name in standard_vars:
                key = os.environ.get(var_name)
                if key:
                    return key

        prefixed_var = f"SUMMARIZER_LLM_{self.provider.upper()}_API_KEY"
        return os.environ.get(prefixed_var)


class SearchSettings(BaseSettings):
    """Exa search API configuration."""

    model_config = SettingsConfigDict(env_prefix="SUMMARIZER_SEARCH_")

    api_key: Optional[SecretStr] = Field(default=None, description="Exa API key (falls back to EXA_API_KEY)")
    base_url: str = Field(default="https://api.exa.ai", description="Exa API base URL")

    def get_api_key(self) -> Optional[str]:
        """Resolve the search API key: explicit setting first, then EXA_API_KEY."""
        if self.api_key:
            return self.api_key.get_secret_value()
        return os.environ.get(SEARCH_API_KEY_ENV_VAR) or None


class StoreSettings(BaseSettings):
    """Saved-search persistence configuration."""

    model_config = SettingsConfigDict(env_prefix="SUMMARIZER_STORE_")

    path: Optional[str] = Field(default=None, description="Saved searches file (default: <config dir>/saved_searches.json)")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="SUMMARIZER_LOG_")

    level: str = Field(default="WARNING")
    json_logs: bool = Field(default=False, description="Render structured logs as JSON lines")


class AppSettings(BaseSettings):
    """Root application settings.

    Priority: Environment Variables > Config File > Defaults
    """

    model_config = SettingsConfigDict(env_prefix="SUMMARIZER_", extra="ignore")

    llm: LLMSettings = Field(default_factory=LLMSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def save(self) -> Path:
        """Save current configuration to file (excluding secrets)."""
        data = self.model_dump(mode="json", exclude_none=True)
        for section in ("llm", "search"):
            if section in data:
                data[section].pop("api_key", None)
        save_config_file(data)
        return CONFIG_FILE

    def get_store_path(self) -> Path:
        """Get the saved-searches file path."""
        if self.store.path:
            return Path(self.store.path).expanduser()
        return get_config_dir() / SAVED_SEARCHES_FILENAME


def _load_settings() -> AppSettings:
    """Load settings with file config as base, env vars overlay."""
    file_data = load_config_file()
    return AppSettings(**file_data)


settings = _load_settings()
