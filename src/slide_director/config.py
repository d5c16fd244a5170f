from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import (
    DotEnvSettingsSource,
    EnvSettingsSource,
    JsonConfigSettingsSource,
)

DEFAULT_STORAGE_DIR = Path(".slide_director")
DEFAULT_CONFIG_PATH = DEFAULT_STORAGE_DIR / "config.json"
DEFAULT_MAX_ITERATIONS = 25


class LLMProvider(str, Enum):
    """Model providers reachable through an OpenAI-compatible chat API."""

    OPENAI = "openai"
    OLLAMA = "ollama"
    GOOGLE = "google"
    VLLM = "vllm"


DEFAULT_BASE_URLS: Dict[LLMProvider, str] = {
    LLMProvider.OPENAI: "https://api.openai.com/v1",
    LLMProvider.GOOGLE: "https://generativelanguage.googleapis.com/v1beta/openai/",
    LLMProvider.OLLAMA: "http://localhost:11434/v1",
    LLMProvider.VLLM: "http://localhost:8000/v1",
}


def requires_api_key(provider: LLMProvider) -> bool:
    """Returns whether the provider refuses requests without an API key."""

    return provider in (LLMProvider.OPENAI, LLMProvider.GOOGLE)


def requires_base_url(provider: LLMProvider) -> bool:
    """Returns whether the provider is self-hosted and needs an endpoint."""

    return provider in (LLMProvider.OLLAMA, LLMProvider.VLLM)


class Config(BaseSettings):
    """
    Application configuration loaded from environment variables, .env, and JSON.
    """

    provider: LLMProvider = Field(
        default=LLMProvider.OPENAI, description="Chat model provider."
    )
    api_key: Optional[SecretStr] = Field(
        default=None, description="API key sent to the model provider."
    )
    base_url: Optional[str] = Field(
        default=None, description="Override for the provider endpoint."
    )
    model_name: str = Field(
        default="gpt-4o", description="Model name used by the slide agent."
    )
    temperature: float = Field(
        default=0.2, ge=0.0, le=2.0, description="Sampling temperature."
    )
    max_iterations: int = Field(
        default=DEFAULT_MAX_ITERATIONS,
        ge=1,
        description="Upper bound on model invocations within one run.",
    )
    storage_dir: Path = Field(
        default=DEFAULT_STORAGE_DIR,
        description="Root directory for decks and image assets.",
    )
    log_level: str = Field(default="WARNING", description="Root log level.")

    model_config = SettingsConfigDict(
        env_prefix="SLIDE_DIRECTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="forbid",
    )

    @model_validator(mode="after")
    def _check_provider(self) -> "Config":
        """
        Ensures self-hosted providers have an endpoint to talk to.

        Returns:
            The validated configuration instance.
        """
        if self.base_url is None and requires_base_url(self.provider):
            self.base_url = DEFAULT_BASE_URLS[self.provider]
        self.log_level = self.log_level.upper()
        return self

    @staticmethod
    def _secret_to_str(secret: Optional[SecretStr]) -> Optional[str]:
        """Return the underlying secret value if present."""

        if secret is None:
            return None
        return secret.get_secret_value()

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """
        Loads configuration from a JSON file when present.

        Environment variables and .env entries take precedence over the file.

        Args:
            path: Optional override path for the JSON config file.

        Returns:
            A validated configuration object.
        """
        config_path = path or DEFAULT_CONFIG_PATH
        if not config_path.exists():
            return cls()

        json_source = JsonConfigSettingsSource(cls, json_file=config_path)
        dotenv_source = DotEnvSettingsSource(cls)
        env_source = EnvSettingsSource(cls)
        merged: dict[str, object] = {}
        merged.update(json_source())
        merged.update(dotenv_source())
        merged.update(env_source())
        return cls.model_validate(merged)

    def get_api_key(self) -> Optional[str]:
        """
        Returns the provider API key for runtime usage.

        Returns:
            The API key or None if unset.
        """
        return self._secret_to_str(self.api_key)

    def get_base_url(self) -> str:
        """Returns the configured endpoint, falling back to the provider default."""

        return self.base_url or DEFAULT_BASE_URLS[self.provider]

    def is_configured(self) -> bool:
        """Returns whether enough settings exist to reach the provider."""

        if requires_api_key(self.provider):
            return bool(self.get_api_key())
        return True

    def get_images_dir(self) -> Path:
        """Returns the directory holding image assets."""

        return self.storage_dir / "images"

    def get_presentations_dir(self) -> Path:
        """Returns the directory holding saved decks."""

        return self.storage_dir / "presentations"
