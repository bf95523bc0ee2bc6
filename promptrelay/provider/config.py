"""Provider configuration with environment variable loading.

Pydantic-based configuration for the hosted text-generation provider.
Supports Replicate and any OpenAI-compatible API via custom base URL.
"""

import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODELS: dict[str, str] = {
    "replicate": "ibm-granite/granite-3.3-8b-instruct",
    "openai": "gpt-4o-mini",
}


def _api_key_from_env() -> str:
    return (
        os.getenv("PROVIDER_API_KEY")
        or os.getenv("REPLICATE_API_TOKEN")
        or os.getenv("OPENAI_API_KEY", "")
    )


class ProviderConfig(BaseModel):
    """Configuration for the text-generation provider.

    Attributes:
        provider: Which hosted API to call ("replicate" or "openai").
        api_key: Credential for the provider.
        base_url: API base URL for OpenAI-compatible servers (None for default).
        model_name: Model identifier; defaults per provider when unset.
    """

    model_config = ConfigDict(validate_default=True)

    provider: Literal["replicate", "openai"] = Field(
        default_factory=lambda: os.getenv("PROVIDER", "replicate").strip().lower(),
        description="Hosted API used for generation",
    )
    api_key: str = Field(
        default_factory=_api_key_from_env,
        description="API key for the provider",
    )
    base_url: str | None = Field(
        default_factory=lambda: os.getenv("PROVIDER_BASE_URL") or None,
        description="API base URL (None for provider default)",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("PROVIDER_MODEL", ""),
        description="Model to use",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set PROVIDER_API_KEY, REPLICATE_API_TOKEN "
                "or OPENAI_API_KEY in .env"
            )
        return v.strip()

    @model_validator(mode="after")
    def default_model_name(self) -> "ProviderConfig":
        """Fall back to the provider's default model."""
        if not self.model_name.strip():
            self.model_name = DEFAULT_MODELS[self.provider]
        return self


def get_provider_config() -> ProviderConfig:
    """Create provider configuration from environment.

    Returns:
        Configured ProviderConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return ProviderConfig()
