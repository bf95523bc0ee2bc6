"""Text-generation providers behind a single interface.

Responsibilities:
    - Provider configuration from the environment
    - Replicate-hosted models via the replicate SDK
    - OpenAI-compatible models via an Agno agent
    - Error taxonomy shared with the relay

The relay only depends on the TextProvider protocol, so tests substitute
a stub without touching any vendor SDK.
"""

import logging

from promptrelay.provider.base import (
    ProviderError,
    ProviderMalformedResponseError,
    ProviderUnavailableError,
    TextProvider,
    collect_fragments,
    join_fragments,
)
from promptrelay.provider.config import ProviderConfig, get_provider_config

logger = logging.getLogger(__name__)


def create_provider(config: ProviderConfig) -> TextProvider:
    """Build the provider selected by ``config.provider``.

    Vendor SDKs are imported lazily so only the selected one is required
    at runtime.
    """
    if config.provider == "openai":
        from promptrelay.provider.agno_provider import AgnoProvider

        provider: TextProvider = AgnoProvider(config)
    else:
        from promptrelay.provider.replicate_provider import ReplicateProvider

        provider = ReplicateProvider(config)

    logger.info(f"Using {config.provider} provider with model {config.model_name}")
    return provider


# Module-level singleton instance
_provider: TextProvider | None = None


def get_provider() -> TextProvider:
    """Get or create the global provider.

    Returns:
        The configured TextProvider instance.
    """
    global _provider
    if _provider is None:
        _provider = create_provider(get_provider_config())
    return _provider


__all__ = [
    "ProviderConfig",
    "ProviderError",
    "ProviderMalformedResponseError",
    "ProviderUnavailableError",
    "TextProvider",
    "collect_fragments",
    "create_provider",
    "get_provider",
    "get_provider_config",
    "join_fragments",
]
