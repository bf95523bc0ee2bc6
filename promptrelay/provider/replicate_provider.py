"""Replicate-hosted model provider."""

import logging

import httpx
from replicate import Client
from replicate.exceptions import ReplicateException

from promptrelay.provider.base import ProviderUnavailableError, collect_fragments
from promptrelay.provider.config import ProviderConfig

logger = logging.getLogger(__name__)


class ReplicateProvider:
    """Runs a prompt against a model hosted on Replicate.

    Language models on Replicate return their output as an iterator of text
    fragments, which is drained here so transport errors surface in one place.
    """

    def __init__(self, config: ProviderConfig) -> None:
        self._config = config
        self._client = Client(api_token=config.api_key)

    async def generate(self, prompt: str) -> list[str]:
        logger.debug(f"Running {self._config.model_name} on Replicate")
        try:
            output = await self._client.async_run(
                self._config.model_name,
                input={"prompt": prompt},
            )
            return await collect_fragments(output)
        except ReplicateException as e:
            raise ProviderUnavailableError(f"Replicate request failed: {e}") from e
        except httpx.HTTPError as e:
            raise ProviderUnavailableError(f"Could not reach Replicate: {e}") from e
