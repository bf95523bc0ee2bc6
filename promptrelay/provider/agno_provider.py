"""OpenAI-compatible provider built on an Agno agent.

The agent runs with streaming enabled and each content event becomes one
fragment. Agno reports model failures as an error event in the stream
rather than raising, so that event is turned into an exception here.
No storage, knowledge base, or history is attached, so every prompt is
answered independently.
"""

import logging

import httpx
from agno.agent import Agent
from agno.exceptions import ModelProviderError
from agno.models.openai import OpenAIChat
from agno.run.agent import RunContentEvent, RunErrorEvent

from promptrelay.provider.base import ProviderUnavailableError
from promptrelay.provider.config import ProviderConfig

logger = logging.getLogger(__name__)


class AgnoProvider:
    """Wraps an Agno agent as a fragment-producing provider."""

    def __init__(self, config: ProviderConfig) -> None:
        self._config = config
        self._agent = self._create_agent()

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Agent backed by an OpenAI-compatible chat model.
        """
        model = OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
        )
        return Agent(model=model)

    async def generate(self, prompt: str) -> list[object]:
        """Collect streamed content for a prompt.

        Args:
            prompt: The user's prompt.

        Returns:
            Content of each content event in arrival order.

        Raises:
            ProviderUnavailableError: If the model API call fails or the
                stream reports an error event.
        """
        logger.debug(f"Running {self._config.model_name} via Agno")
        fragments: list[object] = []
        try:
            async for event in self._agent.arun(prompt, stream=True):
                if isinstance(event, RunErrorEvent):
                    raise ProviderUnavailableError(f"Model provider error: {event.content}")
                if isinstance(event, RunContentEvent) and event.content:
                    fragments.append(event.content)
        except ModelProviderError as e:
            raise ProviderUnavailableError(f"Model provider error: {e}") from e
        except httpx.HTTPError as e:
            raise ProviderUnavailableError(f"Could not reach model API: {e}") from e
        return fragments
