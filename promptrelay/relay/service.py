"""Relay service: forwards prompts to the provider and records answers.

Each answer is returned to its caller and also kept as the last answer of
the caller's session. Sessions never see each other's answers.
"""

import asyncio
import logging
import uuid
from collections import OrderedDict

from promptrelay.provider import (
    ProviderUnavailableError,
    TextProvider,
    collect_fragments,
    get_provider,
    join_fragments,
)
from promptrelay.relay.config import RelayConfig, get_relay_config

logger = logging.getLogger(__name__)


class AnswerStore:
    """Bounded map of session id to that session's last answer.

    The least recently written session is evicted once ``max_sessions``
    is exceeded.
    """

    def __init__(self, max_sessions: int) -> None:
        self._max_sessions = max_sessions
        self._answers: OrderedDict[str, str] = OrderedDict()

    def get(self, session_id: str | None) -> str | None:
        if session_id is None:
            return None
        return self._answers.get(session_id)

    def put(self, session_id: str, answer: str) -> None:
        self._answers[session_id] = answer
        self._answers.move_to_end(session_id)
        while len(self._answers) > self._max_sessions:
            evicted, _ = self._answers.popitem(last=False)
            logger.debug(f"Evicted last answer for session {evicted}")

    def __len__(self) -> int:
        return len(self._answers)


class RelayService:
    """Submits prompts to a provider under a timeout."""

    def __init__(
        self,
        provider: TextProvider,
        config: RelayConfig | None = None,
    ) -> None:
        """Initialize the relay service.

        Args:
            provider: Source of generated text fragments.
            config: Optional relay configuration.
                    Loads from environment if not provided.
        """
        self._provider = provider
        self._config = config or get_relay_config()
        self._answers = AnswerStore(self._config.max_sessions)

    def get_last_answer(self, session_id: str | None) -> str | None:
        """Return the last answer recorded for a session, or None."""
        return self._answers.get(session_id)

    async def submit_prompt(
        self,
        prompt: str,
        session_id: str | None = None,
    ) -> tuple[str, str]:
        """Generate an answer for a prompt.

        Args:
            prompt: The user's prompt, already validated as a non-empty string.
            session_id: Session to record the answer under; a new one is
                        issued when omitted.

        Returns:
            The answer and the session id it was recorded under.

        Raises:
            ProviderUnavailableError: If the provider fails or times out.
            ProviderMalformedResponseError: If the provider output is not a
                sequence of text fragments.
        """
        session_id = session_id or str(uuid.uuid4())

        try:
            fragments = await asyncio.wait_for(
                self._generate(prompt),
                timeout=self._config.timeout_seconds,
            )
        except TimeoutError as e:
            logger.warning(
                f"Provider timed out after {self._config.timeout_seconds}s "
                f"(session {session_id})"
            )
            raise ProviderUnavailableError(
                f"Provider did not respond within {self._config.timeout_seconds:g} seconds"
            ) from e

        answer = join_fragments(fragments)
        self._answers.put(session_id, answer)
        logger.info(
            f"Answered prompt for session {session_id} "
            f"({len(fragments)} fragments, {len(answer)} chars)"
        )
        return answer, session_id

    async def _generate(self, prompt: str) -> list[str]:
        output = await self._provider.generate(prompt)
        return await collect_fragments(output)


# Module-level singleton instance
_relay_service: RelayService | None = None


def get_relay_service() -> RelayService:
    """Get or create the global relay service.

    Returns:
        The RelayService instance.
    """
    global _relay_service
    if _relay_service is None:
        _relay_service = RelayService(provider=get_provider())
    return _relay_service
