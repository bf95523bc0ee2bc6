"""Chat session state for one browser tab.

The session moves IDLE -> SUBMITTING -> IDLE (answer appended) or ERROR
(error recorded). Only one submission is in flight at a time.
"""

import asyncio
import logging
import uuid
from enum import Enum
from typing import Protocol

from promptrelay.models.schemas import ErrorKind, Exchange
from promptrelay.ui.client import RelayClientError

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    ERROR = "error"


class PromptSubmitter(Protocol):
    async def submit_prompt(self, prompt: str, session_id: str | None = None) -> str: ...


class ChatSession:
    """Manages conversation state for a user session."""

    def __init__(self, client: PromptSubmitter) -> None:
        self._client = client
        self.exchanges: list[Exchange] = []
        self.session_id: str = str(uuid.uuid4())
        self.state: SessionState = SessionState.IDLE
        self.error: RelayClientError | None = None
        self._pending: asyncio.Future[str] | None = None
        self._generation = 0

    @property
    def busy(self) -> bool:
        return self.state is SessionState.SUBMITTING

    async def submit(self, prompt: str) -> Exchange | None:
        """Send a prompt and append the resulting exchange.

        Ignored while another submission is in flight. Failures are recorded
        in ``error`` and leave the conversation untouched.

        Args:
            prompt: Text typed by the user.

        Returns:
            The new Exchange, or None if nothing was appended.
        """
        if self.busy:
            logger.warning("Ignoring prompt while a submission is in flight")
            return None

        if not prompt:
            self.state = SessionState.ERROR
            self.error = RelayClientError(ErrorKind.INVALID_INPUT, "Prompt must not be empty")
            return None

        self.state = SessionState.SUBMITTING
        self.error = None
        pending = asyncio.ensure_future(
            self._client.submit_prompt(prompt, session_id=self.session_id)
        )
        self._pending = pending
        generation = self._generation

        try:
            answer = await pending
        except RelayClientError as e:
            if generation != self._generation:
                return None
            logger.warning(f"Submission failed ({e.kind.value}): {e.message}")
            self.state = SessionState.ERROR
            self.error = e
            return None
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            logger.info("Submission cancelled")
            return None
        finally:
            # cancel() detaches the future and resets state itself
            if self._pending is pending:
                self._pending = None
                if self.state is SessionState.SUBMITTING:
                    self.state = SessionState.IDLE

        # Answers for a conversation that was reset meanwhile are dropped
        if generation != self._generation:
            logger.info("Discarding answer for a previous conversation")
            return None

        exchange = Exchange(prompt=prompt, answer=answer)
        self.exchanges.append(exchange)
        return exchange

    def cancel(self) -> bool:
        """Cancel the in-flight submission, if any.

        Returns:
            True if a submission was cancelled.
        """
        pending = self._pending
        if pending is None or pending.done():
            return False
        self._pending = None
        pending.cancel()
        self.state = SessionState.IDLE
        return True

    def reset(self) -> None:
        """Start a new conversation under a new session id."""
        self.cancel()
        self._generation += 1
        self.exchanges.clear()
        self.session_id = str(uuid.uuid4())
        self.state = SessionState.IDLE
        self.error = None
