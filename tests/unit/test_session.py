"""Unit tests for the ChatSession state machine."""

import asyncio

import pytest

from promptrelay.models.schemas import ErrorKind, Exchange
from promptrelay.ui.client import RelayClientError
from promptrelay.ui.session import ChatSession, SessionState


class FakeRelayClient:
    """Relay client double answering from a script."""

    def __init__(self, answers: dict[str, str] | None = None) -> None:
        self.answers = answers or {"Hello": "Hi there"}
        self.error: RelayClientError | None = None
        self.gate: asyncio.Event | None = None
        self.calls: list[tuple[str, str | None]] = []

    async def submit_prompt(self, prompt: str, session_id: str | None = None) -> str:
        self.calls.append((prompt, session_id))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.answers.get(prompt, prompt.upper())


@pytest.fixture
def fake_client() -> FakeRelayClient:
    return FakeRelayClient()


@pytest.fixture
def session(fake_client: FakeRelayClient) -> ChatSession:
    return ChatSession(fake_client)


class TestSubmit:
    """Tests for ChatSession.submit."""

    def test_initial_state(self, session: ChatSession) -> None:
        """A new session is idle with an empty conversation."""
        assert session.state is SessionState.IDLE
        assert session.busy is False
        assert session.exchanges == []
        assert session.error is None

    async def test_success_appends_exchange(
        self, session: ChatSession, fake_client: FakeRelayClient
    ) -> None:
        """"Hello" answered with "Hi there" becomes one exchange."""
        exchange = await session.submit("Hello")

        assert exchange == Exchange(prompt="Hello", answer="Hi there")
        assert session.exchanges == [exchange]
        assert session.busy is False
        assert session.state is SessionState.IDLE
        assert fake_client.calls == [("Hello", session.session_id)]

    async def test_exchanges_kept_in_submission_order(self, session: ChatSession) -> None:
        """N successful submissions give N exchanges in order."""
        prompts = ["one", "two", "three", "two"]
        for prompt in prompts:
            await session.submit(prompt)

        assert [e.prompt for e in session.exchanges] == prompts
        assert [e.answer for e in session.exchanges] == ["ONE", "TWO", "THREE", "TWO"]

    async def test_empty_prompt_is_invalid_input(
        self, session: ChatSession, fake_client: FakeRelayClient
    ) -> None:
        """An empty prompt is rejected without calling the relay."""
        result = await session.submit("")

        assert result is None
        assert session.state is SessionState.ERROR
        assert session.error is not None
        assert session.error.kind is ErrorKind.INVALID_INPUT
        assert session.busy is False
        assert session.exchanges == []
        assert fake_client.calls == []

    async def test_failure_records_error(
        self, session: ChatSession, fake_client: FakeRelayClient
    ) -> None:
        """A relay error clears busy and leaves the conversation unchanged."""
        await session.submit("Hello")
        fake_client.error = RelayClientError(
            ErrorKind.PROVIDER_UNAVAILABLE, "Provider did not respond within 60 seconds"
        )

        result = await session.submit("Again")

        assert result is None
        assert session.busy is False
        assert session.state is SessionState.ERROR
        assert session.error is fake_client.error
        assert len(session.exchanges) == 1

    async def test_error_cleared_by_next_success(
        self, session: ChatSession, fake_client: FakeRelayClient
    ) -> None:
        """Submitting from the error state works and clears the error."""
        fake_client.error = RelayClientError(ErrorKind.RELAY_UNAVAILABLE, "down")
        await session.submit("Hello")
        fake_client.error = None

        await session.submit("Hello")

        assert session.state is SessionState.IDLE
        assert session.error is None
        assert len(session.exchanges) == 1

    async def test_unexpected_error_still_clears_busy(self, session: ChatSession) -> None:
        """Busy is reset even when the client raises something unexpected."""

        async def boom(prompt: str, session_id: str | None = None) -> str:
            raise RuntimeError("bug")

        session._client.submit_prompt = boom  # type: ignore[method-assign]

        with pytest.raises(RuntimeError):
            await session.submit("Hello")

        assert session.busy is False
        assert session.exchanges == []

    async def test_second_submit_ignored_while_busy(
        self, session: ChatSession, fake_client: FakeRelayClient
    ) -> None:
        """Only one submission runs at a time."""
        fake_client.gate = asyncio.Event()
        first = asyncio.create_task(session.submit("Hello"))
        await asyncio.sleep(0)

        assert session.busy is True
        assert await session.submit("Second") is None

        fake_client.gate.set()
        await first

        assert fake_client.calls == [("Hello", session.session_id)]
        assert [e.prompt for e in session.exchanges] == ["Hello"]
        assert session.busy is False


class TestCancel:
    """Tests for cancellation and reset."""

    async def test_cancel_resets_state(
        self, session: ChatSession, fake_client: FakeRelayClient
    ) -> None:
        """Cancelling returns to idle without appending an exchange."""
        fake_client.gate = asyncio.Event()
        task = asyncio.create_task(session.submit("Hello"))
        await asyncio.sleep(0)

        assert session.cancel() is True
        assert session.busy is False

        assert await task is None
        assert session.state is SessionState.IDLE
        assert session.exchanges == []

    def test_cancel_without_submission(self, session: ChatSession) -> None:
        """Cancelling an idle session is a no-op."""
        assert session.cancel() is False
        assert session.state is SessionState.IDLE

    async def test_outer_cancellation_propagates(
        self, session: ChatSession, fake_client: FakeRelayClient
    ) -> None:
        """Cancelling the caller's task re-raises but still clears busy."""
        fake_client.gate = asyncio.Event()
        task = asyncio.create_task(session.submit("Hello"))
        await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert session.busy is False
        assert session.exchanges == []

    async def test_reset_starts_new_conversation(self, session: ChatSession) -> None:
        """Reset clears exchanges and issues a new session id."""
        await session.submit("Hello")
        old_id = session.session_id

        session.reset()

        assert session.exchanges == []
        assert session.session_id != old_id
        assert session.state is SessionState.IDLE

    async def test_reset_while_busy_cancels(
        self, session: ChatSession, fake_client: FakeRelayClient
    ) -> None:
        """Reset during a submission cancels it."""
        fake_client.gate = asyncio.Event()
        task = asyncio.create_task(session.submit("Hello"))
        await asyncio.sleep(0)

        session.reset()

        assert await task is None
        assert session.busy is False
        assert session.exchanges == []

    async def test_reset_after_answer_arrived_discards_it(
        self, session: ChatSession, fake_client: FakeRelayClient
    ) -> None:
        """An answer that lands just before reset stays out of the new conversation."""
        task = asyncio.create_task(session.submit("Hello"))
        await asyncio.sleep(0)
        pending = session._pending
        assert pending is not None
        while not pending.done():
            await asyncio.sleep(0)
        old_id = session.session_id

        session.reset()

        assert await task is None
        assert session.exchanges == []
        assert session.session_id != old_id
        assert session.state is SessionState.IDLE
        assert session.busy is False

    async def test_reset_after_failure_arrived_keeps_new_conversation_clean(
        self, session: ChatSession, fake_client: FakeRelayClient
    ) -> None:
        """A failure for the previous conversation is not recorded after reset."""
        fake_client.error = RelayClientError(ErrorKind.PROVIDER_UNAVAILABLE, "down")
        task = asyncio.create_task(session.submit("Hello"))
        await asyncio.sleep(0)
        pending = session._pending
        assert pending is not None
        while not pending.done():
            await asyncio.sleep(0)

        session.reset()

        assert await task is None
        assert session.state is SessionState.IDLE
        assert session.error is None

    async def test_submit_after_reset_uses_new_session(
        self, session: ChatSession, fake_client: FakeRelayClient
    ) -> None:
        """The first prompt after reset is the only exchange of the new conversation."""
        fake_client.gate = asyncio.Event()
        old = asyncio.create_task(session.submit("Hello"))
        await asyncio.sleep(0)
        session.reset()
        fake_client.gate.set()

        exchange = await session.submit("Again")
        assert await old is None

        assert session.exchanges == [exchange]
        assert fake_client.calls[-1] == ("Again", session.session_id)
