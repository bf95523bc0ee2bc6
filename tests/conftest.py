"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - stub_provider: Provider returning scripted fragments
    - relay_config: Relay configuration with a short timeout
    - relay_service: RelayService wired to the stub provider
    - app: FastAPI app whose relay dependency uses the stub
    - async_client: HTTPX client for API testing
"""

import asyncio
from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from promptrelay.api.app import create_app
from promptrelay.relay.config import RelayConfig
from promptrelay.relay.service import RelayService, get_relay_service

TEST_ORIGIN = "http://localhost:5173"


class StubProvider:
    """Provider double returning a scripted output or raising a scripted error.

    Attributes:
        output: Raw output returned for every prompt.
        error: Exception raised instead of returning output.
        delay: Seconds to sleep before answering.
        prompts: Prompts received, in order.
    """

    def __init__(
        self,
        output: Any = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.output = ["Hi", " there"] if output is None else output
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> Any:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def stub_provider() -> StubProvider:
    """Return a provider answering every prompt with ["Hi", " there"]."""
    return StubProvider()


@pytest.fixture
def relay_config() -> RelayConfig:
    """Return relay configuration with a short provider timeout."""
    return RelayConfig(
        allowed_origin=TEST_ORIGIN,
        timeout_seconds=0.2,
        max_sessions=8,
    )


@pytest.fixture
def relay_service(stub_provider: StubProvider, relay_config: RelayConfig) -> RelayService:
    """Return a relay service backed by the stub provider."""
    return RelayService(provider=stub_provider, config=relay_config)


@pytest.fixture
def app(
    relay_service: RelayService, relay_config: RelayConfig
) -> Generator[FastAPI]:
    """Create the API with the relay dependency overridden.

    Yields:
        FastAPI application using the stub-backed relay service.
    """
    application = create_app(relay_config)
    application.dependency_overrides[get_relay_service] = lambda: relay_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
