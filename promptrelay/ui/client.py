"""HTTP client for the prompt relay."""

import logging
import os

import httpx

from promptrelay.models.schemas import ErrorKind

logger = logging.getLogger(__name__)

RELAY_URL = os.getenv("RELAY_URL", "http://localhost:8000")
RELAY_CLIENT_TIMEOUT = float(os.getenv("RELAY_CLIENT_TIMEOUT", "120"))


class RelayClientError(Exception):
    """A relay call that did not produce an answer.

    Attributes:
        kind: Machine-readable error kind.
        message: Human-readable description.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


def _error_from_response(response: httpx.Response) -> RelayClientError:
    """Build an error from a non-200 relay response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None

    if isinstance(detail, dict):
        try:
            kind = ErrorKind(detail.get("kind"))
        except ValueError:
            kind = ErrorKind.PROVIDER_UNAVAILABLE
        return RelayClientError(kind, str(detail.get("message", "")))

    if response.status_code == 422:
        return RelayClientError(ErrorKind.INVALID_INPUT, "Prompt was rejected")
    return RelayClientError(
        ErrorKind.RELAY_UNAVAILABLE, f"HTTP {response.status_code}"
    )


class RelayClient:
    """Calls the relay's prompt and last answer endpoints.

    A fresh ``httpx.AsyncClient`` is opened per call. Pass ``transport``
    to route requests elsewhere, e.g. an ASGI app in tests.
    """

    def __init__(
        self,
        base_url: str = RELAY_URL,
        timeout: float = RELAY_CLIENT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _request(self, method: str, url: str, **kwargs) -> dict:
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise RelayClientError(
                ErrorKind.RELAY_UNAVAILABLE,
                f"Relay did not respond within {self._timeout:g} seconds",
            ) from e
        except httpx.RequestError as e:
            raise RelayClientError(
                ErrorKind.RELAY_UNAVAILABLE, f"Connection failed: {e}"
            ) from e

        if response.status_code != 200:
            raise _error_from_response(response)

        try:
            body = response.json()
        except ValueError as e:
            raise RelayClientError(
                ErrorKind.PROVIDER_MALFORMED_RESPONSE, "Relay returned invalid JSON"
            ) from e
        if not isinstance(body, dict):
            raise RelayClientError(
                ErrorKind.PROVIDER_MALFORMED_RESPONSE, "Relay returned unexpected body"
            )
        return body

    async def submit_prompt(self, prompt: str, session_id: str | None = None) -> str:
        """Submit a prompt and return the answer text.

        Raises:
            RelayClientError: If the relay or provider fails.
        """
        body = await self._request(
            "POST",
            "/prompt",
            json={"prompt": prompt, "session_id": session_id},
        )
        answer = body.get("data")
        if not isinstance(answer, str):
            raise RelayClientError(
                ErrorKind.PROVIDER_MALFORMED_RESPONSE, "Relay response has no answer"
            )
        return answer

    async def get_last_answer(self, session_id: str) -> str | None:
        """Return the last answer the relay recorded for a session."""
        body = await self._request("GET", "/", params={"session_id": session_id})
        answer = body.get("data")
        if answer is not None and not isinstance(answer, str):
            raise RelayClientError(
                ErrorKind.PROVIDER_MALFORMED_RESPONSE, "Relay returned a non-text answer"
            )
        return answer
