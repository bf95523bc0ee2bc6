"""Provider interface, error types, and fragment handling.

A provider turns a prompt into a sequence of text fragments. The relay joins
the fragments in order with no separator to form the answer.
"""

from collections.abc import AsyncIterable, Iterable
from typing import Any, Protocol

from promptrelay.models.schemas import ErrorKind


class ProviderError(Exception):
    """Base class for failures reported by a text-generation provider."""

    kind: ErrorKind = ErrorKind.PROVIDER_UNAVAILABLE


class ProviderUnavailableError(ProviderError):
    """Raised on network, timeout, authentication, or SDK failures."""

    kind = ErrorKind.PROVIDER_UNAVAILABLE


class ProviderMalformedResponseError(ProviderError):
    """Raised when provider output is not a sequence of text fragments."""

    kind = ErrorKind.PROVIDER_MALFORMED_RESPONSE


class TextProvider(Protocol):
    """Anything that can generate raw output for a prompt."""

    async def generate(self, prompt: str) -> Any:
        """Return the provider's raw output for ``prompt``."""
        ...


async def collect_fragments(output: Any) -> list[str]:
    """Materialize provider output as a list of text fragments.

    Accepts lists, tuples, iterators and async iterators of strings.

    Args:
        output: Raw value returned by a provider.

    Returns:
        The fragments, in order.

    Raises:
        ProviderMalformedResponseError: If output is a bare string, None,
            not iterable, or contains a non-string item.
    """
    if output is None or isinstance(output, (str, bytes)):
        raise ProviderMalformedResponseError(
            f"Expected a sequence of text fragments, got {type(output).__name__}"
        )

    if isinstance(output, AsyncIterable):
        fragments = [item async for item in output]
    elif isinstance(output, Iterable):
        fragments = list(output)
    else:
        raise ProviderMalformedResponseError(
            f"Expected a sequence of text fragments, got {type(output).__name__}"
        )

    for index, fragment in enumerate(fragments):
        if not isinstance(fragment, str):
            raise ProviderMalformedResponseError(
                f"Fragment {index} is {type(fragment).__name__}, not str"
            )
    return fragments


def join_fragments(fragments: list[str]) -> str:
    return "".join(fragments)
