from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ErrorKind(str, Enum):
    """Machine-readable error kinds reported by the relay and the client."""

    INVALID_INPUT = "invalid_input"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    PROVIDER_MALFORMED_RESPONSE = "provider_malformed_response"
    RELAY_UNAVAILABLE = "relay_unavailable"


class PromptRequest(BaseModel):
    """Request payload for the prompt endpoint.

    Attributes:
        prompt: Text forwarded verbatim to the provider.
        session_id: Optional session whose last answer slot is updated.
    """

    prompt: StrictStr = Field(..., min_length=1)
    session_id: str | None = None


class PromptResponse(BaseModel):
    """Successful answer to a prompt.

    Attributes:
        message: Fixed acknowledgement text.
        data: The concatenated provider output.
        session_id: Session the answer was recorded under.
    """

    message: str = "Data received successfully!"
    data: str
    session_id: str


class LastAnswerResponse(BaseModel):
    """Last answer recorded for a session, or None while nothing is recorded."""

    data: str | None = None


class ErrorDetail(BaseModel):
    """Body of the ``detail`` field on every non-200 relay response."""

    kind: ErrorKind
    message: str


class Exchange(BaseModel):
    """One prompt and the answer it produced."""

    model_config = ConfigDict(frozen=True)

    prompt: str
    answer: str
