"""Pydantic models for relay requests, responses, and client state.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - PromptRequest: Incoming prompt payload
    - PromptResponse: Answer returned for a prompt
    - LastAnswerResponse: Last answer recorded for a session
    - ErrorDetail: Machine-readable error body
    - Exchange: Immutable prompt/answer pair shown in the chat
"""

from promptrelay.models.schemas import (
    ErrorDetail,
    ErrorKind,
    Exchange,
    LastAnswerResponse,
    PromptRequest,
    PromptResponse,
)

__all__ = [
    "ErrorDetail",
    "ErrorKind",
    "Exchange",
    "LastAnswerResponse",
    "PromptRequest",
    "PromptResponse",
]
