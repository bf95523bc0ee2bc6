"""Prompt relay endpoints.

Handles prompt submission and last answer retrieval per session.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from promptrelay.models.schemas import (
    ErrorDetail,
    LastAnswerResponse,
    PromptRequest,
    PromptResponse,
)
from promptrelay.provider import ProviderError, ProviderMalformedResponseError
from promptrelay.relay.service import RelayService, get_relay_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["relay"])


def _provider_error_status(error: ProviderError) -> int:
    if isinstance(error, ProviderMalformedResponseError):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_503_SERVICE_UNAVAILABLE


@router.get("/", response_model=LastAnswerResponse)
async def get_last_answer(
    session_id: str | None = None,
    relay: RelayService = Depends(get_relay_service),
) -> LastAnswerResponse:
    """Return the last answer recorded for a session.

    Args:
        session_id: Session to look up; without one nothing is returned.

    Returns:
        LastAnswerResponse with the answer, or null data while pending.
    """
    return LastAnswerResponse(data=relay.get_last_answer(session_id))


@router.post(
    "/prompt",
    response_model=PromptResponse,
    responses={
        422: {"model": ErrorDetail, "description": "Invalid prompt"},
        502: {"model": ErrorDetail, "description": "Malformed provider response"},
        503: {"model": ErrorDetail, "description": "Provider unavailable"},
    },
)
async def submit_prompt(
    request: PromptRequest,
    relay: RelayService = Depends(get_relay_service),
) -> PromptResponse:
    """Forward a prompt to the provider and return its answer.

    Args:
        request: The prompt and optional session id.

    Returns:
        PromptResponse with the concatenated answer and session id.

    Raises:
        422: Prompt missing, empty, or not a string.
        502: Provider returned something other than text fragments.
        503: Provider failed or timed out.
    """
    try:
        answer, session_id = await relay.submit_prompt(
            request.prompt,
            session_id=request.session_id,
        )
    except ProviderError as e:
        logger.warning(f"Provider error ({e.kind.value}): {e}")
        raise HTTPException(
            status_code=_provider_error_status(e),
            detail=ErrorDetail(kind=e.kind, message=str(e)).model_dump(mode="json"),
        ) from e

    return PromptResponse(data=answer, session_id=session_id)
