"""Relay configuration with environment variable loading."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()


class RelayConfig(BaseModel):
    """Configuration for the relay service.

    Attributes:
        allowed_origin: The single origin allowed by CORS.
        timeout_seconds: Upper bound on one provider call.
        max_sessions: Number of per-session answer slots kept in memory.
    """

    model_config = ConfigDict(validate_default=True)

    allowed_origin: str = Field(
        default_factory=lambda: os.getenv("ALLOWED_ORIGIN", "http://localhost:8080"),
        description="Origin allowed to call the relay from a browser",
    )
    timeout_seconds: float = Field(
        default_factory=lambda: os.getenv("PROVIDER_TIMEOUT", "60"),
        gt=0.0,
        le=600.0,
        description="Seconds to wait for the provider before giving up",
    )
    max_sessions: int = Field(
        default_factory=lambda: os.getenv("MAX_SESSIONS", "1024"),
        ge=1,
        description="Maximum number of sessions with a stored last answer",
    )


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment."""
    return RelayConfig()
