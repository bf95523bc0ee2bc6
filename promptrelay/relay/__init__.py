"""Prompt relay between HTTP callers and the text-generation provider.

Owns the provider timeout and the per-session last answer slots.
Maintains clean separation from the HTTP layer.
"""

from promptrelay.relay.config import RelayConfig, get_relay_config
from promptrelay.relay.service import AnswerStore, RelayService, get_relay_service

__all__ = [
    "AnswerStore",
    "RelayConfig",
    "RelayService",
    "get_relay_config",
    "get_relay_service",
]
