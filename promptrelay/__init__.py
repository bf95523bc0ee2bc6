"""Prompt relay - chat front end for a hosted text-generation API.

Combines FastAPI for the relay endpoints, NiceGUI for the chat page,
and Pydantic for validation and configuration.

Components:
    - api: HTTP endpoints and error mapping
    - relay: Provider calls with timeout and per-session last answers
    - provider: Replicate and OpenAI-compatible text generation
    - ui: Chat page, session state machine, and relay client
    - models: Request/response schemas
"""

__version__ = "0.1.0"
