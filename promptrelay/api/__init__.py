"""FastAPI endpoints for the prompt relay.

Endpoints:
    - GET /: Last answer for a session
    - POST /prompt: Submit a prompt and receive the answer
    - GET /health: Service health status
"""

from promptrelay.api.app import app, create_app

__all__ = ["app", "create_app"]
