"""Integration tests for components working together as a system.

Coverage:
    - Relay endpoints with real HTTP requests over ASGITransport
    - RelayClient and ChatSession driving the relay app

The provider is replaced through FastAPI dependency overrides.
"""
