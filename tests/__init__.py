"""Test package for the prompt relay.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP and client workflows against the FastAPI app

Providers are stubbed; no test calls a hosted model API.
"""
