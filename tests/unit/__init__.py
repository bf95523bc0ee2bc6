"""Unit tests for individual components in isolation.

Coverage:
    - provider/: Configuration, fragment handling, vendor SDK wrappers
    - relay/: Timeout, error propagation, per-session answers
    - ui/: Chat session state machine

Uses mocks for vendor SDKs.
"""
