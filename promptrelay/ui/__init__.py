"""NiceGUI interface - thin visualization layer for the prompt relay.

Responsibilities:
    - Prompt input with a single in-flight submission
    - Loading indicator while the relay answers
    - Ordered list of prompt/answer exchanges
    - Visible error state and cancellation

Contains no provider logic. Delegates all generation to the relay API.
"""
