from __future__ import annotations


class ContextError(Exception):
    """Terminal error of a fired cancellation token."""


class Canceled(ContextError):
    def __init__(self, message: str = "context canceled") -> None:
        super().__init__(message)


class DeadlineExceeded(ContextError, TimeoutError):
    def __init__(self, message: str = "context deadline exceeded") -> None:
        super().__init__(message)
