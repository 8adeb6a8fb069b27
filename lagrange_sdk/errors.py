"""Errors shared across the SDK."""

from __future__ import annotations


class ContextCanceledError(Exception):
    """Raised when work stops because it was cancelled."""

    def __init__(self, message: str = "context canceled") -> None:
        super().__init__(message)


class DataError(Exception):
    """Raised when received data cannot be used."""

    def __init__(self, message: str = "data error") -> None:
        super().__init__(message)