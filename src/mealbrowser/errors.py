"""Error types shared across the package.

Every error raised by mealbrowser carries a machine-readable ``ErrorCode`` and
a ``recoverable`` flag. Fetch failures are all recoverable: the user leaves
and re-opens the screen to retry.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    NETWORK_ERROR = "NETWORK_ERROR"  # request failed, timed out, or non-2xx status
    DECODE_ERROR = "DECODE_ERROR"  # body does not match the expected shape


class MealBrowserError(Exception):
    """Base error for mealbrowser."""

    def __init__(self, code: ErrorCode, message: str, *, recoverable: bool = True) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value!r}, message={self.message!r})"


class FetchError(MealBrowserError):
    """A request could not be completed or its response could not be decoded."""

    def __init__(self, code: ErrorCode, message: str, *, url: str) -> None:
        super().__init__(code, message, recoverable=True)
        self.url = url
