"""Exception hierarchy for aicopilot."""

from __future__ import annotations


class CopilotError(Exception):
    """Base exception for all aicopilot errors."""


class OutOfRangeError(CopilotError):
    """Raised when an offset or line number falls outside the text buffer."""


class ExtractionDegradedError(CopilotError):
    """A context sub-extraction failed; its section is emptied, never fatal."""

    def __init__(self, section: str, cause: BaseException | None = None) -> None:
        super().__init__(f"{section} extraction degraded: {cause}")
        self.section = section
        self.cause = cause


class ProviderError(CopilotError):
    """Raised when a completion provider cannot produce a suggestion."""


class UnauthenticatedError(ProviderError):
    """No credential is configured for the active provider."""


class UpstreamError(ProviderError):
    """The remote API answered with a non-success status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"Upstream returned HTTP {status_code}: {body[:200]}")
        self.status_code = status_code
        self.body = body


class ProviderTimeoutError(ProviderError):
    """The request deadline elapsed before the provider answered."""


class ProviderConnectionError(ProviderError):
    """Transport-level failure (DNS, refused connection, TLS, ...)."""


class ParseFailureError(ProviderError):
    """A success body could not be decoded into completion text."""

    def __init__(self, message: str, raw_response: str = "") -> None:
        super().__init__(message)
        self.raw_response = raw_response


__all__ = [
    "CopilotError",
    "OutOfRangeError",
    "ExtractionDegradedError",
    "ProviderError",
    "UnauthenticatedError",
    "UpstreamError",
    "ProviderTimeoutError",
    "ProviderConnectionError",
    "ParseFailureError",
]
