"""
Custom exceptions for the URL Analyzer.

Error philosophy:
  - InvalidURL → FAIL HARD: the only error a caller ever sees; no network access happens.
  - FetchError → RECOVERED: the host-specific fallback note replaces the page content.
  - SummarizationUnavailable → RECOVERED: the excerpt template replaces the AI summary.
  - LLMClientError → a SummarizationUnavailable raised by a concrete provider client.

Charset ambiguity is not an exception: the resolver always ends in a lossy
UTF-8 decode and marks the document as lossy instead.
"""

from typing import Optional


class URLAnalyzerError(Exception):
    """Base exception for all URL Analyzer errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- FAIL HARD: surfaced to the caller ---

class InvalidURL(URLAnalyzerError):
    """
    Raised when the input is empty, not an absolute URL, or not http(s).

    This is the only error that reaches the caller of analyze().
    """

    def to_response(self) -> dict:
        """Convert to the boundary error format."""
        return {"error": self.message}


# --- RECOVERED: routed to the fallback resolver ---

class FetchError(URLAnalyzerError):
    """Raised when the page cannot be retrieved (transport error, timeout, non-2xx)."""

    def __init__(
        self,
        message: str,
        url: str,
        status_code: Optional[int] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code  # None for transport-level failures


# --- RECOVERED: routed to the excerpt template ---

class SummarizationUnavailable(URLAnalyzerError):
    """Raised when no AI summary can be produced."""
    pass


class LLMClientError(SummarizationUnavailable):
    """Raised when an LLM API call fails or the client cannot be built."""

    def __init__(
        self,
        message: str,
        provider: str,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.provider = provider  # "openai" or "anthropic"
