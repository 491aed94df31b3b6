"""Error taxonomy shared by the fetch, parse and reporting steps."""

from __future__ import annotations


class ReportError(RuntimeError):
    """Base error for failures that abort a report run."""


class FetchError(ReportError):
    """Raised when a document cannot be fetched or returns a non-success status."""


class ApiError(FetchError):
    """Raised when the GitHub API answers with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"GitHub API error (status {status_code}): {body}")
        self.status_code = status_code
        self.body = body


class ParseError(ReportError):
    """Raised when a payload is not valid JSON or carries no usable version."""


class ApiShapeError(ReportError):
    """Raised when a well-formed payload does not have the expected shape."""
