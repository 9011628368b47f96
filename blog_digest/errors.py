"""Error taxonomy for the digest pipeline.

Every failure a caller can see is a ``DigestError`` carrying a human-readable
message, a ``kind`` for programmatic handling, and the HTTP status class a
transport layer should answer with.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

FetchReason = Literal[
    "connection",
    "timeout",
    "too_many_redirects",
    "not_found",
    "forbidden",
    "http_status",
    "too_large",
    "cancelled",
]

GENERIC_FAILURE_MESSAGE = "Failed to process the blog. Please try again."


class DigestError(Exception):
    """Base class for all classified pipeline failures."""

    kind: str = "error"
    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, "kind": self.kind}


class ValidationError(DigestError):
    """The input URL is missing or malformed; nothing was fetched."""

    kind = "validation"


class FetchError(DigestError):
    """The page could not be retrieved."""

    kind = "fetch"

    _MESSAGES: Dict[str, str] = {
        "connection": "Could not connect to the website. Please check the URL.",
        "timeout": "Request timeout. The website took too long to respond.",
        "too_many_redirects": "The website redirected too many times.",
        "not_found": "The webpage was not found (404).",
        "forbidden": "Access forbidden. The website may be blocking automated requests.",
        "too_large": "The webpage is too large to process.",
        "cancelled": "The request was cancelled before the webpage was fetched.",
    }

    def __init__(self, reason: FetchReason, message: Optional[str] = None, *, status: Optional[int] = None) -> None:
        if message is None:
            if reason == "http_status":
                message = f"The website responded with HTTP {status}."
            else:
                message = self._MESSAGES[reason]
        super().__init__(message)
        self.reason = reason
        self.status = status

    @property
    def likely_bot_blocked(self) -> bool:
        return self.reason == "forbidden"

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["reason"] = self.reason
        if self.status is not None:
            payload["status"] = self.status
        return payload


class ExtractionError(DigestError):
    """The page was reachable but held too little readable text."""

    kind = "extraction"

    def __init__(self, message: str = "Could not extract sufficient content from the webpage") -> None:
        super().__init__(message)


class SummarizationError(DigestError):
    """No sentence survived summary filtering."""

    kind = "summarization"

    def __init__(self, message: str = "Could not generate summary from the content") -> None:
        super().__init__(message)


class InternalError(DigestError):
    kind = "internal"
    status_code = 500

    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE) -> None:
        super().__init__(message)
