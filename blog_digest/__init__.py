"""Top-level package for blog-digest.

Fetches a webpage, extracts its readable article text, selects a short
extractive summary and renders a word-for-word dictionary translation of it.
"""

from .errors import (
    DigestError,
    ExtractionError,
    FetchError,
    InternalError,
    SummarizationError,
    ValidationError,
)
from .models import ExtractedDocument, ProcessedBlog, ProcessOutcome, RawPage
from .orchestrator import Orchestrator

__all__ = [
    "DigestError",
    "ExtractionError",
    "FetchError",
    "InternalError",
    "SummarizationError",
    "ValidationError",
    "ExtractedDocument",
    "ProcessedBlog",
    "ProcessOutcome",
    "RawPage",
    "Orchestrator",
]
