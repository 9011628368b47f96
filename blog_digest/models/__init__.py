"""Typed models used across the application."""

from .page import RawPage, ExtractedDocument
from .blog import ProcessedBlog, ProcessOutcome

__all__ = ["RawPage", "ExtractedDocument", "ProcessedBlog", "ProcessOutcome"]
