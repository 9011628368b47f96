from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..errors import DigestError


@dataclass(frozen=True, slots=True)
class ProcessedBlog:
    url: str
    title: str
    content: str
    summary: str
    translated_summary: str
    word_count: int
    read_time: int

    def to_dict(self) -> Dict[str, Any]:
        """Render the record in its external (camelCase) shape."""
        return {
            "url": self.url,
            "title": self.title,
            "content": self.content,
            "summary": self.summary,
            "translatedSummary": self.translated_summary,
            "wordCount": self.word_count,
            "readTime": self.read_time,
        }


@dataclass(frozen=True, slots=True)
class ProcessOutcome:
    """Result for one URL of a batch: either ``blog`` or ``error`` is set."""

    url: str
    blog: Optional[ProcessedBlog] = None
    error: Optional[DigestError] = None

    @property
    def ok(self) -> bool:
        return self.blog is not None
