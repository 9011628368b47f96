from __future__ import annotations

import hashlib
import json
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path

from ..models import ExtractedDocument, ProcessedBlog
from ..utils.logging import get_logger

logger = get_logger("digest.output.sinks")


def url_digest(url: str) -> str:
    return hashlib.sha256(url.encode("utf-8")).hexdigest()[:24]


class RecordSink(ABC):
    """Optional persistence target invoked after a successful run."""

    @abstractmethod
    def write(self, blog: ProcessedBlog, document: ExtractedDocument) -> None:
        """Persist ``blog``; ``document`` carries the untruncated text."""


class JsonlSummarySink(RecordSink):
    """Append-only JSON Lines log of processed summaries."""

    def __init__(self, path: Path | str = ".cache/summaries.jsonl") -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def write(self, blog: ProcessedBlog, document: ExtractedDocument) -> None:
        row = {
            "url": blog.url,
            "title": blog.title,
            "summary": blog.summary,
            "translatedSummary": blog.translated_summary,
            "wordCount": blog.word_count,
            "readTime": blog.read_time,
            "processedAt": datetime.now(timezone.utc).isoformat(),
        }
        line = json.dumps(row, ensure_ascii=False)
        with self._lock:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        logger.debug("Appended summary for %s to %s", blog.url, self.path)


class TextArchiveSink(RecordSink):
    """Stores the full extracted text, one file per URL."""

    def __init__(self, directory: Path | str = ".cache/articles") -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, url: str) -> Path:
        return self.directory / f"{url_digest(url)}.txt"

    def write(self, blog: ProcessedBlog, document: ExtractedDocument) -> None:
        path = self.path_for(blog.url)
        path.write_text(document.content, encoding="utf-8")
        logger.debug("Archived %d chars for %s at %s", len(document.content), blog.url, path)
