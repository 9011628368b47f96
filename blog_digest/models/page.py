from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class RawPage:
    """HTML as retrieved by the fetcher; discarded after extraction."""

    url: str
    html: str
    final_url: Optional[str] = None
    status_code: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ExtractedDocument:
    title: str
    content: str
    # Content selector that produced ``content``; "body" for the fallback.
    selector: str = "body"
