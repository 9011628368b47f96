from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

DEFAULT_HEADERS: Dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/127.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
}

# Ordered: semantic containers first, generic markers last.
DEFAULT_CONTENT_SELECTORS: Tuple[str, ...] = (
    "article",
    ".post-content",
    ".entry-content",
    ".content",
    "main",
    ".main-content",
    "#content",
    ".post-body",
)

DEFAULT_NOISE_SELECTORS: Tuple[str, ...] = (
    "script",
    "style",
    "noscript",
    "nav",
    "header",
    "footer",
    "aside",
    "img",
    ".no-script",
    ".placeholder",
)

DEFAULT_NOISE_PATTERNS: Tuple[str, ...] = (
    "placeholder",
    "no-script",
    "Business Insider tells the innovative stories you want to know",
)


@dataclass(frozen=True, slots=True)
class FetchSettings:
    timeout_seconds: float = float(os.getenv("DIGEST_FETCH_TIMEOUT", "15"))
    max_redirects: int = int(os.getenv("DIGEST_MAX_REDIRECTS", "5"))
    max_response_bytes: int = int(os.getenv("DIGEST_MAX_RESPONSE_BYTES", str(6 * 1024 * 1024)))
    chunk_size: int = 16 * 1024
    extra_headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def headers(self) -> Dict[str, str]:
        return {**DEFAULT_HEADERS, **self.extra_headers}


@dataclass(frozen=True, slots=True)
class ExtractionSettings:
    min_content_chars: int = int(os.getenv("DIGEST_MIN_CONTENT_CHARS", "100"))
    max_title_chars: int = 200
    max_content_chars: int = 5000
    fallback_title: str = "Untitled Article"
    content_selectors: Tuple[str, ...] = DEFAULT_CONTENT_SELECTORS
    noise_selectors: Tuple[str, ...] = DEFAULT_NOISE_SELECTORS


@dataclass(frozen=True, slots=True)
class SummarySettings:
    max_sentences: int = int(os.getenv("DIGEST_MAX_SENTENCES", "3"))
    min_sentence_chars: int = int(os.getenv("DIGEST_MIN_SENTENCE_CHARS", "30"))
