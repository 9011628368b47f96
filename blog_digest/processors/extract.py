"""Main-content extraction from raw HTML.

The extractor strips boilerplate elements, then scans an ordered list of CSS
selectors and keeps the text of the first one that matches something
readable. When no selector matches, the whole ``<body>`` is used. The text is
then normalized into deduplicated lines (see ``normalize_lines``).
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from bs4 import BeautifulSoup

from ..errors import ExtractionError
from ..models import ExtractedDocument
from ..utils.logging import get_logger
from ..utils.pipeline_config import ExtractionSettings
from .noise import NoiseFilter
from .normalize import collapse_whitespace, normalize_lines

logger = get_logger("digest.processors.extract")

BODY_FALLBACK = "body"

# Elements that end a line of text when rendered.
_BLOCK_TAGS = (
    "p", "div", "section", "article", "main",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li", "dl", "dt", "dd",
    "blockquote", "pre", "figcaption", "table", "tr",
)


def extract_title(
    soup: BeautifulSoup,
    *,
    max_chars: int = 200,
    fallback: str = "Untitled Article",
) -> str:
    """Pick the page title: <title>, then first <h1>, then og:title."""
    og_meta = soup.find("meta", attrs={"property": "og:title"})
    h1 = soup.find("h1")
    candidates = (
        soup.title.get_text() if soup.title else None,
        h1.get_text() if h1 else None,
        og_meta.get("content") if og_meta else None,
    )
    for candidate in candidates:
        cleaned = collapse_whitespace(candidate)
        if cleaned:
            return cleaned[:max_chars]
    return fallback[:max_chars]


def strip_noise(soup: BeautifulSoup, selectors: Iterable[str]) -> int:
    """Remove boilerplate elements in place; returns how many were removed."""
    selector_list = ", ".join(selectors)
    if not selector_list:
        return 0
    removed = 0
    for element in soup.select(selector_list):
        element.extract()
        removed += 1
    return removed


def _mark_block_boundaries(soup: BeautifulSoup) -> None:
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for tag in soup.find_all(list(_BLOCK_TAGS)):
        tag.insert_before("\n")
        tag.insert_after("\n")


def select_main_text(soup: BeautifulSoup, selectors: Iterable[str]) -> Tuple[str, str]:
    """Return ``(text, selector)`` for the first selector with readable text.

    Selectors are tried strictly in order and the scan stops at the first
    one whose matches contain non-blank text. Falls back to the body.
    """
    for selector in selectors:
        matches = soup.select(selector)
        if not matches:
            continue
        text = "\n".join(element.get_text() for element in matches)
        if text.strip():
            return text, selector
        logger.debug("Selector %r matched %d element(s) without text", selector, len(matches))
    root = soup.body or soup
    return root.get_text(), BODY_FALLBACK


def extract(
    html: str,
    *,
    settings: Optional[ExtractionSettings] = None,
    noise: Optional[NoiseFilter] = None,
) -> ExtractedDocument:
    """Extract the title and readable main content of ``html``.

    Raises ``ExtractionError`` when fewer than ``settings.min_content_chars``
    characters remain after normalization.
    """
    settings = settings or ExtractionSettings()
    soup = BeautifulSoup(html or "", "html.parser")

    # Title comes from the untouched document: <h1> often sits in a <header>.
    title = extract_title(soup, max_chars=settings.max_title_chars, fallback=settings.fallback_title)

    removed = strip_noise(soup, settings.noise_selectors)
    _mark_block_boundaries(soup)
    raw_text, selector = select_main_text(soup, settings.content_selectors)
    content = normalize_lines(raw_text, noise=noise)

    logger.debug(
        "Extracted %d chars via %s (noise elements removed=%d)", len(content), selector, removed
    )
    if len(content) < settings.min_content_chars:
        logger.info(
            "Insufficient content: %d chars < %d (selector=%s)",
            len(content),
            settings.min_content_chars,
            selector,
        )
        raise ExtractionError()
    return ExtractedDocument(title=title, content=content, selector=selector)
