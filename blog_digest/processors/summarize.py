from __future__ import annotations

import re
from typing import List, Optional

from ..errors import SummarizationError
from ..utils.logging import get_logger
from ..utils.pipeline_config import SummarySettings
from .noise import NoiseFilter, DEFAULT_NOISE_FILTER
from .normalize import unique_in_order

logger = get_logger("digest.processors.summarize")

# A run up to the next terminal mark or line break, keeping the mark.
_sentence_re = re.compile(r"[^.!?\n]+[.!?]?")


def split_sentences(content: str) -> List[str]:
    """Split ``content`` into trimmed, non-empty sentence candidates."""
    if not content:
        return []
    candidates = (m.group(0).strip() for m in _sentence_re.finditer(content))
    return [c for c in candidates if c]


def summarize(
    content: str,
    *,
    settings: Optional[SummarySettings] = None,
    noise: Optional[NoiseFilter] = None,
) -> str:
    """Build an extractive summary from the lead sentences of ``content``.

    Candidates are deduplicated, then anything not longer than
    ``settings.min_sentence_chars`` or matching the noise blocklist is
    dropped. The first ``settings.max_sentences`` survivors are joined with
    single spaces.
    """
    settings = settings or SummarySettings()
    noise = noise or DEFAULT_NOISE_FILTER

    sentences = [
        s
        for s in unique_in_order(split_sentences(content))
        if len(s) > settings.min_sentence_chars and not noise.matches(s)
    ]
    if not sentences:
        logger.info("No sentence longer than %d chars survived filtering", settings.min_sentence_chars)
        raise SummarizationError()

    selected = sentences[: settings.max_sentences]
    logger.debug("Selected %d of %d candidate sentences", len(selected), len(sentences))
    return " ".join(selected)
