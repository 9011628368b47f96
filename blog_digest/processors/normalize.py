from __future__ import annotations

import re
from typing import Iterable, List, Optional

from .noise import DEFAULT_NOISE_FILTER, NoiseFilter

_whitespace_re = re.compile(r"\s+")
_line_break_re = re.compile(r"[\r\n]+")


def collapse_whitespace(text: str | None) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    if not text:
        return ""
    return _whitespace_re.sub(" ", text).strip()


def unique_in_order(items: Iterable[str]) -> List[str]:
    """Drop exact duplicates, keeping the first occurrence of each item."""
    seen: set[str] = set()
    out: List[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def normalize_lines(text: str | None, *, noise: Optional[NoiseFilter] = None) -> str:
    """Turn raw extracted text into a single deduplicated line of prose.

    - Split on line boundaries
    - Collapse whitespace inside each line and trim
    - Drop empty lines and lines matching the noise blocklist
    - Remove duplicate lines (first occurrence wins)
    - Drop lines that only match the blocklist once joined to their neighbours
    - Join the survivors with single spaces
    """
    if not text:
        return ""
    noise = noise or DEFAULT_NOISE_FILTER

    lines = (collapse_whitespace(line) for line in _line_break_re.split(text))
    kept = [line for line in lines if line and not noise.matches(line)]
    return " ".join(_drop_spanning_noise(unique_in_order(kept), noise))


def _drop_spanning_noise(lines: List[str], noise: NoiseFilter) -> List[str]:
    # Each pass removes at least one line, so the loop terminates.
    while lines:
        match = noise.search(" ".join(lines))
        if match is None:
            break
        start, end = match.start(), max(match.end(), match.start() + 1)
        survivors: List[str] = []
        offset = 0
        for line in lines:
            line_end = offset + len(line)
            if not (offset < end and line_end > start):
                survivors.append(line)
            offset = line_end + 1
        if len(survivors) == len(lines):
            # Zero-width match on a separator; no line owns it
            break
        lines = survivors
    return lines
