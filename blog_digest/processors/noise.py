from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple

from ..utils.pipeline_config import DEFAULT_NOISE_PATTERNS


class NoiseFilter:
    """Case-insensitive blocklist of boilerplate phrases.

    Patterns are regular expressions matched anywhere in a line or sentence.
    Instances are immutable once built and safe to share between threads.
    """

    __slots__ = ("_patterns", "_compiled")

    def __init__(self, patterns: Iterable[str] = DEFAULT_NOISE_PATTERNS) -> None:
        self._patterns: Tuple[str, ...] = tuple(patterns)
        self._compiled = (
            re.compile("|".join(f"(?:{p})" for p in self._patterns), re.IGNORECASE)
            if self._patterns
            else None
        )

    @property
    def patterns(self) -> Tuple[str, ...]:
        return self._patterns

    def matches(self, text: str) -> bool:
        if self._compiled is None:
            return False
        return self._compiled.search(text) is not None

    def search(self, text: str) -> Optional[re.Match[str]]:
        """Return the leftmost blocklist match in ``text``, if any."""
        if self._compiled is None:
            return None
        return self._compiled.search(text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NoiseFilter):
            return NotImplemented
        return self._patterns == other._patterns

    def __hash__(self) -> int:
        return hash(self._patterns)

    def __repr__(self) -> str:
        return f"NoiseFilter({list(self._patterns)!r})"


DEFAULT_NOISE_FILTER = NoiseFilter()
