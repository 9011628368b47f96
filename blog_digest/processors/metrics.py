from __future__ import annotations

import math

AVERAGE_WORDS_PER_MINUTE = 200


def word_count(content: str) -> int:
    return len(content.split()) if content else 0


def read_time(words: int, *, words_per_minute: int = AVERAGE_WORDS_PER_MINUTE) -> int:
    """Estimated reading time in whole minutes, rounded up."""
    if words <= 0:
        return 0
    return math.ceil(words / words_per_minute)
