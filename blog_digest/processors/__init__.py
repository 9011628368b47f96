"""Processing pipeline: extraction, summarization, translation, metrics."""

from .noise import NoiseFilter, DEFAULT_NOISE_FILTER
from .normalize import collapse_whitespace, normalize_lines, unique_in_order
from .extract import extract, extract_title, select_main_text, strip_noise
from .summarize import split_sentences, summarize
from .translate import URDU_DICTIONARY, freeze_dictionary, translate
from .metrics import read_time, word_count

__all__ = [
    "NoiseFilter",
    "DEFAULT_NOISE_FILTER",
    "collapse_whitespace",
    "normalize_lines",
    "unique_in_order",
    "extract",
    "extract_title",
    "select_main_text",
    "strip_noise",
    "split_sentences",
    "summarize",
    "URDU_DICTIONARY",
    "freeze_dictionary",
    "translate",
    "read_time",
    "word_count",
]
