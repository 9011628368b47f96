"""Tests for blog_digest.processors.summarize."""

import pytest

from blog_digest.errors import SummarizationError
from blog_digest.processors.summarize import split_sentences, summarize
from blog_digest.utils.pipeline_config import SummarySettings

S1 = "The first sentence is long enough to keep."
S2 = "The second sentence also clears the length bar!"
S3 = "Does the third sentence pass the threshold too?"
S4 = "The fourth sentence should never be selected."


class TestSplitSentences:
    def test_keeps_terminal_punctuation(self) -> None:
        assert split_sentences("One. Two! Three?\nFour") == ["One.", "Two!", "Three?", "Four"]

    def test_drops_blank_segments(self) -> None:
        assert split_sentences("  \n\n ") == []
        assert split_sentences("") == []


class TestSummarize:
    def test_selects_first_three_long_sentences(self) -> None:
        content = " ".join([S1, S2, S3, S4])
        assert summarize(content) == f"{S1} {S2} {S3}"

    def test_never_more_than_three_sentences(self) -> None:
        content = " ".join(f"Sentence number {i} is comfortably long enough." for i in range(10))
        assert len(split_sentences(summarize(content))) == 3

    def test_drops_candidates_of_thirty_chars_or_less(self) -> None:
        exactly_30 = "x" * 29 + "."
        just_over = "y" * 30 + "."
        assert summarize(f"{exactly_30} {just_over}") == just_over

    def test_short_sentences_are_skipped_not_counted(self) -> None:
        content = f"Short. {S1} Tiny! {S2}"
        assert summarize(content) == f"{S1} {S2}"

    def test_deduplicates_sentences(self) -> None:
        content = f"{S1} {S1} {S2}"
        assert summarize(content) == f"{S1} {S2}"

    def test_drops_noise_sentences(self) -> None:
        content = f"This sentence only mentions a placeholder value. {S1}"
        assert summarize(content) == S1

    def test_raises_when_nothing_survives(self) -> None:
        with pytest.raises(SummarizationError, match="Could not generate summary"):
            summarize("Short. Tiny! Small?")

    def test_settings_override(self) -> None:
        content = " ".join([S1, S2, S3])
        assert summarize(content, settings=SummarySettings(max_sentences=1, min_sentence_chars=30)) == S1

    def test_newlines_end_sentences(self) -> None:
        content = "A heading line without punctuation at all\nThe body sentence follows right after it."
        assert summarize(content) == (
            "A heading line without punctuation at all The body sentence follows right after it."
        )
