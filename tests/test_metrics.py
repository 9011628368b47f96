"""Tests for blog_digest.processors.metrics."""

from blog_digest.processors.metrics import read_time, word_count


class TestWordCount:
    def test_counts_whitespace_delimited_tokens(self) -> None:
        assert word_count("one two  three\nfour\tfive") == 5

    def test_blank_content(self) -> None:
        assert word_count("") == 0
        assert word_count("   \n ") == 0

    def test_punctuation_sticks_to_words(self) -> None:
        assert word_count("Hello, world! - ok") == 4


class TestReadTime:
    def test_zero_words(self) -> None:
        assert read_time(0) == 0

    def test_rounds_up(self) -> None:
        assert read_time(1) == 1
        assert read_time(200) == 1
        assert read_time(201) == 2
        assert read_time(1800) == 9

    def test_custom_speed(self) -> None:
        assert read_time(300, words_per_minute=100) == 3
