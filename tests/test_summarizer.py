"""Tests for the light, moderate and aggressive summarization tiers."""

from __future__ import annotations

import pytest

from src.optimization.summarizer import (
    aggressive_summarize,
    light_summarize,
    moderate_summarize,
    split_sentences,
    summarize,
)
from src.pipeline_config import SummarizeLevel

KEYWORD_AND_FILLER = "We decided on the deadline tomorrow.\nok yes."

# Four sentences, none with a keyword, all between 21 and 50 characters
PLAIN_PROSE = (
    "The weather outside was quite lovely today. "
    "We walked around the garden slowly. "
    "The birds were singing in the trees. "
    "Tea was served at four o'clock."
)


class TestSplitSentences:
    def test_splits_on_terminator_runs(self) -> None:
        assert split_sentences("One. Two!! Three?! Four") == ["One", "Two", "Three", "Four"]

    def test_min_length_is_exclusive(self) -> None:
        assert split_sentences("abcde. abcdef.", min_length=5) == ["abcdef"]


class TestLightSummarize:
    def test_drops_short_filler_line(self) -> None:
        assert light_summarize(KEYWORD_AND_FILLER) == "We decided on the deadline tomorrow."

    def test_collapses_blank_line_runs(self) -> None:
        text = "Hello there, how are you today?\n\n\n\nThis line is long enough."
        assert light_summarize(text) == "Hello there, how are you today?\n\nThis line is long enough."

    def test_removes_short_lines_entirely(self) -> None:
        text = "Hello there, how are you today?\nok\nThis line is long enough."
        assert light_summarize(text) == "Hello there, how are you today?\nThis line is long enough."

    def test_strips_speaker_labels_when_excluded(self) -> None:
        text = "[Alice]: We decided on the deadline tomorrow."
        assert light_summarize(text, include_speakers=False) == "We decided on the deadline tomorrow."
        assert light_summarize(text, include_speakers=True) == text

    def test_line_of_exactly_fifteen_chars_survives(self) -> None:
        assert light_summarize("a" * 15) == "a" * 15
        assert light_summarize("a" * 14) == ""

    def test_empty(self) -> None:
        assert light_summarize("") == ""


class TestModerateSummarize:
    def test_keeps_keyword_sentence(self) -> None:
        assert moderate_summarize(KEYWORD_AND_FILLER) == "We decided on the deadline tomorrow."

    def test_falls_back_to_longest_sentences(self) -> None:
        # No sentence qualifies, so the longest ceil(70%) of 4 = 3 are kept in source order
        assert moderate_summarize(PLAIN_PROSE) == (
            "The weather outside was quite lovely today. "
            "We walked around the garden slowly. "
            "The birds were singing in the trees."
        )

    def test_long_sentence_qualifies_without_keyword(self) -> None:
        long_sentence = "The quick brown fox jumped over the lazy dog near the riverbank"
        assert moderate_summarize(long_sentence + ".") == long_sentence + "."

    def test_no_candidates_is_empty(self) -> None:
        assert moderate_summarize("Short one here. Tiny bit.") == ""


class TestAggressiveSummarize:
    def test_keeps_only_keyword_sentences(self) -> None:
        text = (
            "It is important that we agreed to ship the release on Friday. "
            "The weather outside was quite lovely today. "
            "We walked around the garden slowly."
        )
        assert aggressive_summarize(text) == (
            "It is important that we agreed to ship the release on Friday."
        )

    def test_keyword_fixture(self) -> None:
        assert aggressive_summarize(KEYWORD_AND_FILLER) == "We decided on the deadline tomorrow."

    def test_falls_back_to_three_longest(self) -> None:
        result = aggressive_summarize(PLAIN_PROSE)
        assert result.count(".") == 3
        assert "Tea was served" not in result

    def test_empty(self) -> None:
        assert aggressive_summarize("") == ""


class TestSummarizeDispatch:
    @pytest.mark.parametrize(
        ("level", "tier"),
        [
            (SummarizeLevel.LOW, light_summarize),
            (SummarizeLevel.MEDIUM, moderate_summarize),
            (SummarizeLevel.HIGH, aggressive_summarize),
            ("medium", moderate_summarize),
        ],
    )
    def test_dispatches_by_level(self, level: str | SummarizeLevel, tier) -> None:  # type: ignore[no-untyped-def]
        assert summarize(PLAIN_PROSE, level) == tier(PLAIN_PROSE)

    def test_unknown_level_raises(self) -> None:
        with pytest.raises(ValueError):
            summarize(PLAIN_PROSE, "extreme")

    def test_tiers_compose(self) -> None:
        once = moderate_summarize(PLAIN_PROSE)
        assert light_summarize(once) == once
