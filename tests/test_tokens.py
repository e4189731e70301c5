"""Tests for token counting and its character-based fallback."""

from __future__ import annotations

import math
from unittest.mock import MagicMock, patch

import pytest

from src.optimization.tokens import TokenCounter, estimate_tokens, get_token_counter


class TestEstimateTokens:
    @pytest.mark.parametrize(
        "text",
        ["a", "abcd", "abcde", "Hello, world!", "x" * 1001],
    )
    def test_ceil_of_quarter_length(self, text: str) -> None:
        assert estimate_tokens(text) == math.ceil(len(text) / 4)


class TestTokenCounter:
    def test_empty_is_zero(self, counter: TokenCounter) -> None:
        assert counter.count_tokens("") == 0

    @pytest.mark.parametrize("value", [None, 42, 3.5, ["text"], {"a": 1}])
    def test_non_text_is_zero(self, counter: TokenCounter, value: object) -> None:
        assert counter.count_tokens(value) == 0

    @pytest.mark.parametrize("text", [" ", "a", "one two three", "line\nbreak"])
    def test_non_empty_text_is_positive(self, counter: TokenCounter, text: str) -> None:
        assert counter.count_tokens(text) > 0

    def test_heuristic_when_no_encoding(self, counter: TokenCounter) -> None:
        assert not counter.is_exact
        assert counter.count_tokens("abcdefghi") == 3

    def test_uses_encoding(self) -> None:
        encoding = MagicMock()
        encoding.encode.return_value = [1, 2, 3, 4, 5, 6, 7]
        counter = TokenCounter(encoding=encoding)

        assert counter.is_exact
        assert counter.count_tokens("anything") == 7
        encoding.encode.assert_called_once_with("anything")

    def test_encoder_failure_falls_back(self) -> None:
        encoding = MagicMock()
        encoding.encode.side_effect = ValueError("disallowed special token")
        counter = TokenCounter(encoding=encoding)

        assert counter.count_tokens("<|endoftext|>") == math.ceil(len("<|endoftext|>") / 4)


class TestFromModel:
    def test_empty_model_is_heuristic(self) -> None:
        assert not TokenCounter.from_model("").is_exact

    def test_unknown_model_logs_and_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        with patch(
            "src.optimization.tokens.tiktoken.encoding_for_model",
            side_effect=KeyError("no-such-model"),
        ):
            counter = TokenCounter.from_model("no-such-model")

        assert counter.encoding is None
        assert "unavailable" in caplog.text
        assert counter.count_tokens("abcd") == 1

    def test_known_model_uses_loaded_encoding(self) -> None:
        encoding = MagicMock()
        with patch(
            "src.optimization.tokens.tiktoken.encoding_for_model", return_value=encoding
        ) as loader:
            counter = TokenCounter.from_model("gpt-4")

        loader.assert_called_once_with("gpt-4")
        assert counter.encoding is encoding


class TestGetTokenCounter:
    def test_is_cached(self) -> None:
        assert get_token_counter() is get_token_counter()

    def test_test_env_selects_heuristic(self) -> None:
        assert not get_token_counter().is_exact
