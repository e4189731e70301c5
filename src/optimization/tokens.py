"""Token counting with tiktoken and a character-based fallback."""

from __future__ import annotations

import logging
import math
from functools import lru_cache
from typing import Any

import tiktoken

from src.config import settings

logger = logging.getLogger(__name__)

# ~4 characters per token for English text
CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Heuristic token count used whenever the encoding is unavailable."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


class TokenCounter:
    """Counts tokens with a tiktoken encoding, degrading to an estimate.

    The encoding is read-only after construction, so one instance is shared
    by every component in the process (see :func:`get_token_counter`).
    """

    def __init__(self, encoding: Any | None = None) -> None:
        self.encoding = encoding

    @classmethod
    def from_model(cls, model: str) -> TokenCounter:
        """Build a counter for *model*, or a heuristic-only one if that fails."""
        if not model:
            return cls(encoding=None)
        try:
            encoding = tiktoken.encoding_for_model(model)
        except Exception:
            logger.warning("tiktoken encoding for %r unavailable, using estimation", model)
            encoding = None
        return cls(encoding=encoding)

    @property
    def is_exact(self) -> bool:
        return self.encoding is not None

    def count_tokens(self, text: object) -> int:
        """Return the token count of *text*; 0 for empty or non-string input.

        Never raises: encoder errors fall back to ``ceil(len(text) / 4)``.
        """
        if not isinstance(text, str) or not text:
            return 0
        if self.encoding is None:
            return estimate_tokens(text)
        try:
            return len(self.encoding.encode(text))
        except Exception:
            return estimate_tokens(text)


@lru_cache(maxsize=1)
def get_token_counter() -> TokenCounter:
    """Return the process-wide TokenCounter, built once on first use."""
    return TokenCounter.from_model(settings.tokenizer_model)
