"""Three lossy summarization tiers for lifelog text.

Each tier is a plain function over markdown-like text, so any tier can be
applied to fresh input or to the output of another tier:

- light: whitespace cleanup and removal of very short lines
- moderate: light + keyword/length-based sentence filtering
- aggressive: moderate + a stricter keyword filter
"""

from __future__ import annotations

import math
import re

from src.optimization.keywords import (
    HIGH_PRIORITY_KEYWORDS,
    IMPORTANT_KEYWORDS,
    contains_keywords,
)
from src.pipeline_config import SummarizeLevel

_BLANK_RUN_RE = re.compile(r"\n\s*\n\s*\n")
_SPEAKER_PREFIX_RE = re.compile(r"\[.*?\]:\s*")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

# Lines shorter than this (after trimming) are dropped by the light tier.
# Blunt: it also removes short but meaningful one-liners.
MIN_LINE_LENGTH = 15

MODERATE_MIN_SENTENCE = 20
MODERATE_LONG_SENTENCE = 50
# Below this share of retained sentences the keyword filter is abandoned
MODERATE_MIN_RETAINED_SHARE = 0.3
MODERATE_FALLBACK_SHARE = 0.7

AGGRESSIVE_MIN_SENTENCE = 30
AGGRESSIVE_FALLBACK_COUNT = 3


def split_sentences(text: str, min_length: int = 0) -> list[str]:
    """Split on runs of ``.``, ``!`` and ``?``; keep trimmed sentences longer than *min_length*."""
    sentences = (s.strip() for s in _SENTENCE_SPLIT_RE.split(text))
    return [s for s in sentences if s and len(s) > min_length]


def _longest(sentences: list[str], count: int) -> list[str]:
    """Return the *count* longest sentences, in their original order."""
    ranked = sorted(range(len(sentences)), key=lambda i: len(sentences[i]), reverse=True)
    return [sentences[i] for i in sorted(ranked[:count])]


def _join_sentences(sentences: list[str]) -> str:
    if not sentences:
        return ""
    return ". ".join(sentences) + "."


def light_summarize(content: str, include_speakers: bool = True) -> str:
    """Collapse blank-line runs, optionally strip speaker labels, drop short lines."""
    if not content:
        return ""

    processed = _BLANK_RUN_RE.sub("\n\n", content)

    if not include_speakers:
        processed = _SPEAKER_PREFIX_RE.sub("", processed)

    lines = [
        line
        for line in processed.split("\n")
        if not line.strip() or len(line.strip()) >= MIN_LINE_LENGTH
    ]
    return "\n".join(lines).strip()


def moderate_summarize(content: str, include_speakers: bool = True) -> str:
    """Keep sentences that mention an important keyword or are long.

    If that leaves fewer than 30% of the candidate sentences, the keyword
    filter is dropped and the longest 70% of candidates are kept instead.
    """
    processed = light_summarize(content, include_speakers)
    candidates = split_sentences(processed, MODERATE_MIN_SENTENCE)

    key_sentences = [
        s
        for s in candidates
        if contains_keywords(s.lower(), IMPORTANT_KEYWORDS) or len(s) > MODERATE_LONG_SENTENCE
    ]

    if len(key_sentences) < len(candidates) * MODERATE_MIN_RETAINED_SHARE:
        keep = math.ceil(len(candidates) * MODERATE_FALLBACK_SHARE)
        return _join_sentences(_longest(candidates, keep))

    return _join_sentences(key_sentences)


def aggressive_summarize(content: str, include_speakers: bool = True) -> str:
    """Keep only sentences with a high-priority keyword, else the 3 longest."""
    processed = moderate_summarize(content, include_speakers)
    candidates = split_sentences(processed, AGGRESSIVE_MIN_SENTENCE)

    critical = [s for s in candidates if contains_keywords(s.lower(), HIGH_PRIORITY_KEYWORDS)]
    if not critical:
        return _join_sentences(_longest(candidates, AGGRESSIVE_FALLBACK_COUNT))

    return _join_sentences(critical)


def summarize(
    content: str,
    level: str | SummarizeLevel = SummarizeLevel.LOW,
    include_speakers: bool = True,
) -> str:
    """Dispatch to the tier matching *level* (low, medium or high)."""
    if isinstance(level, str):
        level = SummarizeLevel(level)

    if level is SummarizeLevel.HIGH:
        return aggressive_summarize(content, include_speakers)
    if level is SummarizeLevel.MEDIUM:
        return moderate_summarize(content, include_speakers)
    return light_summarize(content, include_speakers)
