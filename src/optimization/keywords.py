"""Keyword tables driving summarization, prioritization and topic tagging.

Matching is a case-insensitive substring test against lower-cased text, so
"meeting" also matches "meetings".  Tables are plain data so they can be
swapped or extended without touching the control flow that reads them.
"""

from __future__ import annotations

from src.optimization.models import PriorityBand

# Moderate tier: a sentence mentioning any of these survives filtering
IMPORTANT_KEYWORDS: tuple[str, ...] = (
    "decided",
    "important",
    "meeting",
    "project",
    "deadline",
    "goal",
    "problem",
    "solution",
    "action",
    "next",
    "follow",
    "complete",
    "urgent",
    "priority",
    "schedule",
    "appointment",
    "reminder",
)

# Aggressive tier: the smaller, stricter list
HIGH_PRIORITY_KEYWORDS: tuple[str, ...] = (
    "decided",
    "concluded",
    "agreed",
    "action",
    "next steps",
    "deadline",
    "important",
    "urgent",
    "priority",
    "meeting",
    "appointment",
    "schedule",
)

BAND_KEYWORDS: dict[PriorityBand, tuple[str, ...]] = {
    PriorityBand.HIGH: (
        "meeting",
        "call",
        "interview",
        "presentation",
        "decision",
        "important",
        "urgent",
        "deadline",
        "project",
        "client",
        "boss",
        "manager",
        "team",
        "problem",
        "issue",
        "solution",
        "plan",
        "strategy",
        "goal",
        "target",
    ),
    PriorityBand.MEDIUM: (
        "discussion",
        "conversation",
        "email",
        "message",
        "update",
        "review",
        "feedback",
        "idea",
        "suggestion",
        "question",
        "answer",
        "explain",
    ),
}

# Word-count thresholds: strictly more words than this lands in the band
BAND_WORD_THRESHOLDS: dict[PriorityBand, int] = {
    PriorityBand.HIGH: 50,
    PriorityBand.MEDIUM: 20,
}

TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
    "work": ("work", "job", "office", "meeting", "project", "client", "business"),
    "personal": ("family", "friend", "personal", "home", "weekend"),
    "health": ("health", "doctor", "exercise", "gym", "medical", "wellness"),
    "technology": ("computer", "software", "app", "website", "tech", "digital"),
    "travel": ("travel", "trip", "flight", "hotel", "vacation", "visit"),
    "food": ("food", "restaurant", "eat", "lunch", "dinner", "cook"),
    "entertainment": ("movie", "music", "game", "show", "entertainment", "fun"),
}


def contains_keywords(text: str, keywords: tuple[str, ...]) -> bool:
    """Return True if *text* (already lower-cased) contains any keyword."""
    return any(keyword in text for keyword in keywords)
