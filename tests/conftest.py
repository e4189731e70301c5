"""Shared fixtures. Runs before any ``src`` import so settings see the test env."""

from __future__ import annotations

import os
from datetime import UTC, datetime

import pytest

# Heuristic tokenizer only: tests never download a tiktoken encoding
os.environ["TOKENIZER_MODEL"] = ""

from src.optimization.models import ContentNode, LogEntry  # noqa: E402
from src.optimization.tokens import TokenCounter  # noqa: E402


@pytest.fixture()
def counter() -> TokenCounter:
    return TokenCounter(encoding=None)


@pytest.fixture()
def standup_entry() -> LogEntry:
    return LogEntry(
        id="standup",
        title="Morning standup",
        start_time=datetime(2024, 1, 15, 9, 0, tzinfo=UTC),
        end_time=datetime(2024, 1, 15, 9, 30, tzinfo=UTC),
        is_starred=True,
        contents=(
            ContentNode(
                content="Morning standup",
                node_type="heading1",
                children=(
                    ContentNode(
                        content="We reviewed the sprint board together.",
                        speaker_name="Alice",
                        node_type="blockquote",
                    ),
                    ContentNode(
                        content="Deployment is scheduled for Thursday.",
                        speaker_name="Bob",
                        node_type="blockquote",
                    ),
                ),
            ),
        ),
    )

