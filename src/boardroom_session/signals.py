"""Keyword heuristics used to tag messages with sentiment signals."""

from __future__ import annotations

from typing import FrozenSet, List

from .models import MessageSignals

POSITIVE_WORDS: FrozenSet[str] = frozenset(
    {
        "good",
        "great",
        "excellent",
        "positive",
        "success",
        "growth",
        "opportunity",
        "benefit",
    }
)

NEGATIVE_WORDS: FrozenSet[str] = frozenset(
    {
        "bad",
        "poor",
        "negative",
        "problem",
        "issue",
        "challenge",
        "risk",
        "concern",
    }
)

STOP_WORDS: FrozenSet[str] = frozenset(
    {"that", "this", "with", "from", "they", "have", "will", "been", "were"}
)

MAX_KEYWORDS = 5


def analyze_message(text: str) -> MessageSignals:
    """Score a message by counting positive and negative words.

    Words are matched verbatim after lowercasing, so punctuation attached to
    a word prevents a match.
    """

    words: List[str] = text.lower().split()
    positive = sum(1 for word in words if word in POSITIVE_WORDS)
    negative = sum(1 for word in words if word in NEGATIVE_WORDS)

    sentiment = "neutral"
    if positive > negative:
        sentiment = "positive"
    elif negative > positive:
        sentiment = "negative"

    keywords = [
        word for word in words if len(word) > 4 and word not in STOP_WORDS
    ][:MAX_KEYWORDS]
    confidence = min(0.9, 0.5 + abs(positive - negative) * 0.1)
    return MessageSignals(
        sentiment=sentiment,
        keywords=tuple(keywords),
        confidence=round(confidence, 2),
    )
