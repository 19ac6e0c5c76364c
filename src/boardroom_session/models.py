"""Data model shared by the topic engine and the assessment engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class TopicStatus(str, Enum):
    """Lifecycle status of a discussion topic."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


class TopicPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Verdict(str, Enum):
    """Final verdict produced for a proposal."""

    APPROVE = "approve"
    REJECT = "reject"
    NEUTRAL = "neutral"


@dataclass(frozen=True, slots=True)
class Topic:
    """A unit of discussion with a planned duration in minutes."""

    id: str
    title: str
    estimated_duration: int
    priority: TopicPriority = TopicPriority.MEDIUM
    description: str = ""


@dataclass(frozen=True, slots=True)
class MessageSignals:
    """Keyword-derived sentiment signals attached to a message."""

    sentiment: str
    keywords: Tuple[str, ...]
    confidence: float


@dataclass(frozen=True, slots=True)
class Message:
    """A single utterance recorded against a topic."""

    id: str
    sender_id: str
    text: str
    timestamp: datetime
    topic_id: str
    reply_to: Optional[str] = None
    signals: Optional[MessageSignals] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "sender_id": self.sender_id,
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
            "topic_id": self.topic_id,
            "reply_to": self.reply_to,
        }
        if self.signals is not None:
            payload["signals"] = {
                "sentiment": self.signals.sentiment,
                "keywords": list(self.signals.keywords),
                "confidence": self.signals.confidence,
            }
        return payload


@dataclass(slots=True)
class TopicMetrics:
    """Derived conversation metrics for a topic."""

    total_messages: int = 0
    agent_messages: int = 0
    user_messages: int = 0
    average_message_length: float = 0.0
    relevance_score: int = 0


@dataclass(slots=True)
class TopicState:
    """Progress state tracked for a single topic."""

    topic_id: str
    estimated_duration: int
    status: TopicStatus = TopicStatus.PENDING
    message_count: int = 0
    participant_count: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    actual_duration: float = 0.0
    completion_percentage: int = 0
    metrics: TopicMetrics = field(default_factory=TopicMetrics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topic_id": self.topic_id,
            "status": self.status.value,
            "message_count": self.message_count,
            "participant_count": self.participant_count,
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "estimated_duration": self.estimated_duration,
            "actual_duration": self.actual_duration,
            "completion_percentage": self.completion_percentage,
            "metrics": {
                "total_messages": self.metrics.total_messages,
                "agent_messages": self.metrics.agent_messages,
                "user_messages": self.metrics.user_messages,
                "average_message_length": self.metrics.average_message_length,
                "relevance_score": self.metrics.relevance_score,
            },
        }


@dataclass(frozen=True, slots=True)
class TopicSummary:
    """Compact completion summary for a topic."""

    is_completed: bool
    message_count: int
    duration: float
    participants: int
    relevance_score: int
    target_messages: float


@dataclass(frozen=True, slots=True)
class ProgressReport:
    """Counts of topics by status across the session."""

    total_topics: int
    completed_topics: int
    active_topics: int
    pending_topics: int
    overall_progress: int


@dataclass(frozen=True, slots=True)
class CategoryScore:
    """Score for one sub-analysis plus the rationale behind it."""

    score: float
    rationale: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "rationale": list(self.rationale)}


@dataclass(frozen=True, slots=True)
class AssessmentResult:
    """Final verdict for a proposal."""

    verdict: Verdict
    confidence: float
    reasoning: str
    concerns: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verdict": self.verdict.value,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "concerns": list(self.concerns),
            "recommendations": list(self.recommendations),
        }


def fallback_assessment() -> AssessmentResult:
    """Return the fixed neutral result used when narrative generation fails."""

    return AssessmentResult(
        verdict=Verdict.NEUTRAL,
        confidence=50,
        reasoning="analysis failed",
        concerns=("unable to complete full analysis",),
        recommendations=("retry with updated context",),
    )


@dataclass(frozen=True, slots=True)
class AssessmentOutcome:
    """Scores and verdict for one proposal evaluation."""

    domain: str
    scores: Dict[str, CategoryScore]
    result: AssessmentResult
    used_fallback: bool
    sequence: int
    stale: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "scores": {
                name: score.to_dict() for name, score in self.scores.items()
            },
            "result": self.result.to_dict(),
            "used_fallback": self.used_fallback,
            "sequence": self.sequence,
            "stale": self.stale,
        }
