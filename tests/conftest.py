"""Shared fixtures for the boardroom session tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, List, Optional

import pytest

from boardroom_session.config import AppSettings
from boardroom_session.maf_client import ChatMessage
from boardroom_session.models import AssessmentResult, Message, Verdict
from boardroom_session.scoring import NarrativeRequest
from boardroom_session.topic_progress import TopicProgressEngine


class ManualClock:
    """Clock that only moves when a test advances it."""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self.current = start or datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, *, minutes: float = 0.0, seconds: float = 0.0) -> None:
        self.current += timedelta(minutes=minutes, seconds=seconds)


class ScriptedChatClient:
    """Chat client double that replays canned replies and records prompts."""

    def __init__(self, replies: Iterable[str]) -> None:
        self._replies = list(replies)
        self.calls: List[List[ChatMessage]] = []

    async def complete(self, messages: Iterable[ChatMessage]) -> ChatMessage:
        self.calls.append(list(messages))
        return ChatMessage(role="assistant", content=self._replies.pop(0))


class StaticNarrative:
    """Narrative generator double that always returns the same result."""

    def __init__(self, result: Optional[AssessmentResult] = None) -> None:
        self.result = result or AssessmentResult(
            verdict=Verdict.APPROVE,
            confidence=80,
            reasoning="Strong returns with manageable risk.",
            concerns=("execution capacity",),
            recommendations=("phase the rollout",),
        )
        self.requests: List[NarrativeRequest] = []

    async def evaluate(self, request: NarrativeRequest) -> AssessmentResult:
        self.requests.append(request)
        return self.result


class FailingNarrative:
    """Narrative generator double that raises on every call."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or RuntimeError("model unavailable")
        self.calls = 0

    async def evaluate(self, request: NarrativeRequest) -> AssessmentResult:
        self.calls += 1
        raise self.error


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def engine(clock: ManualClock) -> TopicProgressEngine:
    return TopicProgressEngine(clock=clock)


@pytest.fixture
def make_message(clock: ManualClock) -> Callable[..., Message]:
    """Build messages stamped with the manual clock."""

    counter = {"value": 0}

    def _make(
        topic_id: str,
        text: str = "We should review the quarterly numbers together",
        sender_id: str = "cfo",
    ) -> Message:
        counter["value"] += 1
        return Message(
            id=f"m{counter['value']}",
            sender_id=sender_id,
            text=text,
            timestamp=clock(),
            topic_id=topic_id,
        )

    return _make


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(
        model=None,
        output_dir=tmp_path,
        archive_log=tmp_path / "topics.jsonl",
        redis_url=None,
    )


@pytest.fixture
def static_narrative() -> StaticNarrative:
    return StaticNarrative()


@pytest.fixture
def failing_narrative() -> FailingNarrative:
    return FailingNarrative()
