"""Per-topic progress tracking and completion decisions.

The engine owns every topic's state and message log. Callers mutate it only
through the public operations and always receive copies on read, so a
snapshot held by a caller never changes underneath it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .config import DEFAULT_HUMAN_SENDER_ID
from .models import (
    Message,
    ProgressReport,
    Topic,
    TopicMetrics,
    TopicState,
    TopicStatus,
    TopicSummary,
)

logger = logging.getLogger(__name__)

MESSAGE_WEIGHT = 70
TIME_WEIGHT = 30
COMPLETION_THRESHOLD = 85
MAX_MESSAGES_FLOOR = 15
MAX_MESSAGES_FACTOR = 1.5
RELEVANCE_WORDS_TARGET = 20
PARTICIPANT_BONUS = 10

CompletionCallback = Callable[[str, TopicState], None]
Clock = Callable[[], datetime]


class UnknownTopicError(LookupError):
    """Raised internally when an operation names an unregistered topic."""


class InvalidTopicError(ValueError):
    """Raised internally when an operation receives unusable input."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for positive values (``2.5 -> 3``)."""

    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _clamp_percentage(value: float) -> int:
    return int(max(0, min(100, value)))


def target_message_count(duration: int) -> float:
    """Return the number of messages a topic of ``duration`` minutes needs."""

    if duration <= 5:
        return max(4, duration)
    if duration <= 10:
        return duration * 1.2
    if duration <= 20:
        return duration * 0.8
    return duration * 0.6


def max_message_count(duration: int) -> float:
    return max(target_message_count(duration) * MAX_MESSAGES_FACTOR, MAX_MESSAGES_FLOOR)


def relevance_score(messages: Sequence[Message]) -> int:
    """Score message depth and participant diversity on a 0-100 scale."""

    if not messages:
        return 0
    total_words = sum(len(message.text.split(" ")) for message in messages)
    average_words = total_words / len(messages)
    score = min(100.0, (average_words / RELEVANCE_WORDS_TARGET) * 100)
    participants = {message.sender_id for message in messages}
    if len(participants) > 2:
        score += PARTICIPANT_BONUS
    if len(participants) > 3:
        score += PARTICIPANT_BONUS
    return _clamp_percentage(round_half_up(score))


def completion_percentage(
    message_count: int,
    duration: int,
    start_time: Optional[datetime],
    now: datetime,
) -> int:
    """Blend message progress (70 points) with elapsed time (30 points)."""

    target = target_message_count(duration)
    message_weight = min(100.0, (message_count / target) * MESSAGE_WEIGHT)
    time_weight = 0.0
    if start_time is not None:
        elapsed_minutes = (now - start_time).total_seconds() / 60
        time_weight = min(100.0, (elapsed_minutes / duration) * TIME_WEIGHT)
    return _clamp_percentage(round_half_up(message_weight + time_weight))


def should_complete(state: TopicState) -> bool:
    """Return True when an active topic has met its completion criteria."""

    if state.status is not TopicStatus.ACTIVE:
        return False
    target = target_message_count(state.estimated_duration)
    reached_target = state.message_count >= target
    reached_threshold = state.completion_percentage >= COMPLETION_THRESHOLD
    reached_cap = state.message_count >= max_message_count(state.estimated_duration)
    logger.debug(
        "Completion check for %s: %s/%s messages, %s%%, cap %s",
        state.topic_id,
        state.message_count,
        target,
        state.completion_percentage,
        max_message_count(state.estimated_duration),
    )
    return reached_target and (reached_threshold or reached_cap)


def _copy_state(state: TopicState) -> TopicState:
    return replace(state, metrics=replace(state.metrics))


class TopicProgressEngine:
    """Tracks topic lifecycle, message logs, and derived metrics."""

    def __init__(
        self,
        *,
        human_sender_id: str = DEFAULT_HUMAN_SENDER_ID,
        clock: Clock | None = None,
    ) -> None:
        self._human_sender_id = human_sender_id
        self._clock: Clock = clock or _utcnow
        self._states: Dict[str, TopicState] = {}
        self._messages: Dict[str, List[Message]] = {}
        self._callbacks: Dict[str, CompletionCallback] = {}
        self._revisions: Dict[str, int] = {}
        self._message_counts: Dict[str, int] = {}

    @property
    def human_sender_id(self) -> str:
        return self._human_sender_id

    def now(self) -> datetime:
        return self._clock()

    def _require_state(self, topic_id: str) -> TopicState:
        state = self._states.get(topic_id)
        if state is None:
            raise UnknownTopicError(f"Topic {topic_id} not found")
        return state

    def has_topic(self, topic_id: str) -> bool:
        return topic_id in self._states

    def revision(self, topic_id: str) -> Optional[int]:
        """Return a counter that changes whenever the topic is reset."""

        return self._revisions.get(topic_id)

    def next_message_id(self, topic_id: str) -> str:
        """Allocate the next message id for ``topic_id``.

        Ids keep counting across resets so archived logs never repeat one.
        """

        count = self._message_counts.get(topic_id, 0) + 1
        self._message_counts[topic_id] = count
        return f"{topic_id}-msg-{count}"

    def initialize_topic(self, topic: Topic) -> bool:
        """Register ``topic`` as pending, discarding any previous state."""

        duration = topic.estimated_duration
        if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
            logger.warning(
                "Topic %s rejected: planned duration must be a positive "
                "integer, got %r",
                topic.id,
                duration,
            )
            return False
        self._states[topic.id] = TopicState(
            topic_id=topic.id,
            estimated_duration=duration,
        )
        self._messages[topic.id] = []
        self._revisions[topic.id] = self._revisions.get(topic.id, 0) + 1
        logger.info(
            "Topic %s initialized for tracking (%s minutes)", topic.id, duration
        )
        return True

    def initialize_topics(self, topics: Iterable[Topic]) -> List[str]:
        """Initialize several topics and return the ids that were accepted."""

        return [topic.id for topic in topics if self.initialize_topic(topic)]

    def start_topic(self, topic_id: str) -> bool:
        try:
            state = self._require_state(topic_id)
            if state.status is TopicStatus.COMPLETED:
                raise InvalidTopicError(
                    f"Topic {topic_id} is completed; reset it before restarting"
                )
        except (UnknownTopicError, InvalidTopicError) as exc:
            logger.warning("Cannot start topic: %s", exc)
            return False
        state.status = TopicStatus.ACTIVE
        state.start_time = self._clock()
        state.completion_percentage = 0
        logger.info(
            "Topic %s started (%s min duration)", topic_id, state.estimated_duration
        )
        return True

    def add_message(self, topic_id: str, message: Message) -> bool:
        """Append ``message`` and refresh metrics, completing if warranted."""

        try:
            state = self._require_state(topic_id)
            if message.topic_id != topic_id:
                raise InvalidTopicError(
                    f"Message {message.id} belongs to topic {message.topic_id}, "
                    f"not {topic_id}"
                )
        except (UnknownTopicError, InvalidTopicError) as exc:
            logger.warning("Cannot add message: %s", exc)
            return False

        messages = self._messages[topic_id]
        messages.append(message)

        user_messages = sum(
            1 for item in messages if item.sender_id == self._human_sender_id
        )
        state.message_count = len(messages)
        state.participant_count = len({item.sender_id for item in messages})
        state.metrics = TopicMetrics(
            total_messages=len(messages),
            agent_messages=len(messages) - user_messages,
            user_messages=user_messages,
            average_message_length=(
                sum(len(item.text) for item in messages) / len(messages)
            ),
            relevance_score=relevance_score(messages),
        )
        if state.status is not TopicStatus.COMPLETED:
            state.completion_percentage = completion_percentage(
                state.message_count,
                state.estimated_duration,
                state.start_time,
                self._clock(),
            )

        logger.debug(
            "Message added to topic %s (%s min). Total messages: %s",
            topic_id,
            state.estimated_duration,
            state.message_count,
        )
        if should_complete(state):
            self.complete_topic(topic_id)
        return True

    def complete_topic(self, topic_id: str) -> bool:
        """Mark an active topic completed and fire its callback once."""

        try:
            state = self._require_state(topic_id)
            if state.status is TopicStatus.PENDING:
                raise InvalidTopicError(
                    f"Topic {topic_id} has not been started"
                )
        except (UnknownTopicError, InvalidTopicError) as exc:
            logger.warning("Cannot complete topic: %s", exc)
            return False
        if state.status is TopicStatus.COMPLETED:
            logger.debug("Topic %s already completed", topic_id)
            return False

        end_time = self._clock()
        elapsed_minutes = 0.0
        if state.start_time is not None:
            elapsed_minutes = (end_time - state.start_time).total_seconds() / 60
        state.status = TopicStatus.COMPLETED
        state.end_time = end_time
        state.actual_duration = round_half_up(elapsed_minutes, 1)
        state.completion_percentage = 100
        logger.info(
            "Topic %s completed (%s min planned). Duration: %.1f minutes, "
            "Messages: %s",
            topic_id,
            state.estimated_duration,
            elapsed_minutes,
            state.message_count,
        )

        callback = self._callbacks.get(topic_id)
        if callback is not None:
            try:
                callback(topic_id, _copy_state(state))
            except Exception:
                logger.exception("Completion callback failed for topic %s", topic_id)
        return True

    def on_topic_complete(self, topic_id: str, callback: CompletionCallback) -> bool:
        """Register the single completion callback for ``topic_id``."""

        if topic_id not in self._states:
            logger.warning(
                "Cannot register completion callback: Topic %s not found",
                topic_id,
            )
            return False
        self._callbacks[topic_id] = callback
        return True

    def get_topic_state(self, topic_id: str) -> Optional[TopicState]:
        state = self._states.get(topic_id)
        if state is None:
            logger.warning("Topic %s not found in state manager", topic_id)
            return None
        return _copy_state(state)

    def get_topic_messages(self, topic_id: str) -> List[Message]:
        messages = self._messages.get(topic_id)
        if messages is None:
            logger.warning("Topic %s not found in state manager", topic_id)
            return []
        return list(messages)

    def get_all_topic_states(self) -> Dict[str, TopicState]:
        return {
            topic_id: _copy_state(state) for topic_id, state in self._states.items()
        }

    def is_topic_completed(self, topic_id: str) -> bool:
        state = self._states.get(topic_id)
        return state is not None and state.status is TopicStatus.COMPLETED

    def get_topic_summary(self, topic_id: str) -> Optional[TopicSummary]:
        state = self._states.get(topic_id)
        if state is None:
            logger.warning("Topic %s not found in state manager", topic_id)
            return None
        return TopicSummary(
            is_completed=state.status is TopicStatus.COMPLETED,
            message_count=state.message_count,
            duration=state.actual_duration,
            participants=state.participant_count,
            relevance_score=state.metrics.relevance_score,
            target_messages=target_message_count(state.estimated_duration),
        )

    def reset_topic(self, topic_id: str) -> bool:
        """Return a topic to pending with an empty log and zeroed metrics."""

        try:
            state = self._require_state(topic_id)
        except UnknownTopicError as exc:
            logger.warning("Cannot reset topic: %s", exc)
            return False
        self._states[topic_id] = TopicState(
            topic_id=topic_id,
            estimated_duration=state.estimated_duration,
        )
        self._messages[topic_id] = []
        self._revisions[topic_id] = self._revisions.get(topic_id, 0) + 1
        logger.info("Topic %s reset", topic_id)
        return True

    def get_progress_report(self) -> ProgressReport:
        states = list(self._states.values())
        completed = sum(1 for s in states if s.status is TopicStatus.COMPLETED)
        active = sum(1 for s in states if s.status is TopicStatus.ACTIVE)
        pending = sum(1 for s in states if s.status is TopicStatus.PENDING)
        overall = 0
        if states:
            overall = int(round_half_up(completed / len(states) * 100))
        return ProgressReport(
            total_topics=len(states),
            completed_topics=completed,
            active_topics=active,
            pending_topics=pending,
            overall_progress=overall,
        )
