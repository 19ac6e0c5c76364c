"""Shared session orchestration for boardroom discussions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional
from uuid import uuid4

from redis.exceptions import RedisError

from .config import AppSettings
from .conversation import DEFAULT_TURN_BUDGET, ConversationDriver
from .models import AssessmentOutcome, Message, Topic, TopicPriority, TopicState, TopicStatus
from .narrative import build_narrative_generator
from .registry import DomainRegistry, default_registry
from .scoring import AssessmentEngine, NarrativeGenerator
from .signals import analyze_message
from .topic_progress import Clock, TopicProgressEngine, UnknownTopicError
from .transcript_store import SessionArchive

logger = logging.getLogger(__name__)

_PRIORITY_RANK = {
    TopicPriority.HIGH: 0,
    TopicPriority.MEDIUM: 1,
    TopicPriority.LOW: 2,
}


@dataclass(slots=True)
class BoardroomSession:
    """Encapsulates the agenda and assessments for a single board meeting."""

    engine: TopicProgressEngine
    topics: Dict[str, Topic]
    narrative: NarrativeGenerator
    registry: DomainRegistry
    archive: Optional[SessionArchive] = None
    narrative_timeout: Optional[float] = None
    session_id: str = field(default_factory=lambda: uuid4().hex[:12])
    current_topic_id: Optional[str] = None
    completed: bool = False
    outcomes: Dict[str, List[AssessmentOutcome]] = field(default_factory=dict)
    archived_records: List[str] = field(default_factory=list)
    assessors: Dict[str, AssessmentEngine] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        settings: AppSettings,
        topics: Iterable[Topic],
        *,
        narrative: Optional[NarrativeGenerator] = None,
        registry: Optional[DomainRegistry] = None,
        clock: Optional[Clock] = None,
        archive: Optional[SessionArchive] = None,
    ) -> "BoardroomSession":
        engine = TopicProgressEngine(
            human_sender_id=settings.human_sender_id,
            clock=clock,
        )
        agenda: Dict[str, Topic] = {}
        for topic in topics:
            if topic.id in agenda:
                logger.warning(
                    "Topic %s (%s) skipped: id already on the agenda", topic.id, topic.title
                )
                continue
            if engine.initialize_topic(topic):
                agenda[topic.id] = topic
        if not agenda:
            raise ValueError("A session needs at least one valid topic.")
        session = cls(
            engine=engine,
            topics=agenda,
            narrative=narrative or build_narrative_generator(settings),
            registry=registry or default_registry(),
            archive=archive or SessionArchive(settings.archive_log, settings.redis_url),
            narrative_timeout=settings.narrative_timeout,
        )
        for topic_id in agenda:
            engine.on_topic_complete(topic_id, session._handle_topic_complete)
        return session

    @property
    def current_topic(self) -> Optional[Topic]:
        if self.current_topic_id is None:
            return None
        return self.topics[self.current_topic_id]

    def get_topic(self, topic_id: str) -> Topic:
        topic = self.topics.get(topic_id)
        if topic is None:
            raise UnknownTopicError(f"Topic {topic_id} not found")
        return topic

    def next_pending_topic(self) -> Optional[Topic]:
        """Return the highest-priority pending topic, agenda order breaking ties."""

        pending = [
            (index, topic)
            for index, topic in enumerate(self.topics.values())
            if self._status(topic.id) is TopicStatus.PENDING
        ]
        if not pending:
            return None
        pending.sort(key=lambda item: (_PRIORITY_RANK[item[1].priority], item[0]))
        return pending[0][1]

    def start(self) -> Optional[Topic]:
        """Activate the next topic if none is running and return it."""

        current = self.current_topic
        if current is not None and self._status(current.id) is TopicStatus.ACTIVE:
            return current
        return self._advance()

    def start_topic(self, topic_id: str) -> bool:
        """Start a specific topic, making it the current one."""

        self.get_topic(topic_id)
        if not self.engine.start_topic(topic_id):
            return False
        self.current_topic_id = topic_id
        self.completed = False
        return True

    def post_message(
        self,
        topic_id: str,
        sender_id: str,
        text: str,
        *,
        reply_to: Optional[str] = None,
    ) -> Optional[Message]:
        """Record ``text`` from ``sender_id`` against ``topic_id``."""

        self.get_topic(topic_id)
        message = Message(
            id=self.engine.next_message_id(topic_id),
            sender_id=sender_id,
            text=text,
            timestamp=self.engine.now(),
            topic_id=topic_id,
            reply_to=reply_to,
            signals=analyze_message(text),
        )
        if not self.engine.add_message(topic_id, message):
            return None
        return message

    def record_message(self, sender_id: str, text: str) -> Optional[Message]:
        """Record a message against the current topic."""

        current = self.current_topic
        if current is None:
            logger.warning("No active topic; message from %s ignored", sender_id)
            return None
        return self.post_message(current.id, sender_id, text)

    def complete_topic(self, topic_id: str) -> bool:
        self.get_topic(topic_id)
        return self.engine.complete_topic(topic_id)

    def reset_topic(self, topic_id: str) -> bool:
        """Return a topic to pending and drop assessments attached to it."""

        self.get_topic(topic_id)
        if not self.engine.reset_topic(topic_id):
            return False
        self.outcomes.pop(topic_id, None)
        if self.current_topic_id == topic_id:
            self.current_topic_id = None
        self.completed = False
        return True

    def run_agenda(
        self,
        driver: ConversationDriver,
        *,
        max_turns: int = DEFAULT_TURN_BUDGET,
    ) -> List[Message]:
        """Let ``driver`` discuss every topic until the agenda is exhausted."""

        transcript: List[Message] = []
        topic = self.start()
        while topic is not None:
            transcript.extend(driver.run_topic(topic, max_turns=max_turns))
            if not self.engine.is_topic_completed(topic.id):
                logger.info("Closing topic %s after the turn budget ran out", topic.id)
                self.engine.complete_topic(topic.id)
            topic = self.current_topic
        return transcript

    async def assess(
        self,
        domain: str,
        proposal: str,
        context: Optional[Mapping[str, Any]] = None,
        *,
        topic_id: Optional[str] = None,
    ) -> AssessmentOutcome:
        """Score ``proposal`` in ``domain`` and attach the outcome to a topic.

        The outcome is tied to the current topic unless ``topic_id`` is given.
        When that topic is reset while the narrative is in flight, the
        outcome is returned marked stale and is not attached.
        """

        assessor = self._assessor(domain)
        target = topic_id or self.current_topic_id
        if target is not None:
            self.get_topic(target)
        revision = self.engine.revision(target) if target else None

        outcome = await assessor.evaluate(proposal, context)

        if target is None:
            return outcome
        if self.engine.revision(target) != revision:
            logger.info(
                "Discarding %s assessment #%s: topic %s changed while it ran",
                outcome.domain,
                outcome.sequence,
                target,
            )
            return replace(outcome, stale=True)
        self.outcomes.setdefault(target, []).append(outcome)
        return outcome

    def describe_topic(self, topic_id: str) -> Dict[str, Any]:
        """Return the topic definition merged with its current state."""

        topic = self.get_topic(topic_id)
        state = self.engine.get_topic_state(topic_id)
        payload: Dict[str, Any] = {
            "id": topic.id,
            "title": topic.title,
            "description": topic.description,
            "priority": topic.priority.value,
            "current": topic.id == self.current_topic_id,
            "assessments": [
                outcome.to_dict() for outcome in self.outcomes.get(topic_id, [])
            ],
        }
        if state is not None:
            payload.update(state.to_dict())
        return payload

    def _assessor(self, domain: str) -> AssessmentEngine:
        definition = self.registry.resolve(domain)
        assessor = self.assessors.get(definition.name)
        if assessor is None:
            assessor = AssessmentEngine(
                definition,
                self.narrative,
                narrative_timeout=self.narrative_timeout,
            )
            self.assessors[definition.name] = assessor
        return assessor

    def _status(self, topic_id: str) -> Optional[TopicStatus]:
        state = self.engine.get_topic_state(topic_id)
        return state.status if state is not None else None

    def _advance(self) -> Optional[Topic]:
        upcoming = self.next_pending_topic()
        if upcoming is None:
            self.current_topic_id = None
            self.completed = True
            logger.info("Session %s agenda complete", self.session_id)
            return None
        self.engine.start_topic(upcoming.id)
        self.current_topic_id = upcoming.id
        self.completed = False
        return upcoming

    def _handle_topic_complete(self, topic_id: str, state: TopicState) -> None:
        if self.archive is not None:
            try:
                record_id = self.archive.save_topic(
                    session_id=self.session_id,
                    topic=self.topics[topic_id],
                    state=state,
                    messages=self.engine.get_topic_messages(topic_id),
                )
            except (OSError, RedisError):
                logger.exception("Failed to archive topic %s", topic_id)
            else:
                self.archived_records.append(record_id)
        if topic_id == self.current_topic_id:
            self._advance()
