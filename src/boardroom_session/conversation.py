"""Simulated participants that feed messages into the topic engine.

Turn-taking is driven by an injected :class:`random.Random`, so a seeded run
always produces the same conversation.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from .models import Message, Topic
from .signals import analyze_message
from .topic_progress import TopicProgressEngine

logger = logging.getLogger(__name__)

DEFAULT_TURN_BUDGET = 60

DEFAULT_RESPONSES: Dict[str, Sequence[str]] = {
    "ceo": (
        "For {topic}, the question is how this moves our strategy forward over the next four quarters.",
        "I want every option on {topic} measured against customer growth and our competitive position.",
        "Let's agree on the decision criteria for {topic} before we debate the details.",
        "If we commit to {topic}, I need a clear owner and a timeline the board can track.",
    ),
    "cfo": (
        "On {topic}, the investment only makes sense if payback lands inside two years.",
        "I see real cash flow risk in {topic} unless we phase the spend.",
        "The budget for {topic} has to show a credible return before we approve anything.",
        "Let's model a downside case for {topic} so we understand the exposure.",
    ),
    "cdo": (
        "Our data quality has to improve before {topic} can deliver reliable insight.",
        "For {topic}, governance and privacy reviews should run in parallel with delivery.",
        "We already collect most of the data {topic} needs; integration is the bottleneck.",
        "I'd like success metrics for {topic} defined up front so analytics can track them.",
    ),
    "cto": (
        "Technically, {topic} is feasible, but we need to budget for the platform work underneath it.",
        "The main engineering challenge in {topic} is integrating with legacy systems.",
        "I'd start {topic} with a small pilot to validate the architecture.",
        "Security review for {topic} should happen before we expose anything externally.",
    ),
}

GENERIC_RESPONSES: Sequence[str] = (
    "I think {topic} deserves a closer look from my team.",
    "We should capture the open questions on {topic} before moving on.",
    "There is an opportunity in {topic} if we manage the risk carefully.",
)


class ResponseStrategy(Protocol):
    def respond(self, topic: Topic) -> str:
        """Return the next utterance for ``topic``."""
        ...


class PooledResponder:
    """Draws responses from a pool without repeating until it is exhausted."""

    def __init__(self, responses: Sequence[str], rng: random.Random) -> None:
        if not responses:
            raise ValueError("Response pool must not be empty")
        self._responses = list(responses)
        self._rng = rng
        self._used: set[int] = set()

    def respond(self, topic: Topic) -> str:
        if len(self._used) == len(self._responses):
            self._used.clear()
        available = [
            index for index in range(len(self._responses)) if index not in self._used
        ]
        choice = self._rng.choice(available)
        self._used.add(choice)
        return self._responses[choice].format(topic=topic.title)


StrategyFactory = Callable[[random.Random], ResponseStrategy]


class RoleRegistry:
    """Resolves a participant role identifier to a response strategy."""

    def __init__(self, fallback: Optional[StrategyFactory] = None) -> None:
        self._factories: Dict[str, StrategyFactory] = {}
        self._fallback = fallback

    def register(self, role: str, factory: StrategyFactory) -> None:
        self._factories[role.strip().lower()] = factory

    def create(self, role: str, rng: random.Random) -> ResponseStrategy:
        factory = self._factories.get(role.strip().lower(), self._fallback)
        if factory is None:
            raise KeyError(f"No response strategy registered for role '{role}'")
        return factory(rng)


def _pool_factory(responses: Sequence[str]) -> StrategyFactory:
    return lambda rng: PooledResponder(responses, rng)


def default_role_registry() -> RoleRegistry:
    registry = RoleRegistry(fallback=_pool_factory(GENERIC_RESPONSES))
    for role, responses in DEFAULT_RESPONSES.items():
        registry.register(role, _pool_factory(responses))
    return registry


@dataclass(frozen=True, slots=True)
class Participant:
    """A simulated board member."""

    id: str
    role: str
    name: str = ""


class SimulatedClock:
    """Deterministic clock that moves forward a fixed step per tick."""

    def __init__(
        self,
        start: Optional[datetime] = None,
        step: timedelta = timedelta(seconds=30),
    ) -> None:
        self._now = start or datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
        self._step = step

    def __call__(self) -> datetime:
        return self._now

    def tick(self) -> datetime:
        self._now += self._step
        return self._now


class ConversationDriver:
    """Chooses speakers and pushes their messages into the engine."""

    def __init__(
        self,
        engine: TopicProgressEngine,
        participants: Sequence[Participant],
        *,
        rng: Optional[random.Random] = None,
        roles: Optional[RoleRegistry] = None,
        clock: Optional[SimulatedClock] = None,
    ) -> None:
        if not participants:
            raise ValueError("At least one participant is required")
        self._engine = engine
        self._participants = list(participants)
        self._rng = rng or random.Random()
        self._clock = clock
        registry = roles or default_role_registry()
        self._strategies: Dict[str, ResponseStrategy] = {
            participant.id: registry.create(participant.role, self._rng)
            for participant in self._participants
        }
        self._last_speaker: Optional[str] = None

    def next_speaker(self) -> Participant:
        candidates = [
            participant
            for participant in self._participants
            if participant.id != self._last_speaker
        ] or self._participants
        speaker = self._rng.choice(candidates)
        self._last_speaker = speaker.id
        return speaker

    def take_turn(self, topic: Topic) -> Message:
        """Generate one message for ``topic`` and record it in the engine."""

        speaker = self.next_speaker()
        text = self._strategies[speaker.id].respond(topic)
        if self._clock is not None:
            self._clock.tick()
        message = Message(
            id=self._engine.next_message_id(topic.id),
            sender_id=speaker.id,
            text=text,
            timestamp=self._engine.now(),
            topic_id=topic.id,
            signals=analyze_message(text),
        )
        self._engine.add_message(topic.id, message)
        return message

    def run_topic(self, topic: Topic, *, max_turns: int = DEFAULT_TURN_BUDGET) -> List[Message]:
        """Take turns until the topic completes or the budget runs out."""

        messages: List[Message] = []
        for _ in range(max_turns):
            if self._engine.is_topic_completed(topic.id):
                break
            messages.append(self.take_turn(topic))
        if not self._engine.is_topic_completed(topic.id):
            logger.info(
                "Turn budget of %s exhausted before topic %s completed",
                max_turns,
                topic.id,
            )
        return messages
