"""Tests for boardroom_session/topic_progress.py."""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest

from boardroom_session.models import Topic, TopicPriority, TopicStatus
from boardroom_session.topic_progress import (
    TopicProgressEngine,
    completion_percentage,
    max_message_count,
    relevance_score,
    round_half_up,
    target_message_count,
)


def _topic(topic_id: str = "t1", duration: int = 10) -> Topic:
    return Topic(id=topic_id, title=topic_id.upper(), estimated_duration=duration)


class TestFormulas:
    """Pure helpers behind the engine."""

    @pytest.mark.parametrize(
        "duration, expected",
        [(1, 4), (3, 4), (5, 5), (8, 9.6), (10, 12), (15, 12), (20, 16), (30, 18)],
    )
    def test_target_message_count(self, duration, expected):
        """Targets follow the duration bands."""
        assert target_message_count(duration) == pytest.approx(expected)

    def test_max_message_count_has_floor(self):
        """The hard cap never drops below fifteen messages."""
        assert max_message_count(5) == 15
        assert max_message_count(30) == pytest.approx(27)

    def test_round_half_up(self):
        """Halves round up like the reference rounding."""
        assert round_half_up(95.5) == 96
        assert round_half_up(2.5) == 3
        assert round_half_up(4.25, 1) == pytest.approx(4.3)

    def test_completion_percentage_without_start(self, clock):
        """Elapsed time contributes nothing until the topic starts."""
        assert completion_percentage(6, 10, None, clock()) == 35

    def test_completion_percentage_blends_time(self, clock):
        """Four and a quarter minutes of a five minute topic adds 25.5 points."""
        start = clock()
        now = start + timedelta(minutes=4.25)
        assert completion_percentage(5, 5, start, now) == 96

    def test_completion_percentage_clamped(self, clock):
        """Overshooting both targets still reports 100."""
        start = clock()
        now = start + timedelta(minutes=60)
        assert completion_percentage(40, 5, start, now) == 100


class TestRelevanceScore:
    """Word-count based relevance."""

    def test_empty_log(self):
        """No messages scores zero."""
        assert relevance_score([]) == 0

    def test_average_words(self, make_message):
        """Ten words per message is half of the twenty word target."""
        text = " ".join(["word"] * 10)
        messages = [make_message("t1", text, sender) for sender in ("a", "b")]
        assert relevance_score(messages) == 50

    def test_participant_bonuses(self, make_message):
        """Three senders add ten points and four add twenty."""
        text = " ".join(["word"] * 10)
        three = [make_message("t1", text, sender) for sender in ("a", "b", "c")]
        four = three + [make_message("t1", text, "d")]
        assert relevance_score(three) == 60
        assert relevance_score(four) == 70

    def test_clamped_to_hundred(self, make_message):
        """Long messages from many senders cannot exceed 100."""
        text = " ".join(["word"] * 40)
        messages = [make_message("t1", text, s) for s in ("a", "b", "c", "d")]
        assert relevance_score(messages) == 100

    def test_words_split_on_single_spaces(self, make_message):
        """Consecutive spaces count as empty words."""
        messages = [make_message("t1", "a  b")]
        assert relevance_score(messages) == 15


class TestLifecycle:
    """Initialization, start, completion and reset."""

    def test_initialize_creates_pending_state(self, engine):
        """A new topic is pending with zeroed metrics."""
        assert engine.initialize_topic(_topic())
        state = engine.get_topic_state("t1")
        assert state.status is TopicStatus.PENDING
        assert state.message_count == 0
        assert state.metrics.relevance_score == 0
        assert engine.get_topic_messages("t1") == []

    @pytest.mark.parametrize("duration", [0, -5, 2.5, True])
    def test_initialize_rejects_bad_duration(self, engine, duration):
        """Non-positive or non-integer durations are refused."""
        topic = Topic(id="bad", title="Bad", estimated_duration=duration)
        assert not engine.initialize_topic(topic)
        assert not engine.has_topic("bad")

    def test_reinitialize_discards_previous_state(self, engine, make_message):
        """Initializing an existing id starts from scratch."""
        engine.initialize_topic(_topic())
        engine.start_topic("t1")
        engine.add_message("t1", make_message("t1"))
        engine.initialize_topic(_topic())
        state = engine.get_topic_state("t1")
        assert state.status is TopicStatus.PENDING
        assert state.message_count == 0
        assert engine.get_topic_messages("t1") == []

    def test_initialize_topics_returns_accepted_ids(self, engine):
        """Only valid topics are registered."""
        accepted = engine.initialize_topics(
            [_topic("a"), Topic(id="b", title="B", estimated_duration=0), _topic("c")]
        )
        assert accepted == ["a", "c"]

    def test_start_sets_start_time(self, engine, clock):
        """Starting activates the topic at the current time."""
        engine.initialize_topic(_topic())
        assert engine.start_topic("t1")
        state = engine.get_topic_state("t1")
        assert state.status is TopicStatus.ACTIVE
        assert state.start_time == clock()
        assert state.completion_percentage == 0

    def test_start_unknown_topic(self, engine, caplog):
        """Unknown ids are logged and refused."""
        with caplog.at_level(logging.WARNING):
            assert not engine.start_topic("missing")
        assert "missing" in caplog.text

    def test_start_completed_topic_requires_reset(self, engine):
        """A completed topic stays completed when started again."""
        engine.initialize_topic(_topic())
        engine.start_topic("t1")
        engine.complete_topic("t1")
        assert not engine.start_topic("t1")
        assert engine.is_topic_completed("t1")

    def test_complete_pending_topic_refused(self, engine):
        """A topic must be started before it can complete."""
        engine.initialize_topic(_topic())
        assert not engine.complete_topic("t1")
        assert engine.get_topic_state("t1").status is TopicStatus.PENDING

    def test_complete_records_duration(self, engine, clock):
        """Actual duration is rounded to one decimal."""
        engine.initialize_topic(_topic())
        engine.start_topic("t1")
        clock.advance(minutes=7, seconds=20)
        assert engine.complete_topic("t1")
        state = engine.get_topic_state("t1")
        assert state.status is TopicStatus.COMPLETED
        assert state.end_time == clock()
        assert state.actual_duration == pytest.approx(7.3)
        assert state.completion_percentage == 100

    def test_complete_is_idempotent(self, engine):
        """The callback fires once even when completion is requested twice."""
        calls = []
        engine.initialize_topic(_topic())
        engine.on_topic_complete("t1", lambda topic_id, state: calls.append(topic_id))
        engine.start_topic("t1")
        assert engine.complete_topic("t1")
        assert not engine.complete_topic("t1")
        assert calls == ["t1"]


class TestAddMessage:
    """Metric updates and automatic completion."""

    def test_scenario_below_threshold_stays_active(self, engine, make_message):
        """Ten minute topic with twelve instant messages reaches 70 percent."""
        engine.initialize_topic(_topic(duration=10))
        engine.start_topic("t1")
        for _ in range(12):
            assert engine.add_message("t1", make_message("t1"))
        state = engine.get_topic_state("t1")
        assert state.completion_percentage == 70
        assert state.status is TopicStatus.ACTIVE

    def test_scenario_auto_completion(self, engine, clock, make_message):
        """Five messages after 4.25 minutes complete a five minute topic."""
        completed = []
        engine.initialize_topic(_topic(duration=5))
        engine.on_topic_complete("t1", lambda topic_id, state: completed.append(state))
        engine.start_topic("t1")
        clock.advance(minutes=4.25)
        for index in range(4):
            engine.add_message("t1", make_message("t1"))
            assert not completed, f"completed early after {index + 1} messages"
        assert engine.get_topic_state("t1").completion_percentage == 82

        engine.add_message("t1", make_message("t1"))

        assert len(completed) == 1
        final = completed[0]
        assert final.status is TopicStatus.COMPLETED
        assert final.message_count == 5
        assert final.actual_duration == pytest.approx(4.3)
        assert engine.is_topic_completed("t1")

    def test_threshold_reached_by_messages_alone(self, engine, make_message):
        """Message progress alone can pass the threshold once the target is met."""
        engine.initialize_topic(_topic(duration=10))
        engine.start_topic("t1")
        for _ in range(14):
            engine.add_message("t1", make_message("t1"))
        assert not engine.is_topic_completed("t1")
        engine.add_message("t1", make_message("t1"))
        assert engine.is_topic_completed("t1")

    def test_pending_topic_never_auto_completes(self, engine, make_message):
        """Messages on a pending topic are counted but do not complete it."""
        engine.initialize_topic(_topic(duration=5))
        for _ in range(20):
            engine.add_message("t1", make_message("t1"))
        state = engine.get_topic_state("t1")
        assert state.status is TopicStatus.PENDING
        assert state.message_count == 20

    def test_user_and_agent_counts(self, engine, make_message):
        """The reserved human sender id splits the counts."""
        engine.initialize_topic(_topic())
        engine.start_topic("t1")
        engine.add_message("t1", make_message("t1", "hello there", "user"))
        engine.add_message("t1", make_message("t1", "good point", "cfo"))
        engine.add_message("t1", make_message("t1", "agreed", "cdo"))
        state = engine.get_topic_state("t1")
        assert state.metrics.user_messages == 1
        assert state.metrics.agent_messages == 2
        assert state.participant_count == 3
        assert state.metrics.average_message_length == pytest.approx(
            (11 + 10 + 6) / 3
        )

    def test_custom_human_sender(self, clock, make_message):
        """The human sender id is configurable."""
        engine = TopicProgressEngine(human_sender_id="chair", clock=clock)
        engine.initialize_topic(_topic())
        engine.add_message("t1", make_message("t1", sender_id="chair"))
        assert engine.get_topic_state("t1").metrics.user_messages == 1

    def test_unknown_topic(self, engine, make_message):
        """Messages for unknown topics are refused."""
        assert not engine.add_message("missing", make_message("missing"))

    def test_topic_mismatch(self, engine, make_message):
        """A message addressed to another topic is refused."""
        engine.initialize_topic(_topic())
        assert not engine.add_message("t1", make_message("other"))
        assert engine.get_topic_state("t1").message_count == 0

    def test_message_after_completion(self, engine, make_message):
        """Late messages are logged but completion stays at 100."""
        engine.initialize_topic(_topic())
        engine.start_topic("t1")
        engine.complete_topic("t1")
        assert engine.add_message("t1", make_message("t1"))
        state = engine.get_topic_state("t1")
        assert state.message_count == 1
        assert state.completion_percentage == 100
        assert state.status is TopicStatus.COMPLETED

    def test_message_ids_continue_after_reset(self, engine):
        """Allocated ids count per topic and never restart."""
        engine.initialize_topic(_topic("t1"))
        engine.initialize_topic(_topic("t2"))
        assert engine.next_message_id("t1") == "t1-msg-1"
        assert engine.next_message_id("t2") == "t2-msg-1"
        engine.reset_topic("t1")
        assert engine.next_message_id("t1") == "t1-msg-2"

    def test_order_preserved_without_dedupe(self, engine, make_message):
        """The same message can be appended twice and order is kept."""
        engine.initialize_topic(_topic())
        first = make_message("t1", "first")
        second = make_message("t1", "second")
        for message in (first, second, first):
            engine.add_message("t1", message)
        assert [m.text for m in engine.get_topic_messages("t1")] == [
            "first",
            "second",
            "first",
        ]


class TestCallbacks:
    """Completion callback registration."""

    def test_unknown_topic_rejected(self, engine):
        """Callbacks cannot be registered for unknown topics."""
        assert not engine.on_topic_complete("missing", lambda *_: None)

    def test_reregistering_replaces(self, engine):
        """Only the latest callback fires."""
        calls = []
        engine.initialize_topic(_topic())
        engine.on_topic_complete("t1", lambda *_: calls.append("old"))
        engine.on_topic_complete("t1", lambda *_: calls.append("new"))
        engine.start_topic("t1")
        engine.complete_topic("t1")
        assert calls == ["new"]

    def test_callback_survives_reset(self, engine):
        """A reset topic keeps its callback for the next completion."""
        calls = []
        engine.initialize_topic(_topic())
        engine.on_topic_complete("t1", lambda topic_id, _: calls.append(topic_id))
        engine.start_topic("t1")
        engine.complete_topic("t1")
        engine.reset_topic("t1")
        engine.start_topic("t1")
        engine.complete_topic("t1")
        assert calls == ["t1", "t1"]

    def test_callback_errors_are_logged(self, engine, caplog):
        """A failing callback does not break completion."""

        def explode(topic_id, state):
            raise RuntimeError("boom")

        engine.initialize_topic(_topic())
        engine.on_topic_complete("t1", explode)
        engine.start_topic("t1")
        with caplog.at_level(logging.ERROR):
            assert engine.complete_topic("t1")
        assert engine.is_topic_completed("t1")
        assert "Completion callback failed" in caplog.text

    def test_callback_receives_copy(self, engine):
        """Mutating the callback's state leaves the engine untouched."""
        engine.initialize_topic(_topic())

        def tamper(topic_id, state):
            state.message_count = 999
            state.metrics.total_messages = 999

        engine.on_topic_complete("t1", tamper)
        engine.start_topic("t1")
        engine.complete_topic("t1")
        state = engine.get_topic_state("t1")
        assert state.message_count == 0
        assert state.metrics.total_messages == 0


class TestReadsAndReset:
    """Defensive copies, summaries and reports."""

    def test_state_is_a_copy(self, engine):
        """Changing a returned state does not change the engine."""
        engine.initialize_topic(_topic())
        snapshot = engine.get_topic_state("t1")
        snapshot.status = TopicStatus.COMPLETED
        snapshot.metrics.relevance_score = 50
        fresh = engine.get_topic_state("t1")
        assert fresh.status is TopicStatus.PENDING
        assert fresh.metrics.relevance_score == 0

    def test_messages_are_a_copy(self, engine, make_message):
        """The returned list is independent of the log."""
        engine.initialize_topic(_topic())
        engine.add_message("t1", make_message("t1"))
        messages = engine.get_topic_messages("t1")
        messages.clear()
        assert len(engine.get_topic_messages("t1")) == 1

    def test_all_states_are_copies(self, engine):
        """Every state in the bulk read is a copy."""
        engine.initialize_topic(_topic("a"))
        engine.initialize_topic(_topic("b"))
        states = engine.get_all_topic_states()
        assert set(states) == {"a", "b"}
        states["a"].message_count = 10
        assert engine.get_topic_state("a").message_count == 0

    def test_unknown_reads(self, engine):
        """Unknown ids read as absent."""
        assert engine.get_topic_state("missing") is None
        assert engine.get_topic_messages("missing") == []
        assert engine.get_topic_summary("missing") is None
        assert not engine.is_topic_completed("missing")

    def test_reset_completed_topic(self, engine, make_message):
        """Reset returns a completed topic to a clean pending state."""
        engine.initialize_topic(_topic())
        engine.start_topic("t1")
        engine.add_message("t1", make_message("t1", sender_id="cfo"))
        engine.add_message("t1", make_message("t1", sender_id="ceo"))
        engine.complete_topic("t1")

        assert engine.reset_topic("t1")

        state = engine.get_topic_state("t1")
        assert state.status is TopicStatus.PENDING
        assert state.message_count == 0
        assert state.participant_count == 0
        assert state.start_time is None
        assert state.end_time is None
        assert engine.get_topic_messages("t1") == []

    def test_reset_unknown(self, engine):
        """Unknown ids cannot be reset."""
        assert not engine.reset_topic("missing")

    def test_revision_changes_on_reset(self, engine):
        """Initialization and reset both bump the revision."""
        assert engine.revision("t1") is None
        engine.initialize_topic(_topic())
        first = engine.revision("t1")
        engine.reset_topic("t1")
        assert engine.revision("t1") == first + 1

    def test_summary(self, engine, clock, make_message):
        """The summary reflects counts and the target."""
        engine.initialize_topic(_topic(duration=10))
        engine.start_topic("t1")
        engine.add_message("t1", make_message("t1", sender_id="cfo"))
        engine.add_message("t1", make_message("t1", sender_id="cdo"))
        summary = engine.get_topic_summary("t1")
        assert not summary.is_completed
        assert summary.message_count == 2
        assert summary.participants == 2
        assert summary.target_messages == pytest.approx(12)

    def test_progress_report(self, engine):
        """Overall progress is the rounded share of completed topics."""
        for topic_id in ("a", "b", "c"):
            engine.initialize_topic(_topic(topic_id))
        engine.start_topic("a")
        engine.complete_topic("a")
        engine.start_topic("b")
        report = engine.get_progress_report()
        assert report.total_topics == 3
        assert report.completed_topics == 1
        assert report.active_topics == 1
        assert report.pending_topics == 1
        assert report.overall_progress == 33

        engine.complete_topic("b")
        assert engine.get_progress_report().overall_progress == 67

    def test_progress_report_empty(self, engine):
        """No topics means zero progress."""
        report = engine.get_progress_report()
        assert report.total_topics == 0
        assert report.overall_progress == 0

    def test_priority_does_not_affect_tracking(self, engine):
        """Priority is carried on the topic but ignored by the engine."""
        topic = Topic(
            id="p", title="P", estimated_duration=5, priority=TopicPriority.HIGH
        )
        assert engine.initialize_topic(topic)
        assert engine.get_topic_state("p").estimated_duration == 5
