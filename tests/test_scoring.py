"""Tests for boardroom_session/scoring.py."""

from __future__ import annotations

import asyncio
import logging

import pytest

from boardroom_session.models import AssessmentResult, Verdict, fallback_assessment
from boardroom_session.scoring import (
    AssessmentContext,
    AssessmentEngine,
    CategoricalAdjustment,
    CategoryAnalysis,
    ContextField,
    DomainDefinition,
    Tier,
    TieredAdjustment,
    above,
    always,
    field_value,
    summarize_scores,
)

FIELDS = (
    ContextField("level", "Level", 5),
    ContextField("grade", "Grade", "ok", kind="choice", choices=("ok", "great", "bad")),
    ContextField("urgent", "Urgent", False, kind="flag"),
    ContextField("history", "History", (), kind="series"),
)

LEVEL = CategoryAnalysis(
    name="level",
    title="Level",
    base=lambda context: context["level"] * 10,
    adjustments=(
        TieredAdjustment(
            value=field_value("level"),
            tiers=(
                Tier(above(8), 30, "Very high level {value}"),
                Tier(above(4), 0, "Middling level {value}"),
                Tier(always, -40, "Low level {value}"),
            ),
        ),
        TieredAdjustment(
            value=field_value("urgent"),
            tiers=(Tier(bool, -5, "Urgent requests cost more"),),
            when=lambda context: context.is_provided("urgent"),
        ),
    ),
)

GRADE = CategoryAnalysis(
    name="grade",
    title="Grade",
    base=60,
    adjustments=(
        CategoricalAdjustment(
            source="grade",
            deltas={"great": 20, "bad": -20},
            rationales={"great": "Graded great"},
            otherwise="Grade is {value}",
        ),
    ),
)


def _domain() -> DomainDefinition:
    return DomainDefinition(
        name="sample",
        title="Sample",
        role_prompt="You review samples.",
        concern_label="sample",
        fields=FIELDS,
        analyses=(LEVEL, GRADE),
    )


class SlowNarrative:
    async def evaluate(self, request):
        await asyncio.sleep(1)
        return AssessmentResult(Verdict.APPROVE, 90, "late")


class WrongTypeNarrative:
    async def evaluate(self, request):
        return {"verdict": "approve"}


class TestAssessmentContext:
    """Field coercion and defaults."""

    def test_defaults_when_absent(self):
        """Absent fields resolve to their defaults."""
        context = AssessmentContext(FIELDS)
        assert context["level"] == 5
        assert context["grade"] == "ok"
        assert not context.is_provided("level")

    def test_numeric_strings_are_coerced(self):
        """Numeric strings become numbers."""
        context = AssessmentContext(FIELDS, {"level": "7", "history": "1, 2,3"})
        assert context["level"] == 7
        assert context["history"] == [1.0, 2.0, 3.0]

    @pytest.mark.parametrize("raw", ["abc", float("nan"), float("inf"), True, [1]])
    def test_bad_numbers_fall_back(self, raw, caplog):
        """Non-finite or non-numeric values fall back to the default."""
        with caplog.at_level(logging.WARNING):
            context = AssessmentContext(FIELDS, {"level": raw})
        assert context["level"] == 5
        assert not context.is_provided("level")
        assert "level" in caplog.text

    def test_series_with_bad_entry_falls_back(self):
        """One non-numeric projection discards the series."""
        context = AssessmentContext(FIELDS, {"history": [1, "x"]})
        assert context["history"] == ()

    def test_choice_normalized(self):
        """Choices are lowercased with underscores turned into hyphens."""
        context = AssessmentContext(FIELDS, {"grade": " GREAT "})
        assert context["grade"] == "great"
        context = AssessmentContext(FIELDS, {"grade": "Needs_Work"})
        assert context["grade"] == "needs-work"

    def test_flag_parsing(self):
        """Flags accept common truthy strings."""
        assert AssessmentContext(FIELDS, {"urgent": "yes"})["urgent"] is True
        assert AssessmentContext(FIELDS, {"urgent": "no"})["urgent"] is False

    def test_unknown_and_none_fields_ignored(self):
        """Unknown names and explicit None values are dropped."""
        context = AssessmentContext(FIELDS, {"mystery": 1, "level": None})
        assert context.provided() == {}
        assert set(context.resolved()) == {"level", "grade", "urgent", "history"}

    def test_describe_marks_missing_fields(self):
        """Absent fields are described as not specified."""
        lines = AssessmentContext(FIELDS, {"level": 2.5}).describe()
        assert lines[0] == "- Level: 2.5"
        assert lines[1] == "- Grade: Not specified"


class TestCategoryAnalysis:
    """The shared tiered evaluator."""

    def test_first_matching_tier_applies(self):
        """Only the first matching tier contributes."""
        score = LEVEL.evaluate(AssessmentContext(FIELDS, {"level": 6}))
        assert score.score == 60
        assert score.rationale == ("Middling level 6",)

    def test_clamped_high(self):
        """Scores above 100 are clamped."""
        score = LEVEL.evaluate(AssessmentContext(FIELDS, {"level": 10}))
        assert score.score == 100

    def test_clamped_low(self):
        """Scores below 0 are clamped."""
        score = LEVEL.evaluate(AssessmentContext(FIELDS, {"level": 1}))
        assert score.score == 0
        assert score.rationale == ("Low level 1",)

    def test_guard_skips_adjustment(self):
        """A guarded adjustment only runs when its condition holds."""
        unguarded = LEVEL.evaluate(AssessmentContext(FIELDS, {"level": 6}))
        guarded = LEVEL.evaluate(
            AssessmentContext(FIELDS, {"level": 6, "urgent": True})
        )
        assert guarded.score == unguarded.score - 5
        assert guarded.rationale[-1] == "Urgent requests cost more"

    def test_categorical_lookup(self):
        """Known values use their delta and rationale."""
        score = GRADE.evaluate(AssessmentContext(FIELDS, {"grade": "great"}))
        assert score.score == 80
        assert score.rationale == ("Graded great",)

    def test_categorical_unknown_value_scores_zero(self):
        """Unrecognised values add nothing but still explain themselves."""
        score = GRADE.evaluate(AssessmentContext(FIELDS, {"grade": "unheard"}))
        assert score.score == 60
        assert score.rationale == ("Grade is unheard",)


class TestAssessmentEngine:
    """Scoring plus narrative delegation."""

    def test_score_returns_every_category(self, static_narrative):
        """Each analysis is reported under its name."""
        engine = AssessmentEngine(_domain(), static_narrative)
        scores = engine.score({"level": 9, "grade": "bad"})
        assert list(scores) == ["level", "grade"]
        assert scores["level"].score == 100
        assert scores["grade"].score == 40

    def test_summarize_scores(self, static_narrative):
        """Summary lines name the score and rationale."""
        engine = AssessmentEngine(_domain(), static_narrative)
        lines = list(summarize_scores(engine.score({"level": 6})))
        assert lines[0] == "level: 60/100 - Middling level 6"
        assert lines[1] == "grade: 60/100 - Grade is ok"

    @pytest.mark.asyncio
    async def test_evaluate_uses_narrative(self, static_narrative):
        """The narrative receives the computed scores."""
        engine = AssessmentEngine(_domain(), static_narrative)
        outcome = await engine.evaluate("Buy a sample", {"level": 6})
        assert outcome.result is static_narrative.result
        assert not outcome.used_fallback
        request = static_narrative.requests[0]
        assert request.proposal == "Buy a sample"
        assert request.scores["level"].score == 60

    @pytest.mark.asyncio
    async def test_failure_uses_fallback_once(self, failing_narrative, caplog):
        """A failing narrative yields the fixed fallback without retrying."""
        engine = AssessmentEngine(_domain(), failing_narrative)
        with caplog.at_level(logging.WARNING):
            outcome = await engine.evaluate("Buy a sample")
        assert outcome.result == fallback_assessment()
        assert outcome.used_fallback
        assert failing_narrative.calls == 1
        assert outcome.scores["grade"].score == 60
        assert caplog.text.count("Narrative generation failed") == 1

    @pytest.mark.asyncio
    async def test_timeout_uses_fallback(self):
        """A slow narrative is cut off when a timeout is configured."""
        engine = AssessmentEngine(_domain(), SlowNarrative(), narrative_timeout=0.01)
        outcome = await engine.evaluate("Buy a sample")
        assert outcome.used_fallback
        assert outcome.result.reasoning == "analysis failed"

    @pytest.mark.asyncio
    async def test_wrong_result_type_uses_fallback(self):
        """Anything other than an AssessmentResult is treated as a failure."""
        engine = AssessmentEngine(_domain(), WrongTypeNarrative())
        outcome = await engine.evaluate("Buy a sample")
        assert outcome.used_fallback
        assert outcome.result.verdict is Verdict.NEUTRAL

    @pytest.mark.asyncio
    async def test_sequence_increases(self, static_narrative):
        """Each evaluation gets a larger sequence number."""
        engine = AssessmentEngine(_domain(), static_narrative)
        first = await engine.evaluate("one")
        second = await engine.evaluate("two")
        assert second.sequence > first.sequence

    def test_fallback_contents(self):
        """The fallback verdict is fixed."""
        result = fallback_assessment()
        assert result.verdict is Verdict.NEUTRAL
        assert result.confidence == 50
        assert result.reasoning == "analysis failed"
        assert result.concerns == ("unable to complete full analysis",)
        assert result.recommendations == ("retry with updated context",)
