"""Tests for boardroom_session/culture.py."""

import pytest

from boardroom_session import culture
from boardroom_session.scoring import AssessmentEngine


@pytest.fixture
def engine(static_narrative):
    return AssessmentEngine(culture.build_domain(), static_narrative)


class TestCultureScores:
    """Engagement, alignment, wellbeing, diversity and change readiness."""

    def test_default_scores(self, engine):
        scores = {name: score.score for name, score in engine.score().items()}
        assert scores == {
            "engagement": 65,
            "cultural_alignment": 60,
            "wellbeing": 70,
            "diversity": 60,
            "change_readiness": 60,
        }

    def test_disengaged_but_aligned_workforce(self, engine):
        """Low engagement and trust undermine an otherwise aligned culture."""
        scores = engine.score(
            {
                "employee_engagement": 3,
                "cultural_alignment": 9,
                "work_life_balance": "good",
                "diversity_inclusion": 4,
                "employee_wellbeing": "high",
                "change_readiness": "resistant",
                "communication_quality": "poor",
                "leadership_trust": 4,
                "team_collaboration": 9,
                "innovation_culture": "thriving",
                "retention_rate": 70,
                "employee_satisfaction": 4,
            }
        )
        assert {name: score.score for name, score in scores.items()} == {
            "engagement": 0,
            "cultural_alignment": 95,
            "wellbeing": 90,
            "diversity": 35,
            "change_readiness": 20,
        }
        assert scores["change_readiness"].rationale == (
            "Change readiness: resistant - requires extensive change management",
            "Low trust or poor communication creates change resistance risks",
        )
