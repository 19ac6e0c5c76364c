"""Tests for boardroom_session/ai_strategy.py."""

import pytest

from boardroom_session import ai_strategy
from boardroom_session.scoring import AssessmentEngine


@pytest.fixture
def engine(static_narrative):
    return AssessmentEngine(ai_strategy.build_domain(), static_narrative)


class TestAIStrategyScores:
    """Readiness, data, ethics, governance and implementation."""

    def test_default_scores(self, engine):
        scores = {name: score.score for name, score in engine.score().items()}
        assert scores == {
            "readiness": 50,
            "data_foundation": 35,
            "ethics": 65,
            "governance": 60,
            "implementation": 45,
        }

    def test_mature_team_on_basic_infrastructure(self, engine):
        """Advanced AI maturity outgrows basic ML infrastructure."""
        scores = engine.score(
            {
                "ai_maturity": "advanced",
                "data_readiness": 8,
                "ml_infrastructure": "basic",
                "ai_talent": 1,
                "ethical_ai": "comprehensive",
                "ai_governance": "established",
                "automation_level": 35,
                "ai_roi": 120,
                "bias_risk": "high",
                "explainability": "interpretable",
                "ai_security": "basic",
                "regulatory_compliance": "compliant",
            }
        )
        assert {name: score.score for name, score in scores.items()} == {
            "readiness": 80,
            "data_foundation": 80,
            "ethics": 85,
            "governance": 95,
            "implementation": 60,
        }
        assert scores["implementation"].rationale == (
            "Strong AI ROI (120%) shows effective AI implementation",
            "Advanced AI maturity with basic infrastructure creates scaling bottlenecks",
        )
