"""Tests for boardroom_session/technology.py."""

import pytest

from boardroom_session import technology
from boardroom_session.scoring import AssessmentEngine


@pytest.fixture
def engine(static_narrative):
    return AssessmentEngine(technology.build_domain(), static_narrative)


class TestTechnologyScores:
    """Architecture, debt and skills analyses."""

    def test_realtime_platform_on_monolith(self, engine):
        """A real-time feature on a monolith loses scalability headroom."""
        scores = engine.score(
            {
                "required_skills": ["React", "Node.js", "Machine Learning", "Redis", "WebSockets"],
                "current_architecture": "monolithic",
                "tech_debt_level": 65,
                "resource_availability": 70,
                "performance_requirements": ["real-time updates", "sub-second response"],
                "security_requirements": ["data encryption", "user authentication"],
                "scalability_needs": "high",
            }
        )
        assert scores["scalability"].score == pytest.approx(29)
        assert scores["tech_debt"].score == 35
        assert scores["resources"].score == 60
        assert scores["architecture"].score == 70
        assert scores["security"].score == 65
        assert scores["scalability"].rationale == (
            "Current monolithic architecture limits scalability options",
            "high scalability requirements may require architecture redesign",
            "Complex performance requirements: real-time updates, sub-second response",
        )
        assert scores["resources"].rationale == (
            "Complex skills required: Machine Learning - may need specialized hiring",
        )

    def test_legacy_architecture(self, engine):
        """Legacy systems add debt and clash with modern stacks."""
        scores = engine.score(
            {
                "current_architecture": "legacy",
                "tech_debt_level": 80,
                "required_skills": ["TypeScript"],
            }
        )
        assert scores["tech_debt"].score == 0
        assert scores["architecture"].score == 40

    def test_compliance_requirements(self, engine):
        """Regulated workloads cost twenty points of security headroom."""
        security = engine.score({"security_requirements": ["SOC2 reporting"]})["security"]
        assert security.score == 60
