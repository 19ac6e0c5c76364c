"""Tests for boardroom_session/engineering.py."""

import pytest

from boardroom_session import engineering
from boardroom_session.scoring import AssessmentEngine


@pytest.fixture
def engine(static_narrative):
    return AssessmentEngine(engineering.build_domain(), static_narrative)


class TestEngineeringScores:
    """Quality, velocity, practices, team and leadership analyses."""

    def test_default_scores(self, engine):
        scores = {name: score.score for name, score in engine.score().items()}
        assert scores == {
            "code_quality": 30,
            "velocity": 80,
            "practices": 65,
            "team_development": 50,
            "leadership": 55,
        }

    def test_high_performing_team(self, engine):
        """Strong quality and velocity with mentoring in place."""
        scores = engine.score(
            {
                "code_quality": 9,
                "development_velocity": 90,
                "team_productivity": 85,
                "technical_standards": ["Style guide", "ADRs", "API design", "Security", "Testing"],
                "code_review_process": "standard",
                "testing_coverage": 70,
                "deployment_frequency": "monthly",
                "bug_rate": 1,
                "developer_satisfaction": 8,
                "mentorship_programs": ["Pairing", "Guilds", "Sponsorship"],
            }
        )
        assert {name: score.score for name, score in scores.items()} == {
            "code_quality": 95,
            "velocity": 90,
            "practices": 95,
            "team_development": 95,
            "leadership": 90,
        }
        assert scores["practices"].rationale == (
            "Comprehensive technical standards (5 areas) guide development",
        )

    def test_unknown_review_process_counts_as_basic(self, engine):
        """An unrecognised review process scores like a basic one."""
        practices = engine.score({"code_review_process": "ad hoc"})["practices"]
        assert practices.score == 65
        assert practices.rationale == (
            "Limited technical standards may lead to inconsistent code quality",
        )
