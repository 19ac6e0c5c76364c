"""Tests for boardroom_session/people.py."""

import pytest

from boardroom_session import people
from boardroom_session.scoring import AssessmentEngine


@pytest.fixture
def engine(static_narrative):
    return AssessmentEngine(people.build_domain(), static_narrative)


class TestPeopleScores:
    """Talent, team impact and hiring analyses."""

    def test_stretched_team_needs_rare_skills(self, engine):
        """An overloaded, concerned team that must hire AI talent."""
        scores = engine.score(
            {
                "required_skills": ["Python", "AI/ML", "Kubernetes"],
                "team_skills": {"Python": 4, "Kubernetes": 1},
                "current_workload": 90,
                "workload_increase": 10,
                "team_sentiment": "concerned",
                "avg_hire_time": 130,
            }
        )
        assert {name: score.score for name, score in scores.items()} == {
            "talent": 40,
            "team_impact": 0,
            "hiring": 25,
        }
        assert scores["hiring"].rationale == (
            "High hiring dependency: 67% of skills require external hiring",
            "Competitive talent market for: Python",
            "Extended hiring timeline may delay project execution",
        )
        assert scores["team_impact"].rationale[-1] == (
            "Team sentiment: concerned - may affect adoption and performance"
        )

    def test_no_required_skills(self, engine):
        """Without required skills there is nothing to hire for."""
        hiring = engine.score({"avg_hire_time": 30})["hiring"]
        assert hiring.score == 75
        assert hiring.rationale == ()

    def test_positive_sentiment_is_silent(self, engine):
        """A positive team earns ten points without a rationale line."""
        impact = engine.score(
            {"current_workload": 50, "team_sentiment": "positive"}
        )["team_impact"]
        assert impact.score == 80
        assert impact.rationale == ()
