"""Tests for boardroom_session/marketing.py."""

import pytest

from boardroom_session import marketing
from boardroom_session.scoring import AssessmentEngine


@pytest.fixture
def engine(static_narrative):
    return AssessmentEngine(marketing.build_domain(), static_narrative)


class TestMarketingScores:
    """Market, brand and customer economics analyses."""

    def test_focused_smb_launch(self, engine):
        """A focused launch into a large market with healthy unit economics."""
        scores = engine.score(
            {
                "market_size": 2_000_000_000,
                "target_audience": ["SMB owners", "Finance teams"],
                "brand_alignment": 8,
                "brand_risk": "low",
                "competitor_analysis": ["Incumbent A", "Innovative startup B"],
                "customer_acquisition_cost": 100,
                "customer_lifetime_value": 600,
                "marketing_budget": 200_000,
                "launch_timeline": 6,
                "customer_feedback": ["Love the dashboard", "Really useful", "Too expensive"],
            }
        )
        assert {name: score.score for name, score in scores.items()} == {
            "market": 95,
            "brand": 85,
            "competitive": 95,
            "economics": 85,
            "launch": 75,
            "validation": 35,
        }
        assert scores["market"].rationale[0] == (
            "Large market opportunity: $2.0B total addressable market"
        )
        assert scores["economics"].rationale == (
            "Excellent unit economics: LTV:CAC ratio of 6.0:1",
        )
        assert scores["validation"].rationale == (
            "Weak customer validation: 50% positive sentiment raises concerns",
            "Customer feedback analysis: 3 responses reviewed",
        )

    def test_missing_inputs(self, engine):
        """Without economics, budget or feedback every analysis is penalised."""
        scores = engine.score()
        assert scores["economics"].score == 45
        assert scores["launch"].score == 55
        assert scores["validation"].score == 30

    def test_budget_buys_few_customers(self, engine):
        """A budget that buys fewer than a hundred customers costs ten points."""
        economics = engine.score(
            {
                "customer_acquisition_cost": 1_000,
                "customer_lifetime_value": 2_500,
                "marketing_budget": 40_000,
            }
        )["economics"]
        assert economics.score == 55
        assert economics.rationale[-1] == "Limited marketing budget: can acquire ~40 customers"
