"""Tests for boardroom_session/revenue.py."""

import pytest

from boardroom_session import revenue
from boardroom_session.scoring import AssessmentEngine


@pytest.fixture
def engine(static_narrative):
    return AssessmentEngine(revenue.build_domain(), static_narrative)


class TestRevenueScores:
    """Revenue base, sales efficiency and customer economics."""

    def test_default_scores(self, engine):
        scores = {name: score.score for name, score in engine.score().items()}
        assert scores == {
            "revenue": 50,
            "sales": 85,
            "customer_economics": 100,
            "market": 70,
            "competitive": 70,
        }

    def test_established_business_with_slow_sales(self, engine):
        """Strong revenue and pipeline, but a slow, small sales engine."""
        scores = engine.score(
            {
                "current_revenue": 12_000_000,
                "revenue_growth_rate": 30,
                "sales_cycle_length": 9,
                "customer_acquisition_cost": 0,
                "customer_lifetime_value": 20_000,
                "churn_rate": 25,
                "sales_team_size": 2,
                "conversion_rate": 8,
                "average_deal_size": 500,
                "pipeline_value": 2_000_000,
                "market_penetration": 35,
                "competitive_pressure": "high",
            }
        )
        assert {name: score.score for name, score in scores.items()} == {
            "revenue": 85,
            "sales": 35,
            "customer_economics": 45,
            "market": 70,
            "competitive": 50,
        }
        assert scores["revenue"].rationale == (
            "Strong revenue base ($12.0M) provides growth foundation",
            "Strong growth rate (30%) shows healthy expansion",
            "Small average deal size ($500) requires high-volume sales approach",
        )

    def test_zero_acquisition_cost_skips_ratio(self, engine):
        """Without an acquisition cost only churn is scored."""
        economics = engine.score(
            {"customer_acquisition_cost": 0, "churn_rate": 4}
        )["customer_economics"]
        assert economics.score == 85
        assert economics.rationale == (
            "Low churn rate (4%) indicates strong customer satisfaction",
        )
