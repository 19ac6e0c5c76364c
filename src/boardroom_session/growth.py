"""Growth assessment domain."""

from __future__ import annotations

from typing import Any, Tuple

from .scoring import (
    AssessmentContext,
    CategoricalAdjustment,
    CategoryAnalysis,
    ContextField,
    DomainDefinition,
    Tier,
    TieredAdjustment,
    above,
    always,
    at_least,
    at_most,
    below,
    field_value,
    listing,
)

FIELDS: Tuple[ContextField, ...] = (
    ContextField("current_growth_rate", "Current Growth Rate", 10, unit="%"),
    ContextField("target_growth_rate", "Target Growth Rate", 25, unit="%"),
    ContextField(
        "market_expansion",
        "Market Expansion",
        "regional",
        kind="choice",
        choices=("local", "regional", "national", "global"),
    ),
    ContextField("customer_segments", "Customer Segments", 2),
    ContextField("product_portfolio", "Product Portfolio", 3, unit="products"),
    ContextField("scalability_index", "Scalability Index", 5, unit="/10"),
    ContextField(
        "competitive_advantage",
        "Competitive Advantage",
        "moderate",
        kind="choice",
        choices=("none", "weak", "moderate", "strong", "dominant"),
    ),
    ContextField("growth_investment", "Growth Investment", 100_000, unit="USD"),
    ContextField("customer_retention", "Customer Retention", 80, unit="%"),
    ContextField("market_share", "Market Share", 5, unit="%"),
    ContextField("growth_channels", "Growth Channels", [], kind="list"),
    ContextField(
        "innovation_pipeline",
        "Innovation Pipeline",
        "moderate",
        kind="choice",
        choices=("empty", "limited", "moderate", "robust"),
    ),
)


def _expansion_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "global":
        detail = "maximum market opportunity"
    elif value == "local":
        detail = "limited market scope"
    else:
        detail = "solid market coverage"
    return f"Market expansion: {value} - {detail}"


def _advantage_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "dominant":
        detail = "exceptional growth protection"
    elif value == "none":
        detail = "vulnerable to competitive pressure"
    else:
        detail = "adequate competitive position"
    return f"Competitive advantage: {value} - {detail}"


TRAJECTORY = CategoryAnalysis(
    name="trajectory",
    title="Growth Trajectory",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=field_value("current_growth_rate"),
            tiers=(
                Tier(at_least(50), 25, "Exceptional growth rate ({value}%) demonstrates strong market traction"),
                Tier(at_least(25), 15, "Strong growth rate ({value}%) shows healthy expansion"),
                Tier(at_least(10), 5, "Moderate growth rate ({value}%) meets baseline expectations"),
                Tier(at_least(0), -10, "Low growth rate ({value}%) below market expectations"),
                Tier(always, -25, "Negative growth ({value}%) indicates declining business"),
            ),
        ),
        TieredAdjustment(
            value=lambda context: context["target_growth_rate"] - context["current_growth_rate"],
            tiers=(
                Tier(above(50), -20, "Large growth gap ({value}pp) may be unrealistic without major transformation"),
                Tier(above(25), -10, "Significant growth gap ({value}pp) requires aggressive growth strategy"),
                Tier(above(0), 5, "Achievable growth target ({value}pp increase) with focused execution"),
            ),
        ),
        TieredAdjustment(
            value=field_value("growth_investment"),
            tiers=(
                Tier(below(50_000), -15, "Limited growth investment (${thousands:.0f}K) may constrain growth initiatives"),
                Tier(above(500_000), 10, "Substantial growth investment (${thousands:.0f}K) enables aggressive expansion"),
            ),
        ),
    ),
)

MARKET_EXPANSION = CategoryAnalysis(
    name="market_expansion",
    title="Market Expansion",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="market_expansion",
            deltas={"local": -10, "regional": 0, "national": 15, "global": 25},
            otherwise=_expansion_rationale,
        ),
        TieredAdjustment(
            value=field_value("market_share"),
            tiers=(
                Tier(below(1), 20, "Low market share ({value}%) indicates significant growth opportunity"),
                Tier(below(5), 10, "Small market share ({value}%) provides good expansion potential"),
                Tier(above(25), -15, "High market share ({value}%) may limit organic growth opportunities"),
            ),
        ),
        TieredAdjustment(
            value=field_value("customer_segments"),
            tiers=(
                Tier(at_most(1), -15, "Single customer segment creates concentration risk and limits growth"),
                Tier(at_least(5), 10, "Multiple customer segments ({value}) provide diversified growth opportunities"),
                Tier(always, 0, "Moderate segment diversification ({value}) supports steady growth"),
            ),
        ),
    ),
)

CUSTOMER_GROWTH = CategoryAnalysis(
    name="customer_growth",
    title="Customer Growth",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=field_value("customer_retention"),
            tiers=(
                Tier(at_least(95), 20, "Excellent retention ({value}%) provides strong growth foundation"),
                Tier(at_least(85), 10, "Good retention ({value}%) supports sustainable growth"),
                Tier(at_least(75), 0, "Moderate retention ({value}%) adequate but improvable"),
                Tier(always, -20, "Low retention ({value}%) undermines growth sustainability"),
            ),
        ),
        TieredAdjustment(
            value=field_value("growth_channels"),
            tiers=(
                Tier(lambda v: not v, -20, "No defined growth channels limits customer acquisition capability"),
                Tier(
                    lambda v: len(v) >= 5,
                    15,
                    listing("Diverse growth channels ({count}) provide multiple acquisition paths"),
                ),
                Tier(
                    lambda v: len(v) >= 3,
                    5,
                    listing("Multiple growth channels ({count}) support steady acquisition"),
                ),
                Tier(always, -5, listing("Limited growth channels ({count}) create acquisition concentration risk")),
            ),
        ),
    ),
)

SCALABILITY = CategoryAnalysis(
    name="scalability",
    title="Growth Scalability",
    base=lambda context: context["scalability_index"] * 10,
    adjustments=(
        TieredAdjustment(
            value=field_value("scalability_index"),
            tiers=(
                Tier(at_least(8), 0, "High scalability ({value}/10) enables rapid growth execution"),
                Tier(at_least(6), 0, "Good scalability ({value}/10) supports moderate growth"),
                Tier(at_least(4), -10, "Limited scalability ({value}/10) may constrain growth velocity"),
                Tier(always, -25, "Poor scalability ({value}/10) prevents sustainable growth"),
            ),
        ),
        TieredAdjustment(
            value=field_value("product_portfolio"),
            tiers=(
                Tier(at_least(10), 15, "Broad product portfolio ({value} products) provides multiple growth vectors"),
                Tier(at_least(5), 5, "Moderate product portfolio ({value} products) supports diversified growth"),
                Tier(at_most(1), -15, "Single product creates growth concentration risk and limits expansion"),
            ),
        ),
    ),
)

COMPETITIVE = CategoryAnalysis(
    name="competitive",
    title="Competitive Growth Position",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="competitive_advantage",
            deltas={"none": -25, "weak": -10, "moderate": 0, "strong": 20, "dominant": 30},
            otherwise=_advantage_rationale,
        ),
        CategoricalAdjustment(
            source="innovation_pipeline",
            deltas={"empty": -20, "limited": -5, "moderate": 5, "robust": 20},
            rationales={
                "robust": "Robust innovation pipeline ensures sustainable future growth",
                "empty": "Empty innovation pipeline threatens long-term growth sustainability",
            },
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief Growth Officer analyzing a business "
    "proposal from a growth perspective. Assess the growth trajectory "
    "against its target, market expansion potential, customer retention and "
    "acquisition channels, growth scalability, and competitive position. "
    "Focus on sustainable, repeatable growth."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="growth",
        title="Growth",
        role_prompt=ROLE_PROMPT,
        concern_label="growth",
        fields=FIELDS,
        analyses=(TRAJECTORY, MARKET_EXPANSION, CUSTOMER_GROWTH, SCALABILITY, COMPETITIVE),
    )
