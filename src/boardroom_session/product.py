"""Product assessment domain."""

from __future__ import annotations

from typing import Any, List, Tuple

from .scoring import (
    AssessmentContext,
    CategoricalAdjustment,
    CategoryAnalysis,
    ContextField,
    DomainDefinition,
    Tier,
    TieredAdjustment,
    always,
    at_least,
    below,
    field_value,
    listing,
    matching,
)

LEVELS = ("low", "medium", "high")

FIELDS: Tuple[ContextField, ...] = (
    ContextField("user_research", "User Research", [], kind="list"),
    ContextField("product_market_fit", "Product-Market Fit", 5, unit="/10"),
    ContextField(
        "feature_complexity", "Feature Complexity", "medium", kind="choice", choices=LEVELS
    ),
    ContextField("development_timeline", "Development Timeline", 6, unit="months"),
    ContextField(
        "user_experience_impact",
        "User Experience Impact",
        "neutral",
        kind="choice",
        choices=("positive", "neutral", "negative"),
    ),
    ContextField("competitive_advantage", "Competitive Advantage", [], kind="list"),
    ContextField("technical_feasibility", "Technical Feasibility", 5, unit="/10"),
    ContextField(
        "user_adoption_risk", "User Adoption Risk", "medium", kind="choice", choices=LEVELS
    ),
    ContextField("product_strategy", "Product Strategy", "", kind="text"),
    ContextField("metrics_impact", "Metrics Impact", [], kind="list"),
)

QUALITATIVE = ("interview", "survey", "feedback", "usability")
QUANTITATIVE = ("analytics", "metrics", "data", "conversion")
RECENT = ("recent", "current", "latest")
STRATEGY_KEYWORDS = ("differentiation", "unique", "value proposition", "competitive advantage")
IMPROVING = ("increase", "improve", "enhance", "boost")
WORSENING = ("decrease", "reduce", "worsen", "decline")
STRONG_ADVANTAGES = ("unique", "proprietary", "patent", "exclusive")
MODERATE_ADVANTAGES = ("better", "faster", "cheaper", "easier")
SUSTAINABLE_ADVANTAGES = ("network effect", "data advantage", "platform", "ecosystem")


def _research_mix(context: AssessmentContext) -> Tuple[bool, bool]:
    research = context["user_research"]
    return bool(matching(research, QUALITATIVE)), bool(matching(research, QUANTITATIVE))


def _metric_movement(context: AssessmentContext) -> Tuple[List[str], List[str]]:
    metrics = context["metrics_impact"]
    return matching(metrics, IMPROVING), matching(metrics, WORSENING)


def _complexity_rationale(value: Any, _: AssessmentContext) -> str:
    detail = "requires careful scope management" if value == "high" else "manageable development effort"
    return f"Feature complexity: {value} - {detail}"


def _experience_rationale(value: Any, _: AssessmentContext) -> str:
    detail = "requires UX mitigation strategy" if value == "negative" else "supports user satisfaction"
    return f"User experience impact: {value} - {detail}"


def _adoption_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "high":
        detail = "requires comprehensive adoption strategy"
    else:
        detail = "manageable with standard onboarding"
    return f"User adoption risk: {value} - {detail}"


USER_RESEARCH = CategoryAnalysis(
    name="user_research",
    title="User Research",
    base=50,
    adjustments=(
        TieredAdjustment(
            value=field_value("user_research"),
            tiers=(
                Tier(
                    lambda v: not v,
                    -25,
                    "No user research data available - product decisions lack user validation",
                ),
            ),
        ),
        TieredAdjustment(
            value=_research_mix,
            tiers=(
                Tier(
                    all,
                    25,
                    "Comprehensive user research with both qualitative and quantitative insights",
                ),
                Tier(
                    lambda v: v[0],
                    15,
                    "Good qualitative user research - consider adding quantitative validation",
                ),
                Tier(
                    lambda v: v[1],
                    10,
                    "Quantitative data available - needs qualitative user insights",
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: matching(context["user_research"], RECENT),
            tiers=(
                Tier(bool, 10, "Recent user research ensures current market understanding"),
            ),
        ),
        TieredAdjustment(
            value=field_value("user_research"),
            tiers=(
                Tier(bool, 0, listing("User research analysis: {count} research sources reviewed")),
            ),
        ),
    ),
)

MARKET_FIT = CategoryAnalysis(
    name="market_fit",
    title="Product-Market Fit",
    base=lambda context: context["product_market_fit"] * 10,
    adjustments=(
        TieredAdjustment(
            value=field_value("product_market_fit"),
            tiers=(
                Tier(at_least(8), 0, "Strong product-market fit ({value}/10) indicates high user demand"),
                Tier(at_least(6), 0, "Moderate product-market fit ({value}/10) shows potential with optimization"),
                Tier(at_least(4), -10, "Weak product-market fit ({value}/10) requires significant product iteration"),
                Tier(always, -25, "Poor product-market fit ({value}/10) suggests fundamental product issues"),
            ),
        ),
        TieredAdjustment(
            value=field_value("product_strategy"),
            tiers=(
                Tier(
                    lambda v: bool(matching((v,), STRATEGY_KEYWORDS)),
                    10,
                    "Clear product strategy with differentiation focus",
                ),
                Tier(bool, 0, "Product strategy defined but lacks clear differentiation"),
                Tier(always, -15, "Missing product strategy creates market positioning risks"),
            ),
        ),
    ),
)

FEATURE_COMPLEXITY = CategoryAnalysis(
    name="feature_complexity",
    title="Feature Complexity",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="feature_complexity",
            deltas={"low": 15, "medium": 0, "high": -20},
            otherwise=_complexity_rationale,
        ),
        TieredAdjustment(
            value=lambda context: (
                context["feature_complexity"],
                context["development_timeline"],
            ),
            tiers=(
                Tier(
                    lambda v: v[0] == "high" and v[1] <= 3,
                    -25,
                    lambda v, _: f"High complexity with short timeline ({v[1]} months) creates delivery risk",
                ),
                Tier(
                    lambda v: v[0] == "low" and v[1] > 6,
                    -10,
                    lambda v, _: f"Simple features with long timeline ({v[1]} months) may indicate inefficiency",
                ),
            ),
        ),
        TieredAdjustment(
            value=field_value("technical_feasibility"),
            tiers=(
                Tier(below(5), -20, "Low technical feasibility ({value}/10) increases development risk"),
                Tier(at_least(8), 10, "High technical feasibility ({value}/10) supports reliable delivery"),
            ),
        ),
    ),
)

USER_EXPERIENCE = CategoryAnalysis(
    name="user_experience",
    title="User Experience",
    base=60,
    adjustments=(
        CategoricalAdjustment(
            source="user_experience_impact",
            deltas={"positive": 25, "neutral": 0, "negative": -30},
            otherwise=_experience_rationale,
        ),
        TieredAdjustment(
            value=_metric_movement,
            when=lambda context: bool(context["metrics_impact"]),
            tiers=(
                Tier(
                    lambda v: len(v[0]) > len(v[1]),
                    15,
                    lambda v, _: f"Positive metrics impact expected: {', '.join(v[0])}",
                ),
                Tier(
                    lambda v: len(v[1]) > len(v[0]),
                    -15,
                    lambda v, _: f"Concerning metrics impact: {', '.join(v[1])}",
                ),
            ),
        ),
        TieredAdjustment(
            value=field_value("metrics_impact"),
            tiers=(
                Tier(lambda v: not v, -10, "No metrics impact analysis - difficult to measure success"),
            ),
        ),
    ),
)

COMPETITIVE = CategoryAnalysis(
    name="competitive",
    title="Competitive Advantage",
    base=60,
    adjustments=(
        TieredAdjustment(
            value=field_value("competitive_advantage"),
            tiers=(
                Tier(
                    lambda v: not v,
                    -20,
                    "No competitive advantages identified - product may lack differentiation",
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: matching(context["competitive_advantage"], STRONG_ADVANTAGES),
            tiers=(Tier(bool, 25, listing("Strong competitive advantages: {items}")),),
        ),
        TieredAdjustment(
            value=lambda context: matching(context["competitive_advantage"], MODERATE_ADVANTAGES),
            tiers=(Tier(bool, 10, listing("Moderate competitive advantages: {items}")),),
        ),
        TieredAdjustment(
            value=lambda context: matching(
                context["competitive_advantage"], SUSTAINABLE_ADVANTAGES
            ),
            tiers=(
                Tier(bool, 15, listing("Sustainable competitive advantages identified: {items}")),
            ),
        ),
    ),
)

ADOPTION = CategoryAnalysis(
    name="adoption",
    title="User Adoption",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="user_adoption_risk",
            deltas={"low": 15, "medium": 0, "high": -25},
            otherwise=_adoption_rationale,
        ),
        CategoricalAdjustment(
            source="user_experience_impact",
            deltas={"negative": -20, "positive": 10},
            rationales={
                "negative": "Negative UX impact significantly increases adoption risk",
                "positive": "Positive UX impact supports user adoption",
            },
        ),
        CategoricalAdjustment(
            source="feature_complexity",
            deltas={"high": -15, "low": 5},
            rationales={
                "high": "High feature complexity may create adoption barriers",
                "low": "Low complexity supports easy user adoption",
            },
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief Product Officer analyzing a business "
    "proposal from a product strategy and user experience perspective. "
    "Assess user research and validation, product-market fit, feature "
    "complexity and delivery, user experience impact, competitive advantage, "
    "and adoption risk. Focus on user value and on whether the product can "
    "win in its market."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="product",
        title="Product",
        role_prompt=ROLE_PROMPT,
        concern_label="product",
        fields=FIELDS,
        analyses=(
            USER_RESEARCH,
            MARKET_FIT,
            FEATURE_COMPLEXITY,
            USER_EXPERIENCE,
            COMPETITIVE,
            ADOPTION,
        ),
    )
