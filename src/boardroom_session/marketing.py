"""Marketing assessment domain."""

from __future__ import annotations

from typing import Optional, Tuple

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
    matching,
)

FIELDS: Tuple[ContextField, ...] = (
    ContextField("target_audience", "Target Audience", [], kind="list"),
    ContextField("market_size", "Market Size", 0, unit="USD"),
    ContextField("competitor_analysis", "Competitor Analysis", [], kind="list"),
    ContextField("brand_alignment", "Brand Alignment", 5, unit="/10"),
    ContextField("customer_acquisition_cost", "Customer Acquisition Cost", 0, unit="USD"),
    ContextField("customer_lifetime_value", "Customer Lifetime Value", 0, unit="USD"),
    ContextField("marketing_budget", "Marketing Budget", 0, unit="USD"),
    ContextField("launch_timeline", "Launch Timeline", 12, unit="months"),
    ContextField(
        "brand_risk",
        "Brand Risk",
        "medium",
        kind="choice",
        choices=("low", "medium", "high"),
    ),
    ContextField("customer_feedback", "Customer Feedback", [], kind="list"),
)

ADVANTAGE_KEYWORDS = ("unique", "first", "innovative", "proprietary", "exclusive")
POSITIVE_WORDS = ("love", "great", "excellent", "amazing", "perfect", "useful", "valuable")
NEGATIVE_WORDS = ("hate", "terrible", "awful", "useless", "confusing", "expensive", "complicated")


def _ltv_cac_ratio(context: AssessmentContext) -> Optional[float]:
    cac = context["customer_acquisition_cost"]
    ltv = context["customer_lifetime_value"]
    if cac <= 0 or ltv <= 0:
        return None
    return ltv / cac


def _feedback_sentiment(context: AssessmentContext) -> Optional[float]:
    """Share of positive feedback, damped by one so single replies stay modest."""

    feedback = context["customer_feedback"]
    if not feedback:
        return None
    positive = len(matching(feedback, POSITIVE_WORDS))
    negative = len(matching(feedback, NEGATIVE_WORDS))
    return positive / (positive + negative + 1)


MARKET = CategoryAnalysis(
    name="market",
    title="Market Opportunity",
    base=60,
    adjustments=(
        TieredAdjustment(
            value=field_value("market_size"),
            tiers=(
                Tier(above(1e9), 25, lambda v, _: f"Large market opportunity: ${v / 1e9:.1f}B total addressable market"),
                Tier(above(1e8), 15, "Significant market opportunity: ${millions:.0f}M market size"),
                Tier(above(1e7), 5, "Moderate market opportunity: ${millions:.0f}M market size"),
                Tier(above(0), -10, "Limited market size: ${millions:.1f}M may constrain growth potential"),
            ),
        ),
        TieredAdjustment(
            value=field_value("target_audience"),
            tiers=(
                Tier(lambda v: not v, -20, "Undefined target audience creates marketing execution risks"),
                Tier(
                    lambda v: len(v) > 5,
                    -10,
                    listing("Broad target audience ({count} segments) may dilute messaging effectiveness"),
                ),
                Tier(always, 10, listing("Well-defined target audience: {items}")),
            ),
        ),
    ),
)

BRAND = CategoryAnalysis(
    name="brand",
    title="Brand Alignment",
    base=lambda context: context["brand_alignment"] * 10,
    adjustments=(
        TieredAdjustment(
            value=field_value("brand_alignment"),
            tiers=(
                Tier(at_least(8), 0, "Strong brand alignment ({value}/10) supports brand equity"),
                Tier(at_least(6), 0, "Moderate brand alignment ({value}/10) requires careful positioning"),
                Tier(at_least(4), -10, "Weak brand alignment ({value}/10) may confuse brand positioning"),
                Tier(always, -25, "Poor brand alignment ({value}/10) risks brand dilution"),
            ),
        ),
        CategoricalAdjustment(
            source="brand_risk",
            deltas={"low": 5, "medium": 0, "high": -20},
            rationales={
                "high": "High brand risk requires comprehensive reputation management strategy",
            },
        ),
    ),
)

COMPETITIVE = CategoryAnalysis(
    name="competitive",
    title="Competitive Position",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=field_value("competitor_analysis"),
            tiers=(
                Tier(lambda v: not v, -15, "Lack of competitive analysis creates market positioning risks"),
                Tier(
                    lambda v: len(v) > 10,
                    -20,
                    listing("Highly competitive market ({count}+ competitors) requires strong differentiation"),
                ),
                Tier(
                    lambda v: len(v) > 5,
                    -10,
                    listing("Competitive market ({count} competitors) needs clear value proposition"),
                ),
                Tier(always, 10, listing("Manageable competitive landscape ({count} main competitors)")),
            ),
        ),
        TieredAdjustment(
            value=lambda context: matching(context["competitor_analysis"], ADVANTAGE_KEYWORDS),
            tiers=(
                Tier(bool, 15, "Competitive analysis identifies potential differentiation opportunities"),
            ),
        ),
    ),
)

ECONOMICS = CategoryAnalysis(
    name="economics",
    title="Customer Economics",
    base=60,
    adjustments=(
        TieredAdjustment(
            value=_ltv_cac_ratio,
            tiers=(
                Tier(
                    lambda v: v is None,
                    -15,
                    "Missing customer economics data (CAC/LTV) prevents profitability assessment",
                ),
                Tier(at_least(5), 25, "Excellent unit economics: LTV:CAC ratio of {value:.1f}:1"),
                Tier(at_least(3), 15, "Good unit economics: LTV:CAC ratio of {value:.1f}:1"),
                Tier(at_least(2), 5, "Acceptable unit economics: LTV:CAC ratio of {value:.1f}:1"),
                Tier(always, -20, "Poor unit economics: LTV:CAC ratio of {value:.1f}:1 below sustainable threshold"),
            ),
        ),
        TieredAdjustment(
            value=lambda context: context["marketing_budget"] / context["customer_acquisition_cost"],
            when=lambda context: context["marketing_budget"] > 0
            and context["customer_acquisition_cost"] > 0,
            tiers=(
                Tier(below(100), -10, "Limited marketing budget: can acquire ~{value:.0f} customers"),
            ),
        ),
    ),
)

LAUNCH = CategoryAnalysis(
    name="launch",
    title="Launch Readiness",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=field_value("launch_timeline"),
            tiers=(
                Tier(at_most(3), -15, "Aggressive launch timeline ({value} months) may limit market preparation"),
                Tier(at_most(6), 5, "Reasonable launch timeline ({value} months) allows adequate preparation"),
                Tier(at_most(12), 10, "Conservative launch timeline ({value} months) enables thorough market preparation"),
                Tier(always, -10, "Extended launch timeline ({value} months) risks market timing and competitive response"),
            ),
        ),
        TieredAdjustment(
            value=field_value("marketing_budget"),
            tiers=(
                Tier(lambda v: v == 0, -25, "No marketing budget allocated creates launch execution risks"),
                Tier(below(50_000), -15, "Limited marketing budget (${thousands:.0f}K) constrains launch reach"),
                Tier(above(500_000), 10, "Substantial marketing budget (${thousands:.0f}K) enables comprehensive launch"),
            ),
        ),
    ),
)

VALIDATION = CategoryAnalysis(
    name="validation",
    title="Customer Validation",
    base=50,
    adjustments=(
        TieredAdjustment(
            value=_feedback_sentiment,
            tiers=(
                Tier(lambda v: v is None, -20, "No customer feedback available - market validation incomplete"),
                Tier(above(0.7), 25, "Strong customer validation: {percent:.0f}% positive sentiment"),
                Tier(above(0.5), 10, "Moderate customer validation: {percent:.0f}% positive sentiment"),
                Tier(always, -15, "Weak customer validation: {percent:.0f}% positive sentiment raises concerns"),
            ),
        ),
        TieredAdjustment(
            value=field_value("customer_feedback"),
            tiers=(
                Tier(bool, 0, listing("Customer feedback analysis: {count} responses reviewed")),
            ),
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief Marketing Officer analyzing a business "
    "proposal from a marketing and brand perspective. Assess market "
    "opportunity and target audience, brand alignment and risk, competitive "
    "positioning, customer acquisition economics, launch readiness, and "
    "customer validation. Focus on growth potential, brand equity, and "
    "go-to-market execution."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="marketing",
        title="Marketing",
        role_prompt=ROLE_PROMPT,
        concern_label="marketing",
        fields=FIELDS,
        analyses=(MARKET, BRAND, COMPETITIVE, ECONOMICS, LAUNCH, VALIDATION),
    )
