"""Corporate strategy assessment domain."""

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
    always,
    at_least,
    below,
    field_value,
)


def _choice(name: str, label: str, default: str, *choices: str) -> ContextField:
    return ContextField(name, label, default, kind="choice", choices=choices)


FIELDS: Tuple[ContextField, ...] = (
    ContextField("strategic_alignment", "Strategic Alignment", 5, unit="/10"),
    _choice("competitive_position", "Competitive Position", "average", "weak", "average", "strong", "dominant"),
    _choice("market_timing", "Market Timing", "optimal", "early", "optimal", "late", "missed"),
    _choice(
        "resource_allocation",
        "Resource Allocation",
        "adequate",
        "insufficient",
        "adequate",
        "optimal",
        "excessive",
    ),
    _choice("strategic_risk", "Strategic Risk", "medium", "low", "medium", "high", "critical"),
    _choice(
        "innovation_level",
        "Innovation Level",
        "incremental",
        "incremental",
        "substantial",
        "breakthrough",
        "disruptive",
    ),
    ContextField("stakeholder_alignment", "Stakeholder Alignment", 5, unit="/10"),
    _choice("execution_complexity", "Execution Complexity", "medium", "low", "medium", "high", "extreme"),
    ContextField("strategic_value", "Strategic Value", 5, unit="/10"),
    _choice(
        "long_term_impact",
        "Long-term Impact",
        "moderate",
        "minimal",
        "moderate",
        "significant",
        "transformational",
    ),
    _choice("competitor_response", "Competitor Response", "moderate", "none", "minimal", "moderate", "aggressive"),
)


def _position_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "dominant":
        detail = "excellent market leadership"
    elif value == "weak":
        detail = "requires competitive strengthening"
    else:
        detail = "solid market position"
    return f"Competitive position: {value} - {detail}"


def _timing_rationale(value: Any, _: AssessmentContext) -> str:
    details = {
        "optimal": "perfect market entry timing",
        "missed": "market opportunity has passed",
        "early": "may need market development",
    }
    return f"Market timing: {value} - {details.get(value, 'competitive timing pressure')}"


def _allocation_rationale(value: Any, _: AssessmentContext) -> str:
    details = {
        "optimal": "perfect resource optimization",
        "insufficient": "under-resourced for success",
        "excessive": "over-investment reduces efficiency",
    }
    return f"Resource allocation: {value} - {details.get(value, 'sufficient for execution')}"


def _innovation_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "disruptive":
        detail = "market-changing innovation potential"
    elif value == "incremental":
        detail = "limited innovation differentiation"
    else:
        detail = "meaningful innovation advancement"
    return f"Innovation level: {value} - {detail}"


ALIGNMENT = CategoryAnalysis(
    name="alignment",
    title="Strategic Alignment",
    base=lambda context: context["strategic_alignment"] * 10,
    adjustments=(
        TieredAdjustment(
            value=field_value("strategic_alignment"),
            tiers=(
                Tier(at_least(8), 0, "Strong strategic alignment ({value}/10) supports long-term vision"),
                Tier(at_least(6), 0, "Good strategic alignment ({value}/10) fits company direction"),
                Tier(at_least(4), -10, "Moderate strategic alignment ({value}/10) requires justification"),
                Tier(always, -25, "Poor strategic alignment ({value}/10) conflicts with company strategy"),
            ),
        ),
        TieredAdjustment(
            value=field_value("stakeholder_alignment"),
            tiers=(
                Tier(at_least(8), 15, "High stakeholder alignment ({value}/10) ensures execution support"),
                Tier(at_least(6), 5, "Good stakeholder alignment ({value}/10) provides adequate support"),
                Tier(always, -15, "Low stakeholder alignment ({value}/10) creates execution risks"),
            ),
        ),
        TieredAdjustment(
            value=field_value("strategic_value"),
            tiers=(
                Tier(at_least(8), 10, "High strategic value ({value}/10) creates significant competitive advantage"),
                Tier(below(4), -10, "Low strategic value ({value}/10) questions investment priority"),
            ),
        ),
    ),
)

COMPETITIVE = CategoryAnalysis(
    name="competitive",
    title="Competitive Position",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="competitive_position",
            deltas={"weak": -20, "average": 0, "strong": 15, "dominant": 25},
            otherwise=_position_rationale,
        ),
        CategoricalAdjustment(
            source="competitor_response",
            deltas={"none": 15, "minimal": 10, "moderate": 0, "aggressive": -15},
            rationales={
                "aggressive": "Aggressive competitor response expected - requires defensive strategy",
                "none": "No competitor response expected - provides first-mover advantage",
            },
        ),
        CategoricalAdjustment(
            source="innovation_level",
            deltas={"incremental": 0, "substantial": 10, "breakthrough": 20, "disruptive": 30},
            rationales={
                "disruptive": "Disruptive innovation creates significant competitive moats",
                "incremental": "Incremental innovation provides limited competitive differentiation",
            },
        ),
    ),
)

TIMING = CategoryAnalysis(
    name="timing",
    title="Market Timing",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="market_timing",
            deltas={"early": 5, "optimal": 25, "late": -10, "missed": -30},
            otherwise=_timing_rationale,
        ),
        CategoricalAdjustment(
            source="strategic_risk",
            deltas={"low": 10, "medium": 0, "high": -15, "critical": -25},
        ),
        TieredAdjustment(
            value=lambda context: (context["strategic_risk"], context["market_timing"]),
            tiers=(
                Tier(
                    lambda v: v[0] == "critical" and v[1] != "optimal",
                    -10,
                    "Critical risk with suboptimal timing creates compound strategic challenges",
                ),
            ),
        ),
    ),
)

RESOURCES = CategoryAnalysis(
    name="resources",
    title="Resource Allocation",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="resource_allocation",
            deltas={"insufficient": -25, "adequate": 0, "optimal": 20, "excessive": -10},
            otherwise=_allocation_rationale,
        ),
        CategoricalAdjustment(
            source="execution_complexity",
            deltas={"low": 15, "medium": 0, "high": -15, "extreme": -25},
            rationales={
                "extreme": "Extreme execution complexity requires exceptional resource management",
                "low": "Low execution complexity enables efficient resource utilization",
            },
        ),
        TieredAdjustment(
            value=lambda context: (
                context["resource_allocation"],
                context["execution_complexity"],
            ),
            tiers=(
                Tier(
                    lambda v: v == ("insufficient", "high"),
                    -15,
                    "Insufficient resources for high complexity creates execution failure risk",
                ),
            ),
        ),
    ),
)

INNOVATION = CategoryAnalysis(
    name="innovation",
    title="Innovation Impact",
    base=60,
    adjustments=(
        CategoricalAdjustment(
            source="innovation_level",
            deltas={"incremental": 0, "substantial": 15, "breakthrough": 25, "disruptive": 35},
            otherwise=_innovation_rationale,
        ),
        CategoricalAdjustment(
            source="long_term_impact",
            deltas={"minimal": -10, "moderate": 0, "significant": 15, "transformational": 25},
            rationales={
                "transformational": "Transformational impact creates lasting competitive advantages",
                "minimal": "Minimal long-term impact questions strategic investment value",
            },
        ),
        TieredAdjustment(
            value=lambda context: (context["strategic_value"], context["innovation_level"]),
            tiers=(
                Tier(
                    lambda v: v[0] >= 8 and v[1] == "disruptive",
                    10,
                    "High strategic value with disruptive innovation creates exceptional opportunity",
                ),
            ),
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief Strategy Officer analyzing a business "
    "proposal from a strategic planning perspective. Assess strategic and "
    "stakeholder alignment, competitive position and likely competitor "
    "response, market timing, resource allocation against execution "
    "complexity, and innovation impact. Focus on long-term value and "
    "strategic fit."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="strategy",
        title="Strategy",
        role_prompt=ROLE_PROMPT,
        concern_label="strategic",
        fields=FIELDS,
        analyses=(ALIGNMENT, COMPETITIVE, TIMING, RESOURCES, INNOVATION),
    )
