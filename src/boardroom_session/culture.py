"""Culture and employee experience assessment domain."""

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

QUALITY_SCALE = ("poor", "fair", "good", "excellent")

FIELDS: Tuple[ContextField, ...] = (
    ContextField("employee_engagement", "Employee Engagement", 6, unit="/10"),
    ContextField("cultural_alignment", "Cultural Alignment", 6, unit="/10"),
    ContextField(
        "work_life_balance", "Work-Life Balance", "fair", kind="choice", choices=QUALITY_SCALE
    ),
    ContextField("diversity_inclusion", "Diversity & Inclusion", 6, unit="/10"),
    ContextField(
        "employee_wellbeing",
        "Employee Wellbeing",
        "moderate",
        kind="choice",
        choices=("low", "moderate", "high", "exceptional"),
    ),
    ContextField(
        "change_readiness",
        "Change Readiness",
        "cautious",
        kind="choice",
        choices=("resistant", "cautious", "adaptable", "eager"),
    ),
    ContextField(
        "communication_quality",
        "Communication Quality",
        "fair",
        kind="choice",
        choices=QUALITY_SCALE,
    ),
    ContextField("leadership_trust", "Leadership Trust", 6, unit="/10"),
    ContextField("team_collaboration", "Team Collaboration", 6, unit="/10"),
    ContextField(
        "innovation_culture",
        "Innovation Culture",
        "emerging",
        kind="choice",
        choices=("stagnant", "emerging", "active", "thriving"),
    ),
    ContextField("retention_rate", "Retention Rate", 85, unit="%"),
    ContextField("employee_satisfaction", "Employee Satisfaction", 6, unit="/10"),
)


def _innovation_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "thriving":
        detail = "excellent creative environment"
    elif value == "stagnant":
        detail = "needs innovation stimulus"
    else:
        detail = "developing innovation mindset"
    return f"Innovation culture: {value} - {detail}"


def _wellbeing_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "exceptional":
        detail = "outstanding employee care"
    elif value == "low":
        detail = "requires immediate attention"
    else:
        detail = "adequate but improvable"
    return f"Employee wellbeing: {value} - {detail}"


def _readiness_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "eager":
        detail = "excellent change adoption potential"
    elif value == "resistant":
        detail = "requires extensive change management"
    else:
        detail = "manageable with proper support"
    return f"Change readiness: {value} - {detail}"


ENGAGEMENT = CategoryAnalysis(
    name="engagement",
    title="Employee Engagement",
    base=lambda context: context["employee_engagement"] * 10,
    adjustments=(
        TieredAdjustment(
            value=field_value("employee_engagement"),
            tiers=(
                Tier(at_least(8), 0, "High employee engagement ({value}/10) creates positive workplace energy"),
                Tier(at_least(6), 0, "Moderate employee engagement ({value}/10) has room for improvement"),
                Tier(at_least(4), -15, "Low employee engagement ({value}/10) risks productivity and morale"),
                Tier(always, -30, "Very low employee engagement ({value}/10) indicates serious culture issues"),
            ),
        ),
        TieredAdjustment(
            value=field_value("employee_satisfaction"),
            tiers=(
                Tier(at_least(8), 10, "High employee satisfaction ({value}/10) supports engagement initiatives"),
                Tier(below(5), -15, "Low employee satisfaction ({value}/10) undermines engagement efforts"),
            ),
        ),
        TieredAdjustment(
            value=field_value("retention_rate"),
            tiers=(
                Tier(at_least(90), 15, "Excellent retention rate ({value}%) indicates strong employee commitment"),
                Tier(at_least(80), 5, "Good retention rate ({value}%) shows adequate employee satisfaction"),
                Tier(always, -20, "Low retention rate ({value}%) suggests engagement and culture challenges"),
            ),
        ),
    ),
)

CULTURAL_ALIGNMENT = CategoryAnalysis(
    name="cultural_alignment",
    title="Cultural Alignment",
    base=lambda context: context["cultural_alignment"] * 10,
    adjustments=(
        TieredAdjustment(
            value=field_value("cultural_alignment"),
            tiers=(
                Tier(at_least(8), 0, "Strong cultural alignment ({value}/10) supports organizational cohesion"),
                Tier(at_least(6), 0, "Good cultural alignment ({value}/10) provides solid foundation"),
                Tier(at_least(4), -15, "Weak cultural alignment ({value}/10) may create resistance to change"),
                Tier(always, -25, "Poor cultural alignment ({value}/10) indicates fundamental culture issues"),
            ),
        ),
        CategoricalAdjustment(
            source="innovation_culture",
            deltas={"stagnant": -20, "emerging": 0, "active": 15, "thriving": 25},
            otherwise=_innovation_rationale,
        ),
        TieredAdjustment(
            value=field_value("leadership_trust"),
            tiers=(
                Tier(at_least(8), 15, "High leadership trust ({value}/10) enables effective change management"),
                Tier(below(5), -20, "Low leadership trust ({value}/10) creates implementation barriers"),
            ),
        ),
    ),
)

WELLBEING = CategoryAnalysis(
    name="wellbeing",
    title="Employee Wellbeing",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="employee_wellbeing",
            deltas={"low": -25, "moderate": 0, "high": 20, "exceptional": 30},
            otherwise=_wellbeing_rationale,
        ),
        CategoricalAdjustment(
            source="work_life_balance",
            deltas={"poor": -20, "fair": 0, "good": 15, "excellent": 25},
            rationales={
                "poor": "Poor work-life balance creates burnout and retention risks",
                "excellent": "Excellent work-life balance supports employee satisfaction and productivity",
            },
        ),
        CategoricalAdjustment(
            source="communication_quality",
            deltas={"poor": -15, "fair": 0, "good": 10, "excellent": 20},
            rationales={
                "excellent": "Excellent communication quality builds trust and reduces workplace stress",
                "poor": "Poor communication quality creates confusion and workplace tension",
            },
        ),
    ),
)

DIVERSITY = CategoryAnalysis(
    name="diversity",
    title="Diversity and Inclusion",
    base=lambda context: context["diversity_inclusion"] * 10,
    adjustments=(
        TieredAdjustment(
            value=field_value("diversity_inclusion"),
            tiers=(
                Tier(at_least(8), 0, "Strong diversity & inclusion ({value}/10) creates inclusive workplace"),
                Tier(at_least(6), 0, "Good diversity & inclusion ({value}/10) with growth opportunities"),
                Tier(at_least(4), -15, "Moderate D&I ({value}/10) needs focused improvement efforts"),
                Tier(always, -30, "Low D&I ({value}/10) creates exclusion and legal risks"),
            ),
        ),
        TieredAdjustment(
            value=field_value("team_collaboration"),
            tiers=(
                Tier(at_least(8), 10, "High team collaboration ({value}/10) indicates inclusive team dynamics"),
                Tier(below(5), -15, "Low team collaboration ({value}/10) may indicate inclusion challenges"),
            ),
        ),
    ),
)

CHANGE_READINESS = CategoryAnalysis(
    name="change_readiness",
    title="Change Readiness",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="change_readiness",
            deltas={"resistant": -30, "cautious": -10, "adaptable": 15, "eager": 25},
            otherwise=_readiness_rationale,
        ),
        TieredAdjustment(
            value=lambda context: (
                context["leadership_trust"],
                context["communication_quality"],
            ),
            tiers=(
                Tier(
                    lambda v: v[0] >= 7 and v[1] == "excellent",
                    15,
                    "High trust and excellent communication enable smooth change implementation",
                ),
                Tier(
                    lambda v: v[0] < 5 or v[1] == "poor",
                    -20,
                    "Low trust or poor communication creates change resistance risks",
                ),
            ),
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief Happiness and Culture Officer analyzing a "
    "business proposal from an employee wellbeing and organizational culture "
    "perspective. "
    "Assess employee engagement and retention, cultural alignment and "
    "leadership trust, wellbeing and work-life balance, diversity and "
    "inclusion, and readiness for change. Focus on how the proposal will "
    "land with the people who must carry it out."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="culture",
        title="Culture",
        role_prompt=ROLE_PROMPT,
        concern_label="culture",
        fields=FIELDS,
        analyses=(ENGAGEMENT, CULTURAL_ALIGNMENT, WELLBEING, DIVERSITY, CHANGE_READINESS),
    )
