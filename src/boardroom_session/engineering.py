"""Engineering excellence assessment domain."""

from __future__ import annotations

from typing import Tuple

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
    field_value,
    listing,
)

FIELDS: Tuple[ContextField, ...] = (
    ContextField("code_quality", "Code Quality", 5, unit="/10"),
    ContextField("development_velocity", "Development Velocity", 70, unit="%"),
    ContextField("team_productivity", "Team Productivity", 75, unit="%"),
    ContextField("technical_standards", "Technical Standards", [], kind="list"),
    ContextField(
        "code_review_process",
        "Code Review Process",
        "basic",
        kind="choice",
        choices=("comprehensive", "thorough", "standard", "basic", "minimal", "none"),
    ),
    ContextField("testing_coverage", "Testing Coverage", 60, unit="%"),
    ContextField(
        "deployment_frequency",
        "Deployment Frequency",
        "weekly",
        kind="choice",
        choices=(
            "daily",
            "multiple times per week",
            "weekly",
            "bi-weekly",
            "monthly",
            "quarterly",
        ),
    ),
    ContextField("bug_rate", "Bug Rate", 5, unit="per release"),
    ContextField("developer_satisfaction", "Developer Satisfaction", 6, unit="/10"),
    ContextField("mentorship_programs", "Mentorship Programs", [], kind="list"),
)

FREQUENT_DEPLOYS = "Frequent deployments ({value}) enable rapid iteration"
STRONG_REVIEW = "{value} code review process ensures quality standards"
WEAK_REVIEW = "{value} code review process creates quality risks"


def _leadership_balance(context: AssessmentContext) -> float:
    quality = context["code_quality"] * 10
    return (context["team_productivity"] + quality + context["development_velocity"]) / 3


CODE_QUALITY = CategoryAnalysis(
    name="code_quality",
    title="Code Quality",
    base=lambda context: context["code_quality"] * 10,
    adjustments=(
        TieredAdjustment(
            value=field_value("code_quality"),
            tiers=(
                Tier(at_least(8), 0, "Excellent code quality standards ({value}/10) support maintainable development"),
                Tier(at_least(6), 0, "Good code quality ({value}/10) with room for improvement"),
                Tier(always, -20, "Code quality concerns ({value}/10) may impact long-term maintainability"),
            ),
        ),
        TieredAdjustment(
            value=field_value("testing_coverage"),
            tiers=(
                Tier(at_least(80), 10, "Strong testing coverage ({value}%) ensures code reliability"),
                Tier(at_least(60), 0, "Adequate testing coverage ({value}%) meets minimum standards"),
                Tier(always, -15, "Low testing coverage ({value}%) increases deployment risk"),
            ),
        ),
        TieredAdjustment(
            value=field_value("bug_rate"),
            tiers=(
                Tier(at_most(2), 5, "Low bug rate ({value} per release) indicates quality processes"),
                Tier(above(5), -10, "High bug rate ({value} per release) suggests quality issues"),
            ),
        ),
    ),
)

VELOCITY = CategoryAnalysis(
    name="velocity",
    title="Delivery Velocity",
    base=field_value("development_velocity"),
    adjustments=(
        TieredAdjustment(
            value=field_value("development_velocity"),
            tiers=(
                Tier(at_least(85), 0, "High development velocity ({value}%) enables rapid feature delivery"),
                Tier(at_least(70), 0, "Good development velocity ({value}%) supports steady progress"),
                Tier(always, -10, "Low development velocity ({value}%) may delay project timelines"),
            ),
        ),
        CategoricalAdjustment(
            source="deployment_frequency",
            deltas={
                "daily": 20,
                "multiple times per week": 15,
                "weekly": 10,
                "bi-weekly": 5,
                "monthly": 0,
                "quarterly": -10,
            },
            rationales={
                "daily": FREQUENT_DEPLOYS,
                "multiple times per week": FREQUENT_DEPLOYS,
                "quarterly": "Infrequent deployments ({value}) may slow feature delivery",
            },
        ),
    ),
)

PRACTICES = CategoryAnalysis(
    name="practices",
    title="Engineering Practices",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="code_review_process",
            deltas={
                "comprehensive": 20,
                "thorough": 15,
                "standard": 10,
                "basic": 5,
                "minimal": -5,
                "none": -20,
            },
            rationales={
                "comprehensive": STRONG_REVIEW,
                "thorough": STRONG_REVIEW,
                "minimal": WEAK_REVIEW,
                "none": WEAK_REVIEW,
            },
            fallback=5,
        ),
        TieredAdjustment(
            value=field_value("technical_standards"),
            tiers=(
                Tier(
                    lambda v: len(v) >= 5,
                    15,
                    listing("Comprehensive technical standards ({count} areas) guide development"),
                ),
                Tier(lambda v: len(v) >= 3, 5, "Basic technical standards cover key development areas"),
                Tier(always, -10, "Limited technical standards may lead to inconsistent code quality"),
            ),
        ),
    ),
)

TEAM_DEVELOPMENT = CategoryAnalysis(
    name="team_development",
    title="Team Development",
    base=lambda context: context["developer_satisfaction"] * 10,
    adjustments=(
        TieredAdjustment(
            value=field_value("developer_satisfaction"),
            tiers=(
                Tier(at_least(8), 0, "High developer satisfaction ({value}/10) supports retention and productivity"),
                Tier(at_least(6), 0, "Moderate developer satisfaction ({value}/10) indicates room for improvement"),
                Tier(always, -20, "Low developer satisfaction ({value}/10) risks talent retention"),
            ),
        ),
        TieredAdjustment(
            value=field_value("mentorship_programs"),
            tiers=(
                Tier(
                    lambda v: len(v) >= 3,
                    15,
                    listing("Strong mentorship programs ({count}) support career development"),
                ),
                Tier(bool, 5, "Basic mentorship programs provide some career support"),
                Tier(always, -10, "Lack of mentorship programs may limit developer growth"),
            ),
        ),
    ),
)

LEADERSHIP = CategoryAnalysis(
    name="leadership",
    title="Technical Leadership",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=_leadership_balance,
            tiers=(
                Tier(
                    at_least(80),
                    20,
                    "Excellent balance of productivity, quality, and velocity demonstrates strong technical leadership",
                ),
                Tier(at_least(70), 10, "Good technical leadership balance across key engineering metrics"),
                Tier(always, -15, "Technical leadership challenges evident in unbalanced engineering metrics"),
            ),
        ),
        TieredAdjustment(
            value=lambda context: abs(
                context["code_quality"] * 10 - context["development_velocity"]
            ),
            tiers=(
                Tier(
                    above(30),
                    -10,
                    "Significant gap between code quality and velocity suggests leadership focus needed",
                ),
            ),
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief Vice Coding Officer analyzing a business "
    "proposal from an engineering excellence and development team "
    "perspective. Assess code quality and testing, delivery "
    "velocity and deployment cadence, engineering practices and standards, "
    "developer satisfaction and mentorship, and technical leadership. Focus "
    "on whether the engineering organisation can deliver the proposal "
    "without eroding quality."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="engineering",
        title="Engineering",
        role_prompt=ROLE_PROMPT,
        concern_label="engineering",
        fields=FIELDS,
        analyses=(CODE_QUALITY, VELOCITY, PRACTICES, TEAM_DEVELOPMENT, LEADERSHIP),
    )
