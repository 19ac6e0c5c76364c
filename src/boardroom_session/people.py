"""People and talent assessment domain."""

from __future__ import annotations

from typing import List, Tuple

from .scoring import (
    AssessmentContext,
    CategoricalAdjustment,
    CategoryAnalysis,
    ContextField,
    DomainDefinition,
    Tier,
    TieredAdjustment,
    above,
    field_value,
    listing,
    matching,
)

FIELDS: Tuple[ContextField, ...] = (
    ContextField("required_skills", "Required Skills", [], kind="list"),
    ContextField("team_skills", "Team Skills", {}, kind="mapping", unit="(level 0-5)"),
    ContextField("current_workload", "Current Workload", 80, unit="%"),
    ContextField("workload_increase", "Workload Increase", 20, unit="%"),
    ContextField(
        "team_sentiment",
        "Team Sentiment",
        "neutral",
        kind="choice",
        choices=("positive", "neutral", "negative", "concerned"),
    ),
    ContextField("avg_hire_time", "Average Hire Time", 90, unit="days"),
)

RARE_SKILLS = ("AI/ML", "Blockchain", "Quantum Computing", "Advanced Security")
CONTESTED_SKILLS = ("React", "Python", "AWS", "DevOps", "Data Science")


def _skills_below(context: AssessmentContext, level: int) -> List[str]:
    team = context["team_skills"]
    return [skill for skill in context["required_skills"] if team.get(skill, 0) < level]


def _hiring_ratio(context: AssessmentContext) -> float:
    required = context["required_skills"]
    if not required:
        return 0.0
    return len(_skills_below(context, 2)) / len(required)


TALENT = CategoryAnalysis(
    name="talent",
    title="Talent Availability",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=lambda context: matching(context["required_skills"], RARE_SKILLS),
            tiers=(
                Tier(
                    bool,
                    lambda skills: -15 * len(skills),
                    listing("Rare skills identified: {items} - limited market availability"),
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: (
                len(_skills_below(context, 3)),
                len(context["required_skills"]),
            ),
            tiers=(
                Tier(
                    lambda v: v[0] > v[1] * 0.7,
                    -20,
                    lambda v, _: f"Significant skill gaps: {v[0]}/{v[1]} skills missing",
                ),
            ),
        ),
        TieredAdjustment(
            value=field_value("avg_hire_time"),
            tiers=(
                Tier(above(120), -15, "Extended hiring timeline: {value} days average"),
            ),
        ),
    ),
)

TEAM_IMPACT = CategoryAnalysis(
    name="team_impact",
    title="Team Impact",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=field_value("current_workload"),
            tiers=(
                Tier(above(85), -25, "Team already at high capacity: {value}% utilization"),
            ),
        ),
        TieredAdjustment(
            value=lambda context: context["current_workload"] + context["workload_increase"],
            tiers=(
                Tier(above(95), -30, "Projected workload unsustainable: {value}% utilization"),
            ),
        ),
        CategoricalAdjustment(
            source="team_sentiment",
            deltas={"positive": 10, "neutral": 0, "negative": -20, "concerned": -15},
            rationales={"positive": None},
            otherwise="Team sentiment: {value} - may affect adoption and performance",
        ),
    ),
)

HIRING = CategoryAnalysis(
    name="hiring",
    title="Hiring Feasibility",
    base=75,
    adjustments=(
        TieredAdjustment(
            value=_hiring_ratio,
            tiers=(
                Tier(
                    above(0.6),
                    -25,
                    "High hiring dependency: {percent:.0f}% of skills require external hiring",
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: matching(context["required_skills"], CONTESTED_SKILLS),
            tiers=(
                Tier(bool, -15, listing("Competitive talent market for: {items}")),
            ),
        ),
        TieredAdjustment(
            value=field_value("avg_hire_time"),
            tiers=(
                Tier(above(90), -10, "Extended hiring timeline may delay project execution"),
            ),
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief Human Resources Officer analyzing a "
    "business proposal from a people perspective. Assess talent "
    "availability and skill gaps, the impact on current team workload and "
    "morale, and how feasible the required hiring is. Focus on whether the "
    "organisation can staff and sustain the work."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="people",
        title="People",
        role_prompt=ROLE_PROMPT,
        concern_label="people",
        fields=FIELDS,
        analyses=(TALENT, TEAM_IMPACT, HIRING),
    )
