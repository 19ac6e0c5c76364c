"""Data strategy assessment domain."""

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
    below,
    field_value,
)

FIELDS: Tuple[ContextField, ...] = (
    ContextField("data_volume", "Data Volume", 1, unit="TB"),
    ContextField("data_quality", "Data Quality", 5, unit="/10"),
    ContextField(
        "data_governance",
        "Data Governance",
        "basic",
        kind="choice",
        choices=("none", "basic", "mature", "advanced"),
    ),
    ContextField(
        "analytics_capability",
        "Analytics Capability",
        "basic",
        kind="choice",
        choices=("basic", "intermediate", "advanced", "expert"),
    ),
    ContextField(
        "data_privacy",
        "Data Privacy",
        "needs-improvement",
        kind="choice",
        choices=("compliant", "needs-improvement", "non-compliant"),
    ),
    ContextField("data_integration", "Data Integration", 3, unit="sources"),
    ContextField(
        "real_time_requirements", "Real-time Requirements", False, kind="flag"
    ),
    ContextField(
        "ml_ai_capability",
        "ML/AI Capability",
        "basic",
        kind="choice",
        choices=("none", "basic", "intermediate", "advanced"),
    ),
    ContextField(
        "data_retention",
        "Data Retention",
        "needs-review",
        kind="choice",
        choices=("compliant", "needs-review", "non-compliant"),
    ),
    ContextField(
        "data_backup",
        "Data Backup",
        "basic",
        kind="choice",
        choices=("none", "basic", "comprehensive"),
    ),
    ContextField("data_team_size", "Data Team Size", 3),
    ContextField(
        "business_intelligence",
        "Business Intelligence",
        "basic",
        kind="choice",
        choices=("basic", "standard", "advanced"),
    ),
)


def _governance_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "advanced":
        detail = "excellent data management framework"
    elif value == "none":
        detail = "requires immediate governance implementation"
    else:
        detail = "adequate but could be enhanced"
    return f"Data governance: {value} - {detail}"


def _analytics_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "expert":
        detail = "world-class analytical capabilities"
    elif value == "basic":
        detail = "foundational analytics only"
    else:
        detail = "solid analytical foundation"
    return f"Analytics capability: {value} - {detail}"


def _privacy_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "non-compliant":
        detail = "immediate compliance action required"
    elif value == "compliant":
        detail = "strong privacy protection"
    else:
        detail = "privacy improvements needed"
    return f"Data privacy: {value} - {detail}"


QUALITY = CategoryAnalysis(
    name="quality",
    title="Data Quality",
    base=lambda context: context["data_quality"] * 10,
    adjustments=(
        TieredAdjustment(
            value=field_value("data_quality"),
            tiers=(
                Tier(at_least(8), 0, "High data quality ({value}/10) provides reliable foundation for analytics"),
                Tier(at_least(6), 0, "Good data quality ({value}/10) supports most analytical needs"),
                Tier(at_least(4), -10, "Moderate data quality ({value}/10) may limit analytical accuracy"),
                Tier(always, -25, "Poor data quality ({value}/10) creates significant analytical risks"),
            ),
        ),
        TieredAdjustment(
            value=field_value("data_volume"),
            tiers=(
                Tier(above(100), -10, "Large data volume ({value}TB) increases quality management complexity"),
                Tier(above(10), -5, "Significant data volume ({value}TB) requires robust quality processes"),
            ),
        ),
        TieredAdjustment(
            value=field_value("data_integration"),
            tiers=(
                Tier(above(10), -15, "High integration complexity ({value} sources) increases quality risks"),
                Tier(above(5), -5, "Multiple data sources ({value}) require quality harmonization"),
            ),
        ),
    ),
)

GOVERNANCE = CategoryAnalysis(
    name="governance",
    title="Data Governance",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="data_governance",
            deltas={"none": -30, "basic": 0, "mature": 20, "advanced": 30},
            otherwise=_governance_rationale,
        ),
        CategoricalAdjustment(
            source="data_retention",
            deltas={"compliant": 10, "needs-review": -5, "non-compliant": -20},
            rationales={
                "non-compliant": "Data retention non-compliance creates regulatory and legal risks",
                "compliant": "Compliant data retention policies support governance framework",
            },
        ),
    ),
)

ANALYTICS = CategoryAnalysis(
    name="analytics",
    title="Analytics Capability",
    base=60,
    adjustments=(
        CategoricalAdjustment(
            source="analytics_capability",
            deltas={"basic": 0, "intermediate": 15, "advanced": 25, "expert": 35},
            otherwise=_analytics_rationale,
        ),
        CategoricalAdjustment(
            source="ml_ai_capability",
            deltas={"none": -10, "basic": 0, "intermediate": 15, "advanced": 25},
            rationales={
                "advanced": "Advanced ML/AI capabilities enable sophisticated data insights",
                "none": "No ML/AI capability limits advanced analytics potential",
            },
        ),
        TieredAdjustment(
            value=field_value("data_team_size"),
            tiers=(
                Tier(below(3), -15, "Small data team ({value}) may limit analytical capacity"),
                Tier(above(10), 10, "Large data team ({value}) provides strong analytical capacity"),
            ),
        ),
        CategoricalAdjustment(
            source="business_intelligence",
            deltas={"basic": 0, "standard": 10, "advanced": 20},
        ),
    ),
)

PRIVACY = CategoryAnalysis(
    name="privacy",
    title="Privacy Compliance",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="data_privacy",
            deltas={"compliant": 20, "needs-improvement": -10, "non-compliant": -30},
            otherwise=_privacy_rationale,
        ),
        TieredAdjustment(
            value=lambda context: (context["data_governance"], context["data_privacy"]),
            tiers=(
                Tier(
                    lambda v: v[0] == "advanced" and v[1] != "compliant",
                    -10,
                    "Advanced governance with poor privacy compliance indicates implementation gaps",
                ),
                Tier(
                    lambda v: v[0] == "none" and v[1] == "compliant",
                    5,
                    "Privacy compliance without governance framework shows good privacy focus",
                ),
            ),
        ),
    ),
)

INFRASTRUCTURE = CategoryAnalysis(
    name="infrastructure",
    title="Data Infrastructure",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="data_backup",
            deltas={"none": -25, "basic": 0, "comprehensive": 15},
            rationales={
                "none": "No data backup strategy creates significant data loss risks",
                "comprehensive": "Comprehensive backup strategy ensures data protection and recovery",
            },
        ),
        TieredAdjustment(
            value=field_value("real_time_requirements"),
            tiers=(
                Tier(
                    bool,
                    -15,
                    "Real-time data requirements demand advanced infrastructure capabilities",
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: (context["data_volume"], context["data_integration"]),
            tiers=(
                Tier(
                    lambda v: v[0] > 50 and v[1] > 8,
                    -20,
                    "High volume and integration complexity requires enterprise-grade infrastructure",
                ),
                Tier(
                    lambda v: v[0] > 10 or v[1] > 5,
                    -10,
                    "Moderate scale requires robust infrastructure planning",
                ),
            ),
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief Data Officer analyzing a business proposal "
    "from a data strategy and analytics perspective. Assess data quality and "
    "integrity, governance and management requirements, analytics and "
    "business intelligence capabilities, privacy and compliance, "
    "infrastructure and scalability, and data team capacity. Focus on data "
    "value creation, governance excellence, and analytical capability."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="data_strategy",
        title="Data Strategy",
        role_prompt=ROLE_PROMPT,
        concern_label="data",
        fields=FIELDS,
        analyses=(QUALITY, GOVERNANCE, ANALYTICS, PRIVACY, INFRASTRUCTURE),
    )
