"""AI strategy assessment domain."""

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
    field_value,
)

FIELDS: Tuple[ContextField, ...] = (
    ContextField(
        "ai_maturity",
        "AI Maturity",
        "basic",
        kind="choice",
        choices=("none", "basic", "intermediate", "advanced", "expert"),
    ),
    ContextField("data_readiness", "Data Readiness", 5, unit="/10"),
    ContextField(
        "ml_infrastructure",
        "ML Infrastructure",
        "basic",
        kind="choice",
        choices=("none", "basic", "cloud", "enterprise"),
    ),
    ContextField("ai_talent", "AI Talent", 2, unit="members"),
    ContextField(
        "ethical_ai",
        "Ethical AI Framework",
        "basic",
        kind="choice",
        choices=("none", "basic", "comprehensive"),
    ),
    ContextField(
        "ai_governance",
        "AI Governance",
        "developing",
        kind="choice",
        choices=("none", "developing", "established", "mature"),
    ),
    ContextField("automation_level", "Automation Level", 20, unit="%"),
    ContextField("ai_roi", "AI ROI", 0, unit="%"),
    ContextField(
        "bias_risk",
        "Bias Risk",
        "medium",
        kind="choice",
        choices=("low", "medium", "high", "critical"),
    ),
    ContextField(
        "explainability",
        "Explainability",
        "limited",
        kind="choice",
        choices=("black-box", "limited", "interpretable", "transparent"),
    ),
    ContextField(
        "ai_security",
        "AI Security",
        "standard",
        kind="choice",
        choices=("basic", "standard", "advanced"),
    ),
    ContextField(
        "regulatory_compliance",
        "Regulatory Compliance",
        "partial",
        kind="choice",
        choices=("non-compliant", "partial", "compliant"),
    ),
)


def _maturity_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "expert":
        detail = "world-class AI capabilities"
    elif value == "none":
        detail = "requires foundational AI development"
    else:
        detail = "solid AI foundation"
    return f"AI maturity: {value} - {detail}"


def _ethics_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "comprehensive":
        detail = "robust ethical guidelines"
    elif value == "none":
        detail = "requires ethical AI development"
    else:
        detail = "basic ethical considerations"
    return f"Ethical AI framework: {value} - {detail}"


def _governance_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "mature":
        detail = "comprehensive AI oversight"
    elif value == "none":
        detail = "requires governance framework"
    else:
        detail = "developing governance capabilities"
    return f"AI governance: {value} - {detail}"


READINESS = CategoryAnalysis(
    name="readiness",
    title="AI Readiness",
    base=60,
    adjustments=(
        CategoricalAdjustment(
            source="ai_maturity",
            deltas={"none": -30, "basic": 0, "intermediate": 20, "advanced": 35, "expert": 50},
            otherwise=_maturity_rationale,
        ),
        TieredAdjustment(
            value=field_value("ai_talent"),
            tiers=(
                Tier(at_least(10), 20, "Strong AI team ({value} members) provides robust implementation capacity"),
                Tier(at_least(5), 10, "Adequate AI team ({value} members) supports moderate AI initiatives"),
                Tier(at_least(2), 0, "Small AI team ({value} members) limits complex AI project capacity"),
                Tier(always, -20, "Insufficient AI talent ({value} members) creates implementation bottlenecks"),
            ),
        ),
        TieredAdjustment(
            value=field_value("automation_level"),
            tiers=(
                Tier(at_least(60), 15, "High automation level ({value}%) demonstrates AI adoption success"),
                Tier(at_least(30), 5, "Moderate automation ({value}%) shows AI integration progress"),
                Tier(always, -10, "Low automation ({value}%) indicates limited AI implementation experience"),
            ),
        ),
    ),
)

DATA_FOUNDATION = CategoryAnalysis(
    name="data_foundation",
    title="Data Foundation",
    base=lambda context: context["data_readiness"] * 10,
    adjustments=(
        TieredAdjustment(
            value=field_value("data_readiness"),
            tiers=(
                Tier(at_least(8), 0, "Excellent data readiness ({value}/10) enables advanced AI applications"),
                Tier(at_least(6), 0, "Good data readiness ({value}/10) supports most AI use cases"),
                Tier(at_least(4), -15, "Moderate data readiness ({value}/10) limits AI model performance"),
                Tier(always, -30, "Poor data readiness ({value}/10) prevents effective AI implementation"),
            ),
        ),
        CategoricalAdjustment(
            source="ml_infrastructure",
            deltas={"none": -25, "basic": 0, "cloud": 15, "enterprise": 25},
            rationales={
                "enterprise": "Enterprise ML infrastructure supports large-scale AI deployment",
                "none": "No ML infrastructure requires significant technology investment",
                "cloud": "Cloud ML infrastructure provides scalable AI capabilities",
            },
        ),
    ),
)

ETHICS = CategoryAnalysis(
    name="ethics",
    title="Ethical AI",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="ethical_ai",
            deltas={"none": -30, "basic": 0, "comprehensive": 25},
            otherwise=_ethics_rationale,
        ),
        CategoricalAdjustment(
            source="bias_risk",
            deltas={"low": 15, "medium": 0, "high": -20, "critical": -35},
            rationales={
                "critical": "Critical bias risk requires immediate ethical AI intervention",
                "low": "Low bias risk indicates good ethical AI practices",
            },
        ),
        CategoricalAdjustment(
            source="explainability",
            deltas={"black-box": -20, "limited": -5, "interpretable": 10, "transparent": 20},
            rationales={
                "transparent": "Transparent AI models support ethical decision-making and compliance",
                "black-box": "Black-box AI models create ethical and regulatory risks",
            },
        ),
    ),
)

GOVERNANCE = CategoryAnalysis(
    name="governance",
    title="AI Governance",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="ai_governance",
            deltas={"none": -25, "developing": 0, "established": 20, "mature": 30},
            otherwise=_governance_rationale,
        ),
        CategoricalAdjustment(
            source="regulatory_compliance",
            deltas={"non-compliant": -30, "partial": -10, "compliant": 15},
            rationales={
                "non-compliant": "AI regulatory non-compliance creates legal and operational risks",
                "compliant": "AI regulatory compliance supports sustainable AI deployment",
            },
        ),
        CategoricalAdjustment(
            source="ai_security",
            deltas={"basic": -10, "standard": 0, "advanced": 15},
            rationales={
                "advanced": "Advanced AI security protects against AI-specific threats",
                "basic": "Basic AI security may be insufficient for enterprise AI deployment",
            },
        ),
    ),
)

IMPLEMENTATION = CategoryAnalysis(
    name="implementation",
    title="Technical Implementation",
    base=60,
    adjustments=(
        CategoricalAdjustment(
            source="ml_infrastructure",
            deltas={"none": -20, "basic": 0, "cloud": 15, "enterprise": 25},
        ),
        TieredAdjustment(
            value=field_value("ai_roi"),
            tiers=(
                Tier(above(200), 25, "Exceptional AI ROI ({value}%) demonstrates successful AI value creation"),
                Tier(above(100), 15, "Strong AI ROI ({value}%) shows effective AI implementation"),
                Tier(above(50), 5, "Moderate AI ROI ({value}%) indicates developing AI capabilities"),
                Tier(above(0), 0, "Limited AI ROI ({value}%) suggests early-stage AI adoption"),
                Tier(always, -15, "No demonstrated AI ROI indicates implementation challenges"),
            ),
        ),
        TieredAdjustment(
            value=lambda context: (context["ai_maturity"], context["ml_infrastructure"]),
            tiers=(
                Tier(
                    lambda v: v == ("advanced", "basic"),
                    -15,
                    "Advanced AI maturity with basic infrastructure creates scaling bottlenecks",
                ),
                Tier(
                    lambda v: v == ("expert", "enterprise"),
                    10,
                    "Expert AI maturity with enterprise infrastructure enables cutting-edge AI",
                ),
            ),
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief AI Officer analyzing a business proposal "
    "from an artificial intelligence perspective. Assess AI readiness and "
    "talent, the data foundation and ML infrastructure, ethical AI and bias "
    "risk, AI governance and regulatory compliance, and technical "
    "implementation and return. Focus on responsible AI that delivers "
    "measurable value."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="ai_strategy",
        title="AI Strategy",
        role_prompt=ROLE_PROMPT,
        concern_label="AI",
        fields=FIELDS,
        analyses=(READINESS, DATA_FOUNDATION, ETHICS, GOVERNANCE, IMPLEMENTATION),
    )
