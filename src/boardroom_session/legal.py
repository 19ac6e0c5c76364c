"""Legal and regulatory assessment domain."""

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
    field_value,
    listing,
    matching,
)

FIELDS: Tuple[ContextField, ...] = (
    ContextField("jurisdiction", "Jurisdictions", [], kind="list"),
    ContextField("contractual_obligations", "Contractual Obligations", [], kind="list"),
    ContextField(
        "intellectual_property",
        "Intellectual Property",
        "basic",
        kind="choice",
        choices=("none", "basic", "comprehensive"),
    ),
    ContextField("regulatory_compliance", "Regulatory Compliance", [], kind="list"),
    ContextField(
        "litigation_risk",
        "Litigation Risk",
        "medium",
        kind="choice",
        choices=("low", "medium", "high"),
    ),
    ContextField("data_privacy_laws", "Data Privacy Laws", [], kind="list"),
    ContextField(
        "employment_law",
        "Employment Law",
        "compliant",
        kind="choice",
        choices=("compliant", "needs-review", "non-compliant"),
    ),
    ContextField(
        "corporate_governance",
        "Corporate Governance",
        "standard",
        kind="choice",
        choices=("basic", "standard", "advanced"),
    ),
    ContextField(
        "insurance_coverage",
        "Insurance Coverage",
        "adequate",
        kind="choice",
        choices=("minimal", "adequate", "comprehensive"),
    ),
    ContextField("vendor_contracts", "Vendor Contracts", 5),
    ContextField(
        "compliance_history",
        "Compliance History",
        "clean",
        kind="choice",
        choices=("clean", "minor-issues", "major-issues"),
    ),
)

COMPLEX_REGULATIONS = ("GDPR", "CCPA", "HIPAA", "SOX", "FINRA", "FDA", "FTC")
HIGH_RISK_TERMS = ("penalty", "liability", "indemnification", "exclusivity")
COMPLEX_PRIVACY_LAWS = ("GDPR", "CCPA", "PIPEDA", "LGPD")


def _litigation_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "high":
        detail = "requires immediate risk mitigation"
    elif value == "low":
        detail = "minimal legal exposure"
    else:
        detail = "manageable with proper controls"
    return f"Litigation risk: {value} - {detail}"


def _governance_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "advanced":
        detail = "excellent oversight and compliance"
    elif value == "basic":
        detail = "needs enhancement"
    else:
        detail = "meets standard requirements"
    return f"Corporate governance: {value} - {detail}"


REGULATORY = CategoryAnalysis(
    name="regulatory",
    title="Regulatory Compliance",
    base=80,
    adjustments=(
        TieredAdjustment(
            value=lambda context: matching(
                context["regulatory_compliance"], COMPLEX_REGULATIONS
            ),
            tiers=(
                Tier(
                    bool,
                    lambda items: -10 * len(items),
                    listing(
                        "Complex regulatory requirements: {items} - requires "
                        "specialized compliance expertise"
                    ),
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: len(context["jurisdiction"]),
            tiers=(
                Tier(
                    above(3),
                    -15,
                    "Multi-jurisdictional operations ({value} jurisdictions) increase compliance complexity",
                ),
                Tier(above(1), -5, "Multi-jurisdictional compliance requires coordinated legal strategy"),
            ),
        ),
        CategoricalAdjustment(
            source="compliance_history",
            deltas={"clean": 10, "minor-issues": 0, "major-issues": -25},
            rationales={
                "major-issues": "Previous compliance issues require enhanced monitoring and remediation",
                "clean": "Clean compliance history demonstrates strong legal management",
            },
        ),
    ),
)

CONTRACTS = CategoryAnalysis(
    name="contracts",
    title="Contractual Risk",
    base=75,
    adjustments=(
        TieredAdjustment(
            value=lambda context: matching(
                context["contractual_obligations"], HIGH_RISK_TERMS
            ),
            tiers=(
                Tier(
                    bool,
                    lambda items: -15 * len(items),
                    listing(
                        "High-risk contractual obligations: {count} identified - "
                        "requires careful management"
                    ),
                ),
            ),
        ),
        TieredAdjustment(
            value=field_value("vendor_contracts"),
            tiers=(
                Tier(above(20), -15, "High vendor contract volume ({value}) requires robust contract management"),
                Tier(above(10), -5, "Moderate vendor contracts ({value}) need systematic review"),
            ),
        ),
        TieredAdjustment(
            value=field_value("contractual_obligations"),
            tiers=(
                Tier(
                    lambda v: not v,
                    -10,
                    "No documented contractual obligations may indicate incomplete legal review",
                ),
            ),
        ),
    ),
)

INTELLECTUAL_PROPERTY = CategoryAnalysis(
    name="intellectual_property",
    title="Intellectual Property",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="intellectual_property",
            deltas={"none": -30, "basic": 0, "comprehensive": 25},
            rationales={
                "none": "No IP protection creates significant competitive and legal risks",
                "comprehensive": "Comprehensive IP protection provides strong competitive advantages",
            },
            otherwise="Basic IP protection covers fundamentals but could be enhanced",
        ),
    ),
)

LITIGATION = CategoryAnalysis(
    name="litigation",
    title="Litigation Exposure",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="litigation_risk",
            deltas={"low": 20, "medium": 0, "high": -30},
            otherwise=_litigation_rationale,
        ),
        CategoricalAdjustment(
            source="insurance_coverage",
            deltas={"minimal": -15, "adequate": 0, "comprehensive": 15},
            rationales={
                "minimal": "Minimal insurance coverage increases financial exposure to legal claims",
                "comprehensive": "Comprehensive insurance coverage provides strong protection against legal claims",
            },
        ),
        CategoricalAdjustment(
            source="employment_law",
            deltas={"compliant": 10, "needs-review": -5, "non-compliant": -20},
            rationales={
                "non-compliant": "Employment law non-compliance creates significant litigation exposure",
            },
        ),
    ),
)

GOVERNANCE = CategoryAnalysis(
    name="governance",
    title="Corporate Governance",
    base=75,
    adjustments=(
        CategoricalAdjustment(
            source="corporate_governance",
            deltas={"basic": -10, "standard": 0, "advanced": 20},
            otherwise=_governance_rationale,
        ),
        TieredAdjustment(
            value=lambda context: matching(
                context["data_privacy_laws"], COMPLEX_PRIVACY_LAWS
            ),
            tiers=(
                Tier(
                    bool,
                    lambda items: -10 * len(items),
                    listing(
                        "Complex privacy law requirements: {items} - requires "
                        "specialized compliance programs"
                    ),
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: len(context["data_privacy_laws"]),
            tiers=(
                Tier(above(3), -5, "Multiple privacy law jurisdictions ({value}) increase governance complexity"),
            ),
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief Legal Officer analyzing a business "
    "proposal from a legal and regulatory perspective. Assess regulatory "
    "compliance across jurisdictions, contractual obligations, intellectual "
    "property protection, litigation exposure, and corporate governance. "
    "Focus on legal risk and the safeguards the proposal needs."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="legal",
        title="Legal",
        role_prompt=ROLE_PROMPT,
        concern_label="legal",
        fields=FIELDS,
        analyses=(REGULATORY, CONTRACTS, INTELLECTUAL_PROPERTY, LITIGATION, GOVERNANCE),
    )
