"""Information security assessment domain."""

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
    matching,
)

FIELDS: Tuple[ContextField, ...] = (
    ContextField(
        "current_security_posture",
        "Current Security Posture",
        "basic",
        kind="choice",
        choices=("weak", "basic", "strong", "advanced"),
    ),
    ContextField("compliance_requirements", "Compliance Requirements", [], kind="list"),
    ContextField(
        "data_classification",
        "Data Classification",
        "internal",
        kind="choice",
        choices=("public", "internal", "confidential", "restricted"),
    ),
    ContextField(
        "threat_level",
        "Threat Level",
        "medium",
        kind="choice",
        choices=("low", "medium", "high", "critical"),
    ),
    ContextField("security_budget", "Security Budget", 50_000, unit="USD"),
    ContextField("incident_history", "Incident History", 2, unit="incidents/year"),
    ContextField(
        "security_training",
        "Security Training",
        "basic",
        kind="choice",
        choices=("none", "basic", "regular", "comprehensive"),
    ),
    ContextField("vulnerability_score", "Vulnerability Score", 5, unit="/10"),
    ContextField(
        "access_controls",
        "Access Controls",
        "basic",
        kind="choice",
        choices=("basic", "rbac", "zero-trust"),
    ),
    ContextField(
        "data_encryption",
        "Data Encryption",
        "basic",
        kind="choice",
        choices=("none", "basic", "comprehensive"),
    ),
    ContextField(
        "backup_strategy",
        "Backup Strategy",
        "basic",
        kind="choice",
        choices=("none", "basic", "robust", "enterprise"),
    ),
)

THREAT_IMPACT = {"low": 15, "medium": 0, "high": -20, "critical": -35}
HIGH_RISK_STANDARDS = ("GDPR", "HIPAA", "SOX", "PCI-DSS", "SOC2", "ISO27001")


def _threat_base(context: AssessmentContext) -> float:
    exposure = 70 + THREAT_IMPACT.get(context["threat_level"], 0)
    return (exposure + context["vulnerability_score"] * 10) / 2


def _threat_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "critical":
        detail = "requires immediate security enhancement"
    elif value == "high":
        detail = "demands robust security measures"
    else:
        detail = "manageable with standard controls"
    return f"Threat level: {value} - {detail}"


def _posture_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "advanced":
        detail = "excellent incident prevention and response"
    elif value == "weak":
        detail = "requires immediate improvement"
    else:
        detail = "adequate but could be enhanced"
    return f"Security posture: {value} - {detail}"


THREAT = CategoryAnalysis(
    name="threat",
    title="Threat Exposure",
    base=_threat_base,
    adjustments=(
        CategoricalAdjustment(
            source="threat_level",
            deltas={},
            otherwise=_threat_rationale,
        ),
        TieredAdjustment(
            value=field_value("vulnerability_score"),
            tiers=(
                Tier(at_least(8), 0, "Strong security posture ({value}/10) provides good threat resistance"),
                Tier(at_least(6), 0, "Moderate security posture ({value}/10) needs improvement"),
                Tier(always, 0, "Weak security posture ({value}/10) creates significant risk exposure"),
            ),
        ),
        TieredAdjustment(
            value=field_value("incident_history"),
            tiers=(
                Tier(lambda v: v == 0, 10, "No recent security incidents indicate effective controls"),
                Tier(at_most(2), 0, "Limited incident history ({value}/year) shows manageable risk"),
                Tier(always, -15, "High incident frequency ({value}/year) suggests security gaps"),
            ),
        ),
    ),
)

COMPLIANCE = CategoryAnalysis(
    name="compliance",
    title="Compliance",
    base=80,
    adjustments=(
        TieredAdjustment(
            value=lambda context: matching(
                context["compliance_requirements"], HIGH_RISK_STANDARDS
            ),
            tiers=(
                Tier(
                    bool,
                    lambda items: -15 * len(items),
                    listing("High-risk compliance requirements: {items} - requires specialized controls"),
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: len(context["compliance_requirements"]),
            tiers=(
                Tier(above(5), -10, "Multiple compliance frameworks ({value}) increase complexity"),
            ),
        ),
        CategoricalAdjustment(
            source="data_classification",
            deltas={"public": 5, "internal": 0, "confidential": -10, "restricted": -20},
            rationales={
                "restricted": "Restricted data classification requires highest security controls",
                "confidential": "Confidential data requires enhanced protection measures",
            },
        ),
    ),
)

DATA_PROTECTION = CategoryAnalysis(
    name="data_protection",
    title="Data Protection",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="data_encryption",
            deltas={"none": -30, "basic": 0, "comprehensive": 20},
            rationales={
                "none": "No data encryption creates significant data protection risks",
                "comprehensive": "Comprehensive encryption provides strong data protection",
            },
            otherwise="Basic encryption meets minimum requirements but could be enhanced",
        ),
        CategoricalAdjustment(
            source="backup_strategy",
            deltas={"none": -25, "basic": 0, "robust": 10, "enterprise": 15},
            rationales={
                "none": "No backup strategy creates data loss and recovery risks",
                "enterprise": "Enterprise backup strategy ensures business continuity",
            },
        ),
        TieredAdjustment(
            value=lambda context: (
                context["data_classification"],
                context["data_encryption"],
            ),
            tiers=(
                Tier(
                    lambda v: v[0] == "restricted" and v[1] != "comprehensive",
                    -20,
                    "Restricted data requires comprehensive encryption - current protection insufficient",
                ),
            ),
        ),
    ),
)

ACCESS_CONTROL = CategoryAnalysis(
    name="access_control",
    title="Access Control",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="access_controls",
            deltas={"basic": 0, "rbac": 15, "zero-trust": 25},
            rationales={
                "zero-trust": "Zero-trust architecture provides advanced access security",
                "rbac": "Role-based access control provides good security foundation",
            },
            otherwise="Basic access controls may be insufficient for complex environments",
        ),
        CategoricalAdjustment(
            source="security_training",
            deltas={"none": -20, "basic": 0, "regular": 10, "comprehensive": 15},
            rationales={
                "none": "No security training creates human factor vulnerabilities",
                "comprehensive": "Comprehensive security training strengthens human firewall",
            },
        ),
    ),
)

INCIDENT_RESPONSE = CategoryAnalysis(
    name="incident_response",
    title="Incident Response",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="current_security_posture",
            deltas={"weak": -20, "basic": 0, "strong": 15, "advanced": 25},
            otherwise=_posture_rationale,
        ),
        TieredAdjustment(
            value=field_value("security_budget"),
            tiers=(
                Tier(
                    below(25_000),
                    -15,
                    "Limited security budget (${thousands:.0f}K) may constrain incident response capabilities",
                ),
                Tier(
                    above(100_000),
                    10,
                    "Adequate security budget (${thousands:.0f}K) supports robust incident response",
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: (
                context["incident_history"],
                context["current_security_posture"],
            ),
            tiers=(
                Tier(
                    lambda v: v[0] > 0 and v[1] != "weak",
                    5,
                    "Previous incidents with improved posture indicate effective learning",
                ),
            ),
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief Information Security Officer analyzing a "
    "business proposal from a cybersecurity perspective. Assess threat "
    "exposure and vulnerabilities, compliance obligations, data protection, "
    "access control and security awareness, and incident response "
    "readiness. Focus on the risk the proposal adds and the controls it "
    "needs before launch."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="security",
        title="Security",
        role_prompt=ROLE_PROMPT,
        concern_label="security",
        fields=FIELDS,
        analyses=(THREAT, COMPLIANCE, DATA_PROTECTION, ACCESS_CONTROL, INCIDENT_RESPONSE),
    )
