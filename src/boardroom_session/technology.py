"""Technology assessment domain (architecture, debt, engineering capacity)."""

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
    below,
    field_value,
    listing,
    matching,
)

FIELDS: Tuple[ContextField, ...] = (
    ContextField("required_skills", "Required Skills", [], kind="list"),
    ContextField(
        "current_architecture",
        "Current Architecture",
        "monolithic",
        kind="choice",
        choices=("microservices", "modular-monolith", "monolithic", "legacy"),
    ),
    ContextField("tech_debt_level", "Technical Debt Level", 50, unit="%"),
    ContextField("resource_availability", "Resource Availability", 70, unit="%"),
    ContextField(
        "performance_requirements", "Performance Requirements", [], kind="list"
    ),
    ContextField("security_requirements", "Security Requirements", [], kind="list"),
    ContextField(
        "scalability_needs",
        "Scalability Needs",
        "moderate",
        kind="choice",
        choices=("low", "moderate", "high", "extreme"),
    ),
)

ARCHITECTURE_SCALABILITY = {
    "microservices": 90,
    "modular-monolith": 70,
    "monolithic": 40,
    "legacy": 20,
}
SCALABILITY_MULTIPLIER = {"low": 1.1, "moderate": 1.0, "high": 0.8, "extreme": 0.6}

DEMANDING_PERFORMANCE = ("real-time", "sub-second", "high-throughput")
COMPLEX_SKILLS = ("Kubernetes", "Machine Learning", "Blockchain", "WebAssembly", "Rust", "Go")
MODERN_SKILLS = ("React", "Node.js", "Docker", "Kubernetes", "GraphQL", "TypeScript")
MICROSERVICE_SKILLS = ("Kubernetes", "Docker", "Service Mesh", "API Gateway")
HIGH_SECURITY = ("encryption", "compliance", "audit", "zero-trust")
COMPLIANCE_REGIMES = ("GDPR", "HIPAA", "SOX", "PCI-DSS", "SOC2")


def _architecture_score(context: AssessmentContext) -> float:
    return ARCHITECTURE_SCALABILITY.get(context["current_architecture"], 50)


def _scalability_base(context: AssessmentContext) -> float:
    multiplier = SCALABILITY_MULTIPLIER.get(context["scalability_needs"], 1.0)
    return (70 + _architecture_score(context)) / 2 * multiplier


def _architecture_limit_rationale(_: Any, context: AssessmentContext) -> str:
    return (
        f"Current {context['current_architecture']} architecture limits "
        "scalability options"
    )


SCALABILITY = CategoryAnalysis(
    name="scalability",
    title="Scalability",
    base=_scalability_base,
    adjustments=(
        TieredAdjustment(
            value=_architecture_score,
            tiers=(Tier(below(60), 0, _architecture_limit_rationale),),
        ),
        TieredAdjustment(
            value=field_value("scalability_needs"),
            tiers=(
                Tier(
                    lambda v: v in ("high", "extreme"),
                    0,
                    "{value} scalability requirements may require architecture redesign",
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: matching(
                context["performance_requirements"], DEMANDING_PERFORMANCE
            ),
            tiers=(
                Tier(bool, -15, listing("Complex performance requirements: {items}")),
            ),
        ),
    ),
)

TECH_DEBT = CategoryAnalysis(
    name="tech_debt",
    title="Technical Debt",
    base=lambda context: 100 - context["tech_debt_level"],
    adjustments=(
        TieredAdjustment(
            value=field_value("tech_debt_level"),
            tiers=(
                Tier(above(70), -20, "High technical debt ({value}%) will slow development velocity"),
            ),
        ),
        CategoricalAdjustment(
            source="current_architecture",
            deltas={"legacy": -25},
            rationales={
                "legacy": "Legacy architecture increases technical debt accumulation risk",
            },
        ),
        TieredAdjustment(
            value=field_value("tech_debt_level"),
            tiers=(
                Tier(
                    lambda v: 40 < v <= 70,
                    0,
                    "Moderate technical debt requires careful feature planning to avoid accumulation",
                ),
            ),
        ),
    ),
)

RESOURCES = CategoryAnalysis(
    name="resources",
    title="Engineering Resources",
    base=field_value("resource_availability"),
    adjustments=(
        TieredAdjustment(
            value=lambda context: matching(context["required_skills"], COMPLEX_SKILLS),
            tiers=(
                Tier(
                    bool,
                    lambda skills: -10 * len(skills),
                    listing("Complex skills required: {items} - may need specialized hiring"),
                ),
            ),
        ),
        TieredAdjustment(
            value=field_value("resource_availability"),
            tiers=(
                Tier(below(60), 0, "Limited engineering capacity ({value}%) may constrain development"),
            ),
        ),
        TieredAdjustment(
            value=lambda context: len(context["required_skills"]),
            tiers=(
                Tier(above(5), -10, "High skill diversity ({value} skills) increases coordination complexity"),
            ),
        ),
    ),
)

ARCHITECTURE = CategoryAnalysis(
    name="architecture",
    title="Architecture Fit",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=lambda context: (
                bool(matching(context["required_skills"], MODERN_SKILLS)),
                context["current_architecture"],
            ),
            tiers=(
                Tier(
                    lambda v: v[0] and v[1] == "legacy",
                    -30,
                    "Modern technology requirements conflict with legacy architecture",
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: (
                bool(matching(context["required_skills"], MICROSERVICE_SKILLS)),
                context["current_architecture"],
            ),
            tiers=(
                Tier(
                    lambda v: v[0] and v[1] == "monolithic",
                    -20,
                    "Microservices technologies may require architectural migration",
                ),
            ),
        ),
    ),
)

SECURITY = CategoryAnalysis(
    name="security",
    title="Security",
    base=80,
    adjustments=(
        TieredAdjustment(
            value=lambda context: matching(context["security_requirements"], HIGH_SECURITY),
            tiers=(
                Tier(
                    bool,
                    lambda items: -15 * len(items),
                    listing("High security requirements: {items} - requires specialized expertise"),
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: matching(
                context["security_requirements"], COMPLIANCE_REGIMES
            ),
            tiers=(
                Tier(
                    bool,
                    -20,
                    listing("Regulatory compliance required: {items} - adds development overhead"),
                ),
            ),
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief Technology Officer analyzing a business "
    "proposal from a technical perspective. Assess technical feasibility, "
    "architecture fit, scalability and performance, technical debt, "
    "engineering resources and skills, and security requirements. Focus on "
    "delivery risk, maintainability, and the engineering effort the proposal "
    "really needs."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="technology",
        title="Technology",
        role_prompt=ROLE_PROMPT,
        concern_label="technical",
        fields=FIELDS,
        analyses=(SCALABILITY, TECH_DEBT, RESOURCES, ARCHITECTURE, SECURITY),
    )
