"""Operations assessment domain."""

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
    at_most,
    field_value,
    listing,
    matching,
)

LEVELS = ("low", "medium", "high")

FIELDS: Tuple[ContextField, ...] = (
    ContextField("current_capacity", "Current Capacity", 80, unit="%"),
    ContextField(
        "required_capacity_increase", "Required Capacity Increase", 20, unit="%"
    ),
    ContextField(
        "process_complexity", "Process Complexity", "medium", kind="choice", choices=LEVELS
    ),
    ContextField("quality_requirements", "Quality Requirements", [], kind="list"),
    ContextField("compliance_requirements", "Compliance Requirements", [], kind="list"),
    ContextField("vendor_dependencies", "Vendor Dependencies", [], kind="list"),
    ContextField("implementation_timeline", "Implementation Timeline", 12, unit="months"),
    ContextField(
        "operational_risk", "Operational Risk", "medium", kind="choice", choices=LEVELS
    ),
    ContextField(
        "scalability_needs", "Scalability Needs", "medium", kind="choice", choices=LEVELS
    ),
    ContextField("existing_processes", "Existing Processes", [], kind="list"),
)

STANDARDIZED = ("standard", "automated", "optimized")
QUALITY_PROGRAMS = ("iso", "six sigma", "certification", "audit")
REGULATIONS = ("GDPR", "HIPAA", "SOX", "FDA", "ISO", "SOC2")
CRITICAL_VENDORS = ("critical", "sole source", "exclusive")
MITIGATIONS = ("backup", "redundancy", "failover", "contingency")


def _complexity_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "high":
        detail = "requires significant process redesign"
    else:
        detail = "manageable with current capabilities"
    return f"Process complexity: {value} - {detail}"


def _risk_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "high":
        detail = "requires comprehensive risk mitigation"
    else:
        detail = "manageable with standard controls"
    return f"Operational risk level: {value} - {detail}"


def _standardized_share(context: AssessmentContext) -> Tuple[int, int]:
    processes = context["existing_processes"]
    return len(matching(processes, STANDARDIZED)), len(processes)


CAPACITY = CategoryAnalysis(
    name="capacity",
    title="Operational Capacity",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=field_value("current_capacity"),
            tiers=(
                Tier(above(90), -25, "Critical capacity utilization ({value}%) leaves no buffer for growth"),
                Tier(above(80), -15, "High capacity utilization ({value}%) requires immediate scaling"),
                Tier(above(70), -5, "Moderate capacity utilization ({value}%) manageable with planning"),
                Tier(always, 10, "Good capacity headroom ({value}%) supports growth initiatives"),
            ),
        ),
        TieredAdjustment(
            value=lambda context: context["current_capacity"]
            + context["required_capacity_increase"],
            tiers=(
                Tier(above(100), -30, "Projected capacity ({value}%) exceeds maximum - requires infrastructure expansion"),
                Tier(above(90), -20, "Projected capacity ({value}%) approaches limits - scaling critical"),
            ),
        ),
        CategoricalAdjustment(
            source="scalability_needs",
            deltas={"low": 5, "medium": 0, "high": -15},
            rationales={
                "high": "High scalability requirements demand significant operational infrastructure investment",
            },
        ),
    ),
)

PROCESS = CategoryAnalysis(
    name="process",
    title="Process Integration",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="process_complexity",
            deltas={"low": 15, "medium": 0, "high": -20},
            otherwise=_complexity_rationale,
        ),
        TieredAdjustment(
            value=field_value("existing_processes"),
            tiers=(
                Tier(lambda v: not v, -10, "No existing process documentation creates integration uncertainty"),
                Tier(
                    lambda v: len(v) > 10,
                    -15,
                    listing("Complex process landscape ({count} processes) increases integration risk"),
                ),
                Tier(always, 5, listing("Manageable process integration with {count} existing processes")),
            ),
        ),
        TieredAdjustment(
            value=_standardized_share,
            tiers=(
                Tier(
                    lambda v: v[0] > v[1] * 0.5,
                    10,
                    "Well-standardized existing processes support efficient integration",
                ),
            ),
        ),
    ),
)

QUALITY = CategoryAnalysis(
    name="quality",
    title="Quality and Compliance",
    base=75,
    adjustments=(
        TieredAdjustment(
            value=lambda context: matching(context["quality_requirements"], QUALITY_PROGRAMS),
            tiers=(
                Tier(
                    bool,
                    lambda items: -10 * len(items),
                    listing("Complex quality requirements: {items} - requires specialized QA processes"),
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: matching(context["compliance_requirements"], REGULATIONS),
            tiers=(
                Tier(
                    bool,
                    lambda items: -15 * len(items),
                    listing("Regulatory compliance required: {items} - adds operational overhead"),
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: matching(context["quality_requirements"], ("automated",)),
            tiers=(
                Tier(bool, 10, "Automated quality processes reduce manual oversight burden"),
            ),
        ),
    ),
)

VENDOR = CategoryAnalysis(
    name="vendor",
    title="Vendor Dependencies",
    base=80,
    adjustments=(
        TieredAdjustment(
            value=field_value("vendor_dependencies"),
            tiers=(
                Tier(lambda v: not v, 0, "No external vendor dependencies simplifies operational control"),
                Tier(
                    lambda v: len(v) <= 3,
                    -5,
                    listing("Limited vendor dependencies ({count}) manageable with standard contracts"),
                ),
                Tier(
                    lambda v: len(v) <= 6,
                    -15,
                    listing("Multiple vendor dependencies ({count}) require enhanced vendor management"),
                ),
                Tier(
                    always,
                    -25,
                    listing("High vendor dependency ({count} vendors) creates operational complexity and risk"),
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: matching(context["vendor_dependencies"], CRITICAL_VENDORS),
            tiers=(
                Tier(
                    bool,
                    -20,
                    listing("Critical vendor dependencies: {items} - requires contingency planning"),
                ),
            ),
        ),
    ),
)

IMPLEMENTATION = CategoryAnalysis(
    name="implementation",
    title="Implementation",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=field_value("implementation_timeline"),
            tiers=(
                Tier(at_most(3), -25, "Aggressive timeline ({value} months) creates execution risk"),
                Tier(at_most(6), -10, "Tight timeline ({value} months) requires focused execution"),
                Tier(at_most(12), 5, "Reasonable timeline ({value} months) allows proper planning"),
                Tier(always, -5, "Extended timeline ({value} months) may lose momentum"),
            ),
        ),
        TieredAdjustment(
            value=lambda context: (
                context["process_complexity"],
                context["implementation_timeline"],
            ),
            tiers=(
                Tier(
                    lambda v: v[0] == "high" and v[1] <= 6,
                    -20,
                    "High complexity with short timeline significantly increases implementation risk",
                ),
            ),
        ),
        CategoricalAdjustment(
            source="operational_risk",
            deltas={"high": -15},
            rationales={
                "high": "High operational risk requires enhanced change management and monitoring",
            },
        ),
    ),
)

RISK = CategoryAnalysis(
    name="risk",
    title="Operational Risk",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="operational_risk",
            deltas={"low": 15, "medium": 0, "high": -25},
            otherwise=_risk_rationale,
        ),
        TieredAdjustment(
            value=lambda context: len(context["vendor_dependencies"]),
            tiers=(
                Tier(above(5), -15, "High vendor dependency increases operational risk exposure"),
            ),
        ),
        TieredAdjustment(
            value=lambda context: len(context["compliance_requirements"]),
            tiers=(
                Tier(above(3), -10, "Multiple compliance requirements increase regulatory risk"),
            ),
        ),
        TieredAdjustment(
            value=lambda context: matching(context["vendor_dependencies"], MITIGATIONS),
            tiers=(
                Tier(bool, 10, "Risk mitigation strategies identified in vendor planning"),
            ),
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief Operating Officer analyzing a business "
    "proposal from an operational perspective. Assess capacity and "
    "scalability, process integration, quality and compliance obligations, "
    "vendor dependencies, implementation timeline, and operational risk. "
    "Focus on execution feasibility and the day-to-day load the proposal "
    "puts on the organisation."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="operations",
        title="Operations",
        role_prompt=ROLE_PROMPT,
        concern_label="operational",
        fields=FIELDS,
        analyses=(CAPACITY, PROCESS, QUALITY, VENDOR, IMPLEMENTATION, RISK),
    )
