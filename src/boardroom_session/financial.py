"""Financial viability assessment domain."""

from __future__ import annotations

import math
from typing import Any, Sequence, Tuple

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
    below,
    field_value,
)

RISK_LEVELS = ("low", "medium", "high")
MARKET_CONDITIONS = ("favorable", "stable", "uncertain", "declining")

FIELDS: Tuple[ContextField, ...] = (
    ContextField("project_budget", "Project Budget", 0, unit="USD"),
    ContextField("expected_roi", "Expected ROI", 0, unit="%"),
    ContextField("payback_period", "Payback Period", 36, unit="months"),
    ContextField(
        "risk_level", "Risk Level", "medium", kind="choice", choices=RISK_LEVELS
    ),
    ContextField("cash_flow_impact", "Cash Flow Impact", 0, unit="USD"),
    ContextField("operational_costs", "Operational Costs", 0, unit="USD"),
    ContextField("revenue_projections", "Revenue Projections", (), kind="series"),
    ContextField(
        "market_conditions",
        "Market Conditions",
        "stable",
        kind="choice",
        choices=MARKET_CONDITIONS,
    ),
    ContextField("competitor_spending", "Competitor Spending", 0, unit="USD"),
)


def coefficient_of_variation(values: Sequence[float]) -> float:
    """Population standard deviation divided by the mean (0 for a zero mean)."""

    if not values:
        return 0.0
    mean = sum(values) / len(values)
    if mean == 0:
        return 0.0
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    return math.sqrt(variance) / mean


def compound_growth_rate(values: Sequence[float]) -> float:
    """Per-period growth from the first to the last projection."""

    if len(values) < 2:
        return 0.0
    first, last = values[0], values[-1]
    if first <= 0 or last < 0:
        return 0.0
    return (last / first) ** (1 / (len(values) - 1)) - 1


def _budget_ratio(amount: float, context: AssessmentContext) -> float:
    return amount / (context["project_budget"] or 1)


def _has_series(context: AssessmentContext) -> bool:
    return len(context["revenue_projections"]) > 1


def _cash_flow(context: AssessmentContext) -> Tuple[float, float]:
    impact = context["cash_flow_impact"]
    return impact, _budget_ratio(abs(impact), context)


def _competitive_ratio(context: AssessmentContext) -> float:
    return context["project_budget"] / context["competitor_spending"]


def _risk_rationale(value: Any, _: AssessmentContext) -> str:
    if value == "high":
        return f"Project risk level: {value} - requires enhanced monitoring"
    return f"Project risk level: {value} - manageable with standard controls"


ROI = CategoryAnalysis(
    name="roi",
    title="ROI Analysis",
    base=50,
    adjustments=(
        TieredAdjustment(
            value=field_value("expected_roi"),
            tiers=(
                Tier(above(25), 30, "Strong ROI projection: {value}% exceeds target thresholds"),
                Tier(above(15), 15, "Acceptable ROI: {value}% meets minimum requirements"),
                Tier(above(0), -10, "Low ROI: {value}% below optimal investment threshold"),
                Tier(always, -30, "Negative or unclear ROI projection raises investment concerns"),
            ),
        ),
        TieredAdjustment(
            value=field_value("payback_period"),
            tiers=(
                Tier(at_most(12), 20, "Excellent payback period: {value} months"),
                Tier(at_most(24), 10, "Acceptable payback period: {value} months"),
                Tier(at_most(36), -5, "Extended payback period: {value} months increases risk"),
                Tier(always, -20, "Long payback period: {value} months may strain capital allocation"),
            ),
        ),
        TieredAdjustment(
            value=field_value("project_budget"),
            tiers=(
                Tier(
                    above(1_000_000),
                    -10,
                    "Large capital requirement: ${millions:.1f}M requires board approval",
                ),
            ),
        ),
    ),
)

RISK = CategoryAnalysis(
    name="risk",
    title="Risk Assessment",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="risk_level",
            deltas={"low": 10, "medium": 0, "high": -25},
            otherwise=_risk_rationale,
        ),
        CategoricalAdjustment(
            source="market_conditions",
            deltas={"favorable": 15, "stable": 0, "uncertain": -15, "declining": -25},
            rationales={"favorable": None, "stable": None},
            otherwise="Market conditions ({value}) add external risk factors",
        ),
        TieredAdjustment(
            value=lambda context: coefficient_of_variation(context["revenue_projections"]),
            tiers=(
                Tier(
                    above(0.3),
                    -15,
                    "High revenue projection variance indicates execution uncertainty",
                ),
            ),
            when=_has_series,
        ),
    ),
)

CASH_FLOW = CategoryAnalysis(
    name="cash_flow",
    title="Cash Flow Impact",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=_cash_flow,
            tiers=(
                Tier(
                    lambda v: v[0] < 0 and v[1] > 0.5,
                    -30,
                    lambda v, _: (
                        "Significant negative cash flow impact: "
                        f"{v[1] * 100:.1f}% of project budget"
                    ),
                ),
                Tier(
                    lambda v: v[0] < 0 and v[1] > 0.2,
                    -15,
                    "Moderate cash flow impact requires liquidity planning",
                ),
                Tier(
                    lambda v: v[0] > 0,
                    15,
                    "Positive cash flow impact improves liquidity position",
                ),
            ),
        ),
        TieredAdjustment(
            value=lambda context: _budget_ratio(context["operational_costs"], context),
            tiers=(
                Tier(
                    above(0.3),
                    -20,
                    "High ongoing operational costs: {percent:.1f}% of initial investment",
                ),
            ),
            when=lambda context: context["operational_costs"] > 0,
        ),
    ),
)

BUDGET = CategoryAnalysis(
    name="budget",
    title="Budget Alignment",
    base=75,
    adjustments=(
        TieredAdjustment(
            value=field_value("project_budget"),
            tiers=(
                Tier(
                    above(5_000_000),
                    -20,
                    "Large budget requirement: ${millions:.1f}M requires comprehensive justification",
                ),
                Tier(
                    above(1_000_000),
                    -10,
                    "Significant investment: ${millions:.1f}M needs careful monitoring",
                ),
            ),
        ),
        TieredAdjustment(
            # Operational costs are monthly; the total covers one year.
            value=lambda context: (
                context["project_budget"] + context["operational_costs"] * 12,
                context["project_budget"] * 1.5,
            ),
            tiers=(
                Tier(
                    lambda v: v[0] > v[1],
                    -15,
                    "High total cost of ownership: operational costs significantly impact budget",
                ),
            ),
        ),
    ),
)

MARKET = CategoryAnalysis(
    name="market",
    title="Market Viability",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=lambda context: compound_growth_rate(context["revenue_projections"]),
            tiers=(
                Tier(
                    above(0.2),
                    20,
                    "Strong revenue growth projection: {percent:.1f}% annually",
                ),
                Tier(
                    above(0.1),
                    10,
                    "Moderate revenue growth expected: {percent:.1f}% annually",
                ),
                Tier(
                    below(0),
                    -25,
                    "Declining revenue projections raise market viability concerns",
                ),
            ),
            when=_has_series,
        ),
        TieredAdjustment(
            value=_competitive_ratio,
            tiers=(
                Tier(
                    below(0.5),
                    -20,
                    "Investment below competitive levels may limit market impact",
                ),
                Tier(
                    above(2),
                    -10,
                    "Investment significantly above competitors requires justification",
                ),
            ),
            when=lambda context: context["competitor_spending"] > 0,
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced CFO analyzing a business proposal from a "
    "financial and risk management perspective. Assess financial viability "
    "and return on investment, risk factors and mitigation, cash flow and "
    "liquidity implications, budget alignment and capital allocation, and "
    "market conditions and revenue sustainability. Focus on quantitative "
    "analysis, risk-adjusted returns, and sustainable financial growth."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="financial",
        title="Financial Viability",
        role_prompt=ROLE_PROMPT,
        concern_label="financial",
        fields=FIELDS,
        analyses=(ROI, RISK, CASH_FLOW, BUDGET, MARKET),
    )
