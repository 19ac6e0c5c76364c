"""Revenue assessment domain."""

from __future__ import annotations

from typing import Tuple

from .scoring import (
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
)

FIELDS: Tuple[ContextField, ...] = (
    ContextField("current_revenue", "Current Revenue", 0, unit="USD"),
    ContextField("revenue_growth_rate", "Revenue Growth Rate", 10, unit="%"),
    ContextField("sales_cycle_length", "Sales Cycle Length", 6, unit="months"),
    ContextField("customer_acquisition_cost", "Customer Acquisition Cost", 5_000, unit="USD"),
    ContextField("customer_lifetime_value", "Customer Lifetime Value", 25_000, unit="USD"),
    ContextField("churn_rate", "Churn Rate", 10, unit="%"),
    ContextField("sales_team_size", "Sales Team Size", 5),
    ContextField("conversion_rate", "Conversion Rate", 15, unit="%"),
    ContextField("average_deal_size", "Average Deal Size", 10_000, unit="USD"),
    ContextField("pipeline_value", "Pipeline Value", 100_000, unit="USD"),
    ContextField("market_penetration", "Market Penetration", 5, unit="%"),
    ContextField(
        "competitive_pressure",
        "Competitive Pressure",
        "medium",
        kind="choice",
        choices=("low", "medium", "high"),
    ),
)

REVENUE = CategoryAnalysis(
    name="revenue",
    title="Revenue Base",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=field_value("current_revenue"),
            tiers=(
                Tier(above(10_000_000), 15, "Strong revenue base (${millions:.1f}M) provides growth foundation"),
                Tier(above(1_000_000), 5, "Solid revenue base (${millions:.1f}M) supports expansion"),
                Tier(above(0), 0, "Early-stage revenue (${thousands:.0f}K) requires growth acceleration"),
                Tier(always, -20, "No established revenue base increases execution risk"),
            ),
        ),
        TieredAdjustment(
            value=field_value("revenue_growth_rate"),
            tiers=(
                Tier(at_least(50), 20, "Exceptional growth rate ({value}%) indicates strong market traction"),
                Tier(at_least(25), 10, "Strong growth rate ({value}%) shows healthy expansion"),
                Tier(at_least(10), 0, "Moderate growth rate ({value}%) meets industry standards"),
                Tier(always, -15, "Low growth rate ({value}%) below market expectations"),
            ),
        ),
        TieredAdjustment(
            value=field_value("average_deal_size"),
            tiers=(
                Tier(above(100_000), 10, "Large average deal size (${thousands:.0f}K) enables efficient scaling"),
                Tier(below(1_000), -10, "Small average deal size (${value}) requires high-volume sales approach"),
            ),
        ),
    ),
)

SALES = CategoryAnalysis(
    name="sales",
    title="Sales Efficiency",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=field_value("sales_cycle_length"),
            tiers=(
                Tier(at_most(3), 15, "Short sales cycle ({value} months) enables rapid revenue generation"),
                Tier(at_most(6), 5, "Moderate sales cycle ({value} months) is manageable"),
                Tier(above(12), -20, "Long sales cycle ({value} months) slows revenue realization"),
                Tier(always, -10, "Extended sales cycle ({value} months) impacts cash flow"),
            ),
        ),
        TieredAdjustment(
            value=field_value("conversion_rate"),
            tiers=(
                Tier(at_least(25), 20, "High conversion rate ({value}%) indicates strong sales effectiveness"),
                Tier(at_least(15), 10, "Good conversion rate ({value}%) shows solid sales performance"),
                Tier(at_least(10), 0, "Average conversion rate ({value}%) meets baseline expectations"),
                Tier(always, -15, "Low conversion rate ({value}%) suggests sales process issues"),
            ),
        ),
        TieredAdjustment(
            value=field_value("sales_team_size"),
            tiers=(
                Tier(below(3), -10, "Small sales team ({value}) may limit growth capacity"),
                Tier(above(20), -5, "Large sales team ({value}) requires strong management systems"),
            ),
        ),
    ),
)

CUSTOMER_ECONOMICS = CategoryAnalysis(
    name="customer_economics",
    title="Customer Economics",
    base=70,
    adjustments=(
        # no ratio without an acquisition cost
        TieredAdjustment(
            value=lambda context: context["customer_lifetime_value"]
            / context["customer_acquisition_cost"],
            when=lambda context: context["customer_acquisition_cost"] > 0,
            tiers=(
                Tier(at_least(5), 25, "Excellent LTV:CAC ratio ({value:.1f}:1) indicates strong unit economics"),
                Tier(at_least(3), 15, "Good LTV:CAC ratio ({value:.1f}:1) supports sustainable growth"),
                Tier(at_least(2), 5, "Acceptable LTV:CAC ratio ({value:.1f}:1) meets minimum thresholds"),
                Tier(always, -20, "Poor LTV:CAC ratio ({value:.1f}:1) indicates unsustainable economics"),
            ),
        ),
        TieredAdjustment(
            value=field_value("churn_rate"),
            tiers=(
                Tier(at_most(5), 15, "Low churn rate ({value}%) indicates strong customer satisfaction"),
                Tier(at_most(10), 5, "Moderate churn rate ({value}%) is manageable"),
                Tier(at_most(20), -10, "High churn rate ({value}%) impacts revenue predictability"),
                Tier(always, -25, "Very high churn rate ({value}%) threatens revenue sustainability"),
            ),
        ),
    ),
)

MARKET = CategoryAnalysis(
    name="market",
    title="Market Opportunity",
    base=70,
    adjustments=(
        TieredAdjustment(
            value=field_value("market_penetration"),
            tiers=(
                Tier(at_most(2), 20, "Low market penetration ({value}%) indicates significant growth opportunity"),
                Tier(at_most(10), 10, "Moderate market penetration ({value}%) shows room for expansion"),
                Tier(at_least(30), -15, "High market penetration ({value}%) may limit growth potential"),
            ),
        ),
        TieredAdjustment(
            value=field_value("pipeline_value"),
            tiers=(
                Tier(above(1_000_000), 15, "Strong pipeline value (${millions:.1f}M) supports near-term growth"),
                Tier(above(100_000), 5, "Solid pipeline value (${thousands:.0f}K) provides growth foundation"),
                Tier(always, -10, "Limited pipeline value requires increased lead generation"),
            ),
        ),
    ),
)

COMPETITIVE = CategoryAnalysis(
    name="competitive",
    title="Competitive Pressure",
    base=70,
    adjustments=(
        CategoricalAdjustment(
            source="competitive_pressure",
            deltas={"low": 15, "medium": 0, "high": -20},
            rationales={
                "low": "Low competitive pressure provides pricing flexibility and market opportunity",
                "high": "High competitive pressure may impact pricing power and customer acquisition",
            },
            otherwise="Moderate competitive pressure requires strong differentiation strategy",
        ),
    ),
)

ROLE_PROMPT = (
    "You are an experienced Chief Revenue Officer analyzing a business "
    "proposal from a revenue generation perspective. Assess the current "
    "revenue base and growth, sales efficiency, customer economics, market "
    "opportunity and pipeline, and competitive pressure. Focus on "
    "predictable, profitable revenue growth."
)


def build_domain() -> DomainDefinition:
    return DomainDefinition(
        name="revenue",
        title="Revenue",
        role_prompt=ROLE_PROMPT,
        concern_label="revenue",
        fields=FIELDS,
        analyses=(REVENUE, SALES, CUSTOMER_ECONOMICS, MARKET, COMPETITIVE),
    )
