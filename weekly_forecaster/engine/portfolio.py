"""
Portfolio rollup across several products' forecast series.

Each product contributes its projected totals over its own horizon::

    total_revenue  = Σ products Σ weeks total_revenue
    total_costs    = Σ products Σ weeks total_costs
    total_profit   = total_revenue - total_costs
    average_profit = total_profit / product_count     (all products, empty included)
    total_visitors = Σ products Σ weeks foot_traffic

Products with an empty series still count towards ``product_count`` but are
skipped when picking the most and least profitable product. Ties keep the
first product in mapping order.

The weekly curve runs 1..longest horizon; each week sums ``weekly_profit``
across the products whose horizon reaches it, then accumulates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from weekly_forecaster.engine.aggregate import profit_margin
from weekly_forecaster.models.projection import WeeklyProjection


@dataclass(frozen=True)
class ProductTotals:
    """Horizon totals for one product.

    Attributes:
        name:          Product name (mapping key).
        weeks:         Length of the product's series.
        total_revenue: Sum of weekly revenue.
        total_costs:   Sum of weekly costs.
        total_profit:  total_revenue - total_costs.
        visitors:      Sum of weekly foot traffic.
    """

    name: str
    weeks: int
    total_revenue: float
    total_costs: float
    total_profit: float
    visitors: float


@dataclass(frozen=True)
class PortfolioWeek:
    week: int
    profit: float
    cumulative_profit: float


@dataclass(frozen=True)
class PortfolioSummary:
    """Portfolio-level totals, extremes and the combined cumulative curve.

    Attributes:
        total_revenue:    Revenue across every product.
        total_costs:      Costs across every product.
        total_profit:     total_revenue - total_costs.
        profit_margin:    Percentage; 0 when total revenue <= 0.
        average_profit:   total_profit / product_count; 0 with no products.
        total_visitors:   Foot traffic across every product.
        product_count:    Number of products, empty series included.
        most_profitable:  Name of the product with the highest profit, or None.
        least_profitable: Name of the product with the lowest profit, or None.
        products:         Per-product totals in mapping order.
        weekly:           Combined profit per week with running cumulative.
    """

    total_revenue: float
    total_costs: float
    total_profit: float
    profit_margin: float
    average_profit: float
    total_visitors: float
    product_count: int
    most_profitable: Optional[str]
    least_profitable: Optional[str]
    products: tuple[ProductTotals, ...] = ()
    weekly: tuple[PortfolioWeek, ...] = ()


def product_totals(name: str, series: list[WeeklyProjection]) -> ProductTotals:
    revenue = sum(row.total_revenue for row in series)
    costs = sum(row.total_costs for row in series)
    return ProductTotals(
        name=name,
        weeks=len(series),
        total_revenue=revenue,
        total_costs=costs,
        total_profit=revenue - costs,
        visitors=sum(row.foot_traffic for row in series),
    )


def summarize_portfolio(products: Mapping[str, list[WeeklyProjection]]) -> PortfolioSummary:
    """Roll several products' forecast series up into one portfolio view."""
    totals = [product_totals(name, series) for name, series in products.items()]

    total_revenue = sum(t.total_revenue for t in totals)
    total_costs = sum(t.total_costs for t in totals)
    total_profit = total_revenue - total_costs

    most: Optional[ProductTotals] = None
    least: Optional[ProductTotals] = None
    for t in totals:
        if t.weeks == 0:
            continue
        if most is None or t.total_profit > most.total_profit:
            most = t
        if least is None or t.total_profit < least.total_profit:
            least = t

    horizon = max((t.weeks for t in totals), default=0)
    by_week = [0.0] * horizon
    for series in products.values():
        for row in series:
            by_week[row.week - 1] += row.weekly_profit

    weekly: list[PortfolioWeek] = []
    cumulative = 0.0
    for week, profit in enumerate(by_week, start=1):
        cumulative += profit
        weekly.append(PortfolioWeek(week=week, profit=profit, cumulative_profit=cumulative))

    return PortfolioSummary(
        total_revenue=total_revenue,
        total_costs=total_costs,
        total_profit=total_profit,
        profit_margin=profit_margin(total_profit, total_revenue),
        average_profit=total_profit / len(totals) if totals else 0.0,
        total_visitors=sum(t.visitors for t in totals),
        product_count=len(totals),
        most_profitable=most.name if most else None,
        least_profitable=least.name if least else None,
        products=tuple(totals),
        weekly=tuple(weekly),
    )
