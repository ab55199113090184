"""
Weekly projection & actuals reconciliation engine.

Modules
-------
growth      Growth-model registry (exponential, linear, flat).
costs       Cost-line math: marketing, staffing, events, setup amortisation, COGS.
projection  ProjectionConfig → list[WeeklyProjection].
reconcile   Overlay actual records onto a forecast with explicit precedence.
aggregate   Totals, profit margin, and cost breakdown.
variance    Projected-vs-actual variance per week and metric.
scenario    Baseline-vs-alternative forecast diffs.
channels    Marketing channel KPIs from actual records.
portfolio   Rollup of several products' forecasts into one view.
risk        Likelihood x impact risk scores and bands.
errors      Error kinds and the tagged ``EngineResult``.
service     ``ForecastEngine`` facade returning tagged results.

Everything here is pure and synchronous: no I/O, no shared mutable state.
"""

from weekly_forecaster.engine.aggregate import (
    AggregateSummary,
    CostBreakdownEntry,
    cost_breakdown,
    summarize,
)
from weekly_forecaster.engine.channels import (
    ChannelMetrics,
    channel_metrics,
    summarize_channels,
)
from weekly_forecaster.engine.errors import (
    ConfigurationError,
    EngineError,
    EngineResult,
    UnknownGrowthModelError,
    ValidationError,
)
from weekly_forecaster.engine.growth import growth_factor, resolve_growth_model
from weekly_forecaster.engine.portfolio import (
    PortfolioSummary,
    PortfolioWeek,
    ProductTotals,
    summarize_portfolio,
)
from weekly_forecaster.engine.projection import (
    generate_projections,
    parse_projection_config,
    validate_projection_config,
)
from weekly_forecaster.engine.reconcile import ReconciledWeek, reconcile
from weekly_forecaster.engine.risk import RiskSummary, risk_band, risk_score, summarize_risks
from weekly_forecaster.engine.scenario import (
    ScenarioDiff,
    ScenarioTotals,
    compare_scenarios,
    scenario_totals,
)
from weekly_forecaster.engine.service import ForecastEngine
from weekly_forecaster.engine.variance import VarianceRecord, analyze_variance

__all__ = [
    # aggregate
    "AggregateSummary",
    "CostBreakdownEntry",
    "cost_breakdown",
    "summarize",
    # channels
    "ChannelMetrics",
    "channel_metrics",
    "summarize_channels",
    # errors
    "ConfigurationError",
    "EngineError",
    "EngineResult",
    "UnknownGrowthModelError",
    "ValidationError",
    # growth
    "growth_factor",
    "resolve_growth_model",
    # portfolio
    "PortfolioSummary",
    "PortfolioWeek",
    "ProductTotals",
    "summarize_portfolio",
    # projection
    "generate_projections",
    "parse_projection_config",
    "validate_projection_config",
    # reconcile
    "ReconciledWeek",
    "reconcile",
    # risk
    "RiskSummary",
    "risk_band",
    "risk_score",
    "summarize_risks",
    # scenario
    "ScenarioDiff",
    "ScenarioTotals",
    "compare_scenarios",
    "scenario_totals",
    # service
    "ForecastEngine",
    # variance
    "VarianceRecord",
    "analyze_variance",
]
