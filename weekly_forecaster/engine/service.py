"""
``ForecastEngine``: the single typed interface to the engine.

Store, presentation and export collaborators call this facade rather than
the individual modules. Every method:

  1. Takes immutable inputs (a complete ``ProjectionConfig``, actual records).
  2. Recomputes what it needs from scratch (projection results may be served
     from an additive cache; a miss simply recomputes).
  3. Returns an ``EngineResult``. ``EngineError``s are captured, logged once
     at WARNING, and handed back as a tagged failure instead of raised.

Usage::

    engine = ForecastEngine(load_config())
    result = engine.summarize(config, actuals)
    if result.ok:
        render(result.value)
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Callable, Iterable, Mapping, Optional, TypeVar

from weekly_forecaster.config import AppConfig
from weekly_forecaster.engine.aggregate import (
    AggregateSummary,
    CostBreakdownEntry,
    cost_breakdown,
    summarize,
)
from weekly_forecaster.engine.errors import EngineError, EngineResult
from weekly_forecaster.engine.portfolio import PortfolioSummary, summarize_portfolio
from weekly_forecaster.engine.projection import (
    generate_projections,
    validate_projection_config,
)
from weekly_forecaster.engine.reconcile import ReconciledWeek, reconcile
from weekly_forecaster.engine.risk import RiskSummary, summarize_risks
from weekly_forecaster.engine.scenario import ScenarioDiff, compare_scenarios
from weekly_forecaster.engine.variance import VarianceRecord, analyze_variance
from weekly_forecaster.models.actuals import ActualRecord, ActualsLedger
from weekly_forecaster.models.config import ProjectionConfig
from weekly_forecaster.models.projection import WeeklyProjection
from weekly_forecaster.models.risk import RiskItem

log = logging.getLogger(__name__)

T = TypeVar("T")

Actuals = ActualsLedger | Iterable[ActualRecord]


class ForecastEngine:
    """Facade over projection, reconciliation, aggregation, variance, scenarios,
    portfolio rollups and risk scoring.

    Args:
        app_config: Application settings; defaults to ``AppConfig()``.
    """

    def __init__(self, app_config: Optional[AppConfig] = None) -> None:
        self._app_config = app_config or AppConfig()
        self._cache: OrderedDict[str, list[WeeklyProjection]] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def app_config(self) -> AppConfig:
        return self._app_config

    # ── Internals ──────────────────────────────────────────────────────────

    def _run(self, operation: str, fn: Callable[[], T]) -> EngineResult[T]:
        try:
            return EngineResult.success(fn())
        except EngineError as exc:
            log.warning(
                "%s failed: %s", operation, exc,
                extra={"operation": operation, "error_kind": type(exc).__name__},
            )
            return EngineResult.failure(exc)

    def _series(self, config: ProjectionConfig) -> list[WeeklyProjection]:
        if not self._app_config.engine.cache_projections:
            return generate_projections(config)

        key = config.model_dump_json()
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                return list(cached)

        series = generate_projections(config)

        with self._lock:
            self._cache[key] = series
            self._cache.move_to_end(key)
            while len(self._cache) > self._app_config.engine.cache_max_entries:
                self._cache.popitem(last=False)
        return list(series)

    def _forced_weeks(self, forced_actual_weeks: Optional[Iterable[int]]) -> frozenset[int]:
        if forced_actual_weeks is None:
            return frozenset(self._app_config.reconciliation.forced_actual_weeks)
        return frozenset(forced_actual_weeks)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    # ── Operations ─────────────────────────────────────────────────────────

    def validate(self, config: ProjectionConfig) -> EngineResult[ProjectionConfig]:
        """Check a config at save time; returns the config itself on success."""

        def _do() -> ProjectionConfig:
            validate_projection_config(config)
            return config

        return self._run("validate", _do)

    def project(self, config: ProjectionConfig) -> EngineResult[list[WeeklyProjection]]:
        return self._run("project", lambda: self._series(config))

    def reconcile(
        self,
        config: ProjectionConfig,
        actuals: Actuals,
        forced_actual_weeks: Optional[Iterable[int]] = None,
    ) -> EngineResult[list[ReconciledWeek]]:
        """Reconcile ``actuals`` onto the projection of ``config``.

        ``forced_actual_weeks=None`` uses ``[reconciliation]`` from app config;
        pass an empty set to force nothing.
        """
        forced = self._forced_weeks(forced_actual_weeks)
        return self._run(
            "reconcile", lambda: reconcile(self._series(config), actuals, forced)
        )

    def summarize(
        self,
        config: ProjectionConfig,
        actuals: Actuals,
        forced_actual_weeks: Optional[Iterable[int]] = None,
    ) -> EngineResult[AggregateSummary]:
        forced = self._forced_weeks(forced_actual_weeks)
        return self._run(
            "summarize",
            lambda: summarize(reconcile(self._series(config), actuals, forced)),
        )

    def variance(
        self,
        config: ProjectionConfig,
        actuals: Actuals,
    ) -> EngineResult[list[VarianceRecord]]:
        return self._run(
            "variance", lambda: analyze_variance(self._series(config), actuals)
        )

    def compare(
        self,
        baseline: ProjectionConfig,
        scenario: ProjectionConfig,
    ) -> EngineResult[list[ScenarioDiff]]:
        """Diff the projections of two configs (baseline vs alternative)."""
        return self._run(
            "compare",
            lambda: compare_scenarios(self._series(baseline), self._series(scenario)),
        )

    def cost_breakdown(self, config: ProjectionConfig) -> EngineResult[list[CostBreakdownEntry]]:
        return self._run("cost_breakdown", lambda: cost_breakdown(self._series(config)))

    def portfolio(
        self,
        configs: Mapping[str, ProjectionConfig],
    ) -> EngineResult[PortfolioSummary]:
        """Project every product config and roll the series up into one view."""
        return self._run(
            "portfolio",
            lambda: summarize_portfolio(
                {name: self._series(config) for name, config in configs.items()}
            ),
        )

    def risks(self, risks: Iterable[RiskItem]) -> EngineResult[RiskSummary]:
        return self._run("risks", lambda: summarize_risks(risks))
