"""
Growth-model registry.

Each growth model maps ``(week, rate)`` to a multiplicative growth factor
applied to base attendance (and to the simple weekly marketing budget):

  exponential   (1 + rate) ** (week - 1)
  linear        1 + rate * (week - 1)
  flat          1.0

Week 1 always has factor 1.0 under every model. The factor is clipped to
>= 0, so a steep negative linear rate bottoms out at zero attendance rather
than producing negative traffic.

Adding a model: write a ``(week, rate) -> float`` function and register it
in ``GROWTH_MODELS`` under a ``GrowthModel`` tag.
"""

from __future__ import annotations

from typing import Callable

from weekly_forecaster.engine.errors import ConfigurationError, UnknownGrowthModelError
from weekly_forecaster.taxonomy.finance_taxonomy import GrowthModel

GrowthFn = Callable[[int, float], float]


def _exponential(week: int, rate: float) -> float:
    return (1.0 + rate) ** (week - 1)


def _linear(week: int, rate: float) -> float:
    return 1.0 + rate * (week - 1)


def _flat(week: int, rate: float) -> float:
    return 1.0


GROWTH_MODELS: dict[GrowthModel, GrowthFn] = {
    GrowthModel.EXPONENTIAL: _exponential,
    GrowthModel.LINEAR:      _linear,
    GrowthModel.FLAT:        _flat,
}


def resolve_growth_model(tag: str) -> GrowthModel:
    """Normalise a config tag (``"Exponential"``, ``" linear "``) to a ``GrowthModel``.

    Raises:
        UnknownGrowthModelError: If the tag is not registered.
    """
    normalised = (tag or "").strip().lower()
    try:
        model = GrowthModel(normalised)
    except ValueError:
        raise UnknownGrowthModelError(tag, [m.value for m in GROWTH_MODELS]) from None
    if model not in GROWTH_MODELS:
        raise UnknownGrowthModelError(tag, [m.value for m in GROWTH_MODELS])
    return model


def growth_factor(model: GrowthModel | str, week: int, rate: float) -> float:
    """Growth factor for ``week`` (1-based), clipped to >= 0.

    Args:
        model: A ``GrowthModel`` or a raw config tag.
        week:  1-based week index.
        rate:  Weekly growth rate as a fraction.

    Returns:
        Non-negative growth factor.

    Raises:
        UnknownGrowthModelError: If a raw tag is not registered.
        ConfigurationError: If the factor overflows a float (horizon too
            long for the rate).
    """
    if not isinstance(model, GrowthModel):
        model = resolve_growth_model(model)
    try:
        factor = GROWTH_MODELS[model](week, rate)
    except OverflowError:
        raise ConfigurationError(
            f"Growth factor overflows at week {week} ({model.value}, rate={rate}); "
            "shorten horizon_weeks or lower the rate."
        ) from None
    return max(0.0, factor)
