"""
Engine error kinds and the tagged result type.

Raising vs returning
--------------------
The computation functions (``generate_projections``, ``reconcile``,
``compare_scenarios`` …) raise the exceptions below, like any Python
library.

``ForecastEngine`` (``engine/service.py``) is the interface handed to UI
and export collaborators. Its methods catch ``EngineError`` and return an
``EngineResult`` instead, so a render cycle can degrade gracefully::

    result = engine.project(config)
    if not result.ok:
        show_banner(result.error)
    else:
        draw(result.value)

Call ``result.unwrap()`` when a hard failure is preferred over a soft skip.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


# ── Custom exceptions ─────────────────────────────────────────────────────────


class EngineError(ValueError):
    """Base class for all engine failures."""


class ConfigurationError(EngineError):
    """A ProjectionConfig cannot be projected.

    Raised for a non-positive horizon, an unknown growth model, or malformed
    staff roles / cost items.
    """


class ValidationError(EngineError):
    """Inputs to an engine operation are inconsistent with each other.

    Raised for scenario series of different length or week indexing, and for
    actual records referencing a week outside the forecast horizon.

    Not to be confused with ``pydantic.ValidationError``, which only signals
    a malformed model payload.
    """


class UnknownGrowthModelError(ConfigurationError, ValidationError):
    """Growth model tag not present in the registry.

    Both a configuration error (it comes from a saved config) and a
    validation error (the tag fails validation against the registry), so
    callers catching either kind see it.

    Attributes:
        model:    The unrecognised tag as given.
        known:    Registered tags.
    """

    def __init__(self, model: str, known: list[str]) -> None:
        self.model = model
        self.known = known
        super().__init__(
            f"Unknown growth model '{model}'. Must be one of {sorted(known)}."
        )


# ── Result type ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EngineResult(Generic[T]):
    """Tagged outcome of an engine operation.

    Exactly one of ``value`` / ``error`` is meaningful: ``ok`` tells which.

    Attributes:
        ok:    True when the operation succeeded.
        value: The computed value; ``None`` on failure.
        error: The ``EngineError`` that stopped the operation; ``None`` on success.
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[EngineError] = None

    @classmethod
    def success(cls, value: T) -> "EngineResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: EngineError) -> "EngineResult[T]":
        return cls(ok=False, error=error)

    @property
    def error_kind(self) -> Optional[str]:
        """Class name of the error (``"ConfigurationError"`` …), or None."""
        return type(self.error).__name__ if self.error is not None else None

    def unwrap(self) -> T:
        """Return ``value`` or raise the captured error."""
        if not self.ok:
            raise self.error or EngineError("Engine operation failed without an error.")
        return self.value  # type: ignore[return-value]
