"""Weekly financial projection and actuals reconciliation engine."""

__version__ = "0.1.0"
