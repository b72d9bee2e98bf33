"""Equity estimation from assessed property values."""

from .estimator import (
    DEFAULT_LTV,
    GOVERNMENT_LTV,
    SUBPRIME_LTV,
    estimate_equity,
    estimate_ltv,
)

__all__ = [
    "DEFAULT_LTV",
    "GOVERNMENT_LTV",
    "SUBPRIME_LTV",
    "estimate_equity",
    "estimate_ltv",
]
