"""
Foreclosure extractors module for address, docket and lead-score extraction.

This module provides the pure per-case stages of the lead pipeline: parsing a
property address from free text, summarizing a docket into litigation-posture
signals, and scoring the case for outreach, plus a rough equity estimate from the
assessed value. None of these stages performs I/O.
"""

# Import from organized subpackages
from .address import (
    MONTCO_TOWNS,
    county_towns,
    match_town,
    parse_address,
)

from .docket import (
    KEYWORD_TIERS,
    analyze_docket,
)

from .equity import (
    estimate_equity,
)

from .scoring import (
    clamp_score,
    score_lead,
)

__all__ = [
    # Address parsing
    "MONTCO_TOWNS",
    "county_towns",
    "match_town",
    "parse_address",

    # Docket analysis
    "KEYWORD_TIERS",
    "analyze_docket",

    # Equity estimation
    "estimate_equity",

    # Lead scoring
    "clamp_score",
    "score_lead",
]
