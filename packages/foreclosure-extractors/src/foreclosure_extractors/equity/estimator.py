"""
Equity estimate from the county assessed value.

There is no mortgage balance on the docket, so the loan is assumed to sit at a
typical loan-to-value ratio for the kind of lender bringing the foreclosure.
Government-insured and subprime loans are assumed to carry less equity than a
conventional 80% loan.
"""

import re
from typing import Optional

from loguru import logger

from foreclosure_types.schemas import EquityConfidence, EquityEstimate

# Assessments typically run 85-100% of market value in PA
MARKET_VALUE_FACTOR = 1.1

DEFAULT_LTV = 0.80
GOVERNMENT_LTV = 0.95
SUBPRIME_LTV = 0.90

GOVERNMENT_LENDER_RE = re.compile(r"\b(?:hud|fha|va|veterans)\b", re.IGNORECASE)
SUBPRIME_SERVICER_RE = re.compile(r"freedom|nationstar|ocwen|caliber", re.IGNORECASE)

MEDIUM_CONFIDENCE_MIN_VALUE = 50000

ESTIMATE_NOTE = (
    "Estimate based on assessment value and typical LTV. Actual equity may vary significantly."
)


def estimate_ltv(plaintiff: str) -> float:
    """Assumed loan-to-value ratio for the plaintiff's lender type."""
    # Subprime servicers take precedence over an insured-loan marker
    if plaintiff and SUBPRIME_SERVICER_RE.search(plaintiff):
        return SUBPRIME_LTV
    if plaintiff and GOVERNMENT_LENDER_RE.search(plaintiff):
        return GOVERNMENT_LTV
    return DEFAULT_LTV


def estimate_equity(
    assessed_value: Optional[float], plaintiff: str = ""
) -> Optional[EquityEstimate]:
    """
    Estimate the owner's equity.

    Args:
        assessed_value: County assessed value; None or 0 means unknown
        plaintiff: Plaintiff name, used to guess the loan type

    Returns:
        EquityEstimate, or None when there is no assessed value to work from
    """
    if not assessed_value:
        return None

    ltv = estimate_ltv(plaintiff)
    market_value = assessed_value * MARKET_VALUE_FACTOR
    mortgage = market_value * ltv
    confidence = (
        EquityConfidence.MEDIUM
        if assessed_value > MEDIUM_CONFIDENCE_MIN_VALUE
        else EquityConfidence.LOW
    )

    logger.debug(f"Equity estimate for assessed {assessed_value}: LTV {ltv} ({plaintiff!r})")
    return EquityEstimate(
        assessed_value=assessed_value,
        estimated_market_value=round(market_value),
        estimated_ltv=ltv,
        estimated_mortgage=round(mortgage),
        estimated_equity=round(market_value - mortgage),
        equity_percent=round((1 - ltv) * 100),
        confidence=confidence,
        note=ESTIMATE_NOTE,
    )
