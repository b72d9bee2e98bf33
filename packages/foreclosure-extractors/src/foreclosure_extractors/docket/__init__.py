"""Docket analysis: keyword tiers and the DocketSignals analyzer."""

from .analyzer import analyze_docket, docket_text, sort_entries
from .keywords import (
    BANKRUPTCY_KEYWORDS,
    KEYWORD_TIERS,
    STAY_KEYWORDS,
    KeywordRule,
    conciliation_status_of,
)

__all__ = [
    "analyze_docket",
    "docket_text",
    "sort_entries",
    "BANKRUPTCY_KEYWORDS",
    "KEYWORD_TIERS",
    "STAY_KEYWORDS",
    "KeywordRule",
    "conciliation_status_of",
]
