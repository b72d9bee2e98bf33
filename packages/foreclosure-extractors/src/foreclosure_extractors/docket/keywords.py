"""
Keyword tiers for docket classification.

Each tier maps to an ordered tuple of rules. A rule pairs a lower-case keyword
with an optional flag setter; the analyzer records evidence for every keyword
hit and then lets the setter decide which DocketSignals flag the hit supports.
Setters only look at the entry they were triggered by, so adding entries can
never clear a flag another entry already set.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from foreclosure_types.schemas import ConciliationStatus, DocketSignals, SignalTier

FlagSetter = Callable[[DocketSignals, str], None]


@dataclass(frozen=True)
class KeywordRule:
    keyword: str
    apply: Optional[FlagSetter] = None


# ------------------------------------------------------------------------------
# Flag setters
# ------------------------------------------------------------------------------


def _set_default_judgment(signals: DocketSignals, text: str) -> None:
    # A motion asking for a default judgment is not a judgment
    if "motion for default" in text and "judgment entered" not in text:
        return
    signals.has_default_judgment = True


def _set_default_motion(signals: DocketSignals, text: str) -> None:
    # "Motion for default granted, judgment entered" records the judgment instead
    if "judgment entered" in text:
        return
    signals.has_default_motion = True


def _set_writ(signals: DocketSignals, text: str) -> None:
    signals.has_writ_of_execution = True


def _set_bankruptcy(signals: DocketSignals, text: str) -> None:
    signals.has_bankruptcy = True


def _set_stayed(signals: DocketSignals, text: str) -> None:
    signals.is_stayed = True


CONCILIATION_STATUS_WORDS: Tuple[Tuple[ConciliationStatus, Tuple[str, ...]], ...] = (
    (ConciliationStatus.FAILED, ("failed", "no show")),
    (ConciliationStatus.SCHEDULED, ("scheduled", "set for")),
    (ConciliationStatus.COMPLETED, ("completed", "held")),
)


def conciliation_status_of(text: str) -> ConciliationStatus:
    """Status implied by the words co-occurring with a conciliation keyword."""
    for status, words in CONCILIATION_STATUS_WORDS:
        if any(word in text for word in words):
            return status
    return ConciliationStatus.NONE


def _set_conciliation(signals: DocketSignals, text: str) -> None:
    signals.has_conciliation = True
    # Entries arrive most recent first; the latest definite status wins
    if signals.conciliation_status == ConciliationStatus.NONE:
        signals.conciliation_status = conciliation_status_of(text)


def _set_attorney(signals: DocketSignals, text: str) -> None:
    signals.has_defendant_attorney = True


def _set_response(signals: DocketSignals, text: str) -> None:
    signals.has_defendant_response = True


# ------------------------------------------------------------------------------
# Tier table
# ------------------------------------------------------------------------------

BANKRUPTCY_KEYWORDS: Tuple[str, ...] = ("bankruptcy", "chapter 13")
STAY_KEYWORDS: Tuple[str, ...] = ("stayed", "stay of proceedings", "automatic stay")

KEYWORD_TIERS: Dict[SignalTier, Tuple[KeywordRule, ...]] = {
    SignalTier.HIGH: (
        KeywordRule("default judgment", _set_default_judgment),
        KeywordRule("motion for default", _set_default_motion),
        KeywordRule("judgment entered", _set_default_judgment),
        KeywordRule("writ of execution", _set_writ),
        KeywordRule("sheriff sale"),
        KeywordRule("praecipe for writ", _set_writ),
        KeywordRule("rule to show cause"),
        KeywordRule("failure to appear"),
        *(KeywordRule(k, _set_bankruptcy) for k in BANKRUPTCY_KEYWORDS),
    ),
    SignalTier.MEDIUM: (
        KeywordRule("conciliation", _set_conciliation),
        KeywordRule("mediation", _set_conciliation),
        KeywordRule("service accepted"),
        KeywordRule("answer filed"),
        KeywordRule("discovery"),
        *(KeywordRule(k, _set_stayed) for k in STAY_KEYWORDS),
    ),
    SignalTier.POSITIVE: (
        KeywordRule("motion to dismiss"),
        KeywordRule("answer and new matter", _set_response),
        KeywordRule("counterclaim", _set_response),
        KeywordRule("preliminary objections", _set_response),
        KeywordRule("counsel appearance", _set_attorney),
        KeywordRule("attorney appearance", _set_attorney),
    ),
}

SERVICE_WORDS: Tuple[str, ...] = ("service", "served")
SERVICE_FAILURE_WORDS: Tuple[str, ...] = ("fail", "unable", "not found", "return")
CONTINUANCE_WORDS: Tuple[str, ...] = (
    "continuance", "continuances", "continued", "postponed", "rescheduled",
)


def word_pattern(words: Tuple[str, ...]) -> "re.Pattern[str]":
    """Compile a whole-word alternation ("served" must not hit "reserved")."""
    return re.compile(r"\b(?:%s)\b" % "|".join(re.escape(w) for w in words))


SERVICE_RE = word_pattern(SERVICE_WORDS)
CONTINUANCE_RE = word_pattern(CONTINUANCE_WORDS)
