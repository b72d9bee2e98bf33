"""
Docket analysis: derive a DocketSignals summary from raw docket entries.

The analyzer is order independent (entries are sorted internally, most recent
first) and reads the clock only through the injectable ``now`` argument.
"""

import datetime as dt
from typing import Iterable, List, Optional, Union

from loguru import logger

from foreclosure_types.schemas import (
    ConciliationStatus,
    DocketEntry,
    DocketSignals,
    SignalEvidence,
    SignalTier,
)

from .keywords import (
    CONTINUANCE_RE,
    KEYWORD_TIERS,
    SERVICE_FAILURE_WORDS,
    SERVICE_RE,
)

RECENT_ACTIVITY_LIMIT = 5

Clock = Optional[Union[dt.date, dt.datetime]]


def _reference_date(now: Clock) -> dt.date:
    if now is None:
        return dt.date.today()
    if isinstance(now, dt.datetime):
        return now.date()
    return now


def sort_entries(entries: Iterable[DocketEntry]) -> List[DocketEntry]:
    """Most recent first; same-day entries ordered by description so output is stable."""
    return sorted(entries, key=lambda e: (e.date, e.description), reverse=True)


def _scan_keywords(signals: DocketSignals, entry: DocketEntry, text: str) -> None:
    for tier, rules in KEYWORD_TIERS.items():
        target = signals.positive_signals if tier == SignalTier.POSITIVE else signals.distress_signals
        for rule in rules:
            if rule.keyword not in text:
                continue
            target.append(
                SignalEvidence(
                    keyword=rule.keyword,
                    tier=tier,
                    date=entry.date,
                    description=entry.description,
                )
            )
            if rule.apply is not None:
                rule.apply(signals, text)


def _count_service(signals: DocketSignals, text: str) -> None:
    if not SERVICE_RE.search(text):
        return
    signals.service_attempts += 1
    if any(word in text for word in SERVICE_FAILURE_WORDS):
        signals.failed_service_attempts += 1


def analyze_docket(entries: Iterable[DocketEntry], now: Clock = None) -> DocketSignals:
    """
    Summarize a docket into litigation-posture signals.

    Args:
        entries: Docket entries in any order
        now: Evaluation instant for ``days_since_last_activity`` (defaults to today)

    Returns:
        DocketSignals; a zero-valued summary when ``entries`` is empty
    """
    ordered = sort_entries(entries)
    signals = DocketSignals()
    if not ordered:
        return signals

    signals.total_entries = len(ordered)
    signals.entries = ordered
    signals.recent_activity = ordered[:RECENT_ACTIVITY_LIMIT]
    signals.last_activity_date = ordered[0].date
    signals.days_since_last_activity = max(
        0, (_reference_date(now) - signals.last_activity_date).days
    )

    for entry in ordered:
        text = entry.description.lower()
        _scan_keywords(signals, entry, text)
        _count_service(signals, text)
        if CONTINUANCE_RE.search(text):
            signals.continuance_count += 1

    if signals.has_conciliation and signals.conciliation_status == ConciliationStatus.NONE:
        # A conference on the docket with no outcome yet is pending
        signals.conciliation_status = ConciliationStatus.SCHEDULED

    logger.debug(
        f"Analyzed {signals.total_entries} docket entries: "
        f"{len(signals.distress_signals)} distress, {len(signals.positive_signals)} positive"
    )
    return signals


def docket_text(signals: DocketSignals) -> str:
    """Lower-cased docket descriptions joined in analysis order."""
    return " | ".join(entry.description.lower() for entry in signals.entries)
