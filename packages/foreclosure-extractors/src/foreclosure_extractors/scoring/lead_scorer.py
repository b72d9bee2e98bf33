"""
Enhanced lead scoring model.

Scores are additive from a base of 0. Every contribution is recorded as a
ScoreFactor in evaluation order, so the factor deltas always sum to the
unclamped score. The scorer is a pure function of (case, signals, address):
the only notion of time it uses is ``signals.days_since_last_activity``,
which the docket analyzer computed against an injected clock.
"""

import re
from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger

from foreclosure_types.schemas import (
    Case,
    DocketEntry,
    DocketSignals,
    LeadGrade,
    LeadScore,
    PropertyAddress,
    ScoreFactor,
)

from ..docket.analyzer import docket_text
from ..docket.keywords import BANKRUPTCY_KEYWORDS, STAY_KEYWORDS

BASE_SCORE = 0
MIN_SCORE = 0
MAX_SCORE = 100

# (upper bound exclusive, delta, description); the last band is open ended
AGE_BANDS: Tuple[Tuple[Optional[int], int, str], ...] = (
    (120, 0, "Case age under 120 days (too fresh)"),
    (180, 5, "Case age 120-179 days"),
    (270, 12, "Case age 180-269 days"),
    (541, 25, "Case age 270-540 days (sweet spot)"),
    (721, 18, "Case age 541-720 days"),
    (None, 10, "Case age over 720 days (possible zombie case)"),
)

ACTIVITY_BANDS: Tuple[Tuple[Optional[int], int, str], ...] = (
    (5, 2, "Light docket activity (<=4 entries)"),
    (9, 8, "Moderate docket activity (5-8 entries)"),
    (15, 14, "Heavy docket activity (9-14 entries)"),
    (None, 20, "Very heavy docket activity (15+ entries)"),
)

# (continuances covered by the tier, points each)
CONTINUANCE_TIERS: Tuple[Tuple[Optional[int], int], ...] = ((3, 5), (3, 3), (None, 1))
CONTINUANCE_CAP = 25

RECENCY_BANDS: Tuple[Tuple[int, int, str], ...] = (
    (14, -12, "Docket activity within 14 days"),
    (30, -8, "Docket activity within 30 days"),
    (60, -4, "Docket activity within 60 days"),
    (90, 0, "Docket activity within 90 days"),
)

EntryTest = Callable[[str], bool]


def _has(*words: str) -> EntryTest:
    return lambda text: any(word in text for word in words)


def _defendant_summary_judgment(text: str) -> bool:
    return (
        "motion for summary judgment" in text
        and "defendant" in text
        and "plaintiff" not in text
    )


# Each rule must hold within a single filing, not across the whole docket
RESISTANCE_RULES: Tuple[Tuple[str, int, EntryTest], ...] = (
    (
        "Answer with new matter filed",
        -5,
        lambda t: "answer" in t and "new matter" in t and "reply to new matter" not in t,
    ),
    ("Preliminary objections filed", -5, _has("preliminary objection")),
    ("Objection and opposition filed", -5, lambda t: "objection" in t and "opposition" in t),
    ("Defendant motion for summary judgment", -10, _defendant_summary_judgment),
    ("Counterclaim filed", -8, _has("counterclaim")),
    ("Reply to new matter", -3, _has("reply to new matter")),
)

CAPITULATION_RULES: Tuple[Tuple[str, int, Tuple[str, ...]], ...] = (
    ("Case reinstated after pause", 5, ("reinstat",)),
    ("Motion for alternate service (defendant cannot be located)", 5,
     ("alternate service", "alternative service")),
    ("Service failed / defendant not found", 5,
     ("not found", "unable to serve", "unable to locate", "non est")),
    ("Counsel withdrew (financial distress)", 12,
     ("withdraw as counsel", "withdrawal of counsel", "withdraw appearance",
      "withdrawal of appearance")),
    ("Substitution of counsel", 3, ("substitution of counsel", "substitute counsel")),
)

# Classified per filing, like resistance
SETTLEMENT_RULES: Tuple[Tuple[str, int, EntryTest], ...] = (
    ("Matter settled", 15, _has("matter settled")),
    ("Stipulation filed", 10, lambda t: "stipulation" in t and "dismiss" not in t),
    ("Stipulation of dismissal", 8, lambda t: "stipulation" in t and "dismiss" in t),
)

STAY_LIFT_WORDS: Tuple[str, ...] = (
    "stay lifted", "lift stay", "lift the stay", "lifting stay", "relief from stay",
    "relief from the automatic stay", "stay vacated", "vacate stay",
)

ADVERSE_RULING_WORDS: Tuple[str, ...] = ("denied", "overruled")

# Entity words and their long forms; surnames such as BANKS or TRUSTY stay individuals
BUSINESS_ENTITY_RE = re.compile(
    r"\b(?:LLC|L\.L\.C|INC(?:ORPORATED)?|CORP(?:ORATION)?|TRUST(?:EES?)?|BANK(?:ING)?)\b"
    r"|\bESTATE OF\b",
    re.IGNORECASE,
)

FALSE_HOPE_MAX_AGE = 360
FALSE_HOPE_MIN_ENTRIES = 6


class _ScoreCard:
    """Accumulates factors in evaluation order."""

    def __init__(self) -> None:
        self.factors: List[ScoreFactor] = []

    def add(self, description: str, delta: int) -> None:
        self.factors.append(ScoreFactor(description=description, point_delta=delta))

    @property
    def raw(self) -> int:
        return BASE_SCORE + sum(f.point_delta for f in self.factors)


def _band(value: int, bands: Sequence[Tuple[Optional[int], int, str]]) -> Tuple[int, str]:
    for upper, delta, description in bands:
        if upper is None or value < upper:
            return delta, description
    raise ValueError(f"No band for {value}")


def _entry_texts(entries: Sequence[DocketEntry]) -> List[str]:
    return [entry.description.lower() for entry in entries]


# ------------------------------------------------------------------------------
# Factors
# ------------------------------------------------------------------------------


def _score_case_age(card: _ScoreCard, days_open: int) -> None:
    delta, description = _band(days_open, AGE_BANDS)
    card.add(description, delta)


def _score_activity(card: _ScoreCard, total_entries: int) -> None:
    delta, description = _band(total_entries, ACTIVITY_BANDS)
    card.add(description, delta)


def continuance_points(count: int) -> int:
    """Diminishing returns: 5 each for the first 3, 3 each for the next 3, then 1, capped."""
    points, remaining = 0, count
    for size, each in CONTINUANCE_TIERS:
        used = remaining if size is None else min(remaining, size)
        points += used * each
        remaining -= used
        if remaining <= 0:
            break
    return min(points, CONTINUANCE_CAP)


def _score_continuances(card: _ScoreCard, count: int) -> None:
    if count > 0:
        card.add(f"{count} continuance(s)", continuance_points(count))


def _score_resistance(card: _ScoreCard, texts: Sequence[str]) -> bool:
    active_fighting = False
    for description, delta, test in RESISTANCE_RULES:
        if any(test(text) for text in texts):
            card.add(description, delta)
            active_fighting = True
    return active_fighting


def _score_capitulation(card: _ScoreCard, text: str) -> None:
    for description, delta, words in CAPITULATION_RULES:
        if any(word in text for word in words):
            card.add(description, delta)


def _score_settlement(card: _ScoreCard, texts: Sequence[str]) -> None:
    for description, delta, test in SETTLEMENT_RULES:
        if any(test(text) for text in texts):
            card.add(description, delta)


def _is_stay_lift(text: str) -> bool:
    return any(word in text for word in STAY_LIFT_WORDS)


def _score_stay_lift(card: _ScoreCard, signals: DocketSignals) -> None:
    lifts = [e for e in signals.entries if _is_stay_lift(e.description.lower())]
    if not lifts:
        return
    lifted_on = max(e.date for e in lifts)
    previously_stayed = any(
        ev.keyword in STAY_KEYWORDS
        and ev.date <= lifted_on
        and not _is_stay_lift(ev.description.lower())
        for ev in signals.distress_signals
    )
    if previously_stayed:
        card.add("Stay lifted after case was stayed", 12)
    else:
        card.add("Stay lifted", 8)


def _score_silence(card: _ScoreCard, signals: DocketSignals) -> None:
    quiet_days = signals.days_since_last_activity
    if quiet_days is None:
        return
    if signals.total_entries >= 8 and quiet_days >= 90:
        card.add("Silence after heavy activity (90+ days)", 10)
    elif signals.total_entries >= 5 and quiet_days >= 60:
        card.add("Silence after activity (60+ days)", 5)


def _score_recency(card: _ScoreCard, days_since: Optional[int]) -> None:
    if days_since is None:
        return
    for upper, delta, description in RECENCY_BANDS:
        if days_since < upper:
            card.add(description, delta)
            return


def _has_adverse_ruling(texts: Sequence[str]) -> bool:
    for text in texts:
        if any(word in text for word in ADVERSE_RULING_WORDS):
            return True
        if "granted" in text and "plaintiff" in text:
            return True
    return False


def _score_false_hope(
    card: _ScoreCard, case: Case, signals: DocketSignals, texts: Sequence[str], active_fighting: bool
) -> None:
    if (
        case.days_open < FALSE_HOPE_MAX_AGE
        and signals.total_entries >= FALSE_HOPE_MIN_ENTRIES
        and active_fighting
        and not _has_adverse_ruling(texts)
    ):
        card.add("Defendant still fighting with no adverse ruling (false hope)", -8)


def _score_bankruptcy(card: _ScoreCard, signals: DocketSignals) -> None:
    mentions = [ev for ev in signals.distress_signals if ev.keyword in BANKRUPTCY_KEYWORDS]
    if not mentions:
        return
    if any("discharge" in ev.description.lower() for ev in mentions):
        card.add("Bankruptcy discharged", 8)
        return

    days_since = signals.days_since_last_activity
    if days_since is not None and days_since < 90:
        card.add("Active bankruptcy (recent activity)", -25)
    elif days_since is not None and days_since < 180:
        card.add("Bankruptcy within 180 days of activity", -18)
    else:
        card.add("Bankruptcy (older activity)", -10)


def is_business_entity(name: str) -> bool:
    return bool(name and BUSINESS_ENTITY_RE.search(name))


def _score_property(card: _ScoreCard, case: Case, address: Optional[PropertyAddress]) -> None:
    if address is not None:
        if address.found:
            card.add("Property address found", 3)
        else:
            card.add("No property address found", -5)
    if is_business_entity(case.defendant):
        card.add("Defendant appears to be a business entity", -8)


# ------------------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------------------


def clamp_score(raw: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, raw))


def score_lead(
    case: Case,
    signals: DocketSignals,
    address: Optional[PropertyAddress] = None,
) -> LeadScore:
    """
    Score a case for outreach.

    Args:
        case: The normalized case
        signals: Docket summary; a zero-valued summary skips every docket factor
        address: Parsed property address, or None when no address lookup was made

    Returns:
        LeadScore with clamped score, grade and the factors explaining it
    """
    card = _ScoreCard()
    _score_case_age(card, case.days_open)

    if signals.total_entries > 0:
        texts = _entry_texts(signals.entries)
        text = docket_text(signals)

        _score_activity(card, signals.total_entries)
        _score_continuances(card, signals.continuance_count)
        active_fighting = _score_resistance(card, texts)
        _score_capitulation(card, text)
        _score_settlement(card, texts)
        _score_stay_lift(card, signals)
        _score_silence(card, signals)
        _score_recency(card, signals.days_since_last_activity)
        _score_false_hope(card, case, signals, texts, active_fighting)
        _score_bankruptcy(card, signals)

    _score_property(card, case, address)

    raw = card.raw
    score = clamp_score(raw)
    grade = LeadGrade.from_score(score)
    logger.debug(f"Scored {case.case_number}: raw={raw} score={score} grade={grade.value}")
    return LeadScore(score=score, grade=grade, factors=card.factors, raw_score=raw)
