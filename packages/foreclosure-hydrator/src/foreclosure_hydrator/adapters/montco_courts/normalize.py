"""
Data Normalization for Montgomery County Cases

This module handles the transformation from raw source rows (CSV cells, docket
table strings) to validated Case and DocketEntry objects.
"""

import datetime as dt
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from foreclosure_hydrator.utils.logging_utils import pipeline_logger
from foreclosure_types.schemas import Case, DocketEntry, RawCase

log = pipeline_logger("intake", adapter="montco_courts")

_US_DATE_RE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")
_ISO_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")


def parse_court_date(value: Optional[str]) -> Optional[dt.date]:
    """
    Parse a court date string.

    Accepts the court's M/D/YYYY format (optionally followed by a time) and
    ISO YYYY-MM-DD. Anything else, including impossible dates, yields None.
    """
    if not value:
        return None
    text = value.strip()
    try:
        match = _US_DATE_RE.search(text)
        if match:
            month, day, year = (int(g) for g in match.groups())
            return dt.date(year, month, day)
        match = _ISO_DATE_RE.search(text)
        if match:
            year, month, day = (int(g) for g in match.groups())
            return dt.date(year, month, day)
    except ValueError:
        log.debug(f"Invalid calendar date: {value!r}")
    return None


def days_between(start: Optional[dt.date], today: dt.date) -> int:
    """Whole calendar days from ``start`` to ``today``; 0 when unknown or in the future."""
    if start is None:
        return 0
    return max(0, (today - start).days)


def normalize_case(raw: RawCase, today: dt.date) -> Optional[Case]:
    """
    Normalize a raw case row into a Case object.

    Args:
        raw: Raw row from a case source
        today: Reference date for ``days_open``

    Returns:
        Case object or None if normalization fails
    """
    try:
        if not raw.case_number:
            log.debug(f"Skipping row missing case number: {raw}")
            return None

        commenced = parse_court_date(raw.commenced_date)
        if commenced is None and raw.commenced_date:
            log.debug(f"Unparseable commenced date for {raw.case_number}: {raw.commenced_date!r}")

        return Case(
            case_number=raw.case_number,
            commenced_date=commenced,
            plaintiff=raw.plaintiff,
            defendant=raw.defendant,
            has_judgement=raw.has_judgement,
            status=raw.status,
            days_open=days_between(commenced, today),
        )

    except Exception as e:
        log.warning(f"Failed to normalize case {raw.case_number!r}: {e}")
        return None


def normalize_cases(raws: Iterable[RawCase], today: dt.date) -> List[Case]:
    """Normalize multiple rows, dropping the ones that fail; input order is kept."""
    cases = []
    for raw in raws:
        case = normalize_case(raw, today)
        if case:
            cases.append(case)

    log.info(f"Normalized {len(cases)} cases")
    return cases


def normalize_docket_rows(rows: Sequence[Tuple[str, str]]) -> List[DocketEntry]:
    """
    Turn (dateString, description) pairs into DocketEntry objects.

    Rows whose date cannot be parsed carry no position in the timeline and are
    dropped. Blank rows (header remnants) are dropped as well.
    """
    entries = []
    for date_text, description in rows:
        description = " ".join((description or "").split())
        entry_date = parse_court_date(date_text)
        if entry_date is None:
            if date_text or description:
                log.debug(f"Dropping docket row with unparseable date: {date_text!r}")
            continue
        entries.append(DocketEntry(date=entry_date, description=description))
    return entries
