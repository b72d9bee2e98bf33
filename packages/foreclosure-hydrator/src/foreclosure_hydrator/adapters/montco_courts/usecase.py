"""
Lead Pipeline Use Case Orchestrator

This module orchestrates one run of the case pipeline aggregator:
1. Normalize raw cases and filter them by status, judgment and age
2. Put ideal-age cases first and cap the batch
3. Enrich each case (address + docket signals) and score it
4. Rank by score and compute summary statistics

Per-case enrichment failures are logged and recorded on the case; only an
unreadable case collection aborts the run.
"""

import datetime as dt
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from foreclosure_extractors.address import county_towns, parse_address
from foreclosure_extractors.docket import analyze_docket
from foreclosure_extractors.equity import estimate_equity
from foreclosure_extractors.scoring import score_lead
from foreclosure_hydrator.utils.logging_utils import pipeline_logger
from foreclosure_types.schemas import (
    Case,
    DocketSignals,
    PipelineConfig,
    PipelineResult,
    PropertyAddress,
    RawCase,
    ScoredCase,
)

from .normalize import normalize_cases, normalize_docket_rows
from .providers.base import CaseIntakeError, DocumentSource, EnrichmentUnavailable
from .statistics import compute_statistics

log = pipeline_logger("enrich", adapter="montco_courts")

# Pre-enrichment ordering band; distinct from the scorer's sweet spot
IDEAL_AGE_MIN = 60
IDEAL_AGE_MAX = 180


def is_candidate(case: Case, config: PipelineConfig) -> bool:
    """Open, no judgment, and aged within the configured window."""
    return (
        case.is_open
        and not case.has_judgement
        and config.min_days_old <= case.days_open <= config.max_days_old
    )


def filter_cases(cases: Sequence[Case], config: PipelineConfig) -> List[Case]:
    """Keep only candidate cases, logging the funnel."""
    active = [c for c in cases if c.is_open and not c.has_judgement]
    in_window = [c for c in active if is_candidate(c, config)]
    log.info(
        f"Filtered {len(cases)} cases: {len(active)} open without judgment, "
        f"{len(in_window)} aged {config.min_days_old}-{config.max_days_old} days"
    )
    return in_window


def prioritize_cases(cases: Sequence[Case], max_cases: Optional[int] = None) -> List[Case]:
    """Stable sort with ideal-age cases first, then apply the batch cap."""
    ordered = sorted(
        cases, key=lambda c: 0 if IDEAL_AGE_MIN <= c.days_open <= IDEAL_AGE_MAX else 1
    )
    if max_cases is not None and len(ordered) > max_cases:
        log.info(f"Capping batch at {max_cases} of {len(ordered)} cases")
        ordered = ordered[:max_cases]
    return ordered


class LeadPipelineUseCase:
    """
    Use case for scoring a batch of foreclosure cases.

    The ``now`` instant is captured once per run so every case in the batch is
    scored against the same reference date.
    """

    def __init__(self, source: DocumentSource, config: Optional[PipelineConfig] = None):
        """
        Initialize use case with dependencies.

        Args:
            source: Document source returning per-case detail
            config: Pipeline configuration (defaults when omitted)
        """
        self.source = source
        self.config = config or PipelineConfig()
        self.towns = county_towns(self.config.county_name)

    def _parse_address(self, raw_address: Optional[str]) -> PropertyAddress:
        return parse_address(
            raw_address,
            default_state=self.config.default_state,
            valid_states=self.config.valid_states,
            towns=self.towns,
        )

    def _scored(
        self,
        case: Case,
        address: Optional[PropertyAddress],
        signals: DocketSignals,
        docket_available: bool = False,
        error: Optional[str] = None,
        detail_url: Optional[str] = None,
        assessed_value: Optional[float] = None,
    ) -> ScoredCase:
        lead = score_lead(case, signals, address)
        return ScoredCase(
            case=case,
            address=address,
            docket=signals,
            lead=lead,
            docket_available=docket_available,
            enrichment_error=error,
            detail_url=detail_url,
            remarks=lead.grade.remarks,
            assessed_value=assessed_value,
            equity=estimate_equity(assessed_value, case.plaintiff),
        )

    def enrich_case(self, case: Case, now: dt.datetime) -> ScoredCase:
        """Fetch, parse, analyze and score one case; never raises for source failures."""
        try:
            detail = self.source.fetch_detail(case.case_number)
        except EnrichmentUnavailable as e:
            log.warning(f"Enrichment unavailable for {case.case_number}: {e.message}")
            return self._scored(case, None, DocketSignals(), error=str(e))
        except Exception as e:
            log.warning(f"Unexpected error fetching {case.case_number}: {e}")
            return self._scored(case, None, DocketSignals(), error=f"Unexpected error: {e}")

        address = self._parse_address(detail.raw_address)

        try:
            entries = normalize_docket_rows(detail.docket_rows or [])
            signals = analyze_docket(entries, now=now)
        except Exception as e:
            log.warning(f"Docket analysis failed for {case.case_number}: {e}")
            return self._scored(
                case, address, DocketSignals(), error=f"Docket analysis failed: {e}",
                detail_url=detail.detail_url,
                assessed_value=detail.assessed_value,
            )

        if not entries:
            log.debug(f"No docket entries for {case.case_number}")
        return self._scored(
            case,
            address,
            signals,
            docket_available=bool(entries),
            detail_url=detail.detail_url,
            assessed_value=detail.assessed_value,
        )

    def _enrich_all(self, cases: Sequence[Case], now: dt.datetime) -> List[ScoredCase]:
        workers = self.config.max_workers
        if workers <= 1 or len(cases) <= 1:
            return [self.enrich_case(case, now) for case in cases]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(lambda c: self.enrich_case(c, now), cases))

    def execute(
        self, raw_cases: Sequence[RawCase], now: Optional[dt.datetime] = None
    ) -> PipelineResult:
        """
        Execute one pipeline run.

        Args:
            raw_cases: Raw case rows from a case source
            now: Reference instant for case ages and docket recency (defaults to now)

        Returns:
            PipelineResult with cases ranked by descending score

        Raises:
            CaseIntakeError: If no record carries a case number
        """
        if raw_cases and not any(raw.case_number for raw in raw_cases):
            raise CaseIntakeError(
                self.source.name, "*", f"none of {len(raw_cases)} records has a case number"
            )

        now = now or dt.datetime.now()
        log.info(f"Starting pipeline run over {len(raw_cases)} raw cases")

        cases = normalize_cases(raw_cases, now.date())
        candidates = prioritize_cases(filter_cases(cases, self.config), self.config.max_cases)

        scored = self._enrich_all(candidates, now)
        scored.sort(key=lambda s: s.score, reverse=True)

        statistics = compute_statistics(scored)
        log.info(
            f"Scored {statistics.total} cases, grades {statistics.by_grade}, "
            f"{statistics.with_address} with address, "
            f"{statistics.missing_docket_data} missing docket data"
        )
        return PipelineResult(
            last_updated=now,
            total_cases=len(scored),
            statistics=statistics,
            cases=scored,
        )


def run_pipeline(
    raw_cases: Sequence[RawCase],
    source: DocumentSource,
    config: Optional[PipelineConfig] = None,
    now: Optional[dt.datetime] = None,
) -> PipelineResult:
    """
    Convenience function for a single pipeline run.

    Args:
        raw_cases: Raw case rows
        source: Document source for per-case detail
        config: Pipeline configuration
        now: Reference instant

    Returns:
        Pipeline result
    """
    usecase = LeadPipelineUseCase(source, config)
    return usecase.execute(raw_cases, now=now)
