"""
Pydantic models for foreclosure-types data contracts.

This module defines the authoritative data models used throughout the lead pipeline.
These models serve as contracts for data exchange between the intake adapters, the
extractors (address parser, docket analyzer, lead scorer) and the writers, and
provide validation and serialization capabilities.
"""

from __future__ import annotations

import datetime as dt
import re
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

# --------------------------------------------------------------------------- #
# Base Types                                                                  #
# --------------------------------------------------------------------------- #

ZIP_PATTERN = re.compile(r"^[0-9]{5}$")


class StrictBase(BaseModel):
    """Base class for strict models that forbid extra fields."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class ExtensibleBase(BaseModel):
    """Base class for extensible models that allow extra fields."""

    model_config = ConfigDict(extra="allow", validate_assignment=True)


class WireBase(BaseModel):
    """Base class for models serialized with camelCase keys (caseNumber, pointDelta, ...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --------------------------------------------------------------------------- #
# Enumerations                                                                #
# --------------------------------------------------------------------------- #


class ConciliationStatus(str, Enum):
    """Outcome of a court-ordered conciliation or mediation conference."""

    NONE = "none"
    SCHEDULED = "scheduled"
    FAILED = "failed"
    COMPLETED = "completed"


class SignalTier(str, Enum):
    """Keyword tiers used by the docket analyzer."""

    HIGH = "high"
    MEDIUM = "medium"
    POSITIVE = "positive"


class LeadGrade(str, Enum):
    """Letter grade summarizing a lead score."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    @classmethod
    def from_score(cls, score: int) -> "LeadGrade":
        """Map a clamped score to its grade (>=80 A, >=65 B, >=50 C, >=35 D, else F)."""
        for threshold, grade in GRADE_THRESHOLDS:
            if score >= threshold:
                return grade
        return cls.F

    @property
    def remarks(self) -> str:
        """Short outreach remark shown next to the case."""
        return {LeadGrade.A: "HOT LEAD", LeadGrade.B: "Good lead"}.get(self, "")


GRADE_THRESHOLDS: Tuple[Tuple[int, LeadGrade], ...] = (
    (80, LeadGrade.A),
    (65, LeadGrade.B),
    (50, LeadGrade.C),
    (35, LeadGrade.D),
)


class EquityConfidence(str, Enum):
    """How far an equity estimate can be trusted."""

    LOW = "low"
    MEDIUM = "medium"


# --------------------------------------------------------------------------- #
# Case Types                                                                  #
# --------------------------------------------------------------------------- #


class RawCase(WireBase):
    """One row of the court case-search export, before any parsing."""

    case_number: str = Field("", description="Court case number")
    commenced_date: str = Field("", description="Filing date as printed by the court")
    plaintiff: str = Field("", description="Plaintiff (usually the lender)")
    defendant: str = Field("", description="Defendant (usually the owner)")
    has_judgement: bool = Field(False, description="A judgment has been entered")
    status: str = Field("", description="Case status text (OPEN, CLOSED, ...)")

    @field_validator("case_number", "commenced_date", "plaintiff", "defendant", "status")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return (v or "").strip()


class Case(WireBase):
    """
    One court proceeding.

    Cases are immutable once normalized; the pipeline attaches the address,
    docket signals and score on a ScoredCase instead of mutating the case.
    """

    model_config = ConfigDict(frozen=True)

    case_number: str = Field(..., description="Case number, unique within the court")
    commenced_date: Optional[dt.date] = Field(None, description="Date the case was filed")
    plaintiff: str = Field("", description="Plaintiff party name")
    defendant: str = Field("", description="Defendant party name")
    has_judgement: bool = Field(False, description="A judgment has been entered")
    status: str = Field("", description="Case status text")
    days_open: int = Field(0, ge=0, description="Calendar days since the case was filed")

    @field_validator("case_number")
    @classmethod
    def validate_case_number(cls, v: str) -> str:
        """Validate the case number is present."""
        if not v or not v.strip():
            raise ValueError("Case number cannot be empty")
        return v.strip()

    @property
    def is_open(self) -> bool:
        return "OPEN" in self.status.upper()


class DocketEntry(WireBase):
    """One chronological filing or event on a docket."""

    model_config = ConfigDict(frozen=True)

    date: dt.date = Field(..., description="Filing date")
    description: str = Field("", description="Free-text docket description")


class SignalEvidence(WireBase):
    """Audit trail record explaining why a docket flag was set."""

    keyword: str
    tier: SignalTier
    date: dt.date
    description: str


class DocketSignals(WireBase):
    """Structured summary derived from a case's docket entries."""

    total_entries: int = 0
    last_activity_date: Optional[dt.date] = None
    days_since_last_activity: Optional[int] = None

    has_default_motion: bool = False
    has_default_judgment: bool = False
    has_defendant_attorney: bool = False
    has_defendant_response: bool = False
    has_conciliation: bool = False
    has_writ_of_execution: bool = False
    has_bankruptcy: bool = False
    is_stayed: bool = False

    conciliation_status: ConciliationStatus = ConciliationStatus.NONE
    continuance_count: int = Field(0, ge=0)
    service_attempts: int = Field(0, ge=0)
    failed_service_attempts: int = Field(0, ge=0)

    distress_signals: List[SignalEvidence] = Field(default_factory=list)
    positive_signals: List[SignalEvidence] = Field(default_factory=list)
    recent_activity: List[DocketEntry] = Field(default_factory=list)

    # Full docket, most recent first; the scorer reads the concatenated text.
    entries: List[DocketEntry] = Field(default_factory=list, exclude=True)


class PropertyAddress(WireBase):
    """Parsed postal location of the foreclosed property."""

    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    in_target_county: bool = False
    county_town: Optional[str] = Field(
        None, description="Known county municipality the city matched"
    )

    @field_validator("zip")
    @classmethod
    def validate_zip(cls, v: str) -> str:
        """Validate ZIP is empty or exactly five ASCII digits."""
        v = (v or "").strip()
        if v and not ZIP_PATTERN.match(v):
            raise ValueError(f"zip must be 5 digits, got {v!r}")
        return v

    @field_validator("state")
    @classmethod
    def validate_state(cls, v: str) -> str:
        return (v or "").strip().upper()

    @property
    def found(self) -> bool:
        return bool(self.street)


# --------------------------------------------------------------------------- #
# Scoring Types                                                               #
# --------------------------------------------------------------------------- #


class ScoreFactor(WireBase):
    """One contribution to a lead score."""

    description: str
    point_delta: int


class LeadScore(WireBase):
    """Scoring result for one case."""

    score: int = Field(..., ge=0, le=100, description="Clamped score")
    grade: LeadGrade
    factors: List[ScoreFactor] = Field(default_factory=list)
    raw_score: int = Field(..., description="Sum of factor deltas before clamping")

    @model_validator(mode="after")
    def validate_grade(self) -> "LeadScore":
        """Validate the grade agrees with the clamped score."""
        expected = LeadGrade.from_score(self.score)
        if self.grade != expected:
            raise ValueError(f"grade {self.grade.value} does not match score {self.score}")
        return self


class EquityEstimate(WireBase):
    """
    Rough equity position derived from the assessed value.

    No mortgage balance is available, so the loan is assumed to sit at a typical
    loan-to-value ratio for the plaintiff's lender type. Amounts are whole dollars.
    """

    assessed_value: float = Field(..., gt=0, description="County assessed value")
    estimated_market_value: int = Field(..., ge=0)
    estimated_ltv: float = Field(..., gt=0, le=1, description="Assumed loan-to-value ratio")
    estimated_mortgage: int = Field(..., ge=0)
    estimated_equity: int
    equity_percent: int
    confidence: EquityConfidence
    note: str = ""


# --------------------------------------------------------------------------- #
# Pipeline Types                                                              #
# --------------------------------------------------------------------------- #


class CaseDetail(WireBase):
    """Per-case payload returned by a document source."""

    case_number: str
    raw_address: Optional[str] = Field(None, description="Address text, line breaks kept")
    docket_rows: Optional[List[Tuple[str, str]]] = Field(
        None, description="(date, description) pairs; None when no docket was available"
    )
    detail_url: Optional[str] = None
    assessed_value: Optional[float] = Field(
        None, ge=0, description="County assessed value when the source carries it"
    )


class ScoredCase(WireBase):
    """A case with its enrichment (address, docket signals) and lead score."""

    case: Case
    address: Optional[PropertyAddress] = None
    docket: DocketSignals = Field(default_factory=DocketSignals)
    lead: LeadScore
    docket_available: bool = False
    enrichment_error: Optional[str] = None
    detail_url: Optional[str] = None
    remarks: str = ""
    assessed_value: Optional[float] = None
    equity: Optional[EquityEstimate] = None

    @property
    def score(self) -> int:
        return self.lead.score


def _empty_grades() -> Dict[str, int]:
    return {grade.value: 0 for grade in LeadGrade}


class PipelineStatistics(WireBase):
    """Aggregate counts over a scored collection."""

    total: int = 0
    by_grade: Dict[str, int] = Field(default_factory=_empty_grades)
    with_address: int = 0
    in_target_county: int = 0
    with_docket_data: int = 0
    missing_docket_data: int = 0
    enrichment_failures: int = 0
    avg_lead_score: int = 0
    avg_days_open: int = 0
    no_defendant_response: int = 0
    no_defendant_attorney: int = 0
    has_default_motion: int = 0
    has_defendant_attorney: int = 0
    has_conciliation: int = 0
    enriched_cases: int = Field(0, description="Cases whose source carried an assessed value")
    avg_assessed_value: Optional[int] = None
    by_city: Dict[str, int] = Field(default_factory=dict)


class PipelineResult(WireBase):
    """Output of one pipeline run."""

    last_updated: dt.datetime
    total_cases: int
    statistics: PipelineStatistics
    cases: List[ScoredCase] = Field(default_factory=list)


class PipelineConfig(StrictBase):
    """Configuration for the case pipeline aggregator."""

    min_days_old: int = Field(45, ge=0, description="Youngest case age kept")
    max_days_old: int = Field(270, ge=0, description="Oldest case age kept")
    max_cases: Optional[int] = Field(
        75, ge=1, description="Cases enriched per run (None = no cap)"
    )
    default_state: str = Field("PA", description="State used when an address has none")
    valid_states: List[str] = Field(
        default_factory=lambda: ["NJ", "PA"], description="State tokens the parser accepts"
    )
    county_name: str = Field("Montgomery", description="County whose towns are targeted")
    max_workers: int = Field(1, ge=1, description="Threads used for per-case enrichment")
    output_dir: Path = Field(Path("data"), description="Output directory")
    output_file: str = Field("pipeline.json", description="JSON bundle filename")
    cases_csv: Path = Field(
        Path("data/montco-cases.csv"), description="Court case-search CSV export"
    )
    details_file: Optional[Path] = Field(None, description="JSON case details file")

    @field_validator("default_state")
    @classmethod
    def validate_default_state(cls, v: str) -> str:
        v = v.strip().upper()
        if len(v) != 2:
            raise ValueError("default_state must be a 2-letter code")
        return v

    @field_validator("valid_states")
    @classmethod
    def validate_valid_states(cls, v: List[str]) -> List[str]:
        return [s.strip().upper() for s in v if s.strip()]

    @model_validator(mode="after")
    def validate_age_window(self) -> "PipelineConfig":
        if self.min_days_old > self.max_days_old:
            raise ValueError("min_days_old must not exceed max_days_old")
        return self
