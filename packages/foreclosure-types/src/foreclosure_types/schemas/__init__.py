"""
Foreclosure Types Schema Package

This package provides the authoritative data contracts (schemas) for the lead pipeline.
All data exchange between the intake adapters, the extractors and the writers should
use these Pydantic models for validation and consistency.

Key Principles:
- Single Source of Truth (SSOT) for all data schemas
- Validation enforced at construction time
- camelCase wire names for persisted documents
"""

from .models import (
    # Base types
    StrictBase,
    ExtensibleBase,
    WireBase,

    # Enumerations
    ConciliationStatus,
    SignalTier,
    LeadGrade,
    GRADE_THRESHOLDS,
    EquityConfidence,

    # Case types
    RawCase,
    Case,
    DocketEntry,
    SignalEvidence,
    DocketSignals,
    PropertyAddress,

    # Scoring types
    ScoreFactor,
    LeadScore,
    EquityEstimate,

    # Pipeline types
    CaseDetail,
    ScoredCase,
    PipelineStatistics,
    PipelineResult,
    PipelineConfig,
)

__all__ = [
    "StrictBase",
    "ExtensibleBase",
    "WireBase",
    "ConciliationStatus",
    "SignalTier",
    "LeadGrade",
    "GRADE_THRESHOLDS",
    "EquityConfidence",
    "RawCase",
    "Case",
    "DocketEntry",
    "SignalEvidence",
    "DocketSignals",
    "PropertyAddress",
    "ScoreFactor",
    "LeadScore",
    "EquityEstimate",
    "CaseDetail",
    "ScoredCase",
    "PipelineStatistics",
    "PipelineResult",
    "PipelineConfig",
]
