"""
Montgomery County Courts Adapter

This module turns the Montgomery County (PA) civil case search into a ranked
list of foreclosure leads.

The adapter is organized following Clean Architecture principles:
- providers/: Case and document sources (court CSV export, JSON details file)
- normalize.py: Raw rows to Case and DocketEntry objects
- usecase.py: Filter, enrich, score and rank orchestration
- statistics.py: Summary statistics over the scored collection
- writer.py: JSON/CSV output and manifest generation
- config.py: Environment and YAML configuration
- cli/: The ``foreclosure-leads`` command-line interface

Note: Data models are defined in foreclosure_types for authoritative schema governance.
"""

# Models (from foreclosure_types)
from foreclosure_types.schemas import (
    PipelineConfig,
    PipelineResult,
    PipelineStatistics,
    ScoredCase,
)

from .config import get_default_config, load_config

# Utilities
from .normalize import normalize_case, normalize_cases, normalize_docket_rows, parse_court_date

# Providers
from .providers import (
    CaseIntakeError,
    CaseSource,
    CsvCaseSource,
    DocumentSource,
    EnrichmentUnavailable,
    JsonDetailSource,
    ProviderError,
)

# Core components
from .statistics import compute_statistics
from .usecase import LeadPipelineUseCase, filter_cases, prioritize_cases, run_pipeline
from .writer import to_dataframe, to_record, write_bundle

__all__ = [
    # Use cases
    "LeadPipelineUseCase",
    "run_pipeline",
    "filter_cases",
    "prioritize_cases",
    "compute_statistics",
    # Providers
    "CaseSource",
    "DocumentSource",
    "ProviderError",
    "EnrichmentUnavailable",
    "CaseIntakeError",
    "CsvCaseSource",
    "JsonDetailSource",
    # Utilities
    "normalize_case",
    "normalize_cases",
    "normalize_docket_rows",
    "parse_court_date",
    "write_bundle",
    "to_dataframe",
    "to_record",
    "get_default_config",
    "load_config",
    # Models (from foreclosure_types)
    "PipelineConfig",
    "PipelineResult",
    "PipelineStatistics",
    "ScoredCase",
]
