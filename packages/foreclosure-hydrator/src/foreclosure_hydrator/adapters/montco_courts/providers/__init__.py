"""
Montgomery County Courts Sources

This package contains the case and document sources feeding the lead pipeline.
"""

from .base import (
    CaseIntakeError,
    CaseSource,
    DocumentSource,
    EnrichmentUnavailable,
    ProviderError,
)
from .csv_export import CsvCaseSource
from .json_details import JsonDetailSource

__all__ = [
    "CaseSource",
    "DocumentSource",
    "ProviderError",
    "EnrichmentUnavailable",
    "CaseIntakeError",
    "CsvCaseSource",
    "JsonDetailSource",
]
