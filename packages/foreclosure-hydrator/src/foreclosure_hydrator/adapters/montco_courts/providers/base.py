"""
Base Document Source Interface

This module defines the protocols for the two boundary collaborators of the
lead pipeline: the case source, which yields the court's case list, and the
document source, which returns per-case detail (address text and docket rows).
Fetching, rendering and session handling belong entirely to implementations.
"""

from abc import abstractmethod
from typing import List, Protocol

from foreclosure_types.schemas import CaseDetail, RawCase


class CaseSource(Protocol):
    """Protocol for sources of the raw case list."""

    @abstractmethod
    def fetch_cases(self) -> List[RawCase]:
        """
        Fetch every raw case the source knows about.

        Raises:
            CaseIntakeError: If the case collection itself cannot be read
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name for logging and identification."""
        pass


class DocumentSource(Protocol):
    """Protocol for per-case detail sources."""

    @abstractmethod
    def fetch_detail(self, case_number: str) -> CaseDetail:
        """
        Fetch address text and docket rows for one case.

        Args:
            case_number: Court case number

        Returns:
            CaseDetail; ``docket_rows`` is None when no docket table exists

        Raises:
            EnrichmentUnavailable: If the detail for this case cannot be retrieved
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name for logging and identification."""
        pass


class ProviderError(Exception):
    """Base exception for source-related errors."""

    def __init__(self, provider_name: str, case_number: str, message: str):
        self.provider_name = provider_name
        self.case_number = case_number
        self.message = message
        super().__init__(f"{provider_name} failed for {case_number}: {message}")


class EnrichmentUnavailable(ProviderError):
    """Per-case detail could not be retrieved; the run continues without it."""


class CaseIntakeError(ProviderError):
    """The case collection is unreadable; the whole run fails."""
