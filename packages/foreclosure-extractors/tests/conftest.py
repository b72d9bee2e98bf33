"""Shared fixtures for foreclosure-extractors tests."""

import datetime as dt

import pytest

from foreclosure_types.schemas import Case, DocketEntry


@pytest.fixture
def now():
    """Fixed evaluation instant."""
    return dt.datetime(2025, 6, 1, 12, 0, 0)


@pytest.fixture
def make_entry(now):
    """Build a docket entry dated ``days_ago`` days before ``now``."""

    def _make(days_ago, description):
        return DocketEntry(date=now.date() - dt.timedelta(days=days_ago), description=description)

    return _make


@pytest.fixture
def make_case():
    """Build an open case with the given age."""

    def _make(days_open, defendant="JOHN SMITH", case_number="2024-CV-00001"):
        return Case(
            case_number=case_number,
            defendant=defendant,
            plaintiff="FIRST NATIONAL MORTGAGE",
            status="OPEN",
            days_open=days_open,
        )

    return _make
