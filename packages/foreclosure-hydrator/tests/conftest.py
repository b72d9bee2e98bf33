"""Shared fixtures for foreclosure-hydrator tests."""

import datetime as dt

import pytest

from foreclosure_types.schemas import PipelineConfig, RawCase


@pytest.fixture
def now():
    """Fixed reference instant for a pipeline run."""
    return dt.datetime(2025, 6, 1, 12, 0, 0)


@pytest.fixture
def court_date(now):
    """Format a date ``days_ago`` days before ``now`` the way the court prints it."""

    def _fmt(days_ago):
        d = now.date() - dt.timedelta(days=days_ago)
        return f"{d.month}/{d.day}/{d.year}"

    return _fmt


@pytest.fixture
def raw_case(court_date):
    """Build a RawCase aged ``days_ago`` days."""

    def _make(case_number, days_ago, defendant="JOHN SMITH", status="OPEN", has_judgement=False):
        return RawCase(
            case_number=case_number,
            commenced_date=court_date(days_ago),
            plaintiff="WELLS FARGO BANK NA",
            defendant=defendant,
            has_judgement=has_judgement,
            status=status,
        )

    return _make


@pytest.fixture
def config():
    """Default pipeline configuration."""
    return PipelineConfig()


@pytest.fixture
def cases_csv(tmp_path, court_date):
    """Write a small court export with candidate and excluded cases."""
    lines = [
        "CaseNumber,Commenced Date,Plaintiff,Defendant,Judgement,Status",
        f"2025-CV-0001,{court_date(100)},WELLS FARGO BANK NA,JOHN SMITH,No,OPEN",
        f'2025-CV-0002,{court_date(200)},PNC BANK,"DOE, JANE",No,OPEN',
        f'2025-CV-0003,{court_date(150)},US BANK,"O""BRIEN, PAT",Yes,OPEN',
        f"2025-CV-0004,{court_date(30)},US BANK,TOO YOUNG,No,OPEN",
        f"2025-CV-0005,{court_date(300)},US BANK,TOO OLD,No,OPEN",
        f"2025-CV-0006,{court_date(120)},US BANK,CLOSED CASE,No,CLOSED",
        f",{court_date(100)},US BANK,NO NUMBER,No,OPEN",
        "",
    ]
    path = tmp_path / "montco-cases.csv"
    path.write_text("\n".join(lines))
    return path


@pytest.fixture
def details(court_date):
    """Per-case detail records as saved by the upstream scraper."""
    return {
        "2025-CV-0001": {
            "address": "123 Main St\nNorristown, PA 19401",
            "docket": [
                [court_date(100), "Complaint in Mortgage Foreclosure filed"],
                [court_date(95), "Affidavit of Service filed"],
                [court_date(40), "Petition to Withdraw as Counsel"],
            ],
            "detailUrl": "https://courts.example.org/case/2025-CV-0001",
            "assessedValue": "$185,000",
        },
        "2025-CV-0003": {
            "address": "9 Elm St\nAmbler, PA 19002",
            "docket": [[court_date(20), "Matter settled"]],
        },
    }
