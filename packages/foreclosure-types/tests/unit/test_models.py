"""
Unit tests for foreclosure-types schema models

Tests cover:
- Field validation (zip, state, case number, score bounds)
- Grade thresholds and remarks
- camelCase wire serialization
- PipelineConfig validation
"""

import datetime as dt

import pytest
from pydantic import ValidationError

from foreclosure_types.schemas import (
    Case,
    ConciliationStatus,
    DocketSignals,
    EquityConfidence,
    EquityEstimate,
    LeadGrade,
    LeadScore,
    PipelineConfig,
    PipelineStatistics,
    PropertyAddress,
    RawCase,
    ScoreFactor,
)


class TestPropertyAddress:
    """Test PropertyAddress validation."""

    def test_valid_zip(self):
        """Test a five digit ZIP is accepted."""
        address = PropertyAddress(street="1 MAIN ST", zip="19401")
        assert address.zip == "19401"

    def test_empty_zip_allowed(self):
        """Test an absent ZIP is a valid outcome."""
        assert PropertyAddress().zip == ""

    @pytest.mark.parametrize("bad_zip", ["1940", "194011", "19401-1234", "ABCDE"])
    def test_invalid_zip_rejected(self, bad_zip):
        """Test ZIPs that are not exactly five digits are rejected."""
        with pytest.raises(ValidationError):
            PropertyAddress(zip=bad_zip)

    def test_state_upper_cased(self):
        """Test state is normalized to upper case."""
        assert PropertyAddress(state=" pa ").state == "PA"

    def test_found_requires_street(self):
        """Test found reflects whether a street was parsed."""
        assert PropertyAddress(street="1 MAIN ST").found
        assert not PropertyAddress(city="NORRISTOWN").found


class TestCase:
    """Test Case model."""

    def test_empty_case_number_rejected(self):
        """Test a case needs an identifier."""
        with pytest.raises(ValidationError):
            Case(case_number="  ")

    def test_negative_days_open_rejected(self):
        """Test days_open cannot be negative."""
        with pytest.raises(ValidationError):
            Case(case_number="2024-00001", days_open=-1)

    def test_case_is_immutable(self):
        """Test cases cannot be mutated after normalization."""
        case = Case(case_number="2024-00001", status="OPEN")
        with pytest.raises(ValidationError):
            case.status = "CLOSED"

    @pytest.mark.parametrize("status,expected", [
        ("OPEN", True),
        ("Open - Active", True),
        ("CLOSED", False),
        ("", False),
    ])
    def test_is_open(self, status, expected):
        """Test OPEN detection is case-insensitive substring."""
        assert Case(case_number="X", status=status).is_open is expected

    def test_wire_aliases(self):
        """Test camelCase serialization."""
        case = Case(
            case_number="2024-00001",
            commenced_date=dt.date(2024, 1, 2),
            has_judgement=False,
            days_open=10,
        )
        data = case.model_dump(by_alias=True, mode="json")
        assert data["caseNumber"] == "2024-00001"
        assert data["commencedDate"] == "2024-01-02"
        assert data["hasJudgement"] is False
        assert data["daysOpen"] == 10

    def test_populate_by_alias(self):
        """Test models accept camelCase input as well."""
        case = Case.model_validate({"caseNumber": "2024-00002", "daysOpen": 5})
        assert case.case_number == "2024-00002"
        assert case.days_open == 5


class TestRawCase:
    """Test RawCase model."""

    def test_text_fields_stripped(self):
        """Test raw CSV cells are stripped."""
        raw = RawCase(case_number=" 2024-1 ", status=" OPEN ")
        assert raw.case_number == "2024-1"
        assert raw.status == "OPEN"


class TestLeadGrade:
    """Test grade thresholds."""

    @pytest.mark.parametrize("score,grade", [
        (100, LeadGrade.A),
        (80, LeadGrade.A),
        (79, LeadGrade.B),
        (65, LeadGrade.B),
        (64, LeadGrade.C),
        (50, LeadGrade.C),
        (49, LeadGrade.D),
        (35, LeadGrade.D),
        (34, LeadGrade.F),
        (0, LeadGrade.F),
    ])
    def test_from_score(self, score, grade):
        """Test every threshold boundary."""
        assert LeadGrade.from_score(score) == grade

    def test_remarks(self):
        """Test outreach remarks per grade."""
        assert LeadGrade.A.remarks == "HOT LEAD"
        assert LeadGrade.B.remarks == "Good lead"
        assert LeadGrade.C.remarks == ""
        assert LeadGrade.F.remarks == ""


class TestLeadScore:
    """Test LeadScore validation."""

    def test_valid_score(self):
        """Test a consistent score and grade."""
        lead = LeadScore(
            score=42,
            grade=LeadGrade.D,
            factors=[ScoreFactor(description="x", point_delta=42)],
            raw_score=42,
        )
        assert lead.factors[0].point_delta == 42

    def test_score_out_of_range(self):
        """Test the clamped score must stay within [0, 100]."""
        with pytest.raises(ValidationError):
            LeadScore(score=101, grade=LeadGrade.A, raw_score=101)

    def test_grade_must_match_score(self):
        """Test an inconsistent grade is rejected."""
        with pytest.raises(ValidationError):
            LeadScore(score=90, grade=LeadGrade.C, raw_score=90)

    def test_factor_wire_alias(self):
        """Test pointDelta wire name."""
        factor = ScoreFactor(description="Matter settled", point_delta=15)
        assert factor.model_dump(by_alias=True) == {
            "description": "Matter settled",
            "pointDelta": 15,
        }


class TestDocketSignals:
    """Test DocketSignals defaults."""

    def test_zero_valued_defaults(self):
        """Test an empty summary has no flags and zero counts."""
        signals = DocketSignals()
        assert signals.total_entries == 0
        assert signals.last_activity_date is None
        assert not signals.has_default_judgment
        assert signals.conciliation_status == ConciliationStatus.NONE
        assert signals.distress_signals == []

    def test_entries_excluded_from_dump(self):
        """Test the full entry list is not serialized."""
        data = DocketSignals().model_dump(by_alias=True)
        assert "entries" not in data
        assert "recentActivity" in data


class TestEquityEstimate:
    """Test EquityEstimate validation and wire names."""

    def _estimate(self, **overrides):
        data = dict(
            assessed_value=200000, estimated_market_value=220000, estimated_ltv=0.8,
            estimated_mortgage=176000, estimated_equity=44000, equity_percent=20,
            confidence=EquityConfidence.MEDIUM,
        )
        data.update(overrides)
        return EquityEstimate(**data)

    def test_camel_case_dump(self):
        """Test the estimate serializes with camelCase keys."""
        data = self._estimate().model_dump(by_alias=True, mode="json")

        assert data["estimatedEquity"] == 44000
        assert data["estimatedLtv"] == 0.8
        assert data["confidence"] == "medium"

    @pytest.mark.parametrize("field, value", [
        ("assessed_value", 0),
        ("estimated_ltv", 0),
        ("estimated_ltv", 1.2),
    ])
    def test_out_of_range(self, field, value):
        """Test a non-positive assessment or an LTV outside (0, 1] is rejected."""
        with pytest.raises(ValidationError):
            self._estimate(**{field: value})


class TestPipelineStatistics:
    """Test PipelineStatistics defaults."""

    def test_all_grades_present(self):
        """Test every grade has a zero count by default."""
        assert PipelineStatistics().by_grade == {"A": 0, "B": 0, "C": 0, "D": 0, "F": 0}

    def test_assessed_value_defaults(self):
        """Test no cases are enriched by default."""
        stats = PipelineStatistics()
        assert stats.enriched_cases == 0
        assert stats.avg_assessed_value is None


class TestPipelineConfig:
    """Test PipelineConfig validation."""

    def test_defaults(self):
        """Test defaults match the court workflow."""
        config = PipelineConfig()
        assert config.min_days_old == 45
        assert config.max_days_old == 270
        assert config.max_cases == 75
        assert config.default_state == "PA"
        assert config.valid_states == ["NJ", "PA"]

    def test_window_must_be_ordered(self):
        """Test min_days_old cannot exceed max_days_old."""
        with pytest.raises(ValidationError):
            PipelineConfig(min_days_old=300, max_days_old=100)

    def test_extra_fields_forbidden(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ValidationError):
            PipelineConfig(unknown_option=True)

    def test_default_state_validated(self):
        """Test default state must be a two letter code."""
        assert PipelineConfig(default_state="nj").default_state == "NJ"
        with pytest.raises(ValidationError):
            PipelineConfig(default_state="Penn")
