"""
Unit tests for the JSON document source
"""

import orjson as json
import pytest

from foreclosure_hydrator.adapters.montco_courts.providers import (
    CaseIntakeError,
    EnrichmentUnavailable,
    JsonDetailSource,
    ProviderError,
)
from foreclosure_hydrator.adapters.montco_courts.providers.json_details import (
    parse_assessed_value,
    parse_docket_rows,
)


class TestParseDocketRows:
    """Test docket row shapes."""

    def test_list_rows(self):
        """Test [date, description] pairs."""
        assert parse_docket_rows([["1/2/2024", "Complaint"]]) == [("1/2/2024", "Complaint")]

    def test_dict_rows(self):
        """Test {date, description} objects."""
        rows = parse_docket_rows([{"date": "1/2/2024", "description": "Complaint"}])
        assert rows == [("1/2/2024", "Complaint")]

    def test_malformed_rows_ignored(self):
        """Test unusable rows are dropped."""
        assert parse_docket_rows([["1/2/2024"], "text", 3, ["1/3/2024", "Answer"]]) == [
            ("1/3/2024", "Answer")
        ]

    def test_no_docket(self):
        """Test a missing docket stays distinguishable from an empty one."""
        assert parse_docket_rows(None) is None
        assert parse_docket_rows([]) == []


class TestParseAssessedValue:
    """Test dollar amounts as scraped or stored."""

    @pytest.mark.parametrize("raw, expected", [
        (185000, 185000),
        (185000.5, 185000.5),
        ("185000", 185000),
        ("$185,000", 185000),
        (" $1,250,000 ", 1250000),
    ])
    def test_amounts(self, raw, expected):
        """Test numbers and formatted strings."""
        assert parse_assessed_value(raw) == expected

    @pytest.mark.parametrize("raw", [None, 0, -5, "", "N/A", "$0", True])
    def test_unknown(self, raw):
        """Test missing, zero and unreadable values mean no assessment."""
        assert parse_assessed_value(raw) is None

    def test_snake_case_key(self):
        """Test the snake_case spelling is accepted too."""
        detail = JsonDetailSource({"A": {"assessed_value": 90000}}).fetch_detail("A")
        assert detail.assessed_value == 90000


class TestJsonDetailSource:
    """Test per-case lookups."""

    def test_fetch_detail(self, details):
        """Test address, docket and URL are returned."""
        detail = JsonDetailSource(details).fetch_detail("2025-CV-0001")

        assert detail.case_number == "2025-CV-0001"
        assert detail.raw_address.startswith("123 Main St")
        assert len(detail.docket_rows) == 3
        assert detail.docket_rows[2][1] == "Petition to Withdraw as Counsel"
        assert detail.detail_url == "https://courts.example.org/case/2025-CV-0001"
        assert detail.assessed_value == 185000

    def test_record_without_docket(self):
        """Test a record without a docket table."""
        detail = JsonDetailSource({"A": {"address": "1 Main St"}}).fetch_detail("A")

        assert detail.docket_rows is None
        assert detail.detail_url is None
        assert detail.assessed_value is None

    @pytest.mark.parametrize("details", [{}, {"A": None}, {"A": "not an object"}])
    def test_unavailable(self, details):
        """Test missing, null and malformed records are soft failures."""
        with pytest.raises(EnrichmentUnavailable) as exc_info:
            JsonDetailSource(details).fetch_detail("A")

        assert isinstance(exc_info.value, ProviderError)
        assert exc_info.value.case_number == "A"
        assert exc_info.value.provider_name == "json_details"

    def test_from_file(self, tmp_path, details):
        """Test loading the details file."""
        path = tmp_path / "details.json"
        path.write_bytes(json.dumps(details))

        source = JsonDetailSource.from_file(path)
        assert source.fetch_detail("2025-CV-0003").docket_rows[0][1] == "Matter settled"

    def test_from_file_invalid_json(self, tmp_path):
        """Test an unreadable details file is fatal."""
        path = tmp_path / "details.json"
        path.write_text("{not json")

        with pytest.raises(CaseIntakeError):
            JsonDetailSource.from_file(path)

    def test_from_file_not_an_object(self, tmp_path):
        """Test the top level must be keyed by case number."""
        path = tmp_path / "details.json"
        path.write_text("[1, 2]")

        with pytest.raises(CaseIntakeError, match="keyed by case number"):
            JsonDetailSource.from_file(path)

    def test_from_file_missing(self, tmp_path):
        """Test a missing details file is fatal."""
        with pytest.raises(CaseIntakeError):
            JsonDetailSource.from_file(tmp_path / "missing.json")
