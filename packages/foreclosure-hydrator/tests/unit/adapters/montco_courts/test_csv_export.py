"""
Unit tests for the court CSV export source
"""

import pytest

from foreclosure_hydrator.adapters.montco_courts.providers import CaseIntakeError, CsvCaseSource
from foreclosure_hydrator.adapters.montco_courts.providers.csv_export import locate_columns


class TestLocateColumns:
    """Test header lookup."""

    def test_header_variants(self):
        """Test spacing, case and suffix differences between exports."""
        columns = locate_columns(
            ["Case Number", "Commenced Date", "PLAINTIFF", "Defendant(s)", "Judgement Entered", "Status"]
        )
        assert columns == {
            "case_number": 0,
            "commenced_date": 1,
            "plaintiff": 2,
            "defendant": 3,
            "judgement": 4,
            "status": 5,
        }

    def test_missing_columns(self):
        """Test absent columns map to None."""
        columns = locate_columns(["case_number", "status"])
        assert columns["case_number"] == 0
        assert columns["plaintiff"] is None
        assert columns["judgement"] is None


class TestCsvCaseSource:
    """Test reading the export."""

    def test_reads_rows(self, cases_csv):
        """Test rows, quoting and the judgement flag."""
        cases = CsvCaseSource(cases_csv).fetch_cases()

        assert [c.case_number for c in cases] == [
            "2025-CV-0001", "2025-CV-0002", "2025-CV-0003",
            "2025-CV-0004", "2025-CV-0005", "2025-CV-0006",
        ]
        assert cases[1].defendant == "DOE, JANE"
        assert cases[2].defendant == 'O"BRIEN, PAT'
        assert cases[2].has_judgement is True
        assert cases[0].has_judgement is False
        assert cases[5].status == "CLOSED"

    def test_short_rows_padded(self, tmp_path):
        """Test rows shorter than the header read as empty cells."""
        path = tmp_path / "cases.csv"
        path.write_text("CaseNumber,Commenced Date,Plaintiff,Defendant,Judgement,Status\n2024-9,1/2/2024\n")

        (case,) = CsvCaseSource(path).fetch_cases()
        assert case.case_number == "2024-9"
        assert case.commenced_date == "1/2/2024"
        assert case.status == ""

    def test_judgement_case_insensitive(self, tmp_path):
        """Test YES and yes both mark a judgment."""
        path = tmp_path / "cases.csv"
        path.write_text("CaseNumber,Judgement\nA,YES\nB,yes\nC,Pending\n")

        assert [c.has_judgement for c in CsvCaseSource(path).fetch_cases()] == [True, True, False]

    def test_missing_file(self, tmp_path):
        """Test a missing export is fatal."""
        with pytest.raises(CaseIntakeError, match="not found"):
            CsvCaseSource(tmp_path / "nope.csv").fetch_cases()

    @pytest.mark.parametrize("content", ["", "CaseNumber,Status\n", "\n\n"])
    def test_empty_file(self, tmp_path, content):
        """Test an export without data rows is fatal."""
        path = tmp_path / "cases.csv"
        path.write_text(content)

        with pytest.raises(CaseIntakeError, match="CSV empty"):
            CsvCaseSource(path).fetch_cases()

    def test_no_case_number_column(self, tmp_path):
        """Test an export without a case number column is fatal."""
        path = tmp_path / "cases.csv"
        path.write_text("Docket,Status\nA,OPEN\n")

        with pytest.raises(CaseIntakeError, match="no case number column"):
            CsvCaseSource(path).fetch_cases()

    def test_source_name(self, cases_csv):
        """Test the source identifies itself."""
        assert CsvCaseSource(cases_csv).name == "montco_csv"
